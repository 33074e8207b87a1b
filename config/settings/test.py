"""
Django test settings for the completion_progress project.
"""

from .base import *

DEBUG = False

ALLOWED_HOSTS = ['testserver', 'localhost']

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': ':memory:',
    }
}

# Fast hashing for test users
PASSWORD_HASHERS = [
    'django.contrib.auth.hashers.MD5PasswordHasher',
]

EMAIL_BACKEND = 'django.core.mail.backends.locmem.EmailBackend'

SITE_URL = 'http://lms.test'
SUPPORT_EMAIL = 'support@lms.test'
SUPPORT_NAME = 'LMS Support'

ENABLE_COMPLETION = True
PROGRESS_CACHE_LIFETIME = 3600

Q_CLUSTER = {
    'name': 'completion_progress_test',
    'sync': True,
    'timeout': 600,
    'retry': 900,
    'orm': 'default',
}

LOGGING = {
    'version': 1,
    'disable_existing_loggers': False,
    'handlers': {
        'null': {
            'class': 'logging.NullHandler',
        },
    },
    'root': {
        'handlers': ['null'],
        'level': 'INFO',
    },
}
