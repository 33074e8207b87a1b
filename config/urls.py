"""
URL configuration for the completion_progress project.

The reminder job has no web surface of its own; only the admin is routed.
"""

from django.contrib import admin
from django.urls import path, include
from django.conf import settings

urlpatterns = [
    path('admin/', admin.site.urls),
]

if settings.DEBUG and 'debug_toolbar' in settings.INSTALLED_APPS:
    import debug_toolbar
    urlpatterns = [
        path('__debug__/', include(debug_toolbar.urls)),
    ] + urlpatterns

# Admin site customization
admin.site.site_header = 'Completion Progress Administration'
admin.site.site_title = 'Completion Progress Admin'
admin.site.index_title = 'Course completion reminders'
