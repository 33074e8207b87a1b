"""
Service layer for notifications app.

Email rendering and delivery for completion reminders:
- get_support_sender: The address reminders are sent from
- render_reminder_email: Localized subject, plain and HTML bodies
- Mailer: Delivery through Django's email backend
"""

import logging

from django.conf import settings
from django.core.mail import EmailMultiAlternatives
from django.template.loader import render_to_string
from django.utils import translation

logger = logging.getLogger(__name__)

SUBJECT_TEMPLATE = 'notifications/emails/completion_reminder_subject.txt'
TEXT_TEMPLATE = 'notifications/emails/completion_reminder.txt'
HTML_TEMPLATE = 'notifications/emails/completion_reminder.html'


def get_support_sender():
    """Return the "Name <address>" reminders are sent from."""
    name = getattr(settings, 'SUPPORT_NAME', '')
    address = getattr(settings, 'SUPPORT_EMAIL', None) or settings.DEFAULT_FROM_EMAIL
    return f'{name} <{address}>' if name else address


def render_reminder_email(user, course, percent, course_url):
    """
    Render the reminder for one learner in their language.

    Args:
        user: Recipient
        course: Course the reminder is about
        percent: Learner's current completion percentage
        course_url: Absolute course URL

    Returns:
        (subject, plain_body, html_body)
    """
    context = {
        'firstname': user.first_name or user.get_short_name(),
        'coursename': course.fullname,
        'percent': percent,
        'courseurl': course_url,
    }

    with translation.override(getattr(user, 'language', None) or settings.LANGUAGE_CODE):
        subject = render_to_string(SUBJECT_TEMPLATE, context)
        text_content = render_to_string(TEXT_TEMPLATE, context)
        html_content = render_to_string(HTML_TEMPLATE, context)

    # Email headers must not contain newlines
    subject = ' '.join(subject.split())
    return subject, text_content, html_content


class Mailer:
    """Sends one email; never raises, returns True on success."""

    def send(self, recipient, sender, subject, plain, html):
        if not getattr(recipient, 'can_receive_email', bool(recipient.email)):
            logger.info(f'Not emailing user {recipient.pk}: email disabled or missing')
            return False

        try:
            email = EmailMultiAlternatives(
                subject=subject,
                body=plain,
                from_email=sender,
                to=[recipient.email],
            )
            email.attach_alternative(html, 'text/html')
            sent = email.send()
        except Exception as e:
            # Log the error but don't raise - other recipients still get theirs
            logger.error(f'Failed to send reminder email to {recipient.email}: {e}')
            return False
        return sent > 0
