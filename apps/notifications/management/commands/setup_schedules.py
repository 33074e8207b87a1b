"""
Management command to set up the Django-Q2 schedule for completion reminders.

Usage:
    python manage.py setup_schedules

The command is idempotent - safe to run multiple times.
An existing schedule is updated if its configuration changes.
"""
from django.conf import settings
from django.core.management.base import BaseCommand
from django_q.models import Schedule

SCHEDULE_NAME = 'Completion Progress Reminders'
SCHEDULE_FUNC = 'apps.notifications.tasks.send_completion_reminders'


class Command(BaseCommand):
    help = 'Set up the Django-Q2 schedule for completion progress reminders'

    def handle(self, *args, **options):
        self.stdout.write('\nSetting up Django-Q2 schedules...\n')

        cron = settings.REMINDER_SCHEDULE_CRON

        schedule, created = Schedule.objects.update_or_create(
            name=SCHEDULE_NAME,
            defaults={
                'func': SCHEDULE_FUNC,
                'schedule_type': Schedule.CRON,
                'cron': cron,
                'repeats': -1,  # Run forever
            }
        )
        if created:
            self.stdout.write(
                self.style.SUCCESS(f'✓ Created schedule: {SCHEDULE_NAME} ({cron})')
            )
        else:
            self.stdout.write(
                self.style.WARNING(f'↻ Updated schedule: {SCHEDULE_NAME} ({cron})')
            )

        self.stdout.write('')
        self.stdout.write(
            self.style.NOTICE(
                'Note: Ensure Django-Q cluster is running: python manage.py qcluster'
            )
        )
        self.stdout.write('')
