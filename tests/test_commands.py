"""
Tests for the scheduled task and management commands.
"""

from io import StringIO
from unittest import mock

from django.core import mail
from django.core.management import call_command
from django.test import TestCase, override_settings
from django_q.models import Schedule

from apps.notifications.management.commands.setup_schedules import SCHEDULE_FUNC, SCHEDULE_NAME
from apps.notifications.tasks import send_completion_reminders

from .factories import enrol, make_activities, make_block, make_course, make_user, reminder_settings


class ReminderEntryPointTestCase(TestCase):

    def setUp(self):
        course = make_course()
        make_activities(course, 2)
        enrol(make_user('low@example.com'), course)
        self.block = make_block(course)
        self.disabled = make_block(course, config=reminder_settings(reminder_enabled=0))


class SendCompletionRemindersTaskTests(ReminderEntryPointTestCase):

    def test_summary(self):
        summary = send_completion_reminders()

        self.assertEqual(summary, {
            'instances': 2, 'skipped': 1, 'failed_instances': 0,
            'sent': 1, 'failed': 0, 'errors': 0,
        })
        self.assertEqual(len(mail.outbox), 1)

    def test_crashed_instance_not_counted_as_skip(self):
        with mock.patch('apps.notifications.reminders.ContextResolver.resolve',
                        side_effect=RuntimeError('database gone')):
            summary = send_completion_reminders()

        self.assertEqual(summary['skipped'], 0)
        self.assertEqual(summary['failed_instances'], 2)
        self.assertEqual(summary['sent'], 0)

    def test_user_errors_reported(self):
        with mock.patch('apps.notifications.reminders.render_reminder_email',
                        side_effect=RuntimeError('template missing')):
            summary = send_completion_reminders()

        self.assertEqual(summary['errors'], 1)
        self.assertEqual(summary['failed_instances'], 0)


class SendCompletionRemindersCommandTests(ReminderEntryPointTestCase):

    def test_output(self):
        out = StringIO()
        call_command('send_completion_reminders', stdout=out)

        output = out.getvalue()
        self.assertIn(f'Block {self.block.pk}: 1 recipient(s), 1 sent, 0 failed', output)
        self.assertIn(f'Block {self.disabled.pk}: skipped (reminders disabled)', output)
        self.assertIn('Completed: 2 block(s), 1 sent, 0 failed', output)
        self.assertEqual(len(mail.outbox), 1)

    def test_dry_run(self):
        out = StringIO()
        call_command('send_completion_reminders', '--dry-run', stdout=out)

        self.assertIn('(dry run)', out.getvalue())
        self.assertIn(f'Block {self.block.pk}: 1 recipient(s), 0 sent, 0 failed', out.getvalue())
        self.assertEqual(mail.outbox, [])
        self.block.refresh_from_db()
        self.assertNotIn('reminder_last_sent', self.block.get_config())


class SetupSchedulesCommandTests(TestCase):

    def test_creates_schedule(self):
        out = StringIO()
        call_command('setup_schedules', stdout=out)

        schedule = Schedule.objects.get(name=SCHEDULE_NAME)
        self.assertEqual(schedule.func, SCHEDULE_FUNC)
        self.assertEqual(schedule.schedule_type, Schedule.CRON)
        self.assertEqual(schedule.cron, '0 * * * *')
        self.assertEqual(schedule.repeats, -1)
        self.assertIn('Created schedule', out.getvalue())

    def test_idempotent(self):
        call_command('setup_schedules', stdout=StringIO())
        out = StringIO()
        with override_settings(REMINDER_SCHEDULE_CRON='30 6 * * *'):
            call_command('setup_schedules', stdout=out)

        self.assertEqual(Schedule.objects.filter(name=SCHEDULE_NAME).count(), 1)
        self.assertEqual(Schedule.objects.get(name=SCHEDULE_NAME).cron, '30 6 * * *')
        self.assertIn('Updated schedule', out.getvalue())
