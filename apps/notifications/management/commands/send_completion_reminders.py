"""
Run the completion progress reminder job once.

Usage:
    python manage.py send_completion_reminders [--dry-run]

Normally the Django-Q2 schedule runs it; this is for manual runs.
"""

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.notifications.reminders import ReminderJob


class Command(BaseCommand):
    help = "Email learners whose completion progress is below the block threshold"

    def add_arguments(self, parser):
        parser.add_argument(
            '--dry-run',
            action='store_true',
            help='Report who would be emailed without sending or updating blocks',
        )

    def handle(self, *args, **options):
        now = timezone.now()
        dry_run = options['dry_run']

        self.stdout.write(
            self.style.NOTICE(
                f"[{now:%Y-%m-%d %H:%M:%S}] Starting completion reminders"
                + (" (dry run)" if dry_run else "")
            )
        )

        outcomes = ReminderJob(now=now, dry_run=dry_run).execute()

        for outcome in outcomes:
            if outcome.skipped:
                self.stdout.write(f"  Block {outcome.block_id}: skipped ({outcome.skipped})")
            else:
                self.stdout.write(
                    f"  Block {outcome.block_id}: {outcome.recipients} recipient(s), "
                    f"{outcome.sent} sent, {outcome.failed} failed"
                )

        total_sent = sum(outcome.sent for outcome in outcomes)
        total_failed = sum(outcome.failed for outcome in outcomes)
        self.stdout.write(
            self.style.SUCCESS(
                f"[{now:%Y-%m-%d %H:%M:%S}] Completed: {len(outcomes)} block(s), "
                f"{total_sent} sent, {total_failed} failed"
            )
        )
