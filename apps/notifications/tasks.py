"""
Scheduled tasks for notifications app.

Background jobs run by the Django-Q2 cluster:
- Completion progress reminders (hourly by default, see setup_schedules)

The cluster's single schedule keeps runs from overlapping.
"""

import logging

from .reminders import ReminderJob

logger = logging.getLogger(__name__)


def send_completion_reminders():
    """
    Scheduled job: email learners below their block's completion threshold.

    Returns a summary dict, stored by Django-Q2 as the task result.
    """
    outcomes = ReminderJob().execute()

    summary = {
        'instances': len(outcomes),
        'skipped': sum(1 for outcome in outcomes if outcome.skipped and not outcome.crashed),
        'failed_instances': sum(1 for outcome in outcomes if outcome.crashed),
        'sent': sum(outcome.sent for outcome in outcomes),
        'failed': sum(outcome.failed for outcome in outcomes),
        'errors': sum(outcome.errors for outcome in outcomes),
    }
    logger.info(
        f"Completion reminders done: {summary['instances']} block(s), "
        f"{summary['skipped']} skipped, {summary['failed_instances']} crashed, "
        f"{summary['sent']} sent, {summary['failed']} failed, {summary['errors']} error(s)"
    )
    return summary
