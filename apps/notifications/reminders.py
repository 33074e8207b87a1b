"""
Completion progress reminder job.

Emails enrolled learners whose completion percentage in a course is below
the threshold configured on a completion progress block. Every block
instance is processed on its own; a skip or failure on one instance never
stops the others, and a run that sends nothing leaves the block
configuration untouched.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from django.conf import settings
from django.utils import timezone

from apps.blocks.models import BlockInstance
from apps.blocks.services import ContextResolver
from apps.courses.models import Course
from apps.courses.permissions import AccessChecker, CAPABILITY_OVERVIEW, CAPABILITY_SHOWBAR
from apps.courses.progress import ProgressEngine
from apps.courses.services import GroupService, get_enrolled_users

from .config import ReminderConfig
from .group_filter import parse_group_filter
from .progress import CachedProgressSource
from .services import Mailer, get_support_sender, render_reminder_email

logger = logging.getLogger(__name__)


class SkipInstance(Exception):
    """Raised to stop processing one block instance; the message is the reason."""


@dataclass
class InstanceOutcome:
    """What happened to one block instance during a run."""

    block_id: int
    course_id: Optional[int] = None
    skipped: Optional[str] = None
    recipients: int = 0
    sent: int = 0
    failed: int = 0
    errors: int = 0
    last_sent_updated: bool = False
    crashed: bool = False


class ReminderJob:
    """
    One pass over every completion progress block.

    Collaborators are injectable so the selection logic can run against
    fakes; the defaults are backed by the ORM.
    """

    def __init__(
        self,
        context_resolver=None,
        access_checker=None,
        group_service=None,
        mailer=None,
        progress_engine_class=ProgressEngine,
        cache_lifetime: Optional[int] = None,
        now=None,
        dry_run: bool = False,
    ):
        self.context_resolver = context_resolver or ContextResolver()
        self.access_checker = access_checker or AccessChecker()
        self.group_service = group_service or GroupService()
        self.mailer = mailer or Mailer()
        self.progress_engine_class = progress_engine_class
        self.cache_lifetime = cache_lifetime
        self.now = now
        self.dry_run = dry_run

    def get_instances(self):
        return BlockInstance.objects.filter(
            blockname=settings.REMINDER_BLOCK_NAME,
        ).order_by('pk')

    def execute(self) -> List[InstanceOutcome]:
        """Process every block instance and return one outcome per instance."""
        if not getattr(settings, 'ENABLE_COMPLETION', True):
            logger.info("Completion tracking disabled site-wide, no reminders sent.")
            return []

        now = self.now or timezone.now()
        outcomes = []

        for instance in self.get_instances():
            outcome = InstanceOutcome(block_id=instance.pk)
            try:
                self.process_instance(instance, now, outcome)
            except SkipInstance as skip:
                outcome.skipped = str(skip)
                logger.info(f"Skipping block {instance.pk}: {skip}.")
            except Exception:
                outcome.skipped = 'error'
                outcome.crashed = True
                logger.exception(f"Block {instance.pk}: reminder processing failed.")
            else:
                logger.info(
                    f"Block {instance.pk}: {outcome.recipients} recipient(s), "
                    f"{outcome.sent} sent, {outcome.failed} failed, {outcome.errors} error(s)."
                )
            outcomes.append(outcome)

        return outcomes

    def process_instance(self, instance, now, outcome):
        context = self.context_resolver.resolve(instance)
        if context is None:
            raise SkipInstance("not in course context")
        if not self.context_resolver.is_visible_on_course_pages(instance):
            raise SkipInstance("not visible in course context")

        course = Course.objects.filter(pk=context.course_id).first()
        if course is None:
            raise SkipInstance(f"course not found for {context.course_id}")
        outcome.course_id = course.pk
        logger.debug(f"Block {instance.pk}: course {course.pk}.")

        block_config = instance.get_config()
        reminder = ReminderConfig.from_block_config(block_config)
        if not reminder.enabled:
            raise SkipInstance("reminders disabled")

        now_ts = int(now.timestamp())
        if reminder.is_throttled(now_ts):
            raise SkipInstance(
                f"frequency {reminder.frequency}, wait {reminder.throttle_remaining(now_ts)}s"
            )
        logger.debug(
            f"Block {instance.pk}: threshold {reminder.threshold}, frequency {reminder.frequency}."
        )

        engine = self.progress_engine_class(course, activity_ids=reminder.selected_activity_ids())
        if not engine.is_enabled():
            raise SkipInstance("completion disabled in course")
        if not engine.has_activities():
            raise SkipInstance("no activities")

        users = list(get_enrolled_users(course, now))
        if not users:
            raise SkipInstance("no enrolled users")
        logger.debug(f"Block {instance.pk}: enrolled users {len(users)}.")

        group_filter = parse_group_filter(reminder.group_filter)
        if group_filter.is_active:
            logger.debug(f"Block {instance.pk}: {group_filter.kind} {group_filter.target_id} filter.")
        in_group = group_filter.matcher(self.group_service, course.pk)
        progress = CachedProgressSource(instance, engine, now=now, lifetime=self.cache_lifetime)
        sender = get_support_sender()
        course_url = course.get_site_url()

        for user in users:
            try:
                percent = self.select_recipient(
                    context, user, in_group, progress, reminder.threshold, now=now,
                )
                if percent is None:
                    continue
                outcome.recipients += 1
                if self.dry_run:
                    logger.info(f"Block {instance.pk}: user {user.pk} would be emailed ({percent}%).")
                    continue

                subject, plain, html = render_reminder_email(user, course, percent, course_url)
                sent = self.mailer.send(user, sender, subject, plain, html)
            except Exception:
                outcome.errors += 1
                logger.exception(f"Block {instance.pk}: user {user.pk} reminder failed.")
                continue

            status = 'sent' if sent else 'failed'
            logger.info(f"Block {instance.pk}: user {user.pk} email {status}.")
            if sent:
                outcome.sent += 1
            else:
                outcome.failed += 1

        if outcome.sent:
            instance.set_config(reminder.with_last_sent(block_config, now_ts))
            try:
                instance.save(update_fields=['configdata', 'time_modified'])
            except Exception:
                # Emails are out but the stamp is not; the next run repeats them
                logger.error(
                    f"Block {instance.pk}: {outcome.sent} email(s) sent but "
                    f"reminder last sent could not be saved."
                )
                raise
            outcome.last_sent_updated = True
            logger.info(f"Block {instance.pk}: reminder last sent updated.")
        else:
            logger.info(f"Block {instance.pk}: no emails sent, last sent unchanged.")

    def select_recipient(self, context, user, in_group, progress, threshold, now=None):
        """
        Return the user's percentage when they should get a reminder, else None.

        Capability and group checks run before progress is computed.
        """
        block_id = context.block_id

        if not self.access_checker.has_capability(context, user, CAPABILITY_SHOWBAR, now):
            logger.debug(f"Block {block_id}: user {user.pk} skipped: no showbar capability.")
            return None
        if self.access_checker.has_capability(context, user, CAPABILITY_OVERVIEW, now):
            logger.debug(f"Block {block_id}: user {user.pk} skipped: has overview capability.")
            return None
        if not in_group(user.pk):
            logger.debug(f"Block {block_id}: user {user.pk} skipped: not in group filter.")
            return None

        percent = progress.percentage_for(user)
        if percent is None or percent >= threshold:
            logger.debug(f"Block {block_id}: user {user.pk} skipped: percent {percent}.")
            return None
        return percent
