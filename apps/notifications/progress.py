"""
Cached progress source for the reminder job.

Percentages are served from ProgressRecord while fresh. A missing or
stale record is recomputed live and written back, so a cache that has not
been refreshed never hides a learner from the reminder run.
"""

import logging

from django.conf import settings
from django.utils import timezone

from .models import ProgressRecord

logger = logging.getLogger(__name__)


class CachedProgressSource:

    def __init__(self, block_instance, engine, now=None, lifetime=None):
        self.block_instance = block_instance
        self.engine = engine
        self.now = now or timezone.now()
        self.lifetime = settings.PROGRESS_CACHE_LIFETIME if lifetime is None else lifetime

    def percentage_for(self, user):
        """Return the user's percentage (or None), recomputing when the cache is stale."""
        record = ProgressRecord.objects.filter(
            block_instance=self.block_instance,
            user=user,
        ).first()
        if record is not None and record.is_fresh(self.now, self.lifetime):
            return record.percentage

        percentage = self.engine.percentage_for(user)
        ProgressRecord.objects.update_or_create(
            block_instance=self.block_instance,
            user=user,
            defaults={'percentage': percentage, 'time_modified': self.now},
        )
        logger.debug(
            f"Block {self.block_instance.pk}: user {user.pk} progress recomputed: {percentage}"
        )
        return percentage
