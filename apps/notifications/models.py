"""
Notification models.

Models:
- ProgressRecord: Cached completion percentage per (block, user)
"""

from datetime import timedelta

from django.conf import settings
from django.db import models
from django.utils import timezone


class ProgressRecord(models.Model):
    """
    Cached completion percentage of a user for one progress block.

    A null percentage means the user had nothing to measure against.
    Freshness is judged against settings.PROGRESS_CACHE_LIFETIME.
    """

    block_instance = models.ForeignKey(
        'blocks.BlockInstance',
        on_delete=models.CASCADE,
        related_name='progress_records',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='progress_records',
    )
    percentage = models.PositiveSmallIntegerField(null=True, blank=True)
    time_modified = models.DateTimeField(default=timezone.now, db_index=True)

    class Meta:
        verbose_name = 'progress record'
        verbose_name_plural = 'progress records'
        constraints = [
            models.UniqueConstraint(
                fields=['block_instance', 'user'],
                name='unique_progress_record',
            ),
        ]

    def __str__(self):
        value = '-' if self.percentage is None else f"{self.percentage}%"
        return f"Block #{self.block_instance_id} / {self.user}: {value}"

    def is_fresh(self, now=None, lifetime=None):
        now = now or timezone.now()
        if lifetime is None:
            lifetime = settings.PROGRESS_CACHE_LIFETIME
        return self.time_modified >= now - timedelta(seconds=lifetime)
