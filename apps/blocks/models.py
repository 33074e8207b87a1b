"""
Block models.

Models:
- BlockInstance: A placed block with its serialized configuration
- BlockPosition: Explicit per-page-type positioning/visibility rows
- CapabilityOverride: Role capability overrides in a block's context
"""

from django.db import models

from apps.courses.models import Enrollment

from .config import decode_configdata, encode_configdata


class BlockInstance(models.Model):
    """
    A block placed in some parent context.

    The parent context is identified by level and instance id; for the
    course level the instance id is the course id.
    """

    class ContextLevel(models.TextChoices):
        SYSTEM = 'system', 'System'
        USER = 'user', 'User'
        COURSE = 'course', 'Course'
        MODULE = 'module', 'Activity module'

    blockname = models.CharField(max_length=40, db_index=True)
    parent_context_level = models.CharField(
        max_length=10,
        choices=ContextLevel.choices,
        default=ContextLevel.COURSE,
    )
    parent_instance_id = models.PositiveBigIntegerField(
        help_text='Id of the parent context instance (course id for course blocks)'
    )
    configdata = models.TextField(
        blank=True,
        default='',
        help_text='base64-encoded JSON block configuration',
    )

    time_created = models.DateTimeField(auto_now_add=True)
    time_modified = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'block instance'
        verbose_name_plural = 'block instances'
        ordering = ['id']
        indexes = [
            models.Index(
                fields=['parent_context_level', 'parent_instance_id'],
                name='blocks_parent_context_idx',
            ),
        ]

    def __str__(self):
        return f"{self.blockname} #{self.pk} ({self.parent_context_level} {self.parent_instance_id})"

    def get_config(self):
        """Return the decoded configuration dict."""
        return decode_configdata(self.configdata)

    def set_config(self, data):
        self.configdata = encode_configdata(data)


class BlockPosition(models.Model):
    """
    Explicit positioning of a block on a page type.

    Without any row a block shows wherever it was added; once rows exist
    for a page type, only the visible ones show it.
    """

    block_instance = models.ForeignKey(
        BlockInstance,
        on_delete=models.CASCADE,
        related_name='positions',
    )
    pagetype = models.CharField(
        max_length=64,
        help_text='Page type pattern, e.g. course-view-topics',
    )
    visible = models.BooleanField(default=True)
    region = models.CharField(max_length=16, blank=True, default='')
    weight = models.IntegerField(default=0)

    class Meta:
        verbose_name = 'block position'
        verbose_name_plural = 'block positions'
        ordering = ['block_instance', 'pagetype']

    def __str__(self):
        state = 'visible' if self.visible else 'hidden'
        return f"Block #{self.block_instance_id} on {self.pagetype}: {state}"


class CapabilityOverride(models.Model):
    """Allow or prohibit a capability for a course role in one block."""

    block_instance = models.ForeignKey(
        BlockInstance,
        on_delete=models.CASCADE,
        related_name='capability_overrides',
    )
    role = models.CharField(max_length=20, choices=Enrollment.Role.choices)
    capability = models.CharField(max_length=100)
    allow = models.BooleanField(
        help_text='True allows the capability, False prohibits it',
    )

    class Meta:
        verbose_name = 'capability override'
        verbose_name_plural = 'capability overrides'
        constraints = [
            models.UniqueConstraint(
                fields=['block_instance', 'role', 'capability'],
                name='unique_block_capability_override',
            ),
        ]

    def __str__(self):
        verb = 'allows' if self.allow else 'prohibits'
        return f"Block #{self.block_instance_id} {verb} {self.capability} for {self.role}"
