"""
Course models.

Models:
- Course: Course record with the completion tracking switch
- Enrollment: User enrolment in a course with a course role
- Group / Grouping: Course groups and named collections of groups
- Activity: Course activity, optionally tracked for completion
- ActivityCompletion: Per-user completion state of an activity
"""

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone


class Course(models.Model):
    """
    A course.

    Completion tracking must be enabled here (and site-wide via
    settings.ENABLE_COMPLETION) for progress to be computed.
    """

    fullname = models.CharField(max_length=255)
    shortname = models.CharField(max_length=100, unique=True)
    enable_completion = models.BooleanField(
        default=True,
        help_text='Track activity completion in this course',
    )
    visible = models.BooleanField(default=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'course'
        verbose_name_plural = 'courses'
        ordering = ['fullname']

    def __str__(self):
        return f"{self.fullname} ({self.shortname})"

    def get_absolute_url(self):
        return f"/course/view.php?id={self.pk}"

    def get_site_url(self):
        """Return the absolute course URL used in emails."""
        site_url = getattr(settings, 'SITE_URL', 'http://localhost:8000').rstrip('/')
        return f"{site_url}{self.get_absolute_url()}"


class EnrollmentQuerySet(models.QuerySet):

    def active(self, now=None):
        """Enrolments that currently grant course access."""
        now = now or timezone.now()
        return self.filter(
            Q(time_start__isnull=True) | Q(time_start__lte=now),
            Q(time_end__isnull=True) | Q(time_end__gt=now),
            status=Enrollment.Status.ACTIVE,
            user__is_active=True,
        )


class Enrollment(models.Model):
    """
    User enrolment in a course.

    A user may hold several roles in the same course, one row per role.
    """

    class Role(models.TextChoices):
        STUDENT = 'student', 'Student'
        TEACHER = 'teacher', 'Non-editing teacher'
        EDITING_TEACHER = 'editingteacher', 'Teacher'
        MANAGER = 'manager', 'Manager'
        GUEST = 'guest', 'Guest'

    class Status(models.TextChoices):
        ACTIVE = 'active', 'Active'
        SUSPENDED = 'suspended', 'Suspended'

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='enrollments',
    )
    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='enrollments',
    )
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.STUDENT,
        db_index=True,
    )
    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.ACTIVE,
    )
    time_start = models.DateTimeField(null=True, blank=True)
    time_end = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)

    objects = EnrollmentQuerySet.as_manager()

    class Meta:
        verbose_name = 'enrollment'
        verbose_name_plural = 'enrollments'
        ordering = ['course', 'user']
        constraints = [
            models.UniqueConstraint(
                fields=['user', 'course', 'role'],
                name='unique_enrollment_role',
            ),
        ]

    def __str__(self):
        return f"{self.user} in {self.course.shortname} as {self.get_role_display()}"


class Group(models.Model):
    """A group of users inside a course."""

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='groups',
    )
    name = models.CharField(max_length=255)
    members = models.ManyToManyField(
        settings.AUTH_USER_MODEL,
        blank=True,
        related_name='course_groups',
    )

    class Meta:
        verbose_name = 'group'
        verbose_name_plural = 'groups'
        ordering = ['course', 'name']

    def __str__(self):
        return f"{self.name} ({self.course.shortname})"


class Grouping(models.Model):
    """A named collection of groups within a course."""

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='groupings',
    )
    name = models.CharField(max_length=255)
    groups = models.ManyToManyField(
        Group,
        blank=True,
        related_name='groupings',
    )

    class Meta:
        verbose_name = 'grouping'
        verbose_name_plural = 'groupings'
        ordering = ['course', 'name']

    def __str__(self):
        return f"{self.name} ({self.course.shortname})"


class Activity(models.Model):
    """
    Course activity (assignment, quiz, page, ...).

    Only activities with completion_enabled count towards progress, and
    only those a user can see count for that user.
    """

    course = models.ForeignKey(
        Course,
        on_delete=models.CASCADE,
        related_name='activities',
    )
    name = models.CharField(max_length=255)
    completion_enabled = models.BooleanField(default=True)
    visible = models.BooleanField(default=True)
    restricted_to_group = models.ForeignKey(
        Group,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='restricted_activities',
        help_text='Only members of this group can see the activity',
    )
    position = models.PositiveIntegerField(default=0)

    class Meta:
        verbose_name = 'activity'
        verbose_name_plural = 'activities'
        ordering = ['course', 'position', 'id']

    def __str__(self):
        return self.name


class ActivityCompletion(models.Model):
    """Completion state of an activity for one user."""

    activity = models.ForeignKey(
        Activity,
        on_delete=models.CASCADE,
        related_name='completions',
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='activity_completions',
    )
    completed = models.BooleanField(default=False)
    time_modified = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'activity completion'
        verbose_name_plural = 'activity completions'
        constraints = [
            models.UniqueConstraint(
                fields=['activity', 'user'],
                name='unique_activity_completion',
            ),
        ]

    def __str__(self):
        state = 'complete' if self.completed else 'incomplete'
        return f"{self.activity} - {self.user}: {state}"
