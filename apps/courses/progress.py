"""
Completion progress computation.

A user's progress is the share of visible, completion-tracked activities
they have completed, as an integer percentage rounded half up.
"""

from django.conf import settings
from django.db.models import Q

from .models import Activity, ActivityCompletion


class ProgressEngine:
    """
    Computes completion percentages for one course.

    activity_ids optionally narrows the tracked activities to a selection
    (the block's "selected activities" mode).
    """

    def __init__(self, course, activity_ids=None):
        self.course = course
        self.activity_ids = activity_ids

    def is_enabled(self):
        """Check completion tracking is on both site-wide and for the course."""
        return bool(getattr(settings, 'ENABLE_COMPLETION', True) and self.course.enable_completion)

    def tracked_activities(self):
        activities = Activity.objects.filter(course=self.course, completion_enabled=True)
        if self.activity_ids is not None:
            activities = activities.filter(pk__in=self.activity_ids)
        return activities

    def has_activities(self):
        return self.tracked_activities().exists()

    def visible_activities(self, user):
        # Hidden or group-restricted activities never count against a learner
        return self.tracked_activities().filter(
            Q(restricted_to_group__isnull=True) | Q(restricted_to_group__members=user),
            visible=True,
        ).distinct()

    def percentage_for(self, user):
        """
        Return the user's completion percentage, or None when the user
        has no visible tracked activities to measure against.
        """
        activity_ids = list(self.visible_activities(user).values_list('pk', flat=True))
        if not activity_ids:
            return None

        completed = ActivityCompletion.objects.filter(
            user=user,
            activity_id__in=activity_ids,
            completed=True,
        ).count()
        total = len(activity_ids)
        return (200 * completed + total) // (2 * total)
