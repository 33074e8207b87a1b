"""
Service layer for courses app.

Read-only lookups the reminder job consumes:
- get_enrolled_users: Active enrolled users of a course
- GroupService: Group and grouping membership queries
"""

from django.contrib.auth import get_user_model
from django.utils import timezone

from .models import Enrollment, Group, Grouping


def get_enrolled_users(course, now=None):
    """
    Users with at least one active enrolment in the course, whatever their role.

    Staff are returned too; callers filter them out by capability.
    """
    now = now or timezone.now()
    enrolled_ids = (
        Enrollment.objects
        .active(now)
        .filter(course=course)
        .values('user_id')
    )
    return get_user_model().objects.filter(pk__in=enrolled_ids).order_by('pk')


class GroupService:
    """Group and grouping membership queries by course and user."""

    def is_member(self, group_id: int, user_id: int) -> bool:
        return Group.members.through.objects.filter(
            group_id=group_id,
            user_id=user_id,
        ).exists()

    def grouping_group_ids(self, grouping_id: int) -> list:
        """Ids of the groups belonging to a grouping (empty if it doesn't exist)."""
        return list(
            Grouping.groups.through.objects
            .filter(grouping_id=grouping_id)
            .order_by('group_id')
            .values_list('group_id', flat=True)
        )

    def user_group_ids(self, course_id: int, user_id: int) -> set:
        """Ids of the course groups the user is a member of."""
        return set(
            Group.objects
            .filter(course_id=course_id, members__id=user_id)
            .values_list('id', flat=True)
        )
