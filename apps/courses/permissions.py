"""
Capability checks for the completion progress block.

Role-based access in a block context:
- Student: sees their own progress bar
- Teacher / Editing teacher / Manager: progress bar and the overview page
- Guest: nothing
- Site administrators (superusers) hold every capability

Block-level overrides allow or prohibit a capability for a role; a
prohibit on any of the user's roles wins over any allow.
"""

from apps.blocks.models import CapabilityOverride

from .models import Enrollment


CAPABILITY_SHOWBAR = 'completion_progress:showbar'
CAPABILITY_OVERVIEW = 'completion_progress:overview'

ROLE_CAPABILITIES = {
    Enrollment.Role.STUDENT: {CAPABILITY_SHOWBAR},
    Enrollment.Role.TEACHER: {CAPABILITY_SHOWBAR, CAPABILITY_OVERVIEW},
    Enrollment.Role.EDITING_TEACHER: {CAPABILITY_SHOWBAR, CAPABILITY_OVERVIEW},
    Enrollment.Role.MANAGER: {CAPABILITY_SHOWBAR, CAPABILITY_OVERVIEW},
    Enrollment.Role.GUEST: set(),
}


class AccessChecker:
    """Answers (block context, user, capability) -> bool."""

    def get_roles(self, course_id, user, now=None):
        return set(
            Enrollment.objects
            .active(now)
            .filter(course_id=course_id, user=user)
            .values_list('role', flat=True)
        )

    def has_capability(self, context, user, capability, now=None):
        """
        Check if user holds capability in the block context.

        context needs block_id and course_id attributes. Roles come from
        enrolments active at now (defaults to the current time).
        """
        if not user.is_active:
            return False

        # Admin holds everything
        if user.is_superuser:
            return True

        roles = self.get_roles(context.course_id, user, now)
        if not roles:
            return False

        overrides = {}
        for role, allow in CapabilityOverride.objects.filter(
            block_instance_id=context.block_id,
            capability=capability,
            role__in=roles,
        ).values_list('role', 'allow'):
            overrides[role] = allow

        if False in overrides.values():
            return False

        for role in roles:
            if overrides.get(role, capability in ROLE_CAPABILITIES.get(role, set())):
                return True
        return False
