"""
Service layer for blocks app.

Resolves a block instance to the course it lives in and decides whether
the block shows on course pages.
"""

from dataclasses import dataclass

from .models import BlockInstance, BlockPosition

COURSE_PAGE_TYPE_PREFIX = 'course-view-'


@dataclass(frozen=True)
class CourseContext:
    """The block's context inside its course."""

    block_id: int
    course_id: int


class ContextResolver:

    def resolve(self, instance):
        """Return the CourseContext of a block, or None when its parent is not a course."""
        if instance.parent_context_level != BlockInstance.ContextLevel.COURSE:
            return None
        return CourseContext(block_id=instance.pk, course_id=instance.parent_instance_id)

    def is_visible_on_course_pages(self, instance):
        """
        Check if the block shows on any course-view-* page.

        True when no explicit course page positions exist, otherwise true
        iff at least one of them is visible.
        """
        visibles = list(
            BlockPosition.objects
            .filter(
                block_instance=instance,
                pagetype__istartswith=COURSE_PAGE_TYPE_PREFIX,
            )
            .values_list('visible', flat=True)
        )
        if not visibles:
            return True
        return any(visibles)
