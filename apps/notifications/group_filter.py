"""
Group filter resolver.

A block's group setting restricts reminders to members of one group
("group-<id>") or of any group in a grouping ("grouping-<id>"). Any
other value, including "0", empty or malformed strings, means no filter.
"""

import re
from dataclasses import dataclass
from typing import Callable, List, Optional

GROUP_FILTER_RE = re.compile(r'^(group|grouping)-(\d+)$')

KIND_NONE = 'none'
KIND_GROUP = 'group'
KIND_GROUPING = 'grouping'


@dataclass(frozen=True)
class GroupFilter:
    kind: str = KIND_NONE
    target_id: Optional[int] = None

    @property
    def is_active(self) -> bool:
        return self.kind != KIND_NONE

    def group_ids(self, group_service) -> Optional[List[int]]:
        """Concrete group ids for batch queries; None means every user passes."""
        if self.kind == KIND_GROUP:
            return [self.target_id]
        if self.kind == KIND_GROUPING:
            return group_service.grouping_group_ids(self.target_id)
        return None

    def matcher(self, group_service, course_id) -> Callable[[int], bool]:
        """Return a user id -> bool membership test."""
        if self.kind == KIND_GROUP:
            group_id = self.target_id
            return lambda user_id: group_service.is_member(group_id, user_id)

        if self.kind == KIND_GROUPING:
            grouping_groups = set(self.group_ids(group_service))
            return lambda user_id: bool(
                grouping_groups & group_service.user_group_ids(course_id, user_id)
            )

        return lambda user_id: True


def parse_group_filter(value) -> GroupFilter:
    """Parse a block group setting into a GroupFilter."""
    if value is None:
        return GroupFilter()

    match = GROUP_FILTER_RE.match(str(value).strip())
    if not match:
        return GroupFilter()

    kind, target_id = match.group(1), int(match.group(2))
    if target_id <= 0:
        return GroupFilter()
    return GroupFilter(kind=kind, target_id=target_id)
