"""
Tests for the group filter resolver.
"""

from django.test import SimpleTestCase, TestCase

from apps.courses.services import GroupService
from apps.notifications.group_filter import (
    GroupFilter, parse_group_filter, KIND_GROUP, KIND_GROUPING, KIND_NONE,
)

from .factories import make_course, make_group, make_grouping, make_user


class FakeGroupService:
    """In-memory group membership: groups {id: {user ids}}, groupings {id: [group ids]}."""

    def __init__(self, groups=None, groupings=None):
        self.groups = groups or {}
        self.groupings = groupings or {}

    def is_member(self, group_id, user_id):
        return user_id in self.groups.get(group_id, set())

    def grouping_group_ids(self, grouping_id):
        return list(self.groupings.get(grouping_id, []))

    def user_group_ids(self, course_id, user_id):
        return {group_id for group_id, members in self.groups.items() if user_id in members}


# =============================================================================
# Parsing
# =============================================================================

class ParseGroupFilterTests(SimpleTestCase):

    def test_group(self):
        self.assertEqual(parse_group_filter('group-7'), GroupFilter(KIND_GROUP, 7))

    def test_grouping(self):
        self.assertEqual(parse_group_filter('grouping-3'), GroupFilter(KIND_GROUPING, 3))

    def test_no_filter_values(self):
        for value in ('0', '', None, 0, 'group-', 'group-0', 'group-abc', 'grouping--2',
                      'group-7x', 'team-4', 'GROUP-7'):
            self.assertEqual(parse_group_filter(value).kind, KIND_NONE, value)
            self.assertFalse(parse_group_filter(value).is_active)


# =============================================================================
# Membership tests
# =============================================================================

class GroupFilterMatcherTests(SimpleTestCase):

    def setUp(self):
        self.service = FakeGroupService(
            groups={7: {1, 2}, 8: {3}, 9: {4}},
            groupings={3: [8, 9]},
        )

    def test_no_filter_matches_everyone(self):
        matches = parse_group_filter('0').matcher(self.service, course_id=1)
        self.assertTrue(all(matches(user_id) for user_id in (1, 2, 3, 4, 5)))
        self.assertIsNone(parse_group_filter('0').group_ids(self.service))

    def test_group_matches_members_only(self):
        matches = parse_group_filter('group-7').matcher(self.service, course_id=1)
        self.assertEqual([u for u in (1, 2, 3, 4, 5) if matches(u)], [1, 2])
        self.assertEqual(parse_group_filter('group-7').group_ids(self.service), [7])

    def test_grouping_matches_members_of_any_group_in_it(self):
        matches = parse_group_filter('grouping-3').matcher(self.service, course_id=1)
        self.assertEqual([u for u in (1, 2, 3, 4, 5) if matches(u)], [3, 4])
        self.assertEqual(parse_group_filter('grouping-3').group_ids(self.service), [8, 9])

    def test_unknown_grouping_matches_nobody(self):
        matches = parse_group_filter('grouping-99').matcher(self.service, course_id=1)
        self.assertFalse(any(matches(u) for u in (1, 2, 3, 4)))


class GroupFilterWithGroupServiceTests(TestCase):
    """The resolver against the ORM-backed GroupService."""

    def test_grouping_membership(self):
        course = make_course()
        alice = make_user('alice@example.com')
        bob = make_user('bob@example.com')
        carol = make_user('carol@example.com')
        red = make_group(course, 'Red', members=[alice])
        blue = make_group(course, 'Blue', members=[bob])
        make_group(course, 'Green', members=[carol])
        grouping = make_grouping(course, groups=[red, blue])

        matches = parse_group_filter(f'grouping-{grouping.pk}').matcher(GroupService(), course.pk)

        self.assertTrue(matches(alice.pk))
        self.assertTrue(matches(bob.pk))
        self.assertFalse(matches(carol.pk))

    def test_group_membership(self):
        course = make_course()
        alice = make_user('alice@example.com')
        bob = make_user('bob@example.com')
        red = make_group(course, 'Red', members=[alice])

        matches = parse_group_filter(f'group-{red.pk}').matcher(GroupService(), course.pk)

        self.assertTrue(matches(alice.pk))
        self.assertFalse(matches(bob.pk))
