"""
Tests for the course host services: enrolments, progress and capabilities.
"""

from datetime import timedelta

from django.test import TestCase, override_settings

from apps.accounts.models import User
from apps.blocks.models import CapabilityOverride
from apps.blocks.services import CourseContext
from apps.courses.models import Enrollment
from apps.courses.permissions import AccessChecker, CAPABILITY_OVERVIEW, CAPABILITY_SHOWBAR
from apps.courses.progress import ProgressEngine
from apps.courses.services import get_enrolled_users

from .factories import (
    NOW, complete, enrol, make_activities, make_block, make_course, make_group, make_user,
)


# =============================================================================
# Enrolled users
# =============================================================================

class EnrolledUsersTests(TestCase):

    def setUp(self):
        self.course = make_course()

    def test_active_enrolments_only(self):
        active = make_user('active@example.com')
        suspended = make_user('suspended@example.com')
        disabled = make_user('disabled@example.com', is_active=False)
        enrol(active, self.course)
        enrol(suspended, self.course, status=Enrollment.Status.SUSPENDED)
        enrol(disabled, self.course)

        self.assertEqual(list(get_enrolled_users(self.course, NOW)), [active])

    def test_enrolment_time_window(self):
        current = make_user('current@example.com')
        future = make_user('future@example.com')
        ended = make_user('ended@example.com')
        enrol(current, self.course, time_start=NOW - timedelta(days=1), time_end=NOW + timedelta(days=1))
        enrol(future, self.course, time_start=NOW + timedelta(hours=1))
        enrol(ended, self.course, time_end=NOW)

        self.assertEqual(list(get_enrolled_users(self.course, NOW)), [current])

    def test_user_with_several_roles_listed_once(self):
        user = make_user('both@example.com')
        enrol(user, self.course, role=Enrollment.Role.STUDENT)
        enrol(user, self.course, role=Enrollment.Role.TEACHER)

        self.assertEqual(list(get_enrolled_users(self.course, NOW)), [user])

    def test_other_course_enrolments_ignored(self):
        other = make_course(shortname='OTHER')
        enrol(make_user('elsewhere@example.com'), other)

        self.assertEqual(list(get_enrolled_users(self.course, NOW)), [])


# =============================================================================
# Progress computation
# =============================================================================

class ProgressEngineTests(TestCase):

    def setUp(self):
        self.course = make_course()
        self.user = make_user('learner@example.com')

    def test_rounds_half_up(self):
        activities = make_activities(self.course, 8)
        complete(self.user, activities[:1])

        self.assertEqual(ProgressEngine(self.course).percentage_for(self.user), 13)

    def test_thirds(self):
        activities = make_activities(self.course, 3)
        engine = ProgressEngine(self.course)

        complete(self.user, activities[:1])
        self.assertEqual(engine.percentage_for(self.user), 33)
        complete(self.user, activities[1:2])
        self.assertEqual(engine.percentage_for(self.user), 67)

    def test_complete_and_untouched(self):
        activities = make_activities(self.course, 4)
        other = make_user('other@example.com')
        complete(self.user, activities)

        engine = ProgressEngine(self.course)
        self.assertEqual(engine.percentage_for(self.user), 100)
        self.assertEqual(engine.percentage_for(other), 0)

    def test_no_activities_is_none(self):
        self.assertIsNone(ProgressEngine(self.course).percentage_for(self.user))
        self.assertFalse(ProgressEngine(self.course).has_activities())

    def test_untracked_and_hidden_activities_ignored(self):
        tracked = make_activities(self.course, 2)
        make_activities(self.course, 2, completion_enabled=False)
        make_activities(self.course, 2, visible=False)
        complete(self.user, tracked[:1])

        self.assertEqual(ProgressEngine(self.course).percentage_for(self.user), 50)

    def test_only_hidden_tracked_activities_is_none(self):
        make_activities(self.course, 2, visible=False)
        engine = ProgressEngine(self.course)

        self.assertTrue(engine.has_activities())
        self.assertIsNone(engine.percentage_for(self.user))

    def test_group_restricted_activities(self):
        outsider = make_user('outsider@example.com')
        group = make_group(self.course, members=[self.user])
        open_activities = make_activities(self.course, 2)
        make_activities(self.course, 2, restricted_to_group=group)
        complete(self.user, open_activities)
        complete(outsider, open_activities[:1])

        engine = ProgressEngine(self.course)
        self.assertEqual(engine.percentage_for(self.user), 50)
        self.assertEqual(engine.percentage_for(outsider), 50)

    def test_selected_activities(self):
        activities = make_activities(self.course, 4)
        complete(self.user, activities[:1])
        engine = ProgressEngine(self.course, activity_ids=[activities[0].pk, activities[1].pk])

        self.assertEqual(engine.percentage_for(self.user), 50)

    def test_empty_selection_has_no_activities(self):
        make_activities(self.course, 3)

        self.assertFalse(ProgressEngine(self.course, activity_ids=[]).has_activities())

    def test_completion_switches(self):
        self.assertTrue(ProgressEngine(self.course).is_enabled())

        self.course.enable_completion = False
        self.assertFalse(ProgressEngine(self.course).is_enabled())

        self.course.enable_completion = True
        with override_settings(ENABLE_COMPLETION=False):
            self.assertFalse(ProgressEngine(self.course).is_enabled())


# =============================================================================
# Capabilities
# =============================================================================

class AccessCheckerTests(TestCase):

    def setUp(self):
        self.course = make_course()
        self.block = make_block(self.course)
        self.context = CourseContext(block_id=self.block.pk, course_id=self.course.pk)
        self.checker = AccessChecker()

    def capabilities(self, user):
        return (
            self.checker.has_capability(self.context, user, CAPABILITY_SHOWBAR),
            self.checker.has_capability(self.context, user, CAPABILITY_OVERVIEW),
        )

    def test_role_defaults(self):
        expected = {
            Enrollment.Role.STUDENT: (True, False),
            Enrollment.Role.TEACHER: (True, True),
            Enrollment.Role.EDITING_TEACHER: (True, True),
            Enrollment.Role.MANAGER: (True, True),
            Enrollment.Role.GUEST: (False, False),
        }
        for role, capabilities in expected.items():
            user = make_user(f'{role.value}@example.com')
            enrol(user, self.course, role=role)
            self.assertEqual(self.capabilities(user), capabilities, role)

    def test_not_enrolled(self):
        self.assertEqual(self.capabilities(make_user('stranger@example.com')), (False, False))

    def test_suspended_enrolment(self):
        user = make_user('suspended@example.com')
        enrol(user, self.course, status=Enrollment.Status.SUSPENDED)

        self.assertEqual(self.capabilities(user), (False, False))

    def test_roles_from_enrolments_active_at_given_time(self):
        user = make_user('windowed@example.com')
        enrol(user, self.course, time_start=NOW - timedelta(days=30), time_end=NOW + timedelta(days=30))
        check = self.checker.has_capability

        self.assertTrue(check(self.context, user, CAPABILITY_SHOWBAR, NOW))
        self.assertFalse(check(self.context, user, CAPABILITY_SHOWBAR, NOW + timedelta(days=31)))

    def test_superuser_holds_everything(self):
        admin = User.objects.create_superuser(email='admin@example.com', password='x')

        self.assertEqual(self.capabilities(admin), (True, True))

    def test_inactive_user_holds_nothing(self):
        user = make_user('inactive@example.com', is_active=False)
        enrol(user, self.course)

        self.assertEqual(self.capabilities(user), (False, False))

    def test_student_and_teacher_roles_combine(self):
        user = make_user('both@example.com')
        enrol(user, self.course, role=Enrollment.Role.STUDENT)
        enrol(user, self.course, role=Enrollment.Role.TEACHER)

        self.assertEqual(self.capabilities(user), (True, True))

    def test_block_override_allows(self):
        user = make_user('guest@example.com')
        enrol(user, self.course, role=Enrollment.Role.GUEST)
        CapabilityOverride.objects.create(
            block_instance=self.block,
            role=Enrollment.Role.GUEST,
            capability=CAPABILITY_SHOWBAR,
            allow=True,
        )

        self.assertEqual(self.capabilities(user), (True, False))

    def test_block_override_prohibit_wins(self):
        user = make_user('both@example.com')
        enrol(user, self.course, role=Enrollment.Role.STUDENT)
        enrol(user, self.course, role=Enrollment.Role.MANAGER)
        CapabilityOverride.objects.create(
            block_instance=self.block,
            role=Enrollment.Role.STUDENT,
            capability=CAPABILITY_OVERVIEW,
            allow=False,
        )

        self.assertEqual(self.capabilities(user), (True, False))

    def test_override_on_other_block_ignored(self):
        user = make_user('student@example.com')
        enrol(user, self.course)
        CapabilityOverride.objects.create(
            block_instance=make_block(self.course),
            role=Enrollment.Role.STUDENT,
            capability=CAPABILITY_SHOWBAR,
            allow=False,
        )

        self.assertEqual(self.capabilities(user), (True, False))
