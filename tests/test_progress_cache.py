"""
Tests for the cached progress source used by the reminder job.
"""

from datetime import timedelta
from unittest import mock

from django.test import TestCase

from apps.courses.progress import ProgressEngine
from apps.notifications.models import ProgressRecord
from apps.notifications.progress import CachedProgressSource

from .factories import NOW, complete, make_activities, make_block, make_course, make_user


class CachedProgressSourceTests(TestCase):

    def setUp(self):
        self.course = make_course()
        self.block = make_block(self.course)
        self.user = make_user('learner@example.com')
        activities = make_activities(self.course, 5)
        complete(self.user, activities[:1])
        self.engine = ProgressEngine(self.course)

    def source(self, lifetime=3600):
        return CachedProgressSource(self.block, self.engine, now=NOW, lifetime=lifetime)

    def cache(self, percentage, age):
        return ProgressRecord.objects.create(
            block_instance=self.block,
            user=self.user,
            percentage=percentage,
            time_modified=NOW - age,
        )

    def test_missing_record_computed_and_stored(self):
        self.assertEqual(self.source().percentage_for(self.user), 20)

        record = ProgressRecord.objects.get(block_instance=self.block, user=self.user)
        self.assertEqual(record.percentage, 20)
        self.assertEqual(record.time_modified, NOW)

    def test_fresh_record_used(self):
        self.cache(90, age=timedelta(minutes=10))

        with mock.patch.object(self.engine, 'percentage_for') as live:
            self.assertEqual(self.source().percentage_for(self.user), 90)
        live.assert_not_called()

    def test_record_at_lifetime_edge_is_fresh(self):
        self.cache(90, age=timedelta(seconds=3600))

        self.assertEqual(self.source().percentage_for(self.user), 90)

    def test_stale_record_recomputed(self):
        self.cache(90, age=timedelta(seconds=3601))

        self.assertEqual(self.source().percentage_for(self.user), 20)

        record = ProgressRecord.objects.get(block_instance=self.block, user=self.user)
        self.assertEqual(record.percentage, 20)
        self.assertEqual(record.time_modified, NOW)

    def test_fresh_null_percentage_returned(self):
        self.cache(None, age=timedelta(minutes=1))

        self.assertIsNone(self.source().percentage_for(self.user))

    def test_null_percentage_cached(self):
        other = make_user('nothing@example.com')
        engine = ProgressEngine(self.course, activity_ids=[])
        source = CachedProgressSource(self.block, engine, now=NOW, lifetime=3600)

        self.assertIsNone(source.percentage_for(other))
        self.assertIsNone(ProgressRecord.objects.get(block_instance=self.block, user=other).percentage)

    def test_lifetime_from_settings(self):
        with self.settings(PROGRESS_CACHE_LIFETIME=60):
            source = CachedProgressSource(self.block, self.engine, now=NOW)
        self.assertEqual(source.lifetime, 60)

    def test_records_are_per_block(self):
        other_block = make_block(self.course)
        ProgressRecord.objects.create(
            block_instance=other_block,
            user=self.user,
            percentage=90,
            time_modified=NOW,
        )

        self.assertEqual(self.source().percentage_for(self.user), 20)
