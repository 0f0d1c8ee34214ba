"""
Tests for due-date classification, grouping and labels.

Saturday 2026-03-14 is "today" throughout unless a test says otherwise.
"""

from datetime import date, datetime, timezone as dt_timezone
from types import SimpleNamespace

from django.core.exceptions import ValidationError
from django.test import SimpleTestCase, override_settings

from apps.tasks import due_dates
from apps.tasks.due_dates import DueBucket

TODAY = date(2026, 3, 14)


def make_task(due, sort_order=0, project='Home'):
    return SimpleNamespace(
        due_date=due,
        sort_order=sort_order,
        section=SimpleNamespace(project=SimpleNamespace(name=project)),
    )


# =============================================================================
# Classification
# =============================================================================

class ClassifyTests(SimpleTestCase):

    def test_buckets(self):
        cases = [
            (date(2026, 3, 13), DueBucket.OVERDUE),
            (date(2025, 12, 1), DueBucket.OVERDUE),
            (date(2026, 3, 14), DueBucket.DUE_TODAY),
            (date(2026, 3, 15), DueBucket.DUE_TOMORROW),
            (date(2026, 3, 16), DueBucket.UPCOMING),
            (date(2027, 1, 1), DueBucket.UPCOMING),
            (None, DueBucket.NO_DATE),
        ]
        for due, expected in cases:
            with self.subTest(due=due):
                self.assertEqual(due_dates.classify(due, TODAY), expected)

    def test_tomorrow_across_year_boundary(self):
        self.assertEqual(
            due_dates.classify(date(2027, 1, 1), date(2026, 12, 31)),
            DueBucket.DUE_TOMORROW,
        )

    def test_tomorrow_across_month_boundary(self):
        self.assertEqual(
            due_dates.classify(date(2026, 3, 1), date(2026, 2, 28)),
            DueBucket.DUE_TOMORROW,
        )


# =============================================================================
# Today in the application timezone
# =============================================================================

@override_settings(APP_TIMEZONE='America/Chicago')
class TodayTests(SimpleTestCase):

    def test_late_evening_in_chicago_is_still_the_previous_day(self):
        # 04:30 UTC on the 15th is 23:30 CDT on the 14th
        now = datetime(2026, 3, 15, 4, 30, tzinfo=dt_timezone.utc)
        self.assertEqual(due_dates.today(now), date(2026, 3, 14))
        self.assertEqual(due_dates.today_string(now), '2026-03-14')

    def test_after_midnight_in_chicago(self):
        now = datetime(2026, 3, 15, 5, 30, tzinfo=dt_timezone.utc)
        self.assertEqual(due_dates.today(now), date(2026, 3, 15))

    @override_settings(APP_TIMEZONE='Asia/Tokyo')
    def test_zone_is_configurable(self):
        now = datetime(2026, 3, 14, 16, 0, tzinfo=dt_timezone.utc)
        self.assertEqual(due_dates.today(now), date(2026, 3, 15))


# =============================================================================
# Parsing at the boundary
# =============================================================================

class ParseDueDateTests(SimpleTestCase):

    def test_valid(self):
        self.assertEqual(due_dates.parse_due_date('2026-03-14'), date(2026, 3, 14))
        self.assertEqual(due_dates.parse_due_date(date(2026, 3, 14)), date(2026, 3, 14))

    def test_empty_means_no_date(self):
        self.assertIsNone(due_dates.parse_due_date(None))
        self.assertIsNone(due_dates.parse_due_date(''))

    def test_rejects_non_canonical_forms(self):
        for value in ['2026-3-14', '03/14/2026', '2026-03-14T00:00:00Z', 'tomorrow', 20260314]:
            with self.subTest(value=value):
                with self.assertRaises(ValidationError):
                    due_dates.parse_due_date(value)

    def test_rejects_impossible_dates(self):
        with self.assertRaises(ValidationError):
            due_dates.parse_due_date('2026-02-30')


# =============================================================================
# Grouping
# =============================================================================

class GroupByBucketTests(SimpleTestCase):

    def test_every_bucket_present_and_every_task_placed_once(self):
        tasks = [
            make_task(date(2026, 3, 1)),
            make_task(date(2026, 3, 15)),
            make_task(None),
        ]
        grouped = due_dates.group_by_bucket(tasks, today=TODAY)

        self.assertEqual(set(grouped), set(DueBucket))
        self.assertEqual(grouped[DueBucket.DUE_TODAY], [])
        self.assertEqual(grouped[DueBucket.UPCOMING], [])
        self.assertEqual(sum(len(bucket) for bucket in grouped.values()), 3)

    def test_empty_input(self):
        grouped = due_dates.group_by_bucket([], today=TODAY)
        self.assertTrue(all(bucket == [] for bucket in grouped.values()))

    def test_order_within_bucket(self):
        later = make_task(date(2026, 3, 12), sort_order=0)
        earlier_b = make_task(date(2026, 3, 10), sort_order=1, project='Beta')
        earlier_a = make_task(date(2026, 3, 10), sort_order=1, project='Alpha')
        first = make_task(date(2026, 3, 10), sort_order=0, project='Zeta')

        grouped = due_dates.group_by_bucket([later, earlier_b, earlier_a, first], today=TODAY)
        self.assertEqual(grouped[DueBucket.OVERDUE], [first, earlier_a, earlier_b, later])


# =============================================================================
# Labels
# =============================================================================

class RelativeLabelTests(SimpleTestCase):

    def test_labels(self):
        cases = [
            (date(2026, 3, 14), 'Today'),
            (date(2026, 3, 13), 'Yesterday'),
            (date(2026, 3, 15), 'Tomorrow'),
            (date(2026, 3, 10), 'Tue'),
            (date(2026, 3, 8), 'Sun'),
            (date(2026, 3, 20), 'Fri'),
            (date(2026, 3, 7), 'Mar 7'),
            (date(2026, 3, 21), 'Mar 21'),
            (date(2026, 3, 25), 'Mar 25'),
        ]
        for value, expected in cases:
            with self.subTest(value=value):
                self.assertEqual(due_dates.format_relative_label(value, TODAY), expected)

    def test_no_year_across_year_boundary(self):
        self.assertEqual(
            due_dates.format_relative_label(date(2027, 1, 15), date(2026, 12, 28)),
            'Jan 15',
        )


class HasDateChangedTests(SimpleTestCase):

    def test_changed(self):
        self.assertTrue(due_dates.has_date_changed('2026-03-13', today=TODAY))

    def test_unchanged(self):
        self.assertFalse(due_dates.has_date_changed('2026-03-14', today=TODAY))
