"""
Due-date classification and labels.

"Today" is always evaluated in settings.APP_TIMEZONE, whatever the server
or client zone. Due dates are calendar dates: both sides of a comparison
are reduced to their canonical YYYY-MM-DD form, never to instants.

The classifier takes today as a value. Callers compute it once per pass
(group_by_bucket does this) so every task in one response is judged
against the same day.

Buckets:
- overdue       due < today
- due-today     due == today
- due-tomorrow  due == today + 1
- upcoming      due > today + 1
- no-date       no due date
"""

import re
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import models
from django.utils import dateformat, timezone

DATE_RE = re.compile(r'^\d{4}-\d{2}-\d{2}$')

# Window (exclusive, in days) in which labels show a weekday name
WEEKDAY_WINDOW_DAYS = 7


class DueBucket(models.TextChoices):
    OVERDUE = 'overdue', 'Overdue'
    DUE_TODAY = 'due-today', 'Due Today'
    DUE_TOMORROW = 'due-tomorrow', 'Due Tomorrow'
    UPCOMING = 'upcoming', 'Upcoming'
    NO_DATE = 'no-date', 'No Due Date'


def app_timezone():
    return ZoneInfo(settings.APP_TIMEZONE)


def today(now=None):
    """
    Current calendar date in the application timezone.

    Args:
        now: Aware datetime to evaluate instead of the current time
    """
    return timezone.localdate(now, timezone=app_timezone())


def _current_day():
    return today()


def to_date_string(value):
    """Canonical YYYY-MM-DD form of a date."""
    return value.isoformat()


def today_string(now=None):
    return to_date_string(today(now))


def parse_due_date(value):
    """
    Validate a due date at the API boundary.

    Accepts a date or a strict YYYY-MM-DD string. None and '' mean
    "no due date" and return None.

    Raises:
        ValidationError: For anything else
    """
    if value in (None, ''):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not DATE_RE.match(value):
        raise ValidationError(
            'Enter a valid date in YYYY-MM-DD format.',
            code='invalid_date',
        )
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValidationError(
            '%(value)s is not a valid calendar date.',
            code='invalid_date',
            params={'value': value},
        )


def classify(due_date, today):
    """
    Return the DueBucket for a due date, relative to today.

    Both dates are assumed valid (see parse_due_date).
    """
    if due_date is None:
        return DueBucket.NO_DATE

    due = to_date_string(due_date)
    current = to_date_string(today)
    tomorrow = to_date_string(today + timedelta(days=1))

    if due < current:
        return DueBucket.OVERDUE
    if due == current:
        return DueBucket.DUE_TODAY
    if due == tomorrow:
        return DueBucket.DUE_TOMORROW
    return DueBucket.UPCOMING


def bucket_sort_key(task):
    """Within a bucket: due date, then sort_order, then project name."""
    return (
        task.due_date or date.max,
        task.sort_order,
        task.section.project.name,
    )


def group_by_bucket(tasks, today=None, sort_key=bucket_sort_key):
    """
    Partition tasks into the five buckets.

    Every bucket is present in the result (possibly empty) and every task
    lands in exactly one. today defaults to the current day, evaluated
    once for the whole pass.

    Returns:
        dict mapping DueBucket -> ordered list of tasks
    """
    if today is None:
        today = _current_day()

    grouped = {bucket: [] for bucket in DueBucket}
    for task in tasks:
        grouped[classify(task.due_date, today)].append(task)

    if sort_key is not None:
        for bucket in grouped:
            grouped[bucket].sort(key=sort_key)

    return grouped


def format_relative_label(value, today):
    """
    Short display label for a date.

    Examples (today = Sat 2026-03-14):
    - 2026-03-14 -> "Today"
    - 2026-03-13 -> "Yesterday"
    - 2026-03-15 -> "Tomorrow"
    - 2026-03-10 -> "Tue"     (within a week either side)
    - 2026-03-20 -> "Fri"
    - 2026-03-25 -> "Mar 25"  (no year, even across a year boundary)
    """
    delta_days = (value - today).days

    if delta_days == 0:
        return 'Today'
    if delta_days == -1:
        return 'Yesterday'
    if delta_days == 1:
        return 'Tomorrow'
    if -WEEKDAY_WINDOW_DAYS < delta_days < WEEKDAY_WINDOW_DAYS:
        return dateformat.format(value, 'D')
    return dateformat.format(value, 'M j')


def has_date_changed(last_checked, today=None):
    """
    True when the current day differs from a previously observed one.

    Lets a long-lived client notice midnight and regroup its tasks.

    Args:
        last_checked: YYYY-MM-DD string the client saw last
        today: Current date (defaults to today in the app timezone)
    """
    current = to_date_string(today) if today is not None else today_string()
    return current != last_checked
