"""
Service layer for reports app.

Cross-project views over tasks:
- get_my_tasks: incomplete tasks grouped into due-date buckets
- get_status_report: tasks of active projects grouped by status
- get_day_status: day-rollover check for long-lived clients
"""

from apps.tasks import due_dates
from apps.tasks.models import Task


def get_my_tasks(today=None):
    """
    All incomplete tasks, grouped by due bucket.

    today is computed once (in the application timezone) and used for
    every task, so a request straddling midnight cannot split the result
    across two days.

    Returns:
        (today, dict mapping DueBucket -> ordered list of tasks)
    """
    if today is None:
        today = due_dates.today()

    tasks = Task.objects.exclude(
        status=Task.Status.COMPLETED
    ).select_related('section__project')

    return today, due_dates.group_by_bucket(tasks, today=today)


def get_status_report():
    """
    Tasks of non-archived projects grouped by status.

    Each group is ordered by project name, then sort_order.

    Returns:
        dict mapping Task.Status -> list of tasks (every status present)
    """
    tasks = Task.objects.filter(
        section__project__is_archived=False
    ).select_related('section__project').order_by(
        'section__project__name', 'sort_order', 'created_at'
    )

    grouped = {status: [] for status in Task.Status}
    for task in tasks:
        grouped[task.status].append(task)
    return grouped


def get_day_status(since=None, today=None):
    """
    Current day and whether it differs from the one the client last saw.

    Args:
        since: YYYY-MM-DD string from the client, or None

    Raises:
        ValidationError: If since is not a valid YYYY-MM-DD date
    """
    if since:
        since = due_dates.to_date_string(due_dates.parse_due_date(since))

    if today is None:
        today = due_dates.today()

    return {
        'today': due_dates.to_date_string(today),
        'changed': bool(since) and due_dates.has_date_changed(since, today=today),
    }
