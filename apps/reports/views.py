"""
Views for reports app.

Includes:
- My Tasks: incomplete tasks across projects by due bucket
- Status report: tasks across active projects by status
- Day status for midnight rollover
"""

from django.http import JsonResponse
from django_htmx.http import trigger_client_event

from apps.core.http import api_view
from apps.tasks.due_dates import DueBucket, format_relative_label, to_date_string
from apps.tasks.models import Task
from apps.tasks.serializers import serialize_task_with_project
from .services import get_my_tasks, get_status_report, get_day_status

BUCKET_KEYS = {
    DueBucket.OVERDUE: 'overdue',
    DueBucket.DUE_TODAY: 'dueToday',
    DueBucket.DUE_TOMORROW: 'dueTomorrow',
    DueBucket.UPCOMING: 'upcoming',
    DueBucket.NO_DATE: 'noDueDate',
}

STATUS_KEYS = {
    Task.Status.NOT_STARTED: 'notStarted',
    Task.Status.IN_PROGRESS: 'inProgress',
    Task.Status.ON_HOLD: 'onHold',
    Task.Status.COMPLETED: 'completed',
}

# Client event asking an htmx page to regroup its tasks after midnight
DAY_CHANGED_EVENT = 'day-changed'


@api_view('GET')
def my_tasks(request):
    today, grouped = get_my_tasks()

    def _serialize(task):
        label = format_relative_label(task.due_date, today) if task.due_date else None
        return serialize_task_with_project(task, dueLabel=label)

    data = {
        key: [_serialize(task) for task in grouped[bucket]]
        for bucket, key in BUCKET_KEYS.items()
    }
    data['today'] = to_date_string(today)
    return JsonResponse(data)


@api_view('GET')
def status_report(request):
    grouped = get_status_report()
    return JsonResponse({
        key: [serialize_task_with_project(task) for task in grouped[status]]
        for status, key in STATUS_KEYS.items()
    })


@api_view('GET')
def day_status(request):
    """
    GET ?since=YYYY-MM-DD

    Polled by open pages; htmx callers get a 'day-changed' client event
    when the day has rolled over.
    """
    status = get_day_status(request.GET.get('since'))
    response = JsonResponse(status)
    if status['changed'] and request.htmx:
        trigger_client_event(response, DAY_CHANGED_EVENT, {'today': status['today']})
    return response
