"""
Views for ordering app.

Includes:
- Batch reorder for projects, sections and tasks
- Task drag-and-drop (server-side drop handling)
"""

from django.http import JsonResponse

from apps.core.http import api_view, get_or_not_found, parse_json_body
from apps.tasks.models import Task
from .forms import ReorderForm, MoveTaskForm
from .services import apply_reorder, move_task


@api_view('PATCH')
def reorder(request):
    """
    Persist new sort orders for a batch of siblings.

    Body: {"type": "projects"|"sections"|"tasks",
           "items": [{"id": ..., "sortOrder": ...}, ...]}

    The body is fully validated before anything is written, and the batch
    is applied atomically. On failure the client reverts its optimistic
    ordering by refetching.
    """
    data = ReorderForm.from_payload(parse_json_body(request)).validated()
    apply_reorder(data['type'], data['items'])
    return JsonResponse({'success': True})


@api_view('POST')
def task_move(request, task_id):
    """
    Drop a task onto another task or a section.

    Response lists the resulting task order of the affected sections.
    """
    task = get_or_not_found(Task.objects.select_related('section__project'), 'Task', pk=task_id)
    data = MoveTaskForm.from_payload(parse_json_body(request)).validated()
    plan = move_task(task, data['over_id'])

    affected = {plan.source_id, plan.dest_id} - {None}
    return JsonResponse({
        'kind': plan.kind,
        'taskId': str(task.pk),
        'sourceSectionId': plan.source_id,
        'destSectionId': plan.dest_id,
        'sections': {
            section_id: [str(t.pk) for t in plan.sections[section_id]]
            for section_id in sorted(affected)
        },
        'items': [key.as_payload() for key in plan.updates],
    })
