"""
Views for tasks app.

Includes:
- Task list with filtering
- Task CRUD operations
- Comments and attachments
"""

from django.core.exceptions import ValidationError
from django.http import HttpResponse, JsonResponse

from apps.core.http import api_view, get_or_not_found, parse_json_body
from apps.projects.models import Section
from .filters import TaskFilter
from .forms import TaskForm, CommentForm, AttachmentForm
from .models import Task, Attachment
from .serializers import (
    serialize_task, serialize_task_with_project, serialize_task_detail,
    serialize_comment, serialize_attachment,
)
from .services import (
    get_task_queryset, get_task_detail, create_task, update_task, delete_task,
    add_comment, add_attachment, delete_attachment,
)


# =============================================================================
# Tasks
# =============================================================================

@api_view('GET', 'POST')
def task_collection(request):
    """
    GET: tasks matching the query string filters (see TaskFilter).
    POST: create a task in sectionId.
    """
    if request.method == 'GET':
        filterset = TaskFilter(request.GET, queryset=get_task_queryset())
        if not filterset.is_valid():
            raise ValidationError(filterset.errors.as_data())
        tasks = [serialize_task_with_project(task) for task in filterset.qs]
        return JsonResponse(tasks, safe=False)

    data = TaskForm.from_payload(parse_json_body(request)).validated()
    if not data.get('section_id'):
        raise ValidationError({'sectionId': ValidationError('Section is required')})

    section = get_or_not_found(Section.objects, 'Section', pk=data['section_id'])
    task = create_task(
        title=data['title'],
        section=section,
        description=data.get('description'),
        status=data.get('status'),
        due_date=data.get('due_date'),
        sort_order=data.get('sort_order'),
    )
    return JsonResponse(serialize_task(task), status=201)


@api_view('GET', 'PATCH', 'DELETE')
def task_detail(request, task_id):
    if request.method == 'GET':
        return JsonResponse(serialize_task_detail(get_task_detail(task_id)))

    task = get_or_not_found(Task.objects, 'Task', pk=task_id)

    if request.method == 'DELETE':
        delete_task(task)
        return JsonResponse({'success': True})

    changes = TaskForm.from_payload(parse_json_body(request), partial=True).changes()

    if 'section_id' in changes:
        section_id = changes.pop('section_id')
        changes['section'] = (
            get_or_not_found(Section.objects, 'Section', pk=section_id)
            if section_id else None
        )

    task = update_task(task, **changes)
    return JsonResponse(serialize_task(task))


# =============================================================================
# Comments and attachments
# =============================================================================

@api_view('POST')
def comment_create(request, task_id):
    task = get_or_not_found(Task.objects, 'Task', pk=task_id)
    data = CommentForm.from_payload(parse_json_body(request)).validated()
    comment = add_comment(task, data['body'])
    return JsonResponse(serialize_comment(comment), status=201)


@api_view('POST')
def attachment_create(request, task_id):
    task = get_or_not_found(Task.objects, 'Task', pk=task_id)
    data = AttachmentForm.from_payload(parse_json_body(request)).validated()
    attachment = add_attachment(task, **data)
    return JsonResponse(serialize_attachment(attachment), status=201)


@api_view('DELETE')
def attachment_delete(request, attachment_id):
    attachment = get_or_not_found(Attachment.objects, 'Attachment', pk=attachment_id)
    delete_attachment(attachment)
    return HttpResponse(status=204)
