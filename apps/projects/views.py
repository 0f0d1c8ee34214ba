"""
Views for projects app.

Includes:
- Project list and create
- Project board (sections with their tasks), update, delete
- Section create, update, delete (with task reassignment)
- Task create inside a project
"""

from django.http import HttpResponse, JsonResponse

from apps.core.http import api_view, get_or_not_found, json_error, parse_json_body
from apps.tasks.forms import TaskForm
from apps.tasks.serializers import serialize_task
from apps.tasks.services import create_task
from .forms import ProjectForm, SectionForm
from .models import Project, Section
from .serializers import serialize_board, serialize_project, serialize_section
from .services import (
    get_active_projects, get_project_board, create_project, update_project,
    delete_project, create_section, update_section, delete_section,
    ReassignRequired,
)


# =============================================================================
# Projects
# =============================================================================

@api_view('GET', 'POST')
def project_collection(request):
    """
    GET: active projects in display order.
    POST: create a project (with its default sections).
    """
    if request.method == 'GET':
        projects = [serialize_project(project) for project in get_active_projects()]
        return JsonResponse(projects, safe=False)

    data = ProjectForm.from_payload(parse_json_body(request)).validated()
    project = create_project(
        name=data['name'],
        description=data.get('description'),
        image_url=data.get('image_url'),
    )
    return JsonResponse(serialize_board(get_project_board(project.pk)), status=201)


@api_view('GET', 'PATCH', 'DELETE')
def project_detail(request, project_id):
    if request.method == 'GET':
        return JsonResponse(serialize_board(get_project_board(project_id)))

    project = get_or_not_found(Project.objects, 'Project', pk=project_id)

    if request.method == 'DELETE':
        delete_project(project)
        return HttpResponse(status=204)

    changes = ProjectForm.from_payload(parse_json_body(request), partial=True).changes()
    project = update_project(project, **changes)
    return JsonResponse(serialize_project(project))


# =============================================================================
# Sections
# =============================================================================

@api_view('POST')
def section_create(request, project_id):
    project = get_or_not_found(Project.objects, 'Project', pk=project_id)
    data = SectionForm.from_payload(parse_json_body(request)).validated()
    section = create_section(project, data['name'], sort_order=data.get('sort_order'))
    return JsonResponse(serialize_section(section, tasks=[]), status=201)


@api_view('PATCH', 'DELETE')
def section_detail(request, section_id):
    """
    PATCH: rename or reposition a section.
    DELETE: remove a section. If it still has tasks, ?reassignTo=<section id>
    names the section (same project) that receives them.
    """
    section = get_or_not_found(Section.objects, 'Section', pk=section_id)

    if request.method == 'PATCH':
        changes = SectionForm.from_payload(parse_json_body(request), partial=True).changes()
        section = update_section(section, **changes)
        return JsonResponse(serialize_section(section))

    reassign_to = None
    reassign_to_id = request.GET.get('reassignTo')
    if reassign_to_id:
        reassign_to = get_or_not_found(Section.objects, 'Target section', pk=reassign_to_id)

    try:
        delete_section(section, reassign_to=reassign_to)
    except ReassignRequired as e:
        return json_error(e.message, 400, taskCount=e.task_count)

    return HttpResponse(status=204)


# =============================================================================
# Tasks
# =============================================================================

@api_view('POST')
def project_task_create(request, project_id):
    """Create a task in sectionId, or in the project's first section."""
    project = get_or_not_found(Project.objects, 'Project', pk=project_id)
    data = TaskForm.from_payload(parse_json_body(request)).validated()

    section = None
    if data.get('section_id'):
        section = get_or_not_found(
            project.sections, 'Section', pk=data['section_id'],
        )

    task = create_task(
        title=data['title'],
        section=section,
        project=project,
        description=data.get('description'),
        status=data.get('status'),
        due_date=data.get('due_date'),
        sort_order=data.get('sort_order'),
    )
    return JsonResponse(serialize_task(task), status=201)
