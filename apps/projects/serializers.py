"""
JSON representations of projects and sections.

Keys are camelCase and ids are strings.
"""

from apps.core.http import isoformat_or_none
from apps.tasks.serializers import serialize_task


def serialize_section(section, tasks=None):
    data = {
        'id': str(section.id),
        'projectId': str(section.project_id),
        'name': section.name,
        'sortOrder': section.sort_order,
        'createdAt': isoformat_or_none(section.created_at),
        'updatedAt': isoformat_or_none(section.updated_at),
    }
    if tasks is not None:
        data['tasks'] = [serialize_task(task) for task in tasks]
    return data


def serialize_project(project):
    data = {
        'id': str(project.id),
        'name': project.name,
        'description': project.description,
        'imageUrl': project.image_url,
        'sortOrder': project.sort_order,
        'isArchived': project.is_archived,
        'createdAt': isoformat_or_none(project.created_at),
        'updatedAt': isoformat_or_none(project.updated_at),
    }
    open_task_count = getattr(project, 'open_task_count', None)
    if open_task_count is not None:
        data['openTaskCount'] = open_task_count
    return data


def serialize_board(project):
    """
    Project with its sections in order, each carrying its ordered tasks.

    Expects sections__tasks to be prefetched.
    """
    data = serialize_project(project)
    data['sections'] = [
        serialize_section(section, tasks=section.tasks.all())
        for section in project.sections.all()
    ]
    return data
