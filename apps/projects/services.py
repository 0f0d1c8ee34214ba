"""
Service layer for projects app.

All business logic for project and section operations is centralized here.

Services:
- create_project: Create a project with its default sections
- update_project: Partial update of project fields
- delete_project: Delete a project and everything in it
- create_section: Append (or insert at an explicit position) a section
- update_section: Partial update of section fields
- delete_section: Delete a section, reassigning its tasks if needed
"""

import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction
from django.db.models import Count, Q

from apps.ordering.sort_order import next_sort_order
from apps.tasks.models import Task
from .models import Project, Section

logger = logging.getLogger(__name__)

OPEN_STATUSES = [value for value in Task.Status.values if value != Task.Status.COMPLETED]


class ReassignRequired(ValidationError):
    """A section with tasks was deleted without a reassignment target."""

    def __init__(self, task_count):
        super().__init__("Section has tasks. Provide reassignTo parameter", code="reassign_required")
        self.task_count = task_count


def _clean_name(name, label):
    if not name or not name.strip():
        raise ValidationError(f"{label} name is required")
    return name.strip()


def _clean_text(value):
    if not value:
        return None
    return value.strip() or None


def get_active_projects():
    """
    Non-archived projects in display order, annotated with open_task_count
    (tasks that are not completed).
    """
    return Project.objects.filter(is_archived=False).annotate(
        open_task_count=Count(
            'sections__tasks',
            filter=Q(sections__tasks__status__in=OPEN_STATUSES),
        )
    ).order_by('sort_order', 'created_at')


def get_project_board(project_id):
    """
    Project with sections and their tasks, each ordered by sort_order.

    Raises:
        Project.DoesNotExist: If no such project
    """
    try:
        return Project.objects.prefetch_related('sections__tasks').get(pk=project_id)
    except Project.DoesNotExist:
        raise Project.DoesNotExist('Project not found')


def create_project(name, description=None, image_url=None):
    """
    Create a project appended after the existing ones.

    The project starts with the default sections from
    settings.DEFAULT_SECTION_NAMES (To Do, In Progress, Done).

    Returns:
        Created Project instance
    """
    name = _clean_name(name, 'Project')

    with transaction.atomic():
        project = Project.objects.create(
            name=name,
            description=_clean_text(description),
            image_url=image_url or None,
            sort_order=next_sort_order(Project.objects.only('sort_order')),
        )
        Section.objects.bulk_create([
            Section(project=project, name=section_name, sort_order=position)
            for position, section_name in enumerate(settings.DEFAULT_SECTION_NAMES)
        ])

    logger.info('Project created: %s (%s)', project.name, project.pk)
    return project


def update_project(project, **changes):
    """
    Update project fields.

    Args:
        project: Project instance
        **changes: Any of name, description, image_url, sort_order, is_archived

    Returns:
        Updated Project instance
    """
    editable_fields = ['name', 'description', 'image_url', 'sort_order', 'is_archived']
    updated = []

    for field in editable_fields:
        if field not in changes:
            continue
        value = changes[field]

        if field == 'name':
            value = _clean_name(value, 'Project')
        elif field == 'description':
            value = _clean_text(value)
        elif field == 'image_url':
            value = value or None
        elif field in ('sort_order', 'is_archived') and value is None:
            raise ValidationError(f"{field.replace('_', ' ').capitalize()} cannot be empty.")

        setattr(project, field, value)
        updated.append(field)

    if updated:
        project.save(update_fields=updated + ['updated_at'])

    return project


def delete_project(project):
    """Delete a project; sections, tasks, comments and attachments cascade."""
    project_id = project.pk
    project.delete()
    logger.info('Project deleted: %s', project_id)


def create_section(project, name, sort_order=None):
    """
    Add a section to a project.

    Args:
        project: Owning Project
        name: Section name (required)
        sort_order: Explicit position; defaults to after the last section

    Returns:
        Created Section instance
    """
    name = _clean_name(name, 'Section')

    if sort_order is None:
        sort_order = next_sort_order(project.sections.only('sort_order'))

    section = Section.objects.create(project=project, name=name, sort_order=sort_order)
    logger.info('Section created: %s in project %s', section.name, project.pk)
    return section


def update_section(section, **changes):
    """
    Update section fields.

    Args:
        section: Section instance
        **changes: Any of name, sort_order
    """
    updated = []

    if 'name' in changes:
        section.name = _clean_name(changes['name'], 'Section')
        updated.append('name')

    if 'sort_order' in changes:
        if changes['sort_order'] is None:
            raise ValidationError("Sort order cannot be empty.")
        section.sort_order = changes['sort_order']
        updated.append('sort_order')

    if updated:
        section.save(update_fields=updated + ['updated_at'])

    return section


def delete_section(section, reassign_to=None):
    """
    Delete a section.

    Rules:
    - The last section of a project cannot be deleted
    - A section that still has tasks needs a reassignment target in the
      same project; its tasks move there (keeping their sort_order)

    Args:
        section: Section to delete
        reassign_to: Section receiving the tasks, if any

    Raises:
        ValidationError: If a rule above is violated
    """
    with transaction.atomic():
        if Section.objects.filter(project_id=section.project_id).count() <= 1:
            raise ValidationError("Cannot delete the last section in a project")

        task_count = section.tasks.count()
        if task_count:
            if reassign_to is None:
                raise ReassignRequired(task_count)
            if reassign_to.pk == section.pk:
                raise ValidationError("Cannot reassign tasks to the section being deleted")
            if reassign_to.project_id != section.project_id:
                raise ValidationError("Tasks can only be reassigned within the same project")

            section.tasks.update(section=reassign_to)
            logger.info('Moved %s tasks from section %s to %s', task_count, section.pk, reassign_to.pk)

        section.delete()

    logger.info('Section deleted: %s', section.name)
    return task_count
