"""
Service layer for tasks app.

All business logic for task operations is centralized here.

Services:
- create_task: Create a task at the end of a section
- update_task: Partial update, keeping completed_at in step with status
- delete_task: Delete a task with its comments and attachments
- add_comment: Add comment to task
- add_attachment / delete_attachment: Attachment metadata
"""

import logging

from django.conf import settings
from django.core.exceptions import ValidationError
from django.db import transaction

from apps.ordering.sort_order import next_sort_order
from .due_dates import parse_due_date
from .models import Task, Comment, Attachment

logger = logging.getLogger(__name__)


def _clean_title(title):
    if not title or not title.strip():
        raise ValidationError("Task title is required")
    return title.strip()


def _clean_text(value):
    if not value:
        return None
    return value.strip() or None


def get_task_queryset():
    """Tasks with section and project loaded."""
    return Task.objects.select_related('section__project')


def get_task_detail(task_id):
    """
    Task with section, project, the project's sections, comments and
    attachments.

    Raises:
        Task.DoesNotExist: If no such task
    """
    try:
        return get_task_queryset().prefetch_related(
            'section__project__sections', 'comments', 'attachments',
        ).get(pk=task_id)
    except Task.DoesNotExist:
        raise Task.DoesNotExist('Task not found')


def create_task(
    title: str,
    section=None,
    project=None,
    description: str = None,
    status: str = None,
    due_date=None,
    sort_order: int = None,
):
    """
    Central task creation function.

    Args:
        title: Task title (required)
        section: Section to create the task in
        project: Used when section is omitted; the task goes into the
            project's first section
        description: Optional description
        status: Initial status (default: not_started)
        due_date: date or YYYY-MM-DD string, optional
        sort_order: Explicit position; defaults to after the last task

    Returns:
        Created Task instance

    Raises:
        ValidationError: If required fields are missing or invalid
    """
    title = _clean_title(title)
    due_date = parse_due_date(due_date)

    if section is None:
        if project is None:
            raise ValidationError("Section is required")
        section = project.sections.order_by('sort_order', 'created_at').first()
        if section is None:
            raise ValidationError("Project has no sections")

    with transaction.atomic():
        if sort_order is None:
            sort_order = next_sort_order(section.tasks.only('sort_order'))

        task = Task(
            section=section,
            title=title,
            description=_clean_text(description),
            due_date=due_date,
            sort_order=sort_order,
        )
        task.set_status(status or Task.Status.NOT_STARTED)
        task.save()

    logger.info('Task created: %s (%s) in section %s', task.title, task.pk, section.pk)
    return task


def update_task(task, **changes):
    """
    Update task fields.

    Args:
        task: Task instance to update
        **changes: Any of title, description, status, due_date,
            completed_at, section, sort_order

    Status changes go through Task.set_status, so completed_at is stamped
    when a task is completed and cleared when it is reopened. An explicit
    completed_at is only accepted for a completed task.

    Returns:
        Updated Task instance
    """
    updated = []

    if 'title' in changes:
        task.title = _clean_title(changes['title'])
        updated.append('title')

    if 'description' in changes:
        task.description = _clean_text(changes['description'])
        updated.append('description')

    if 'due_date' in changes:
        task.due_date = parse_due_date(changes['due_date'])
        updated.append('due_date')

    if 'section' in changes:
        if changes['section'] is None:
            raise ValidationError("Section cannot be empty.")
        task.section = changes['section']
        updated.append('section')

    if 'sort_order' in changes:
        if changes['sort_order'] is None:
            raise ValidationError("Sort order cannot be empty.")
        task.sort_order = changes['sort_order']
        updated.append('sort_order')

    completed_at = changes.get('completed_at')
    if 'status' in changes:
        if not changes['status']:
            raise ValidationError("Status cannot be empty.")
        old_status = task.status
        task.set_status(changes['status'], completed_at=completed_at)
        updated += ['status', 'completed_at']
        if old_status != task.status:
            logger.info('Task %s status: %s -> %s', task.pk, old_status, task.status)
    elif 'completed_at' in changes:
        if completed_at and not task.is_completed:
            raise ValidationError("completedAt can only be set on a completed task.")
        if task.is_completed:
            task.completed_at = completed_at
            updated.append('completed_at')

    if updated:
        task.save(update_fields=updated + ['updated_at'])

    return task


def delete_task(task):
    """Delete a task; comments and attachments cascade."""
    task_id = task.pk
    task.delete()
    logger.info('Task deleted: %s', task_id)


def add_comment(task, body):
    """
    Add a comment to a task.

    Raises:
        ValidationError: If body is empty
    """
    if not body or not body.strip():
        raise ValidationError("Comment body is required")

    return Comment.objects.create(task=task, body=body.strip())


def add_attachment(task, file_name, file_url, file_size, mime_type):
    """
    Record an uploaded file against a task.

    Only metadata is stored; the bytes already live at file_url.

    Raises:
        ValidationError: If a field is missing or the file is too large
    """
    if not all([file_name, file_url, mime_type]) or file_size is None:
        raise ValidationError("Missing required attachment fields")

    if file_size > settings.MAX_ATTACHMENT_SIZE:
        max_mb = settings.MAX_ATTACHMENT_SIZE // (1024 * 1024)
        raise ValidationError(f"File size cannot exceed {max_mb} MB.")

    attachment = Attachment.objects.create(
        task=task,
        file_name=file_name,
        file_url=file_url,
        file_size=file_size,
        mime_type=mime_type,
    )
    logger.info('Attachment added to task %s: %s (%s)', task.pk, file_name, attachment.file_size_display)
    return attachment


def delete_attachment(attachment):
    """Delete attachment metadata. Removing the stored file is the client's job."""
    attachment_id = attachment.pk
    attachment.delete()
    logger.info('Attachment deleted: %s', attachment_id)
