"""
JSON representations of tasks, comments and attachments.

Keys are camelCase, ids are strings, due dates are YYYY-MM-DD and
timestamps ISO-8601.
"""

from apps.core.http import isoformat_or_none


def serialize_task(task, **extra):
    data = {
        'id': str(task.id),
        'sectionId': str(task.section_id),
        'title': task.title,
        'description': task.description,
        'status': task.status,
        'dueDate': isoformat_or_none(task.due_date),
        'sortOrder': task.sort_order,
        'createdAt': isoformat_or_none(task.created_at),
        'updatedAt': isoformat_or_none(task.updated_at),
        'completedAt': isoformat_or_none(task.completed_at),
    }
    data.update(extra)
    return data


def serialize_task_with_project(task, **extra):
    """Task plus the name and id of its section and project (for cross-project views)."""
    section = task.section
    return serialize_task(
        task,
        sectionName=section.name,
        projectId=str(section.project_id),
        projectName=section.project.name,
        **extra
    )


def serialize_comment(comment):
    return {
        'id': str(comment.id),
        'taskId': str(comment.task_id),
        'body': comment.body,
        'createdAt': isoformat_or_none(comment.created_at),
    }


def serialize_attachment(attachment):
    return {
        'id': str(attachment.id),
        'taskId': str(attachment.task_id),
        'fileName': attachment.file_name,
        'fileUrl': attachment.file_url,
        'fileSize': attachment.file_size,
        'mimeType': attachment.mime_type,
        'createdAt': isoformat_or_none(attachment.created_at),
    }


def serialize_task_detail(task):
    """
    Full task view: section, project (with its sections, for the
    "move to section" picker), comments and attachments.
    """
    section = task.section
    project = section.project
    return serialize_task(
        task,
        section={'id': str(section.id), 'name': section.name},
        project={
            'id': str(project.id),
            'name': project.name,
            'sections': [
                {'id': str(s.id), 'name': s.name, 'sortOrder': s.sort_order}
                for s in project.sections.all()
            ],
        },
        comments=[serialize_comment(c) for c in task.comments.all()],
        attachments=[serialize_attachment(a) for a in task.attachments.all()],
    )
