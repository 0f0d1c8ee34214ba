"""
Forms for tasks app.

Includes:
- DueDateField: strict YYYY-MM-DD calendar date
- TaskForm: Create and edit tasks
- CommentForm: Add comments to tasks
- AttachmentForm: Attachment metadata
"""

from django import forms

from apps.core.forms import PayloadForm
from apps.ordering.forms import SortOrderField
from .due_dates import parse_due_date
from .models import Task


class DueDateField(forms.Field):
    """
    Calendar date field.

    Only the canonical YYYY-MM-DD form (or null) is accepted; no time,
    no timezone, no locale formats.
    """

    def to_python(self, value):
        return parse_due_date(value)


class TaskForm(PayloadForm):
    """
    Task payload.

    On create only title is required (the view decides whether sectionId
    is). A PATCH may send any subset; dueDate: null clears the due date.
    """

    aliases = {
        'dueDate': 'due_date',
        'sectionId': 'section_id',
        'sortOrder': 'sort_order',
        'completedAt': 'completed_at',
    }

    title = forms.CharField(
        max_length=255,
        error_messages={'required': 'Task title is required'},
    )
    description = forms.CharField(required=False)
    status = forms.ChoiceField(choices=Task.Status.choices, required=False)
    due_date = DueDateField(required=False)
    section_id = forms.UUIDField(required=False)
    sort_order = SortOrderField(required=False)
    completed_at = forms.DateTimeField(required=False)


class CommentForm(PayloadForm):
    """Form for adding comments."""

    body = forms.CharField(error_messages={'required': 'Comment body is required'})


class AttachmentForm(PayloadForm):
    """
    Attachment metadata. The file itself is already in object storage;
    the size limit is enforced by the service.
    """

    aliases = {
        'fileName': 'file_name',
        'fileUrl': 'file_url',
        'fileSize': 'file_size',
        'mimeType': 'mime_type',
    }

    file_name = forms.CharField(max_length=255)
    file_url = forms.URLField(max_length=1024)
    file_size = forms.IntegerField(min_value=0)
    mime_type = forms.CharField(max_length=255)
