"""
Forms for projects app.

Includes:
- ProjectForm: Create and edit projects
- SectionForm: Create and edit sections
"""

from django import forms

from apps.core.forms import PayloadForm
from apps.ordering.forms import SortOrderField


class ProjectForm(PayloadForm):
    """
    Project payload.

    On create only name is required; a PATCH may send any subset.
    """

    aliases = {
        'imageUrl': 'image_url',
        'sortOrder': 'sort_order',
        'isArchived': 'is_archived',
    }

    name = forms.CharField(
        max_length=255,
        error_messages={'required': 'Project name is required'},
    )
    description = forms.CharField(required=False)
    image_url = forms.URLField(required=False, max_length=1024)
    sort_order = SortOrderField(required=False)
    is_archived = forms.NullBooleanField(required=False)


class SectionForm(PayloadForm):
    """Section payload."""

    aliases = {'sortOrder': 'sort_order'}

    name = forms.CharField(
        max_length=255,
        error_messages={'required': 'Section name is required'},
    )
    sort_order = SortOrderField(required=False)
