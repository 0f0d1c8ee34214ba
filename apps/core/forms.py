"""
Form base class for JSON payloads.

API bodies use camelCase keys ('dueDate', 'sortOrder'); forms use the
model's field names. PayloadForm maps one onto the other and supports
partial (PATCH) validation, where every field becomes optional and only
keys present in the body are reported as changes.
"""

from django import forms
from django.core.exceptions import ValidationError


class PayloadForm(forms.Form):
    """
    Usage:
        form = TaskForm.from_payload(body, partial=True)
        changes = form.changes()      # raises ValidationError if invalid
    """

    # wire key -> field name
    aliases = {}

    def __init__(self, *args, partial=False, **kwargs):
        super().__init__(*args, **kwargs)
        self.partial = partial
        if partial:
            for field in self.fields.values():
                field.required = False

    @classmethod
    def from_payload(cls, payload, partial=False, **kwargs):
        data = {cls.aliases.get(key, key): value for key, value in payload.items()}
        return cls(data, partial=partial, **kwargs)

    def validated(self):
        """Return cleaned_data or raise the form's errors as a ValidationError."""
        if not self.is_valid():
            raise ValidationError(self.errors.as_data())
        return self.cleaned_data

    def changes(self):
        """
        Cleaned values for the fields actually present in the payload.

        An omitted key means "leave unchanged"; an explicit null means "clear".
        """
        cleaned = self.validated()
        return {name: cleaned[name] for name in self.fields if name in self.data}
