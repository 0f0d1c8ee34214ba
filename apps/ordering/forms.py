"""
Forms for ordering app.

Includes:
- ReorderForm: batch reorder body {"type": ..., "items": [{"id", "sortOrder"}]}
- MoveTaskForm: drag-end body {"overId": ...}
- SortOrderField: sortOrder bounded to the column range
"""

import uuid

from django import forms
from django.core.exceptions import ValidationError
from django.db import models

from apps.core.forms import PayloadForm
from .sort_order import SORT_ORDER_MAX, SORT_ORDER_MIN, SortKey


class EntityType(models.TextChoices):
    PROJECTS = 'projects', 'Projects'
    SECTIONS = 'sections', 'Sections'
    TASKS = 'tasks', 'Tasks'


class SortOrderField(forms.IntegerField):
    """Integer that fits the sort_order column."""

    def __init__(self, **kwargs):
        kwargs.setdefault('min_value', SORT_ORDER_MIN)
        kwargs.setdefault('max_value', SORT_ORDER_MAX)
        super().__init__(**kwargs)


class SortKeyListField(forms.Field):
    """
    A non-empty JSON list of {"id": <uuid>, "sortOrder": <integer>}.

    Cleans to a list of SortKey with canonical id strings. Ids must be
    unique within the list.
    """

    default_error_messages = {
        'not_a_list': 'items must be a list.',
        'malformed': 'Each item needs an id and an integer sortOrder.',
        'duplicate': 'Duplicate id in items: %(id)s.',
    }

    def to_python(self, value):
        if value in self.empty_values:
            return []
        if not isinstance(value, list):
            raise ValidationError(self.error_messages['not_a_list'], code='not_a_list')

        keys = []
        seen = set()
        for item in value:
            key = self._to_sort_key(item)
            if key.id in seen:
                raise ValidationError(
                    self.error_messages['duplicate'], code='duplicate', params={'id': key.id},
                )
            seen.add(key.id)
            keys.append(key)
        return keys

    def _to_sort_key(self, item):
        malformed = ValidationError(self.error_messages['malformed'], code='malformed')
        if not isinstance(item, dict):
            raise malformed

        sort_order = item.get('sortOrder')
        if isinstance(sort_order, bool) or not isinstance(sort_order, (int, float)):
            raise malformed
        if isinstance(sort_order, float) and not sort_order.is_integer():
            raise malformed
        if not SORT_ORDER_MIN <= sort_order <= SORT_ORDER_MAX:
            raise malformed

        try:
            item_id = uuid.UUID(str(item.get('id')))
        except ValueError:
            raise malformed

        return SortKey(id=str(item_id), sort_order=int(sort_order))


class ReorderForm(PayloadForm):
    """Validated before anything is persisted."""

    type = forms.ChoiceField(
        choices=EntityType.choices,
        error_messages={
            'required': 'Missing type',
            'invalid_choice': 'Invalid type: %(value)s',
        },
    )
    items = SortKeyListField(error_messages={'required': 'Missing items'})


class MoveTaskForm(PayloadForm):
    """overId is either a task id (drop on a card) or a section id (drop on a column)."""

    aliases = {'overId': 'over_id'}

    over_id = forms.UUIDField(error_messages={'required': 'Missing overId'})
