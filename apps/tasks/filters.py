"""
Task filters using django-filter.

Provides filtering for the task list endpoint:
- Status filter (multi-select)
- Section and project
- Due date range (dueFrom / dueTo)
- Due bucket shortcut (overdue, due-today, due-tomorrow, upcoming, no-date)
- Search (title, description)
"""

from datetime import timedelta

import django_filters
from django.db.models import Q

from .due_dates import DueBucket, today
from .models import Task


class TaskFilter(django_filters.FilterSet):
    """
    Task list filter.

    Usage in views:
        filterset = TaskFilter(request.GET, queryset=queryset)
        tasks = filterset.qs
    """

    search = django_filters.CharFilter(method='filter_search', label='Search')

    status = django_filters.MultipleChoiceFilter(
        choices=Task.Status.choices,
        label='Status'
    )

    section = django_filters.UUIDFilter(field_name='section_id', label='Section')
    project = django_filters.UUIDFilter(field_name='section__project_id', label='Project')

    # Custom date range
    dueFrom = django_filters.DateFilter(
        field_name='due_date',
        lookup_expr='gte',
        input_formats=['%Y-%m-%d'],
        label='Due From'
    )
    dueTo = django_filters.DateFilter(
        field_name='due_date',
        lookup_expr='lte',
        input_formats=['%Y-%m-%d'],
        label='Due To'
    )

    # Same buckets as My Tasks, evaluated in the database
    due = django_filters.ChoiceFilter(
        method='filter_due',
        choices=DueBucket.choices,
        label='Due'
    )

    class Meta:
        model = Task
        fields = ['status']

    def filter_search(self, queryset, name, value):
        """Case-insensitive partial match on title and description."""
        if not value:
            return queryset

        return queryset.filter(
            Q(title__icontains=value) |
            Q(description__icontains=value)
        )

    def filter_due(self, queryset, name, value):
        if not value:
            return queryset

        current = today()
        tomorrow = current + timedelta(days=1)

        if value == DueBucket.OVERDUE:
            return queryset.filter(due_date__lt=current)
        elif value == DueBucket.DUE_TODAY:
            return queryset.filter(due_date=current)
        elif value == DueBucket.DUE_TOMORROW:
            return queryset.filter(due_date=tomorrow)
        elif value == DueBucket.UPCOMING:
            return queryset.filter(due_date__gt=tomorrow)
        elif value == DueBucket.NO_DATE:
            return queryset.filter(due_date__isnull=True)

        return queryset
