"""
Admin configuration for projects app.
"""

from django.contrib import admin
from .models import Project, Section


class SectionInline(admin.TabularInline):
    """Inline admin for sections on project detail."""
    model = Section
    extra = 0
    fields = ('name', 'sort_order')
    ordering = ('sort_order',)


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    """Admin for Project model."""

    list_display = ('name', 'sort_order', 'is_archived', 'section_count', 'created_at')
    list_filter = ('is_archived', 'created_at')
    search_fields = ('name', 'description')
    ordering = ('sort_order', 'created_at')
    readonly_fields = ('id', 'created_at', 'updated_at')
    inlines = [SectionInline]

    @admin.display(description='Sections')
    def section_count(self, obj):
        return obj.sections.count()


@admin.register(Section)
class SectionAdmin(admin.ModelAdmin):
    """Admin for Section model."""

    list_display = ('name', 'project', 'sort_order', 'created_at')
    list_filter = ('project',)
    search_fields = ('name', 'project__name')
    ordering = ('project__name', 'sort_order')
    readonly_fields = ('id', 'created_at', 'updated_at')
