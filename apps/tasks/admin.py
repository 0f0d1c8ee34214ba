"""
Admin configuration for tasks app.
"""

from django.contrib import admin
from .models import Task, Comment, Attachment


class CommentInline(admin.TabularInline):
    """Inline admin for comments on task detail."""
    model = Comment
    extra = 0
    readonly_fields = ('body', 'created_at')
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


class AttachmentInline(admin.TabularInline):
    """Inline admin for attachments on task detail."""
    model = Attachment
    extra = 0
    readonly_fields = ('file_name', 'file_url', 'file_size', 'mime_type', 'created_at')
    can_delete = True


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    """Admin for Task model."""

    list_display = ('title', 'section', 'project_name', 'status', 'due_date', 'sort_order', 'created_at')
    list_filter = ('status', 'section__project', 'due_date')
    search_fields = ('title', 'description')
    ordering = ('section__project__name', 'sort_order')
    date_hierarchy = 'created_at'
    readonly_fields = ('id', 'created_at', 'updated_at', 'completed_at')
    list_select_related = ('section__project',)
    inlines = [CommentInline, AttachmentInline]

    @admin.display(description='Project', ordering='section__project__name')
    def project_name(self, obj):
        return obj.section.project.name


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    """Admin for Comment model."""

    list_display = ('task', 'body_preview', 'created_at')
    search_fields = ('body', 'task__title')
    ordering = ('-created_at',)

    @admin.display(description='Body')
    def body_preview(self, obj):
        return obj.body[:50] + '...' if len(obj.body) > 50 else obj.body


@admin.register(Attachment)
class AttachmentAdmin(admin.ModelAdmin):
    """Admin for Attachment model."""

    list_display = ('file_name', 'task', 'file_size_display', 'mime_type', 'created_at')
    search_fields = ('file_name', 'task__title')
    ordering = ('-created_at',)
