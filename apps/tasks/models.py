"""
Task management models.

Models:
- Task: Ordered item inside a section, with status and optional due date
- Comment: Task comments (chronological)
- Attachment: File metadata for task attachments (bytes live in object storage)
"""

import uuid

from django.db import models
from django.utils import timezone


class Task(models.Model):
    """
    Main Task model.

    Status values: not_started, in_progress, on_hold, completed.
    completed_at is set while the task is completed and cleared otherwise.

    due_date is a calendar date with no time component; it is compared as
    a date and never converted between timezones.
    """

    class Status(models.TextChoices):
        NOT_STARTED = 'not_started', 'Not Started'
        IN_PROGRESS = 'in_progress', 'In Progress'
        ON_HOLD = 'on_hold', 'On Hold'
        COMPLETED = 'completed', 'Completed'

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    section = models.ForeignKey(
        'projects.Section',
        on_delete=models.CASCADE,
        related_name='tasks',
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    status = models.CharField(
        max_length=15,
        choices=Status.choices,
        default=Status.NOT_STARTED,
        db_index=True,
    )
    due_date = models.DateField(
        null=True,
        blank=True,
        db_index=True,
        help_text='Calendar date (YYYY-MM-DD) the task is due'
    )
    sort_order = models.IntegerField(default=0)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        verbose_name = 'task'
        verbose_name_plural = 'tasks'
        ordering = ['sort_order', 'created_at']
        indexes = [
            models.Index(fields=['section', 'sort_order']),
            models.Index(fields=['status', 'due_date']),
        ]

    def __str__(self):
        return self.title

    @property
    def is_completed(self):
        return self.status == self.Status.COMPLETED

    @property
    def project(self):
        return self.section.project

    def set_status(self, new_status, completed_at=None):
        """
        Change status and keep completed_at in step.

        Entering completed stamps completed_at (now unless given);
        leaving completed clears it.
        """
        self.status = new_status
        if new_status == self.Status.COMPLETED:
            self.completed_at = completed_at or self.completed_at or timezone.now()
        else:
            self.completed_at = None


class Comment(models.Model):
    """
    Task comment model.

    Comments are immutable and displayed chronologically.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    task = models.ForeignKey(
        Task,
        on_delete=models.CASCADE,
        related_name='comments',
    )
    body = models.TextField()
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'comment'
        verbose_name_plural = 'comments'
        ordering = ['created_at']  # Chronological order

    def __str__(self):
        return f"Comment on {self.task.title}"


class Attachment(models.Model):
    """
    Task attachment model.

    Only metadata is stored; the file itself is uploaded to object storage
    by the client and referenced by file_url.

    Rules:
    - Any number of attachments per task
    - Maximum file size: settings.MAX_ATTACHMENT_SIZE (10 MB by default)
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    task = models.ForeignKey(
        Task,
        on_delete=models.CASCADE,
        related_name='attachments',
    )
    file_name = models.CharField(
        max_length=255,
        help_text='Original filename'
    )
    file_url = models.URLField(max_length=1024)
    file_size = models.PositiveIntegerField(
        help_text='File size in bytes'
    )
    mime_type = models.CharField(max_length=255)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = 'attachment'
        verbose_name_plural = 'attachments'
        ordering = ['created_at']

    def __str__(self):
        return f"Attachment: {self.file_name} for {self.task.title}"

    @property
    def file_size_display(self):
        """Return human-readable file size."""
        if self.file_size < 1024:
            return f"{self.file_size} B"
        elif self.file_size < 1024 * 1024:
            return f"{self.file_size / 1024:.1f} KB"
        else:
            return f"{self.file_size / (1024 * 1024):.1f} MB"
