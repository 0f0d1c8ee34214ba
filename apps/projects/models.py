"""
Project and section models.

Models:
- Project: Top-level container, ordered globally by sort_order
- Section: Ordered column within a project (a project always has at least one)
"""

import uuid

from django.db import models


class Project(models.Model):
    """
    A project groups sections and their tasks.

    Archived projects are hidden from the project list and the status
    report but keep their data.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True, null=True)
    image_url = models.URLField(
        max_length=1024,
        blank=True,
        null=True,
        help_text='Public URL of the cover image in object storage'
    )
    sort_order = models.IntegerField(default=0, db_index=True)
    is_archived = models.BooleanField(default=False, db_index=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'project'
        verbose_name_plural = 'projects'
        ordering = ['sort_order', 'created_at']

    def __str__(self):
        return self.name


class Section(models.Model):
    """
    An ordered column of tasks inside a project.

    Default sections for a new project: To Do, In Progress, Done.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    project = models.ForeignKey(
        Project,
        on_delete=models.CASCADE,
        related_name='sections',
    )
    name = models.CharField(max_length=255)
    sort_order = models.IntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = 'section'
        verbose_name_plural = 'sections'
        ordering = ['sort_order', 'created_at']
        indexes = [
            models.Index(fields=['project', 'sort_order']),
        ]

    def __str__(self):
        return f"{self.project.name} / {self.name}"
