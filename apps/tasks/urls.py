"""
URL configuration for tasks app.

Mounted under /api/.
"""

from django.urls import path
from . import views

app_name = 'tasks'

urlpatterns = [
    # Task list and CRUD
    path('tasks/', views.task_collection, name='task_collection'),
    path('tasks/<uuid:task_id>/', views.task_detail, name='task_detail'),

    # Comments
    path('tasks/<uuid:task_id>/comments/', views.comment_create, name='comment_create'),

    # Attachments
    path('tasks/<uuid:task_id>/attachments/', views.attachment_create, name='attachment_create'),
    path('attachments/<uuid:attachment_id>/', views.attachment_delete, name='attachment_delete'),
]
