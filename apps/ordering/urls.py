"""
URL configuration for ordering app.

Mounted under /api/.
"""

from django.urls import path
from . import views

app_name = 'ordering'

urlpatterns = [
    path('reorder/', views.reorder, name='reorder'),
    path('tasks/<uuid:task_id>/move/', views.task_move, name='task_move'),
]
