"""
URL configuration for projects app.

Mounted under /api/.
"""

from django.urls import path
from . import views

app_name = 'projects'

urlpatterns = [
    # Projects
    path('projects/', views.project_collection, name='project_collection'),
    path('projects/<uuid:project_id>/', views.project_detail, name='project_detail'),

    # Sections
    path('projects/<uuid:project_id>/sections/', views.section_create, name='section_create'),
    path('sections/<uuid:section_id>/', views.section_detail, name='section_detail'),

    # Tasks created inside a project
    path('projects/<uuid:project_id>/tasks/', views.project_task_create, name='project_task_create'),
]
