"""
URL configuration for reports app.

Mounted under /api/.
"""

from django.urls import path
from . import views

app_name = 'reports'

urlpatterns = [
    path('my-tasks/', views.my_tasks, name='my_tasks'),
    path('report/', views.status_report, name='status_report'),
    path('today/', views.day_status, name='day_status'),
]
