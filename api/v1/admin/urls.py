"""
URL configuration for admin API endpoints.
"""

from django.urls import path

from api.v1.admin import views

app_name = "admin_api"

urlpatterns = [
    path("stats", views.StatisticsView.as_view(), name="statistics"),
]
