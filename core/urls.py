"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("", views.chart_list, name="chart_list"),
    path("charts/<int:chart_id>/stats/", views.chart_stats, name="chart_stats"),
    path("api/charts/<int:chart_id>/stats/", views.chart_stats_api, name="chart_stats_api"),
]
