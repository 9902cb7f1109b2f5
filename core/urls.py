"""URL configuration for core views."""

from __future__ import annotations

from django.urls import path

from core import views

app_name = "core"

urlpatterns = [
    path("api/chart-spec/", views.chart_spec, name="chart_spec"),
    path("api/interaction/", views.interaction, name="interaction"),
    path("api/sparks/", views.sparks, name="sparks"),
]
