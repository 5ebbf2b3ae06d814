"""
URL configuration for the rental operations backend.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import (
    SpectacularAPIView,
    SpectacularSwaggerView,
    SpectacularRedocView,
)

urlpatterns = [
    path("admin/", admin.site.urls),
    # API Documentation
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/docs/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
    path("api/redoc/", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    # Auth & account endpoints
    path("api/", include("accounts.urls")),
    path("api/unit-groups/", include("unit_groups.urls")),
    path("api/units/", include("units.urls")),
    path("api/pricing/", include("pricing.urls")),
    path("api/availability/", include("availability.urls")),
    path("api/bookings/", include("bookings.urls")),
    path("api/", include("contacts.urls")),
    path("api/dashboard/", include("dashboard.urls")),
    path("api/campaigns/", include("campaigns.urls")),
    path("api/calendars/", include("calendars.urls")),
]
