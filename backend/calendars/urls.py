from django.urls import path
from rest_framework.routers import DefaultRouter
from .views import ExternalCalendarViewSet, ExportUrlsView

router = DefaultRouter()
router.register(r"external", ExternalCalendarViewSet, basename="external-calendar")

urlpatterns = [
    path("export-urls/", ExportUrlsView.as_view(), name="calendar-export-urls"),
    *router.urls,
]
