from django.urls import path
from .views import (
    UnitGroupListCreateView,
    UnitGroupRetrieveUpdateDestroyView,
    WebsiteSettingsView,
    AiAgentConfigView,
)

urlpatterns = [
    path("", UnitGroupListCreateView.as_view(), name="unit-group-list-create"),
    path("<int:pk>/", UnitGroupRetrieveUpdateDestroyView.as_view(), name="unit-group-detail"),
    # Group-scoped configuration (?group=<id>|all)
    path("website-settings/", WebsiteSettingsView.as_view(), name="website-settings"),
    path("ai-agent/", AiAgentConfigView.as_view(), name="ai-agent-config"),
]
