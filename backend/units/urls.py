from django.urls import path
from .views import UnitListCreateView, UnitRetrieveUpdateDestroyView

urlpatterns = [
    path("", UnitListCreateView.as_view(), name="unit-list-create"),
    path("<int:pk>/", UnitRetrieveUpdateDestroyView.as_view(), name="unit-detail"),
]
