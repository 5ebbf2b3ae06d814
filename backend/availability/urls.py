from django.urls import path
from .views import DayAvailabilityView, CloseUnitsView

urlpatterns = [
    path("day/", DayAvailabilityView.as_view(), name="day-availability"),
    path("close-units/", CloseUnitsView.as_view(), name="close-units"),
]
