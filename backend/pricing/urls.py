from django.urls import path
from rest_framework.routers import DefaultRouter
from .views import PricingOverrideViewSet, QuoteView, PriceCalendarView, AdjustPricesView

router = DefaultRouter()
router.register(r"overrides", PricingOverrideViewSet, basename="pricing-override")

urlpatterns = [
    path("quote/", QuoteView.as_view(), name="pricing-quote"),
    path("calendar/", PriceCalendarView.as_view(), name="pricing-calendar"),
    path("adjust/", AdjustPricesView.as_view(), name="pricing-adjust"),
    *router.urls,
]
