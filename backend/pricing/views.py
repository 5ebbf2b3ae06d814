import logging

from rest_framework import viewsets, status
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse, OpenApiExample

from availability.checker import cheapest_available_price
from bookings.models import Booking
from core.dateranges import iter_days
from units.models import Unit
from unit_groups.utils import scope_from_request
from .models import PricingOverride
from .resolver import daily_prices, price_source, quote_stay
from .serializers import (
    PricingOverrideSerializer,
    QuoteRequestSerializer,
    QuoteSerializer,
    PriceCalendarRequestSerializer,
    AdjustPricesSerializer,
)
from .services import apply_special_prices

logger = logging.getLogger(__name__)


def user_overrides(user):
    return list(PricingOverride.objects.filter(user=user).prefetch_related("units"))


@extend_schema(tags=["pricing"])
class PricingOverrideViewSet(viewsets.ModelViewSet):
    """
    Period pricing overrides. When several overrides cover the same unit and
    night, the most recently created one applies.
    """

    serializer_class = PricingOverrideSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return PricingOverride.objects.filter(user=self.request.user).prefetch_related("units")

    def perform_create(self, serializer):
        override = serializer.save(user=self.request.user)
        logger.info(
            f"Pricing override {override.id} '{override.name}' saved "
            f"({override.start_date} → {override.end_date}, {override.price})"
        )

    def perform_update(self, serializer):
        override = serializer.save()
        logger.info(f"Pricing override {override.id} updated")

    def perform_destroy(self, instance):
        logger.info(f"Pricing override {instance.id} deleted")
        instance.delete()


# -------------------------
# Stay quote
# -------------------------
@extend_schema(
    tags=["pricing"],
    summary="Price a stay night by night",
    description="Check-out is exclusive. A check-out on or before check-in quotes zero nights.",
    parameters=[
        OpenApiParameter("unit", type=int, location=OpenApiParameter.QUERY, required=True),
        OpenApiParameter("check_in", type=str, location=OpenApiParameter.QUERY, required=True),
        OpenApiParameter("check_out", type=str, location=OpenApiParameter.QUERY, required=True),
    ],
    responses={200: QuoteSerializer, 400: OpenApiResponse(description="Validation errors")},
)
class QuoteView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        params = QuoteRequestSerializer(data=request.query_params, context={"request": request})
        params.is_valid(raise_exception=True)
        unit = params.validated_data["unit"]
        check_in = params.validated_data["check_in"]
        check_out = params.validated_data["check_out"]

        overrides = user_overrides(request.user)
        total, nights = quote_stay(unit, check_in, check_out, overrides)
        return Response(
            {
                "unit": unit.id,
                "check_in": check_in,
                "check_out": check_out,
                "nights": [
                    {"date": night, "price": price, "source": price_source(unit, night, overrides)}
                    for night, price in nights
                ],
                "total": total,
            }
        )


# -------------------------
# Price calendar
# -------------------------
@extend_schema(
    tags=["pricing"],
    summary="Daily prices for a date range",
    description=(
        "Nightly price of every unit in the group scope for each day from "
        "`start` to `end` (both included), plus the cheapest price among the "
        "units still free that day."
    ),
    parameters=[
        OpenApiParameter("start", type=str, location=OpenApiParameter.QUERY, required=True),
        OpenApiParameter("end", type=str, location=OpenApiParameter.QUERY, required=True),
        OpenApiParameter("group", type=str, location=OpenApiParameter.QUERY, required=False),
    ],
)
class PriceCalendarView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        params = PriceCalendarRequestSerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        start = params.validated_data["start"]
        end = params.validated_data["end"]

        units = list(
            scope_from_request(request)
            .apply(Unit.objects.filter(group__user=request.user))
            .prefetch_related("special_prices")
        )
        overrides = user_overrides(request.user)
        bookings = list(
            Booking.objects.filter(unit__in=units, check_in__lte=end, check_out__gt=start)
        )

        grid = daily_prices(units, start, end, overrides)
        return Response(
            {
                "start": start,
                "end": end,
                "units": [
                    {
                        "unit_id": unit.id,
                        "unit_name": unit.name,
                        "prices": [{"date": day, "price": price} for day, price in grid[unit.id]],
                    }
                    for unit in units
                ],
                "from_prices": [
                    {
                        "date": day,
                        "price": cheapest_available_price(day, units, bookings, overrides),
                    }
                    for day in iter_days(start, end)
                ],
            }
        )


# -------------------------
# Adjust prices for one day
# -------------------------
@extend_schema(
    tags=["pricing"],
    summary="Set or clear special-date prices for one day",
    request=AdjustPricesSerializer,
    responses={200: OpenApiResponse(description="Prices updated")},
    examples=[
        OpenApiExample(
            name="Adjust prices",
            value={"date": "2025-12-31", "prices": {"1": "1500", "2": ""}},
            request_only=True,
        )
    ],
)
class AdjustPricesView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = AdjustPricesSerializer(data=request.data, context={"request": request})
        if not serializer.is_valid():
            return Response(
                {"success": False, "message": "Validation failed", "errors": serializer.errors},
                status=status.HTTP_400_BAD_REQUEST,
            )
        try:
            updated, cleared = apply_special_prices(
                serializer.validated_data["date"], serializer.validated_data["prices"]
            )
        except Exception as e:
            logger.exception("Failed to adjust prices")
            return Response(
                {"success": False, "message": "Failed to adjust prices", "error": str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(
            {
                "success": True,
                "date": serializer.validated_data["date"],
                "updated_unit_ids": updated,
                "cleared_unit_ids": cleared,
            }
        )
