import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema, OpenApiParameter, OpenApiResponse

from bookings.models import Booking
from bookings.serializers import BookingSerializer
from core.dateranges import to_day
from pricing.models import PricingOverride
from pricing.resolver import resolve_price
from units.models import Unit
from unit_groups.utils import scope_from_request
from .checker import available_units, bookings_on_date, cheapest_available_price
from .serializers import CloseUnitsSerializer, DayAvailabilitySerializer
from .services import UnitsUnavailable, close_units

logger = logging.getLogger(__name__)


@extend_schema(
    tags=["availability"],
    summary="Occupancy and free units for one day",
    description=(
        "Lists the bookings covering the night of `date`, the units still free "
        "with their nightly price, and the cheapest of those prices."
    ),
    parameters=[
        OpenApiParameter("date", type=str, location=OpenApiParameter.QUERY, required=True,
                         description="YYYY-MM-DD"),
        OpenApiParameter("group", type=str, location=OpenApiParameter.QUERY, required=False),
        OpenApiParameter("include_cancelled", type=bool, location=OpenApiParameter.QUERY,
                         required=False, default=False,
                         description="Treat cancelled bookings as occupying their unit"),
    ],
    responses={200: DayAvailabilitySerializer, 400: OpenApiResponse(description="Invalid date")},
)
class DayAvailabilityView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        try:
            day = to_day(request.query_params.get("date"))
        except ValueError:
            day = None
        if day is None:
            return Response(
                {"detail": "Invalid or missing date. Use YYYY-MM-DD."},
                status=status.HTTP_400_BAD_REQUEST,
            )
        include_cancelled = request.query_params.get("include_cancelled", "").lower() in (
            "1", "true", "yes",
        )

        scope = scope_from_request(request)
        units = list(
            scope.apply(Unit.objects.filter(group__user=request.user)).prefetch_related(
                "special_prices"
            )
        )
        bookings = list(
            Booking.objects.filter(unit__in=units, check_in__lte=day, check_out__gt=day)
            .select_related("unit", "contact")
        )
        overrides = list(
            PricingOverride.objects.filter(user=request.user).prefetch_related("units")
        )

        on_date = bookings_on_date(day, bookings, include_cancelled)
        free = available_units(day, units, bookings, include_cancelled)

        return Response(
            {
                "date": day,
                "cheapest_price": cheapest_available_price(
                    day, units, bookings, overrides, include_cancelled
                ),
                "available_units": [
                    {"id": unit.id, "name": unit.name, "price": resolve_price(unit, day, overrides)}
                    for unit in free
                ],
                "occupied_unit_ids": sorted({booking.unit_id for booking in on_date}),
                "bookings": BookingSerializer(on_date, many=True).data,
            }
        )


@extend_schema(
    tags=["availability"],
    summary="Close units for one night",
    description="Creates a closed-unit block on each unit. Units already occupied that night are rejected.",
    request=CloseUnitsSerializer,
    responses={
        201: BookingSerializer(many=True),
        400: OpenApiResponse(description="Validation errors or occupied units"),
    },
)
class CloseUnitsView(APIView):
    permission_classes = [IsAuthenticated]

    def post(self, request):
        serializer = CloseUnitsSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        try:
            blocks = close_units(serializer.validated_data["date"], serializer.validated_data["units"])
        except UnitsUnavailable as exc:
            return Response(
                {"detail": "Some units are already occupied on this date.", "unit_ids": exc.unit_ids},
                status=status.HTTP_400_BAD_REQUEST,
            )
        return Response(BookingSerializer(blocks, many=True).data, status=status.HTTP_201_CREATED)
