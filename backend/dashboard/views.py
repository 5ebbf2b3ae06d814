from calendar import monthrange

from django.utils import timezone
from rest_framework.views import APIView
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiParameter

from accounts.formatting import format_currency
from accounts.models import AccountSettings
from bookings.models import Booking
from units.models import Unit
from unit_groups.utils import scope_from_request
from .serializers import DashboardSerializer, StatsQuerySerializer
from .stats import (
    compute_stats,
    dashboard_window,
    format_occupancy,
    monthly_series,
    recent_bookings,
)


def current_month():
    today = timezone.localdate()
    return today.replace(day=1), today.replace(day=monthrange(today.year, today.month)[1])


@extend_schema(
    tags=["dashboard"],
    summary="Booking statistics for a date range",
    description=(
        "Bookings and revenue count Confirmed bookings checking in between "
        "`from` and `to` (both included). Occupancy counts the nights Confirmed "
        "bookings spend inside that range. Defaults to the current month."
    ),
    parameters=[
        OpenApiParameter("from", type=str, location=OpenApiParameter.QUERY, required=False),
        OpenApiParameter("to", type=str, location=OpenApiParameter.QUERY, required=False),
        OpenApiParameter("group", type=str, location=OpenApiParameter.QUERY, required=False),
        OpenApiParameter("lang", type=str, location=OpenApiParameter.QUERY, required=False,
                         enum=["en", "ar"], default="en"),
    ],
    responses={200: DashboardSerializer},
)
class DashboardStatsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        first, last = current_month()
        query = StatsQuerySerializer(
            data={
                "date_from": request.query_params.get("from", first),
                "date_to": request.query_params.get("to", last),
            }
        )
        query.is_valid(raise_exception=True)
        date_from = query.validated_data["date_from"]
        date_to = query.validated_data["date_to"]

        scope = scope_from_request(request)
        units = list(scope.apply(Unit.objects.filter(group__user=request.user)))
        bookings = list(
            Booking.objects.filter(unit__in=units).select_related("unit", "contact")
        )

        window = dashboard_window(date_from, date_to)
        stats = compute_stats(bookings, units, window)
        stats["occupancy_display"] = format_occupancy(stats["occupancy_rate"])
        stats["total_revenue_display"] = format_currency(
            stats["total_revenue"],
            AccountSettings.for_user(request.user).currency,
            request.query_params.get("lang", "en"),
        )

        payload = {
            "date_from": date_from,
            "date_to": date_to,
            "stats": stats,
            "monthly": monthly_series(bookings, window),
            "recent_bookings": recent_bookings(bookings),
        }
        return Response(DashboardSerializer(payload).data)
