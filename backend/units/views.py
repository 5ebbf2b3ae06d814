import logging

from rest_framework import generics
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import (
    extend_schema,
    OpenApiResponse,
    OpenApiParameter,
    OpenApiExample,
)
from unit_groups.utils import scope_from_request
from .models import Unit
from .serializers import UnitSerializer

logger = logging.getLogger(__name__)


@extend_schema(
    tags=["unit"],
    summary="List and create units",
    parameters=[
        OpenApiParameter(
            name="group",
            type=str,
            location=OpenApiParameter.QUERY,
            description="Filter by group id ('all' for every group)",
            required=False,
        )
    ],
    responses={
        200: UnitSerializer(many=True),
        201: UnitSerializer,
        403: OpenApiResponse(description="Forbidden"),
    },
    examples=[
        OpenApiExample(
            name="Create Unit",
            value={
                "group": 1,
                "name": "Sunset Chalet",
                "unit_type": "Chalets",
                "status": "Active",
                "max_guests": 6,
                "base_rate": "800.00",
                "weekday_prices": {
                    "sunday": 800,
                    "monday": 800,
                    "tuesday": 800,
                    "wednesday": 800,
                    "thursday": 1100,
                    "friday": 1200,
                    "saturday": 900,
                },
                "special_prices": [{"date": "2025-12-31", "price": "1500.00"}],
            },
            request_only=True,
        )
    ],
)
class UnitListCreateView(generics.ListCreateAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UnitSerializer

    def get_queryset(self):
        # Only show units for groups the user owns
        queryset = Unit.objects.filter(group__user=self.request.user).prefetch_related(
            "special_prices"
        )
        return scope_from_request(self.request).apply(queryset)


@extend_schema(
    tags=["unit"],
    summary="Retrieve, update, and delete a unit",
    description="Deleting a unit also deletes all of its bookings.",
    responses={
        200: UnitSerializer,
        204: None,
        403: OpenApiResponse(description="Forbidden"),
    },
)
class UnitRetrieveUpdateDestroyView(generics.RetrieveUpdateDestroyAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UnitSerializer

    def get_queryset(self):
        return Unit.objects.filter(group__user=self.request.user).prefetch_related(
            "special_prices"
        )

    def perform_destroy(self, instance):
        booking_count = instance.bookings.count()
        logger.info(
            f"Deleting unit {instance.id} ({instance.name}) and {booking_count} booking(s)"
        )
        instance.delete()
