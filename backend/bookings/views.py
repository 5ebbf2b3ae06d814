# bookings/views.py
import logging

from rest_framework import viewsets, mixins, filters, status
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import (
    extend_schema,
    extend_schema_view,
    OpenApiResponse,
    OpenApiParameter,
    OpenApiExample,
)

from unit_groups.utils import scope_from_request
from .filters import BookingFilter
from .models import Booking
from .serializers import BookingSerializer, BookingCreateSerializer
from .services import (
    BookingNotCancellable,
    StayUnavailable,
    cancel_booking,
    cancellable_bookings,
)

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        summary="List bookings",
        parameters=[
            OpenApiParameter(
                "group",
                type=str,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Group id, or 'all' (default)",
            )
        ],
    ),
    retrieve=extend_schema(summary="Retrieve a booking"),
    create=extend_schema(
        summary="Create a booking from the booking form",
        description=(
            "Links the guest to an existing contact by email (case-insensitive) or "
            "creates one. The booking starts as Pending. When `price` is omitted "
            "it is the sum of the unit's nightly prices."
        ),
        request=BookingCreateSerializer,
        responses={
            201: BookingSerializer,
            400: OpenApiResponse(description="Validation errors"),
        },
        examples=[
            OpenApiExample(
                name="Create booking",
                value={
                    "client_name": "Ann Smith",
                    "client_email": "ann@example.com",
                    "client_phone": "+966 500000000",
                    "unit": 1,
                    "check_in": "2025-10-02",
                    "check_out": "2025-10-05",
                    "booking_source": "Phone",
                    "payment_method": "Cash",
                    "paid_amount": "200.00",
                    "notes": "Late arrival",
                },
                request_only=True,
            )
        ],
    ),
)
@extend_schema(tags=["bookings"])
class BookingViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    """Bookings are never edited or deleted directly; they can only be cancelled."""

    serializer_class = BookingSerializer
    permission_classes = [IsAuthenticated]

    # Filtering & search
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_class = BookingFilter
    search_fields = ["client_name", "contact__email", "notes"]

    def get_queryset(self):
        queryset = Booking.objects.filter(unit__group__user=self.request.user).select_related(
            "unit", "contact"
        )
        if self.action in ("list", "cancellable"):
            queryset = scope_from_request(self.request).apply(queryset, field="unit__group_id")
        return queryset

    def get_serializer_class(self):
        if self.action == "create":
            return BookingCreateSerializer
        return BookingSerializer

    def create(self, request, *args, **kwargs):
        serializer = BookingCreateSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        try:
            booking = serializer.save()
        except StayUnavailable as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except Exception as e:
            logger.exception("Failed to create booking")
            return Response(
                {"success": False, "message": "Failed to create booking", "error": str(e)},
                status=status.HTTP_500_INTERNAL_SERVER_ERROR,
            )
        return Response(BookingSerializer(booking).data, status=status.HTTP_201_CREATED)

    @extend_schema(
        summary="Cancel a booking",
        request=None,
        responses={
            200: BookingSerializer,
            400: OpenApiResponse(description="Closed-unit blocks and cancelled bookings cannot be cancelled"),
        },
    )
    @action(detail=True, methods=["post"])
    def cancel(self, request, pk=None):
        booking = self.get_object()
        try:
            cancel_booking(booking)
        except BookingNotCancellable as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(BookingSerializer(booking).data)

    @extend_schema(summary="Bookings that can still be cancelled", responses={200: BookingSerializer(many=True)})
    @action(detail=False, methods=["get"])
    def cancellable(self, request):
        bookings = self.filter_queryset(self.get_queryset())
        return Response(BookingSerializer(cancellable_bookings(bookings), many=True).data)
