import logging

from rest_framework import viewsets, status, serializers
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, extend_schema_view, OpenApiParameter

from bookings.models import Booking
from units.models import Unit
from unit_groups.utils import scope_from_request
from .filters import ContactFilter
from .models import Contact, Review
from .serializers import ContactSerializer, ContactRowSerializer, ReviewSerializer
from .services import contact_rows, review_score, sort_reviews

logger = logging.getLogger(__name__)


@extend_schema_view(
    list=extend_schema(
        summary="List contacts with their last stay",
        parameters=[
            OpenApiParameter("name", type=str, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter("phone", type=str, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter("email", type=str, location=OpenApiParameter.QUERY, required=False),
            OpenApiParameter(
                "unit",
                type=int,
                location=OpenApiParameter.QUERY,
                required=False,
                description="Only contacts whose last stay was in this unit",
            ),
        ],
        responses={200: ContactRowSerializer(many=True)},
    ),
)
@extend_schema(tags=["contacts"])
class ContactViewSet(viewsets.ModelViewSet):
    serializer_class = ContactSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_class = ContactFilter

    def get_queryset(self):
        return Contact.objects.filter(user=self.request.user)

    def list(self, request, *args, **kwargs):
        contacts = self.filter_queryset(self.get_queryset())
        bookings = Booking.objects.filter(
            unit__group__user=request.user, contact__isnull=False
        ).only("id", "contact_id", "unit_id", "check_in")
        units = Unit.objects.filter(group__user=request.user).select_related("group")

        rows = contact_rows(contacts, bookings, units)

        unit_filter = request.query_params.get("unit")
        if unit_filter and unit_filter != "all":
            rows = [
                row for row in rows
                if row["last_unit"] is not None and str(row["last_unit"].id) == unit_filter
            ]

        return Response(ContactRowSerializer(rows, many=True).data)

    def perform_create(self, serializer):
        contact = serializer.save(user=self.request.user)
        logger.info(f"Contact {contact.id} created by user {self.request.user.id}")

    def perform_destroy(self, instance):
        logger.info(f"Deleting contact {instance.id}; their bookings keep the client name")
        instance.delete()


REVIEW_PARAMETERS = [
    OpenApiParameter(
        "group", type=str, location=OpenApiParameter.QUERY, required=False,
        description="Group id, or 'all'",
    ),
    OpenApiParameter("unit", type=int, location=OpenApiParameter.QUERY, required=False),
    OpenApiParameter(
        "sort", type=str, location=OpenApiParameter.QUERY, required=False,
        enum=["date", "rating"], default="date",
    ),
    OpenApiParameter(
        "direction", type=str, location=OpenApiParameter.QUERY, required=False,
        enum=["asc", "desc"], default="desc",
    ),
]


@extend_schema_view(
    list=extend_schema(summary="List reviews", parameters=REVIEW_PARAMETERS),
    stats=extend_schema(summary="Review count and average rating", parameters=REVIEW_PARAMETERS[:2]),
)
@extend_schema(tags=["reviews"])
class ReviewViewSet(viewsets.ModelViewSet):
    serializer_class = ReviewSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return Review.objects.filter(unit__group__user=self.request.user).select_related(
            "unit", "contact", "booking"
        )

    def scoped_reviews(self, request):
        queryset = scope_from_request(request).apply(self.get_queryset(), field="unit__group_id")
        unit = request.query_params.get("unit")
        if unit and unit != "all":
            try:
                unit_id = int(unit)
            except ValueError:
                raise serializers.ValidationError({"unit": f"Invalid unit id: {unit!r}"})
            queryset = queryset.filter(unit_id=unit_id)
        return queryset

    def list(self, request, *args, **kwargs):
        try:
            reviews = sort_reviews(
                self.scoped_reviews(request),
                key=request.query_params.get("sort", "date"),
                direction=request.query_params.get("direction", "desc"),
            )
        except ValueError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        return Response(self.get_serializer(reviews, many=True).data)

    @action(detail=False, methods=["get"])
    def stats(self, request):
        ratings = list(self.scoped_reviews(request).values_list("rating", flat=True))
        average = round(sum(ratings) / len(ratings), 1) if ratings else 0
        return Response(
            {
                "total_reviews": len(ratings),
                "average_rating": average,
                "rounded_rating": review_score(ratings),
            }
        )

    def perform_create(self, serializer):
        review = serializer.save()
        logger.info(f"Review {review.id} saved for unit {review.unit_id}")
