import logging

from django.utils import timezone
from rest_framework import viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView
from django_filters.rest_framework import DjangoFilterBackend
from drf_spectacular.utils import extend_schema, OpenApiParameter

from units.models import Unit
from unit_groups.utils import scope_from_request
from .models import ExternalCalendar
from .serializers import ExternalCalendarSerializer, ExportUrlSerializer
from .utils import export_url

logger = logging.getLogger(__name__)


@extend_schema(tags=["calendars"])
class ExternalCalendarViewSet(viewsets.ModelViewSet):
    serializer_class = ExternalCalendarSerializer
    permission_classes = [IsAuthenticated]
    filter_backends = [DjangoFilterBackend]
    filterset_fields = ["unit"]

    def get_queryset(self):
        queryset = ExternalCalendar.objects.filter(unit__group__user=self.request.user).select_related("unit")
        return scope_from_request(self.request).apply(queryset, field="unit__group_id")

    def perform_create(self, serializer):
        calendar = serializer.save()
        logger.info(f"External calendar {calendar.id} added to unit {calendar.unit_id}")

    @extend_schema(summary="Mark a calendar as synced", request=None, responses={200: ExternalCalendarSerializer})
    @action(detail=True, methods=["post"])
    def sync(self, request, pk=None):
        calendar = self.get_object()
        calendar.last_synced = timezone.now()
        calendar.save(update_fields=["last_synced", "updated_at"])
        logger.info(f"External calendar {calendar.id} synced")
        return Response(self.get_serializer(calendar).data)


@extend_schema(
    tags=["calendars"],
    summary="iCal export URL of every unit",
    parameters=[OpenApiParameter("group", type=str, location=OpenApiParameter.QUERY, required=False)],
    responses={200: ExportUrlSerializer(many=True)},
)
class ExportUrlsView(APIView):
    permission_classes = [IsAuthenticated]

    def get(self, request):
        units = scope_from_request(request).apply(Unit.objects.filter(group__user=request.user))
        rows = [{"unit_id": unit.id, "unit_name": unit.name, "url": export_url(unit)} for unit in units]
        return Response(ExportUrlSerializer(rows, many=True).data)
