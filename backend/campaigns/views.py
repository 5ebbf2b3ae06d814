import logging

from django.conf import settings
from rest_framework import viewsets, mixins
from rest_framework.decorators import action
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiResponse

from .estimator import earliest_schedule_time, estimate_cost
from .models import Campaign
from .serializers import CampaignSerializer, RecipientSelectionSerializer, select_recipients

logger = logging.getLogger(__name__)


@extend_schema(tags=["campaigns"])
class CampaignViewSet(
    mixins.ListModelMixin,
    mixins.RetrieveModelMixin,
    mixins.CreateModelMixin,
    viewsets.GenericViewSet,
):
    serializer_class = CampaignSerializer
    permission_classes = [IsAuthenticated]

    def get_queryset(self):
        return Campaign.objects.filter(user=self.request.user).prefetch_related("recipients")

    def perform_create(self, serializer):
        campaign = serializer.save(user=self.request.user)
        logger.info(
            f"Campaign {campaign.id} scheduled for {campaign.recipient_count} recipient(s) "
            f"at {campaign.scheduled_at}, cost {campaign.total_cost}"
        )

    @extend_schema(
        summary="Estimate the cost of a campaign",
        request=RecipientSelectionSerializer,
        responses={200: OpenApiResponse(description="Recipient count and cost")},
    )
    @action(detail=False, methods=["post"])
    def estimate(self, request):
        selection = RecipientSelectionSerializer(data=request.data)
        selection.is_valid(raise_exception=True)
        recipients = select_recipients(
            request.user,
            selection.validated_data["use_selected"],
            selection.validated_data["contact_ids"],
        )
        return Response(
            {
                "recipient_count": len(recipients),
                "per_recipient_cost": settings.CAMPAIGN_COST_PER_RECIPIENT,
                "total_cost": estimate_cost(len(recipients)),
                "max_message_length": settings.CAMPAIGN_MAX_MESSAGE_LENGTH,
                "max_attachment_size_mb": settings.CAMPAIGN_MAX_ATTACHMENT_SIZE_MB,
                "earliest_schedule_time": earliest_schedule_time(),
            }
        )
