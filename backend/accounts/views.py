import logging

from rest_framework import generics
from rest_framework.permissions import IsAuthenticated
from drf_spectacular.utils import extend_schema

from .models import AccountSettings
from .serializers import AccountSettingsSerializer

logger = logging.getLogger(__name__)


@extend_schema(
    tags=["account"],
    summary="Account settings of the signed-in user",
    description="Created with the default currency on first access.",
)
class AccountSettingsView(generics.RetrieveUpdateAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = AccountSettingsSerializer

    def get_object(self):
        return AccountSettings.for_user(self.request.user)

    def perform_update(self, serializer):
        account = serializer.save()
        logger.info(f"Account settings updated for user {account.user_id} (currency {account.currency})")
