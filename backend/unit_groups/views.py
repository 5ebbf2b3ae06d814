import logging

from django.shortcuts import get_object_or_404
from rest_framework import generics, status
from rest_framework.permissions import IsAuthenticated
from rest_framework.views import APIView
from rest_framework.response import Response
from drf_spectacular.utils import extend_schema, OpenApiResponse, OpenApiParameter

from .models import UnitGroup, WebsiteSettings, AiAgentConfig
from .scope import config_for_scope
from .serializers import (
    UnitGroupSerializer,
    WebsiteSettingsSerializer,
    AiAgentConfigSerializer,
)
from .utils import scope_from_request

logger = logging.getLogger(__name__)

GROUP_PARAMETER = OpenApiParameter(
    "group",
    type=str,
    location=OpenApiParameter.QUERY,
    required=False,
    description="Group id, or 'all' (default) for every group",
)


@extend_schema(
    tags=["unit-groups"],
    summary="List and create unit groups",
    responses={
        200: UnitGroupSerializer(many=True),
        201: UnitGroupSerializer,
        403: OpenApiResponse(description="Forbidden"),
    },
)
class UnitGroupListCreateView(generics.ListCreateAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UnitGroupSerializer

    def get_queryset(self):
        # Show only groups owned by the logged-in user
        return UnitGroup.objects.filter(user=self.request.user)


@extend_schema(
    tags=["unit-groups"],
    summary="Retrieve, update, and delete a unit group",
    responses={
        200: UnitGroupSerializer,
        204: None,
        403: OpenApiResponse(description="Forbidden"),
    },
)
class UnitGroupRetrieveUpdateDestroyView(generics.RetrieveUpdateDestroyAPIView):
    permission_classes = [IsAuthenticated]
    serializer_class = UnitGroupSerializer

    def get_queryset(self):
        return UnitGroup.objects.filter(user=self.request.user)

    def perform_destroy(self, instance):
        logger.info(f"Deleting unit group {instance.id} ({instance.name}) with its units")
        instance.delete()


class ScopedConfigView(APIView):
    """
    GET returns the configuration that applies to ``?group=`` (falling back to
    the all-groups row); PUT writes the row that belongs to exactly that scope.
    """

    permission_classes = [IsAuthenticated]
    model = None
    serializer_class = None

    def get_scope(self, request):
        scope = scope_from_request(request)
        if not scope.is_all:
            get_object_or_404(UnitGroup, id=scope.group_id, user=request.user)
        return scope

    def get(self, request):
        scope = self.get_scope(request)
        config = config_for_scope(self.model.objects.filter(user=request.user), scope)
        if config is None:
            return Response(
                {"detail": "No configuration saved for this scope."},
                status=status.HTTP_404_NOT_FOUND,
            )
        return Response(self.serializer_class(config).data)

    def put(self, request):
        scope = self.get_scope(request)
        group_id = None if scope.is_all else scope.group_id
        instance = self.model.objects.filter(user=request.user, group_id=group_id).first()

        serializer = self.serializer_class(instance, data=request.data)
        serializer.is_valid(raise_exception=True)
        config = serializer.save(user=request.user, group_id=group_id)
        logger.info(f"Saved {self.model.__name__} for user {request.user.id}, scope {scope}")
        return Response(
            self.serializer_class(config).data,
            status=status.HTTP_200_OK if instance else status.HTTP_201_CREATED,
        )


@extend_schema(
    tags=["unit-groups"],
    summary="Website settings for a group scope",
    parameters=[GROUP_PARAMETER],
    request=WebsiteSettingsSerializer,
    responses={200: WebsiteSettingsSerializer, 201: WebsiteSettingsSerializer},
)
class WebsiteSettingsView(ScopedConfigView):
    model = WebsiteSettings
    serializer_class = WebsiteSettingsSerializer


@extend_schema(
    tags=["unit-groups"],
    summary="AI agent configuration for a group scope",
    parameters=[GROUP_PARAMETER],
    request=AiAgentConfigSerializer,
    responses={200: AiAgentConfigSerializer, 201: AiAgentConfigSerializer},
)
class AiAgentConfigView(ScopedConfigView):
    model = AiAgentConfig
    serializer_class = AiAgentConfigSerializer
