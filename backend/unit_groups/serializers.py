from rest_framework import serializers
from .models import UnitGroup, WebsiteSettings, AiAgentConfig

SOCIAL_NETWORKS = ("instagram", "tiktok", "snapchat", "facebook")


class UnitGroupSerializer(serializers.ModelSerializer):
    unit_count = serializers.SerializerMethodField()

    class Meta:
        model = UnitGroup
        fields = [
            "id",
            "name",
            "group_type",
            "color",
            "cr_number",
            "tourism_license_number",
            "location_description",
            "google_maps_location",
            "phone_number",
            "social_media",
            "bank_name",
            "account_iban",
            "account_name",
            "unit_count",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "unit_count", "created_at", "updated_at"]

    def get_unit_count(self, obj):
        return obj.units.count()

    def validate_social_media(self, value):
        unknown = set(value or {}) - set(SOCIAL_NETWORKS)
        if unknown:
            raise serializers.ValidationError(
                f"Unknown social networks: {', '.join(sorted(unknown))}"
            )
        return value

    def create(self, validated_data):
        request = self.context.get("request")
        if request and hasattr(request, "user"):
            return UnitGroup.objects.create(user=request.user, **validated_data)
        raise serializers.ValidationError("User context is missing.")


class WebsiteSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = WebsiteSettings
        fields = [
            "id",
            "group",
            "home_page_picture",
            "theme_color",
            "website_title",
            "website_description",
            "updated_at",
        ]
        read_only_fields = ["id", "group", "updated_at"]


class AiAgentConfigSerializer(serializers.ModelSerializer):
    class Meta:
        model = AiAgentConfig
        fields = [
            "id",
            "group",
            "active_conversations",
            "max_conversations",
            "booking_method",
            "discount_enabled",
            "discount_amount",
            "coupon_code",
            "welcome_message",
            "reminders",
            "custom_roles",
            "updated_at",
        ]
        read_only_fields = ["id", "group", "active_conversations", "updated_at"]

    def validate(self, attrs):
        if attrs.get("discount_enabled") and not attrs.get("discount_amount"):
            raise serializers.ValidationError(
                {"discount_amount": "A discount amount is required when discounts are enabled."}
            )
        return attrs

    def validate_reminders(self, value):
        if not isinstance(value, list) or not all(isinstance(r, str) for r in value):
            raise serializers.ValidationError("Reminders must be a list of strings.")
        return value

    def validate_custom_roles(self, value):
        if not isinstance(value, list) or not all(isinstance(r, str) for r in value):
            raise serializers.ValidationError("Custom roles must be a list of strings.")
        return value
