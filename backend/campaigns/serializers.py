from rest_framework import serializers

from contacts.models import Contact
from .estimator import estimate_cost, validate_campaign
from .models import Campaign


def select_recipients(user, use_selected, contact_ids):
    """The selected contacts when a selection is used, otherwise every contact."""
    contacts = Contact.objects.filter(user=user)
    if use_selected and contact_ids:
        contacts = contacts.filter(id__in=contact_ids)
    return list(contacts)


class RecipientSelectionSerializer(serializers.Serializer):
    use_selected = serializers.BooleanField(default=True)
    contact_ids = serializers.ListField(
        child=serializers.IntegerField(), required=False, default=list
    )


class CampaignSerializer(serializers.ModelSerializer):
    use_selected = serializers.BooleanField(default=True, write_only=True)
    contact_ids = serializers.ListField(
        child=serializers.IntegerField(), required=False, default=list, write_only=True
    )
    recipients = serializers.PrimaryKeyRelatedField(many=True, read_only=True)

    class Meta:
        model = Campaign
        fields = [
            "id",
            "message",
            "attachment_size_bytes",
            "scheduled_at",
            "use_selected",
            "contact_ids",
            "recipients",
            "recipient_count",
            "total_cost",
            "created_at",
        ]
        read_only_fields = ["id", "recipients", "recipient_count", "total_cost", "created_at"]
        extra_kwargs = {"message": {"trim_whitespace": False}}

    def validate(self, attrs):
        errors = validate_campaign(
            attrs.get("message"),
            attrs.get("attachment_size_bytes", 0),
            attrs.get("scheduled_at"),
        )
        if errors:
            raise serializers.ValidationError(errors)

        recipients = select_recipients(
            self.context["request"].user,
            attrs.pop("use_selected", True),
            attrs.pop("contact_ids", []),
        )
        if not recipients:
            raise serializers.ValidationError({"recipients": "No recipients to send to."})
        attrs["recipients"] = recipients
        return attrs

    def create(self, validated_data):
        recipients = validated_data.pop("recipients")
        campaign = Campaign.objects.create(
            recipient_count=len(recipients),
            total_cost=estimate_cost(len(recipients)),
            **validated_data,
        )
        campaign.recipients.set(recipients)
        return campaign
