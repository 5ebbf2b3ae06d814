from rest_framework import serializers
from .models import AccountSettings


class AccountSettingsSerializer(serializers.ModelSerializer):
    class Meta:
        model = AccountSettings
        fields = ["business_name", "email", "currency", "updated_at"]
        read_only_fields = ["updated_at"]
