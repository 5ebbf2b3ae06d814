from rest_framework import serializers
from .models import ExternalCalendar
from .utils import is_ics_url


class ExternalCalendarSerializer(serializers.ModelSerializer):
    unit_name = serializers.CharField(source="unit.name", read_only=True)

    class Meta:
        model = ExternalCalendar
        fields = ["id", "unit", "unit_name", "name", "url", "last_synced", "created_at"]
        read_only_fields = ["id", "unit_name", "last_synced", "created_at"]

    def validate_unit(self, unit):
        request = self.context.get("request")
        if request and unit.group.user_id != request.user.id:
            raise serializers.ValidationError("Unknown unit.")
        return unit

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name cannot be blank.")
        return value.strip()

    def validate_url(self, value):
        if not is_ics_url(value):
            raise serializers.ValidationError("Please enter a valid .ics calendar URL.")
        return value.strip()


class ExportUrlSerializer(serializers.Serializer):
    unit_id = serializers.IntegerField()
    unit_name = serializers.CharField()
    url = serializers.URLField()
