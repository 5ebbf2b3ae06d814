from rest_framework import serializers
from units.models import Unit


class CloseUnitsSerializer(serializers.Serializer):
    date = serializers.DateField()
    unit_ids = serializers.ListField(
        child=serializers.IntegerField(), allow_empty=False
    )

    def validate_unit_ids(self, value):
        unit_ids = list(dict.fromkeys(value))
        request = self.context.get("request")
        units = Unit.objects.filter(id__in=unit_ids)
        if request:
            units = units.filter(group__user=request.user)
        found = {unit.id for unit in units}
        missing = [unit_id for unit_id in unit_ids if unit_id not in found]
        if missing:
            raise serializers.ValidationError(
                f"Unknown units: {', '.join(map(str, missing))}"
            )
        return unit_ids

    def validate(self, attrs):
        attrs["units"] = list(Unit.objects.filter(id__in=attrs["unit_ids"]).order_by("id"))
        return attrs


class DayUnitSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)


class DayAvailabilitySerializer(serializers.Serializer):
    date = serializers.DateField()
    cheapest_price = serializers.DecimalField(max_digits=10, decimal_places=2, allow_null=True)
    available_units = DayUnitSerializer(many=True)
    occupied_unit_ids = serializers.ListField(child=serializers.IntegerField())
    bookings = serializers.ListField(child=serializers.DictField())
