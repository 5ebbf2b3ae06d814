from decimal import Decimal
from rest_framework import serializers

from units.models import Unit
from units.serializers import parse_price
from .models import PricingOverride


class PricingOverrideSerializer(serializers.ModelSerializer):
    units = serializers.PrimaryKeyRelatedField(queryset=Unit.objects.all(), many=True)

    class Meta:
        model = PricingOverride
        fields = [
            "id",
            "name",
            "start_date",
            "end_date",
            "units",
            "price",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "created_at", "updated_at"]
        extra_kwargs = {"price": {"min_value": Decimal("0")}}

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name cannot be blank.")
        return value.strip()

    def validate_units(self, units):
        if not units:
            raise serializers.ValidationError("Select at least one unit.")
        request = self.context.get("request")
        if request and any(unit.group.user_id != request.user.id for unit in units):
            raise serializers.ValidationError("Unknown unit.")
        return units

    def validate(self, attrs):
        start = attrs.get("start_date", getattr(self.instance, "start_date", None))
        end = attrs.get("end_date", getattr(self.instance, "end_date", None))
        if start and end and end < start:
            raise serializers.ValidationError(
                {"end_date": "End date cannot be before start date."}
            )
        return attrs


class NightPriceSerializer(serializers.Serializer):
    date = serializers.DateField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)


class QuoteRequestSerializer(serializers.Serializer):
    unit = serializers.PrimaryKeyRelatedField(queryset=Unit.objects.all())
    check_in = serializers.DateField()
    check_out = serializers.DateField()

    def validate_unit(self, unit):
        request = self.context.get("request")
        if request and unit.group.user_id != request.user.id:
            raise serializers.ValidationError("Unknown unit.")
        return unit


class QuoteSerializer(serializers.Serializer):
    unit = serializers.IntegerField()
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    nights = NightPriceSerializer(many=True)
    total = serializers.DecimalField(max_digits=12, decimal_places=2)


class PriceCalendarRequestSerializer(serializers.Serializer):
    start = serializers.DateField()
    end = serializers.DateField()

    def validate(self, attrs):
        if (attrs["end"] - attrs["start"]).days > 92:
            raise serializers.ValidationError("The calendar spans at most 93 days.")
        return attrs


class AdjustPricesSerializer(serializers.Serializer):
    date = serializers.DateField()
    prices = serializers.DictField(
        child=serializers.CharField(allow_blank=True, allow_null=True),
        help_text="Unit id → new price for the day; empty clears the special price",
    )

    def validate_prices(self, value):
        request = self.context.get("request")
        prices = {}
        for key, raw in value.items():
            try:
                unit_id = int(key)
            except (TypeError, ValueError):
                raise serializers.ValidationError(f"Invalid unit id: {key!r}")
            if raw is None or str(raw).strip() == "":
                prices[unit_id] = None
                continue
            try:
                prices[unit_id] = parse_price(raw)
            except serializers.ValidationError as exc:
                raise serializers.ValidationError({key: exc.detail})

        units = Unit.objects.filter(id__in=prices)
        if request:
            units = units.filter(group__user=request.user)
        missing = set(prices) - set(units.values_list("id", flat=True))
        if missing:
            raise serializers.ValidationError(
                f"Unknown units: {', '.join(map(str, sorted(missing)))}"
            )
        return prices
