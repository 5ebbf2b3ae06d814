from decimal import Decimal
from rest_framework import serializers
from .models import Unit, SpecialDatePrice, WEEKDAYS


def nightly_price_field():
    """Validator for a free-form nightly price, sized like the price columns."""
    return serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal("0"))


def parse_price(raw):
    """
    Validate one price entered as text or a number.

    Raises ``ValidationError`` for non-numbers, NaN, infinities, negatives and
    values that do not fit the price columns.
    """
    return nightly_price_field().run_validation(raw)


class SpecialDatePriceSerializer(serializers.ModelSerializer):
    class Meta:
        model = SpecialDatePrice
        fields = ["id", "date", "price"]
        read_only_fields = ["id"]
        extra_kwargs = {"price": {"min_value": Decimal("0")}}


class UnitSerializer(serializers.ModelSerializer):
    special_prices = SpecialDatePriceSerializer(many=True, required=False)
    group_name = serializers.CharField(source="group.name", read_only=True)

    class Meta:
        model = Unit
        fields = [
            "id",
            "group",
            "group_name",
            "name",
            "unit_type",
            "status",
            "short_description",
            "long_description",
            "area",
            "max_guests",
            "parking_available",
            "check_in_hour",
            "check_out_hour",
            "amenities",
            "base_rate",
            "weekday_prices",
            "special_prices",  # Nested list of date overrides
            "cancellation_policy",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "group_name", "created_at", "updated_at"]
        extra_kwargs = {"base_rate": {"min_value": Decimal("0")}}

    def validate_group(self, group):
        request = self.context.get("request")
        if request and group.user_id != request.user.id:
            raise serializers.ValidationError("Unknown group.")
        return group

    def validate_weekday_prices(self, value):
        if not isinstance(value, dict):
            raise serializers.ValidationError("Weekday prices must be an object keyed by weekday.")
        unknown = set(value) - set(WEEKDAYS)
        if unknown:
            raise serializers.ValidationError(
                f"Unknown weekdays: {', '.join(sorted(unknown))}"
            )
        prices = {}
        for day in WEEKDAYS:
            raw = value.get(day)
            if raw is None or str(raw).strip() == "":
                prices[day] = 0
                continue
            try:
                price = parse_price(raw)
            except serializers.ValidationError as exc:
                raise serializers.ValidationError({day: exc.detail})
            prices[day] = float(price)
        return prices

    def validate_special_prices(self, special_prices):
        dates = [entry["date"] for entry in special_prices]
        if len(dates) != len(set(dates)):
            raise serializers.ValidationError("Duplicate dates are not allowed.")
        return special_prices

    def validate(self, attrs):
        for field in ("check_in_hour", "check_out_hour"):
            hour = attrs.get(field)
            if hour is not None and not 0 <= hour <= 23:
                raise serializers.ValidationError({field: "Must be an hour between 0 and 23."})
        return attrs

    def create(self, validated_data):
        special_prices = validated_data.pop("special_prices", [])
        unit = Unit.objects.create(**validated_data)

        for entry in special_prices:
            SpecialDatePrice.objects.create(unit=unit, **entry)

        return unit

    def update(self, instance, validated_data):
        special_prices = validated_data.pop("special_prices", None)

        # Update basic fields
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.save()

        if special_prices is not None:
            instance.special_prices.all().delete()  # Replace existing overrides
            for entry in special_prices:
                SpecialDatePrice.objects.create(unit=instance, **entry)

        return instance
