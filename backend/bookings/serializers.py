from decimal import Decimal
from rest_framework import serializers

from availability.checker import is_unit_available_for_stay
from units.models import Unit
from .models import Booking
from .services import create_booking


class BookingSerializer(serializers.ModelSerializer):
    unit_name = serializers.SerializerMethodField()
    contact_name = serializers.SerializerMethodField()
    nights = serializers.IntegerField(read_only=True)
    is_fully_paid = serializers.BooleanField(read_only=True)
    is_cancellable = serializers.BooleanField(read_only=True)

    class Meta:
        model = Booking
        fields = [
            "id",
            "uid",
            "unit",
            "unit_name",
            "contact",
            "contact_name",
            "client_name",
            "kind",
            "check_in",
            "check_out",
            "nights",
            "status",
            "price",
            "paid_amount",
            "is_fully_paid",
            "is_cancellable",
            "booking_source",
            "payment_method",
            "notes",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields

    def get_unit_name(self, obj):
        return obj.unit.name if obj.unit_id else None

    def get_contact_name(self, obj):
        return obj.contact.name if obj.contact else None


class BookingCreateSerializer(serializers.Serializer):
    """Booking form input. The contact is resolved from the client's email."""

    client_name = serializers.CharField(max_length=255)
    client_email = serializers.EmailField(required=False, allow_blank=True, default="")
    client_phone = serializers.CharField(max_length=30)
    unit = serializers.PrimaryKeyRelatedField(queryset=Unit.objects.all())
    check_in = serializers.DateField()
    check_out = serializers.DateField()
    booking_source = serializers.ChoiceField(
        choices=Booking.Source.choices, required=False, allow_null=True
    )
    payment_method = serializers.ChoiceField(
        choices=Booking.PaymentMethod.choices, required=False, allow_null=True
    )
    paid_amount = serializers.DecimalField(
        max_digits=12, decimal_places=2, min_value=Decimal("0"), required=False, allow_null=True
    )
    price = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0"),
        required=False,
        allow_null=True,
        help_text="Total for the stay; resolved from the unit's prices when omitted",
    )
    notes = serializers.CharField(required=False, allow_blank=True, default="")

    def validate_client_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Client name is required.")
        return value.strip()

    def validate_unit(self, unit):
        request = self.context.get("request")
        if request and unit.group.user_id != request.user.id:
            raise serializers.ValidationError("Unknown unit.")
        return unit

    # -------------------------------------------------------------------------
    # VALIDATION (date order + double booking)
    # -------------------------------------------------------------------------
    def validate(self, data):
        check_in = data["check_in"]
        check_out = data["check_out"]
        if check_out <= check_in:
            raise serializers.ValidationError(
                {"check_out": "Check-out must be after check-in."}
            )

        unit = data["unit"]
        existing = Booking.objects.filter(
            unit=unit, check_in__lt=check_out, check_out__gt=check_in
        )
        if not is_unit_available_for_stay(unit, check_in, check_out, existing):
            raise serializers.ValidationError(
                "This unit is already booked for the selected dates."
            )
        return data

    def create(self, validated_data):
        booking, _ = create_booking(self.context["request"].user, validated_data)
        return booking
