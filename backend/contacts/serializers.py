from rest_framework import serializers
from .models import Contact, Review


class ContactSerializer(serializers.ModelSerializer):
    class Meta:
        model = Contact
        fields = [
            "id",
            "name",
            "phone",
            "email",
            "review",
            "payment",
            "created_at",
            "updated_at",
        ]
        read_only_fields = ["id", "review", "created_at", "updated_at"]

    def validate_name(self, value):
        if not value.strip():
            raise serializers.ValidationError("Name cannot be blank.")
        return value.strip()

    def validate_phone(self, value):
        """Basic phone number validation."""
        if value and not value.replace("+", "").replace(" ", "").isdigit():
            raise serializers.ValidationError("Phone number must contain only digits or '+' sign.")
        return value

    def validate_email(self, value):
        value = (value or "").strip()
        if not value:
            return value
        request = self.context.get("request")
        if request:
            duplicates = Contact.objects.filter(user=request.user, email__iexact=value)
            if self.instance:
                duplicates = duplicates.exclude(id=self.instance.id)
            if duplicates.exists():
                raise serializers.ValidationError("A contact with this email already exists.")
        return value


class ContactRowSerializer(serializers.Serializer):
    """A contact with its most recent stay, as listed on the contacts page."""

    id = serializers.IntegerField(source="contact.id")
    name = serializers.CharField(source="contact.name")
    phone = serializers.CharField(source="contact.phone")
    email = serializers.CharField(source="contact.email")
    review = serializers.IntegerField(source="contact.review")
    payment = serializers.CharField(source="contact.payment")
    last_booking = serializers.SerializerMethodField()
    last_unit = serializers.SerializerMethodField()
    last_group = serializers.SerializerMethodField()

    def get_last_booking(self, row):
        booking = row["last_booking"]
        return booking.check_in.isoformat() if booking else None

    def get_last_unit(self, row):
        return row["last_unit"].name if row["last_unit"] else None

    def get_last_group(self, row):
        return row["last_group"].name if row["last_group"] else None


class ReviewSerializer(serializers.ModelSerializer):
    contact_name = serializers.SerializerMethodField()
    contact_phone = serializers.SerializerMethodField()
    unit_name = serializers.CharField(source="unit.name", read_only=True)
    stay = serializers.SerializerMethodField()

    class Meta:
        model = Review
        fields = [
            "id",
            "booking",
            "contact",
            "contact_name",
            "contact_phone",
            "unit",
            "unit_name",
            "stay",
            "rating",
            "feedback",
            "date",
            "created_at",
        ]
        read_only_fields = ["id", "created_at"]

    def get_contact_name(self, obj):
        return obj.contact.name if obj.contact else None

    def get_contact_phone(self, obj):
        return obj.contact.phone if obj.contact else None

    def get_stay(self, obj):
        booking = obj.booking
        if booking is None:
            return None
        return {"check_in": booking.check_in, "check_out": booking.check_out}

    def validate(self, attrs):
        request = self.context.get("request")
        unit = attrs.get("unit") or getattr(self.instance, "unit", None)
        contact = attrs.get("contact")
        booking = attrs.get("booking")

        if request:
            if unit and unit.group.user_id != request.user.id:
                raise serializers.ValidationError({"unit": "Unknown unit."})
            if contact and contact.user_id != request.user.id:
                raise serializers.ValidationError({"contact": "Unknown contact."})

        if booking and unit and booking.unit_id != unit.id:
            raise serializers.ValidationError(
                {"booking": "The booking belongs to a different unit."}
            )
        return attrs
