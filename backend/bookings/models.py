import uuid
from decimal import Decimal

from django.db import models
from units.models import Unit
from contacts.models import Contact


class Booking(models.Model):
    class Status(models.TextChoices):
        CONFIRMED = "Confirmed", "Confirmed"
        PENDING = "Pending", "Pending"
        IN_PROGRESS = "In Progress", "In Progress"
        CANCELLED = "Cancelled", "Cancelled"

    class Kind(models.TextChoices):
        STAY = "Stay", "Guest stay"
        BLOCK = "Block", "Closed unit"

    class Source(models.TextChoices):
        WEBSITE = "Website", "Website"
        PHONE = "Phone", "Phone"
        WALK_IN = "Walk-in", "Walk-in"
        AGENT = "Agent", "Agent"

    class PaymentMethod(models.TextChoices):
        CREDIT_CARD = "Credit Card", "Credit Card"
        CASH = "Cash", "Cash"
        BANK_TRANSFER = "Bank Transfer", "Bank Transfer"

    # Linked entities
    unit = models.ForeignKey(
        Unit, on_delete=models.CASCADE, related_name="bookings", db_index=True
    )
    contact = models.ForeignKey(
        Contact,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="bookings",
        help_text="Empty for guests without an email and for closed-unit blocks",
    )
    client_name = models.CharField(max_length=255)
    kind = models.CharField(max_length=10, choices=Kind.choices, default=Kind.STAY)
    uid = models.UUIDField(
        default=uuid.uuid4,
        editable=False,
        db_index=True,
        unique=True,
        help_text="Public booking reference",
    )

    # Stay details: nights [check_in, check_out)
    check_in = models.DateField()
    check_out = models.DateField()
    status = models.CharField(
        max_length=20, choices=Status.choices, default=Status.PENDING
    )

    # Pricing & payment
    price = models.DecimalField(
        max_digits=12, decimal_places=2, default=0, help_text="Total for the stay"
    )
    paid_amount = models.DecimalField(
        max_digits=12, decimal_places=2, null=True, blank=True
    )
    booking_source = models.CharField(
        max_length=20, choices=Source.choices, null=True, blank=True
    )
    payment_method = models.CharField(
        max_length=20, choices=PaymentMethod.choices, null=True, blank=True
    )
    notes = models.TextField(blank=True, default="")

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "bookings"
        ordering = ["-check_in", "-id"]
        indexes = [
            models.Index(fields=["unit", "check_in", "check_out"]),
        ]

    def __str__(self):
        return f"Booking #{self.id} ({self.client_name}, {self.check_in} → {self.check_out})"

    @property
    def nights(self):
        return max((self.check_out - self.check_in).days, 0)

    @property
    def is_block(self):
        return self.kind == self.Kind.BLOCK

    @property
    def is_cancelled(self):
        return self.status == self.Status.CANCELLED

    @property
    def is_fully_paid(self):
        return (self.paid_amount or Decimal("0")) >= (self.price or Decimal("0"))

    @property
    def is_cancellable(self):
        return not self.is_block and not self.is_cancelled
