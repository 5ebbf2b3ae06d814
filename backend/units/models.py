from django.db import models
from unit_groups.models import UnitGroup

WEEKDAYS = (
    "sunday",
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
)


def default_amenities():
    return {
        "has_pool": False,
        "pool_specs": "",
        "has_garden": False,
        "garden_specs": "",
        "has_kitchen": False,
        "bedrooms": [],
        "bathrooms": 0,
        "entertainment_areas": [],
        "other": [],
    }


def default_weekday_prices():
    return {day: 0 for day in WEEKDAYS}


class Unit(models.Model):
    class Status(models.TextChoices):
        ACTIVE = "Active", "Active"
        INACTIVE = "Inactive", "Inactive"

    # Foreign key to UnitGroup
    group = models.ForeignKey(
        UnitGroup, on_delete=models.CASCADE, related_name="units", db_index=True
    )

    # Basic Information
    name = models.CharField(max_length=255, help_text="Unit Name")
    unit_type = models.CharField(
        max_length=20,
        choices=UnitGroup.GroupType.choices,
        default=UnitGroup.GroupType.CHALETS,
    )
    status = models.CharField(
        max_length=10, choices=Status.choices, default=Status.ACTIVE
    )
    short_description = models.CharField(max_length=500, blank=True, default="")
    long_description = models.TextField(blank=True, default="")
    area = models.DecimalField(
        max_digits=8, decimal_places=2, default=0, help_text="Size in square meters"
    )
    max_guests = models.PositiveIntegerField(default=0)
    parking_available = models.BooleanField(default=False)
    check_in_hour = models.PositiveSmallIntegerField(default=15, help_text="24h format")
    check_out_hour = models.PositiveSmallIntegerField(default=11, help_text="24h format")

    # Amenities & Features
    amenities = models.JSONField(default=default_amenities, blank=True)

    # Pricing
    base_rate = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        default=0,
        help_text="Fallback nightly price",
    )
    weekday_prices = models.JSONField(
        default=default_weekday_prices,
        blank=True,
        help_text="Nightly price per weekday (sunday..saturday); 0 falls back to base_rate",
    )

    # Policies
    cancellation_policy = models.TextField(blank=True, default="")

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "units"
        ordering = ["id"]

    def __str__(self):
        return self.name


class SpecialDatePrice(models.Model):
    """A fixed price for one unit on one exact calendar date."""

    unit = models.ForeignKey(
        Unit,
        on_delete=models.CASCADE,
        related_name="special_prices",
        db_index=True,
    )
    date = models.DateField()
    price = models.DecimalField(
        max_digits=10,
        decimal_places=2,
        help_text="Price for the night",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "unit_special_prices"
        unique_together = (("unit", "date"),)
        ordering = ["unit_id", "date"]

    def __str__(self):
        return f"{self.unit.name} @ {self.date}: {self.price}"
