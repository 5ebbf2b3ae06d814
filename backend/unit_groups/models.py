from django.db import models
from django.contrib.auth.models import User


class UnitGroup(models.Model):
    class GroupType(models.TextChoices):
        CHALETS = "Chalets", "Chalets"
        APARTMENTS = "Apartments", "Apartments"
        HOTEL_ROOMS = "Hotel Rooms", "Hotel Rooms"

    # Group owner (one-to-many)
    user = models.ForeignKey(
        User,
        on_delete=models.CASCADE,
        related_name="unit_groups",
        help_text="Owner of the group",
    )

    # Basic Information
    name = models.CharField(max_length=255, help_text="Group Name")
    group_type = models.CharField(
        max_length=20, choices=GroupType.choices, default=GroupType.CHALETS
    )
    color = models.CharField(max_length=20, blank=True, null=True)

    # Legal & Administrative
    cr_number = models.CharField(max_length=100, blank=True, null=True)
    tourism_license_number = models.CharField(max_length=100, blank=True, null=True)

    # Location & Contact
    location_description = models.TextField(blank=True, null=True)
    google_maps_location = models.URLField(max_length=500, blank=True, null=True)
    phone_number = models.CharField(max_length=30, blank=True, null=True)
    social_media = models.JSONField(
        default=dict,
        blank=True,
        help_text="Handles keyed by network: instagram, tiktok, snapchat, facebook",
    )

    # Billing
    bank_name = models.CharField(max_length=255, blank=True, null=True)
    account_iban = models.CharField(max_length=64, blank=True, null=True)
    account_name = models.CharField(max_length=255, blank=True, null=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "unit_groups"
        ordering = ["id"]

    def __str__(self):
        return self.name


class WebsiteSettings(models.Model):
    """Public booking website settings. A null ``group`` is the "all groups" row."""

    user = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="website_settings"
    )
    group = models.ForeignKey(
        UnitGroup,
        on_delete=models.CASCADE,
        related_name="website_settings",
        null=True,
        blank=True,
    )
    home_page_picture = models.URLField(max_length=500, blank=True, null=True)
    theme_color = models.CharField(max_length=20, default="#f97316")
    website_title = models.CharField(max_length=255, blank=True, default="")
    website_description = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "website_settings"
        unique_together = (("user", "group"),)

    def __str__(self):
        return self.website_title or f"Website settings #{self.id}"


class AiAgentConfig(models.Model):
    """Booking assistant configuration. A null ``group`` is the "all groups" row."""

    class BookingMethod(models.TextChoices):
        FULL = "AI Agent Full Booking", "AI Agent Full Booking"
        WEBSITE_ONLY = "Website Only Booking", "Website Only Booking"

    user = models.ForeignKey(
        User, on_delete=models.CASCADE, related_name="ai_agent_configs"
    )
    group = models.ForeignKey(
        UnitGroup,
        on_delete=models.CASCADE,
        related_name="ai_agent_configs",
        null=True,
        blank=True,
    )
    active_conversations = models.PositiveIntegerField(default=0)
    max_conversations = models.PositiveIntegerField(default=100)
    booking_method = models.CharField(
        max_length=32, choices=BookingMethod.choices, default=BookingMethod.FULL
    )
    discount_enabled = models.BooleanField(default=False)
    discount_amount = models.DecimalField(
        max_digits=10, decimal_places=2, null=True, blank=True
    )
    coupon_code = models.CharField(max_length=50, blank=True, null=True)
    welcome_message = models.TextField(blank=True, default="")
    reminders = models.JSONField(default=list, blank=True)
    custom_roles = models.JSONField(default=list, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "ai_agent_configs"
        unique_together = (("user", "group"),)

    def __str__(self):
        return f"AI agent config ({self.group or 'all groups'})"
