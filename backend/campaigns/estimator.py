"""
WhatsApp campaign cost and scheduling rules.

Cost is linear in the number of recipients. The limits (message length,
attachment size, scheduling lead time) come from settings so the same rules
apply to the estimate endpoint and to campaign creation.
"""

from datetime import timedelta
from decimal import Decimal, ROUND_HALF_UP

from django.conf import settings
from django.utils import timezone

CENT = Decimal("0.01")


def estimate_cost(recipient_count, per_recipient_cost=None):
    """Total campaign cost, rounded to 2 decimals."""
    if per_recipient_cost is None:
        per_recipient_cost = settings.CAMPAIGN_COST_PER_RECIPIENT
    total = Decimal(recipient_count) * Decimal(str(per_recipient_cost))
    return total.quantize(CENT, rounding=ROUND_HALF_UP)


def earliest_schedule_time(now=None):
    now = now or timezone.now()
    return now + timedelta(hours=settings.CAMPAIGN_MIN_SCHEDULE_HOURS)


def validate_campaign(message, attachment_size_bytes, scheduled_at, now=None):
    """
    Check a campaign against the sending rules.

    Returns ``{field: message}`` for every broken rule; empty when valid.
    """
    errors = {}

    max_length = settings.CAMPAIGN_MAX_MESSAGE_LENGTH
    if not (message or "").strip():
        errors["message"] = "Message cannot be empty."
    elif len(message) > max_length:
        errors["message"] = f"Message is limited to {max_length} characters."

    max_mb = settings.CAMPAIGN_MAX_ATTACHMENT_SIZE_MB
    if attachment_size_bytes and attachment_size_bytes > max_mb * 1024 * 1024:
        errors["attachment_size_bytes"] = f"File is too large. Max size is {max_mb}MB."

    if scheduled_at is None:
        errors["scheduled_at"] = (
            f"Please schedule the campaign at least "
            f"{settings.CAMPAIGN_MIN_SCHEDULE_HOURS} hours in advance."
        )
    elif scheduled_at < earliest_schedule_time(now):
        errors["scheduled_at"] = (
            f"Campaigns must be scheduled at least "
            f"{settings.CAMPAIGN_MIN_SCHEDULE_HOURS} hours in advance."
        )

    return errors
