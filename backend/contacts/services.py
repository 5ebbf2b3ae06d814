import logging
from decimal import Decimal, ROUND_HALF_UP

logger = logging.getLogger(__name__)


def review_score(ratings):
    """Rounded mean of ``ratings`` (halves round up), 0 for no ratings."""
    ratings = list(ratings)
    if not ratings:
        return 0
    mean = Decimal(sum(ratings)) / Decimal(len(ratings))
    return int(mean.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def recompute_review_score(contact):
    score = review_score(contact.reviews.values_list("rating", flat=True))
    if contact.review != score:
        contact.review = score
        contact.save(update_fields=["review", "updated_at"])
        logger.info(f"Contact {contact.id} review score set to {score}")
    return score


def last_booking(contact, bookings):
    """The contact's booking with the latest check-in, or ``None``."""
    latest = None
    for booking in bookings:
        if booking.contact_id != contact.id:
            continue
        if latest is None or booking.check_in > latest.check_in:
            latest = booking
    return latest


def contact_rows(contacts, bookings, units):
    """
    Pair every contact with its last booking and that booking's unit.

    Missing references resolve to ``None`` rather than raising.
    """
    bookings = list(bookings)
    units_by_id = {unit.id: unit for unit in units}
    rows = []
    for contact in contacts:
        booking = last_booking(contact, bookings)
        unit = units_by_id.get(booking.unit_id) if booking else None
        rows.append(
            {
                "contact": contact,
                "last_booking": booking,
                "last_unit": unit,
                "last_group": unit.group if unit else None,
            }
        )
    return rows


def sort_reviews(reviews, key="date", direction="desc"):
    if key not in ("date", "rating"):
        raise ValueError(f"Unsupported sort key: {key!r}")
    if direction not in ("asc", "desc"):
        raise ValueError(f"Unsupported sort direction: {direction!r}")
    return sorted(
        reviews,
        key=lambda review: (getattr(review, key), review.id),
        reverse=direction == "desc",
    )
