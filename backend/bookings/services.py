"""
Booking intake and cancellation.

``create_booking`` is the booking form's write path: it resolves the guest to
a contact, prices the stay when the form did not carry a price, and saves the
contact and the booking together. New bookings always start as Pending, even
when fully paid.
"""

import logging
from decimal import Decimal

from django.db import transaction

from availability.checker import is_unit_available_for_stay
from contacts.linkage import resolve_or_create_contact
from contacts.models import Contact
from pricing.models import PricingOverride
from pricing.resolver import stay_total_price
from units.models import Unit
from .models import Booking

logger = logging.getLogger(__name__)


class BookingNotCancellable(Exception):
    """Raised when cancelling a closed-unit block or an already cancelled booking."""


class StayUnavailable(Exception):
    """Raised when another booking already holds a night of the requested stay."""


def build_booking(form, contact_id):
    """Assemble an unsaved booking from booking form input."""
    unit = form["unit"]
    paid_amount = form.get("paid_amount")
    return Booking(
        unit_id=getattr(unit, "id", unit),
        contact_id=contact_id,
        client_name=form.get("client_name") or "",
        kind=Booking.Kind.STAY,
        check_in=form["check_in"],
        check_out=form["check_out"],
        status=Booking.Status.PENDING,
        price=form.get("price") or Decimal("0"),
        paid_amount=None if paid_amount in (None, "") else Decimal(str(paid_amount)),
        booking_source=form.get("booking_source") or None,
        payment_method=form.get("payment_method") or None,
        notes=form.get("notes") or "",
    )


def quote_for_form(user, unit, check_in, check_out):
    overrides = PricingOverride.objects.filter(user=user).prefetch_related("units")
    return stay_total_price(unit, check_in, check_out, overrides)


def create_booking(user, form):
    """
    Persist a booking form submission for ``user``.

    Returns ``(booking, contact_match)``. The unit is locked while its
    bookings are checked, so two overlapping submissions cannot both succeed;
    the loser gets ``StayUnavailable``.
    """
    form = dict(form)
    if form.get("price") is None:
        form["price"] = quote_for_form(user, form["unit"], form["check_in"], form["check_out"])

    email = (form.get("client_email") or "").strip()
    candidates = Contact.objects.filter(user=user, email__iexact=email) if email else []

    with transaction.atomic():
        unit = Unit.objects.select_for_update().get(pk=getattr(form["unit"], "pk", form["unit"]))
        existing = Booking.objects.filter(
            unit=unit, check_in__lt=form["check_out"], check_out__gt=form["check_in"]
        )
        if not is_unit_available_for_stay(unit, form["check_in"], form["check_out"], existing):
            logger.warning(f"Refused overlapping booking on unit {unit.id}")
            raise StayUnavailable("This unit is already booked for the selected dates.")

        match = resolve_or_create_contact(form, candidates)
        if match.is_new:
            match.contact.user = user
            match.contact.save()
            logger.info(f"Contact {match.contact.id} created from booking form")

        contact_id = None if match.is_transient else match.contact.id
        booking = build_booking(form, contact_id)
        booking.save()

    logger.info(
        f"Booking {booking.id} created for unit {booking.unit_id} "
        f"({booking.check_in} → {booking.check_out}, price {booking.price})"
    )
    return booking, match


def cancellable_bookings(bookings):
    """Bookings the operator may cancel: guest stays that are not cancelled yet."""
    return [booking for booking in bookings if booking.is_cancellable]


def cancel_booking(booking):
    if booking.is_block:
        logger.warning(f"Refused to cancel closed-unit block {booking.id}")
        raise BookingNotCancellable("Closed-unit blocks cannot be cancelled.")
    if booking.is_cancelled:
        raise BookingNotCancellable("This booking is already cancelled.")

    booking.status = Booking.Status.CANCELLED
    booking.save(update_fields=["status", "updated_at"])
    logger.info(f"Booking {booking.id} cancelled")
    return booking
