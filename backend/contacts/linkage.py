"""
Contact resolution for the booking form.

The form carries free-text client details. A contact is matched by email,
case-insensitively, so repeat guests keep one identity. A guest with an email
and no match becomes a new contact. A guest without an email gets a transient
contact that is never saved or deduplicated; the resulting booking keeps the
client's name but no contact reference.
"""

from collections import namedtuple
from decimal import Decimal, InvalidOperation

from .models import Contact

ContactMatch = namedtuple("ContactMatch", ["contact", "is_new", "is_transient"])


def normalize_email(email):
    return (email or "").strip().lower()


def _amount(value):
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return Decimal("0")


def payment_status(paid_amount, price):
    """"Paid" once the paid amount covers the price; a missing amount counts as zero."""
    if _amount(paid_amount) >= _amount(price):
        return Contact.Payment.PAID
    return Contact.Payment.PENDING


def find_contact_by_email(email, contacts):
    email = normalize_email(email)
    if not email:
        return None
    for contact in contacts:
        if normalize_email(contact.email) == email:
            return contact
    return None


def resolve_or_create_contact(form, existing_contacts):
    """
    Resolve the contact for a booking form submission.

    ``form`` is a mapping with ``client_name``, ``client_email``,
    ``client_phone``, ``price`` and optionally ``paid_amount``. New contacts
    are returned unsaved; persisting them is the caller's job.
    """
    email = (form.get("client_email") or "").strip()

    match = find_contact_by_email(email, existing_contacts)
    if match is not None:
        return ContactMatch(match, is_new=False, is_transient=False)

    contact = Contact(
        name=form.get("client_name") or "",
        email=email,
        phone=form.get("client_phone") or "",
        review=0,
    )
    if email:
        # Only a paid amount that was actually entered can settle the booking
        paid = form.get("paid_amount")
        contact.payment = (
            payment_status(paid, form.get("price"))
            if paid not in (None, "")
            else Contact.Payment.PENDING
        )
        return ContactMatch(contact, is_new=True, is_transient=False)

    return ContactMatch(contact, is_new=False, is_transient=True)
