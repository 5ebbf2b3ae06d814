"""
Which units are occupied on a given day.

A booking occupies its unit for every night in ``[check_in, check_out)``.
Cancelled guest bookings free the unit unless the caller asks to include
them; closed-unit blocks always occupy it.
"""

from core.dateranges import contains, overlaps, to_day
from pricing.resolver import resolve_price


def blocks_unit(booking, include_cancelled=False):
    if booking.is_block:
        return True
    return include_cancelled or not booking.is_cancelled


def bookings_on_date(day, bookings, include_cancelled=False):
    """Bookings whose stay covers the night of ``day``."""
    day = to_day(day)
    return [
        booking
        for booking in bookings
        if blocks_unit(booking, include_cancelled)
        and contains(booking.check_in, booking.check_out, day)
    ]


def is_unit_available(unit, day, bookings, include_cancelled=False):
    return not any(
        booking.unit_id == unit.id
        for booking in bookings_on_date(day, bookings, include_cancelled)
    )


def available_units(day, units, bookings, include_cancelled=False):
    occupied = {
        booking.unit_id for booking in bookings_on_date(day, bookings, include_cancelled)
    }
    return [unit for unit in units if unit.id not in occupied]


def is_unit_available_for_stay(unit, check_in, check_out, bookings, exclude_id=None):
    """
    True when no booking of ``unit`` shares a night with ``[check_in, check_out)``.

    ``exclude_id`` skips the booking being edited.
    """
    for booking in bookings:
        if booking.unit_id != unit.id:
            continue
        if exclude_id is not None and booking.id == exclude_id:
            continue
        if not blocks_unit(booking):
            continue
        if overlaps(booking.check_in, booking.check_out, check_in, check_out):
            return False
    return True


def cheapest_available_price(day, units, bookings, overrides=(), include_cancelled=False):
    """
    Lowest nightly price among the units free on ``day``, or ``None`` when
    every unit is taken. Drives the calendar's "from" price.
    """
    overrides = list(overrides)
    prices = [
        resolve_price(unit, day, overrides)
        for unit in available_units(day, units, bookings, include_cancelled)
    ]
    return min(prices) if prices else None
