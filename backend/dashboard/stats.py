"""
Booking statistics for the dashboard.

Counts and revenue attribute a booking to the window its check-in falls in.
Occupancy instead measures the nights each booking shares with the window, so
stays crossing the window's edges count only for their nights inside it.

Only Confirmed bookings count. Closed-unit blocks are stored as Confirmed
bookings with a zero price, so they add occupied nights but no revenue.
"""

from collections import OrderedDict
from decimal import Decimal

from bookings.models import Booking
from core.dateranges import DateRange

MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def is_confirmed(booking):
    return booking.status == Booking.Status.CONFIRMED


def occupancy_rate(bookings, units, window):
    """
    Share of the window's unit-nights taken by Confirmed bookings, as a ratio
    in ``[0, 1]``. Empty windows and empty unit sets yield 0.
    """
    unit_ids = {unit.id for unit in units}
    duration = window.duration_days
    if not unit_ids or duration <= 0:
        return 0.0

    nights_available = len(unit_ids) * duration
    nights_booked = sum(
        window.overlap_days(booking.check_in, booking.check_out)
        for booking in bookings
        if is_confirmed(booking) and booking.unit_id in unit_ids
    )
    return min(nights_booked / nights_available, 1.0)


def compute_stats(bookings, units, window):
    """
    ``{total_bookings, total_revenue, total_units, occupancy_rate}`` for the
    half-open ``window``. A reversed window gives zero-valued stats.
    """
    units = list(units)
    bookings = list(bookings)
    stats = {
        "total_bookings": 0,
        "total_revenue": Decimal("0"),
        "total_units": len(units),
        "occupancy_rate": 0.0,
    }
    if not window.is_valid or not units:
        return stats

    started = [
        booking for booking in bookings
        if is_confirmed(booking) and window.contains(booking.check_in)
    ]
    stats["total_bookings"] = len(started)
    stats["total_revenue"] = sum((booking.price for booking in started), Decimal("0"))
    stats["occupancy_rate"] = occupancy_rate(bookings, units, window)
    return stats


def format_occupancy(rate):
    """Display form of an occupancy ratio: ``0.375`` → ``"37.5%"``."""
    return f"{rate * 100:.1f}%"


def month_label(day):
    return f"{MONTH_LABELS[day.month - 1]} {day.year}"


def monthly_series(bookings, window):
    """
    Revenue and booking count per check-in month for Confirmed bookings
    starting inside ``window``, oldest month first.
    """
    months = OrderedDict()
    started = sorted(
        (b for b in bookings if is_confirmed(b) and window.contains(b.check_in)),
        key=lambda b: b.check_in,
    )
    for booking in started:
        key = (booking.check_in.year, booking.check_in.month)
        if key not in months:
            months[key] = {
                "name": month_label(booking.check_in),
                "revenue": Decimal("0"),
                "bookings": 0,
            }
        months[key]["revenue"] += booking.price
        months[key]["bookings"] += 1
    return list(months.values())


def recent_bookings(bookings, limit=5):
    """Latest check-ins first."""
    return sorted(bookings, key=lambda b: (b.check_in, b.id), reverse=True)[:limit]


def dashboard_window(first, last):
    """The dashboard's inclusive ``from``/``to`` pair as a half-open window."""
    return DateRange.inclusive(first, last)
