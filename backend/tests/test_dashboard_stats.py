from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest

from bookings.models import Booking
from core.dateranges import DateRange
from dashboard.stats import (
    compute_stats,
    dashboard_window,
    format_occupancy,
    monthly_series,
    occupancy_rate,
    recent_bookings,
)

UNITS = [SimpleNamespace(id=1), SimpleNamespace(id=2)]
OCTOBER = DateRange(date(2025, 10, 1), date(2025, 11, 1))


def booking(unit_id, check_in, check_out, price=0, status=Booking.Status.CONFIRMED, pk=None):
    return Booking(
        id=pk,
        unit_id=unit_id,
        client_name="Guest",
        check_in=check_in,
        check_out=check_out,
        status=status,
        price=Decimal(str(price)),
    )


class TestComputeStats:
    def test_counts_confirmed_bookings_starting_in_window(self):
        bookings = [
            booking(1, date(2025, 10, 2), date(2025, 10, 5), price=300),
            booking(2, date(2025, 10, 10), date(2025, 10, 12), price=200),
            booking(1, date(2025, 10, 20), date(2025, 10, 22), price=999, status=Booking.Status.PENDING),
            booking(2, date(2025, 9, 28), date(2025, 10, 3), price=500),
        ]

        stats = compute_stats(bookings, UNITS, OCTOBER)

        assert stats["total_bookings"] == 2
        assert stats["total_revenue"] == Decimal("500")
        assert stats["total_units"] == 2

    def test_occupancy_uses_overlap_across_window_edges(self):
        # 2 nights inside October from the September stay, 3 from the October one
        bookings = [
            booking(1, date(2025, 9, 28), date(2025, 10, 3)),
            booking(2, date(2025, 10, 30), date(2025, 11, 5)),
        ]
        window = DateRange(date(2025, 10, 1), date(2025, 10, 5))

        stats = compute_stats(bookings, UNITS, window)

        assert stats["total_bookings"] == 0
        assert stats["occupancy_rate"] == pytest.approx(2 / 8)

    def test_reversed_window_gives_zero_stats(self):
        bookings = [booking(1, date(2025, 10, 2), date(2025, 10, 5), price=300)]
        stats = compute_stats(bookings, UNITS, DateRange(date(2025, 10, 10), date(2025, 10, 1)))

        assert stats == {
            "total_bookings": 0,
            "total_revenue": Decimal("0"),
            "total_units": 2,
            "occupancy_rate": 0.0,
        }

    def test_no_units_gives_zero_occupancy(self):
        bookings = [booking(1, date(2025, 10, 2), date(2025, 10, 5), price=300)]
        assert compute_stats(bookings, [], OCTOBER)["occupancy_rate"] == 0.0

    def test_blocks_count_as_occupied_without_revenue(self):
        block = booking(1, date(2025, 10, 3), date(2025, 10, 4))
        block.kind = Booking.Kind.BLOCK

        stats = compute_stats([block], UNITS[:1], DateRange(date(2025, 10, 1), date(2025, 10, 5)))

        assert stats["total_bookings"] == 1
        assert stats["total_revenue"] == Decimal("0")
        assert stats["occupancy_rate"] == pytest.approx(0.25)


class TestOccupancyBounds:
    def test_zero_duration_window(self):
        bookings = [booking(1, date(2025, 10, 1), date(2025, 10, 5))]
        window = DateRange(date(2025, 10, 3), date(2025, 10, 3))
        assert occupancy_rate(bookings, UNITS, window) == 0.0

    def test_overlapping_bookings_never_exceed_one(self):
        bookings = [
            booking(1, date(2025, 10, 1), date(2025, 10, 5)),
            booking(1, date(2025, 10, 1), date(2025, 10, 5)),
            booking(1, date(2025, 10, 2), date(2025, 10, 4)),
        ]
        rate = occupancy_rate(bookings, UNITS[:1], DateRange(date(2025, 10, 1), date(2025, 10, 5)))
        assert 0 <= rate <= 1
        assert rate == 1.0

    def test_bookings_of_other_units_are_ignored(self):
        bookings = [booking(7, date(2025, 10, 1), date(2025, 10, 5))]
        assert occupancy_rate(bookings, UNITS, OCTOBER) == 0.0

    @pytest.mark.parametrize(
        "rate, expected",
        [(0.375, "37.5%"), (0, "0.0%"), (1, "100.0%"), (2 / 3, "66.7%")],
    )
    def test_format_occupancy(self, rate, expected):
        assert format_occupancy(rate) == expected


class TestSeries:
    def test_monthly_series_is_chronological(self):
        bookings = [
            booking(1, date(2025, 11, 3), date(2025, 11, 5), price=120),
            booking(1, date(2025, 10, 2), date(2025, 10, 5), price=300),
            booking(2, date(2025, 10, 20), date(2025, 10, 21), price=100),
            booking(2, date(2025, 10, 25), date(2025, 10, 27), price=50, status=Booking.Status.CANCELLED),
        ]
        window = DateRange(date(2025, 10, 1), date(2025, 12, 1))

        assert monthly_series(bookings, window) == [
            {"name": "Oct 2025", "revenue": Decimal("400"), "bookings": 2},
            {"name": "Nov 2025", "revenue": Decimal("120"), "bookings": 1},
        ]

    def test_recent_bookings_latest_first(self):
        bookings = [
            booking(1, date(2025, 10, day), date(2025, 10, day + 1), pk=day)
            for day in range(1, 9)
        ]
        recent = recent_bookings(bookings)
        assert [b.check_in.day for b in recent] == [8, 7, 6, 5, 4]

    def test_dashboard_window_includes_last_day(self):
        window = dashboard_window("2025-10-01", "2025-10-31")
        assert window == OCTOBER
        assert window.duration_days == 31
