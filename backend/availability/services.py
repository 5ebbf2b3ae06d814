import logging

from django.db import transaction

from bookings.models import Booking
from core.dateranges import ONE_DAY, to_day
from units.models import Unit
from .checker import bookings_on_date

logger = logging.getLogger(__name__)

CLOSED_UNIT_LABEL = "Unit closed"


class UnitsUnavailable(Exception):
    def __init__(self, unit_ids):
        self.unit_ids = sorted(unit_ids)
        super().__init__(f"Units already occupied: {', '.join(map(str, self.unit_ids))}")


def build_block(unit, day):
    """A one-night closed-unit booking: confirmed, free and without a contact."""
    day = to_day(day)
    return Booking(
        unit=unit,
        contact=None,
        client_name=CLOSED_UNIT_LABEL,
        kind=Booking.Kind.BLOCK,
        check_in=day,
        check_out=day + ONE_DAY,
        status=Booking.Status.CONFIRMED,
        price=0,
    )


def close_units(day, units):
    """
    Close ``units`` for the night of ``day``.

    Every unit must be free that night; otherwise nothing is written and
    ``UnitsUnavailable`` lists the occupied ones.
    """
    day = to_day(day)
    units = list(units)
    with transaction.atomic():
        # Lock the units so a concurrent booking or closure waits for this one
        list(Unit.objects.select_for_update().filter(id__in=[unit.id for unit in units]))
        existing = Booking.objects.filter(
            unit__in=units, check_in__lte=day, check_out__gt=day
        )
        occupied = {booking.unit_id for booking in bookings_on_date(day, existing)}
        if occupied:
            logger.warning(f"Refused to close occupied units {sorted(occupied)} on {day}")
            raise UnitsUnavailable(occupied)

        blocks = [build_block(unit, day) for unit in units]
        for block in blocks:
            block.save()

    logger.info(f"Closed {len(blocks)} unit(s) on {day}")
    return blocks
