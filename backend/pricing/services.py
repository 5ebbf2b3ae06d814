import logging
from decimal import Decimal

from django.db import transaction

from core.dateranges import to_day
from units.models import SpecialDatePrice

logger = logging.getLogger(__name__)


def apply_special_prices(day, prices_by_unit):
    """
    Set or clear the special-date price of several units for one day.

    ``prices_by_unit`` maps a unit id to a price; an empty value removes that
    unit's special price for the day. Returns ``(updated, cleared)`` unit ids.
    """
    day = to_day(day)
    updated, cleared = [], []
    with transaction.atomic():
        for unit_id, price in prices_by_unit.items():
            if price is None or str(price).strip() == "":
                SpecialDatePrice.objects.filter(unit_id=unit_id, date=day).delete()
                cleared.append(unit_id)
                continue
            SpecialDatePrice.objects.update_or_create(
                unit_id=unit_id,
                date=day,
                defaults={"price": Decimal(str(price))},
            )
            updated.append(unit_id)

    logger.info(f"Special prices on {day}: set for {updated}, cleared for {cleared}")
    return updated, cleared
