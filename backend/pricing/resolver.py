"""
Nightly price resolution.

The price of one unit for one night is the first match of:

1. the unit's special-date price for that exact day;
2. the period override with the highest id among those listing the unit and
   covering the day (``start_date <= day <= end_date``);
3. the unit's weekday price for that day, when set and non-zero;
4. the unit's base rate.

Stay totals are the sum of the nightly prices over ``[check_in, check_out)``.
Nothing here raises for missing data: unset or unparsable prices count as
zero and fall through to the next step.

Units and overrides are read through their loaded relations
(``unit.special_prices.all()``, ``override.units.all()``), so callers pricing
many nights should ``prefetch_related`` them first.
"""

from decimal import Decimal, InvalidOperation

from core.dateranges import iter_days, iter_nights, to_day
from units.models import WEEKDAYS

ZERO = Decimal("0")


def to_decimal(value):
    if value is None or value == "":
        return ZERO
    try:
        return Decimal(str(value))
    except InvalidOperation:
        return ZERO


def weekday_name(day):
    """Weekday key for ``day`` with Sunday first, matching ``Unit.weekday_prices``."""
    return WEEKDAYS[(day.weekday() + 1) % 7]


def special_date_price(unit, day):
    for special in unit.special_prices.all():
        if special.date == day:
            return special.price
    return None


def winning_override(unit, day, overrides):
    """The applicable period override with the highest id, or ``None``."""
    best = None
    for override in overrides:
        if not override.covers(unit.id, day):
            continue
        if best is None or override.id > best.id:
            best = override
    return best


def weekday_price(unit, day):
    prices = unit.weekday_prices or {}
    price = to_decimal(prices.get(weekday_name(day)))
    if price:
        return price
    return to_decimal(unit.base_rate)


def resolve_price(unit, day, overrides=()):
    """Nightly price of ``unit`` on ``day``."""
    day = to_day(day)

    special = special_date_price(unit, day)
    if special is not None:
        return to_decimal(special)

    override = winning_override(unit, day, overrides)
    if override is not None:
        return to_decimal(override.price)

    return weekday_price(unit, day)


def price_source(unit, day, overrides=()):
    """Name of the cascade step that priced ``unit`` on ``day``."""
    day = to_day(day)
    if special_date_price(unit, day) is not None:
        return "special"
    if winning_override(unit, day, overrides) is not None:
        return "override"
    if to_decimal((unit.weekday_prices or {}).get(weekday_name(day))):
        return "weekday"
    return "base"


def quote_stay(unit, check_in, check_out, overrides=()):
    """
    Price a stay night by night.

    Returns ``(total, nights)`` where ``nights`` is a list of ``(day, price)``.
    A stay whose check-out is not after its check-in has no nights and a total
    of zero.
    """
    overrides = list(overrides)
    nights = [
        (night, resolve_price(unit, night, overrides))
        for night in iter_nights(check_in, check_out)
    ]
    total = sum((price for _, price in nights), ZERO)
    return total, nights


def stay_total_price(unit, check_in, check_out, overrides=()):
    total, _ = quote_stay(unit, check_in, check_out, overrides)
    return total


def daily_prices(units, first, last, overrides=()):
    """Calendar grid: ``{unit_id: [(day, price), ...]}`` for ``first``..``last`` inclusive."""
    overrides = list(overrides)
    days = list(iter_days(first, last))
    return {
        unit.id: [(day, resolve_price(unit, day, overrides)) for day in days]
        for unit in units
    }
