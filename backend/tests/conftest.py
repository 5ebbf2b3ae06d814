"""
Shared fixtures: an operator with one group, a unit factory with the
pricing fields filled in, and authenticated API clients.
"""

from decimal import Decimal

import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient

from bookings.models import Booking
from contacts.models import Contact
from pricing.models import PricingOverride
from units.models import Unit, SpecialDatePrice, default_weekday_prices
from unit_groups.models import UnitGroup


@pytest.fixture
def user(db):
    return User.objects.create_user(username="operator", email="ops@example.com", password="pass1234")


@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="intruder", email="other@example.com", password="pass1234")


@pytest.fixture
def api_client(user):
    client = APIClient()
    client.force_authenticate(user=user)
    return client


@pytest.fixture
def group(user):
    return UnitGroup.objects.create(user=user, name="Red Sea Chalets")


@pytest.fixture
def second_group(user):
    return UnitGroup.objects.create(
        user=user, name="City Apartments", group_type=UnitGroup.GroupType.APARTMENTS
    )


@pytest.fixture
def make_unit(group):
    def _make_unit(name="Chalet", base_rate=100, weekday_prices=None, special=None, **extra):
        prices = default_weekday_prices()
        prices.update(weekday_prices or {})
        unit = Unit.objects.create(
            group=extra.pop("group", group),
            name=name,
            base_rate=Decimal(str(base_rate)),
            weekday_prices=prices,
            **extra,
        )
        for day, price in (special or {}).items():
            SpecialDatePrice.objects.create(unit=unit, date=day, price=Decimal(str(price)))
        return unit

    return _make_unit


@pytest.fixture
def make_override(user):
    def _make_override(units, start, end, price, name="Season"):
        override = PricingOverride.objects.create(
            user=user, name=name, start_date=start, end_date=end, price=Decimal(str(price))
        )
        override.units.set(units)
        return override

    return _make_override


@pytest.fixture
def make_booking():
    def _make_booking(unit, check_in, check_out, status=Booking.Status.CONFIRMED, price=0, **extra):
        return Booking.objects.create(
            unit=unit,
            client_name=extra.pop("client_name", "Guest"),
            check_in=check_in,
            check_out=check_out,
            status=status,
            price=Decimal(str(price)),
            **extra,
        )

    return _make_booking


@pytest.fixture
def contact(user):
    return Contact.objects.create(user=user, name="Ann Smith", email="Ann@X.com", phone="+966 5000")
