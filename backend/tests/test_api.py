from datetime import date, timedelta
from decimal import Decimal

import pytest
from django.utils import timezone
from rest_framework.test import APIClient

from bookings.models import Booking
from calendars.models import ExternalCalendar
from contacts.models import Contact, Review
from accounts.formatting import format_currency
from units.models import SpecialDatePrice, Unit

pytestmark = pytest.mark.django_db


def money(value):
    return Decimal(str(value))


def test_requires_authentication():
    response = APIClient().get("/api/bookings/")
    assert response.status_code == 401


class TestPricingApi:
    def test_quote(self, api_client, make_unit, make_override):
        unit = make_unit(base_rate=100, weekday_prices={"saturday": 150})
        make_override([unit], date(2025, 10, 3), date(2025, 10, 3), 90)

        response = api_client.get(
            "/api/pricing/quote/",
            {"unit": unit.id, "check_in": "2025-10-02", "check_out": "2025-10-05"},
        )

        assert response.status_code == 200
        nights = response.data["nights"]
        assert [str(n["date"]) for n in nights] == ["2025-10-02", "2025-10-03", "2025-10-04"]
        assert [n["source"] for n in nights] == ["base", "override", "weekday"]
        assert money(response.data["total"]) == Decimal("340")

    def test_quote_with_reversed_dates_is_zero(self, api_client, make_unit):
        unit = make_unit()
        response = api_client.get(
            "/api/pricing/quote/",
            {"unit": unit.id, "check_in": "2025-10-05", "check_out": "2025-10-02"},
        )
        assert response.status_code == 200
        assert response.data["nights"] == []
        assert money(response.data["total"]) == 0

    def test_quote_rejects_foreign_unit(self, other_user, make_unit):
        unit = make_unit()
        client = APIClient()
        client.force_authenticate(user=other_user)

        response = client.get(
            "/api/pricing/quote/",
            {"unit": unit.id, "check_in": "2025-10-02", "check_out": "2025-10-05"},
        )
        assert response.status_code == 400

    def test_calendar_from_prices_skip_booked_units(self, api_client, make_unit, make_booking):
        cheap = make_unit(name="Cheap", base_rate=80)
        make_unit(name="Pricey", base_rate=200)
        make_booking(cheap, date(2025, 10, 2), date(2025, 10, 3))

        response = api_client.get("/api/pricing/calendar/", {"start": "2025-10-01", "end": "2025-10-03"})

        assert response.status_code == 200
        assert len(response.data["units"]) == 2
        from_prices = [money(p["price"]) for p in response.data["from_prices"]]
        assert from_prices == [Decimal("80"), Decimal("200"), Decimal("80")]

    def test_calendar_group_scope(self, api_client, make_unit, second_group):
        make_unit(name="Chalet")
        apartment = make_unit(name="Flat", group=second_group)

        response = api_client.get(
            "/api/pricing/calendar/",
            {"start": "2025-10-01", "end": "2025-10-01", "group": second_group.id},
        )

        assert [row["unit_id"] for row in response.data["units"]] == [apartment.id]

    def test_calendar_rejects_bad_group(self, api_client):
        response = api_client.get(
            "/api/pricing/calendar/", {"start": "2025-10-01", "end": "2025-10-01", "group": "x"}
        )
        assert response.status_code == 400

    def test_adjust_sets_and_clears_special_prices(self, api_client, make_unit):
        kept = make_unit(name="A")
        cleared = make_unit(name="B", special={date(2025, 12, 31): 999})

        response = api_client.post(
            "/api/pricing/adjust/",
            {"date": "2025-12-31", "prices": {str(kept.id): "1500", str(cleared.id): ""}},
            format="json",
        )

        assert response.status_code == 200
        assert response.data["updated_unit_ids"] == [kept.id]
        assert response.data["cleared_unit_ids"] == [cleared.id]
        assert SpecialDatePrice.objects.get(unit=kept).price == Decimal("1500")
        assert not SpecialDatePrice.objects.filter(unit=cleared).exists()

    @pytest.mark.parametrize("price", ["NaN", "Infinity", "-Infinity", "1e20", "-5", "abc"])
    def test_adjust_rejects_unusable_prices(self, api_client, make_unit, price):
        unit = make_unit()

        response = api_client.post(
            "/api/pricing/adjust/",
            {"date": "2025-12-31", "prices": {str(unit.id): price}},
            format="json",
        )

        assert response.status_code == 400
        assert str(unit.id) in response.data["errors"]["prices"]
        assert not SpecialDatePrice.objects.exists()

    def test_adjust_accepts_json_numbers(self, api_client, make_unit):
        unit = make_unit()

        response = api_client.post(
            "/api/pricing/adjust/",
            {"date": "2025-12-31", "prices": {str(unit.id): 99999999.5}},
            format="json",
        )

        assert response.status_code == 200
        assert SpecialDatePrice.objects.get(unit=unit).price == Decimal("99999999.50")

    def test_override_validation(self, api_client, make_unit):
        unit = make_unit()
        response = api_client.post(
            "/api/pricing/overrides/",
            {"name": "Eid", "start_date": "2025-10-10", "end_date": "2025-10-01",
             "units": [unit.id], "price": "300"},
            format="json",
        )
        assert response.status_code == 400
        assert "end_date" in response.data

    def test_newer_override_wins(self, api_client, make_unit):
        unit = make_unit()
        for name, price in (("Season", "80"), ("Eid", "95")):
            response = api_client.post(
                "/api/pricing/overrides/",
                {"name": name, "start_date": "2025-10-01", "end_date": "2025-10-10",
                 "units": [unit.id], "price": price},
                format="json",
            )
            assert response.status_code == 201

        response = api_client.get(
            "/api/pricing/quote/",
            {"unit": unit.id, "check_in": "2025-10-02", "check_out": "2025-10-03"},
        )
        assert money(response.data["total"]) == Decimal("95")


class TestAvailabilityApi:
    def test_day_availability(self, api_client, make_unit, make_booking):
        booked = make_unit(name="Booked", base_rate=80)
        free = make_unit(name="Free", base_rate=120)
        make_booking(booked, date(2025, 10, 2), date(2025, 10, 5))

        response = api_client.get("/api/availability/day/", {"date": "2025-10-03"})

        assert response.status_code == 200
        assert [u["id"] for u in response.data["available_units"]] == [free.id]
        assert response.data["occupied_unit_ids"] == [booked.id]
        assert money(response.data["cheapest_price"]) == Decimal("120")

    def test_include_cancelled(self, api_client, make_unit, make_booking):
        unit = make_unit()
        make_booking(unit, date(2025, 10, 2), date(2025, 10, 5), status=Booking.Status.CANCELLED)

        default = api_client.get("/api/availability/day/", {"date": "2025-10-03"})
        strict = api_client.get(
            "/api/availability/day/", {"date": "2025-10-03", "include_cancelled": "true"}
        )

        assert [u["id"] for u in default.data["available_units"]] == [unit.id]
        assert strict.data["available_units"] == []
        assert strict.data["cheapest_price"] is None

    @pytest.mark.parametrize("value", ["tomorrow", "2025-10-02xyz", ""])
    def test_invalid_date(self, api_client, value):
        assert api_client.get("/api/availability/day/", {"date": value}).status_code == 400

    def test_date_with_time_part(self, api_client, make_unit):
        make_unit()
        response = api_client.get("/api/availability/day/", {"date": "2025-10-03T09:30"})
        assert response.status_code == 200
        assert str(response.data["date"]) == "2025-10-03"

    def test_close_units(self, api_client, make_unit):
        unit = make_unit()

        response = api_client.post(
            "/api/availability/close-units/",
            {"date": "2025-10-03", "unit_ids": [unit.id]},
            format="json",
        )

        assert response.status_code == 201
        assert response.data[0]["kind"] == Booking.Kind.BLOCK
        assert response.data[0]["is_cancellable"] is False
        day = api_client.get("/api/availability/day/", {"date": "2025-10-03"})
        assert day.data["available_units"] == []

    def test_close_occupied_unit_is_rejected(self, api_client, make_unit, make_booking):
        unit = make_unit()
        make_booking(unit, date(2025, 10, 2), date(2025, 10, 5))

        response = api_client.post(
            "/api/availability/close-units/",
            {"date": "2025-10-03", "unit_ids": [unit.id]},
            format="json",
        )

        assert response.status_code == 400
        assert response.data["unit_ids"] == [unit.id]

    def test_close_unknown_unit(self, api_client):
        response = api_client.post(
            "/api/availability/close-units/",
            {"date": "2025-10-03", "unit_ids": [999]},
            format="json",
        )
        assert response.status_code == 400


class TestBookingApi:
    def payload(self, unit, **extra):
        data = {
            "client_name": "Ann Smith",
            "client_email": "ann@x.com",
            "client_phone": "+966 5000",
            "unit": unit.id,
            "check_in": "2025-10-02",
            "check_out": "2025-10-05",
            "paid_amount": "300.00",
        }
        data.update(extra)
        return data

    def test_create_links_existing_contact(self, api_client, make_unit, contact):
        unit = make_unit(base_rate=100)

        response = api_client.post("/api/bookings/", self.payload(unit), format="json")

        assert response.status_code == 201
        assert response.data["contact"] == contact.id
        assert response.data["status"] == Booking.Status.PENDING
        assert money(response.data["price"]) == Decimal("300")
        assert response.data["is_fully_paid"] is True
        assert Contact.objects.count() == 1

    def test_create_rejects_reversed_dates(self, api_client, make_unit):
        unit = make_unit()
        response = api_client.post(
            "/api/bookings/", self.payload(unit, check_out="2025-10-02"), format="json"
        )
        assert response.status_code == 400
        assert "check_out" in response.data

    def test_create_rejects_double_booking(self, api_client, make_unit, make_booking):
        unit = make_unit()
        make_booking(unit, date(2025, 10, 4), date(2025, 10, 6))

        response = api_client.post("/api/bookings/", self.payload(unit), format="json")
        assert response.status_code == 400

    def test_cancelled_stay_does_not_block_new_booking(self, api_client, make_unit, make_booking):
        unit = make_unit()
        make_booking(unit, date(2025, 10, 2), date(2025, 10, 5), status=Booking.Status.CANCELLED)

        response = api_client.post("/api/bookings/", self.payload(unit), format="json")
        assert response.status_code == 201

    def test_cancel_and_cancellable(self, api_client, make_unit, make_booking):
        unit = make_unit()
        stay = make_booking(unit, date(2025, 10, 2), date(2025, 10, 5))
        api_client.post(
            "/api/availability/close-units/",
            {"date": "2025-10-10", "unit_ids": [unit.id]},
            format="json",
        )
        block = Booking.objects.get(kind=Booking.Kind.BLOCK)

        cancellable = api_client.get("/api/bookings/cancellable/")
        assert [b["id"] for b in cancellable.data] == [stay.id]

        assert api_client.post(f"/api/bookings/{block.id}/cancel/").status_code == 400
        response = api_client.post(f"/api/bookings/{stay.id}/cancel/")
        assert response.status_code == 200
        assert response.data["status"] == Booking.Status.CANCELLED
        assert api_client.post(f"/api/bookings/{stay.id}/cancel/").status_code == 400

    def test_list_is_scoped_to_group(self, api_client, make_unit, make_booking, second_group):
        chalet = make_unit(name="Chalet")
        flat = make_unit(name="Flat", group=second_group)
        make_booking(chalet, date(2025, 10, 2), date(2025, 10, 5))
        flat_booking = make_booking(flat, date(2025, 10, 2), date(2025, 10, 5))

        response = api_client.get("/api/bookings/", {"group": second_group.id})

        assert [b["id"] for b in response.data] == [flat_booking.id]

    def test_other_operators_bookings_are_hidden(self, other_user, make_unit, make_booking):
        booking = make_booking(make_unit(), date(2025, 10, 2), date(2025, 10, 5))
        client = APIClient()
        client.force_authenticate(user=other_user)

        assert client.get(f"/api/bookings/{booking.id}/").status_code == 404


class TestDashboardApi:
    def test_stats(self, api_client, make_unit, make_booking):
        a = make_unit(name="A")
        b = make_unit(name="B")
        make_booking(a, date(2025, 10, 1), date(2025, 10, 4), price=1500)
        make_booking(b, date(2025, 10, 9), date(2025, 10, 12), price=900, status=Booking.Status.PENDING)

        response = api_client.get("/api/dashboard/stats/", {"from": "2025-10-01", "to": "2025-10-04"})

        assert response.status_code == 200
        stats = response.data["stats"]
        assert stats["total_bookings"] == 1
        assert stats["total_units"] == 2
        assert money(stats["total_revenue"]) == Decimal("1500")
        assert stats["occupancy_rate"] == pytest.approx(3 / 8)
        assert stats["occupancy_display"] == "37.5%"
        assert stats["total_revenue_display"] == "1,500 SAR"
        assert response.data["monthly"][0]["name"] == "Oct 2025"
        assert len(response.data["recent_bookings"]) == 2

    def test_reversed_range_is_zero(self, api_client, make_unit, make_booking):
        unit = make_unit()
        make_booking(unit, date(2025, 10, 1), date(2025, 10, 4), price=1500)

        response = api_client.get("/api/dashboard/stats/", {"from": "2025-10-10", "to": "2025-10-01"})

        assert response.status_code == 200
        assert response.data["stats"]["total_bookings"] == 0
        assert response.data["stats"]["occupancy_rate"] == 0

    def test_arabic_currency_display(self, api_client, user, make_unit, make_booking):
        make_booking(make_unit(), date(2025, 10, 1), date(2025, 10, 4), price=1500)

        response = api_client.get(
            "/api/dashboard/stats/", {"from": "2025-10-01", "to": "2025-10-31", "lang": "ar"}
        )

        assert response.data["stats"]["total_revenue_display"] == "1,500 ر.س"


class TestCampaignApi:
    def test_estimate(self, api_client, user):
        ids = [
            Contact.objects.create(user=user, name=f"Guest {i}", email=f"g{i}@x.com").id
            for i in range(4)
        ]

        response = api_client.post(
            "/api/campaigns/estimate/", {"use_selected": True, "contact_ids": ids[:3]}, format="json"
        )

        assert response.status_code == 200
        assert response.data["recipient_count"] == 3
        assert money(response.data["total_cost"]) == Decimal("0.59")

    def test_create_uses_all_contacts_without_selection(self, api_client, user):
        for i in range(2):
            Contact.objects.create(user=user, name=f"Guest {i}", email=f"g{i}@x.com")

        response = api_client.post(
            "/api/campaigns/",
            {
                "message": "Autumn offers",
                "scheduled_at": (timezone.now() + timedelta(days=3)).isoformat(),
                "use_selected": False,
            },
            format="json",
        )

        assert response.status_code == 201
        assert response.data["recipient_count"] == 2
        assert money(response.data["total_cost"]) == Decimal("0.39")

    def test_create_validation(self, api_client, contact):
        response = api_client.post(
            "/api/campaigns/",
            {
                "message": "x" * 501,
                "attachment_size_bytes": 11 * 1024 * 1024,
                "scheduled_at": (timezone.now() + timedelta(hours=1)).isoformat(),
            },
            format="json",
        )

        assert response.status_code == 400
        assert {"message", "attachment_size_bytes", "scheduled_at"} <= set(response.data)

    def test_create_without_contacts(self, api_client):
        response = api_client.post(
            "/api/campaigns/",
            {"message": "Hi", "scheduled_at": (timezone.now() + timedelta(days=3)).isoformat()},
            format="json",
        )
        assert response.status_code == 400
        assert "recipients" in response.data


class TestContactsApi:
    def test_list_shows_last_stay(self, api_client, contact, make_unit, make_booking):
        old = make_unit(name="Old")
        new = make_unit(name="New")
        make_booking(old, date(2025, 9, 1), date(2025, 9, 3), contact=contact)
        make_booking(new, date(2025, 10, 1), date(2025, 10, 3), contact=contact)
        Contact.objects.create(user=contact.user, name="No Stays", email="none@x.com")

        response = api_client.get("/api/contacts/")

        rows = {row["name"]: row for row in response.data}
        assert rows["Ann Smith"]["last_booking"] == "2025-10-01"
        assert rows["Ann Smith"]["last_unit"] == "New"
        assert rows["Ann Smith"]["last_group"] == "Red Sea Chalets"
        assert rows["No Stays"]["last_unit"] is None

        filtered = api_client.get("/api/contacts/", {"unit": old.id})
        assert filtered.data == []

    def test_duplicate_email_rejected(self, api_client, contact):
        response = api_client.post(
            "/api/contacts/",
            {"name": "Ann Again", "phone": "+966 1", "email": "ANN@x.com"},
            format="json",
        )
        assert response.status_code == 400
        assert "email" in response.data

    def test_review_score_follows_reviews(self, api_client, contact, make_unit):
        unit = make_unit()

        for rating in (4, 5):
            response = api_client.post(
                "/api/reviews/",
                {"contact": contact.id, "unit": unit.id, "rating": rating, "date": "2025-10-05"},
                format="json",
            )
            assert response.status_code == 201

        contact.refresh_from_db()
        assert contact.review == 5

        review = Review.objects.filter(rating=5).get()
        assert api_client.delete(f"/api/reviews/{review.id}/").status_code == 204
        contact.refresh_from_db()
        assert contact.review == 4

    def test_reviews_sorting(self, api_client, contact, make_unit):
        unit = make_unit()
        low = Review.objects.create(contact=contact, unit=unit, rating=2, date=date(2025, 10, 9))
        high = Review.objects.create(contact=contact, unit=unit, rating=5, date=date(2025, 10, 1))

        by_rating = api_client.get("/api/reviews/", {"sort": "rating", "direction": "desc"})
        by_date = api_client.get("/api/reviews/", {"sort": "date", "direction": "asc"})

        assert [r["id"] for r in by_rating.data] == [high.id, low.id]
        assert [r["id"] for r in by_date.data] == [high.id, low.id]
        assert api_client.get("/api/reviews/", {"sort": "name"}).status_code == 400

        stats = api_client.get("/api/reviews/stats/")
        assert stats.data["total_reviews"] == 2
        assert stats.data["average_rating"] == 3.5

    def test_reviews_reject_non_numeric_unit(self, api_client):
        for url in ("/api/reviews/", "/api/reviews/stats/"):
            response = api_client.get(url, {"unit": "abc"})
            assert response.status_code == 400
            assert "unit" in response.data


class TestCalendarsApi:
    def test_external_calendar_requires_ics(self, api_client, make_unit):
        unit = make_unit()

        bad = api_client.post(
            "/api/calendars/external/",
            {"unit": unit.id, "name": "Airbnb", "url": "https://example.com/feed"},
            format="json",
        )
        good = api_client.post(
            "/api/calendars/external/",
            {"unit": unit.id, "name": "Airbnb", "url": "https://example.com/feed.ICS"},
            format="json",
        )

        assert bad.status_code == 400
        assert good.status_code == 201

    def test_sync_stamps_last_synced(self, api_client, make_unit):
        calendar = ExternalCalendar.objects.create(
            unit=make_unit(), name="Booking.com", url="https://example.com/a.ics"
        )

        response = api_client.post(f"/api/calendars/external/{calendar.id}/sync/")

        assert response.status_code == 200
        calendar.refresh_from_db()
        assert calendar.last_synced is not None

    def test_export_urls(self, api_client, make_unit, settings):
        settings.CALENDAR_EXPORT_BASE_URL = "https://cal.example.com/export/"
        unit = make_unit()

        response = api_client.get("/api/calendars/export-urls/")

        assert response.data == [
            {"unit_id": unit.id, "unit_name": unit.name,
             "url": f"https://cal.example.com/export/unit-{unit.id}.ics"}
        ]


class TestAccountApi:
    def test_defaults_and_update(self, api_client, user):
        response = api_client.get("/api/account/")
        assert response.data["currency"] == "SAR"
        assert response.data["email"] == user.email

        response = api_client.patch("/api/account/", {"currency": "AED"}, format="json")
        assert response.status_code == 200
        assert response.data["currency"] == "AED"

    @pytest.mark.parametrize(
        "amount, currency, language, expected",
        [
            (1500, "SAR", "en", "1,500 SAR"),
            (1500, "SAR", "ar", "1,500 ر.س"),
            (Decimal("1234567.50"), "USD", "en", "1,234,567.5 USD"),
            (0, "EUR", "ar", "0 €"),
        ],
    )
    def test_format_currency(self, amount, currency, language, expected):
        assert format_currency(amount, currency, language) == expected


class TestUnitsApi:
    def test_create_fills_missing_weekdays(self, api_client, group):
        response = api_client.post(
            "/api/units/",
            {
                "group": group.id,
                "name": "Sunset Chalet",
                "base_rate": "800.00",
                "weekday_prices": {"friday": 1200},
                "special_prices": [{"date": "2025-12-31", "price": "1500.00"}],
            },
            format="json",
        )

        assert response.status_code == 201
        assert response.data["weekday_prices"]["friday"] == 1200
        assert response.data["weekday_prices"]["monday"] == 0
        assert len(response.data["special_prices"]) == 1

    def test_rejects_unknown_weekday_and_negative_price(self, api_client, group):
        for prices in ({"funday": 10}, {"monday": -5}):
            response = api_client.post(
                "/api/units/",
                {"group": group.id, "name": "Bad", "base_rate": "100", "weekday_prices": prices},
                format="json",
            )
            assert response.status_code == 400
            assert "weekday_prices" in response.data

    @pytest.mark.parametrize("price", ["NaN", "Infinity", "1e20", "12.345"])
    def test_rejects_non_finite_and_oversized_weekday_prices(self, api_client, group, price):
        response = api_client.post(
            "/api/units/",
            {"group": group.id, "name": "Bad", "base_rate": "100", "weekday_prices": {"monday": price}},
            format="json",
        )

        assert response.status_code == 400
        assert "monday" in response.data["weekday_prices"]
        assert not Unit.objects.exists()

    def test_delete_removes_bookings(self, api_client, make_unit, make_booking):
        unit = make_unit()
        make_booking(unit, date(2025, 10, 2), date(2025, 10, 5))

        assert api_client.delete(f"/api/units/{unit.id}/").status_code == 204
        assert not Booking.objects.exists()


class TestScopedConfigApi:
    def test_group_falls_back_to_all_groups_row(self, api_client, group):
        assert api_client.get("/api/unit-groups/website-settings/").status_code == 404

        created = api_client.put(
            "/api/unit-groups/website-settings/?group=all",
            {"website_title": "All chalets", "theme_color": "#000000"},
            format="json",
        )
        assert created.status_code == 201

        response = api_client.get("/api/unit-groups/website-settings/", {"group": group.id})
        assert response.data["website_title"] == "All chalets"

        api_client.put(
            f"/api/unit-groups/website-settings/?group={group.id}",
            {"website_title": "Red Sea", "theme_color": "#ffffff"},
            format="json",
        )
        response = api_client.get("/api/unit-groups/website-settings/", {"group": group.id})
        assert response.data["website_title"] == "Red Sea"

    def test_foreign_group_is_not_found(self, other_user, group):
        client = APIClient()
        client.force_authenticate(user=other_user)
        response = client.get("/api/unit-groups/ai-agent/", {"group": group.id})
        assert response.status_code == 404
