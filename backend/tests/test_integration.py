"""End-to-end tests of the accessors against a seeded SQLite database."""

from __future__ import annotations

import sqlite3

import pytest

from lightbnb.core.exceptions import DuplicateEmailError
from lightbnb.domain import (
    add_property,
    add_user,
    get_all_properties,
    get_all_reservations,
    get_user_with_email,
    get_user_with_id,
)


def _count(path, table: str) -> int:
    conn = sqlite3.connect(path)
    try:
        return conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
    finally:
        conn.close()


class TestUsers:
    def test_email_match_ignores_case(self, sqlite_store):
        user = get_user_with_email(sqlite_store, "A@B.com")
        assert user is not None
        assert user["id"] == 1
        assert user["email"] == "a@b.com"

    def test_unknown_email(self, sqlite_store):
        assert get_user_with_email(sqlite_store, "ghost@example.com") is None

    def test_user_by_id(self, sqlite_store):
        assert get_user_with_id(sqlite_store, 2)["name"] == "Bob"
        assert get_user_with_id(sqlite_store, 404) is None

    def test_add_user(self, sqlite_store, sqlite_path):
        user = add_user(sqlite_store, {"name": "Carol", "email": "carol@example.com", "password": "pw"})

        assert user["id"] == 3
        assert user["name"] == "Carol"
        assert _count(sqlite_path, "users") == 3
        assert get_user_with_email(sqlite_store, "CAROL@example.com")["id"] == 3

    def test_add_user_duplicate_email(self, sqlite_store, sqlite_path):
        """A case-insensitive duplicate is rejected and nothing is inserted."""
        with pytest.raises(DuplicateEmailError):
            add_user(sqlite_store, {"name": "Imposter", "email": "A@B.COM", "password": "pw"})

        assert _count(sqlite_path, "users") == 2


class TestReservations:
    def test_ordered_by_start_date(self, sqlite_store):
        reservations = get_all_reservations(sqlite_store, 1)

        assert [r["id"] for r in reservations] == [2, 1]
        assert [r["start_date"] for r in reservations] == ["2023-01-15", "2023-06-01"]
        assert reservations[0]["title"] == "Cozy Loft"
        assert reservations[0]["number_of_bedrooms"] == 1
        assert reservations[0]["average_rating"] == pytest.approx(4.5)
        assert reservations[1]["title"] == "Downtown Condo"

    def test_limit(self, sqlite_store):
        reservations = get_all_reservations(sqlite_store, 1, limit=1)
        assert [r["id"] for r in reservations] == [2]

    def test_guest_without_reservations(self, sqlite_store):
        assert get_all_reservations(sqlite_store, 99) == []


class TestPropertySearch:
    def test_no_filters_cheapest_first(self, sqlite_store):
        properties = get_all_properties(sqlite_store)
        assert [p["id"] for p in properties] == [4, 1, 3, 2]

    def test_limit(self, sqlite_store):
        assert [p["id"] for p in get_all_properties(sqlite_store, limit=2)] == [4, 1]

    def test_city_substring_ignores_case(self, sqlite_store):
        properties = get_all_properties(sqlite_store, {"city": "van"})
        assert [p["id"] for p in properties] == [4, 1, 2]

    def test_city_and_minimum_rating(self, sqlite_store):
        properties = get_all_properties(sqlite_store, {"city": "Van", "minimumRating": 4}, limit=5)

        assert [p["id"] for p in properties] == [1]
        assert properties[0]["average_rating"] == pytest.approx(4.5)

    def test_owner(self, sqlite_store):
        properties = get_all_properties(sqlite_store, {"ownerId": 2})
        assert [p["id"] for p in properties] == [4, 3]

    def test_price_range_in_dollars(self, sqlite_store):
        properties = get_all_properties(
            sqlite_store, {"minimumPricePerNight": 100, "maximumPricePerNight": 130}
        )
        assert [p["id"] for p in properties] == [3]

    def test_unreviewed_property_has_no_rating(self, sqlite_store):
        budget = get_all_properties(sqlite_store, {"maximumPricePerNight": 40})
        assert [p["id"] for p in budget] == [4]
        assert budget[0]["average_rating"] is None

    def test_no_match(self, sqlite_store):
        assert get_all_properties(sqlite_store, {"city": "Montreal"}) == []

    def test_city_wildcards_match_literally(self, sqlite_store):
        """LIKE wildcards in the city are plain characters, not patterns."""
        for city in ("_", "%", "Van%", "V_ncouver", "\\"):
            assert get_all_properties(sqlite_store, {"city": city}) == [], city

    def test_city_with_wildcard_characters(self, sqlite_store, sqlite_path):
        conn = sqlite3.connect(sqlite_path)
        try:
            conn.execute(
                "INSERT INTO properties (id, owner_id, title, cost_per_night, city) "
                "VALUES (5, 1, 'Odd Place', 5000, 'Test_City 100%')"
            )
            conn.commit()
        finally:
            conn.close()

        assert [p["id"] for p in get_all_properties(sqlite_store, {"city": "t_city 100%"})] == [5]
        assert [p["id"] for p in get_all_properties(sqlite_store, {"city": "_"})] == [5]


class TestAddProperty:
    def test_returns_created_row_in_cents(self, sqlite_store, sqlite_path):
        created = add_property(
            sqlite_store,
            {
                "owner_id": 1,
                "title": "Lakeside Cabin",
                "cost_per_night": "123.45",
                "city": "Kelowna",
                "province": "BC",
                "country": "Canada",
                "number_of_bedrooms": 2,
            },
        )

        assert created["id"] == 5
        assert created["cost_per_night"] == 12345
        assert created["title"] == "Lakeside Cabin"
        assert _count(sqlite_path, "properties") == 5

        found = get_all_properties(sqlite_store, {"city": "kelowna"})
        assert [p["id"] for p in found] == [5]
