"""Shared fixtures: a recording fake store and a SQLite-backed Store."""

from __future__ import annotations

import os
import sqlite3
import sys
from typing import Any

import pytest

# Add backend to path for imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from lightbnb.core.config import clear_settings_cache
from lightbnb.core.db import Store

SQLITE_SCHEMA = """
CREATE TABLE users (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL,
  email TEXT NOT NULL,
  password TEXT NOT NULL
);
CREATE UNIQUE INDEX users_email_lower_idx ON users (LOWER(email));

CREATE TABLE properties (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  owner_id INTEGER NOT NULL,
  title TEXT NOT NULL,
  description TEXT,
  thumbnail_photo_url TEXT NOT NULL DEFAULT '',
  cover_photo_url TEXT NOT NULL DEFAULT '',
  cost_per_night INTEGER NOT NULL DEFAULT 0,
  parking_spaces INTEGER NOT NULL DEFAULT 0,
  number_of_bathrooms INTEGER NOT NULL DEFAULT 0,
  number_of_bedrooms INTEGER NOT NULL DEFAULT 0,
  country TEXT NOT NULL DEFAULT '',
  street TEXT NOT NULL DEFAULT '',
  city TEXT NOT NULL DEFAULT '',
  province TEXT NOT NULL DEFAULT '',
  post_code TEXT NOT NULL DEFAULT '',
  active BOOLEAN NOT NULL DEFAULT 1
);

CREATE TABLE reservations (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  start_date TEXT NOT NULL,
  end_date TEXT NOT NULL,
  property_id INTEGER NOT NULL,
  guest_id INTEGER NOT NULL
);

CREATE TABLE property_reviews (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  guest_id INTEGER NOT NULL,
  property_id INTEGER NOT NULL,
  reservation_id INTEGER NOT NULL,
  rating INTEGER NOT NULL DEFAULT 0,
  message TEXT
);
"""

SEED_DATA = """
INSERT INTO users (id, name, email, password) VALUES
  (1, 'Alice', 'a@b.com', 'pw'),
  (2, 'Bob', 'bob@example.com', 'pw');

INSERT INTO properties (id, owner_id, title, cost_per_night, city, number_of_bedrooms) VALUES
  (1, 1, 'Cozy Loft', 9000, 'Vancouver', 1),
  (2, 1, 'Harbour View', 15000, 'North Vancouver', 3),
  (3, 2, 'Downtown Condo', 12000, 'Toronto', 2),
  (4, 2, 'Budget Room', 4000, 'Vancouver', 1);

INSERT INTO reservations (id, start_date, end_date, property_id, guest_id) VALUES
  (1, '2023-06-01', '2023-06-05', 3, 1),
  (2, '2023-01-15', '2023-01-20', 1, 1),
  (3, '2023-03-10', '2023-03-12', 2, 2);

INSERT INTO property_reviews (guest_id, property_id, reservation_id, rating) VALUES
  (1, 1, 2, 5),
  (2, 1, 2, 4),
  (2, 2, 3, 3),
  (1, 3, 1, 4);
"""


class RecordingStore:
    """Fake store that records statements and replays canned results."""

    def __init__(self, responses: list[list[dict[str, Any]]] | None = None, error: Exception | None = None):
        self.responses = list(responses or [])
        self.error = error
        self.calls: list[tuple[str, list[Any]]] = []

    def query(self, sql: str, params=None) -> list[dict[str, Any]]:
        self.calls.append((sql, list(params or [])))
        if self.error is not None:
            raise self.error
        return self.responses.pop(0) if self.responses else []


@pytest.fixture
def recording_store():
    return RecordingStore


@pytest.fixture
def sqlite_path(tmp_path):
    path = tmp_path / "lightbnb.db"
    conn = sqlite3.connect(path)
    try:
        conn.executescript(SQLITE_SCHEMA)
        conn.executescript(SEED_DATA)
        conn.commit()
    finally:
        conn.close()
    return path


@pytest.fixture
def sqlite_store(sqlite_path):
    return Store(lambda: sqlite3.connect(sqlite_path), driver=sqlite3, name="sqlite")


@pytest.fixture(autouse=True)
def _fresh_settings():
    clear_settings_cache()
    yield
    clear_settings_cache()
