import copy
import pathlib
import sys
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from campus_housing.main import app, limiter
from campus_housing.core.dependencies import get_current_user_id
from campus_housing.database.supabase_client import get_supabase
from campus_housing.modules.documents.routes import get_collection_getter
from campus_housing.modules.listings.geocoding import get_geocoder


def _lookup(row, column):
    """Resolve dotted columns (``listings.landlord_id``) through embedded rows."""
    value = row
    for part in column.split("."):
        if not isinstance(value, dict):
            return None
        value = value.get(part)
    return value


class FakeQuery:
    """Chainable stand-in for the postgrest query builder, backed by lists of dicts."""

    def __init__(self, db, table):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.order_by = None
        self.limit_n = None
        self.single_mode = None

    def _record(self, method, *args):
        self.db.calls.append((self.table, method) + args)
        return self

    def select(self, columns="*"):
        return self._record("select", columns)

    def insert(self, payload):
        self.op, self.payload = "insert", payload
        return self._record("insert", payload)

    def update(self, payload):
        self.op, self.payload = "update", payload
        return self._record("update", payload)

    def delete(self):
        self.op = "delete"
        return self._record("delete")

    def eq(self, column, value):
        self.filters.append(lambda row: _lookup(row, column) == value)
        return self._record("eq", column, value)

    def gte(self, column, value):
        self.filters.append(lambda row: _lookup(row, column) is not None and _lookup(row, column) >= value)
        return self._record("gte", column, value)

    def lte(self, column, value):
        self.filters.append(lambda row: _lookup(row, column) is not None and _lookup(row, column) <= value)
        return self._record("lte", column, value)

    def in_(self, column, values):
        self.filters.append(lambda row: _lookup(row, column) in values)
        return self._record("in_", column, list(values))

    def contains(self, column, values):
        self.filters.append(lambda row: set(values) <= set(_lookup(row, column) or []))
        return self._record("contains", column, list(values))

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self._record("order", column, desc)

    def limit(self, n):
        self.limit_n = n
        return self

    def maybe_single(self):
        self.single_mode = "maybe"
        return self

    def single(self):
        self.single_mode = "single"
        return self

    def _matching(self):
        rows = self.db.tables.setdefault(self.table, [])
        return [row for row in rows if all(f(row) for f in self.filters)]

    def execute(self):
        rows = self.db.tables.setdefault(self.table, [])
        if self.op == "insert":
            payloads = self.payload if isinstance(self.payload, list) else [self.payload]
            created = []
            for payload in payloads:
                row = {"id": str(uuid.uuid4()), "created_at": datetime.now(timezone.utc).isoformat()}
                row.update(copy.deepcopy(payload))
                rows.append(row)
                created.append(copy.deepcopy(row))
            return SimpleNamespace(data=created)
        if self.op == "update":
            matched = self._matching()
            for row in matched:
                row.update(copy.deepcopy(self.payload))
            return SimpleNamespace(data=copy.deepcopy(matched))
        if self.op == "delete":
            matched = self._matching()
            self.db.tables[self.table] = [row for row in rows if row not in matched]
            return SimpleNamespace(data=copy.deepcopy(matched))

        matched = copy.deepcopy(self._matching())
        if self.order_by:
            column, desc = self.order_by
            matched.sort(key=lambda row: _lookup(row, column) or "", reverse=desc)
        if self.limit_n is not None:
            matched = matched[:self.limit_n]
        if self.single_mode:
            return SimpleNamespace(data=matched[0] if matched else None)
        return SimpleNamespace(data=matched)


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.calls = []

    def table(self, name):
        return FakeQuery(self, name)


class FakeCursor:
    def __init__(self, docs):
        self.docs = docs

    def limit(self, n):
        return FakeCursor(self.docs[:n])

    def __iter__(self):
        return iter(self.docs)


class FakeCollection:
    def __init__(self, name):
        self.name = name
        self.docs = []

    def find(self, query):
        return FakeCursor([dict(doc) for doc in self.docs])

    def insert_one(self, doc):
        doc = dict(doc)
        doc.setdefault("_id", uuid.uuid4().hex[:24])
        self.docs.append(doc)
        return SimpleNamespace(inserted_id=doc["_id"])


class FakeGeocoder:
    """Resolves addresses from a fixed table; unknown addresses have no match."""

    def __init__(self, places=None):
        self.places = places or {}
        self.lookups = []

    def geocode(self, address):
        self.lookups.append(address)
        return self.places.get(address)

    def search(self, query, limit=5):
        return []


LANDLORD = {"id": "landlord-1", "email": "lee@example.com", "user_metadata": {"is_landlord": True}}
STUDENT = {"id": "student-1", "email": "sam@example.com", "user_metadata": {"is_landlord": False}}


def make_profile(user, **overrides):
    profile = {
        "id": user["id"],
        "name": user["email"].split("@")[0].title(),
        "email": user["email"],
        "phone": None,
        "description": None,
        "profile_picture": None,
        "group_id": None,
        "is_landlord": user["user_metadata"]["is_landlord"],
        "created_at": "2025-01-01T00:00:00+00:00",
        "updated_at": None,
    }
    profile.update(overrides)
    return profile


def make_listing(listing_id, **overrides):
    listing = {
        "id": listing_id,
        "landlord_id": LANDLORD["id"],
        "title": f"Listing {listing_id}",
        "description": None,
        "address": "200 University Ave W",
        "price": 900,
        "bedrooms": 2,
        "bathrooms": 1,
        "is_on_campus": False,
        "gender_preference": "any",
        "rental_type": "apartment",
        "is_verified": False,
        "image_urls": [],
        "amenities": [],
        "available_from": None,
        "lease_duration": None,
        "created_at": "2025-01-01T00:00:00+00:00",
        "updated_at": None,
    }
    listing.update(overrides)
    return listing


@pytest.fixture
def fake_supabase():
    db = FakeSupabase()
    db.tables["profiles"] = [make_profile(LANDLORD), make_profile(STUDENT)]
    return db


@pytest.fixture
def fake_collections():
    return {name: FakeCollection(name) for name in ("person", "group", "listing", "application")}


@pytest.fixture
def fake_geocoder():
    return FakeGeocoder()


@pytest.fixture
def as_user():
    """Switch the authenticated user for subsequent requests."""
    def _as(user):
        app.dependency_overrides[get_current_user_id] = lambda: user
    return _as


@pytest.fixture
def client(fake_supabase, fake_collections, fake_geocoder, as_user):
    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    app.dependency_overrides[get_collection_getter] = lambda: fake_collections.__getitem__
    app.dependency_overrides[get_geocoder] = lambda: fake_geocoder
    as_user(STUDENT)
    limiter.reset()
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
