"""Listing browsing, filtering, distance search and landlord management."""

import asyncio

from campus_housing.modules.listings.geocoding import GeocodingError
from campus_housing.modules.listings.schemas import ListingFilters
from campus_housing.modules.listings.service import ListingService

from conftest import LANDLORD, FakeGeocoder, make_listing

WATERLOO = (43.4723, -80.5449)
TORONTO = (43.6532, -79.3832)


def _running_loop():
    try:
        return asyncio.get_running_loop()
    except RuntimeError:
        return None


def _seed(fake_supabase, *listings):
    fake_supabase.tables["listings"] = list(listings)


class TestFilters:
    def test_filters_map_to_query_predicates(self, fake_supabase):
        service = ListingService(fake_supabase)
        service.get_listings(ListingFilters(
            price_min=500, price_max=1500, bedrooms=2, bathrooms=1, is_on_campus=True,
            gender_preference="female", rental_type=["house", "room"], amenities=["wifi"],
        ))
        calls = [call[1:] for call in fake_supabase.calls if call[0] == "listings"]
        assert ("gte", "price", 500) in calls
        assert ("lte", "price", 1500) in calls
        assert ("eq", "bedrooms", 2) in calls
        assert ("eq", "bathrooms", 1) in calls
        assert ("eq", "is_on_campus", True) in calls
        assert ("eq", "gender_preference", "female") in calls
        assert ("in_", "rental_type", ["house", "room"]) in calls
        assert ("contains", "amenities", ["wifi"]) in calls
        assert ("order", "created_at", True) in calls

    def test_any_gender_and_empty_lists_add_no_predicates(self, fake_supabase):
        ListingService(fake_supabase).get_listings(
            ListingFilters(gender_preference="any", rental_type=[], amenities=[])
        )
        methods = {call[1] for call in fake_supabase.calls}
        assert methods == {"select", "order"}

    def test_route_filters_by_price_and_type(self, client, fake_supabase):
        _seed(
            fake_supabase,
            make_listing("cheap", price=600, rental_type="room"),
            make_listing("mid", price=1100, rental_type="house"),
            make_listing("pricey", price=2500, rental_type="house"),
        )
        resp = client.get("/api/v1/listings", params={"price_max": 2000, "rental_type": ["house", "room"]})
        assert resp.status_code == 200
        assert {item["id"] for item in resp.json()} == {"cheap", "mid"}

    def test_route_filters_by_amenities(self, client, fake_supabase):
        _seed(
            fake_supabase,
            make_listing("a", amenities=["wifi", "laundry"]),
            make_listing("b", amenities=["wifi"]),
        )
        resp = client.get("/api/v1/listings", params={"amenities": ["wifi", "laundry"]})
        assert [item["id"] for item in resp.json()] == ["a"]

    def test_newest_first(self, client, fake_supabase):
        _seed(
            fake_supabase,
            make_listing("old", created_at="2024-01-01T00:00:00+00:00"),
            make_listing("new", created_at="2025-06-01T00:00:00+00:00"),
        )
        resp = client.get("/api/v1/listings")
        assert [item["id"] for item in resp.json()] == ["new", "old"]


class TestDistanceSearch:
    def test_keeps_listings_inside_radius(self, fake_supabase):
        _seed(
            fake_supabase,
            make_listing("near", address="200 University Ave W"),
            make_listing("far", address="1 Yonge St"),
            make_listing("unknown", address="Nowhere"),
        )
        geocoder = FakeGeocoder({"200 University Ave W": WATERLOO, "1 Yonge St": TORONTO})
        service = ListingService(fake_supabase, geocoder)
        result = service.get_listings(ListingFilters(target_lat=43.47, target_lng=-80.54, radius_km=5))
        assert [listing.id for listing in result] == ["near"]

    def test_incomplete_distance_filter_is_ignored(self, fake_supabase):
        _seed(fake_supabase, make_listing("a"))
        geocoder = FakeGeocoder()
        result = ListingService(fake_supabase, geocoder).get_listings(
            ListingFilters(target_lat=43.47, radius_km=5)
        )
        assert len(result) == 1
        assert geocoder.lookups == []

    def test_route_applies_radius(self, client, fake_supabase, fake_geocoder):
        fake_geocoder.places = {"200 University Ave W": WATERLOO, "1 Yonge St": TORONTO}
        _seed(
            fake_supabase,
            make_listing("near", address="200 University Ave W"),
            make_listing("far", address="1 Yonge St"),
        )
        resp = client.get("/api/v1/listings", params={"target_lat": TORONTO[0], "target_lng": TORONTO[1], "radius_km": 10})
        assert [item["id"] for item in resp.json()] == ["far"]

    def test_geocoder_outage_is_502(self, client, fake_supabase, fake_geocoder):
        _seed(fake_supabase, make_listing("a"))

        def broken(address):
            raise GeocodingError("timeout")

        fake_geocoder.geocode = broken
        resp = client.get("/api/v1/listings", params={"target_lat": 43.0, "target_lng": -80.0, "radius_km": 5})
        assert resp.status_code == 502

    def test_geocoding_runs_off_the_event_loop(self, client, fake_supabase, fake_geocoder):
        _seed(fake_supabase, make_listing("near", address="200 University Ave W"))
        loops = []

        def geocode(address):
            loops.append(_running_loop())
            return WATERLOO

        fake_geocoder.geocode = geocode
        resp = client.get("/api/v1/listings", params={"target_lat": WATERLOO[0], "target_lng": WATERLOO[1], "radius_km": 5})
        assert resp.status_code == 200
        assert loops == [None]

    def test_radius_must_be_positive(self, client):
        resp = client.get("/api/v1/listings", params={"target_lat": 43.0, "target_lng": -80.0, "radius_km": 0})
        assert resp.status_code == 422


class TestSingleListing:
    def test_get_listing(self, client, fake_supabase):
        _seed(fake_supabase, make_listing("l-1"))
        resp = client.get("/api/v1/listings/l-1")
        assert resp.status_code == 200
        assert resp.json()["title"] == "Listing l-1"

    def test_missing_listing_is_404(self, client):
        resp = client.get("/api/v1/listings/nope")
        assert resp.status_code == 404


class TestLandlordManagement:
    payload = {
        "title": "Sunny 2BR",
        "address": " 55 Albert St ",
        "price": 1450,
        "bedrooms": 2,
        "bathrooms": 1,
        "rental_type": "apartment",
        "amenities": ["parking"],
        "available_from": "2025-09-01",
    }

    def test_landlord_creates_listing(self, client, fake_supabase, as_user):
        as_user(LANDLORD)
        resp = client.post("/api/v1/listings", json=self.payload)
        assert resp.status_code == 201
        body = resp.json()
        assert body["landlord_id"] == LANDLORD["id"]
        assert body["address"] == "55 Albert St"
        assert fake_supabase.tables["listings"][0]["available_from"] == "2025-09-01"

    def test_landlord_cannot_self_verify(self, client, fake_supabase, as_user):
        as_user(LANDLORD)
        resp = client.post("/api/v1/listings", json={**self.payload, "is_verified": True})
        assert resp.status_code == 201
        assert resp.json()["is_verified"] is False
        assert "is_verified" not in fake_supabase.tables["listings"][0]

    def test_student_cannot_create_listing(self, client, fake_supabase):
        resp = client.post("/api/v1/listings", json=self.payload)
        assert resp.status_code == 403
        assert fake_supabase.tables.get("listings", []) == []

    def test_invalid_rental_type_is_rejected(self, client, as_user):
        as_user(LANDLORD)
        resp = client.post("/api/v1/listings", json={**self.payload, "rental_type": "castle"})
        assert resp.status_code == 422

    def test_owner_updates_listing_but_not_verification(self, client, fake_supabase, as_user):
        as_user(LANDLORD)
        _seed(fake_supabase, make_listing("l-1"))
        resp = client.put("/api/v1/listings/l-1", json={"price": 999, "is_verified": True})
        assert resp.status_code == 200
        assert resp.json()["price"] == 999
        assert resp.json()["is_verified"] is False
        assert fake_supabase.tables["listings"][0]["is_verified"] is False

    def test_non_owner_cannot_update(self, client, fake_supabase):
        _seed(fake_supabase, make_listing("l-1"))
        resp = client.put("/api/v1/listings/l-1", json={"price": 1})
        assert resp.status_code == 403

    def test_owner_deletes_listing(self, client, fake_supabase, as_user):
        as_user(LANDLORD)
        _seed(fake_supabase, make_listing("l-1"))
        resp = client.delete("/api/v1/listings/l-1")
        assert resp.status_code == 204
        assert fake_supabase.tables["listings"] == []

    def test_my_listings_only_returns_own(self, client, fake_supabase, as_user):
        as_user(LANDLORD)
        _seed(fake_supabase, make_listing("mine"), make_listing("theirs", landlord_id="someone-else"))
        resp = client.get("/api/v1/listings/mine")
        assert [item["id"] for item in resp.json()] == ["mine"]

    def test_my_listings_requires_landlord(self, client):
        resp = client.get("/api/v1/listings/mine")
        assert resp.status_code == 403


def test_unauthenticated_create_is_rejected(fake_supabase):
    from fastapi.testclient import TestClient
    from campus_housing.main import app
    from campus_housing.database.supabase_client import get_supabase

    app.dependency_overrides[get_supabase] = lambda: fake_supabase
    try:
        resp = TestClient(app).post("/api/v1/listings", json={})
    finally:
        app.dependency_overrides.clear()
    assert resp.status_code in (401, 403)


def test_student_can_view_landlord_profile(client):
    resp = client.get(f"/api/v1/profiles/{LANDLORD['id']}")
    assert resp.status_code == 200
    assert resp.json()["is_landlord"] is True
