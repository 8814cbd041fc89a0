"""
Listing routes over seeded in-memory storage
"""

import pytest

NEWEST_FIRST = [
    "lst-dubai-004",
    "lst-london-001",
    "lst-lisbon-002",
    "lst-marbella-003",
    "lst-capetown-005",
    "lst-queenstown-006",
]


def wizard_payload(**overrides):
    payload = {
        "id": "listing-test-001",
        "mode": "rent",
        "host_type": "owner",
        "title": "Garden flat in Bristol",
        "description": "Ground-floor flat with a private garden, close to the harbourside.",
        "country": "United Kingdom",
        "city": "Bristol",
        "address": "4 Hotwell Road, Bristol",
        "lat": 51.4490,
        "lng": -2.6150,
        "beds": 1,
        "baths": 1,
        "area_sqm": 52,
        "property_type": "apartment",
        "rent_per_month": 1450,
        "currency": "gbp",
        "amenities": ["Garden"],
        "images": ["https://images.example.com/listings/bristol/1.jpg"],
    }
    payload.update(overrides)
    return payload


def ids(response):
    return [listing["id"] for listing in response.json()["listings"]]


class TestBrowseListings:

    def test_list_all_newest_first(self, client):
        response = client.get("/api/listings")
        assert response.status_code == 200
        assert ids(response) == NEWEST_FIRST
        assert response.json()["count"] == 6

    def test_get_listing(self, client):
        response = client.get("/api/listings/lst-lisbon-002")
        assert response.status_code == 200
        listing = response.json()["listing"]
        assert listing["city"] == "Lisbon"
        assert listing["price"]["sale_price"] == 540000

    def test_get_missing_listing(self, client):
        response = client.get("/api/listings/lst-missing")
        assert response.status_code == 404
        assert response.json()["error"] == "Listing not found."
        assert "X-Trace-ID" in response.headers


class TestSearchListings:

    @pytest.mark.parametrize("query,expected", [
        ({}, NEWEST_FIRST),
        ({"text": "  LISBON "}, ["lst-lisbon-002"]),
        ({"text": "villa"}, ["lst-marbella-003"]),
        ({"text": "zealand"}, ["lst-queenstown-006"]),
        ({"min_beds": 4}, ["lst-marbella-003", "lst-capetown-005"]),
        ({"property_types": ["cabin", "loft"]}, ["lst-london-001", "lst-queenstown-006"]),
        ({"min_price": 1000000, "max_price": 2500000}, ["lst-dubai-004", "lst-queenstown-006"]),
        ({"bounds": {"north": 60, "south": 35, "east": 0, "west": -10}},
         ["lst-london-001", "lst-lisbon-002", "lst-marbella-003"]),
        ({"mode": "rent"}, []),
        ({"text": "nowhere"}, []),
    ])
    def test_search(self, client, query, expected):
        response = client.post("/api/listings/search", json=query)
        assert response.status_code == 200, response.text
        assert ids(response) == expected

    def test_filters_are_combined(self, client):
        response = client.post(
            "/api/listings/search",
            json={"min_beds": 2, "bounds": {"north": 60, "south": 35, "east": 0, "west": -10}, "max_price": 600000},
        )
        assert ids(response) == ["lst-lisbon-002"]

    def test_min_price_above_max_price(self, client):
        response = client.post("/api/listings/search", json={"min_price": 10, "max_price": 5})
        assert response.status_code == 400
        assert "min_price" in response.json()["error"]

    def test_inverted_bounds(self, client):
        response = client.post(
            "/api/listings/search",
            json={"bounds": {"north": 10, "south": 20, "east": 10, "west": 0}},
        )
        assert response.status_code == 400

    def test_invalid_payload(self, client):
        response = client.post("/api/listings/search", json={"mode": "lease"})
        assert response.status_code == 422
        assert response.json()["issues"][0]["field"].endswith("mode")


class TestCreateListing:

    def test_requires_signed_in_user(self, client):
        response = client.post("/api/listings", json=wizard_payload())
        assert response.status_code == 401

    def test_unknown_user(self, client):
        response = client.post(
            "/api/listings", json=wizard_payload(), headers={"x-user-email": "stranger@example.com"}
        )
        assert response.status_code == 401

    def test_create_and_find(self, client, signed_in_headers):
        response = client.post("/api/listings", json=wizard_payload(), headers=signed_in_headers)
        assert response.status_code == 201, response.text
        listing = response.json()["listing"]
        assert listing["currency"] == "GBP"
        assert listing["price"]["rent_per_month"] == 1450

        found = client.post("/api/listings/search", json={"mode": "rent", "text": "bristol"})
        assert ids(found) == ["listing-test-001"]

    def test_generated_id(self, client, signed_in_headers):
        response = client.post("/api/listings", json=wizard_payload(id=None), headers=signed_in_headers)
        assert response.status_code == 201
        assert response.json()["listing"]["id"].startswith("listing-")

    def test_duplicate_id(self, client, signed_in_headers):
        response = client.post("/api/listings", json=wizard_payload(id="lst-london-001"), headers=signed_in_headers)
        assert response.status_code == 409

    @pytest.mark.parametrize("overrides", [
        {"rent_per_month": None},
        {"mode": "stay"},
        {"images": ["not-a-url"]},
        {"images": []},
        {"title": "Flat"},
        {"lat": 91},
    ])
    def test_invalid_wizard_payload(self, client, signed_in_headers, overrides):
        response = client.post("/api/listings", json=wizard_payload(**overrides), headers=signed_in_headers)
        assert response.status_code == 422
