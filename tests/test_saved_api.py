"""
Saved listings and saved searches routes
"""


class TestSessionHeaders:

    def test_missing_headers(self, client):
        response = client.get("/api/saved/listings")
        assert response.status_code == 400
        assert response.json()["error"] == "Missing session headers. Send x-user-email or x-device-id."

    def test_unknown_email_falls_back_to_device(self, client):
        headers = {"x-user-email": "nobody@example.com", "x-device-id": "device-fallback"}
        client.post("/api/saved/listings", json={"listing_id": "lst-london-001"}, headers=headers)

        response = client.get("/api/saved/listings", headers={"x-device-id": "device-fallback"})
        assert response.json()["listing_ids"] == ["lst-london-001"]

    def test_unknown_email_alone_is_rejected(self, client):
        response = client.get("/api/saved/listings", headers={"x-user-email": "nobody@example.com"})
        assert response.status_code == 400


class TestSavedListings:

    def test_toggle_on_and_off(self, client, device_headers):
        response = client.post("/api/saved/listings", json={"listing_id": "lst-london-001"}, headers=device_headers)
        assert response.status_code == 200
        assert response.json() == {"listing_ids": ["lst-london-001"], "saved": True}

        response = client.post("/api/saved/listings", json={"listing_id": "lst-london-001"}, headers=device_headers)
        assert response.json() == {"listing_ids": [], "saved": False}

    def test_newest_first(self, client, device_headers):
        for listing_id in ("lst-london-001", "lst-lisbon-002", "lst-dubai-004"):
            client.post("/api/saved/listings", json={"listing_id": listing_id}, headers=device_headers)

        response = client.get("/api/saved/listings", headers=device_headers)
        assert response.json()["listing_ids"] == ["lst-dubai-004", "lst-lisbon-002", "lst-london-001"]

    def test_missing_listing(self, client, device_headers):
        response = client.post("/api/saved/listings", json={"listing_id": "lst-missing"}, headers=device_headers)
        assert response.status_code == 404

    def test_principals_are_isolated(self, client, device_headers, signed_in_headers):
        client.post("/api/saved/listings", json={"listing_id": "lst-london-001"}, headers=device_headers)

        response = client.get("/api/saved/listings", headers=signed_in_headers)
        assert response.json()["listing_ids"] == []

    def test_signed_in_user_wins_over_device(self, client, device_headers, signed_in_headers):
        headers = {**device_headers, **signed_in_headers}
        client.post("/api/saved/listings", json={"listing_id": "lst-lisbon-002"}, headers=headers)

        assert client.get("/api/saved/listings", headers=signed_in_headers).json()["listing_ids"] == ["lst-lisbon-002"]
        assert client.get("/api/saved/listings", headers=device_headers).json()["listing_ids"] == []


class TestSavedSearches:

    def test_save_and_list(self, client, device_headers):
        response = client.post(
            "/api/saved/searches",
            json={"query": {"mode": "buy", "text": "lisbon", "min_beds": 2}},
            headers=device_headers,
        )
        assert response.status_code == 201
        searches = response.json()["searches"]
        assert len(searches) == 1
        assert searches[0]["text"] == "lisbon"
        assert searches[0]["min_beds"] == 2

    def test_capped_at_twenty_newest_first(self, client, device_headers):
        for index in range(22):
            client.post("/api/saved/searches", json={"query": {"text": f"query-{index}"}}, headers=device_headers)

        searches = client.get("/api/saved/searches", headers=device_headers).json()["searches"]
        assert len(searches) == 20
        assert searches[0]["text"] == "query-21"
        assert searches[-1]["text"] == "query-2"

    def test_invalid_query(self, client, device_headers):
        response = client.post(
            "/api/saved/searches", json={"query": {"min_beds": -1}}, headers=device_headers
        )
        assert response.status_code == 422

    def test_corrupt_payloads_are_skipped(self, client, repositories, device_headers):
        client.post("/api/saved/searches", json={"query": {"text": "good"}}, headers=device_headers)
        # Simulate a row written by an older client
        repositories.saved._searches[("device", "device-test-001")].append({"mode": "lease"})

        searches = client.get("/api/saved/searches", headers=device_headers).json()["searches"]
        assert [search["text"] for search in searches] == ["good"]
