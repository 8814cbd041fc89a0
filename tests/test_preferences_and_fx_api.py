"""
Preferences, FX and health routes
"""


class TestPreferences:

    def test_default_display_currency(self, client, device_headers):
        response = client.get("/api/preferences", headers=device_headers)
        assert response.status_code == 200
        assert response.json() == {"display_currency": "GBP"}

    def test_update_display_currency(self, client, device_headers):
        response = client.put("/api/preferences", json={"display_currency": "eur"}, headers=device_headers)
        assert response.status_code == 200
        assert response.json() == {"display_currency": "EUR"}

        assert client.get("/api/preferences", headers=device_headers).json()["display_currency"] == "EUR"

    def test_unsupported_currency(self, client, device_headers):
        response = client.put("/api/preferences", json={"display_currency": "XYZ"}, headers=device_headers)
        assert response.status_code == 400
        assert response.json()["issues"][0]["field"] == "display_currency"

    def test_malformed_currency(self, client, device_headers):
        response = client.put("/api/preferences", json={"display_currency": "EURO"}, headers=device_headers)
        assert response.status_code == 422

    def test_principals_are_isolated(self, client, device_headers):
        client.put("/api/preferences", json={"display_currency": "JPY"}, headers=device_headers)
        other = client.get("/api/preferences", headers={"x-device-id": "device-other"})
        assert other.json()["display_currency"] == "GBP"

    def test_stored_under_principal_key(self, client, repositories, device_headers):
        client.put("/api/preferences", json={"display_currency": "USD"}, headers=device_headers)
        assert repositories.kv_store._values["preferences:device:device-test-001"] == {"display_currency": "USD"}


class TestFx:

    def test_rates(self, client):
        body = client.get("/api/fx/rates").json()
        assert body["base"] == "GBP"
        assert body["rates"]["EUR"] == 1.17

    def test_convert(self, client):
        response = client.get("/api/fx/convert", params={"value": 100, "from": "gbp", "to": "JPY"})
        assert response.status_code == 200
        body = response.json()
        assert body["from"] == "GBP"
        assert body["converted"] == 19150

    def test_unsupported_currency(self, client):
        response = client.get("/api/fx/convert", params={"value": 100, "from": "GBP", "to": "XYZ"})
        assert response.status_code == 400


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["storage"] == "memory"
        assert "X-Trace-ID" in response.headers
