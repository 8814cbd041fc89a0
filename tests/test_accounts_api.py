"""
Sign-in and registration routes
"""

import pytest


class TestSignIn:

    def test_sign_in_creates_user(self, client):
        response = client.post("/api/auth/sign-in", json={"email": "Ada@Example.com", "name": " Ada Lovelace "})
        assert response.status_code == 200, response.text
        body = response.json()
        assert body["email"] == "ada@example.com"
        assert body["name"] == "Ada Lovelace"
        assert body["role"] == "user"

    def test_repeat_sign_in_updates_last_login(self, client):
        first = client.post("/api/auth/sign-in", json={"email": "ada@example.com", "name": "Ada"}).json()
        second = client.post("/api/auth/sign-in", json={"email": "ada@example.com", "name": "Ada L"}).json()
        assert second["name"] == "Ada L"
        assert second["last_login_at"] >= first["last_login_at"]

    @pytest.mark.parametrize("payload", [
        {"email": "not-an-email", "name": "Ada"},
        {"email": "ada@example.com", "name": "A"},
        {"email": "ada@example.com", "name": "x" * 121},
        {"email": "ada@example.com", "name": "Ada", "role": "admin"},
        {"name": "Ada"},
    ])
    def test_invalid_payload(self, client, payload):
        response = client.post("/api/auth/sign-in", json=payload)
        assert response.status_code == 422
        assert response.json()["error"] == "Invalid request payload."

    def test_blank_name_after_trim(self, client):
        response = client.post("/api/auth/sign-in", json={"email": "ada@example.com", "name": "     "})
        assert response.status_code == 400
        assert response.json()["error"] == "Name is required."


class TestRegistration:

    def test_register_user(self, client):
        response = client.post("/api/users/register", json={"email": "grace@example.com", "name": "Grace"})
        assert response.status_code == 200
        assert response.json()["user"]["role"] == "user"

    def test_register_agent(self, client):
        response = client.post(
            "/api/agents/register",
            json={
                "email": "agent@example.com",
                "name": "Alex Agent",
                "company": "Harbour Homes",
                "phone": "+44 20 7946 0000",
                "license_number": "   ",
                "bio": "Coastal property specialist.",
            },
        )
        assert response.status_code == 200, response.text
        body = response.json()
        assert body["user"]["role"] == "agent"
        assert body["profile"]["company"] == "Harbour Homes"
        assert body["profile"]["license_number"] is None

    def test_agent_is_never_demoted(self, client):
        client.post("/api/agents/register", json={"email": "agent@example.com", "name": "Alex Agent"})

        response = client.post(
            "/api/auth/sign-in", json={"email": "agent@example.com", "name": "Alex Agent", "role": "user"}
        )
        assert response.json()["role"] == "agent"

    def test_user_can_become_agent(self, client):
        client.post("/api/users/register", json={"email": "grace@example.com", "name": "Grace"})
        response = client.post("/api/agents/register", json={"email": "grace@example.com", "name": "Grace"})
        assert response.json()["user"]["role"] == "agent"

    @pytest.mark.parametrize("overrides", [
        {"company": "H"},
        {"phone": "123"},
        {"license_number": "L" * 81},
        {"bio": "b" * 1201},
    ])
    def test_agent_field_bounds(self, client, overrides):
        payload = {"email": "agent@example.com", "name": "Alex Agent", **overrides}
        response = client.post("/api/agents/register", json=payload)
        assert response.status_code == 422
