"""
tests/test_auth_routes.py -- Integration tests for POST /register and POST /login.

Coverage:
  - Registration validation: short username/password -> 400, no store write
  - Duplicate username: first 201, second 400
  - Login: 200 with a verifiable token, 404 unknown user, 401 bad password
  - End-to-end scenario: register -> login -> list employees with/without token

Fixtures used (from conftest.py):
  - api_client: (client, token, uid) with user "testadmin" / "testpass123"
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from auth.tokens import verify_access_token


def _user_count(client: TestClient) -> int:
    return client.app.state.user_store.count_users()


class TestRegisterValidation:
    @pytest.mark.parametrize(
        "username,password,field",
        [
            ("ab", "secret1", "username"),
            ("", "secret1", "username"),
            ("carol", "12345", "password"),
            ("carol", "", "password"),
        ],
    )
    def test_short_input_rejected_without_write(
        self, api_client: tuple[TestClient, str, int], username: str, password: str, field: str
    ) -> None:
        client, _token, _uid = api_client
        before = _user_count(client)
        resp = client.post("/register", json={"username": username, "password": password})
        assert resp.status_code == 400, resp.text
        data = resp.json()
        assert [e["field"] for e in data["errors"]] == [field]
        assert _user_count(client) == before

    def test_both_fields_short_reports_both(self, api_client: tuple[TestClient, str, int]) -> None:
        client, _token, _uid = api_client
        resp = client.post("/register", json={"username": "ab", "password": "123"})
        assert resp.status_code == 400
        messages = {e["field"]: e["message"] for e in resp.json()["errors"]}
        assert messages == {
            "username": "Username must be at least 3 characters long",
            "password": "Password must be at least 6 characters long",
        }

    def test_missing_fields_rejected(self, api_client: tuple[TestClient, str, int]) -> None:
        client, _token, _uid = api_client
        resp = client.post("/register", json={"username": "dave"})
        assert resp.status_code == 400
        assert resp.json()["message"] == "Request validation failed."

    def test_minimum_lengths_accepted(self, api_client: tuple[TestClient, str, int]) -> None:
        client, _token, _uid = api_client
        resp = client.post("/register", json={"username": "eve", "password": "123456"})
        assert resp.status_code == 201, resp.text


class TestRegisterDuplicate:
    def test_second_registration_is_duplicate(self, api_client: tuple[TestClient, str, int]) -> None:
        client, _token, _uid = api_client
        body = {"username": "bob", "password": "hunter22"}
        first = client.post("/register", json=body)
        assert first.status_code == 201
        assert first.json() == {"message": "User registered successfully."}

        before = _user_count(client)
        second = client.post("/register", json=body)
        assert second.status_code == 400
        assert second.json() == {"message": "Username already exists."}
        assert _user_count(client) == before


class TestLogin:
    def test_valid_credentials(self, api_client: tuple[TestClient, str, int]) -> None:
        client, _token, uid = api_client
        resp = client.post("/login", json={"username": "testadmin", "password": "testpass123"})
        assert resp.status_code == 200, resp.text
        data = resp.json()
        assert data["auth"] is True
        assert verify_access_token(data["token"]) == uid
        assert resp.headers["Cache-Control"] == "no-store"

    def test_unknown_user_returns_404(self, api_client: tuple[TestClient, str, int]) -> None:
        client, _token, _uid = api_client
        resp = client.post("/login", json={"username": "ghost", "password": "testpass123"})
        assert resp.status_code == 404
        assert resp.json() == {"message": "User not found."}

    def test_wrong_password_returns_401(self, api_client: tuple[TestClient, str, int]) -> None:
        client, _token, _uid = api_client
        resp = client.post("/login", json={"username": "testadmin", "password": "wrongpassword"})
        assert resp.status_code == 401
        data = resp.json()
        assert data["auth"] is False
        assert "token" not in data


class TestLongPasswords:
    @pytest.mark.parametrize(
        "username,password",
        [
            ("long-ascii", "a" * 80),
            ("long-utf8", "\u00e9" * 40),
        ],
    )
    def test_register_then_login(self, api_client: tuple[TestClient, str, int], username: str, password: str) -> None:
        client, _token, _uid = api_client
        resp = client.post("/register", json={"username": username, "password": password})
        assert resp.status_code == 201, resp.text

        resp = client.post("/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.text
        assert resp.json()["auth"] is True

    def test_wrong_long_password_rejected(self, api_client: tuple[TestClient, str, int]) -> None:
        client, _token, _uid = api_client
        client.post("/register", json={"username": "long-wrong", "password": "\u00e9" * 40})
        resp = client.post("/login", json={"username": "long-wrong", "password": "\u00e8" * 40})
        assert resp.status_code == 401


def test_register_login_list_scenario(api_client: tuple[TestClient, str, int]) -> None:
    """register -> login -> GET /employees with token (200) and without (403)."""
    client, _token, _uid = api_client

    resp = client.post("/register", json={"username": "alice", "password": "secret1"})
    assert resp.status_code == 201

    resp = client.post("/login", json={"username": "alice", "password": "secret1"})
    assert resp.status_code == 200
    token = resp.json()["token"]

    resp = client.get("/employees", headers={"Authorization": token})
    assert resp.status_code == 200
    assert isinstance(resp.json(), list)

    resp = client.get("/employees")
    assert resp.status_code == 403
