"""End-to-end tests for the HTTP API."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from authservice.api import create_app
from authservice.application import create_application
from authservice.config import SeedUser, ServiceConfig
from authservice.sessions import SessionManager
from authservice.store import CredentialStore

ANN = {"firstName": "Ann", "lastName": "Lee", "email": "ann@x.com", "password": "Abcd123!"}


@pytest.fixture()
def sessions() -> SessionManager:
    return SessionManager(CredentialStore())


@pytest.fixture()
def client(sessions: SessionManager):
    with TestClient(create_app(sessions=sessions)) as test_client:
        yield test_client


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_register_returns_created_user_without_password(client: TestClient) -> None:
    response = client.post("/register", json=ANN)

    assert response.status_code == 201, response.text
    payload = response.json()
    assert payload["firstName"] == "Ann"
    assert payload["lastName"] == "Lee"
    assert payload["email"] == "ann@x.com"
    assert payload["id"]
    assert "createdAt" in payload
    assert "password" not in payload


def test_register_duplicate_email_in_other_case_conflicts(client: TestClient) -> None:
    assert client.post("/register", json=ANN).status_code == 201

    response = client.post("/register", json={**ANN, "email": "ANN@X.COM"})

    assert response.status_code == 409
    assert response.json() == {"detail": "DuplicateEmail"}


@pytest.mark.parametrize(
    "override",
    [
        {"email": "not-an-email"},
        {"password": "abcd123!"},
        {"password": "Abcdefg!"},
        {"firstName": "   "},
        {"lastName": ""},
    ],
)
def test_register_rejects_badly_formatted_input(client: TestClient, sessions: SessionManager, override) -> None:
    response = client.post("/register", json={**ANN, **override})

    assert response.status_code == 422
    assert len(sessions.store) == 0


def test_login_outcomes(client: TestClient, sessions: SessionManager) -> None:
    client.post("/register", json=ANN)

    missing = client.post("/login", json={"email": "bob@x.com", "password": "Abcd123!"})
    assert missing.status_code == 404
    assert missing.json() == {"detail": "UserNotFound"}

    wrong = client.post("/login", json={"email": "ann@x.com", "password": "wrong"})
    assert wrong.status_code == 401
    assert wrong.json() == {"detail": "WrongPassword"}
    assert sessions.current_session() is None

    success = client.post("/login", json={"email": "ANN@X.COM", "password": "Abcd123!"})
    assert success.status_code == 200
    assert success.json()["email"] == "ann@x.com"

    session = client.get("/session").json()
    assert session["authenticated"] is True
    assert session["user"]["firstName"] == "Ann"


def test_second_login_requires_logout(client: TestClient) -> None:
    client.post("/register", json=ANN)
    assert client.post("/login", json={"email": "ann@x.com", "password": "Abcd123!"}).status_code == 200

    again = client.post("/login", json={"email": "ann@x.com", "password": "Abcd123!"})
    assert again.status_code == 409
    assert again.json() == {"detail": "SessionActive"}

    assert client.post("/logout").json() == {"status": "ok"}
    assert client.post("/login", json={"email": "ann@x.com", "password": "Abcd123!"}).status_code == 200


def test_logout_twice_is_harmless(client: TestClient) -> None:
    assert client.post("/logout").status_code == 200
    assert client.post("/logout").status_code == 200
    assert client.get("/session").json() == {"authenticated": False, "user": None}


def test_password_reset_flow(client: TestClient) -> None:
    client.post("/register", json=ANN)

    reset = client.post("/password-reset", json={"email": "ann@x.com", "newPassword": "Newpw12!"})
    assert reset.status_code == 200
    assert reset.json() == {"status": "ok"}
    assert client.get("/session").json()["authenticated"] is False

    old = client.post("/login", json={"email": "ann@x.com", "password": "Abcd123!"})
    assert old.status_code == 401
    new = client.post("/login", json={"email": "ann@x.com", "password": "Newpw12!"})
    assert new.status_code == 200


def test_password_reset_unknown_email(client: TestClient, sessions: SessionManager) -> None:
    response = client.post("/password-reset", json={"email": "bob@x.com", "newPassword": "Newpw12!"})

    assert response.status_code == 404
    assert response.json() == {"detail": "NotFound"}
    assert len(sessions.store) == 0


def test_password_reset_requires_strong_password(client: TestClient) -> None:
    client.post("/register", json=ANN)
    response = client.post("/password-reset", json={"email": "ann@x.com", "newPassword": "short"})
    assert response.status_code == 422


def test_list_users_in_registration_order(client: TestClient) -> None:
    client.post("/register", json=ANN)
    client.post("/register", json={**ANN, "firstName": "Bob", "email": "bob@x.com"})

    response = client.get("/users")

    assert response.status_code == 200
    assert [user["email"] for user in response.json()] == ["ann@x.com", "bob@x.com"]


def test_application_factory_seeds_users() -> None:
    config = ServiceConfig(
        seed_users=(SeedUser(first_name="Ann", last_name="Lee", email="ann@x.com", password="Abcd123!"),),
    )

    with TestClient(create_application(config=config)) as client:
        response = client.post("/login", json={"email": "ann@x.com", "password": "Abcd123!"})
        assert response.status_code == 200
        assert client.app.state.config is config
