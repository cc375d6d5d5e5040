import pytest

from storefront.publishers.event_publisher import EventPublisher

from conftest import PASSWORD, make_user

REGISTRATION = {
    "first_name": "Carol",
    "last_name": "Jones",
    "phone_number": "+15550199",
    "email": "carol@example.com",
    "password": PASSWORD,
}


@pytest.fixture
def published(monkeypatch):
    events = []

    def capture(self, user_data):
        events.append(user_data)
        return True

    monkeypatch.setattr(EventPublisher, "publish_user_registered", capture)
    return events


def test_register_activate_and_authenticate(client, published):
    response = client.post("/v1/users", json=REGISTRATION)
    assert response.status_code == 201
    user = response.json()
    assert user["activated"] is False
    assert "password" not in user
    assert "password_hash" not in user

    token = published[0]["activation_token"]
    assert published[0]["user_id"] == user["id"]
    assert len(token) == 26

    response = client.put("/v1/users/activated", json={"token": token})
    assert response.status_code == 200
    assert response.json()["activated"] is True
    assert response.json()["version"] == user["version"] + 1

    # activation tokens are single use
    response = client.put("/v1/users/activated", json={"token": token})
    assert response.status_code == 400

    response = client.post(
        "/v1/tokens/authentication", json={"email": REGISTRATION["email"], "password": PASSWORD}
    )
    assert response.status_code == 201
    bearer = response.json()["authentication_token"]["token"]
    assert len(bearer) == 26

    # registration grants read and order but not write
    headers = {"Authorization": f"Bearer {bearer}"}
    assert client.get("/v1/products", headers=headers).status_code == 200
    assert client.get("/v1/users/orders", headers=headers).status_code == 200
    assert client.post("/v1/categories", json={"title": "Hats"}, headers=headers).status_code == 403


def test_register_duplicate_email(client, published):
    assert client.post("/v1/users", json=REGISTRATION).status_code == 201

    response = client.post("/v1/users", json=REGISTRATION)

    assert response.status_code == 400
    assert "email" in response.json()["detail"]


def test_register_invalid_fields(client, published):
    response = client.post("/v1/users", json={**REGISTRATION, "email": "carol", "password": "1234"})

    assert response.status_code == 400
    assert set(response.json()["detail"]) == {"email", "password"}
    assert published == []


def test_activate_with_unknown_token(client):
    response = client.put("/v1/users/activated", json={"token": "A" * 26})

    assert response.status_code == 400
    assert response.json()["detail"] == {"token": "invalid or expired activation token"}


def test_authenticate_with_wrong_password(client, db):
    make_user(db)

    response = client.post(
        "/v1/tokens/authentication", json={"email": "alice@example.com", "password": "wrong-password"}
    )
    assert response.status_code == 401


def test_authenticate_unknown_email(client):
    response = client.post(
        "/v1/tokens/authentication", json={"email": "nobody@example.com", "password": PASSWORD}
    )
    assert response.status_code == 401


def test_authenticate_malformed_credentials(client):
    response = client.post("/v1/tokens/authentication", json={"email": "", "password": ""})

    assert response.status_code == 400
    assert set(response.json()["detail"]) == {"email", "password"}


def test_register_rejects_dotless_email_domain(client, published):
    response = client.post("/v1/users", json={**REGISTRATION, "email": "carol@localhost"})

    assert response.status_code == 400
    assert response.json()["detail"] == {"email": "must be a valid email address"}
    assert published == []
