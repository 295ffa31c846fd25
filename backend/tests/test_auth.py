"""
Tests for signup and login endpoints and the token-protected flow.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_signup(client: AsyncClient):
    response = await client.post("/signup", json={
        "email": "new@example.com",
        "password": "securepassword123",
    })
    assert response.status_code == 201
    assert response.json() == {"message": "User created successfully"}


@pytest.mark.asyncio
async def test_signup_duplicate_email(client: AsyncClient, test_user):
    """Duplicate email is a save failure without the store's reason."""
    response = await client.post("/signup", json={
        "email": "test@example.com",
        "password": "anotherpassword",
    })
    assert response.status_code == 500
    assert response.json() == {"error": "User could not be saved"}


@pytest.mark.asyncio
@pytest.mark.parametrize("body,field", [
    ({"email": "new@example.com"}, "password"),
    ({"password": "securepassword123"}, "email"),
    ({"email": "new@example.com", "password": ""}, "password"),
])
async def test_signup_missing_field(client: AsyncClient, body, field):
    response = await client.post("/signup", json=body)
    assert response.status_code == 400
    data = response.json()
    assert data["error"] == "Invalid user data"
    assert field in data["fields"]


@pytest.mark.asyncio
async def test_signup_invalid_json(client: AsyncClient):
    response = await client.post(
        "/signup",
        content="{not json",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid user data"


@pytest.mark.asyncio
async def test_login_success(client: AsyncClient, test_user, token_service):
    response = await client.post("/login", json={
        "email": "test@example.com",
        "password": "testpassword123",
    })
    assert response.status_code == 200
    data = response.json()
    assert data["message"] == "User logged in successfully"
    assert token_service.validate(data["token"]) == test_user.id


@pytest.mark.asyncio
@pytest.mark.parametrize("email,password", [
    ("test@example.com", "wrongpassword"),
    ("nobody@example.com", "testpassword123"),
])
async def test_login_failures_share_message(client: AsyncClient, test_user, email, password):
    response = await client.post("/login", json={"email": email, "password": password})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid credentials"}


@pytest.mark.asyncio
async def test_login_missing_password(client: AsyncClient):
    response = await client.post("/login", json={"email": "test@example.com"})
    assert response.status_code == 400
    assert response.json()["error"] == "Invalid user data"


@pytest.mark.asyncio
async def test_signup_login_create_then_foreign_update(client: AsyncClient, token_service, event_data):
    """Full flow: the creator owns the event, another user cannot change it."""
    response = await client.post("/signup", json={"email": "a@x.com", "password": "p1"})
    assert response.status_code == 201

    response = await client.post("/login", json={"email": "a@x.com", "password": "p1"})
    assert response.status_code == 200
    token = response.json()["token"]
    user_id = token_service.validate(token)

    response = await client.post(
        "/events",
        json={**event_data, "name": "E", "description": "d", "location": "l"},
        headers={"Authorization": token},
    )
    assert response.status_code == 201
    event = response.json()
    assert event["user_id"] == user_id

    await client.post("/signup", json={"email": "b@x.com", "password": "p2"})
    response = await client.post("/login", json={"email": "b@x.com", "password": "p2"})
    other_token = response.json()["token"]

    response = await client.put(
        f"/events/{event['id']}",
        json=event_data,
        headers={"Authorization": other_token},
    )
    assert response.status_code == 403
    assert response.json() == {"error": "Forbidden"}


@pytest.mark.asyncio
async def test_password_hash_never_returned(client: AsyncClient, test_user):
    response = await client.post("/login", json={
        "email": "test@example.com",
        "password": "testpassword123",
    })
    assert "hashed_password" not in response.text
    assert "testpassword123" not in response.text
