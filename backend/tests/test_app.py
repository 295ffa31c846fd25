"""
Tests for health, metrics and request middleware.
"""

import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["database"] is True


@pytest.mark.asyncio
async def test_request_id_header(client: AsyncClient):
    response = await client.get("/events")
    assert len(response.headers["X-Request-ID"]) == 8
    assert response.headers["X-Response-Time"].endswith("ms")


@pytest.mark.asyncio
async def test_request_id_passed_through(client: AsyncClient):
    response = await client.get("/events", headers={"X-Request-ID": "abc123"})
    assert response.headers["X-Request-ID"] == "abc123"


@pytest.mark.asyncio
async def test_metrics_count_auth_attempts(client: AsyncClient, test_user):
    await client.post("/login", json={"email": "test@example.com", "password": "wrong"})

    response = await client.get("/metrics")
    assert response.status_code == 200
    assert 'auth_attempts_total{action="login",result="failure"}' in response.text


@pytest.mark.asyncio
async def test_unknown_route_uses_error_shape(client: AsyncClient):
    response = await client.get("/nope")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}
