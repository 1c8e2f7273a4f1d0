"""Integration tests for application-wide behaviour."""

import pytest


@pytest.mark.asyncio
@pytest.mark.integration
async def test_health(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_request_id_is_propagated(client):
    response = await client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"

    generated = await client.get("/health")
    assert generated.headers["X-Request-ID"]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_unknown_route(client):
    response = await client.get("/api/v1/nope")
    assert response.status_code == 404
