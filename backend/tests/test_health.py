"""Tests for health and root endpoints."""

import pytest

from schoolboard import __version__, database


def test_health_reports_database_state(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["version"] == __version__
    assert data["database"] == ("connected" if database.is_connected() else "disconnected")


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["health"] == "/api/health"


async def test_get_database_requires_initialization(monkeypatch):
    monkeypatch.setattr(database, "_db", None)

    with pytest.raises(RuntimeError, match="not initialized"):
        await database.get_database()
