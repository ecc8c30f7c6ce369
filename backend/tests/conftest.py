"""Pytest configuration and shared fixtures."""

import pytest
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from schoolboard.database import get_database
from schoolboard.main import app


@pytest.fixture
def mongo_db():
    """Fresh in-memory Motor-compatible database per test."""
    client = AsyncMongoMockClient()
    return client["schoolboard_test"]


@pytest.fixture
def client(mongo_db):
    """Test client with the database dependency pointed at mongo_db.

    The client is not entered as a context manager, so the lifespan (which
    connects to a real MongoDB) does not run.
    """
    async def override_get_database():
        return mongo_db

    app.dependency_overrides[get_database] = override_get_database
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def scope():
    return {
        "school_id": "school_1",
        "class_id": "class_1",
        "section_id": "section_a",
    }
