"""Shared fixtures: a seeded app per test and logged-in clients."""

import pytest

from app import create_app
from config import TestingConfig
from seed import seed_storage
from storage import MemStorage


@pytest.fixture
def storage():
    store = MemStorage()
    seed_storage(store)
    return store


@pytest.fixture
def app(storage):
    return create_app(TestingConfig, storage=storage)


@pytest.fixture
def client(app):
    return app.test_client()


def login(client, username, password):
    return client.post("/api/login", json={"username": username, "password": password})


@pytest.fixture
def admin_client(app):
    c = app.test_client()
    assert login(c, "admin", "admin123").status_code == 200
    return c


@pytest.fixture
def user_client(app):
    c = app.test_client()
    assert login(c, "user", "pass1111").status_code == 200
    return c


@pytest.fixture
def event_payload():
    return {
        "title": "Hack Night",
        "description": "Overnight coding session",
        "venue": "Lab 3",
        "date": "2024-07-01T18:00:00Z",
        "endDate": "2024-07-02T06:00:00Z",
        "imageUrl": "https://example.com/hack.png",
        "category": "Technical",
        "featured": False,
        "organizer": "Coding Club",
    }
