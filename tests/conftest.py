from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from lunchbot.core.config import Settings, get_settings
from lunchbot.core.errors import StoreFailure
from lunchbot.main import app
from lunchbot.services.restaurant_service import LIST_LIMIT, Restaurant, get_restaurant_store

TEST_TOKEN = "test-token"


class FakeRestaurantStore:
    """In-memory stand-in for the Datastore-backed store."""

    def __init__(self):
        self.restaurants = []
        self.fail_with = None
        self._next_id = 5629499534213120
        self._clock = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)

    def add(self, name):
        if self.fail_with:
            raise StoreFailure(self.fail_with, operation="put")
        self._clock += timedelta(seconds=1)
        self._next_id += 1
        restaurant = Restaurant(id=self._next_id, name=name, created=self._clock)
        self.restaurants.append(restaurant)
        return restaurant

    def list_recent(self, limit=LIST_LIMIT):
        if self.fail_with:
            raise StoreFailure(self.fail_with, operation="query")
        return sorted(self.restaurants, key=lambda r: r.created, reverse=True)[:limit]


@pytest.fixture
def store():
    return FakeRestaurantStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_settings] = lambda: Settings(slack_token=TEST_TOKEN, project_name="test-project")
    app.dependency_overrides[get_restaurant_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def send(client):
    """Posts a slash command with the configured token."""

    def _send(text, token=TEST_TOKEN):
        return client.post("/slack/lunch", data={"token": token, "text": text})

    return _send
