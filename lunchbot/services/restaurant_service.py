# lunchbot/services/restaurant_service.py

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import List, Optional

from google.api_core.exceptions import GoogleAPIError
from google.auth.exceptions import GoogleAuthError
from google.cloud import datastore

from lunchbot.core.config import get_settings
from lunchbot.core.errors import StoreFailure

logger = logging.getLogger(__name__)

RESTAURANT_KIND = "Restaurant"
LIST_LIMIT = 5

# OSError covers a missing project id when the client is first built.
STORE_ERRORS = (GoogleAPIError, GoogleAuthError, OSError)


@dataclass(frozen=True)
class Restaurant:
    """One submitted lunch option.

    ``id`` is the key id Datastore generated on put; it is not a stored
    property of the entity.
    """

    id: Optional[int]
    name: str
    created: Optional[datetime]

    @classmethod
    def from_entity(cls, entity: datastore.Entity) -> "Restaurant":
        return cls(id=entity.key.id, name=entity.get("name", ""), created=entity.get("created"))


class RestaurantStore:
    def __init__(self, project: Optional[str] = None, client: Optional[datastore.Client] = None):
        """Holds one Datastore client for the life of the process.

        The client is only built on first use so that importing the app, or
        rejecting a request before it reaches the store, needs no credentials.
        """
        self.project = project
        self._client = client
        self._client_lock = threading.Lock()

    @property
    def client(self) -> datastore.Client:
        if self._client is None:
            # Store calls run in the threadpool, so the first requests can race here.
            with self._client_lock:
                if self._client is None:
                    logger.info("Creating Datastore client for project %s", self.project)
                    self._client = datastore.Client(project=self.project)
        return self._client

    def add(self, name: str) -> Restaurant:
        """Persists a new Restaurant under an incomplete key and returns it with its id."""
        created = datetime.now(timezone.utc)
        try:
            client = self.client
            entity = datastore.Entity(key=client.key(RESTAURANT_KIND))
            entity.update({"name": name, "created": created})
            client.put(entity)
        except STORE_ERRORS as e:
            raise StoreFailure(str(e), operation="put") from e

        restaurant = Restaurant(id=entity.key.id, name=name, created=created)
        logger.info("Added restaurant [%s] %s", restaurant.id, restaurant.name)
        return restaurant

    def list_recent(self, limit: int = LIST_LIMIT) -> List[Restaurant]:
        """Returns the most recently created restaurants, newest first."""
        try:
            query = self.client.query(kind=RESTAURANT_KIND, order=["-created"])
            restaurants = [Restaurant.from_entity(entity) for entity in query.fetch(limit=limit)]
        except STORE_ERRORS as e:
            raise StoreFailure(str(e), operation="query") from e

        logger.info("Listed %d restaurants", len(restaurants))
        return restaurants


@lru_cache(maxsize=1)
def get_restaurant_store() -> RestaurantStore:
    return RestaurantStore(project=get_settings().project_name)
