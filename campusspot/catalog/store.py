from __future__ import annotations

import json
import logging
import random
from collections.abc import Sequence
from typing import Any

from pydantic import ValidationError

from .config import DEFAULT_STORE_CONFIG, StoreConfig
from .filters import visible_places
from .ids import next_id
from .models import CatalogState, FilterState, NewPlace, Place, Tab
from .reviews import DEFAULT_USER_NAME, add_review
from .seed import SEED_PLACES
from .storage import KeyValueStorage

logger = logging.getLogger(__name__)


class CatalogStore:
    """
    Owns the current :class:`CatalogState` and keeps it persisted.

    Every mutation builds a new state from the old one and swaps it in;
    the state object itself is never modified.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        seed: Sequence[Place] = SEED_PLACES,
        config: StoreConfig = DEFAULT_STORE_CONFIG,
    ) -> None:
        self._storage = storage
        self._seed = tuple(seed)
        self._config = config
        self._state = CatalogState(places=self._seed)

    @property
    def state(self) -> CatalogState:
        return self._state

    # ── Loading ──────────────────────────────────────────────────────────

    def _read_json(self, key: str) -> Any | None:
        try:
            raw = self._storage.get_item(key)
        except Exception:
            logger.warning("Reading %r from storage failed, treating as empty", key, exc_info=True)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except ValueError:
            logger.warning("Stored value for %r is not valid JSON, treating as empty", key)
            return None

    def _load_id_set(self, key: str) -> frozenset[str]:
        data = self._read_json(key)
        if data is None:
            return frozenset()
        if not isinstance(data, list):
            logger.warning("Stored value for %r is not a list, treating as empty", key)
            return frozenset()
        return frozenset(item for item in data if isinstance(item, str))

    def _load_custom_places(self) -> list[Place]:
        data = self._read_json(self._config.custom_places_key)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Stored custom places are not a list, treating as empty")
            return []

        places: list[Place] = []
        for record in data:
            try:
                places.append(Place.model_validate(record))
            except ValidationError:
                logger.warning("Skipping malformed custom place record", exc_info=True)
        return places

    def initialize(self) -> CatalogState:
        """Restore favorites, visited and user-added places from storage."""
        places = list(self._seed)
        known_ids = {p.id for p in places}
        custom_ids: set[str] = set()
        for place in self._load_custom_places():
            if place.id in known_ids:
                logger.warning("Skipping custom place with duplicate id %r", place.id)
                continue
            known_ids.add(place.id)
            custom_ids.add(place.id)
            places.append(place)

        self._state = CatalogState(
            places=tuple(places),
            favorites=self._load_id_set(self._config.favorites_key),
            visited=self._load_id_set(self._config.visited_key),
            custom_ids=frozenset(custom_ids),
        )
        logger.info(
            "Catalog initialised: %d places (%d custom), %d favorites, %d visited",
            len(places),
            len(custom_ids),
            len(self._state.favorites),
            len(self._state.visited),
        )
        return self._state

    # ── Persistence ──────────────────────────────────────────────────────

    def _write(self, key: str, value: Any) -> None:
        try:
            self._storage.set_item(key, json.dumps(value))
        except OSError:
            logger.error("Persisting %r failed; keeping in-memory state", key, exc_info=True)

    def _persist_favorites(self) -> None:
        self._write(self._config.favorites_key, sorted(self._state.favorites))

    def _persist_visited(self) -> None:
        self._write(self._config.visited_key, sorted(self._state.visited))

    def _persist_custom_places(self) -> None:
        records = [
            p.model_dump(mode="json", by_alias=True)
            for p in self._state.places
            if p.id in self._state.custom_ids
        ]
        self._write(self._config.custom_places_key, records)

    # ── Mutations ────────────────────────────────────────────────────────

    def add_place(self, data: NewPlace) -> Place:
        """Create a place from user input and put it at the front of the catalog."""
        place_id = next_id()
        image = data.image or self._config.placeholder_image.format(n=random.randrange(100))
        place = Place(
            id=place_id,
            name=data.name,
            type=data.type,
            description=data.description,
            image=image,
            rating=0.0,
            review_count=0,
            noise_level=data.noise_level,
            has_outlets=data.has_outlets,
            has_wifi=data.has_wifi,
            has_food=data.has_food,
            is_open_late=data.is_open_late,
            is_crowded=False,
            reviews=(),
        )
        self._state = self._state.model_copy(
            update={
                "places": (place,) + self._state.places,
                "custom_ids": self._state.custom_ids | {place_id},
            }
        )
        self._persist_custom_places()
        logger.info("Added place %r (%s)", place.name, place_id)
        return place

    def toggle_favorite(self, place_id: str) -> bool:
        """Flip favorite membership. Returns whether the place is now a favorite."""
        favorites = _toggled(self._state.favorites, place_id)
        self._state = self._state.model_copy(update={"favorites": favorites})
        self._persist_favorites()
        return place_id in favorites

    def toggle_visited(self, place_id: str) -> bool:
        """Flip visited membership. Returns whether the place is now visited."""
        visited = _toggled(self._state.visited, place_id)
        self._state = self._state.model_copy(update={"visited": visited})
        self._persist_visited()
        return place_id in visited

    def add_review(
        self,
        place_id: str,
        rating: int,
        text: str,
        user_name: str = DEFAULT_USER_NAME,
    ) -> Place | None:
        """Attach a review; returns the updated place, or ``None`` if unknown."""
        if self.get_place(place_id) is None:
            return None
        places = add_review(self._state.places, place_id, rating, text, user_name=user_name)
        self._state = self._state.model_copy(update={"places": places})
        if place_id in self._state.custom_ids:
            self._persist_custom_places()
        return self.get_place(place_id)

    # ── Queries ──────────────────────────────────────────────────────────

    def get_place(self, place_id: str) -> Place | None:
        for place in self._state.places:
            if place.id == place_id:
                return place
        return None

    def visible_places(self, tab: Tab = Tab.discover, filters: FilterState | None = None) -> list[Place]:
        filters = filters or FilterState()
        return visible_places(
            self._state.places,
            tab,
            filters.query,
            filters,
            self._state.favorites,
            self._state.visited,
        )


def _toggled(ids: frozenset[str], place_id: str) -> frozenset[str]:
    return ids - {place_id} if place_id in ids else ids | {place_id}
