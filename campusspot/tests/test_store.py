from __future__ import annotations

import json
from pathlib import Path

import pytest

from campusspot.catalog.models import FilterState, NewPlace, NoiseLevel, PlaceType, Tab
from campusspot.catalog.seed import SEED_PLACES
from campusspot.catalog.stats import compute_profile
from campusspot.catalog.storage import InMemoryStorage, JsonFileStorage
from campusspot.catalog.store import CatalogStore

SEED_IDS = [p.id for p in SEED_PLACES]


def _custom_record(place_id: str, name: str) -> dict:
    return {
        "id": place_id,
        "name": name,
        "type": "Lounge",
        "description": "Added by a student",
        "image": "",
        "rating": 0,
        "reviewCount": 0,
        "noiseLevel": "Quiet",
        "hasOutlets": True,
        "hasWifi": True,
        "hasFood": False,
        "isOpenLate": False,
        "isCrowded": False,
        "reviews": [],
    }


def _store(initial: dict[str, str] | None = None) -> tuple[CatalogStore, InMemoryStorage]:
    storage = InMemoryStorage(initial)
    store = CatalogStore(storage)
    store.initialize()
    return store, storage


class FailingReadStorage(InMemoryStorage):
    def get_item(self, key: str) -> str | None:
        if key == "favorites":
            raise RuntimeError("storage offline")
        return super().get_item(key)


class FailingWriteStorage(InMemoryStorage):
    def set_item(self, key: str, value: str) -> None:
        raise OSError("disk full")


# ── initialize ───────────────────────────────────────────────────────────


class TestInitialize:
    def test_empty_storage_gives_seed_catalog(self):
        store, _ = _store()
        assert [p.id for p in store.state.places] == SEED_IDS
        assert store.state.favorites == frozenset()
        assert store.state.visited == frozenset()

    def test_restores_persisted_state(self):
        store, _ = _store({
            "favorites": json.dumps(["1", "4"]),
            "visited": json.dumps(["2"]),
            "custom_places": json.dumps([_custom_record("c1", "Attic Nook")]),
        })
        assert store.state.favorites == frozenset({"1", "4"})
        assert store.state.visited == frozenset({"2"})
        assert [p.id for p in store.state.places] == SEED_IDS + ["c1"]
        assert store.state.custom_ids == frozenset({"c1"})

    def test_corrupt_key_does_not_affect_others(self):
        store, _ = _store({
            "favorites": "{not json",
            "visited": json.dumps(["3"]),
        })
        assert store.state.favorites == frozenset()
        assert store.state.visited == frozenset({"3"})

    def test_wrong_shape_is_treated_as_empty(self):
        store, _ = _store({
            "favorites": json.dumps({"1": True}),
            "custom_places": json.dumps("nope"),
        })
        assert store.state.favorites == frozenset()
        assert [p.id for p in store.state.places] == SEED_IDS

    def test_malformed_custom_record_is_skipped(self):
        records = [{"id": "bad"}, _custom_record("c2", "Good One")]
        store, _ = _store({"custom_places": json.dumps(records)})
        assert [p.id for p in store.state.places] == SEED_IDS + ["c2"]

    def test_duplicate_custom_id_is_skipped(self):
        records = [_custom_record("1", "Clash"), _custom_record("c3", "Fine")]
        store, _ = _store({"custom_places": json.dumps(records)})
        assert [p.id for p in store.state.places] == SEED_IDS + ["c3"]
        assert store.get_place("1").name == "Central Library"

    def test_storage_read_error_is_soft(self):
        storage = FailingReadStorage({"visited": json.dumps(["5"])})
        store = CatalogStore(storage)
        state = store.initialize()
        assert state.favorites == frozenset()
        assert state.visited == frozenset({"5"})


# ── toggles ──────────────────────────────────────────────────────────────


def test_toggle_favorite_twice_restores_original():
    store, storage = _store({"favorites": json.dumps(["2"])})
    original = store.state.favorites

    assert store.toggle_favorite("1") is True
    assert json.loads(storage.get_item("favorites")) == ["1", "2"]

    assert store.toggle_favorite("1") is False
    assert store.state.favorites == original
    assert json.loads(storage.get_item("favorites")) == ["2"]


def test_toggle_visited_twice_restores_original():
    store, storage = _store()
    store.toggle_visited("3")
    assert json.loads(storage.get_item("visited")) == ["3"]
    store.toggle_visited("3")
    assert store.state.visited == frozenset()
    assert json.loads(storage.get_item("visited")) == []


def test_toggle_writes_only_its_own_key():
    store, storage = _store()
    store.toggle_favorite("1")
    assert storage.get_item("visited") is None
    assert storage.get_item("custom_places") is None


def test_toggle_replaces_state_object():
    store, _ = _store()
    before = store.state
    store.toggle_favorite("1")
    assert store.state is not before
    assert before.favorites == frozenset()


def test_saved_tab_after_favorite():
    store, _ = _store({"visited": json.dumps(["5"])})
    store.toggle_favorite("1")
    saved = store.visible_places(Tab.saved)
    assert {p.id for p in saved} == {"1", "5"}


def test_write_failure_keeps_memory_state():
    store = CatalogStore(FailingWriteStorage())
    store.initialize()
    assert store.toggle_favorite("1") is True
    assert store.state.favorites == frozenset({"1"})


# ── add_place ────────────────────────────────────────────────────────────


class TestAddPlace:
    def test_new_place_goes_first(self):
        store, _ = _store()
        place = store.add_place(NewPlace(name="Attic Nook", type=PlaceType.lounge))
        assert store.state.places[0] == place
        assert [p.id for p in store.state.places[1:]] == SEED_IDS
        assert place.rating == 0.0
        assert place.review_count == 0
        assert place.reviews == ()
        assert place.is_crowded is False
        assert place.image

    def test_ids_are_unique(self):
        store, _ = _store()
        ids = {store.add_place(NewPlace(name=f"Spot {i}")).id for i in range(10)}
        assert len(ids) == 10

    def test_persisted_with_camel_case_fields(self):
        store, storage = _store()
        place = store.add_place(NewPlace(name="Attic Nook", noise_level=NoiseLevel.silent))
        records = json.loads(storage.get_item("custom_places"))
        assert records[0]["id"] == place.id
        assert records[0]["noiseLevel"] == "Silent"
        assert records[0]["reviewCount"] == 0

    def test_survives_reinitialisation(self):
        store, storage = _store()
        first = store.add_place(NewPlace(name="First"))
        second = store.add_place(NewPlace(name="Second"))

        reloaded = CatalogStore(storage)
        reloaded.initialize()
        ids = [p.id for p in reloaded.state.places]
        assert ids[: len(SEED_IDS)] == SEED_IDS
        assert ids[len(SEED_IDS):] == [second.id, first.id]


# ── add_review ───────────────────────────────────────────────────────────


def test_add_review_updates_seed_place():
    store, storage = _store()
    place = store.add_review("3", 4, "Nice and quiet")
    assert place.rating == 4.0
    assert place.review_count == 1
    assert store.get_place("3") == place
    assert storage.get_item("custom_places") is None


def test_add_review_persists_custom_place():
    store, storage = _store()
    place = store.add_place(NewPlace(name="Attic Nook"))
    store.add_review(place.id, 5, "Hidden gem")
    records = json.loads(storage.get_item("custom_places"))
    assert records[0]["reviewCount"] == 1
    assert records[0]["reviews"][0]["text"] == "Hidden gem"
    assert records[0]["reviews"][0]["placeId"] == place.id


def test_add_review_unknown_place():
    store, _ = _store()
    before = store.state
    assert store.add_review("missing", 5, "hello") is None
    assert store.state is before


# ── queries ──────────────────────────────────────────────────────────────


def test_visible_places_uses_filters():
    store, _ = _store()
    result = store.visible_places(Tab.discover, FilterState(query="library", outlets=True))
    assert [p.id for p in result] == ["1"]


def test_profile_counts():
    store, _ = _store({"favorites": json.dumps(["1", "gone"])})
    store.toggle_visited("2")
    store.toggle_visited("4")
    store.add_review("2", 5, "Great")
    store.add_place(NewPlace(name="Attic Nook"))

    assert compute_profile(store.state) == {
        "places_visited": 2,
        "favorites": 1,
        "reviews_written": 1,
        "custom_places": 1,
    }


# ── JsonFileStorage ──────────────────────────────────────────────────────


class TestJsonFileStorage:
    def test_round_trip_and_missing(self, tmp_path: Path):
        storage = JsonFileStorage(tmp_path / "state")
        assert storage.get_item("favorites") is None
        storage.set_item("favorites", '["1"]')
        assert storage.get_item("favorites") == '["1"]'
        assert (tmp_path / "state" / "favorites.json").is_file()

    def test_keys_are_separate_files(self, tmp_path: Path):
        storage = JsonFileStorage(tmp_path)
        storage.set_item("favorites", '["1"]')
        (tmp_path / "visited.json").write_text("garbage", encoding="utf-8")

        store = CatalogStore(storage)
        state = store.initialize()
        assert state.favorites == frozenset({"1"})
        assert state.visited == frozenset()

    def test_rejects_unsafe_keys(self, tmp_path: Path):
        storage = JsonFileStorage(tmp_path)
        with pytest.raises(ValueError):
            storage.set_item("../escape", "[]")
