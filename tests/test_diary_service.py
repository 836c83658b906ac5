"""Tests for the diary entry lifecycle."""

import asyncio
from datetime import datetime

from food_diary.domain.analysis import AnalysisEstimate
from food_diary.domain.entries import UNSYNCED, FavoriteRecord, FoodSource, Synced
from food_diary.services.diary import DiaryService
from food_diary.services.favorites import FavoriteService
from food_diary.services.health_sync import HealthSyncService
from tests.conftest import (
    TODAY,
    FakeHealthStore,
    InMemoryEntryRepository,
    InMemoryFavoriteRepository,
    make_entry,
)


def _service(
    repository: InMemoryEntryRepository, store: FakeHealthStore | None = None
) -> DiaryService:
    health_sync = None
    if store is not None:
        health_sync = HealthSyncService(store=store, repository=repository)
    return DiaryService(
        repository=repository,
        favorites=FavoriteService(InMemoryFavoriteRepository()),
        health_sync=health_sync,
    )


def test_log_entry_persists_and_pushes(
    entry_repository: InMemoryEntryRepository, health_store: FakeHealthStore
) -> None:
    service = _service(entry_repository, health_store)

    saved = asyncio.run(service.log_entry(make_entry(name="Porridge")))

    assert saved.id == 1
    assert saved.external_sync_id == "hc-1"
    assert entry_repository.entries[1].sync_state == Synced("hc-1")


def test_log_entry_keeps_local_copy_when_push_fails(
    entry_repository: InMemoryEntryRepository, health_store: FakeHealthStore
) -> None:
    health_store.fail_create_for = {"Porridge"}
    service = _service(entry_repository, health_store)

    saved = asyncio.run(service.log_entry(make_entry(name="Porridge")))

    assert saved.sync_state == UNSYNCED
    assert entry_repository.entries[saved.id].name == "Porridge"


def test_log_entry_without_health_store(
    entry_repository: InMemoryEntryRepository,
) -> None:
    saved = asyncio.run(_service(entry_repository).log_entry(make_entry()))

    assert saved.id == 1
    assert saved.sync_state == UNSYNCED


def test_log_estimate_scales_to_adjusted_weight(
    entry_repository: InMemoryEntryRepository,
) -> None:
    estimate = AnalysisEstimate(
        name="Pizza slice",
        calories=285,
        fats=10.4,
        proteins=12.2,
        carbs=35.7,
        emoji="🍕",
        weight_grams=107,
    )
    service = _service(entry_repository)

    saved = asyncio.run(
        service.log_estimate(
            estimate,
            TODAY,
            datetime(2026, 10, 18, 13, 0),
            weight_grams=214,
            image_uri="file:///photos/1.jpg",
        )
    )

    assert saved.weight_grams == 214
    assert saved.calories == 570
    assert saved.source is FoodSource.PHOTO
    assert saved.image_uri == "file:///photos/1.jpg"
    assert saved.emoji == "🍕"


def test_log_estimate_clamps_weight_and_tags_description(
    entry_repository: InMemoryEntryRepository,
) -> None:
    estimate = AnalysisEstimate(name="Tea", calories=2, weight_grams=250)

    saved = asyncio.run(
        _service(entry_repository).log_estimate(estimate, TODAY, weight_grams=0)
    )

    assert saved.weight_grams == 1
    assert saved.source is FoodSource.DESCRIPTION


def test_log_favorite_creates_new_entry(
    entry_repository: InMemoryEntryRepository,
) -> None:
    favorite = FavoriteRecord(
        name="Protein shake", calories=180, fats=2.0, proteins=30.0, carbs=8.0
    )

    saved = asyncio.run(_service(entry_repository).log_favorite(favorite, TODAY))

    assert saved.source is FoodSource.FAVORITE
    assert saved.day == TODAY
    assert saved.calories == 180


def test_update_portion_rescales_and_persists(
    entry_repository: InMemoryEntryRepository,
) -> None:
    entry = entry_repository.add(make_entry(calories=150, weight_grams=100))
    service = _service(entry_repository)

    updated = service.update_portion(entry, 50)

    assert updated.calories == 75
    assert entry_repository.entries[entry.id].weight_grams == 50
    assert service.update_portion(updated, 50) is updated
    assert len(entry_repository.updates) == 1


def test_delete_entry_removes_remote_copy(
    entry_repository: InMemoryEntryRepository, health_store: FakeHealthStore
) -> None:
    service = _service(entry_repository, health_store)
    saved = asyncio.run(service.log_entry(make_entry()))

    assert asyncio.run(service.delete_entry(saved)) is True
    assert saved.id not in entry_repository.entries
    assert health_store.records == {}


def test_delete_entry_survives_remote_failure(
    entry_repository: InMemoryEntryRepository, health_store: FakeHealthStore
) -> None:
    service = _service(entry_repository, health_store)
    saved = asyncio.run(service.log_entry(make_entry()))
    health_store.fail_delete = True

    assert asyncio.run(service.delete_entry(saved)) is False
    assert saved.id not in entry_repository.entries


def test_restore_entry_inserts_fresh_unsynced_copy(
    entry_repository: InMemoryEntryRepository, health_store: FakeHealthStore
) -> None:
    service = _service(entry_repository, health_store)
    saved = asyncio.run(service.log_entry(make_entry(name="Cake")))
    asyncio.run(service.delete_entry(saved))

    restored = service.restore_entry(saved)

    assert restored.id != saved.id
    assert restored.sync_state == UNSYNCED
    assert restored.name == "Cake"
    assert entry_repository.entries[restored.id].external_sync_id is None


def test_toggle_favorite_delegates_to_ledger(
    entry_repository: InMemoryEntryRepository,
) -> None:
    service = _service(entry_repository)
    entry = make_entry(name="Granola")

    assert service.toggle_favorite(entry) is True
    assert service.favorites.is_favorite("Granola") is True
