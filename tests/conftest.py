"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import date, datetime

import pytest

from food_diary.config import Settings
from food_diary.domain.entries import FavoriteRecord, NutritionRecord
from food_diary.domain.errors import HealthStoreError
from food_diary.domain.goals import DailyLimits, PhysicalProfile
from food_diary.services.entries import EntryRepository
from food_diary.services.favorites import FavoriteRepository
from food_diary.services.goals import ProfileRepository
from food_diary.services.health_sync import HealthStore

TODAY = date(2026, 10, 18)


def make_entry(**overrides: object) -> NutritionRecord:
    """Build an entry with sensible defaults."""
    values: dict[str, object] = {
        "name": "Oatmeal",
        "calories": 150,
        "fats": 3.0,
        "proteins": 5.0,
        "carbs": 27.0,
        "day": TODAY,
        "timestamp": datetime(2026, 10, 18, 8, 30),
    }
    values.update(overrides)
    return NutritionRecord(**values)


@dataclass
class InMemoryEntryRepository(EntryRepository):
    """In-memory entry repository for tests."""

    entries: dict[int, NutritionRecord] = field(default_factory=dict)
    next_id: int = 1
    updates: list[NutritionRecord] = field(default_factory=list)

    def insert(self, record: NutritionRecord) -> int:
        entry_id = self.next_id
        self.next_id += 1
        self.entries[entry_id] = replace(record, id=entry_id)
        return entry_id

    def update(self, record: NutritionRecord) -> None:
        self.updates.append(record)
        self.entries[record.id] = record

    def delete(self, record: NutritionRecord) -> None:
        self.entries.pop(record.id, None)

    def list_for_day(self, day: date) -> list[NutritionRecord]:
        return [entry for entry in self.entries.values() if entry.day == day]

    def list_between(self, start: date, end: date) -> list[NutritionRecord]:
        return [
            entry for entry in self.entries.values() if start <= entry.day <= end
        ]

    def list_all(self) -> list[NutritionRecord]:
        return list(self.entries.values())

    def add(self, record: NutritionRecord) -> NutritionRecord:
        entry_id = self.insert(record)
        return self.entries[entry_id]


@dataclass
class InMemoryFavoriteRepository(FavoriteRepository):
    """In-memory favorites keyed by name."""

    favorites: dict[str, FavoriteRecord] = field(default_factory=dict)

    def get(self, name: str) -> FavoriteRecord | None:
        return self.favorites.get(name)

    def upsert(self, favorite: FavoriteRecord) -> None:
        self.favorites[favorite.name] = favorite

    def delete(self, name: str) -> None:
        self.favorites.pop(name, None)

    def list_all(self) -> list[FavoriteRecord]:
        return list(self.favorites.values())


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory preferences store."""

    limits: DailyLimits | None = None
    profile: PhysicalProfile | None = None
    onboarding_complete: bool = False

    def get_limits(self) -> DailyLimits | None:
        return self.limits

    def save_limits(self, limits: DailyLimits) -> None:
        self.limits = limits

    def get_profile(self) -> PhysicalProfile | None:
        return self.profile

    def save_profile(self, profile: PhysicalProfile) -> None:
        self.profile = profile

    def is_onboarding_complete(self) -> bool:
        return self.onboarding_complete

    def set_onboarding_complete(self) -> None:
        self.onboarding_complete = True


@dataclass
class FakeHealthStore(HealthStore):
    """Health store fake that records every call."""

    records: dict[str, NutritionRecord] = field(default_factory=dict)
    available: bool = True
    fail_create_for: set[str] = field(default_factory=set)
    fail_update_for: set[str] = field(default_factory=set)
    fail_exists: bool = False
    fail_delete: bool = False
    calls: list[tuple[str, str]] = field(default_factory=list)
    _counter: int = 0

    async def is_available(self) -> bool:
        self.calls.append(("is_available", ""))
        return self.available

    async def exists(self, external_id: str) -> bool:
        self.calls.append(("exists", external_id))
        if self.fail_exists:
            raise HealthStoreError("exists failed")
        return external_id in self.records

    async def create(self, record: NutritionRecord) -> str:
        self.calls.append(("create", record.name))
        if record.name in self.fail_create_for:
            raise HealthStoreError("create failed")
        self._counter += 1
        external_id = f"hc-{self._counter}"
        self.records[external_id] = record
        return external_id

    async def update(self, external_id: str, record: NutritionRecord) -> None:
        self.calls.append(("update", external_id))
        if record.name in self.fail_update_for:
            raise HealthStoreError("update failed")
        self.records[external_id] = record

    async def delete(self, external_id: str) -> None:
        self.calls.append(("delete", external_id))
        if self.fail_delete:
            raise HealthStoreError("delete failed")
        self.records.pop(external_id, None)

    def call_names(self) -> list[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        health_store_base_url="https://bridge.example.com",
    )


@pytest.fixture
def entry_repository() -> InMemoryEntryRepository:
    return InMemoryEntryRepository()


@pytest.fixture
def health_store() -> FakeHealthStore:
    return FakeHealthStore()
