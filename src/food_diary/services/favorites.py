"""Favorite foods ledger."""

from dataclasses import dataclass
from typing import Protocol

from food_diary.domain.entries import FavoriteRecord, NutritionRecord


class FavoriteRepository(Protocol):
    """Persistence interface for favorite foods, keyed by name."""

    def get(self, name: str) -> FavoriteRecord | None:
        """Return the favorite with this exact name, if present."""

    def upsert(self, favorite: FavoriteRecord) -> None:
        """Insert a favorite, replacing any favorite with the same name."""

    def delete(self, name: str) -> None:
        """Delete the favorite with this exact name."""

    def list_all(self) -> list[FavoriteRecord]:
        """Return every favorite."""


@dataclass
class FavoriteService:
    """Tracks which food names are favorited."""

    repository: FavoriteRepository

    def is_favorite(self, name: str) -> bool:
        """Return True if a favorite has exactly this name."""
        return self.repository.get(name) is not None

    def toggle(self, record: NutritionRecord) -> bool:
        """Flip the favorite state of the record's name and return the new state."""
        if self.is_favorite(record.name):
            self.repository.delete(record.name)
            return False
        self.repository.upsert(FavoriteRecord.from_entry(record))
        return True

    def remove(self, name: str) -> FavoriteRecord | None:
        """Remove a favorite and return its snapshot for undo."""
        existing = self.repository.get(name)
        if existing is None:
            return None
        self.repository.delete(name)
        return existing

    def restore(self, snapshot: FavoriteRecord) -> None:
        """Re-insert a removed favorite."""
        self.repository.upsert(snapshot)

    def list_favorites(self) -> list[FavoriteRecord]:
        """Return favorites sorted by name."""
        return sorted(self.repository.list_all(), key=lambda favorite: favorite.name)

    def favorite_names(self) -> set[str]:
        """Return the set of favorited names."""
        return {favorite.name for favorite in self.repository.list_all()}
