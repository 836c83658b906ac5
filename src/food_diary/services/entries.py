"""Persistence interface for diary entries."""

from datetime import date
from typing import Protocol

from food_diary.domain.entries import NutritionRecord


class EntryRepository(Protocol):
    """Local store for diary entries."""

    def insert(self, record: NutritionRecord) -> int:
        """Insert a record and return its new local id."""

    def update(self, record: NutritionRecord) -> None:
        """Replace the stored record with the same id."""

    def delete(self, record: NutritionRecord) -> None:
        """Delete the stored record with the same id."""

    def list_for_day(self, day: date) -> list[NutritionRecord]:
        """Return records logged on a day."""

    def list_between(self, start: date, end: date) -> list[NutritionRecord]:
        """Return records with ``start <= day <= end``."""

    def list_all(self) -> list[NutritionRecord]:
        """Return every record, newest first."""
