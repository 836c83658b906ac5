"""Diary entry lifecycle."""

import logging
from dataclasses import dataclass, replace
from datetime import date, datetime

from food_diary.domain.analysis import AnalysisEstimate
from food_diary.domain.entries import UNSYNCED, FavoriteRecord, NutritionRecord
from food_diary.services.entries import EntryRepository
from food_diary.services.favorites import FavoriteService
from food_diary.services.health_sync import HealthSyncService
from food_diary.services.portions import clamp_weight, scale

_logger = logging.getLogger(__name__)


@dataclass
class DiaryService:
    """Creates, edits and deletes entries, keeping the health store in step."""

    repository: EntryRepository
    favorites: FavoriteService
    health_sync: HealthSyncService | None = None

    async def log_entry(self, record: NutritionRecord) -> NutritionRecord:
        """Persist a new entry and push it to the health store."""
        entry_id = self.repository.insert(record)
        saved = replace(record, id=entry_id, sync_state=UNSYNCED)
        _logger.info("Logged entry: id=%s source=%s", entry_id, saved.source.value)
        if self.health_sync is None:
            return saved
        return await self.health_sync.push_entry(saved)

    async def log_estimate(
        self,
        estimate: AnalysisEstimate,
        day: date,
        timestamp: datetime | None = None,
        *,
        weight_grams: int | None = None,
        image_uri: str | None = None,
    ) -> NutritionRecord:
        """Log an analysis result, rescaled when the user adjusted the weight."""
        if weight_grams is not None:
            estimate = scale(estimate, clamp_weight(weight_grams))
        return await self.log_entry(estimate.to_entry(day, timestamp, image_uri))

    async def log_favorite(
        self, favorite: FavoriteRecord, day: date, timestamp: datetime | None = None
    ) -> NutritionRecord:
        """Log a new entry from a saved favorite."""
        return await self.log_entry(favorite.to_entry(day, timestamp))

    def update_portion(
        self, record: NutritionRecord, new_weight_grams: int
    ) -> NutritionRecord:
        """Rescale an entry to a new portion weight and persist it."""
        updated = scale(record, clamp_weight(new_weight_grams))
        if updated is not record:
            self.repository.update(updated)
        return updated

    def update_entry(self, record: NutritionRecord) -> None:
        """Persist an edited entry."""
        self.repository.update(record)

    async def delete_entry(self, record: NutritionRecord) -> bool:
        """Delete an entry locally, then from the health store.

        The local delete always stands. Returns False when the store copy
        could not be removed.
        """
        self.repository.delete(record)
        if self.health_sync is None:
            return record.external_sync_id is None
        return await self.health_sync.delete_remote(record)

    def restore_entry(self, record: NutritionRecord) -> NutritionRecord:
        """Undo a delete by inserting a fresh, unsynced copy."""
        fresh = replace(record, id=0, sync_state=UNSYNCED)
        entry_id = self.repository.insert(fresh)
        return replace(fresh, id=entry_id)

    def toggle_favorite(self, record: NutritionRecord) -> bool:
        """Flip the favorite state of an entry's name."""
        return self.favorites.toggle(record)
