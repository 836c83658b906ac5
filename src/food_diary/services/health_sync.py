"""Reconciliation of diary entries with an external health store."""

import asyncio
import logging
from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import TYPE_CHECKING, Protocol, TypeVar

from food_diary.domain.entries import UNSYNCED, NutritionRecord, Synced
from food_diary.domain.errors import HealthStoreError
from food_diary.domain.sync import SyncPlan, SyncReport
from food_diary.services.entries import EntryRepository

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

_logger = logging.getLogger(__name__)

R = TypeVar("R")


class HealthStore(Protocol):
    """Capability interface over a platform health store.

    Implementations raise ``HealthStoreError`` when an operation fails.
    """

    async def is_available(self) -> bool:
        """Return True when the store can be reached."""

    async def exists(self, external_id: str) -> bool:
        """Return True if the store still holds the record."""

    async def create(self, record: NutritionRecord) -> str:
        """Write a new record and return its store id."""

    async def update(self, external_id: str, record: NutritionRecord) -> None:
        """Overwrite the stored record with the entry's current values."""

    async def delete(self, external_id: str) -> None:
        """Delete a record from the store."""


@dataclass
class HealthSyncService:
    """Pushes local entries to the health store and tracks their store ids."""

    store: HealthStore
    repository: EntryRepository
    concurrency: int = 4
    window_days: int = 7

    async def sync_recent(self, today: date, days: int | None = None) -> SyncReport:
        """Reconcile entries from the last ``days`` days up to ``today``."""
        start = today - timedelta(days=self.window_days if days is None else days)
        records = self.repository.list_between(start, today)
        _logger.info("Health sync window: end=%s entries=%s", today, len(records))
        return await self.reconcile(records)

    async def reconcile(self, records: list[NutritionRecord]) -> SyncReport:
        """Insert, update or re-insert each record as the store requires."""
        if not records:
            return SyncReport(success=True, message="✓ All 0 entries checked")

        try:
            available = await self.store.is_available()
        except Exception as exc:  # noqa: BLE001
            return _failed_report(len(records), str(exc))
        if not available:
            return _failed_report(len(records), "health store unavailable")

        plan = await self.classify(records)
        _logger.info(
            "Health sync plan: to_insert=%s to_update=%s",
            len(plan.to_insert),
            len(plan.to_update),
        )

        # Inserts finish before updates so fresh ids are never re-checked.
        inserted = await self._run_bounded(self._insert, plan.to_insert)
        updated = await self._run_bounded(self._update, plan.to_update)

        inserted_count = sum(1 for _, ok in inserted if ok)
        updated_count = sum(1 for _, ok in updated if ok)
        failed = len(inserted) + len(updated) - inserted_count - updated_count

        by_original = _map_results(plan.to_insert, inserted)
        merged = [by_original.get(id(record), record) for record in records]

        message = f"✓ Synced/Updated {inserted_count + updated_count} entries"
        if failed:
            message += f" ({failed} failed)"
        _logger.info(
            "Health sync done: inserted=%s updated=%s failed=%s",
            inserted_count,
            updated_count,
            failed,
        )
        return SyncReport(
            success=True,
            message=message,
            checked=len(records),
            inserted=inserted_count,
            updated=updated_count,
            failed=failed,
            records=merged,
        )

    async def classify(self, records: list[NutritionRecord]) -> SyncPlan:
        """Split records into those to insert and those to update."""
        checks = await self._run_bounded(self._still_exists, records)
        to_insert: list[NutritionRecord] = []
        to_update: list[NutritionRecord] = []
        for record, exists in zip(records, checks, strict=True):
            if exists:
                to_update.append(record)
            else:
                to_insert.append(record)
        return SyncPlan(to_insert=to_insert, to_update=to_update)

    async def push_entry(self, record: NutritionRecord) -> NutritionRecord:
        """Best-effort insert of a freshly logged entry."""
        pushed, _ = await self._insert(record)
        return pushed

    async def delete_remote(self, record: NutritionRecord) -> bool:
        """Delete the entry's store copy; True when the store holds none."""
        external_id = record.external_sync_id
        if external_id is None:
            return True
        try:
            await self.store.delete(external_id)
        except Exception as exc:  # noqa: BLE001
            _logger.warning(
                "Health store delete failed: external_id=%s error=%s",
                external_id,
                exc,
            )
            return False
        _logger.info("Health store delete: external_id=%s", external_id)
        return True

    async def _still_exists(self, record: NutritionRecord) -> bool:
        external_id = record.external_sync_id
        if external_id is None:
            return False
        try:
            return await self.store.exists(external_id)
        except Exception as exc:  # noqa: BLE001
            # Unknown existence is treated as deleted so the entry is re-sent.
            _logger.warning(
                "Health store exists check failed: external_id=%s error=%s",
                external_id,
                exc,
            )
            return False

    async def _insert(self, record: NutritionRecord) -> tuple[NutritionRecord, bool]:
        try:
            external_id = await self.store.create(record)
            if not external_id:
                raise HealthStoreError("no record id returned")
        except Exception as exc:  # noqa: BLE001
            _logger.warning(
                "Health store insert failed: entry_id=%s error=%s", record.id, exc
            )
            return self._clear_stale_id(record), False
        synced = replace(record, sync_state=Synced(external_id))
        try:
            self.repository.update(synced)
        except Exception as exc:  # noqa: BLE001
            _logger.warning(
                "Health store id write-through failed: entry_id=%s external_id=%s "
                "error=%s",
                record.id,
                external_id,
                exc,
            )
            # Without the local id the store copy is orphaned, so remove it.
            await self.delete_remote(synced)
            return record, False
        _logger.info(
            "Health store insert: entry_id=%s external_id=%s", record.id, external_id
        )
        return synced, True

    def _clear_stale_id(self, record: NutritionRecord) -> NutritionRecord:
        if not isinstance(record.sync_state, Synced):
            return record
        cleared = replace(record, sync_state=UNSYNCED)
        try:
            self.repository.update(cleared)
        except Exception as exc:  # noqa: BLE001
            _logger.warning(
                "Clearing stale health store id failed: entry_id=%s error=%s",
                record.id,
                exc,
            )
            return record
        return cleared

    async def _update(self, record: NutritionRecord) -> tuple[NutritionRecord, bool]:
        external_id = record.external_sync_id
        if external_id is None:
            return record, False
        try:
            await self.store.update(external_id, record)
        except Exception as exc:  # noqa: BLE001
            _logger.warning(
                "Health store update failed: external_id=%s error=%s",
                external_id,
                exc,
            )
            return record, False
        return record, True

    async def _run_bounded(
        self,
        func: "Callable[[NutritionRecord], Awaitable[R]]",
        records: list[NutritionRecord],
    ) -> list[R]:
        semaphore = asyncio.Semaphore(max(self.concurrency, 1))

        async def run(record: NutritionRecord) -> R:
            async with semaphore:
                return await func(record)

        return list(await asyncio.gather(*(run(record) for record in records)))


def _map_results(
    originals: list[NutritionRecord],
    results: list[tuple[NutritionRecord, bool]],
) -> dict[int, NutritionRecord]:
    return {
        id(original): result
        for original, (result, _) in zip(originals, results, strict=True)
    }


def _failed_report(checked: int, reason: str) -> SyncReport:
    _logger.warning("Health sync aborted: %s", reason)
    return SyncReport(
        success=False,
        message=f"✗ Sync failed: {reason}",
        checked=checked,
    )
