"""Supabase repository for diary entries."""

from dataclasses import dataclass
from datetime import date, datetime

from supabase import Client

from food_diary.domain.entries import (
    DEFAULT_WEIGHT_GRAMS,
    FoodSource,
    NutritionRecord,
    normalize_emoji,
    sync_state_from_id,
)
from food_diary.services.entries import EntryRepository

_TABLE = "food_entries"


@dataclass
class SupabaseEntryRepository(EntryRepository):
    """Supabase implementation for diary entries."""

    client: Client

    def insert(self, record: NutritionRecord) -> int:
        """Insert an entry row and return its id."""
        response = self.client.table(_TABLE).insert(_to_row(record)).execute()
        if not response.data:
            raise RuntimeError("Failed to create food entry")
        return int(response.data[0]["id"])

    def update(self, record: NutritionRecord) -> None:
        """Update the entry row with the record's id."""
        self.client.table(_TABLE).update(_to_row(record)).eq("id", record.id).execute()

    def delete(self, record: NutritionRecord) -> None:
        """Delete the entry row with the record's id."""
        self.client.table(_TABLE).delete().eq("id", record.id).execute()

    def list_for_day(self, day: date) -> list[NutritionRecord]:
        """Return entries logged on a day."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("day", day.isoformat())
            .order("logged_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_between(self, start: date, end: date) -> list[NutritionRecord]:
        """Return entries with a day in the inclusive range."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .gte("day", start.isoformat())
            .lte("day", end.isoformat())
            .order("logged_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def list_all(self) -> list[NutritionRecord]:
        """Return every entry, newest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .order("day", desc=True)
            .order("logged_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _to_row(record: NutritionRecord) -> dict[str, object]:
    return {
        "name": record.name,
        "calories": record.calories,
        "fats": record.fats,
        "proteins": record.proteins,
        "carbs": record.carbs,
        "emoji": record.emoji,
        "weight_grams": record.weight_grams,
        "day": record.day.isoformat(),
        "logged_at": record.timestamp.isoformat(),
        "image_uri": record.image_uri,
        "source": record.source.value,
        "health_record_id": record.external_sync_id,
    }


def _parse_row(row: dict[str, object]) -> NutritionRecord:
    logged_at_raw = row.get("logged_at")
    day = date.fromisoformat(str(row["day"]))
    logged_at = (
        datetime.fromisoformat(logged_at_raw)
        if isinstance(logged_at_raw, str) and logged_at_raw
        else datetime.combine(day, datetime.min.time())
    )
    return NutritionRecord(
        id=int(row["id"]),
        name=str(row.get("name", "")),
        calories=int(row.get("calories", 0)),
        fats=float(row.get("fats", 0.0)),
        proteins=float(row.get("proteins", 0.0)),
        carbs=float(row.get("carbs", 0.0)),
        emoji=normalize_emoji(row.get("emoji")),
        weight_grams=int(row.get("weight_grams", DEFAULT_WEIGHT_GRAMS)),
        day=day,
        timestamp=logged_at,
        image_uri=row.get("image_uri"),
        source=_parse_source(row.get("source")),
        sync_state=sync_state_from_id(row.get("health_record_id")),
    )


def _parse_source(value: object) -> FoodSource:
    try:
        return FoodSource(value)
    except ValueError:
        return FoodSource.MANUAL
