"""Supabase repository for favorite foods."""

from dataclasses import dataclass

from supabase import Client

from food_diary.domain.entries import (
    DEFAULT_WEIGHT_GRAMS,
    FavoriteRecord,
    normalize_emoji,
)
from food_diary.services.favorites import FavoriteRepository

_TABLE = "favorite_foods"


@dataclass
class SupabaseFavoriteRepository(FavoriteRepository):
    """Supabase-backed favorites, unique by name."""

    client: Client

    def get(self, name: str) -> FavoriteRecord | None:
        """Return the favorite with this exact name."""
        response = (
            self.client.table(_TABLE).select("*").eq("name", name).limit(1).execute()
        )
        if not response.data:
            return None
        return _parse_favorite(response.data[0])

    def upsert(self, favorite: FavoriteRecord) -> None:
        """Insert or replace a favorite by name."""
        self.client.table(_TABLE).upsert(
            {
                "name": favorite.name,
                "calories": favorite.calories,
                "fats": favorite.fats,
                "proteins": favorite.proteins,
                "carbs": favorite.carbs,
                "emoji": favorite.emoji,
                "weight_grams": favorite.weight_grams,
            },
            on_conflict="name",
        ).execute()

    def delete(self, name: str) -> None:
        """Delete a favorite by name."""
        self.client.table(_TABLE).delete().eq("name", name).execute()

    def list_all(self) -> list[FavoriteRecord]:
        """Return favorites ordered by name."""
        response = self.client.table(_TABLE).select("*").order("name").execute()
        return [_parse_favorite(row) for row in response.data or []]


def _parse_favorite(row: dict[str, object]) -> FavoriteRecord:
    return FavoriteRecord(
        name=str(row.get("name", "")),
        calories=int(row.get("calories", 0)),
        fats=float(row.get("fats", 0.0)),
        proteins=float(row.get("proteins", 0.0)),
        carbs=float(row.get("carbs", 0.0)),
        emoji=normalize_emoji(row.get("emoji")),
        weight_grams=int(row.get("weight_grams", DEFAULT_WEIGHT_GRAMS)),
    )
