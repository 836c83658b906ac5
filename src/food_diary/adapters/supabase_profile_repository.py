"""Supabase repository for goals and the physical profile."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from food_diary.domain.goals import ActivityLevel, DailyLimits, PhysicalProfile
from food_diary.services.goals import ProfileRepository

_TABLE = "user_settings"


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Stores one settings row per diary owner."""

    client: Client
    owner_id: str

    def get_limits(self) -> DailyLimits | None:
        """Return stored daily limits."""
        row = self._select(
            "daily_calories, daily_fats, daily_proteins, daily_carbs"
        )
        if row is None or row.get("daily_calories") is None:
            return None
        return DailyLimits(
            calories=int(row["daily_calories"]),
            fats=float(row.get("daily_fats") or 0.0),
            proteins=float(row.get("daily_proteins") or 0.0),
            carbs=float(row.get("daily_carbs") or 0.0),
        )

    def save_limits(self, limits: DailyLimits) -> None:
        """Persist daily limits."""
        self._upsert(
            {
                "daily_calories": limits.calories,
                "daily_fats": limits.fats,
                "daily_proteins": limits.proteins,
                "daily_carbs": limits.carbs,
            }
        )

    def get_profile(self) -> PhysicalProfile | None:
        """Return the stored physical profile."""
        row = self._select(
            "age, weight_kg, target_weight_kg, weeks_to_goal, is_male, activity_level"
        )
        if row is None or row.get("age") is None:
            return None
        return PhysicalProfile(
            age=int(row["age"]),
            weight_kg=float(row.get("weight_kg") or 0.0),
            target_weight_kg=float(row.get("target_weight_kg") or 0.0),
            weeks_to_goal=int(row.get("weeks_to_goal") or 8),
            is_male=row.get("is_male") is not False,
            activity_level=_parse_activity(row.get("activity_level")),
        )

    def save_profile(self, profile: PhysicalProfile) -> None:
        """Persist a physical profile."""
        self._upsert(
            {
                "age": profile.age,
                "weight_kg": profile.weight_kg,
                "target_weight_kg": profile.target_weight_kg,
                "weeks_to_goal": profile.weeks_to_goal,
                "is_male": profile.is_male,
                "activity_level": profile.activity_level.name,
            }
        )

    def is_onboarding_complete(self) -> bool:
        """Return the onboarding flag."""
        row = self._select("onboarding_complete")
        return bool(row and row.get("onboarding_complete"))

    def set_onboarding_complete(self) -> None:
        """Set the onboarding flag."""
        self._upsert({"onboarding_complete": True})

    def _select(self, columns: str) -> dict[str, object] | None:
        response = (
            self.client.table(_TABLE)
            .select(columns)
            .eq("owner_id", self.owner_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def _upsert(self, values: dict[str, object]) -> None:
        self.client.table(_TABLE).upsert(
            {
                "owner_id": self.owner_id,
                "updated_at": datetime.now(tz=UTC).isoformat(),
                **values,
            },
            on_conflict="owner_id",
        ).execute()


def _parse_activity(value: object) -> ActivityLevel:
    if isinstance(value, str) and value in ActivityLevel.__members__:
        return ActivityLevel[value]
    return ActivityLevel.MODERATE
