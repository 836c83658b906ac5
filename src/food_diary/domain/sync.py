"""Domain models for health store reconciliation."""

from dataclasses import dataclass, field

from food_diary.domain.entries import NutritionRecord


@dataclass(frozen=True)
class SyncPlan:
    """Records split by the action the health store needs."""

    to_insert: list[NutritionRecord] = field(default_factory=list)
    to_update: list[NutritionRecord] = field(default_factory=list)


@dataclass(frozen=True)
class SyncReport:
    """Outcome of a reconciliation batch."""

    success: bool
    message: str
    checked: int = 0
    inserted: int = 0
    updated: int = 0
    failed: int = 0
    records: list[NutritionRecord] = field(default_factory=list)

    @property
    def reconciled(self) -> int:
        """Return how many records were inserted or updated."""
        return self.inserted + self.updated
