"""Domain models for daily statistics."""

from dataclasses import dataclass
from datetime import date

from food_diary.domain.entries import NutritionRecord


@dataclass(frozen=True)
class DailySummary:
    """Summed nutrition for a single diary day."""

    day: date
    total_calories: int = 0
    total_fats: float = 0.0
    total_proteins: float = 0.0
    total_carbs: float = 0.0


@dataclass(frozen=True)
class MacroProgress:
    """Progress ratios in [0, 1] against daily limits."""

    calories: float
    fats: float
    proteins: float
    carbs: float


@dataclass(frozen=True)
class DayHistory:
    """Entries and totals for one day of history."""

    day: date
    entries: list[NutritionRecord]
    summary: DailySummary
