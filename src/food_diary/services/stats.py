"""Daily aggregation of diary entries."""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date

from food_diary.domain.entries import NutritionRecord
from food_diary.domain.goals import DailyLimits
from food_diary.domain.stats import DailySummary, DayHistory, MacroProgress
from food_diary.services.entries import EntryRepository


@dataclass
class StatsService:
    """Service for daily totals and history."""

    repository: EntryRepository

    def get_day(self, day: date) -> DailySummary:
        """Return totals for a single day."""
        return aggregate(self.repository.list_for_day(day), day)

    def get_day_with_entries(
        self, day: date
    ) -> tuple[DailySummary, list[NutritionRecord]]:
        """Return totals and the day's entries, newest first."""
        entries = self.repository.list_for_day(day)
        ordered = sorted(entries, key=lambda entry: entry.timestamp, reverse=True)
        return aggregate(entries, day), ordered

    def get_history(self) -> list[DayHistory]:
        """Return every logged day, newest first."""
        return group_by_day(self.repository.list_all())


def aggregate(records: list[NutritionRecord], day: date) -> DailySummary:
    """Sum calories and macros of the records logged on ``day``."""
    calories = 0
    fats = proteins = carbs = 0.0
    for record in records:
        if record.day != day:
            continue
        calories += record.calories
        fats += record.fats
        proteins += record.proteins
        carbs += record.carbs
    return DailySummary(
        day=day,
        total_calories=calories,
        total_fats=fats,
        total_proteins=proteins,
        total_carbs=carbs,
    )


def progress(total: float, goal: float) -> float:
    """Return ``total / goal`` clamped to [0, 1]; a zero goal gives 0."""
    if goal <= 0:
        return 0.0
    return min(max(total / goal, 0.0), 1.0)


def summary_progress(summary: DailySummary, limits: DailyLimits) -> MacroProgress:
    """Return progress ratios for all four rings."""
    return MacroProgress(
        calories=progress(summary.total_calories, limits.calories),
        fats=progress(summary.total_fats, limits.fats),
        proteins=progress(summary.total_proteins, limits.proteins),
        carbs=progress(summary.total_carbs, limits.carbs),
    )


def group_by_day(records: list[NutritionRecord]) -> list[DayHistory]:
    """Group records by day, newest day first and newest entry first."""
    by_day: dict[date, list[NutritionRecord]] = defaultdict(list)
    for record in records:
        by_day[record.day].append(record)
    history = []
    for day in sorted(by_day, reverse=True):
        entries = sorted(by_day[day], key=lambda entry: entry.timestamp, reverse=True)
        history.append(
            DayHistory(day=day, entries=entries, summary=aggregate(entries, day))
        )
    return history
