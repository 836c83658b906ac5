"""Goal and profile domain models."""

from dataclasses import dataclass
from enum import Enum


class ActivityLevel(Enum):
    """Activity levels with their TDEE multipliers."""

    SEDENTARY = ("Sedentary (little/no exercise)", 1.2)
    LIGHT = ("Light (1-3 days/week)", 1.375)
    MODERATE = ("Moderate (3-5 days/week)", 1.55)
    ACTIVE = ("Active (6-7 days/week)", 1.725)
    VERY_ACTIVE = ("Very Active (athlete)", 1.9)

    def __init__(self, label: str, multiplier: float) -> None:
        self.label = label
        self.multiplier = multiplier


@dataclass(frozen=True)
class DailyLimits:
    """User's daily nutrition targets."""

    calories: int = 2000
    fats: float = 65.0
    proteins: float = 50.0
    carbs: float = 300.0


@dataclass(frozen=True)
class PhysicalProfile:
    """Inputs for the goal calculation."""

    age: int
    weight_kg: float
    target_weight_kg: float
    weeks_to_goal: int = 8
    is_male: bool = True
    activity_level: ActivityLevel = ActivityLevel.MODERATE


@dataclass(frozen=True)
class GoalComputation:
    """Derived maintenance calories, deficit and macro targets."""

    tdee: int
    daily_deficit: float
    calories: int
    proteins: int
    carbs: int
    fats: int
    is_losing_weight: bool

    def to_limits(self) -> DailyLimits:
        """Return the computed targets as daily limits."""
        return DailyLimits(
            calories=self.calories,
            fats=float(self.fats),
            proteins=float(self.proteins),
            carbs=float(self.carbs),
        )
