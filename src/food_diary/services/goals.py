"""Calorie and macro goal calculation."""

import math
from dataclasses import dataclass
from typing import Protocol

from food_diary.domain.goals import DailyLimits, GoalComputation, PhysicalProfile

MALE_HEIGHT_CM = 175.0
FEMALE_HEIGHT_CM = 162.0
KCAL_PER_KG = 7700
MIN_CALORIES = 1200.0
MAX_CALORIES = 4000.0
PROTEIN_SHARE = 0.25
CARBS_SHARE = 0.45
FAT_SHARE = 0.30
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9


class ProfileRepository(Protocol):
    """Persistence interface for user preferences."""

    def get_limits(self) -> DailyLimits | None:
        """Return stored daily limits, if any."""

    def save_limits(self, limits: DailyLimits) -> None:
        """Persist daily limits."""

    def get_profile(self) -> PhysicalProfile | None:
        """Return the stored physical profile, if any."""

    def save_profile(self, profile: PhysicalProfile) -> None:
        """Persist a physical profile."""

    def is_onboarding_complete(self) -> bool:
        """Return True once onboarding has finished."""

    def set_onboarding_complete(self) -> None:
        """Mark onboarding as finished."""


def estimate_bmr(profile: PhysicalProfile) -> float:
    """Mifflin-St Jeor BMR with height estimated from sex."""
    height = MALE_HEIGHT_CM if profile.is_male else FEMALE_HEIGHT_CM
    base = 10 * profile.weight_kg + 6.25 * height - 5 * profile.age
    return base + 5 if profile.is_male else base - 161


def compute_goals(profile: PhysicalProfile) -> GoalComputation:
    """Derive maintenance calories, the daily deficit and macro targets."""
    tdee = estimate_bmr(profile) * profile.activity_level.multiplier
    weight_diff = profile.weight_kg - profile.target_weight_kg
    total_change = weight_diff * KCAL_PER_KG
    if profile.weeks_to_goal > 0:
        daily_deficit = total_change / (profile.weeks_to_goal * 7)
    else:
        daily_deficit = 0.0
    target = min(max(tdee - daily_deficit, MIN_CALORIES), MAX_CALORIES)
    calories = _round_half_up(target)
    return GoalComputation(
        tdee=_round_half_up(tdee),
        daily_deficit=daily_deficit,
        calories=calories,
        proteins=_round_half_up(calories * PROTEIN_SHARE / KCAL_PER_G_PROTEIN),
        carbs=_round_half_up(calories * CARBS_SHARE / KCAL_PER_G_CARBS),
        fats=_round_half_up(calories * FAT_SHARE / KCAL_PER_G_FAT),
        is_losing_weight=profile.weight_kg > profile.target_weight_kg,
    )


@dataclass
class GoalService:
    """Service for daily limits and the profile they are derived from."""

    repository: ProfileRepository

    def get_limits(self) -> DailyLimits:
        """Return stored limits or the defaults."""
        return self.repository.get_limits() or DailyLimits()

    def save_limits(self, limits: DailyLimits) -> None:
        """Persist manually edited limits."""
        self.repository.save_limits(limits)

    def get_profile(self) -> PhysicalProfile | None:
        """Return the stored profile, if any."""
        return self.repository.get_profile()

    def apply_profile(self, profile: PhysicalProfile) -> GoalComputation:
        """Persist a profile and the limits computed from it."""
        goals = compute_goals(profile)
        self.repository.save_profile(profile)
        self.repository.save_limits(goals.to_limits())
        return goals

    def is_onboarding_complete(self) -> bool:
        """Return True once onboarding has finished."""
        return self.repository.is_onboarding_complete()

    def complete_onboarding(self, profile: PhysicalProfile) -> GoalComputation:
        """Apply the onboarding profile and mark onboarding as done."""
        goals = self.apply_profile(profile)
        self.repository.set_onboarding_complete()
        return goals


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
