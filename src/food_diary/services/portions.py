"""Portion scaling for nutrition records."""

from dataclasses import replace
from typing import Protocol, TypeVar

from pydantic import BaseModel

MIN_WEIGHT_GRAMS = 1


class Scalable(Protocol):
    """Anything carrying macros for a given weight."""

    calories: int
    fats: float
    proteins: float
    carbs: float
    weight_grams: int


T = TypeVar("T", bound=Scalable)


def clamp_weight(weight_grams: int) -> int:
    """Coerce a user supplied weight to at least one gram."""
    return max(int(weight_grams), MIN_WEIGHT_GRAMS)


def scale(record: T, new_weight_grams: int) -> T:
    """Return ``record`` rescaled to ``new_weight_grams``.

    Calories are truncated, macros are not, so a round trip can lose up to a
    calorie per step. A zero source weight or an unchanged weight returns the
    record itself.
    """
    if record.weight_grams == 0 or new_weight_grams == record.weight_grams:
        return record
    ratio = new_weight_grams / record.weight_grams
    return _replace(
        record,
        weight_grams=new_weight_grams,
        calories=int(record.calories * ratio),
        fats=record.fats * ratio,
        proteins=record.proteins * ratio,
        carbs=record.carbs * ratio,
    )


def _replace(record: T, **changes: object) -> T:
    if isinstance(record, BaseModel):
        return record.model_copy(update=changes)
    return replace(record, **changes)
