"""Models for AI food analysis results."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from food_diary.domain.entries import (
    DEFAULT_EMOJI,
    DEFAULT_WEIGHT_GRAMS,
    FoodSource,
    NutritionRecord,
    normalize_emoji,
)


class AnalysisEstimate(BaseModel):
    """Nutrition estimate returned by photo or description analysis."""

    model_config = ConfigDict(frozen=True)

    name: str = "Unknown Food"
    calories: int = Field(default=0, ge=0)
    fats: float = Field(default=0.0, ge=0.0)
    proteins: float = Field(default=0.0, ge=0.0)
    carbs: float = Field(default=0.0, ge=0.0)
    emoji: str = DEFAULT_EMOJI
    weight_grams: int = Field(default=DEFAULT_WEIGHT_GRAMS, ge=0)
    confidence: float = Field(default=0.8, ge=0.0, le=1.0)

    @field_validator("emoji", mode="before")
    @classmethod
    def _default_emoji(cls, value: object) -> str:
        return normalize_emoji(value)

    @field_validator("calories", "weight_grams", mode="before")
    @classmethod
    def _truncate_numbers(cls, value: object) -> object:
        if isinstance(value, float):
            return int(value)
        return value

    def to_entry(
        self,
        day: date,
        timestamp: datetime | None = None,
        image_uri: str | None = None,
    ) -> NutritionRecord:
        """Create an unpersisted entry, tagged by whether a photo was used."""
        return NutritionRecord(
            name=self.name,
            calories=self.calories,
            fats=self.fats,
            proteins=self.proteins,
            carbs=self.carbs,
            emoji=self.emoji,
            weight_grams=self.weight_grams,
            day=day,
            timestamp=timestamp or datetime.now(),
            image_uri=image_uri,
            source=FoodSource.PHOTO if image_uri else FoodSource.DESCRIPTION,
        )
