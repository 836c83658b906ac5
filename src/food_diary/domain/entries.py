"""Domain models for diary entries and favorites."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum

from food_diary.domain.errors import ValidationError

DEFAULT_EMOJI = "🍽️"
DEFAULT_WEIGHT_GRAMS = 100


class FoodSource(str, Enum):
    """Where an entry came from. Only used for display."""

    PHOTO = "photo"
    DESCRIPTION = "description"
    CATALOG_SEARCH = "catalog_search"
    FAVORITE = "favorite"
    MANUAL = "manual"


@dataclass(frozen=True)
class Unsynced:
    """Entry has never been written to the health store."""


@dataclass(frozen=True)
class Synced:
    """Entry is believed to exist in the health store under ``external_id``."""

    external_id: str

    def __post_init__(self) -> None:
        if not self.external_id:
            raise ValidationError("external_id must not be empty")


SyncState = Unsynced | Synced

UNSYNCED = Unsynced()


def sync_state_from_id(external_id: str | None) -> SyncState:
    """Build a sync state from a nullable stored id."""
    if not external_id:
        return UNSYNCED
    return Synced(external_id)


def normalize_emoji(value: object) -> str:
    """Return a display glyph, falling back to the plate glyph."""
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_EMOJI


def _validate_nutrition(  # noqa: PLR0913
    name: str,
    calories: int,
    fats: float,
    proteins: float,
    carbs: float,
    weight_grams: int,
) -> None:
    if not name or not name.strip():
        raise ValidationError("name must not be empty")
    if calories < 0:
        raise ValidationError(f"calories must be non-negative, got {calories}")
    for label, value in (("fats", fats), ("proteins", proteins), ("carbs", carbs)):
        if value < 0:
            raise ValidationError(f"{label} must be non-negative, got {value}")
    # Zero is tolerated for legacy rows; scaling treats it as a no-op.
    if weight_grams < 0:
        raise ValidationError(f"weight_grams must be positive, got {weight_grams}")


@dataclass(frozen=True)
class NutritionRecord:
    """One logged food occurrence.

    Macro fields are expressed for ``weight_grams`` of food, so the per-gram
    density stays fixed when the portion is rescaled.
    """

    name: str
    calories: int
    fats: float
    proteins: float
    carbs: float
    day: date
    timestamp: datetime = field(default_factory=datetime.now)
    emoji: str = DEFAULT_EMOJI
    weight_grams: int = DEFAULT_WEIGHT_GRAMS
    image_uri: str | None = None
    source: FoodSource = FoodSource.MANUAL
    sync_state: SyncState = UNSYNCED
    id: int = 0

    def __post_init__(self) -> None:
        _validate_nutrition(
            self.name,
            self.calories,
            self.fats,
            self.proteins,
            self.carbs,
            self.weight_grams,
        )

    @property
    def is_persisted(self) -> bool:
        """Return True once the local store has assigned an id."""
        return self.id != 0

    @property
    def external_sync_id(self) -> str | None:
        """Return the health store id, if the entry is believed synced."""
        if isinstance(self.sync_state, Synced):
            return self.sync_state.external_id
        return None


@dataclass(frozen=True)
class FavoriteRecord:
    """Named nutrition template, keyed by ``name``."""

    name: str
    calories: int
    fats: float
    proteins: float
    carbs: float
    emoji: str = DEFAULT_EMOJI
    weight_grams: int = DEFAULT_WEIGHT_GRAMS

    def __post_init__(self) -> None:
        _validate_nutrition(
            self.name,
            self.calories,
            self.fats,
            self.proteins,
            self.carbs,
            self.weight_grams,
        )

    @classmethod
    def from_entry(cls, entry: NutritionRecord) -> "FavoriteRecord":
        """Snapshot the nutrition fields of an entry."""
        return cls(
            name=entry.name,
            calories=entry.calories,
            fats=entry.fats,
            proteins=entry.proteins,
            carbs=entry.carbs,
            emoji=entry.emoji,
            weight_grams=entry.weight_grams,
        )

    def to_entry(self, day: date, timestamp: datetime | None = None) -> NutritionRecord:
        """Create a new, unpersisted entry from this favorite."""
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
            source=FoodSource.FAVORITE,
        )
