"""Exceptions raised by the food diary core."""


class FoodDiaryError(Exception):
    """Base error for the food diary."""


class ValidationError(FoodDiaryError, ValueError):
    """Raised when a record is built from malformed values."""


class HealthStoreError(FoodDiaryError):
    """Raised by health store adapters when a single operation fails."""


class HealthStoreUnavailableError(HealthStoreError):
    """Raised when the health store cannot be reached at all."""
