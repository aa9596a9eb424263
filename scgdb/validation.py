"""Input validation helpers shared by the database toolkit."""

from __future__ import annotations

import re
from typing import Any, Sequence, TypeVar

_COLUMN_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*(?:\.[A-Za-z_][A-Za-z0-9_]*)*")

_VALID_DIRECTIONS = frozenset({"ASC", "DESC"})

_T = TypeVar("_T")


class ValidationError(ValueError):
    """Raised when a value or a configuration fails validation."""


def _blank(value: str | None) -> bool:
    return not (value or "").strip()


def validate_config_for_migration(cfg: _T) -> _T:
    """Check that ``cfg`` carries a migrations path, a DSN and a driver.

    Returns the configuration unchanged when it is usable.
    """
    if _blank(cfg.migrations_path):
        raise ValidationError("migrations path is required")
    if _blank(cfg.dsn):
        raise ValidationError("database dsn is required")
    if _blank(cfg.driver):
        raise ValidationError("database driver is required")
    return cfg


def validate_non_negative_int(value: int, field_name: str) -> int:
    """Return ``value`` if it is zero or more."""
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return value


def validate_positive_int(value: int, field_name: str) -> int:
    """Return ``value`` if it is greater than zero."""
    if value <= 0:
        raise ValidationError(f"{field_name} must be positive")
    return value


def validate_column_name(column: str) -> bool:
    """Tell whether ``column`` is a plain or dotted SQL identifier."""
    return _COLUMN_NAME.fullmatch(column) is not None


def validate_order_direction(direction: str, default_direction: str) -> str:
    """Normalise an ordering direction, falling back to ``default_direction``."""
    normalised = direction.strip().upper()
    if normalised not in _VALID_DIRECTIONS:
        return default_direction
    return normalised


def validate_models_slice(models: Sequence[Any] | None, operation: str) -> Sequence[Any]:
    """Require a non-empty sequence of models without ``None`` entries."""
    if not models:
        raise ValidationError(f"models slice cannot be empty for {operation} operation")
    for index, model in enumerate(models):
        if model is None:
            raise ValidationError(
                f"model at index {index} cannot be nil for {operation} operation"
            )
    return models


def validate_driver_format(driver: str) -> str:
    """Split a ``prefix:dialect`` driver name and return the dialect."""
    parts = driver.split(":")
    if len(parts) != 2:
        raise ValidationError(
            f"invalid gorm driver format: {driver} (expected 'gorm:dialect')"
        )
    return parts[1]