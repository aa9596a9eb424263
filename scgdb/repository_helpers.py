"""Helpers used by repositories to build queries and check their inputs.

A query is any object with ``preload(name)``, ``limit(n)``, ``offset(n)`` and
``order(clause)`` methods, each returning the resulting query.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from scgdb.validation import (
    ValidationError,
    validate_column_name,
    validate_order_direction,
)


class RecordNotFoundError(LookupError):
    """Raised when a record that must exist was not found."""

    def __init__(self, message: str = "record not found") -> None:
        super().__init__(message)


def handle_relationship_preload(query: Any, model: Any, relations: Iterable[str]) -> Any:
    """Preload each named relation, whether or not ``model`` declares it."""
    for relation in relations:
        query = query.preload(relation)
    return query


def validate_and_apply_limit(query: Any, limit: int) -> Any:
    """Apply ``limit`` unless it is negative."""
    if limit < 0:
        return query
    return query.limit(limit)


def validate_and_apply_offset(query: Any, offset: int) -> Any:
    """Apply ``offset`` unless it is negative."""
    if offset < 0:
        return query
    return query.offset(offset)


def handle_find_or_fail(model: Any, error: BaseException | None) -> Any:
    """Raise ``error`` if given, or :class:`RecordNotFoundError` if there is no model."""
    if error is not None:
        raise error
    if model is None:
        raise RecordNotFoundError()
    return model


def validate_model_for_operation(model: Any, operation: str) -> Any:
    """Require ``model`` to be present for ``operation``."""
    if model is None:
        raise ValidationError(f"model cannot be nil for {operation} operation")
    return model


def validate_models_for_operation(
    models: Sequence[Any] | None, operation: str
) -> Sequence[Any]:
    """Require every model to be present; an empty sequence is accepted."""
    models = models or []
    for index, model in enumerate(models):
        if model is None:
            raise ValidationError(
                f"model at index {index} cannot be nil for {operation} operation"
            )
    return models


def optimize_create_operation(models: Sequence[Any]) -> tuple[bool, Any]:
    """Tell whether a create can use the single-model path, and with which model."""
    if len(models) != 1:
        return False, None
    if models[0] is None:
        raise ValidationError("model cannot be nil")
    return True, models[0]


def apply_order_by(query: Any, column: str, direction: str) -> Any:
    """Order by ``column`` if it is a safe identifier; the direction defaults to ASC."""
    if not validate_column_name(column):
        return query
    return query.order(f"{column} {validate_order_direction(direction, 'ASC')}")


@dataclass
class BatchOperationResult:
    """Progress and errors collected while processing a batch."""

    processed_count: int = 0
    errors: list[BaseException] = field(default_factory=list)
    success: bool = False

    def add_error(self, error: BaseException) -> None:
        self.errors.append(error)
        self.success = False

    def increment_processed(self) -> None:
        self.processed_count += 1

    def has_errors(self) -> bool:
        return bool(self.errors)

    def first_error(self) -> BaseException | None:
        return self.errors[0] if self.errors else None