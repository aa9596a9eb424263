"""Generic helpers for creating, checking and converting model instances.

A model is any object that exposes ``table_name`` and ``primary_key``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable, Iterable, TypeVar

_MODEL_ATTRIBUTES = ("table_name", "primary_key")

_T = TypeVar("_T")


def _is_model(obj: Any) -> bool:
    return obj is not None and all(hasattr(obj, name) for name in _MODEL_ATTRIBUTES)


def get_model_type(model: Any) -> type:
    """Return the class of ``model``."""
    return type(model)


def create_entity_from_model(model: Any) -> Any:
    """Return a fresh, default-constructed instance of ``model``'s class."""
    model_type = get_model_type(model)
    try:
        instance = model_type()
    except TypeError as exc:
        raise TypeError(f"failed to create a new {model_type.__name__}: {exc}") from exc
    if not _is_model(instance):
        raise TypeError("failed to assert created instance to model")
    return instance


def convert_models_to_list(models: Iterable[Any], model_type: type) -> list[Any]:
    """Check that every model is a ``model_type`` instance and return them as a list."""
    result = list(models)
    if not result:
        raise ValueError("models slice cannot be empty")
    for index, model in enumerate(result):
        if model is None:
            raise ValueError(f"model at index {index} cannot be nil")
        if not isinstance(model, model_type):
            raise TypeError(
                f"model at index {index} is not assignable to expected type "
                f"{model_type.__name__}"
            )
    return result


def convert_to_models(items: Iterable[Any]) -> list[Any]:
    """Return ``items`` as a list, requiring each one to be a model."""
    models = list(items)
    for index, item in enumerate(models):
        if not _is_model(item):
            raise TypeError(
                f"failed to assert item at index {index} to model, "
                f"got type {type(item).__name__}"
            )
    return models


def is_nil_or_empty(value: Any) -> bool:
    """Tell whether ``value`` is ``None`` or an empty string or sequence.

    Mappings, numbers and booleans are never considered empty.
    """
    if value is None:
        return True
    if isinstance(value, Mapping):
        return False
    if isinstance(value, (str, bytes, list, tuple)):
        return len(value) == 0
    return False


def safe_type_assertion(value: Any, expected_type: type[_T], type_name: str) -> _T:
    """Return ``value`` if it is an instance of ``expected_type``."""
    if value is None:
        raise TypeError(f"cannot assert nil value to {type_name}")
    if not isinstance(value, expected_type):
        raise TypeError(
            f"cannot assert value of type {type(value).__name__} to {type_name}"
        )
    return value


class QueryExecutor:
    """Runs a query function that fills a destination list."""

    def __init__(self, query_func: Callable[[list[Any]], Any]) -> None:
        self._query_func = query_func

    def execute(self, dest: list[Any]) -> Any:
        """Run the query into ``dest``."""
        return self._query_func(dest)


def execute_query_and_convert_to_models(
    model: Any, query_executor: QueryExecutor | Callable[[list[Any]], Any]
) -> list[Any]:
    """Run a query into a fresh list and return its rows as instances of ``model``'s class."""
    run = (
        query_executor.execute
        if isinstance(query_executor, QueryExecutor)
        else query_executor
    )
    model_type = get_model_type(model)
    dest: list[Any] = []
    run(dest)
    models = convert_to_models(dest)
    for index, item in enumerate(models):
        if not isinstance(item, model_type):
            raise TypeError(
                f"failed to assert item at index {index} to {model_type.__name__}, "
                f"got type {type(item).__name__}"
            )
    return models