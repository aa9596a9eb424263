"""Schema migration runner.

The actual migration engine is supplied by an engine factory, an object with:

* ``open(driver_name, dsn)`` returning an open database connection;
* ``create(migrations_path, driver_name, driver)`` returning an engine with
  ``up()``, ``down()``, ``steps(n)`` and ``close()`` methods. The engine raises
  :class:`~scgdb.migration_utils.NoChangeError` when there is nothing to do.
"""

from __future__ import annotations

from typing import Any, Callable, Protocol

from scgdb.migration_utils import (
    MigrationDriver,
    NoChangeError,
    create_database_driver,
    map_driver_name,
    safe_close,
)
from scgdb.validation import ValidationError, validate_config_for_migration


class MigrationEngine(Protocol):
    def up(self) -> None: ...
    def down(self) -> None: ...
    def steps(self, n: int) -> None: ...
    def close(self) -> None: ...


class EngineFactory(Protocol):
    def open(self, driver_name: str, dsn: str) -> Any: ...
    def create(
        self, migrations_path: str, driver_name: str, driver: MigrationDriver
    ) -> MigrationEngine: ...


class MigratorError(Exception):
    """Raised when a migrator cannot be created or used."""


def _ignore_no_change(step: Callable[[], Any]) -> None:
    try:
        step()
    except NoChangeError:
        pass


class Migrator:
    """Applies and rolls back schema migrations through a migration engine."""

    def __init__(self, engine: MigrationEngine | None = None) -> None:
        self._engine = engine

    def _require_engine(self) -> MigrationEngine:
        if self._engine is None:
            raise MigratorError("migrator has no migration engine")
        return self._engine

    def up(self) -> None:
        """Apply all pending migrations."""
        _ignore_no_change(self._require_engine().up)

    def down(self, steps: int) -> None:
        """Roll back ``steps`` migrations; nothing happens for zero or fewer."""
        if steps <= 0:
            return
        engine = self._require_engine()
        _ignore_no_change(lambda: engine.steps(-steps))

    def fresh(self) -> None:
        """Roll back every migration, then apply them all again."""
        engine = self._require_engine()
        _ignore_no_change(engine.down)
        _ignore_no_change(engine.up)

    def close(self) -> None:
        """Close the migration source and database."""
        self._require_engine().close()

    def __enter__(self) -> Migrator:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def new_migrator(cfg: Any, engine_factory: EngineFactory) -> Migrator:
    """Validate ``cfg``, open its database and create a migrator for it."""
    try:
        validate_config_for_migration(cfg)
    except ValidationError as exc:
        raise MigratorError(f"config validation failed: {exc}") from exc

    driver_name = map_driver_name(cfg.driver)

    try:
        connection = engine_factory.open(driver_name, cfg.dsn)
    except Exception as exc:
        raise MigratorError(f"failed to open database for migration: {exc}") from exc

    try:
        driver = create_database_driver(driver_name, connection)
    except Exception as exc:
        safe_close(connection)
        raise MigratorError(f"failed to create migration driver: {exc}") from exc

    try:
        engine = engine_factory.create(cfg.migrations_path, driver_name, driver)
    except Exception as exc:
        raise MigratorError(f"failed to create migrate instance: {exc}") from exc

    return Migrator(engine)