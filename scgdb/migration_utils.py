"""Helpers for creating migration drivers and running migration steps."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from scgdb.validation import ValidationError

MYSQL = "mysql"
POSTGRES = "postgres"
SQLITE = "sqlite"

_SUPPORTED_DRIVERS = (MYSQL, POSTGRES)

_DRIVER_ALIASES = {
    "gorm:mysql": MYSQL,
    MYSQL: MYSQL,
    "gorm:postgres": POSTGRES,
    POSTGRES: POSTGRES,
}


class NoChangeError(Exception):
    """Raised by a migration step that had nothing to apply."""

    def __init__(self, message: str = "no change") -> None:
        super().__init__(message)


class UnsupportedDriverError(ValueError):
    """Raised when migrations are requested for an unsupported driver."""

    def __init__(self, driver_name: str) -> None:
        super().__init__(f"unsupported migration driver: {driver_name}")
        self.driver_name = driver_name


@dataclass
class MigrationDriver:
    """A migration driver bound to an open database connection."""

    name: str
    connection: Any

    def close(self) -> None:
        """Close the underlying connection."""
        safe_close(self.connection)


def map_driver_name(driver: str) -> str:
    """Map a composite driver name such as ``gorm:mysql`` to its SQL driver."""
    return _DRIVER_ALIASES.get(driver, driver)


def create_database_driver(sql_driver_name: str, connection: Any) -> MigrationDriver:
    """Create a migration driver for ``sql_driver_name`` over ``connection``."""
    if sql_driver_name not in _SUPPORTED_DRIVERS:
        raise UnsupportedDriverError(sql_driver_name)
    if connection is None:
        raise ValueError("a database connection is required")
    return MigrationDriver(name=sql_driver_name, connection=connection)


def handle_migration_error(error: BaseException | None) -> BaseException | None:
    """Drop a :class:`NoChangeError`, which is not a failure; keep anything else."""
    if isinstance(error, NoChangeError):
        return None
    return error


def safe_close(connection: Any) -> None:
    """Close ``connection`` unless it is ``None``."""
    if connection is not None:
        connection.close()


@dataclass
class MigrationResult:
    """Outcome of a migration operation."""

    success: bool
    error: BaseException | None
    message: str


def execute_migration_with_cleanup(
    connection: Any, operation: Callable[[], Any]
) -> MigrationResult:
    """Run ``operation``; on failure close ``connection`` and report what happened."""
    try:
        operation()
    except Exception as exc:
        error = handle_migration_error(exc)
    else:
        error = None

    if error is None:
        return MigrationResult(True, None, "Migration completed successfully")

    try:
        safe_close(connection)
    except Exception as close_error:
        return MigrationResult(
            False, error, f"Migration failed: {error} (cleanup error: {close_error})"
        )
    return MigrationResult(False, error, f"Migration failed: {error}")


class MigrationDriverFactory:
    """Creates migration drivers for the supported databases."""

    def create_driver(self, driver_name: str, connection: Any) -> MigrationDriver:
        return create_database_driver(driver_name, connection)

    def supported_drivers(self) -> list[str]:
        return list(_SUPPORTED_DRIVERS)

    def is_driver_supported(self, driver_name: str) -> bool:
        return driver_name in self.supported_drivers()


@dataclass
class MigrationConfig:
    """Settings needed to run migrations."""

    driver_name: str = ""
    dsn: str = ""
    migrations_path: str = ""
    steps: int = 0

    def validate(self) -> MigrationConfig:
        """Check the required fields and return the configuration."""
        if not self.driver_name:
            raise ValidationError("driver name is required")
        if not self.dsn:
            raise ValidationError("DSN is required")
        if not self.migrations_path:
            raise ValidationError("migrations path is required")
        return self