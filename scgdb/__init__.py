"""Helpers for validation, migration running, connection pool settings, seeding and repositories."""

__version__ = "0.1.0"

__all__ = [
    "migration_utils",
    "migrator",
    "pool",
    "reflection",
    "repository_helpers",
    "seeder",
    "validation",
]