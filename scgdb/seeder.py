"""Running database seeders in order."""

from __future__ import annotations

from typing import Any, Protocol


class Seeder(Protocol):
    def run(self, connection: Any) -> None: ...


class SeederError(Exception):
    """Raised when a seeder fails; the original error is its cause."""

    def __init__(self, seeder: Any, error: BaseException) -> None:
        super().__init__(f"failed to run seeder {type(seeder).__name__}: {error}")
        self.seeder = seeder
        self.error = error


class Runner:
    """Runs seeders against a database connection."""

    def __init__(self, connection: Any) -> None:
        self.connection = connection

    def run(self, *seeders: Seeder) -> None:
        """Run ``seeders`` in order, stopping at the first one that fails."""
        for seeder in seeders:
            try:
                seeder.run(self.connection)
            except Exception as exc:
                raise SeederError(seeder, exc) from exc