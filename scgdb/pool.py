"""Connection pool settings and a builder for database connections.

A configuration object is any object with the attributes ``driver``, ``dsn``,
``max_open_conns``, ``max_idle_conns`` and ``conn_max_lifetime`` (a
:class:`datetime.timedelta`). A pool is any object whose ``max_open_conns``,
``max_idle_conns`` and ``conn_max_lifetime`` attributes can be assigned.
"""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable

DEFAULT_CONN_MAX_LIFETIME = timedelta(seconds=10)

_ZERO = timedelta(0)


@dataclass
class ConnectionPoolOptions:
    """Limits applied to a connection pool."""

    max_open_conns: int = 0
    max_idle_conns: int = 0
    conn_max_lifetime: timedelta = field(default_factory=timedelta)


PoolOption = Callable[[ConnectionPoolOptions], None]


def _positive(lifetime: timedelta | None) -> bool:
    return lifetime is not None and lifetime > _ZERO


def configure_connection_pool(pool: Any, cfg: Any) -> None:
    """Apply the pool settings from ``cfg``; the lifetime defaults to ten seconds."""
    lifetime = cfg.conn_max_lifetime
    pool.conn_max_lifetime = lifetime if _positive(lifetime) else DEFAULT_CONN_MAX_LIFETIME
    if cfg.max_idle_conns > 0:
        pool.max_idle_conns = cfg.max_idle_conns
    if cfg.max_open_conns > 0:
        pool.max_open_conns = cfg.max_open_conns


def apply_connection_pool_options(pool: Any, *options: PoolOption) -> None:
    """Apply ``options`` on top of the defaults; only positive values are set."""
    opts = ConnectionPoolOptions(conn_max_lifetime=DEFAULT_CONN_MAX_LIFETIME)
    for option in options:
        option(opts)
    if _positive(opts.conn_max_lifetime):
        pool.conn_max_lifetime = opts.conn_max_lifetime
    if opts.max_idle_conns > 0:
        pool.max_idle_conns = opts.max_idle_conns
    if opts.max_open_conns > 0:
        pool.max_open_conns = opts.max_open_conns


def with_max_open_conns(max_conns: int) -> PoolOption:
    """Option setting the maximum number of open connections."""

    def apply(opts: ConnectionPoolOptions) -> None:
        opts.max_open_conns = max_conns

    return apply


def with_max_idle_conns(max_conns: int) -> PoolOption:
    """Option setting the maximum number of idle connections."""

    def apply(opts: ConnectionPoolOptions) -> None:
        opts.max_idle_conns = max_conns

    return apply


def with_conn_max_lifetime(lifetime: timedelta) -> PoolOption:
    """Option setting the maximum lifetime of a connection."""

    def apply(opts: ConnectionPoolOptions) -> None:
        opts.conn_max_lifetime = lifetime

    return apply


def config_from_options(cfg: Any) -> list[PoolOption]:
    """Build pool options for each positive setting in ``cfg``."""
    options: list[PoolOption] = []
    if cfg.max_open_conns > 0:
        options.append(with_max_open_conns(cfg.max_open_conns))
    if cfg.max_idle_conns > 0:
        options.append(with_max_idle_conns(cfg.max_idle_conns))
    if _positive(cfg.conn_max_lifetime):
        options.append(with_conn_max_lifetime(cfg.conn_max_lifetime))
    return options


class DialectStrategy(ABC):
    """Knows how to check a driver name and make a dialector for a DSN."""

    @abstractmethod
    def create_dialector(self, dsn: str) -> Any:
        """Return a dialector for ``dsn``."""

    @abstractmethod
    def validate_driver(self, driver: str) -> None:
        """Raise if ``driver`` is not handled by this strategy."""

    @abstractmethod
    def driver_name(self) -> str:
        """Return the name of the driver this strategy handles."""


BuilderOption = Callable[["ConnectionBuilder"], None]


class ConnectionBuilder:
    """Builds a dialector from a configuration and a dialect strategy."""

    def __init__(self, cfg: Any, *options: BuilderOption) -> None:
        self.config = copy.copy(cfg)
        self.dialect_strategy: DialectStrategy | None = None
        self.pool_options: list[PoolOption] = config_from_options(cfg)
        for option in options:
            option(self)

    def build(self) -> Any:
        """Validate the driver and return the dialector for the configured DSN."""
        strategy = self.dialect_strategy
        if strategy is None:
            raise ValueError("dialect strategy is required")
        try:
            strategy.validate_driver(self.config.driver)
        except Exception as exc:
            raise ValueError(f"driver validation failed: {exc}") from exc
        try:
            return strategy.create_dialector(self.config.dsn)
        except Exception as exc:
            raise ValueError(f"failed to create dialector: {exc}") from exc

    def apply_pool_configuration(self, pool: Any) -> None:
        """Apply this builder's pool options to ``pool``."""
        apply_connection_pool_options(pool, *self.pool_options)


def with_dialect_strategy(strategy: DialectStrategy) -> BuilderOption:
    """Builder option setting the dialect strategy."""

    def apply(builder: ConnectionBuilder) -> None:
        builder.dialect_strategy = strategy

    return apply


def with_pool_options(*options: PoolOption) -> BuilderOption:
    """Builder option appending pool options."""

    def apply(builder: ConnectionBuilder) -> None:
        builder.pool_options.extend(options)

    return apply