from dataclasses import dataclass, field
from datetime import timedelta

import pytest

from scgdb.pool import (
    ConnectionBuilder,
    ConnectionPoolOptions,
    DialectStrategy,
    apply_connection_pool_options,
    config_from_options,
    configure_connection_pool,
    with_conn_max_lifetime,
    with_dialect_strategy,
    with_max_idle_conns,
    with_max_open_conns,
    with_pool_options,
)

SECOND = timedelta(seconds=1)


@dataclass
class Config:
    driver: str = ""
    dsn: str = ""
    migrations_path: str = ""
    max_open_conns: int = 0
    max_idle_conns: int = 0
    conn_max_lifetime: timedelta = field(default_factory=timedelta)


@dataclass
class FakePool:
    max_open_conns: object = None
    max_idle_conns: object = None
    conn_max_lifetime: object = None


class FakeStrategy(DialectStrategy):
    def __init__(self, dialector="dialector", driver_error=None, dialector_error=None):
        self.dialector = dialector
        self.driver_error = driver_error
        self.dialector_error = dialector_error
        self.calls = []

    def create_dialector(self, dsn):
        self.calls.append(("create_dialector", dsn))
        if self.dialector_error is not None:
            raise self.dialector_error
        return self.dialector

    def validate_driver(self, driver):
        self.calls.append(("validate_driver", driver))
        if self.driver_error is not None:
            raise self.driver_error

    def driver_name(self):
        return "fake"


@pytest.mark.parametrize(
    "cfg, expected",
    [
        (Config(max_open_conns=25, max_idle_conns=10, conn_max_lifetime=30 * SECOND), (25, 10, 30 * SECOND)),
        (Config(max_open_conns=50), (50, None, 10 * SECOND)),
        (Config(max_idle_conns=15), (None, 15, 10 * SECOND)),
        (Config(conn_max_lifetime=60 * SECOND), (None, None, 60 * SECOND)),
        (Config(), (None, None, 10 * SECOND)),
        (Config(max_open_conns=0, max_idle_conns=0, conn_max_lifetime=timedelta(0)), (None, None, 10 * SECOND)),
    ],
)
def test_configure_connection_pool(cfg, expected):
    pool = FakePool()
    configure_connection_pool(pool, cfg)
    assert (pool.max_open_conns, pool.max_idle_conns, pool.conn_max_lifetime) == expected


@pytest.mark.parametrize(
    "options, expected",
    [
        ([], (None, None, 10 * SECOND)),
        ([with_max_open_conns(25)], (25, None, 10 * SECOND)),
        ([with_max_idle_conns(10)], (None, 10, 10 * SECOND)),
        ([with_conn_max_lifetime(30 * SECOND)], (None, None, 30 * SECOND)),
        (
            [with_max_open_conns(50), with_max_idle_conns(20), with_conn_max_lifetime(60 * SECOND)],
            (50, 20, 60 * SECOND),
        ),
        (
            [with_max_open_conns(0), with_max_idle_conns(0), with_conn_max_lifetime(timedelta(0))],
            (None, None, None),
        ),
    ],
)
def test_apply_connection_pool_options(options, expected):
    pool = FakePool()
    apply_connection_pool_options(pool, *options)
    assert (pool.max_open_conns, pool.max_idle_conns, pool.conn_max_lifetime) == expected


def test_with_max_open_conns():
    opts = ConnectionPoolOptions()
    with_max_open_conns(25)(opts)
    assert opts.max_open_conns == 25


def test_with_max_idle_conns():
    opts = ConnectionPoolOptions()
    with_max_idle_conns(10)(opts)
    assert opts.max_idle_conns == 10


def test_with_conn_max_lifetime():
    opts = ConnectionPoolOptions()
    with_conn_max_lifetime(30 * SECOND)(opts)
    assert opts.conn_max_lifetime == 30 * SECOND


@pytest.mark.parametrize(
    "cfg, count",
    [
        (Config(max_open_conns=25, max_idle_conns=10, conn_max_lifetime=30 * SECOND), 3),
        (Config(max_open_conns=50), 1),
        (Config(max_idle_conns=15), 1),
        (Config(conn_max_lifetime=60 * SECOND), 1),
        (Config(), 0),
        (Config(max_open_conns=0, max_idle_conns=0, conn_max_lifetime=timedelta(0)), 0),
    ],
)
def test_config_from_options(cfg, count):
    options = config_from_options(cfg)
    assert len(options) == count
    opts = ConnectionPoolOptions()
    for option in options:
        option(opts)
    assert opts.max_open_conns == cfg.max_open_conns
    assert opts.max_idle_conns == cfg.max_idle_conns
    assert opts.conn_max_lifetime == cfg.conn_max_lifetime


@pytest.mark.parametrize(
    "cfg, options, count",
    [
        (Config(driver="gorm:sqlite", dsn="test.db"), [], 0),
        (Config(driver="gorm:sqlite", dsn="test.db"), [with_dialect_strategy(FakeStrategy())], 0),
        (Config(driver="gorm:sqlite", dsn="test.db"), [with_pool_options(with_max_open_conns(25))], 1),
        (Config(driver="gorm:sqlite", dsn="test.db", max_open_conns=10, max_idle_conns=5), [], 2),
    ],
)
def test_new_connection_builder(cfg, options, count):
    builder = ConnectionBuilder(cfg, *options)
    assert builder.config.driver == cfg.driver
    assert builder.config.dsn == cfg.dsn
    assert len(builder.pool_options) == count


def test_connection_builder_copies_config():
    cfg = Config(driver="gorm:sqlite", dsn="test.db")
    builder = ConnectionBuilder(cfg)
    cfg.driver = "gorm:mysql"
    assert builder.config.driver == "gorm:sqlite"


def test_with_dialect_strategy_sets_strategy():
    strategy = FakeStrategy()
    builder = ConnectionBuilder(Config())
    with_dialect_strategy(strategy)(builder)
    assert builder.dialect_strategy is strategy


def test_with_pool_options_appends():
    builder = ConnectionBuilder(Config())
    with_pool_options(with_max_open_conns(25))(builder)
    assert len(builder.pool_options) == 1


def test_build_success():
    strategy = FakeStrategy()
    builder = ConnectionBuilder(Config(driver="gorm:sqlite", dsn="test.db"), with_dialect_strategy(strategy))
    assert builder.build() == "dialector"
    assert strategy.calls == [("validate_driver", "gorm:sqlite"), ("create_dialector", "test.db")]


def test_build_without_strategy():
    builder = ConnectionBuilder(Config(driver="gorm:sqlite", dsn="test.db"))
    with pytest.raises(ValueError, match="dialect strategy is required"):
        builder.build()


def test_build_driver_validation_fails():
    strategy = FakeStrategy(driver_error=ValueError("bad driver"))
    builder = ConnectionBuilder(Config(driver="invalid:driver", dsn="test.db"), with_dialect_strategy(strategy))
    with pytest.raises(ValueError, match="driver validation failed: bad driver"):
        builder.build()
    assert strategy.calls == [("validate_driver", "invalid:driver")]


def test_build_dialector_creation_fails():
    strategy = FakeStrategy(dialector_error=RuntimeError("cannot open"))
    builder = ConnectionBuilder(Config(driver="gorm:sqlite", dsn="invalid.db"), with_dialect_strategy(strategy))
    with pytest.raises(ValueError, match="failed to create dialector: cannot open"):
        builder.build()
    assert strategy.calls == [("validate_driver", "gorm:sqlite"), ("create_dialector", "invalid.db")]


def test_apply_pool_configuration():
    builder = ConnectionBuilder(
        Config(),
        with_pool_options(
            with_max_open_conns(25),
            with_max_idle_conns(10),
            with_conn_max_lifetime(30 * SECOND),
        ),
    )
    pool = FakePool()
    builder.apply_pool_configuration(pool)
    assert (pool.max_open_conns, pool.max_idle_conns, pool.conn_max_lifetime) == (25, 10, 30 * SECOND)


def test_dialect_strategy_is_abstract():
    with pytest.raises(TypeError):
        DialectStrategy()