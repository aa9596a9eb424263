# scgdb

Small, dependency-free building blocks for database-backed applications.
Nothing here talks to a database by itself: the helpers work on objects you
pass in (configurations, pools, queries, connections, migration engines), so
they fit whatever database layer you already use.

- **`scgdb.validation`**: checks for migration configuration, integers,
  column names, sort directions, model lists and `"prefix:dialect"` driver
  strings. Failures raise `ValidationError` (a `ValueError`).
- **`scgdb.migration_utils`**: driver-name mapping, `MigrationDriverFactory`,
  `MigrationDriver`, `MigrationResult`, `MigrationConfig`, `NoChangeError`
  and `UnsupportedDriverError`.
- **`scgdb.migrator`**: `Migrator` with `up`, `down`, `fresh` and `close`,
  created through `new_migrator`.
- **`scgdb.pool`**: connection pool settings built from a configuration or
  from option functions, and a `ConnectionBuilder` driven by a
  `DialectStrategy`.
- **`scgdb.reflection`**: fresh model instances, checked conversion of
  result lists to models, `safe_type_assertion` and `QueryExecutor`.
- **`scgdb.repository_helpers`**: limit, offset and ordering guards,
  relationship preloading, find-or-fail handling, model checks and
  `BatchOperationResult`.
- **`scgdb.seeder`**: `Runner`, which runs seeders in order against a
  connection.

## Installation

```
pip install scgdb
```

To run the test suite as well:

```
pip install "scgdb[test]"
pytest
```

## Configuration objects

The package has no configuration class of its own. Any object with the
attributes the helper reads will do, for example a dataclass or a
`types.SimpleNamespace`:

- `driver`, `dsn`, `migrations_path` (strings) for migrations;
- `max_open_conns`, `max_idle_conns` (integers) and `conn_max_lifetime`
  (a `datetime.timedelta`) for pool settings.

## Validation

```python
from scgdb.validation import (
    ValidationError,
    validate_column_name,
    validate_driver_format,
    validate_order_direction,
    validate_positive_int,
)

validate_column_name("users.name")          # True
validate_column_name("name'; DROP TABLE")   # False

validate_order_direction("  desc ", "ASC")  # "DESC"
validate_order_direction("sideways", "ASC") # "ASC"

validate_driver_format("gorm:sqlite")       # "sqlite"
validate_driver_format("gorm_sqlite")       # raises ValidationError

try:
    validate_positive_int(0, "batch_size")
except ValidationError as exc:
    print(exc)                              # batch_size must be positive
```

`validate_config_for_migration(cfg)` requires a non-blank migrations path,
DSN and driver, in that order, and returns `cfg` when all are present.

## Driver names and migration results

```python
from scgdb.migration_utils import (
    MigrationConfig,
    MigrationDriverFactory,
    execute_migration_with_cleanup,
    map_driver_name,
)

map_driver_name("gorm:postgres")            # "postgres"
map_driver_name("gorm:sqlite")              # "gorm:sqlite" (passed through)

factory = MigrationDriverFactory()
factory.supported_drivers()                 # ["mysql", "postgres"]
factory.is_driver_supported("sqlite")       # False
factory.create_driver("sqlite", conn)       # raises UnsupportedDriverError

MigrationConfig(driver_name="mysql").validate()  # raises: DSN is required
```

`handle_migration_error` turns a `NoChangeError` into `None` and returns any
other error unchanged. `execute_migration_with_cleanup(connection, operation)`
runs `operation`; on success (or "no change") it returns a successful
`MigrationResult`, otherwise it closes the connection and returns a failed
result whose message starts with `"Migration failed: "`.

## Running migrations

`new_migrator(cfg, engine_factory)` validates the configuration, maps the
driver name, opens the database and builds a `Migrator`. The migration
engine itself comes from `engine_factory`, which must provide:

- `open(driver_name, dsn)`: return an open connection;
- `create(migrations_path, driver_name, driver)`: return an engine with
  `up()`, `down()`, `steps(n)` and `close()`, raising `NoChangeError` when
  there is nothing to do.

Only the `mysql` and `postgres` drivers are accepted. Every failure while
creating the migrator is raised as `MigratorError`, with a message such as
`"config validation failed: migrations path is required"`.

```python
from scgdb.migrator import new_migrator

with new_migrator(cfg, engine_factory) as migrator:
    migrator.up()       # apply all pending migrations
    migrator.down(2)    # roll back two steps; zero or negative does nothing
    migrator.fresh()    # roll everything back, then apply again
```

`NoChangeError` from the engine is never treated as a failure. Calling a
method on a `Migrator` without an engine raises `MigratorError`.

## Connection pools

A pool is any object whose `max_open_conns`, `max_idle_conns` and
`conn_max_lifetime` attributes can be assigned.

```python
from datetime import timedelta

from scgdb.pool import (
    apply_connection_pool_options,
    configure_connection_pool,
    with_conn_max_lifetime,
    with_max_idle_conns,
    with_max_open_conns,
)

apply_connection_pool_options(
    pool,
    with_max_open_conns(25),
    with_max_idle_conns(10),
    with_conn_max_lifetime(timedelta(seconds=30)),
)

configure_connection_pool(pool, cfg)
```

Only positive values are set; without an explicit lifetime the default of
ten seconds is used. `config_from_options(cfg)` returns one option per
positive setting in `cfg`.

`ConnectionBuilder(cfg, *options)` starts from the pool options of `cfg`;
`with_dialect_strategy(strategy)` and `with_pool_options(*options)` adjust
it. `build()` checks the driver with the strategy and returns its dialector,
raising `ValueError` if no strategy is set or either step fails.
`apply_pool_configuration(pool)` applies the collected pool options.

## Models and queries

A model, for `scgdb.reflection`, is any object with `table_name` and
`primary_key`.

- `create_entity_from_model(model)` returns a new default instance of the
  model's class.
- `convert_models_to_list(models, model_type)` rejects empty lists, `None`
  entries and instances of other types.
- `execute_query_and_convert_to_models(model, executor)` runs a query
  function (or a `QueryExecutor`) into a fresh list and checks every row.
- `is_nil_or_empty(value)` is true for `None` and empty strings, bytes,
  lists and tuples; mappings and numbers are never empty.

A query, for `scgdb.repository_helpers`, is any object with `preload`,
`limit`, `offset` and `order` methods that return the new query.
`apply_order_by(query, column, direction)` ignores unsafe column names and
defaults the direction to `ASC`; negative limits and offsets are ignored.
`handle_find_or_fail(model, error)` raises `error`, or `RecordNotFoundError`
if there is no model.

```python
from scgdb.repository_helpers import BatchOperationResult

result = BatchOperationResult()
result.increment_processed()
result.add_error(RuntimeError("row 2 rejected"))
result.has_errors()      # True
result.first_error()     # RuntimeError('row 2 rejected')
```

## Seeding

A seeder is any object with a `run(connection)` method. The runner calls
them in order and stops at the first failure, raising `SeederError` with the
original exception as its cause.

```python
from scgdb.seeder import Runner

class UserSeeder:
    def run(self, connection):
        connection.execute(
            "INSERT INTO users (name, email) VALUES (?, ?)",
            ("Alice", "alice@example.com"),
        )

Runner(connection).run(UserSeeder())
```

## What the package does not do

- It has no database adapters, connections or ORM: it does not open
  databases or run queries itself.
- It has no migration engine: reading migration files and applying them is
  left to the engine factory given to `new_migrator`.
- It has no command-line tool.