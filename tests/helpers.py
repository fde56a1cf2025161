"""Helper utilities for tests."""

from pathlib import Path
import sqlite3

from provider.contract import ACCOUNT_PROJECTION, AccountColumns


def run_migrations(conn: sqlite3.Connection, migrations_dir: Path) -> None:
    """Run all SQL migrations in order.

    Args:
        conn: SQLite connection to run migrations against.
        migrations_dir: Path to directory containing .sql migration files.
    """
    migration_files = sorted(migrations_dir.glob("*.sql"))

    for migration_file in migration_files:
        with open(migration_file, "r") as f:
            sql = f.read()

        conn.executescript(sql)

    conn.commit()


def make_account_row(**columns) -> tuple:
    """Build a row in ACCOUNT_PROJECTION order.

    Unspecified columns are NULL, except the integer columns, which default
    to 0. Keyword names are column names from the projection.
    """
    values = {column: None for column in ACCOUNT_PROJECTION}
    values[AccountColumns.ID] = 1
    values[AccountColumns.PROVIDER_VERSION] = 0
    values[AccountColumns.CAPABILITIES] = 0
    values[AccountColumns.SYNC_STATUS] = 0
    for column, value in columns.items():
        if column not in values:
            raise KeyError(f"Unknown account column: {column}")
        values[column] = value
    return tuple(values[column] for column in ACCOUNT_PROJECTION)


def alice_row(**overrides) -> tuple:
    """Row for alice@example.com with capabilities 5 and no optional URIs."""
    columns = {
        AccountColumns.NAME: "alice@example.com",
        AccountColumns.PROVIDER_VERSION: 1,
        AccountColumns.URI: "content://mail/account/1",
        AccountColumns.CAPABILITIES: 5,
        AccountColumns.FOLDER_LIST_URI: "",
        AccountColumns.SEARCH_URI: "",
        AccountColumns.SYNC_STATUS: 0,
    }
    columns.update(overrides)
    return make_account_row(**columns)
