"""Database manager for SQLite connections, paths and schema migrations."""

import sqlite3
from contextlib import contextmanager
from typing import List, Set

from config import Config, get_migrations_dir
from logger import get_logger

logger = get_logger()


class DatabaseManager:
    """Manages connections to the account store.

    Args:
        config: Application configuration object.
    """

    def __init__(self, config: Config):
        self.config = config

    @contextmanager
    def connect(self):
        """Get a database connection with automatic cleanup.

        Rows come back as sqlite3.Row so they can be read by index or name.

        Yields:
            sqlite3.Connection: Database connection.
        """
        db_path = self.config.db_path
        db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
        finally:
            conn.close()

    def get_db_path(self):
        """Get the current database path.

        Returns:
            Path: Path to the database file.
        """
        return self.config.db_path

    def get_migrations_dir(self):
        return get_migrations_dir()

    def available_migrations(self) -> List[str]:
        """List migration file names shipped with the code, in apply order."""
        migrations_dir = self.get_migrations_dir()
        if not migrations_dir.exists():
            return []
        return sorted(path.name for path in migrations_dir.glob("*.sql"))

    def applied_migrations(self, conn) -> Set[str]:
        _init_schema_migrations_table(conn)
        cursor = conn.execute("SELECT migration_file FROM schema_migrations")
        return {row[0] for row in cursor.fetchall()}

    def pending_migrations(self, conn) -> List[str]:
        applied = self.applied_migrations(conn)
        return [m for m in self.available_migrations() if m not in applied]

    def apply_pending_migrations(self) -> List[str]:
        """Apply every migration not yet recorded in schema_migrations.

        Returns:
            Names of the migrations applied by this call.

        Raises:
            sqlite3.Error: If a migration fails. That migration is rolled back.
        """
        with self.connect() as conn:
            pending = self.pending_migrations(conn)
            for migration in pending:
                self._apply_migration(conn, migration)
            return pending

    def _apply_migration(self, conn, migration_file: str) -> None:
        with open(self.get_migrations_dir() / migration_file, "r") as f:
            sql = f.read()

        try:
            conn.executescript(sql)
            conn.execute(
                "INSERT INTO schema_migrations (migration_file) VALUES (?)",
                (migration_file,),
            )
            conn.commit()
            logger.info(f"Applied migration: {migration_file}")
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Error applying migration {migration_file}: {e}")
            raise


def _init_schema_migrations_table(conn) -> None:
    conn.execute("""
        CREATE TABLE IF NOT EXISTS schema_migrations (
            migration_file TEXT PRIMARY KEY,
            applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        )
    """)
    conn.commit()
