"""Shared pytest fixtures for all tests."""

import sqlite3
import pytest
from pathlib import Path

from config import Config, get_migrations_dir
from models.account import Account
from models.settings import Settings
from models.uri import Uri
from provider.contract import AccountCapabilities, SyncStatus
from services.base import Services
from tests.helpers import run_migrations


@pytest.fixture
def test_db():
    """Create an in-memory SQLite database for testing.

    Yields:
        sqlite3.Connection: Connection to in-memory database.
    """
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    yield conn
    conn.close()


@pytest.fixture
def test_config(tmp_path):
    """Create a test configuration pointing to a temporary database.

    Args:
        tmp_path: pytest tmp_path fixture for temporary directory.

    Returns:
        Config: Test configuration object.
    """
    return Config(
        db_data_dir=tmp_path / "postbox" / "db",
        db_filename="test.db",
        log_level="DEBUG",
        log_dir=tmp_path / "postbox" / "logs",
    )


@pytest.fixture
def db_manager_with_schema(test_db):
    """Create a DatabaseManager-like object backed by the in-memory database.

    Args:
        test_db: In-memory database connection fixture.

    Returns:
        TestDatabaseManager: Database manager with schema ready.
    """
    migrations_dir = get_migrations_dir()
    run_migrations(test_db, migrations_dir)

    class TestDatabaseManager:
        """Test database manager that uses in-memory connection."""

        def __init__(self, conn):
            self.conn = conn

        def connect(self):
            return _TestConnectionContext(self.conn)

        def get_db_path(self):
            return Path(":memory:")

        def get_migrations_dir(self):
            return get_migrations_dir()

    class _TestConnectionContext:
        """Context manager for test database connections."""

        def __init__(self, conn):
            self.conn = conn

        def __enter__(self):
            return self.conn

        def __exit__(self, exc_type, exc_val, exc_tb):
            # Don't close the connection - let the fixture handle it
            pass

    return TestDatabaseManager(test_db)


@pytest.fixture
def services(test_config, db_manager_with_schema):
    """Create a Services container with test database.

    Args:
        test_config: Test configuration fixture.
        db_manager_with_schema: Database manager with schema set up.

    Returns:
        Services: Services container for testing.
    """
    return Services(test_config, db_manager=db_manager_with_schema)


@pytest.fixture
def full_account():
    """An account with every field populated, including settings."""
    return Account(
        name="bob@example.com",
        type="com.example.imap",
        provider_version=3,
        uri=Uri.parse("content://mail/account/2"),
        capabilities=AccountCapabilities.ARCHIVE | AccountCapabilities.SERVER_SEARCH,
        folder_list_uri=Uri.parse("content://mail/account/2/folders"),
        search_uri=Uri.parse("content://mail/account/2/search"),
        account_from_addresses='["bob@example.com","robert@example.com"]',
        save_draft_uri=Uri.parse("content://mail/account/2/drafts"),
        send_message_uri=Uri.parse("content://mail/account/2/send"),
        expunge_message_uri=Uri.parse("content://mail/account/2/expunge"),
        undo_uri=Uri.parse("content://mail/account/2/undo"),
        settings_intent_uri=Uri.parse("content://mail/settings/2"),
        help_intent_uri=Uri.parse("https://example.com/help"),
        send_feedback_intent_uri=Uri.parse("https://example.com/feedback"),
        sync_status=SyncStatus.BACKGROUND_SYNC,
        compose_intent_uri=Uri.parse("mailto:bob@example.com"),
        mime_type="application/mail-account",
        recent_folder_list_uri=Uri.parse("content://mail/account/2/recent"),
        settings=Settings(
            signature="Bob\nSent from my phone",
            confirm_delete=True,
            default_inbox=Uri.parse("content://mail/account/2/folder/inbox"),
            max_attachment_size=25 * 1024 * 1024,
        ),
    )
