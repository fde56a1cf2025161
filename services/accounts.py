"""Account service for database operations."""

from typing import List, Optional
from models.account import Account, get_all_accounts
from provider.contract import ACCOUNT_PROJECTION, AccountColumns
from logger import get_logger

logger = get_logger()

_SELECT_ACCOUNTS = f"SELECT {', '.join(ACCOUNT_PROJECTION)} FROM accounts"
_INSERT_COLUMNS = ACCOUNT_PROJECTION[1:]


class AccountService:
    """Service for storing and querying mail accounts."""

    def __init__(self, db_manager):
        """Initialize the account service.

        Args:
            db_manager: Database manager instance for database operations.
        """
        self.db_manager = db_manager

    def find_all(self) -> List[Account]:
        """Get all accounts from the database.

        Returns:
            List of Account objects, ordered by id.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"{_SELECT_ACCOUNTS} ORDER BY {AccountColumns.ID}"
            )
            return get_all_accounts(cursor.fetchall())

    def find_by_name(self, name: str) -> Optional[Account]:
        """Get a single account by name.

        Args:
            name: The account name to find.

        Returns:
            Account object if found, None otherwise.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"{_SELECT_ACCOUNTS} WHERE {AccountColumns.NAME} = ?",
                (name,),
            )
            row = cursor.fetchone()

            if row:
                return Account.from_row(row)
            return None

    def create(self, account: Account) -> Account:
        """Store a new account.

        Args:
            account: Account to store. Its type is not persisted.

        Returns:
            The account as read back from storage.

        Raises:
            sqlite3.IntegrityError: If an account with the same name exists.
        """
        placeholders = ", ".join("?" for _ in _INSERT_COLUMNS)
        with self.db_manager.connect() as conn:
            conn.execute(
                f"INSERT INTO accounts ({', '.join(_INSERT_COLUMNS)}) "
                f"VALUES ({placeholders})",
                _to_row_values(account),
            )
            conn.commit()

        logger.info(f"Stored account {account.name}")
        return self.find_by_name(account.name)

    def delete(self, name: str) -> bool:
        """Delete an account by name.

        Args:
            name: The account name to delete.

        Returns:
            True if account was deleted, False if not found.
        """
        with self.db_manager.connect() as conn:
            cursor = conn.execute(
                f"DELETE FROM accounts WHERE {AccountColumns.NAME} = ?", (name,)
            )
            conn.commit()
            return cursor.rowcount > 0


def _to_row_values(account: Account) -> tuple:
    """Flatten an account into column values in ACCOUNT_PROJECTION order, minus _id."""

    def uri(value):
        return str(value) or None

    values = [
        account.name,
        account.provider_version,
        uri(account.uri),
        account.capabilities,
        uri(account.folder_list_uri),
        uri(account.search_uri),
        account.account_from_addresses,
        uri(account.save_draft_uri),
        uri(account.send_message_uri),
        uri(account.expunge_message_uri),
        uri(account.undo_uri),
        uri(account.settings_intent_uri),
        account.sync_status,
        uri(account.help_intent_uri),
        uri(account.send_feedback_intent_uri),
        uri(account.compose_intent_uri),
        account.mime_type,
        uri(account.recent_folder_list_uri),
    ]

    settings = account.settings
    if settings is None:
        values.extend([None] * (len(_INSERT_COLUMNS) - len(values)))
    else:
        values.extend(
            [
                settings.signature,
                settings.auto_advance,
                settings.message_text_size,
                settings.snap_headers,
                settings.reply_behavior,
                int(settings.hide_checkboxes),
                int(settings.confirm_delete),
                int(settings.confirm_archive),
                int(settings.confirm_send),
                uri(settings.default_inbox),
                int(settings.force_reply_from_default),
                settings.max_attachment_size,
            ]
        )
    return tuple(values)
