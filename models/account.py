import json
import logging
from dataclasses import dataclass, fields
from typing import Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from errors import MalformedInputError
from logger import get_logger
from models.settings import Settings
from models.uri import EMPTY_URI, Uri, get_valid_uri
from parcel import INT32_MAX, INT32_MIN, Parcel
from provider.contract import (
    ACCOUNT_CAPABILITIES_COLUMN,
    ACCOUNT_COMPOSE_INTENT_URI_COLUMN,
    ACCOUNT_EXPUNGE_MESSAGE_URI_COLUMN,
    ACCOUNT_FOLDER_LIST_URI_COLUMN,
    ACCOUNT_FROM_ADDRESSES_COLUMN,
    ACCOUNT_HELP_INTENT_URI_COLUMN,
    ACCOUNT_MIME_TYPE_COLUMN,
    ACCOUNT_NAME_COLUMN,
    ACCOUNT_PROJECTION,
    ACCOUNT_PROVIDER_VERSION_COLUMN,
    ACCOUNT_RECENT_FOLDER_LIST_URI_COLUMN,
    ACCOUNT_SAVE_DRAFT_URI_COLUMN,
    ACCOUNT_SEARCH_URI_COLUMN,
    ACCOUNT_SEND_FEEDBACK_INTENT_URI_COLUMN,
    ACCOUNT_SEND_MESSAGE_URI_COLUMN,
    ACCOUNT_SETTINGS_INTENT_URI_COLUMN,
    ACCOUNT_SYNC_STATUS_COLUMN,
    ACCOUNT_UNDO_URI_COLUMN,
    ACCOUNT_URI_COLUMN,
    SETTINGS_KEY,
    UNKNOWN_ACCOUNT_TYPE,
    AccountColumns,
)

_URI_FIELDS = (
    "uri",
    "folder_list_uri",
    "search_uri",
    "save_draft_uri",
    "send_message_uri",
    "expunge_message_uri",
    "undo_uri",
    "settings_intent_uri",
    "help_intent_uri",
    "send_feedback_intent_uri",
    "compose_intent_uri",
    "recent_folder_list_uri",
)

_INT_FIELDS = ("provider_version", "capabilities", "sync_status")


class AccountDocument(BaseModel):
    """Validated shape of a serialized account."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = Field(default=None, alias=AccountColumns.NAME)
    type: Optional[str] = Field(default=None, alias=AccountColumns.TYPE)
    provider_version: int = Field(alias=AccountColumns.PROVIDER_VERSION)
    uri: Optional[str] = Field(default=None, alias=AccountColumns.URI)
    capabilities: int = Field(alias=AccountColumns.CAPABILITIES)
    folder_list_uri: Optional[str] = Field(
        default=None, alias=AccountColumns.FOLDER_LIST_URI
    )
    search_uri: Optional[str] = Field(default=None, alias=AccountColumns.SEARCH_URI)
    account_from_addresses: Optional[str] = Field(
        default=None, alias=AccountColumns.ACCOUNT_FROM_ADDRESSES
    )
    save_draft_uri: Optional[str] = Field(
        default=None, alias=AccountColumns.SAVE_DRAFT_URI
    )
    send_message_uri: Optional[str] = Field(
        default=None, alias=AccountColumns.SEND_MAIL_URI
    )
    expunge_message_uri: Optional[str] = Field(
        default=None, alias=AccountColumns.EXPUNGE_MESSAGE_URI
    )
    undo_uri: Optional[str] = Field(default=None, alias=AccountColumns.UNDO_URI)
    settings_intent_uri: Optional[str] = Field(
        default=None, alias=AccountColumns.SETTINGS_INTENT_URI
    )
    help_intent_uri: Optional[str] = Field(
        default=None, alias=AccountColumns.HELP_INTENT_URI
    )
    send_feedback_intent_uri: Optional[str] = Field(
        default=None, alias=AccountColumns.SEND_FEEDBACK_INTENT_URI
    )
    sync_status: int = Field(default=0, alias=AccountColumns.SYNC_STATUS)
    compose_intent_uri: Optional[str] = Field(
        default=None, alias=AccountColumns.COMPOSE_URI
    )
    mime_type: Optional[str] = Field(default=None, alias=AccountColumns.MIME_TYPE)
    recent_folder_list_uri: Optional[str] = Field(
        default=None, alias=AccountColumns.RECENT_FOLDER_LIST_URI
    )
    settings: Optional[dict] = Field(default=None, alias=SETTINGS_KEY)

    @classmethod
    def parse(cls, serialized: str) -> "AccountDocument":
        """Parse and validate serialized account text.

        Raises:
            MalformedInputError: If the text is not a JSON object with the
                required keys and value types.
        """
        if not isinstance(serialized, str):
            raise MalformedInputError(
                f"Serialized account must be a string, got {type(serialized).__name__}"
            )
        try:
            data = json.loads(serialized)
        except json.JSONDecodeError as e:
            raise MalformedInputError(f"Account is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise MalformedInputError("Serialized account must be a JSON object")
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise MalformedInputError(f"Invalid account document: {e}") from e


@dataclass(frozen=True)
class Account:
    """A user's mail account as reported by the mail provider.

    ``name`` and ``type`` identify the account. URI fields always hold a
    :class:`Uri`; endpoints the provider does not offer are ``EMPTY_URI``.
    Instances are immutable; use ``dataclasses.replace`` to derive a copy.
    """

    name: str
    type: str
    provider_version: int = 0
    uri: Uri = EMPTY_URI
    capabilities: int = 0
    folder_list_uri: Uri = EMPTY_URI
    search_uri: Uri = EMPTY_URI
    account_from_addresses: Optional[str] = None
    save_draft_uri: Uri = EMPTY_URI
    send_message_uri: Uri = EMPTY_URI
    expunge_message_uri: Uri = EMPTY_URI
    undo_uri: Uri = EMPTY_URI
    settings_intent_uri: Uri = EMPTY_URI
    help_intent_uri: Uri = EMPTY_URI
    send_feedback_intent_uri: Uri = EMPTY_URI
    sync_status: int = 0
    compose_intent_uri: Uri = EMPTY_URI
    mime_type: Optional[str] = None
    recent_folder_list_uri: Uri = EMPTY_URI
    settings: Optional[Settings] = None

    def __post_init__(self):
        if not isinstance(self.name, str) or not self.name:
            raise MalformedInputError("Account name must be a non-empty string")
        if not isinstance(self.type, str) or not self.type:
            raise MalformedInputError("Account type must be a non-empty string")
        for field_name in _INT_FIELDS:
            value = getattr(self, field_name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise MalformedInputError(f"{field_name} must be an integer, got {value!r}")
            if not INT32_MIN <= value <= INT32_MAX:
                raise MalformedInputError(
                    f"{field_name} does not fit in a signed 32-bit int: {value}"
                )
        for field_name in _URI_FIELDS:
            value = getattr(self, field_name)
            if not isinstance(value, Uri):
                object.__setattr__(self, field_name, get_valid_uri(value))

    def supports_capability(self, capability: int) -> bool:
        """Return True if any bit of capability is set in this account's capabilities."""
        return (self.capabilities & capability) != 0

    # Row source

    @classmethod
    def from_row(cls, row) -> "Account":
        """Create an Account from a row laid out in ACCOUNT_PROJECTION order.

        Args:
            row: Indexable row such as a sqlite3.Row or tuple.

        Returns:
            Account with type set to UNKNOWN_ACCOUNT_TYPE, since rows do not
            carry the account type.

        Raises:
            MalformedInputError: If columns are missing or have the wrong type.
        """
        if len(row) < len(ACCOUNT_PROJECTION):
            raise MalformedInputError(
                f"Account row has {len(row)} columns, expected {len(ACCOUNT_PROJECTION)}"
            )

        return cls(
            name=_string_column(row, ACCOUNT_NAME_COLUMN),
            type=UNKNOWN_ACCOUNT_TYPE,
            account_from_addresses=_string_column(row, ACCOUNT_FROM_ADDRESSES_COLUMN),
            capabilities=_int_column(row, ACCOUNT_CAPABILITIES_COLUMN),
            provider_version=_int_column(row, ACCOUNT_PROVIDER_VERSION_COLUMN),
            uri=_uri_column(row, ACCOUNT_URI_COLUMN),
            folder_list_uri=_uri_column(row, ACCOUNT_FOLDER_LIST_URI_COLUMN),
            search_uri=_uri_column(row, ACCOUNT_SEARCH_URI_COLUMN),
            save_draft_uri=_uri_column(row, ACCOUNT_SAVE_DRAFT_URI_COLUMN),
            send_message_uri=_uri_column(row, ACCOUNT_SEND_MESSAGE_URI_COLUMN),
            expunge_message_uri=_uri_column(row, ACCOUNT_EXPUNGE_MESSAGE_URI_COLUMN),
            undo_uri=_uri_column(row, ACCOUNT_UNDO_URI_COLUMN),
            settings_intent_uri=_uri_column(row, ACCOUNT_SETTINGS_INTENT_URI_COLUMN),
            help_intent_uri=_uri_column(row, ACCOUNT_HELP_INTENT_URI_COLUMN),
            send_feedback_intent_uri=_uri_column(
                row, ACCOUNT_SEND_FEEDBACK_INTENT_URI_COLUMN
            ),
            sync_status=_int_column(row, ACCOUNT_SYNC_STATUS_COLUMN),
            compose_intent_uri=_uri_column(row, ACCOUNT_COMPOSE_INTENT_URI_COLUMN),
            mime_type=_string_column(row, ACCOUNT_MIME_TYPE_COLUMN),
            recent_folder_list_uri=_uri_column(
                row, ACCOUNT_RECENT_FOLDER_LIST_URI_COLUMN
            ),
            settings=Settings.from_row(row),
        )

    # Serialized text

    @classmethod
    def from_json(cls, name: str, type: str, serialized: str) -> "Account":
        """Create an Account from text produced by :meth:`serialize`.

        Callers outside this module should prefer :meth:`new_instance`, which
        extracts name and type itself and never raises on bad input.

        Args:
            name: Account name, taken from the same serialized text.
            type: Account type, taken from the same serialized text.
            serialized: JSON text from :meth:`serialize`.

        Raises:
            MalformedInputError: If the text is not valid JSON, lacks
                providerVersion or capabilities, or holds mistyped values.
        """
        return cls._from_document(name, type, AccountDocument.parse(serialized))

    @classmethod
    def new_instance(
        cls, serialized: str, logger: Optional[logging.Logger] = None
    ) -> Optional["Account"]:
        """Create an Account from serialized text, or None if the text is invalid.

        Args:
            serialized: JSON text from :meth:`serialize`.
            logger: Receives a CRITICAL record when the text cannot be decoded.
                Defaults to the application logger.

        Returns:
            The decoded Account, or None.
        """
        try:
            document = AccountDocument.parse(serialized)
            if not document.name or not document.type:
                raise MalformedInputError("Serialized account is missing name or type")
            return cls._from_document(document.name, document.type, document)
        except MalformedInputError as e:
            (logger or get_logger()).critical(
                f"Could not create an account from this input: {serialized!r} ({e})"
            )
            return None

    @classmethod
    def _from_document(cls, name: str, type: str, document: AccountDocument) -> "Account":
        return cls(
            name=name,
            type=type,
            provider_version=document.provider_version,
            uri=get_valid_uri(document.uri),
            capabilities=document.capabilities,
            folder_list_uri=get_valid_uri(document.folder_list_uri),
            search_uri=get_valid_uri(document.search_uri),
            account_from_addresses=document.account_from_addresses,
            save_draft_uri=get_valid_uri(document.save_draft_uri),
            send_message_uri=get_valid_uri(document.send_message_uri),
            expunge_message_uri=get_valid_uri(document.expunge_message_uri),
            undo_uri=get_valid_uri(document.undo_uri),
            settings_intent_uri=get_valid_uri(document.settings_intent_uri),
            help_intent_uri=get_valid_uri(document.help_intent_uri),
            send_feedback_intent_uri=get_valid_uri(document.send_feedback_intent_uri),
            sync_status=document.sync_status,
            compose_intent_uri=get_valid_uri(document.compose_intent_uri),
            mime_type=document.mime_type,
            recent_folder_list_uri=get_valid_uri(document.recent_folder_list_uri),
            settings=Settings.from_json(document.settings),
        )

    def to_json(self) -> dict:
        """Convert account to the dictionary written by :meth:`serialize`."""
        data = {
            AccountColumns.NAME: self.name,
            AccountColumns.TYPE: self.type,
            AccountColumns.PROVIDER_VERSION: self.provider_version,
            AccountColumns.URI: str(self.uri),
            AccountColumns.CAPABILITIES: self.capabilities,
            AccountColumns.FOLDER_LIST_URI: str(self.folder_list_uri),
            AccountColumns.SEARCH_URI: str(self.search_uri),
            AccountColumns.ACCOUNT_FROM_ADDRESSES: self.account_from_addresses,
            AccountColumns.SAVE_DRAFT_URI: str(self.save_draft_uri),
            AccountColumns.SEND_MAIL_URI: str(self.send_message_uri),
            AccountColumns.EXPUNGE_MESSAGE_URI: str(self.expunge_message_uri),
            AccountColumns.UNDO_URI: str(self.undo_uri),
            AccountColumns.SETTINGS_INTENT_URI: str(self.settings_intent_uri),
            AccountColumns.HELP_INTENT_URI: str(self.help_intent_uri),
            AccountColumns.SEND_FEEDBACK_INTENT_URI: str(self.send_feedback_intent_uri),
            AccountColumns.SYNC_STATUS: self.sync_status,
            AccountColumns.COMPOSE_URI: str(self.compose_intent_uri),
            AccountColumns.MIME_TYPE: self.mime_type,
            AccountColumns.RECENT_FOLDER_LIST_URI: str(self.recent_folder_list_uri),
        }
        if self.settings is not None:
            data[SETTINGS_KEY] = self.settings.to_json()
        return data

    def serialize(self) -> str:
        """Return the persisted text form of this account.

        Only reads immutable fields, so concurrent callers need no locking.
        """
        return json.dumps(self.to_json())

    # Transfer buffer

    @classmethod
    def from_parcel(cls, parcel: Parcel) -> "Account":
        """Read an Account written by :meth:`write_to_parcel`.

        Fields are read in write order with no validation of the layout; a
        buffer from a different writer yields a wrong record, not an error.
        """
        return cls(
            name=parcel.read_string(),
            type=parcel.read_string(),
            provider_version=parcel.read_int(),
            uri=parcel.read_uri(),
            capabilities=parcel.read_int(),
            folder_list_uri=parcel.read_uri(),
            search_uri=parcel.read_uri(),
            account_from_addresses=parcel.read_string(),
            save_draft_uri=parcel.read_uri(),
            send_message_uri=parcel.read_uri(),
            expunge_message_uri=parcel.read_uri(),
            undo_uri=parcel.read_uri(),
            settings_intent_uri=parcel.read_uri(),
            help_intent_uri=parcel.read_uri(),
            send_feedback_intent_uri=parcel.read_uri(),
            sync_status=parcel.read_int(),
            compose_intent_uri=parcel.read_uri(),
            mime_type=parcel.read_string(),
            recent_folder_list_uri=parcel.read_uri(),
            settings=Settings.new_instance(parcel.read_string()),
        )

    def write_to_parcel(self, parcel: Parcel) -> None:
        # Field order must match from_parcel.
        parcel.write_string(self.name)
        parcel.write_string(self.type)
        parcel.write_int(self.provider_version)
        parcel.write_uri(self.uri)
        parcel.write_int(self.capabilities)
        parcel.write_uri(self.folder_list_uri)
        parcel.write_uri(self.search_uri)
        parcel.write_string(self.account_from_addresses)
        parcel.write_uri(self.save_draft_uri)
        parcel.write_uri(self.send_message_uri)
        parcel.write_uri(self.expunge_message_uri)
        parcel.write_uri(self.undo_uri)
        parcel.write_uri(self.settings_intent_uri)
        parcel.write_uri(self.help_intent_uri)
        parcel.write_uri(self.send_feedback_intent_uri)
        parcel.write_int(self.sync_status)
        parcel.write_uri(self.compose_intent_uri)
        parcel.write_string(self.mime_type)
        parcel.write_uri(self.recent_folder_list_uri)
        parcel.write_string(self.settings.serialize() if self.settings else None)

    def __str__(self) -> str:
        parts = []
        for field in fields(self):
            value = getattr(self, field.name)
            if field.name == "settings":
                value = value.serialize() if value is not None else None
            parts.append(f"{field.name}={value}")
        return ",".join(parts)


def get_all_accounts(rows: Iterable) -> List[Account]:
    """Decode every row of a result set, preserving row order.

    Args:
        rows: A cursor or list of rows in ACCOUNT_PROJECTION order. The source
            is iterated once and is not closed.

    Returns:
        List of Account objects; empty if there are no rows.
    """
    return [Account.from_row(row) for row in rows]


def _int_column(row, index: int) -> int:
    value = row[index]
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedInputError(
            f"Column {ACCOUNT_PROJECTION[index]} must be an integer, got {value!r}"
        )
    return value


def _string_column(row, index: int) -> Optional[str]:
    value = row[index]
    if value is not None and not isinstance(value, str):
        raise MalformedInputError(
            f"Column {ACCOUNT_PROJECTION[index]} must be text, got {value!r}"
        )
    return value


def _uri_column(row, index: int) -> Uri:
    return get_valid_uri(_string_column(row, index))
