import json
import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from errors import MalformedInputError
from logger import get_logger
from models.uri import EMPTY_URI, Uri, get_valid_uri
from provider.contract import (
    ACCOUNT_PROJECTION,
    ACCOUNT_SETTINGS_COLUMNS,
    AutoAdvance,
    DefaultReplyBehavior,
    MessageTextSize,
    SettingsColumns,
    SnapHeaders,
)


class SettingsDocument(BaseModel):
    """Validated shape of a serialized settings sub-document."""

    model_config = ConfigDict(extra="ignore")

    signature: Optional[str] = ""
    auto_advance: int = AutoAdvance.LIST
    message_text_size: int = MessageTextSize.NORMAL
    snap_headers: int = SnapHeaders.ALWAYS
    reply_behavior: int = DefaultReplyBehavior.REPLY
    hide_checkboxes: bool = False
    confirm_delete: bool = False
    confirm_archive: bool = False
    confirm_send: bool = False
    default_inbox: Optional[str] = None
    force_reply_from_default: bool = False
    max_attachment_size: int = 0


@dataclass(frozen=True)
class Settings:
    """Per-account preferences. Owned by a single Account."""

    signature: str = ""
    auto_advance: int = AutoAdvance.LIST
    message_text_size: int = MessageTextSize.NORMAL
    snap_headers: int = SnapHeaders.ALWAYS
    reply_behavior: int = DefaultReplyBehavior.REPLY
    hide_checkboxes: bool = False
    confirm_delete: bool = False
    confirm_archive: bool = False
    confirm_send: bool = False
    default_inbox: Uri = EMPTY_URI
    force_reply_from_default: bool = False
    max_attachment_size: int = 0

    def __post_init__(self):
        if self.default_inbox is None:
            object.__setattr__(self, "default_inbox", EMPTY_URI)

    def to_json(self) -> dict:
        """Convert settings to the dictionary stored under an account's settings key."""
        return {
            SettingsColumns.SIGNATURE: self.signature,
            SettingsColumns.AUTO_ADVANCE: self.auto_advance,
            SettingsColumns.MESSAGE_TEXT_SIZE: self.message_text_size,
            SettingsColumns.SNAP_HEADERS: self.snap_headers,
            SettingsColumns.REPLY_BEHAVIOR: self.reply_behavior,
            SettingsColumns.HIDE_CHECKBOXES: self.hide_checkboxes,
            SettingsColumns.CONFIRM_DELETE: self.confirm_delete,
            SettingsColumns.CONFIRM_ARCHIVE: self.confirm_archive,
            SettingsColumns.CONFIRM_SEND: self.confirm_send,
            SettingsColumns.DEFAULT_INBOX: str(self.default_inbox),
            SettingsColumns.FORCE_REPLY_FROM_DEFAULT: self.force_reply_from_default,
            SettingsColumns.MAX_ATTACHMENT_SIZE: self.max_attachment_size,
        }

    def serialize(self) -> str:
        return json.dumps(self.to_json())

    @classmethod
    def from_json(cls, document: Optional[dict]) -> Optional["Settings"]:
        """Build settings from a parsed sub-document.

        Args:
            document: Dictionary produced by :meth:`to_json`, or None when the
                account carries no settings.

        Returns:
            Settings, or None if document is None. Missing keys take defaults.

        Raises:
            MalformedInputError: If the document is not an object or a value
                has the wrong type.
        """
        if document is None:
            return None
        if not isinstance(document, dict):
            raise MalformedInputError(
                f"Settings must be an object, got {type(document).__name__}"
            )
        try:
            parsed = SettingsDocument.model_validate(document)
        except ValidationError as e:
            raise MalformedInputError(f"Invalid settings document: {e}") from e

        return cls(
            signature=parsed.signature or "",
            auto_advance=parsed.auto_advance,
            message_text_size=parsed.message_text_size,
            snap_headers=parsed.snap_headers,
            reply_behavior=parsed.reply_behavior,
            hide_checkboxes=parsed.hide_checkboxes,
            confirm_delete=parsed.confirm_delete,
            confirm_archive=parsed.confirm_archive,
            confirm_send=parsed.confirm_send,
            default_inbox=get_valid_uri(parsed.default_inbox),
            force_reply_from_default=parsed.force_reply_from_default,
            max_attachment_size=parsed.max_attachment_size,
        )

    @classmethod
    def new_instance(
        cls, serialized: Optional[str], logger: Optional[logging.Logger] = None
    ) -> Optional["Settings"]:
        """Parse settings from :meth:`serialize` output.

        Returns None for a missing or empty string, and also for text that
        cannot be parsed (after logging the problem).
        """
        if not serialized:
            return None
        try:
            try:
                document = json.loads(serialized)
            except json.JSONDecodeError as e:
                raise MalformedInputError(f"Settings are not valid JSON: {e}") from e
            return cls.from_json(document)
        except MalformedInputError as e:
            (logger or get_logger()).error(
                f"Could not create settings from this input: {serialized!r} ({e})"
            )
            return None

    @classmethod
    def from_row(cls, row) -> Optional["Settings"]:
        """Read the settings columns of an account projection row.

        Returns None when every settings column is NULL (an account stored
        without settings).
        """
        document = {
            ACCOUNT_PROJECTION[index]: row[index]
            for index in ACCOUNT_SETTINGS_COLUMNS
            if row[index] is not None
        }
        if not document:
            return None
        return cls.from_json(document)
