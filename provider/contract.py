"""Column names, projection layout and flag constants shared by the mail provider.

The text keys double as the storage column names, so persisted account
documents and the ``accounts`` table use the same vocabulary.
"""

SETTINGS_KEY = "settings"

# Rows never carry the account type; decoded accounts get this placeholder.
UNKNOWN_ACCOUNT_TYPE = "unknown"


class AccountColumns:
    """Key names for account fields in rows and serialized documents."""

    ID = "_id"
    NAME = "name"
    TYPE = "type"
    PROVIDER_VERSION = "providerVersion"
    URI = "accountUri"
    CAPABILITIES = "capabilities"
    FOLDER_LIST_URI = "folderListUri"
    SEARCH_URI = "searchUri"
    ACCOUNT_FROM_ADDRESSES = "accountFromAddresses"
    SAVE_DRAFT_URI = "saveDraftUri"
    SEND_MAIL_URI = "sendMailUri"
    EXPUNGE_MESSAGE_URI = "expungeMessageUri"
    UNDO_URI = "undoUri"
    SETTINGS_INTENT_URI = "accountSettingsIntentUri"
    SYNC_STATUS = "syncStatus"
    HELP_INTENT_URI = "helpIntentUri"
    SEND_FEEDBACK_INTENT_URI = "sendFeedbackIntentUri"
    COMPOSE_URI = "composeUri"
    MIME_TYPE = "mimeType"
    RECENT_FOLDER_LIST_URI = "recentFolderListUri"


class SettingsColumns:
    """Key names for per-account settings."""

    SIGNATURE = "signature"
    AUTO_ADVANCE = "auto_advance"
    MESSAGE_TEXT_SIZE = "message_text_size"
    SNAP_HEADERS = "snap_headers"
    REPLY_BEHAVIOR = "reply_behavior"
    HIDE_CHECKBOXES = "hide_checkboxes"
    CONFIRM_DELETE = "confirm_delete"
    CONFIRM_ARCHIVE = "confirm_archive"
    CONFIRM_SEND = "confirm_send"
    DEFAULT_INBOX = "default_inbox"
    FORCE_REPLY_FROM_DEFAULT = "force_reply_from_default"
    MAX_ATTACHMENT_SIZE = "max_attachment_size"


# Column order returned by account queries. Decoders read by index, so this
# order is part of the storage contract.
ACCOUNT_PROJECTION = (
    AccountColumns.ID,
    AccountColumns.NAME,
    AccountColumns.PROVIDER_VERSION,
    AccountColumns.URI,
    AccountColumns.CAPABILITIES,
    AccountColumns.FOLDER_LIST_URI,
    AccountColumns.SEARCH_URI,
    AccountColumns.ACCOUNT_FROM_ADDRESSES,
    AccountColumns.SAVE_DRAFT_URI,
    AccountColumns.SEND_MAIL_URI,
    AccountColumns.EXPUNGE_MESSAGE_URI,
    AccountColumns.UNDO_URI,
    AccountColumns.SETTINGS_INTENT_URI,
    AccountColumns.SYNC_STATUS,
    AccountColumns.HELP_INTENT_URI,
    AccountColumns.SEND_FEEDBACK_INTENT_URI,
    AccountColumns.COMPOSE_URI,
    AccountColumns.MIME_TYPE,
    AccountColumns.RECENT_FOLDER_LIST_URI,
    SettingsColumns.SIGNATURE,
    SettingsColumns.AUTO_ADVANCE,
    SettingsColumns.MESSAGE_TEXT_SIZE,
    SettingsColumns.SNAP_HEADERS,
    SettingsColumns.REPLY_BEHAVIOR,
    SettingsColumns.HIDE_CHECKBOXES,
    SettingsColumns.CONFIRM_DELETE,
    SettingsColumns.CONFIRM_ARCHIVE,
    SettingsColumns.CONFIRM_SEND,
    SettingsColumns.DEFAULT_INBOX,
    SettingsColumns.FORCE_REPLY_FROM_DEFAULT,
    SettingsColumns.MAX_ATTACHMENT_SIZE,
)

ACCOUNT_ID_COLUMN = 0
ACCOUNT_NAME_COLUMN = 1
ACCOUNT_PROVIDER_VERSION_COLUMN = 2
ACCOUNT_URI_COLUMN = 3
ACCOUNT_CAPABILITIES_COLUMN = 4
ACCOUNT_FOLDER_LIST_URI_COLUMN = 5
ACCOUNT_SEARCH_URI_COLUMN = 6
ACCOUNT_FROM_ADDRESSES_COLUMN = 7
ACCOUNT_SAVE_DRAFT_URI_COLUMN = 8
ACCOUNT_SEND_MESSAGE_URI_COLUMN = 9
ACCOUNT_EXPUNGE_MESSAGE_URI_COLUMN = 10
ACCOUNT_UNDO_URI_COLUMN = 11
ACCOUNT_SETTINGS_INTENT_URI_COLUMN = 12
ACCOUNT_SYNC_STATUS_COLUMN = 13
ACCOUNT_HELP_INTENT_URI_COLUMN = 14
ACCOUNT_SEND_FEEDBACK_INTENT_URI_COLUMN = 15
ACCOUNT_COMPOSE_INTENT_URI_COLUMN = 16
ACCOUNT_MIME_TYPE_COLUMN = 17
ACCOUNT_RECENT_FOLDER_LIST_URI_COLUMN = 18
ACCOUNT_SETTINGS_SIGNATURE_COLUMN = 19
ACCOUNT_SETTINGS_AUTO_ADVANCE_COLUMN = 20
ACCOUNT_SETTINGS_MESSAGE_TEXT_SIZE_COLUMN = 21
ACCOUNT_SETTINGS_SNAP_HEADERS_COLUMN = 22
ACCOUNT_SETTINGS_REPLY_BEHAVIOR_COLUMN = 23
ACCOUNT_SETTINGS_HIDE_CHECKBOXES_COLUMN = 24
ACCOUNT_SETTINGS_CONFIRM_DELETE_COLUMN = 25
ACCOUNT_SETTINGS_CONFIRM_ARCHIVE_COLUMN = 26
ACCOUNT_SETTINGS_CONFIRM_SEND_COLUMN = 27
ACCOUNT_SETTINGS_DEFAULT_INBOX_COLUMN = 28
ACCOUNT_SETTINGS_FORCE_REPLY_FROM_DEFAULT_COLUMN = 29
ACCOUNT_SETTINGS_MAX_ATTACHMENT_SIZE_COLUMN = 30

ACCOUNT_SETTINGS_COLUMNS = range(
    ACCOUNT_SETTINGS_SIGNATURE_COLUMN, ACCOUNT_SETTINGS_MAX_ATTACHMENT_SIZE_COLUMN + 1
)


class AccountCapabilities:
    """Bit flags for optional features an account supports."""

    SYNCABLE_FOLDERS = 0x0001
    REPORT_SPAM = 0x0002
    ARCHIVE = 0x0004
    MUTE = 0x0008
    SERVER_SEARCH = 0x0010
    FOLDER_SERVER_SEARCH = 0x0020
    SANITIZED_HTML = 0x0040
    DRAFT_SYNCHRONIZATION = 0x0080
    MULTIPLE_FROM_ADDRESSES = 0x0100
    SMART_REPLY = 0x0200
    LOCAL_SEARCH = 0x0400
    THREADED_CONVERSATIONS = 0x0800
    MULTIPLE_FOLDERS_PER_CONV = 0x1000
    UNDO = 0x2000
    HELP_CONTENT = 0x4000
    SEND_FEEDBACK = 0x8000
    MARK_IMPORTANT = 0x10000


class SyncStatus:
    """Codes describing the current synchronization state."""

    NO_SYNC = 0
    USER_REFRESH = 1 << 0
    USER_QUERY = 1 << 1
    USER_MORE_RESULTS = 1 << 2
    BACKGROUND_SYNC = 1 << 3


class AutoAdvance:
    UNSET = 0
    OLDER = 1
    NEWER = 2
    LIST = 3


class MessageTextSize:
    TINY = -2
    SMALL = -1
    NORMAL = 0
    LARGE = 1
    HUGE = 2


class SnapHeaders:
    ALWAYS = 0
    PORTRAIT_ONLY = 1
    NEVER = 2


class DefaultReplyBehavior:
    REPLY = 0
    REPLY_ALL = 1
