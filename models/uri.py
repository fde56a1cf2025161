"""URI value type used for account endpoints."""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlsplit

from errors import MalformedInputError


@dataclass(frozen=True)
class Uri:
    """A parsed URI, compared and hashed by its string form.

    Build instances with :meth:`parse` or :func:`get_valid_uri`; the empty
    string is reserved for :data:`EMPTY_URI`.
    """

    value: str = ""

    @classmethod
    def parse(cls, value: str) -> "Uri":
        """Parse a URI string.

        Raises:
            MalformedInputError: If the string is not a syntactically valid URI.
        """
        if not isinstance(value, str):
            raise MalformedInputError(f"URI must be a string, got {type(value).__name__}")
        if not value:
            return EMPTY_URI
        if any(ch.isspace() for ch in value):
            raise MalformedInputError(f"Invalid URI (contains whitespace): {value!r}")
        try:
            urlsplit(value)
        except ValueError as e:
            raise MalformedInputError(f"Invalid URI {value!r}: {e}") from e
        return cls(value)

    @property
    def is_empty(self) -> bool:
        return not self.value

    @property
    def scheme(self) -> str:
        return urlsplit(self.value).scheme

    @property
    def authority(self) -> str:
        return urlsplit(self.value).netloc

    @property
    def path(self) -> str:
        return urlsplit(self.value).path

    def __str__(self) -> str:
        return self.value


EMPTY_URI = Uri()


def get_valid_uri(value: Optional[str]) -> Uri:
    """Return the parsed URI, or EMPTY_URI if value is None or empty."""
    if not value:
        return EMPTY_URI
    return Uri.parse(value)
