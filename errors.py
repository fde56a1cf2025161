"""Error types raised while decoding accounts."""


class MalformedInputError(ValueError):
    """Input is missing required fields or holds values of the wrong type.

    Raised by the raw decoders (row, text, settings document). The safe
    text entry point converts it into a ``None`` result.
    """
