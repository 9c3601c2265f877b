# -----------------------------------------------------------------------------
# Module: emoji_errors.py
# Summary: Exception types shared by the emoji table parser, the data source
#          helpers and the catalog.
# Context: A bad line in the table raises InvalidCodePoint and is skipped by
#          the table parser; every other error here ends the load and reaches
#          the caller.
# -----------------------------------------------------------------------------


class EmojiDataError(Exception):
    """Base class for every error raised while loading emoji data."""


class InvalidCodePoint(EmojiDataError, ValueError):
    """A code point, code point list or range could not be decoded."""

    def __init__(self, token, cause=None, reason=None):
        self.token = token
        self.cause = cause
        if reason is not None:
            message = f'invalid unicode code point: "{token}" {reason}'
        elif cause is not None:
            message = f'invalid unicode code point: "{token}" because {cause}'
        else:
            message = f'invalid unicode code point: "{token}"'
        super().__init__(message)


class ParsingFailed(EmojiDataError):
    """The table text stream itself could not be read."""


class SourceUnavailable(EmojiDataError):
    """The emoji table could not be fetched or opened."""

    def __init__(self, message, url=None, status_code=None):
        self.url = url
        self.status_code = status_code
        super().__init__(message)


class EmptyCatalog(EmojiDataError, LookupError):
    """A random pick was requested from a catalog with no entries."""
