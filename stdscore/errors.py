"""
Exceptions raised by the std score pipeline.

Every document-level failure derives from DocumentError so that callers
can reject a single file and keep going with the rest of the session.
"""


class StdScoreError(Exception):
    """Base class for all stdscore errors."""


class DocumentError(StdScoreError):
    """A document was rejected and did not enter the roster store."""


class EncodingError(DocumentError):
    """The document bytes are not valid UTF-8 text."""


class StructureError(DocumentError):
    """The roster table could not be located or has no rows."""


class ParseError(DocumentError):
    """A score cell has no usable numeric value."""


class EmptyResultError(DocumentError):
    """Nothing usable was left after parsing or filtering."""


class ConfigError(StdScoreError):
    """Name tables or settings are missing or malformed."""
