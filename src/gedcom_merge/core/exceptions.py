class GedcomMergeError(Exception):
    """Base exception for merge/append failures."""


class MissingInput(GedcomMergeError):
    """Raised when the incoming document is absent, unreadable or empty."""


class WriteFailure(GedcomMergeError):
    """Raised when the master document cannot be written."""
