"""Quest status exceptions."""


class SharedQuestsError(Exception):
    """Base exception for shared quest status."""


class CatalogError(SharedQuestsError):
    """Raised when the quest catalog is unavailable or empty."""


class ParseError(SharedQuestsError):
    """Raised when a profile record or a single progress entry is malformed."""
