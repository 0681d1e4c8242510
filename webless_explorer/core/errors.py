"""Exception hierarchy shared by the search and export pipeline."""


class WeblessError(RuntimeError):
    """Base exception for all webless-explorer errors."""


class ValidationError(WeblessError, ValueError):
    """Raised when a search request is malformed (query too short, radius out of range)."""


class ProviderError(WeblessError):
    """Raised when the places provider cannot complete a search."""


class ExportError(WeblessError):
    """Raised when a result set cannot be serialized."""
