"""Error types shared across the application."""


class RequestError(RuntimeError):
    """Raised when the AI provider call fails or returns malformed output."""


class PersistenceReadError(RuntimeError):
    """Raised when a stored value cannot be decoded."""


class ExportError(RuntimeError):
    """Raised when a plan cannot be exported to PDF."""


class SessionNotFoundError(LookupError):
    """Raised when a planning session id is unknown."""
