class SaveError(Exception):
    """Base exception for save/load errors."""


class SaveValidationError(SaveError):
    """Raised when a persisted blob cannot be decoded into a SaveBlob."""
