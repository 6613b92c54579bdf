"""Domain-specific exceptions for the cashbook core services."""

from typing import Dict, Optional


class ValidationError(ValueError):
    """Raised when submitted form data does not meet validation requirements.

    ``errors`` maps each offending field to the first rule it violated.
    """

    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None) -> None:
        super().__init__(message)
        self.errors: Dict[str, str] = dict(errors or {})


class PersistenceError(IOError):
    """Raised when the transaction store cannot be read from or written to."""


class ConfigurationError(ValueError):
    """Raised when environment configuration cannot produce a usable store."""
