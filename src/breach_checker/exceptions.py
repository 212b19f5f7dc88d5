"""
Exception classes for the breach checker.

All exceptions inherit from BreachCheckerError and carry a machine-readable
code, a human-readable message and optional details.
"""

from typing import Optional


class BreachCheckerError(Exception):
    """Base exception for all breach checker errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
    ) -> None:
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"

    def to_dict(self) -> dict:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class ValidationError(BreachCheckerError):
    """Raised when a digest or other input has the wrong shape."""

    pass


class NetworkError(BreachCheckerError):
    """Raised when the range endpoint cannot be used (e.g. not HTTPS)."""

    pass


class ConfigurationError(BreachCheckerError):
    """Raised when a configuration file cannot be loaded or is invalid."""

    pass
