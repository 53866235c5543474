"""
Exception classes for the domain probe system.

All exceptions inherit from DomainProbeError and provide structured
error information with codes, messages, and optional details.
"""

from typing import Optional


class DomainProbeError(Exception):
    """Base exception for all domain probe errors."""

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


class ValidationError(DomainProbeError):
    """Raised when a check request body is malformed."""

    pass


class ConfigurationError(DomainProbeError):
    """Raised when configuration values are unusable."""

    pass
