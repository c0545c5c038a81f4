"""Domain exceptions raised by the Fritter services.

Services raise these synchronously; nothing retries internally. The API layer
translates them into HTTP responses in one place (see ``fritter.main``).
"""

from __future__ import annotations


class FritterError(Exception):
    """Base exception for all domain failures.

    Attributes:
        detail: Human readable explanation forwarded to API clients.
    """

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class NotFoundError(FritterError):
    """Raised when a referenced freet or user does not exist."""


class InvalidArgumentError(FritterError):
    """Raised for malformed input such as bad content or unknown enum values."""


class ContentTooLongError(InvalidArgumentError):
    """Raised when freet content exceeds the configured maximum length."""


class ConflictError(FritterError):
    """Raised when an operation is not allowed in the freet's audit state."""


class PermissionDeniedError(FritterError):
    """Raised when a user modifies a freet they did not author."""
