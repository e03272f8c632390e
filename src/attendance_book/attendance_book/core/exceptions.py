from __future__ import annotations


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid."""


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""


class ConfirmationRequiredError(DomainError):
    """Raised when a destructive action is attempted without explicit confirmation."""


class ResubmissionLockedError(DomainError):
    """Raised when attendance for a group/date was saved inside the cooldown window."""

    def __init__(self, message: str, remaining):
        super().__init__(message)
        self.remaining = remaining


class BackendError(Exception):
    """Raised when the storage backend fails or rejects a call."""


class RecordNotFoundError(BackendError):
    """Raised when the backend has no record with the requested id."""
