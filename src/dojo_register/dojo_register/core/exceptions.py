from __future__ import annotations

from typing import Any, Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced student or attendance entry does not exist."""


class ConflictError(DomainError):
    """Raised when a uniqueness rule is violated.

    ``payload`` carries extra fields the caller should still receive,
    e.g. the matched student on a duplicate sign-in.
    """

    def __init__(self, message: str, *, payload: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.payload = payload or {}


class AuthenticationError(DomainError):
    """Raised when login credentials are invalid or missing."""


class AuthorizationError(DomainError):
    """Raised when a credential is presented but not acceptable."""
