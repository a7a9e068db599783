from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..attendance.rules.base import ValidationResult


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class SignRejected(ValidationError):
    """Raised when a sign-in/out attempt fails the site policy gate."""

    def __init__(self, result: "ValidationResult"):
        self.result = result
        reasons = ", ".join(r.value for r in result.reasons)
        super().__init__(f"Sign attempt rejected: {reasons}")


class AuthorizationError(DomainError):
    """Raised when an admin-only action is attempted without the admin PIN."""


class StorageError(Exception):
    """Raised when a persistence write cannot be completed."""
