"""Custom exceptions for the data-access layer."""

from __future__ import annotations


class DatabaseError(Exception):
    """Raised when the store cannot be reached or used."""

    pass


class QueryFailure(DatabaseError):
    """Raised when the store rejects a statement.

    The driver error is kept on ``original`` and chained as ``__cause__``.
    """

    def __init__(self, message: str, original: BaseException | None = None) -> None:
        super().__init__(message)
        self.original = original


class ConstraintViolation(QueryFailure):
    """Raised when a statement violates an integrity constraint."""

    pass


class DuplicateEmailError(Exception):
    """Raised when a user with the same email (case-insensitive) already exists."""

    def __init__(self, email: str) -> None:
        super().__init__(f"Email is already in use: {email}")
        self.email = email


class ValidationError(Exception):
    """Raised when input validation fails."""

    pass
