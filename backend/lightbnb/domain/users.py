"""User lookups and registration."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..core.db import Store
from ..core.exceptions import ConstraintViolation, DuplicateEmailError, QueryFailure, ValidationError
from ..core.models import NewUser
from . import queries

logger = logging.getLogger(__name__)

# Unique index on LOWER(email), see schema/schema.sql
EMAIL_UNIQUE_INDEX = "users_email_lower_idx"
UNIQUE_VIOLATION_SQLSTATE = "23505"


def _is_email_conflict(error: ConstraintViolation) -> bool:
    message = str(error.original if error.original is not None else error)
    return EMAIL_UNIQUE_INDEX in message or UNIQUE_VIOLATION_SQLSTATE in message


def _first_or_none(rows: list[dict[str, Any]]) -> Optional[dict[str, Any]]:
    return rows[0] if rows else None


def get_user_with_email(store: Store, email: str) -> Optional[dict[str, Any]]:
    """Get a single user by email (case-insensitive), or None."""
    try:
        rows = store.query(queries.USER_BY_EMAIL, [email])
    except QueryFailure as e:
        logger.error(f"Failed to look up user by email: {e}")
        raise
    return _first_or_none(rows)


def get_user_with_id(store: Store, user_id: int) -> Optional[dict[str, Any]]:
    """Get a single user by id, or None."""
    try:
        rows = store.query(queries.USER_BY_ID, [user_id])
    except QueryFailure as e:
        logger.error(f"Failed to look up user {user_id}: {e}")
        raise
    return _first_or_none(rows)


def add_user(store: Store, user: Union[NewUser, Mapping[str, Any]]) -> dict[str, Any]:
    """Add a new user and return the created row.

    The insert and the duplicate check run as one statement. An empty
    RETURNING set means a case-insensitive match already existed; a
    uniqueness violation means a concurrent insert won the race.

    Raises:
        DuplicateEmailError: If the email is already in use
        ValidationError: If the user record is incomplete
        QueryFailure: If the store rejects the insert
    """
    if not isinstance(user, NewUser):
        try:
            user = NewUser.model_validate(dict(user))
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid user: {e}") from e

    try:
        rows = store.query(queries.INSERT_USER, [user.name, user.email, user.password])
    except ConstraintViolation as e:
        if not _is_email_conflict(e):
            logger.error(f"Failed to add user: {e}")
            raise
        logger.error(f"Email already in use (constraint): {user.email}")
        raise DuplicateEmailError(user.email) from e
    except QueryFailure as e:
        logger.error(f"Failed to add user: {e}")
        raise

    if not rows:
        logger.error(f"Email already in use: {user.email}")
        raise DuplicateEmailError(user.email)

    logger.info(f"Created user {rows[0].get('id')}")
    return rows[0]
