"""Core infrastructure module.

Contains configuration, the store handle, input models, and exceptions.
"""

from .config import (
    Settings,
    get_settings,
    get_cached_settings,
    clear_settings_cache,
    DatabaseConnection,
)
from .db import (
    Store,
    bind_placeholders,
    check_connection,
    create_store,
    ensure_single_statement,
)
from .exceptions import (
    ConstraintViolation,
    DatabaseError,
    DuplicateEmailError,
    QueryFailure,
    ValidationError,
)
from .models import NewProperty, NewUser

__all__ = [
    # Config
    "Settings",
    "get_settings",
    "get_cached_settings",
    "clear_settings_cache",
    "DatabaseConnection",
    # Database
    "Store",
    "bind_placeholders",
    "check_connection",
    "create_store",
    "ensure_single_statement",
    # Exceptions
    "ConstraintViolation",
    "DatabaseError",
    "DuplicateEmailError",
    "QueryFailure",
    "ValidationError",
    # Models
    "NewProperty",
    "NewUser",
]
