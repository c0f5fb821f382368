"""LightBnB data-access layer.

Parameterized queries for users, reservations and properties, executed
through an explicitly passed store handle.

Package Structure:
    core/    - Core infrastructure (config, store, models, exceptions)
    domain/  - Record accessors and the property search query builder
"""

from .core import (
    ConstraintViolation,
    DatabaseError,
    DuplicateEmailError,
    NewProperty,
    NewUser,
    QueryFailure,
    Settings,
    Store,
    ValidationError,
    create_store,
    get_settings,
)
from .domain import (
    FilterOptions,
    QueryFragment,
    add_property,
    add_user,
    build_property_search,
    get_all_properties,
    get_all_reservations,
    get_user_with_email,
    get_user_with_id,
)

__all__ = [
    "ConstraintViolation",
    "DatabaseError",
    "DuplicateEmailError",
    "NewProperty",
    "NewUser",
    "QueryFailure",
    "Settings",
    "Store",
    "ValidationError",
    "create_store",
    "get_settings",
    "FilterOptions",
    "QueryFragment",
    "add_property",
    "add_user",
    "build_property_search",
    "get_all_properties",
    "get_all_reservations",
    "get_user_with_email",
    "get_user_with_id",
]
