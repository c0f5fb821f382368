"""Record accessors and the property search query builder."""

from .base import QueryBuilder, QueryFragment
from .filters import FilterOptions, parse_filter_options, to_minor_units
from .properties import add_property, get_all_properties
from .reservations import get_all_reservations
from .search import DEFAULT_LIMIT, build_property_search, validate_limit
from .users import add_user, get_user_with_email, get_user_with_id

__all__ = [
    # Query building
    "QueryBuilder",
    "QueryFragment",
    "FilterOptions",
    "parse_filter_options",
    "to_minor_units",
    "DEFAULT_LIMIT",
    "build_property_search",
    "validate_limit",
    # Accessors
    "add_property",
    "add_user",
    "get_all_properties",
    "get_all_reservations",
    "get_user_with_email",
    "get_user_with_id",
]
