"""Property search query builder."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from ..core.exceptions import ValidationError
from .base import QueryBuilder, QueryFragment
from .filters import FilterOptions, parse_filter_options, to_minor_units

DEFAULT_LIMIT = 10

PROPERTY_SEARCH_BASE = """SELECT properties.*, avg(property_reviews.rating) AS average_rating
FROM properties
LEFT JOIN property_reviews ON properties.id = property_reviews.property_id
WHERE 1 = 1"""


def escape_like(value: str) -> str:
    """Escape LIKE wildcards (with backslash) so ``value`` matches only itself."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def validate_limit(limit: Any, max_limit: Optional[int] = None) -> int:
    """Return ``limit`` as a positive int, or raise ValidationError."""
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise ValidationError(f"Limit must be an integer, got {limit!r}")
    if limit < 1:
        raise ValidationError(f"Limit must be positive, got {limit}")
    if max_limit is not None and limit > max_limit:
        raise ValidationError(f"Limit {limit} exceeds maximum of {max_limit}")
    return limit


def build_property_search(
    options: Union[FilterOptions, Mapping[str, Any], None] = None,
    limit: int = DEFAULT_LIMIT,
    max_limit: Optional[int] = None,
) -> QueryFragment:
    """Compose the property search query for whichever filters are present.

    Filters are appended in a fixed order (city, owner, minimum price,
    maximum price) so the text only depends on which filters are present.
    The rating filter applies to the aggregated average and therefore goes
    into HAVING; the limit is always the last parameter.

    Examples:
        build_property_search({"city": "Van", "minimumRating": 4}, limit=5).params
        -> ("%Van%", 4.0, 5)
    """
    filters = parse_filter_options(options)
    limit = validate_limit(limit, max_limit)

    query = QueryBuilder().add(PROPERTY_SEARCH_BASE)

    if filters.city is not None:
        pattern = f"%{escape_like(filters.city)}%"
        query.add(f"AND LOWER(properties.city) LIKE LOWER({query.bind(pattern)}) ESCAPE '\\'")

    if filters.owner_id is not None:
        query.add(f"AND properties.owner_id = {query.bind(filters.owner_id)}")

    # Stored prices are in cents
    if filters.minimum_price_per_night is not None:
        minimum = to_minor_units(filters.minimum_price_per_night)
        query.add(f"AND properties.cost_per_night >= {query.bind(minimum)}")

    if filters.maximum_price_per_night is not None:
        maximum = to_minor_units(filters.maximum_price_per_night)
        query.add(f"AND properties.cost_per_night <= {query.bind(maximum)}")

    query.add("GROUP BY properties.id")

    if filters.minimum_rating is not None:
        query.add(f"HAVING avg(property_reviews.rating) >= {query.bind(filters.minimum_rating)}")

    query.add("ORDER BY properties.cost_per_night")
    query.add(f"LIMIT {query.bind(limit)};")

    return query.build()
