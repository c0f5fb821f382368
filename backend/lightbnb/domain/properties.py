"""Property search and insertion."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from ..core.db import Store
from ..core.exceptions import QueryFailure, ValidationError
from ..core.models import NewProperty
from . import queries
from .filters import FilterOptions, to_minor_units
from .search import DEFAULT_LIMIT, build_property_search

logger = logging.getLogger(__name__)


def get_all_properties(
    store: Store,
    options: Union[FilterOptions, Mapping[str, Any], None] = None,
    limit: int = DEFAULT_LIMIT,
    max_limit: Optional[int] = None,
) -> list[dict[str, Any]]:
    """Search properties, cheapest first, with each row's ``average_rating``.

    Raises:
        ValidationError: If the filters or limit are invalid
        QueryFailure: If the store rejects the query
    """
    fragment = build_property_search(options, limit, max_limit)
    try:
        return store.query(fragment.text, fragment.params)
    except QueryFailure as e:
        logger.error(f"Failed to search properties: {e}")
        raise


def add_property(store: Store, new_property: Union[NewProperty, Mapping[str, Any]]) -> dict[str, Any]:
    """Insert a property and return the created row, including its id.

    ``cost_per_night`` is given in dollars and stored in cents.
    """
    if not isinstance(new_property, NewProperty):
        try:
            new_property = NewProperty.model_validate(dict(new_property))
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid property: {e}") from e

    values = new_property.model_dump()
    values["cost_per_night"] = to_minor_units(new_property.cost_per_night)
    params = [values[column] for column in queries.PROPERTY_COLUMNS]

    try:
        rows = store.query(queries.INSERT_PROPERTY, params)
    except QueryFailure as e:
        logger.error(f"Failed to add property {new_property.title!r}: {e}")
        raise

    if not rows:
        raise QueryFailure("Property insert returned no row")
    return rows[0]
