from __future__ import annotations

import logging
from typing import Any, Optional

from ..core.db import Store
from ..core.exceptions import QueryFailure
from . import queries
from .search import DEFAULT_LIMIT, validate_limit

logger = logging.getLogger(__name__)


def get_all_reservations(
    store: Store,
    guest_id: int,
    limit: int = DEFAULT_LIMIT,
    max_limit: Optional[int] = None,
) -> list[dict[str, Any]]:
    """Get a guest's reservations with property summary fields, earliest first."""
    limit = validate_limit(limit, max_limit)
    try:
        return store.query(queries.RESERVATIONS_FOR_GUEST, [guest_id, limit])
    except QueryFailure as e:
        logger.error(f"Failed to list reservations for guest {guest_id}: {e}")
        raise
