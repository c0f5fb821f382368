"""Store handle and query execution for the LightBnB database."""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
import logging
import re
from typing import Any, Callable, Iterable, Optional

import sqlparse

from .config import Settings, get_cached_settings
from .exceptions import ConstraintViolation, DatabaseError, QueryFailure

logger = logging.getLogger(__name__)

# A quoted literal, a $N placeholder, or a bare percent sign
_PLACEHOLDER_PATTERN = re.compile(r"'(?:[^']|'')*'|\$(\d+)|%")

SUPPORTED_PARAMSTYLES = ("qmark", "numeric", "format", "pyformat")

# Styles where the driver runs %-formatting over the whole text
_PERCENT_STYLES = ("format", "pyformat")


def ensure_single_statement(sql: str) -> None:
    """Reject empty text and text carrying more than one statement."""
    statements = [s for s in sqlparse.split(sql) if s.strip().rstrip(";").strip()]
    if len(statements) != 1:
        raise DatabaseError(f"Expected 1 statement, got {len(statements)}")


def bind_placeholders(
    sql: str,
    params: Iterable[Any] | None,
    paramstyle: str = "qmark",
) -> tuple[str, list[Any]]:
    """Rewrite ``$N`` placeholders for a DB-API driver.

    For ``qmark`` every ``$N`` becomes ``?`` and the parameters are reordered
    (and repeated) to follow the placeholders as they appear in the text.
    ``format`` and ``pyformat`` do the same with ``%s``; every literal ``%``
    in the text, quoted or not, is doubled for the driver's %-formatting.
    For ``numeric`` the text uses ``:N`` and the parameters are left as given.

    Args:
        sql: Query text using 1-based ``$N`` placeholders
        params: Parameters, the Nth one bound to ``$N``
        paramstyle: The driver's DB-API paramstyle

    Returns:
        Tuple of (driver_sql, driver_params)

    Raises:
        DatabaseError: If the paramstyle is unsupported or a placeholder
            has no matching parameter
    """
    if paramstyle not in SUPPORTED_PARAMSTYLES:
        raise DatabaseError(f"Unsupported paramstyle: {paramstyle}")

    percent_style = paramstyle in _PERCENT_STYLES
    values = list(params or [])
    ordered: list[Any] = []
    found = False

    def _replace(match: re.Match) -> str:
        nonlocal found
        if match.group(1) is None:
            literal = match.group(0)
            return literal.replace("%", "%%") if percent_style else literal
        found = True
        index = int(match.group(1))
        if index < 1 or index > len(values):
            raise DatabaseError(f"Placeholder ${index} has no parameter ({len(values)} given)")
        if paramstyle == "numeric":
            return f":{index}"
        ordered.append(values[index - 1])
        return "%s" if percent_style else "?"

    text = _PLACEHOLDER_PATTERN.sub(_replace, sql)
    if not found or paramstyle == "numeric":
        return text, values
    return text, ordered


def _normalize_value(value: Any) -> Any:
    """Normalize database values for JSON serialization."""
    if value is None:
        return None
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, bytes):
        try:
            return value.decode("utf-8")
        except UnicodeDecodeError:
            return value.hex()
    if isinstance(value, memoryview):
        return bytes(value).hex()
    return value


class Store:
    """Explicit handle to the database, passed to every accessor.

    ``connect`` returns a fresh DB-API connection; ``driver`` is the DB-API
    module it belongs to (``Error``, ``IntegrityError`` and ``paramstyle``
    are read from it).
    """

    def __init__(self, connect: Callable[[], Any], driver: Any, name: str = "lightbnb") -> None:
        self._connect = connect
        self.driver = driver
        self.name = name

    def connect(self) -> Any:
        try:
            return self._connect()
        except self.driver.Error as e:
            logger.error(f"Failed to connect to database {self.name}: {e}")
            raise QueryFailure(f"Failed to connect to database {self.name}: {e}", e) from e

    def query(self, sql: str, params: Iterable[Any] | None = None) -> list[dict[str, Any]]:
        """Execute one statement and return its rows as column -> value dicts.

        Raises:
            QueryFailure: If the store rejects the statement
            ConstraintViolation: If the statement violates a constraint
        """
        ensure_single_statement(sql)
        text, bound = bind_placeholders(sql, params, self.driver.paramstyle)

        logger.debug(f"Executing SQL on {self.name} ({len(bound)} params): {text[:200]}...")

        conn = self.connect()
        try:
            cursor = conn.cursor()
            cursor.execute(text, bound)
            columns = [col[0] for col in cursor.description] if cursor.description else []
            rows = cursor.fetchall() if columns else []
            conn.commit()
        except self.driver.IntegrityError as e:
            logger.error(f"Constraint violation on {self.name}: {e}")
            raise ConstraintViolation(f"Constraint violation: {e}", e) from e
        except self.driver.Error as e:
            logger.error(f"Database error on {self.name}: {e}")
            raise QueryFailure(f"Query failed: {e}", e) from e
        finally:
            conn.close()

        records = [
            {column: _normalize_value(value) for column, value in zip(columns, row)}
            for row in rows
        ]
        logger.debug(f"Query returned {len(records)} rows from {self.name}")
        return records


def create_store(settings: Optional[Settings] = None) -> Store:
    """Build the production store on top of pyodbc.

    Raises:
        DatabaseError: If the connection is disabled
    """
    # pyodbc loads the unixODBC driver manager at import time
    import pyodbc

    settings = settings or get_cached_settings()
    conn_config = settings.connection
    if not conn_config.enabled:
        raise DatabaseError(f"Database '{conn_config.name}' is disabled")

    return Store(
        lambda: pyodbc.connect(conn_config.connection_string, timeout=conn_config.timeout),
        driver=pyodbc,
        name=conn_config.name,
    )


def check_connection(store: Store, sql: str = "SELECT version() AS server_version") -> dict[str, Any]:
    """Run a trivial query and report connection status without raising."""
    result = {
        "database": store.name,
        "connected": False,
        "error": None,
        "server_version": None,
    }

    try:
        rows = store.query(sql)
        result["connected"] = True
        result["server_version"] = next(iter(rows[0].values())) if rows else "Unknown"
    except DatabaseError as e:
        result["error"] = str(e)

    return result
