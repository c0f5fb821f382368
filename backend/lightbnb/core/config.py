"""Application configuration for the LightBnB data-access layer."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Optional

from dotenv import load_dotenv

load_dotenv(override=True)


@dataclass(frozen=True)
class DatabaseConnection:
    """Configuration for the PostgreSQL connection."""
    name: str
    host: str
    database: str
    user: str = ""
    password: str = ""
    port: int = 5432
    driver: str = "PostgreSQL Unicode"
    timeout: int = 30
    enabled: bool = True
    raw_connection_string: str = ""

    @property
    def connection_string(self) -> str:
        """Generate pyodbc connection string."""
        if self.raw_connection_string:
            return self.raw_connection_string
        return (
            f"DRIVER={{{self.driver}}};"
            f"SERVER={self.host};"
            f"PORT={self.port};"
            f"DATABASE={self.database};"
            f"UID={self.user};PWD={self.password};"
        )


@dataclass(frozen=True)
class Settings:
    """Application settings."""
    connection: DatabaseConnection

    # Query settings
    default_limit: int
    max_limit: int

    log_level: str


def _parse_odbc_connection_string(conn_str: str) -> dict:
    """Parse an ODBC connection string into lower-cased components."""
    result = {}
    if not conn_str:
        return result

    for part in conn_str.split(";"):
        if "=" in part:
            key, value = part.split("=", 1)
            result[key.strip().lower()] = value.strip().strip("{}")

    return result


def _create_connection_from_env(prefix: str, name: str) -> DatabaseConnection:
    """Create a DatabaseConnection from environment variables.

    A raw ``<prefix>_CONNECTION_STRING`` wins over the individual variables.
    """
    conn_str = os.getenv(f"{prefix}_CONNECTION_STRING", "").strip()
    if conn_str:
        parsed = _parse_odbc_connection_string(conn_str)
        return DatabaseConnection(
            name=name,
            host=parsed.get("server", ""),
            database=parsed.get("database", ""),
            user=parsed.get("uid", ""),
            port=int(parsed.get("port", "5432")),
            driver=parsed.get("driver", "PostgreSQL Unicode"),
            enabled=bool(parsed.get("server")),
            raw_connection_string=conn_str,
        )

    # Defaults match the development database used by the web app
    return DatabaseConnection(
        name=name,
        host=os.getenv(f"{prefix}_HOST", "localhost"),
        database=os.getenv(f"{prefix}_NAME", "lightbnb"),
        user=os.getenv(f"{prefix}_USER", "development"),
        password=os.getenv(f"{prefix}_PASSWORD", "development"),
        port=int(os.getenv(f"{prefix}_PORT", "5432")),
        driver=os.getenv(f"{prefix}_DRIVER", "PostgreSQL Unicode"),
        timeout=int(os.getenv(f"{prefix}_TIMEOUT", "30")),
        enabled=True,
    )


def get_settings() -> Settings:
    """Load settings from environment variables."""
    return Settings(
        connection=_create_connection_from_env("DB", "lightbnb"),
        default_limit=int(os.getenv("DEFAULT_LIMIT", "10")),
        max_limit=int(os.getenv("MAX_LIMIT", "100")),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


# Singleton for caching settings
_settings_cache: Optional[Settings] = None


def get_cached_settings() -> Settings:
    """Get cached settings (loads once)."""
    global _settings_cache
    if _settings_cache is None:
        _settings_cache = get_settings()
    return _settings_cache


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    global _settings_cache
    _settings_cache = None
