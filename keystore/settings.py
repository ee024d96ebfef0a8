from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    # MongoDB
    connection_string: str
    database_name: str = "test"

    # Debug
    debug_log_queries: bool = False


def get_settings(env_file: str | None = "local.env") -> Settings:
    if env_file:
        load_dotenv(env_file)

    connection_string = os.getenv("MONGO_CONNECTION_STRING", "").strip()

    # Only used when the connection string does not name a database.
    database_name = os.getenv("MONGO_DATABASE", "").strip() or "test"

    debug_log_queries = _env_bool("KEYSTORE_DEBUG_LOG_QUERIES", False)

    return Settings(
        connection_string=connection_string,
        database_name=database_name,
        debug_log_queries=debug_log_queries,
    )
