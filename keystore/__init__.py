from __future__ import annotations

from .dates import DateWithOffset, date_to_string, get_current_date, string_to_date
from .errors import (
    ConfigurationError,
    KeyDataNotFoundError,
    KeyStoreError,
    NoMatchError,
    NotAcknowledgedError,
    StoreNotConnectedError,
)
from .interfaces import AsyncKeyDataRepository
from .mongo_store import MongoKeyStore, open_key_store
from .records import EncryptedKeysData, KeyDataDocument
from .settings import Settings, get_settings

__all__ = [
    "AsyncKeyDataRepository",
    "MongoKeyStore",
    "open_key_store",
    "EncryptedKeysData",
    "KeyDataDocument",
    "DateWithOffset",
    "get_current_date",
    "date_to_string",
    "string_to_date",
    "Settings",
    "get_settings",
    "KeyStoreError",
    "ConfigurationError",
    "StoreNotConnectedError",
    "NotAcknowledgedError",
    "NoMatchError",
    "KeyDataNotFoundError",
]
