from __future__ import annotations

import contextlib
import logging
from typing import Any, AsyncIterator, Callable

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ASCENDING

from .dates import DateWithOffset, get_current_date
from .errors import (
    ConfigurationError,
    KeyDataNotFoundError,
    NoMatchError,
    NotAcknowledgedError,
    StoreNotConnectedError,
)
from .interfaces import AsyncKeyDataRepository
from .records import EncryptedKeysData, KeyDataDocument, update_fields
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


class MongoKeyStore(AsyncKeyDataRepository):
    """
    Encrypted key records in the ``keys`` collection, one document per user id.

    The client is only created by ``connect()``; every other operation requires a
    successful ``connect()`` first.
    """

    KEYS_COLLECTION = "keys"

    def __init__(
        self,
        settings: Settings | None,
        *,
        client_factory: Callable[..., Any] = AsyncIOMotorClient,
        clock: Callable[[], DateWithOffset] = get_current_date,
    ) -> None:
        if settings is None or not (settings.connection_string or "").strip():
            raise ConfigurationError("Connection string is missing or empty")
        self._settings = settings
        self._client_factory = client_factory
        self._clock = clock
        self.collection_name = self.KEYS_COLLECTION

        self._client: AsyncIOMotorClient | None = None
        self._db: AsyncIOMotorDatabase | None = None

    @property
    def is_connected(self) -> bool:
        return self._db is not None

    def _collection(self) -> AsyncIOMotorCollection:
        if self._db is None:
            raise StoreNotConnectedError()
        return self._db[self.collection_name]

    def _debug(self, msg: str, *args: Any) -> None:
        if self._settings.debug_log_queries:
            logger.debug(msg, *args)

    async def connect(self) -> None:
        # Reuse the open client and its pool.
        if self._client is not None:
            return

        client = self._client_factory(self._settings.connection_string)
        try:
            await client.admin.command("ping")
            db = client.get_default_database(self._settings.database_name)
            await db[self.collection_name].create_index([("userId", ASCENDING)], unique=True)
        except Exception:
            logger.warning("Key store connection failed; closing client")
            client.close()
            raise

        self._client = client
        self._db = db
        logger.info("Key store connected (database=%s, collection=%s)", db.name, self.collection_name)

    async def close(self) -> None:
        if self._client is None:
            return
        self._client.close()
        self._client = None
        self._db = None
        logger.info("Key store connection closed")

    async def get_key_data(self, user_id: str) -> EncryptedKeysData:
        doc = await self._collection().find_one({"userId": user_id})
        if doc is None:
            raise KeyDataNotFoundError(user_id)
        self._debug("Loaded key data for user %s", user_id)
        return KeyDataDocument.from_mongo_doc(doc).to_record()

    async def add_key_data(self, record: EncryptedKeysData, user_id: str) -> EncryptedKeysData:
        collection = self._collection()
        document = KeyDataDocument.new(record, user_id, self._clock())

        result = await collection.insert_one(document.to_mongo_doc())
        if not result.acknowledged:
            logger.warning("Insert of key data for user %s was not acknowledged", user_id)
            raise NotAcknowledgedError("Unable to add key data")

        self._debug("Inserted key data for user %s (encrypter=%s)", user_id, record.encrypterName)
        return await self.get_key_data(user_id)

    async def update_key_data(self, record: EncryptedKeysData, user_id: str) -> EncryptedKeysData:
        collection = self._collection()
        result = await collection.update_one(
            {"userId": user_id},
            {"$set": update_fields(record, self._clock())},
        )

        if not result.acknowledged:
            logger.warning("Update of key data for user %s was not acknowledged", user_id)
            raise NotAcknowledgedError("Unable to update key data")
        if result.modified_count == 0:
            logger.warning("Update of key data for user %s modified nothing", user_id)
            raise NoMatchError("Unable to update key data", user_id)

        self._debug("Updated key data for user %s (encrypter=%s)", user_id, record.encrypterName)
        return await self.get_key_data(user_id)

    async def remove_key_data(self, user_id: str) -> None:
        result = await self._collection().delete_one({"userId": user_id})
        if not result.acknowledged:
            logger.warning("Delete of key data for user %s was not acknowledged", user_id)
            raise NotAcknowledgedError("Unable to remove key data")
        if result.deleted_count == 0:
            logger.warning("No key data to remove for user %s", user_id)
            raise NoMatchError("Unable to remove key data", user_id)
        self._debug("Removed key data for user %s", user_id)

    async def is_data_exist(self, user_id: str) -> bool:
        count = await self._collection().count_documents({"userId": user_id}, limit=1)
        return count > 0


@contextlib.asynccontextmanager
async def open_key_store(settings: Settings | None = None, **kwargs: Any) -> AsyncIterator[MongoKeyStore]:
    store = MongoKeyStore(settings if settings is not None else get_settings(), **kwargs)
    await store.connect()
    try:
        yield store
    finally:
        await store.close()
