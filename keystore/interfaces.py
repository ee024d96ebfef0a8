from __future__ import annotations

from typing import Protocol

from .records import EncryptedKeysData


class AsyncKeyDataRepository(Protocol):
    """
    Per-user encrypted key material, one record per user id.
    """

    async def get_key_data(self, user_id: str) -> EncryptedKeysData: ...
    async def add_key_data(self, record: EncryptedKeysData, user_id: str) -> EncryptedKeysData: ...
    async def update_key_data(self, record: EncryptedKeysData, user_id: str) -> EncryptedKeysData: ...
    async def remove_key_data(self, user_id: str) -> None: ...
    async def is_data_exist(self, user_id: str) -> bool: ...
