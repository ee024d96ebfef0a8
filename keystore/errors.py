from __future__ import annotations


class KeyStoreError(Exception):
    """Base class for failures raised by the key store itself."""


class ConfigurationError(KeyStoreError):
    pass


class StoreNotConnectedError(KeyStoreError):
    def __init__(self, message: str = "Key store is not connected; call connect() first") -> None:
        super().__init__(message)


class NotAcknowledgedError(KeyStoreError):
    pass


class NoMatchError(KeyStoreError):
    """
    An update or delete matched zero documents.

    For updates this covers both a missing user and an update whose values were
    already stored; the two are not told apart.
    """

    def __init__(self, message: str, user_id: str) -> None:
        super().__init__(message)
        self.user_id = user_id


class KeyDataNotFoundError(KeyStoreError):
    def __init__(self, user_id: str) -> None:
        super().__init__(f"No key data stored for user {user_id!r}")
        self.user_id = user_id
