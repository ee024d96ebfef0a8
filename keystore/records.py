from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel

from .dates import DateWithOffset, date_to_string


class EncryptedKeysData(BaseModel):
    encrypterName: str
    salt: str
    keysBlob: str
    creationTime: str | None = None
    modifiedTime: str | None = None


class KeyDataDocument(BaseModel):
    """
    Mirrors a document of the ``keys`` collection:
      {
        "userId": "...",
        "encrypterName": "...", "salt": "...", "keysBlob": "...",
        "creationTime": { "date": <date>, "offset": <int> },
        "modifiedTime": { "date": <date>, "offset": <int> }
      }
    """

    userId: str
    encrypterName: str
    salt: str
    keysBlob: str
    creationTime: DateWithOffset
    modifiedTime: DateWithOffset

    @classmethod
    def new(cls, record: EncryptedKeysData, user_id: str, now: DateWithOffset) -> "KeyDataDocument":
        # Caller-supplied timestamps are ignored; both fields share one instant.
        return cls(
            userId=user_id,
            encrypterName=record.encrypterName,
            salt=record.salt,
            keysBlob=record.keysBlob,
            creationTime=now,
            modifiedTime=now,
        )

    @classmethod
    def from_mongo_doc(cls, doc: Mapping[str, Any]) -> "KeyDataDocument":
        return cls.model_validate(doc)

    def to_mongo_doc(self) -> dict[str, Any]:
        return {
            "userId": self.userId,
            "encrypterName": self.encrypterName,
            "salt": self.salt,
            "keysBlob": self.keysBlob,
            "creationTime": self.creationTime.to_mongo_doc(),
            "modifiedTime": self.modifiedTime.to_mongo_doc(),
        }

    def to_record(self) -> EncryptedKeysData:
        return EncryptedKeysData(
            encrypterName=self.encrypterName,
            salt=self.salt,
            keysBlob=self.keysBlob,
            creationTime=date_to_string(self.creationTime),
            modifiedTime=date_to_string(self.modifiedTime),
        )


def update_fields(record: EncryptedKeysData, now: DateWithOffset) -> dict[str, Any]:
    """Fields written by an update; ``creationTime`` is never touched."""
    return {
        "encrypterName": record.encrypterName,
        "salt": record.salt,
        "keysBlob": record.keysBlob,
        "modifiedTime": now.to_mongo_doc(),
    }
