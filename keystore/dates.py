from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Mapping

from pydantic import BaseModel

_ISO_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"


class DateWithOffset(BaseModel):
    """
    Stored as a sub-document: { "date": <BSON date>, "offset": <minutes> }.

    ``offset`` follows JavaScript's ``Date.getTimezoneOffset()``: UTC minus local
    time, in minutes (UTC+02:00 -> -120).
    """

    date: datetime
    offset: int

    @classmethod
    def from_mongo_doc(cls, doc: Mapping[str, Any]) -> "DateWithOffset":
        return cls.model_validate(doc)

    def to_mongo_doc(self) -> dict[str, Any]:
        return {"date": self.date, "offset": self.offset}


def _as_utc(value: datetime) -> datetime:
    # The driver hands back naive datetimes that are already UTC.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _truncate_to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def get_current_date(now: datetime | None = None) -> DateWithOffset:
    # Aware datetimes keep their own zone; otherwise the process-local zone applies.
    local = now if now is not None and now.tzinfo is not None else (now or datetime.now()).astimezone()
    utcoffset = local.utcoffset() or timedelta(0)
    return DateWithOffset(
        date=_truncate_to_millis(local.astimezone(timezone.utc)),
        offset=-round(utcoffset.total_seconds() / 60),
    )


def date_to_string(value: DateWithOffset) -> str:
    """
    Render the stored pair as a JavaScript-style ISO string.

    effective = date - offset * 60000 ms, printed as YYYY-MM-DDTHH:MM:SS.mmmZ.
    """
    effective = _as_utc(value.date) - timedelta(minutes=value.offset)
    return f"{effective.year:04d}-" + effective.strftime("%m-%dT%H:%M:%S") + f".{effective.microsecond // 1000:03d}Z"


def string_to_date(value: str, offset: int) -> DateWithOffset:
    effective = datetime.strptime(value, _ISO_FORMAT).replace(tzinfo=timezone.utc)
    return DateWithOffset(date=effective + timedelta(minutes=offset), offset=offset)
