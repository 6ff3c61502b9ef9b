"""
Date normalization for records coming from the document store.

Lease and payment dates arrive in several shapes: native dates, ISO strings,
epoch seconds, or the store's timestamp objects (either as objects or as the
``{"seconds": ..., "nanoseconds": ...}`` mapping they serialize to).
``normalize_date`` turns every accepted shape into a ``datetime.date`` so the
engine only ever compares calendar dates.
"""
from datetime import date, datetime, timezone
from typing import Any
from zoneinfo import ZoneInfo

from rentledger.core.config import settings
from rentledger.core.errors import InvalidDateValue


def _report_tz() -> ZoneInfo:
    return ZoneInfo(settings.report_timezone)


def _from_epoch(seconds: float) -> date:
    return datetime.fromtimestamp(seconds, tz=timezone.utc).astimezone(_report_tz()).date()


def _from_datetime(dt: datetime) -> date:
    if dt.tzinfo is not None:
        dt = dt.astimezone(_report_tz())
    return dt.date()


def normalize_date(value: Any) -> date | None:
    """Convert any accepted date representation to ``date``. ``None`` passes through."""
    if value is None or value == "":
        return None
    # datetime is a subclass of date, so check it first
    if isinstance(value, datetime):
        return _from_datetime(value)
    if isinstance(value, date):
        return value
    if isinstance(value, bool):
        raise InvalidDateValue(f"Unsupported date value: {value!r}")
    if isinstance(value, (int, float)):
        return _from_epoch(value)
    if isinstance(value, str):
        return _from_string(value)
    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            return _from_epoch(seconds + nanos / 1e9)
        raise InvalidDateValue(f"Timestamp mapping without seconds: {value!r}")

    # Timestamp objects from the store's client libraries
    for attr in ("to_datetime", "ToDatetime", "to_pydatetime"):
        converter = getattr(value, attr, None)
        if callable(converter):
            return _from_datetime(converter())

    raise InvalidDateValue(f"Unsupported date type: {type(value).__name__}")


def _from_string(text: str) -> date:
    text = text.strip()
    try:
        if len(text) == 10:
            return date.fromisoformat(text)
        return _from_datetime(datetime.fromisoformat(text.replace("Z", "+00:00")))
    except ValueError:
        raise InvalidDateValue(f"Date string is not ISO-8601: {text!r}") from None
