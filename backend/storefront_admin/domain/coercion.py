"""Value coercion shared by the Firestore and ERPNext row transformers.

Everything here is total: malformed input degrades to a default instead of
raising, so a single bad document never breaks a table page.
"""

import logging
from datetime import date, datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _as_utc(value: datetime) -> datetime:
    # Rebuild as a plain datetime so SDK subclasses (DatetimeWithNanoseconds) never leak.
    plain = datetime(
        value.year, value.month, value.day,
        value.hour, value.minute, value.second, value.microsecond,
        tzinfo=value.tzinfo,
    )
    if plain.tzinfo is None:
        return plain.replace(tzinfo=timezone.utc)
    return plain.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> datetime | None:
    """Convert any backend timestamp representation to an aware UTC datetime.

    Handles datetimes (including Firestore's ``DatetimeWithNanoseconds``),
    objects exposing ``to_datetime()`` / ``ToDatetime()`` (protobuf
    Timestamps), ``{"seconds": ..., "nanoseconds": ...}`` maps as produced by
    JSON exports, epoch numbers (seconds or milliseconds), ``date`` objects and
    ISO-8601 / ERPNext ``"YYYY-MM-DD HH:MM:SS"`` strings. Returns None when the
    value cannot be interpreted.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)

    for converter in ("to_datetime", "ToDatetime"):
        method = getattr(value, converter, None)
        if callable(method):
            try:
                converted = method()
            except (TypeError, ValueError, OverflowError):
                return None
            return _as_utc(converted) if isinstance(converted, datetime) else None

    if isinstance(value, dict):
        seconds = value.get("seconds", value.get("_seconds"))
        if isinstance(seconds, (int, float)) and not isinstance(seconds, bool):
            nanos = value.get("nanoseconds", value.get("_nanoseconds", 0)) or 0
            return parse_timestamp(seconds + nanos / 1e9)
        return None

    if isinstance(value, (int, float)):
        seconds = value / 1000 if value > 1e11 else value
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return _as_utc(datetime.fromisoformat(text))
        except ValueError:
            return None

    return None


def to_iso_timestamp(value: Any, *, field_name: str = "timestamp") -> str:
    """Normalise a required timestamp, substituting the current time on failure."""
    parsed = parse_timestamp(value)
    if parsed is not None:
        return parsed.isoformat()
    if value is None or value == "":
        logger.debug("Missing %s — substituting current time", field_name)
    else:
        logger.warning("Malformed %s %r — substituting current time", field_name, value)
    return now_iso()


def to_optional_iso_timestamp(value: Any, *, field_name: str = "timestamp") -> str | None:
    """Normalise an optional timestamp; missing or malformed values become None."""
    parsed = parse_timestamp(value)
    if parsed is not None:
        return parsed.isoformat()
    if value not in (None, ""):
        logger.warning("Malformed %s %r — leaving it empty", field_name, value)
    return None


def as_text(value: Any, default: str = "") -> str:
    if value is None:
        return default
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    return default


def as_optional_text(value: Any) -> str | None:
    text = as_text(value)
    return text or None


def as_number(value: Any, default: float = 0) -> float:
    """Pass numbers through unchanged; numeric strings are parsed, the rest defaults."""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str):
        try:
            return float(value.replace(",", "")) if value.strip() else default
        except ValueError:
            return default
    return default


def as_optional_number(value: Any) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    number = as_number(value, default=float("nan"))
    return None if number != number else number


def as_bool(value: Any, default: bool = False) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        return value.strip().lower() in {"1", "true", "yes", "on"}
    return default


def as_list(value: Any) -> list[Any]:
    """Array-shaped values become a list; anything else becomes []."""
    if isinstance(value, (list, tuple)):
        return list(value)
    return []


def as_str_list(value: Any) -> list[str]:
    return [item for item in (as_text(v).strip() for v in as_list(value)) if item]


def as_mapping(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}
