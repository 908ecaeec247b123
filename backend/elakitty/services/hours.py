# backend/elakitty/services/hours.py
"""Opening hours, stored per weekday as "HH:MM-HH:MM" or "closed"."""
import re

from elakitty.errors import ValidationError

DAYS = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")
CLOSED = "closed"
DEFAULT_OPEN, DEFAULT_CLOSE = "09:00", "17:00"

_SPAN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)-([01]\d|2[0-3]):([0-5]\d)$")


def format_day(open_at: str | None = None, close_at: str | None = None, closed: bool = False) -> str:
    if closed:
        return CLOSED
    value = f"{open_at or DEFAULT_OPEN}-{close_at or DEFAULT_CLOSE}"
    if not _SPAN.match(value):
        raise ValidationError(f"invalid opening hours: {value}")
    return value


def validate_opening_hours(raw: dict | None) -> dict | None:
    """Strict check of a submitted week; unknown days or malformed spans are rejected."""
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ValidationError("opening hours must be an object keyed by weekday")
    out = {}
    for day, value in raw.items():
        key = str(day).lower()
        if key not in DAYS:
            raise ValidationError(f"unknown weekday: {day}")
        if isinstance(value, dict):
            # {"open": "09:00", "close": "17:00", "closed": false} as edited in the dashboard
            value = format_day(value.get("open"), value.get("close"), bool(value.get("closed")))
        value = str(value).strip().lower()
        if value != CLOSED and not _SPAN.match(value):
            raise ValidationError(f"invalid opening hours for {key}: {value}")
        out[key] = value
    return {d: out[d] for d in DAYS if d in out}


def parse_opening_hours(raw) -> dict[str, dict]:
    """Lenient read of a stored week into {"open", "close", "closed"} per day.

    Missing or malformed days fall back to the default 09:00-17:00 opening.
    """
    week = {}
    for day in DAYS:
        value = raw.get(day) if isinstance(raw, dict) else None
        if value == CLOSED:
            week[day] = {"open": DEFAULT_OPEN, "close": DEFAULT_CLOSE, "closed": True}
        elif isinstance(value, str) and _SPAN.match(value):
            open_at, close_at = value.split("-")
            week[day] = {"open": open_at, "close": close_at, "closed": False}
        else:
            week[day] = {"open": DEFAULT_OPEN, "close": DEFAULT_CLOSE, "closed": False}
    return week
