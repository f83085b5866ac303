"""Calendar helpers for the dashboard calculations.

All day arithmetic happens on UTC calendar dates (time of day stripped).
"""
from __future__ import annotations

import logging
import math
from datetime import date, datetime, timezone
from typing import Any

logger = logging.getLogger(__name__)

SECONDS_PER_DAY = 60 * 60 * 24


def today_utc() -> date:
    return datetime.now(timezone.utc).date()


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_utc_date(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return as_utc(value).date()
    return value


def parse_datetime(value: Any) -> datetime | None:
    """Parse a timestamp; malformed input degrades to None with a warning."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, date):
        return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return as_utc(datetime.fromisoformat(text))
        except ValueError:
            logger.warning("Ignoring malformed timestamp %r", value)
            return None
    logger.warning("Ignoring unsupported timestamp value %r", value)
    return None


def parse_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return to_utc_date(value)
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if len(text) > 10:
            parsed = parse_datetime(text)
            return parsed.date() if parsed else None
        try:
            return date.fromisoformat(text)
        except ValueError:
            logger.warning("Ignoring malformed date %r", value)
            return None
    logger.warning("Ignoring unsupported date value %r", value)
    return None


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Whole days from ``start`` to ``end``; a partial day counts as one more."""
    if isinstance(start, datetime) or isinstance(end, datetime):
        start_dt = parse_datetime(start)
        end_dt = parse_datetime(end)
        return math.ceil((end_dt - start_dt).total_seconds() / SECONDS_PER_DAY)
    return (end - start).days


def round_half_up(value: float) -> int:
    # Math.round semantics: .5 always rounds towards +infinity.
    return int(math.floor(value + 0.5))


def format_br_date(value: date | None) -> str:
    if value is None:
        return "N/A"
    return value.strftime("%d/%m/%Y")


__all__ = [
    "today_utc",
    "as_utc",
    "to_utc_date",
    "parse_datetime",
    "parse_date",
    "days_between",
    "round_half_up",
    "format_br_date",
]
