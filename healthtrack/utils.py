# -*- coding: utf-8 -*-
"""Shared id and calendar-day helpers."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Optional, Union
from uuid import uuid4

DayLike = Union[str, date, datetime]


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid4().hex}"


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds").replace("+00:00", "Z")


def local_now() -> datetime:
    """Current wall-clock time with the local UTC offset attached."""
    return datetime.now().astimezone()


def date_prefix(iso8601: str) -> str:
    return (iso8601 or "")[:10]


def to_day(value: DayLike) -> date:
    """Normalize a day-ish value to a calendar day (start-of-day semantics)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(date_prefix(str(value)))


def day_str(value: DayLike) -> str:
    return to_day(value).isoformat()


def parse_day(value: Optional[str]) -> Optional[date]:
    if not value:
        return None
    try:
        return to_day(value)
    except ValueError:
        return None


def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if not value:
        return None
    # Handle trailing Z.
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def iter_days(start: date, end: date) -> List[date]:
    if end < start:
        return []
    days: List[date] = []
    cur = start
    while cur <= end:
        days.append(cur)
        cur = cur + timedelta(days=1)
    return days


def js_weekday(day: date) -> int:
    """Weekday number with Sunday=0 .. Saturday=6."""
    return (day.weekday() + 1) % 7


def fmt_number(value: float) -> str:
    """Render 2000.0 as ``2000`` and 72.5 as ``72.5``."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def drop_nulls(patch: Dict[str, Any], keys: Iterable[str]) -> Dict[str, Any]:
    """Remove explicit ``None`` values for fields that cannot be cleared."""
    return {k: v for k, v in patch.items() if not (k in keys and v is None)}
