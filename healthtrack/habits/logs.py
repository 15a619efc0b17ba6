# -*- coding: utf-8 -*-
"""Habits — daily completion log storage.

One log per (habit, calendar day). Writing the same day again updates the
existing record in place and refreshes ``logged_at``.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

from .. import blobstore
from ..utils import DayLike, day_str, local_now, new_id
from .models import HabitLog

ENTITY = "habit_logs"


def _load(user_id: str) -> List[HabitLog]:
    return blobstore.load_models(user_id, ENTITY, HabitLog)


def _save(user_id: str, logs: List[HabitLog]) -> None:
    blobstore.save_models(user_id, ENTITY, logs, HabitLog)


def _newest_first(logs: List[HabitLog]) -> List[HabitLog]:
    return sorted(logs, key=lambda l: l.date, reverse=True)


def get_all(user_id: str) -> List[HabitLog]:
    return _load(user_id)


def get_by_habit_id(user_id: str, habit_id: str) -> List[HabitLog]:
    return _newest_first([l for l in _load(user_id) if l.habit_id == habit_id])


def get_by_habit_and_date(user_id: str, habit_id: str, day: DayLike) -> Optional[HabitLog]:
    target = day_str(day)
    for l in _load(user_id):
        if l.habit_id == habit_id and l.date == target:
            return l
    return None


def get_by_date(user_id: str, day: DayLike) -> List[HabitLog]:
    target = day_str(day)
    return [l for l in _load(user_id) if l.date == target]


def get_by_date_range(user_id: str, start: DayLike, end: DayLike) -> List[HabitLog]:
    lo, hi = day_str(start), day_str(end)
    return [l for l in _load(user_id) if lo <= l.date <= hi]


def log(
    user_id: str,
    habit_id: str,
    day: DayLike,
    completed: bool,
    value: Optional[float] = None,
    notes: Optional[str] = None,
    logged_at: Optional[str] = None,
) -> HabitLog:
    """Create or update the log of ``habit_id`` for ``day``."""
    logs = _load(user_id)
    target = day_str(day)
    stamp = logged_at or local_now().isoformat(timespec="seconds")
    for idx, existing in enumerate(logs):
        if existing.habit_id == habit_id and existing.date == target:
            updated = existing.model_copy(
                update={"completed": completed, "value": value, "notes": notes, "logged_at": stamp}
            )
            logs[idx] = updated
            _save(user_id, logs)
            return updated

    entry = HabitLog(
        id=new_id("log"),
        user_id=user_id,
        habit_id=habit_id,
        date=target,
        completed=completed,
        value=value,
        notes=notes,
        logged_at=stamp,
    )
    logs.append(entry)
    _save(user_id, logs)
    return entry


def delete(user_id: str, log_id: str) -> bool:
    logs = _load(user_id)
    kept = [l for l in logs if l.id != log_id]
    if len(kept) == len(logs):
        return False
    _save(user_id, kept)
    return True


def delete_by_habit_id(user_id: str, habit_id: str) -> int:
    logs = _load(user_id)
    kept = [l for l in logs if l.habit_id != habit_id]
    removed = len(logs) - len(kept)
    if removed:
        _save(user_id, kept)
    return removed


def get_recent(user_id: str, days: int = 7, today: Optional[date] = None) -> List[HabitLog]:
    end = today or date.today()
    start = end - timedelta(days=days)
    return _newest_first(get_by_date_range(user_id, start, end))


def get_completion_count(user_id: str, habit_id: str) -> int:
    return sum(1 for l in _load(user_id) if l.habit_id == habit_id and l.completed)


def get_average_value(user_id: str, habit_id: str) -> Optional[float]:
    values = [
        l.value
        for l in _load(user_id)
        if l.habit_id == habit_id and l.completed and l.value is not None
    ]
    if not values:
        return None
    return sum(values) / len(values)


def was_completed_on_date(user_id: str, habit_id: str, day: DayLike) -> bool:
    entry = get_by_habit_and_date(user_id, habit_id, day)
    return bool(entry and entry.completed)
