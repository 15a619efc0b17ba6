# -*- coding: utf-8 -*-
"""Daily check-ins (mood, energy, sleep). At most one per calendar day."""

from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, List, Optional

from .. import blobstore
from ..utils import DayLike, day_str, new_id, utc_now_iso
from .models import CheckInAverages, CheckInRequest, DailyCheckIn

ENTITY = "daily_checkins"


def _load(user_id: str) -> List[DailyCheckIn]:
    return blobstore.load_models(user_id, ENTITY, DailyCheckIn)


def _save(user_id: str, items: List[DailyCheckIn]) -> None:
    blobstore.save_models(user_id, ENTITY, items, DailyCheckIn)


def get_all(user_id: str) -> List[DailyCheckIn]:
    return sorted(_load(user_id), key=lambda c: c.date, reverse=True)


def get_by_date(user_id: str, day: DayLike) -> Optional[DailyCheckIn]:
    target = day_str(day)
    for c in _load(user_id):
        if c.date == target:
            return c
    return None


def get_by_date_range(user_id: str, start: DayLike, end: DayLike) -> List[DailyCheckIn]:
    lo, hi = day_str(start), day_str(end)
    return [c for c in get_all(user_id) if lo <= c.date <= hi]


def get_recent(user_id: str, days: int = 7, today: Optional[date] = None) -> List[DailyCheckIn]:
    end = today or date.today()
    return get_by_date_range(user_id, end - timedelta(days=days), end)


def create_or_update(user_id: str, req: CheckInRequest) -> DailyCheckIn:
    items = _load(user_id)
    target = day_str(req.date)
    payload = req.model_dump()
    payload["date"] = target
    for idx, existing in enumerate(items):
        if existing.date == target:
            updated = existing.model_copy(update=payload)
            items[idx] = updated
            _save(user_id, items)
            return updated

    item = DailyCheckIn(id=new_id("checkin"), user_id=user_id, created_at=utc_now_iso(), **payload)
    items.append(item)
    _save(user_id, items)
    return item


def delete(user_id: str, checkin_id: str) -> bool:
    items = _load(user_id)
    kept = [c for c in items if c.id != checkin_id]
    if len(kept) == len(items):
        return False
    _save(user_id, kept)
    return True


def _average(items: List[DailyCheckIn], attr: Callable[[DailyCheckIn], float]) -> Optional[float]:
    if not items:
        return None
    return round(sum(attr(c) for c in items) / len(items), 2)


def get_average_mood(user_id: str, days: int = 7, today: Optional[date] = None) -> Optional[float]:
    return _average(get_recent(user_id, days, today), lambda c: c.mood)


def get_average_energy(user_id: str, days: int = 7, today: Optional[date] = None) -> Optional[float]:
    return _average(get_recent(user_id, days, today), lambda c: c.energy)


def get_average_sleep(user_id: str, days: int = 7, today: Optional[date] = None) -> Optional[float]:
    return _average(get_recent(user_id, days, today), lambda c: c.sleep_hours)


def get_average_sleep_quality(user_id: str, days: int = 7, today: Optional[date] = None) -> Optional[float]:
    return _average(get_recent(user_id, days, today), lambda c: c.sleep_quality)


def has_checked_in_today(user_id: str, today: Optional[date] = None) -> bool:
    return get_by_date(user_id, today or date.today()) is not None


def get_averages(user_id: str, days: int = 7, today: Optional[date] = None) -> CheckInAverages:
    recent = get_recent(user_id, days, today)
    return CheckInAverages(
        days=days,
        mood=_average(recent, lambda c: c.mood),
        energy=_average(recent, lambda c: c.energy),
        sleep_hours=_average(recent, lambda c: c.sleep_hours),
        sleep_quality=_average(recent, lambda c: c.sleep_quality),
        checked_in_today=has_checked_in_today(user_id, today),
    )
