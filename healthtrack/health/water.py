# -*- coding: utf-8 -*-
"""Health — daily water intake (ml), one record per day."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from .. import blobstore
from ..utils import DayLike, day_str
from .models import HydrationStatus, WaterIntake

ENTITY = "water_intake"
HYDRATION_GOAL_ML = 2000


def _load(user_id: str) -> List[WaterIntake]:
    return blobstore.load_models(user_id, ENTITY, WaterIntake)


def _save(user_id: str, entries: List[WaterIntake]) -> None:
    blobstore.save_models(user_id, ENTITY, entries, WaterIntake)


def get_amount(user_id: str, day: Optional[DayLike] = None) -> int:
    target = day_str(day or date.today())
    for entry in _load(user_id):
        if entry.date == target:
            return entry.amount_ml
    return 0


def set_amount(user_id: str, amount_ml: int, day: Optional[DayLike] = None) -> WaterIntake:
    target = day_str(day or date.today())
    entries = [e for e in _load(user_id) if e.date != target]
    entry = WaterIntake(date=target, amount_ml=max(0, amount_ml))
    entries.append(entry)
    _save(user_id, entries)
    return entry


def add(user_id: str, amount_ml: int, day: Optional[DayLike] = None) -> WaterIntake:
    return set_amount(user_id, get_amount(user_id, day) + amount_ml, day)


def get_by_date_range(user_id: str, start: DayLike, end: DayLike) -> List[WaterIntake]:
    lo, hi = day_str(start), day_str(end)
    return sorted((e for e in _load(user_id) if lo <= e.date <= hi), key=lambda e: e.date)


def get_status(user_id: str, day: Optional[DayLike] = None) -> HydrationStatus:
    target = day_str(day or date.today())
    current = get_amount(user_id, target)
    return HydrationStatus(
        date=target,
        current=current,
        goal=HYDRATION_GOAL_ML,
        percentage=round(min(100.0, current / HYDRATION_GOAL_ML * 100), 1),
    )
