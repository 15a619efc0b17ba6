# -*- coding: utf-8 -*-
"""Habits — per-user habit list storage."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from .. import blobstore
from ..utils import drop_nulls, js_weekday, new_id, utc_now_iso
from .models import Habit, HabitCreateRequest, HabitUpdateRequest

ENTITY = "habits"
_REQUIRED = ("name", "frequency", "reminder_enabled", "category", "is_active")


def _load(user_id: str) -> List[Habit]:
    return blobstore.load_models(user_id, ENTITY, Habit)


def _save(user_id: str, habits: List[Habit]) -> None:
    blobstore.save_models(user_id, ENTITY, habits, Habit)


def get_all(user_id: str) -> List[Habit]:
    return _load(user_id)


def get_active(user_id: str) -> List[Habit]:
    return [h for h in _load(user_id) if h.is_active]


def get_by_id(user_id: str, habit_id: str) -> Optional[Habit]:
    for h in _load(user_id):
        if h.id == habit_id:
            return h
    return None


def get_by_category(user_id: str, category: str) -> List[Habit]:
    return [h for h in _load(user_id) if h.category == category and h.is_active]


def create(user_id: str, req: HabitCreateRequest) -> Habit:
    habits = _load(user_id)
    habit = Habit(
        id=new_id("habit"),
        user_id=user_id,
        created_date=utc_now_iso(),
        is_active=True,
        **req.model_dump(),
    )
    habits.append(habit)
    _save(user_id, habits)
    return habit


def update(user_id: str, habit_id: str, req: HabitUpdateRequest) -> Optional[Habit]:
    habits = _load(user_id)
    for idx, h in enumerate(habits):
        if h.id != habit_id:
            continue
        patch = drop_nulls(req.model_dump(exclude_unset=True), _REQUIRED)
        updated = Habit.model_validate({**h.model_dump(), **patch, "id": h.id, "user_id": h.user_id})
        habits[idx] = updated
        _save(user_id, habits)
        return updated
    return None


def delete(user_id: str, habit_id: str) -> bool:
    """Soft delete: the habit stays in storage with ``is_active=False``."""
    updated = update(user_id, habit_id, HabitUpdateRequest(is_active=False))
    return updated is not None


def hard_delete(user_id: str, habit_id: str) -> bool:
    habits = _load(user_id)
    kept = [h for h in habits if h.id != habit_id]
    if len(kept) == len(habits):
        return False
    _save(user_id, kept)
    return True


def is_scheduled_on(habit: Habit, weekday: int) -> bool:
    """``weekday`` uses Sunday=0 .. Saturday=6."""
    if not habit.is_active:
        return False
    if habit.frequency == "daily":
        return True
    if habit.frequency == "weekly" and habit.specific_days:
        return weekday in habit.specific_days
    return False


def get_scheduled_for_day(user_id: str, weekday: int) -> List[Habit]:
    return [h for h in _load(user_id) if is_scheduled_on(h, weekday)]


def get_scheduled_for_today(user_id: str, today: Optional[date] = None) -> List[Habit]:
    return get_scheduled_for_day(user_id, js_weekday(today or date.today()))


def search(user_id: str, query: str) -> List[Habit]:
    q = (query or "").strip().lower()
    if not q:
        return get_active(user_id)
    out: List[Habit] = []
    for h in _load(user_id):
        if not h.is_active:
            continue
        if q in h.name.lower() or (h.description and q in h.description.lower()):
            out.append(h)
    return out
