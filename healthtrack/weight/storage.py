# -*- coding: utf-8 -*-
"""Weight — per-user weight log storage, averages and trend prediction."""

from __future__ import annotations

import math
from datetime import date, timedelta
from typing import List, Optional

from .. import blobstore
from ..profile import storage as profile_store
from ..utils import DayLike, day_str, new_id, utc_now_iso
from .models import WeightLog, WeightLogCreateRequest, WeightLogUpdateRequest

ENTITY = "weight_logs"

PREDICTION_WINDOW_DAYS = 30
MIN_PREDICTION_POINTS = 7


def _load(user_id: str) -> List[WeightLog]:
    return blobstore.load_models(user_id, ENTITY, WeightLog)


def _save(user_id: str, logs: List[WeightLog]) -> None:
    blobstore.save_models(user_id, ENTITY, logs, WeightLog)


def calculate_bmi(user_id: str, weight: float) -> float:
    """BMI from the profile height; 0 without a profile."""
    profile = profile_store.get(user_id)
    if profile is None or not profile.height:
        return 0.0
    meters = profile.height / 100
    return round(weight / (meters * meters), 1)


def create(user_id: str, req: WeightLogCreateRequest) -> WeightLog:
    logs = _load(user_id)
    entry = WeightLog(
        id=new_id("weight"),
        user_id=user_id,
        date=day_str(req.date or date.today()),
        weight=req.weight,
        bmi=calculate_bmi(user_id, req.weight),
        body_fat=req.body_fat,
        notes=req.notes,
        created_at=utc_now_iso(),
    )
    logs.append(entry)
    _save(user_id, logs)
    return entry


def get_all(user_id: str) -> List[WeightLog]:
    return _load(user_id)


def get_by_id(user_id: str, log_id: str) -> Optional[WeightLog]:
    for entry in _load(user_id):
        if entry.id == log_id:
            return entry
    return None


def get_by_date_range(user_id: str, start: DayLike, end: DayLike) -> List[WeightLog]:
    lo, hi = day_str(start), day_str(end)
    return [e for e in _load(user_id) if lo <= e.date <= hi]


def get_latest(user_id: str) -> Optional[WeightLog]:
    logs = _load(user_id)
    if not logs:
        return None
    return max(logs, key=lambda e: (e.date, e.created_at))


def get_last_n_days(user_id: str, days: int, today: Optional[date] = None) -> List[WeightLog]:
    """Logs of the last ``days`` days (today included), oldest first."""
    end = today or date.today()
    logs = get_by_date_range(user_id, end - timedelta(days=days), end)
    return sorted(logs, key=lambda e: (e.date, e.created_at))


def update(user_id: str, log_id: str, req: WeightLogUpdateRequest) -> Optional[WeightLog]:
    logs = _load(user_id)
    for idx, entry in enumerate(logs):
        if entry.id != log_id:
            continue
        patch = req.model_dump(exclude_unset=True)
        if patch.get("weight") is not None:
            patch["bmi"] = calculate_bmi(user_id, patch["weight"])
        else:
            patch.pop("weight", None)
        updated = entry.model_copy(update=patch)
        logs[idx] = updated
        _save(user_id, logs)
        return updated
    return None


def delete(user_id: str, log_id: str) -> bool:
    logs = _load(user_id)
    kept = [e for e in logs if e.id != log_id]
    if len(kept) == len(logs):
        return False
    _save(user_id, kept)
    return True


def delete_all(user_id: str) -> None:
    blobstore.remove_item(user_id, ENTITY)


def get_average_weight(user_id: str, start: DayLike, end: DayLike) -> float:
    logs = get_by_date_range(user_id, start, end)
    if not logs:
        return 0.0
    return round(sum(e.weight for e in logs) / len(logs), 1)


def get_weight_change(user_id: str, start: DayLike, end: DayLike) -> float:
    """Last minus first weight in the range; 0 with fewer than two logs."""
    logs = sorted(get_by_date_range(user_id, start, end), key=lambda e: (e.date, e.created_at))
    if len(logs) < 2:
        return 0.0
    return round(logs[-1].weight - logs[0].weight, 1)


def predict_weight(user_id: str, days_ahead: int, today: Optional[date] = None) -> Optional[float]:
    """Least-squares trend over the last 30 days, indexed by log position."""
    logs = get_last_n_days(user_id, PREDICTION_WINDOW_DAYS, today=today)
    n = len(logs)
    if n < MIN_PREDICTION_POINTS:
        return None
    xs = list(range(n))
    ys = [e.weight for e in logs]
    sum_x = sum(xs)
    sum_y = sum(ys)
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_x2 = sum(x * x for x in xs)
    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    return round(slope * (n + days_ahead) + intercept, 1)


def get_days_to_goal(user_id: str, goal_weight: float, today: Optional[date] = None) -> Optional[int]:
    """Days until ``goal_weight`` at the last week's pace.

    None with too little data, no movement, or a trend moving away from the goal.
    """
    end = today or date.today()
    if len(get_last_n_days(user_id, PREDICTION_WINDOW_DAYS, today=end)) < MIN_PREDICTION_POINTS:
        return None
    latest = get_latest(user_id)
    if latest is None:
        return None
    if latest.weight == goal_weight:
        return 0
    weekly_change = get_weight_change(user_id, end - timedelta(days=7), end)
    if weekly_change == 0:
        return None
    weeks = (goal_weight - latest.weight) / weekly_change
    if weeks < 0:
        return None
    return math.ceil(weeks * 7)
