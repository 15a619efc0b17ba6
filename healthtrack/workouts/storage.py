# -*- coding: utf-8 -*-
"""Workouts — per-user workout log storage and statistics."""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from typing import List, Optional

from .. import blobstore
from ..exercises import storage as exercise_store
from ..utils import DayLike, day_str, drop_nulls, iter_days, new_id, to_day, utc_now_iso
from .models import (
    CalendarDay,
    ExerciseProgress,
    PersonalRecords,
    VolumePoint,
    WorkoutCreateRequest,
    WorkoutLog,
    WorkoutStats,
    WorkoutUpdateRequest,
)

ENTITY = "workout_logs"

RECENT_WINDOW_DAYS = 30
RECENT_LIMIT = 10


def _load(user_id: str) -> List[WorkoutLog]:
    return blobstore.load_models(user_id, ENTITY, WorkoutLog)


def _save(user_id: str, logs: List[WorkoutLog]) -> None:
    blobstore.save_models(user_id, ENTITY, logs, WorkoutLog)


def _newest_first(logs: List[WorkoutLog]) -> List[WorkoutLog]:
    return sorted(logs, key=lambda w: (w.date, w.created_at), reverse=True)


def get_all(user_id: str) -> List[WorkoutLog]:
    return _newest_first(_load(user_id))


def get_by_id(user_id: str, workout_id: str) -> Optional[WorkoutLog]:
    for w in _load(user_id):
        if w.id == workout_id:
            return w
    return None


def get_by_date(user_id: str, day: DayLike) -> List[WorkoutLog]:
    target = day_str(day)
    return [w for w in _load(user_id) if w.date == target]


def get_by_date_range(user_id: str, start: DayLike, end: DayLike) -> List[WorkoutLog]:
    lo, hi = day_str(start), day_str(end)
    return _newest_first([w for w in _load(user_id) if lo <= w.date <= hi])


def search(
    user_id: str,
    start: Optional[DayLike] = None,
    end: Optional[DayLike] = None,
    routine_id: Optional[str] = None,
) -> List[WorkoutLog]:
    logs = _load(user_id)
    if start is not None and end is not None:
        lo, hi = day_str(start), day_str(end)
        logs = [w for w in logs if lo <= w.date <= hi]
    if routine_id:
        logs = [w for w in logs if w.routine_id == routine_id]
    return _newest_first(logs)


def create(user_id: str, req: WorkoutCreateRequest) -> WorkoutLog:
    logs = _load(user_id)
    payload = req.model_dump()
    payload["date"] = day_str(req.date or date.today())
    workout = WorkoutLog(id=new_id("workout"), user_id=user_id, created_at=utc_now_iso(), **payload)
    logs.append(workout)
    _save(user_id, logs)
    return workout


def update(user_id: str, workout_id: str, req: WorkoutUpdateRequest) -> Optional[WorkoutLog]:
    logs = _load(user_id)
    for idx, w in enumerate(logs):
        if w.id != workout_id:
            continue
        patch = drop_nulls(req.model_dump(exclude_unset=True), ("exercises", "total_duration", "total_calories"))
        updated = WorkoutLog.model_validate({**w.model_dump(), **patch})
        logs[idx] = updated
        _save(user_id, logs)
        return updated
    return None


def delete(user_id: str, workout_id: str) -> bool:
    logs = _load(user_id)
    kept = [w for w in logs if w.id != workout_id]
    if len(kept) == len(logs):
        return False
    _save(user_id, kept)
    return True


def delete_all(user_id: str) -> None:
    blobstore.remove_item(user_id, ENTITY)


def _streaks(days: List[date], today: date) -> tuple:
    """(current, longest) over distinct workout days.

    The current streak is alive when the newest day is today or yesterday.
    """
    ordered = sorted(set(days))
    if not ordered:
        return 0, 0

    longest = run = 1
    for prev, day in zip(ordered, ordered[1:]):
        run = run + 1 if day - prev == timedelta(days=1) else 1
        longest = max(longest, run)

    current = 0
    if (today - ordered[-1]).days <= 1:
        current = 1
        for prev, day in zip(reversed(ordered[:-1]), reversed(ordered[1:])):
            if day - prev != timedelta(days=1):
                break
            current += 1
    return current, longest


def get_stats(user_id: str, today: Optional[date] = None) -> WorkoutStats:
    today = today or date.today()
    logs = _load(user_id)
    total = len(logs)
    duration = sum(w.total_duration for w in logs)
    calories = sum(w.total_calories for w in logs)
    current, longest = _streaks([to_day(w.date) for w in logs], today)
    recent = get_by_date_range(user_id, today - timedelta(days=RECENT_WINDOW_DAYS), today)[:RECENT_LIMIT]
    by_category = {"cardio": 0, "strength": 0, "flexibility": 0, "sport": 0}
    for w in logs:
        for entry in w.exercises:
            exercise = exercise_store.get_by_id(user_id, entry.exercise_id)
            if exercise is not None:
                by_category[exercise.category] += 1
    return WorkoutStats(
        total_workouts=total,
        total_duration=duration,
        total_calories=calories,
        current_streak=current,
        longest_streak=longest,
        average_workout_duration=round(duration / total) if total else 0,
        average_calories_per_workout=round(calories / total) if total else 0,
        workouts_by_category=by_category,
        recent_workouts=recent,
    )


def _catalog_name(user_id: str, exercise_id: str) -> str:
    exercise = exercise_store.get_by_id(user_id, exercise_id)
    return exercise.name if exercise is not None else "Unknown Exercise"


def get_exercise_progress(user_id: str, exercise_id: str) -> ExerciseProgress:
    """Personal records and per-workout volume (reps, or 1, times weight) for one exercise."""
    records = PersonalRecords()
    volume: List[VolumePoint] = []
    name = None
    times = 0
    last: Optional[str] = None

    for w in sorted(_load(user_id), key=lambda w: (w.date, w.created_at)):
        entry = next((e for e in w.exercises if e.exercise_id == exercise_id), None)
        if entry is None:
            continue
        times += 1
        last = w.date
        name = entry.exercise_name or name
        daily = 0.0
        for s in entry.sets:
            if s.weight and s.weight > (records.max_weight or 0):
                records.max_weight = s.weight
                records.date = w.date
            if s.reps and s.reps > (records.max_reps or 0):
                records.max_reps = s.reps
                records.date = w.date
            if s.duration and s.duration > (records.max_duration or 0):
                records.max_duration = s.duration
                records.date = w.date
            daily += (s.reps or 1) * (s.weight or 0)
        if daily > 0:
            volume.append(VolumePoint(date=w.date, total_volume=daily))

    return ExerciseProgress(
        exercise_id=exercise_id,
        exercise_name=name or _catalog_name(user_id, exercise_id),
        personal_records=records,
        volume_history=volume,
        last_performed=last,
        times_performed=times,
    )


def get_calendar_days(user_id: str, month: int, year: int) -> List[CalendarDay]:
    """One entry per day of ``month`` (1-12) in ``year``."""
    last_day = calendar.monthrange(year, month)[1]
    logs = _load(user_id)
    out: List[CalendarDay] = []
    for day in iter_days(date(year, month, 1), date(year, month, last_day)):
        key = day.isoformat()
        day_logs = [w for w in logs if w.date == key]
        out.append(
            CalendarDay(
                date=key,
                has_workout=bool(day_logs),
                total_calories=sum(w.total_calories for w in day_logs),
                total_duration=sum(w.total_duration for w in day_logs),
            )
        )
    return out
