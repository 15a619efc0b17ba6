# -*- coding: utf-8 -*-
"""Workouts — per-user workout routines (planned exercise lists) and templates."""

from __future__ import annotations

import math
from typing import List, Optional

from .. import blobstore
from ..exercises import storage as exercise_store
from ..utils import drop_nulls, new_id, utc_now_iso
from .models import RoutineExercise, WorkoutRoutine, WorkoutRoutineCreateRequest, WorkoutRoutineUpdateRequest

ENTITY = "workout_routines"
DEFAULT_SET_SECONDS = 60


def _load(user_id: str) -> List[WorkoutRoutine]:
    return blobstore.load_models(user_id, ENTITY, WorkoutRoutine)


def _save(user_id: str, routines: List[WorkoutRoutine]) -> None:
    blobstore.save_models(user_id, ENTITY, routines, WorkoutRoutine)


def estimate_duration(exercises: List[RoutineExercise]) -> int:
    """Minutes, rounded up: each set takes its duration (60 s by default) plus the rest after it."""
    minutes = 0.0
    for ex in exercises:
        set_minutes = (ex.duration or DEFAULT_SET_SECONDS) / 60
        minutes += (set_minutes + ex.rest_between_sets / 60) * ex.sets
    return math.ceil(minutes)


def estimate_calories(user_id: str, exercises: List[RoutineExercise]) -> int:
    """Catalog calories per minute times set length (1 min without a duration) times sets."""
    total = 0.0
    for ex in exercises:
        exercise = exercise_store.get_by_id(user_id, ex.exercise_id)
        if exercise is None:
            continue
        minutes = ex.duration / 60 if ex.duration else 1
        total += exercise.calories_per_minute * minutes * ex.sets
    return round(total)


def get_all(user_id: str) -> List[WorkoutRoutine]:
    return _load(user_id)


def get_by_id(user_id: str, routine_id: str) -> Optional[WorkoutRoutine]:
    for routine in _load(user_id):
        if routine.id == routine_id:
            return routine
    return None


def get_user_routines(user_id: str) -> List[WorkoutRoutine]:
    return [r for r in _load(user_id) if not r.is_template]


def get_templates(user_id: str) -> List[WorkoutRoutine]:
    return [r for r in _load(user_id) if r.is_template]


def create(user_id: str, req: WorkoutRoutineCreateRequest) -> WorkoutRoutine:
    routines = _load(user_id)
    now = utc_now_iso()
    routine = WorkoutRoutine(
        id=new_id("wroutine"),
        user_id=user_id,
        name=req.name,
        description=req.description,
        exercises=req.exercises,
        estimated_duration=estimate_duration(req.exercises),
        estimated_calories=estimate_calories(user_id, req.exercises),
        is_template=req.is_template,
        created_at=now,
        updated_at=now,
    )
    routines.append(routine)
    _save(user_id, routines)
    return routine


def update(user_id: str, routine_id: str, req: WorkoutRoutineUpdateRequest) -> Optional[WorkoutRoutine]:
    """Raises ``PermissionError`` for templates."""
    routines = _load(user_id)
    for idx, routine in enumerate(routines):
        if routine.id != routine_id:
            continue
        if routine.is_template:
            raise PermissionError("Cannot update template routines")
        patch = drop_nulls(req.model_dump(exclude_unset=True), ("name", "exercises"))
        patch["updated_at"] = utc_now_iso()
        if "exercises" in patch:
            patch["exercises"] = req.exercises
            patch["estimated_duration"] = estimate_duration(req.exercises)
            patch["estimated_calories"] = estimate_calories(user_id, req.exercises)
        updated = routine.model_copy(update=patch)
        routines[idx] = updated
        _save(user_id, routines)
        return updated
    return None


def delete(user_id: str, routine_id: str) -> bool:
    """Raises ``PermissionError`` for templates."""
    routines = _load(user_id)
    target = next((r for r in routines if r.id == routine_id), None)
    if target is None:
        return False
    if target.is_template:
        raise PermissionError("Cannot delete template routines")
    _save(user_id, [r for r in routines if r.id != routine_id])
    return True


def duplicate(user_id: str, routine_id: str, name: Optional[str] = None) -> Optional[WorkoutRoutine]:
    """Copy a routine (templates included) as a regular, editable routine."""
    original = get_by_id(user_id, routine_id)
    if original is None:
        return None
    routines = _load(user_id)
    now = utc_now_iso()
    copy = original.model_copy(
        update={
            "id": new_id("wroutine"),
            "name": name or f"{original.name} (Copie)",
            "is_template": False,
            "created_at": now,
            "updated_at": now,
        }
    )
    routines.append(copy)
    _save(user_id, routines)
    return copy
