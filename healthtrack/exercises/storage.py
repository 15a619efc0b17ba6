# -*- coding: utf-8 -*-
"""Exercises — built-in catalog plus per-user custom exercises."""

from __future__ import annotations

from typing import List, Optional

from .. import blobstore
from ..utils import drop_nulls, new_id, utc_now_iso
from . import catalog
from .models import Exercise, ExerciseCreateRequest, ExerciseFilter, ExerciseUpdateRequest

ENTITY = "exercises"
_REQUIRED = ("name", "description", "category", "equipment", "difficulty", "calories_per_minute")


def _load(user_id: str) -> List[Exercise]:
    return blobstore.load_models(user_id, ENTITY, Exercise)


def _save(user_id: str, exercises: List[Exercise]) -> None:
    blobstore.save_models(user_id, ENTITY, exercises, Exercise)


def get_all(user_id: str) -> List[Exercise]:
    """Built-in exercises first, then the user's own."""
    return catalog.get_all() + _load(user_id)


def get_by_id(user_id: str, exercise_id: str) -> Optional[Exercise]:
    builtin = catalog.get_by_id(exercise_id)
    if builtin is not None:
        return builtin
    for exercise in _load(user_id):
        if exercise.id == exercise_id:
            return exercise
    return None


def get_custom(user_id: str) -> List[Exercise]:
    return _load(user_id)


def get_predefined() -> List[Exercise]:
    return catalog.get_all()


def get_by_category(user_id: str, category: str) -> List[Exercise]:
    return [e for e in get_all(user_id) if e.category == category]


def get_by_muscle_group(user_id: str, muscle_group: str) -> List[Exercise]:
    wanted = muscle_group.lower()
    return [e for e in get_all(user_id) if (e.muscle_group or "").lower() == wanted]


def search(user_id: str, filters: ExerciseFilter) -> List[Exercise]:
    exercises = get_all(user_id)
    if filters.category:
        exercises = [e for e in exercises if e.category == filters.category]
    if filters.difficulty:
        exercises = [e for e in exercises if e.difficulty == filters.difficulty]
    if filters.muscle_group:
        wanted = filters.muscle_group.lower()
        exercises = [e for e in exercises if (e.muscle_group or "").lower() == wanted]
    if filters.equipment:
        wanted = filters.equipment.lower()
        exercises = [e for e in exercises if any(eq.lower() == wanted for eq in e.equipment)]
    if filters.search_term:
        term = filters.search_term.lower()
        exercises = [
            e
            for e in exercises
            if term in e.name.lower() or term in e.description.lower() or term in (e.muscle_group or "").lower()
        ]
    return exercises


def create(user_id: str, req: ExerciseCreateRequest) -> Exercise:
    exercises = _load(user_id)
    exercise = Exercise(
        id=new_id("ex"),
        is_custom=True,
        user_id=user_id,
        created_at=utc_now_iso(),
        **req.model_dump(),
    )
    exercises.append(exercise)
    _save(user_id, exercises)
    return exercise


def update(user_id: str, exercise_id: str, req: ExerciseUpdateRequest) -> Optional[Exercise]:
    """Raises ``PermissionError`` for built-in exercises."""
    if catalog.get_by_id(exercise_id) is not None:
        raise PermissionError("Cannot update predefined exercises")
    exercises = _load(user_id)
    for idx, exercise in enumerate(exercises):
        if exercise.id != exercise_id:
            continue
        patch = drop_nulls(req.model_dump(exclude_unset=True), _REQUIRED)
        updated = exercise.model_copy(update=patch)
        exercises[idx] = updated
        _save(user_id, exercises)
        return updated
    return None


def delete(user_id: str, exercise_id: str) -> bool:
    """Raises ``PermissionError`` for built-in exercises."""
    if catalog.get_by_id(exercise_id) is not None:
        raise PermissionError("Cannot delete predefined exercises")
    exercises = _load(user_id)
    kept = [e for e in exercises if e.id != exercise_id]
    if len(kept) == len(exercises):
        return False
    _save(user_id, kept)
    return True


def get_all_equipment(user_id: str) -> List[str]:
    return sorted({eq for e in get_all(user_id) for eq in e.equipment})


def get_all_muscle_groups(user_id: str) -> List[str]:
    return sorted({e.muscle_group for e in get_all(user_id) if e.muscle_group})
