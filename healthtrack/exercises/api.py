# -*- coding: utf-8 -*-
"""Exercises — API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from . import storage as exercise_store
from .models import (
    Exercise,
    ExerciseCategory,
    ExerciseCreateRequest,
    ExerciseDifficulty,
    ExerciseFilter,
    ExerciseMetadata,
    ExerciseUpdateRequest,
)

router = APIRouter(prefix="/api/exercises", tags=["Exercises"])


@router.get("", response_model=List[Exercise], summary="Search the exercise catalog")
def list_exercises(
    category: Optional[ExerciseCategory] = Query(default=None),
    difficulty: Optional[ExerciseDifficulty] = Query(default=None),
    muscle_group: Optional[str] = Query(default=None),
    equipment: Optional[str] = Query(default=None),
    q: Optional[str] = Query(default=None, description="Matches name, description or muscle group"),
    user: dict = Depends(get_current_user),
):
    filters = ExerciseFilter(
        category=category, difficulty=difficulty, muscle_group=muscle_group, equipment=equipment, search_term=q
    )
    return exercise_store.search(user["id"], filters)


@router.post("", response_model=Exercise, status_code=201, summary="Create a custom exercise")
def create_exercise(request: ExerciseCreateRequest, user: dict = Depends(get_current_user)):
    return exercise_store.create(user["id"], request)


@router.get("/metadata", response_model=ExerciseMetadata)
def metadata(user: dict = Depends(get_current_user)):
    return ExerciseMetadata(
        equipment=exercise_store.get_all_equipment(user["id"]),
        muscle_groups=exercise_store.get_all_muscle_groups(user["id"]),
    )


@router.get("/{exercise_id}", response_model=Exercise)
def get_exercise(exercise_id: str, user: dict = Depends(get_current_user)):
    exercise = exercise_store.get_by_id(user["id"], exercise_id)
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.patch("/{exercise_id}", response_model=Exercise)
def update_exercise(exercise_id: str, request: ExerciseUpdateRequest, user: dict = Depends(get_current_user)):
    try:
        exercise = exercise_store.update(user["id"], exercise_id, request)
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    if exercise is None:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return exercise


@router.delete("/{exercise_id}")
def delete_exercise(exercise_id: str, user: dict = Depends(get_current_user)):
    try:
        deleted = exercise_store.delete(user["id"], exercise_id)
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    if not deleted:
        raise HTTPException(status_code=404, detail="Exercise not found")
    return {"ok": True}
