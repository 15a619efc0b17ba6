# -*- coding: utf-8 -*-
"""Workouts — API endpoints."""

from __future__ import annotations

from datetime import date as date_cls
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..health import user_stats
from ..utils import parse_day
from . import routines as routine_store
from . import storage as workout_store
from .models import (
    CalendarDay,
    DuplicateRoutineRequest,
    ExerciseProgress,
    WorkoutCreateRequest,
    WorkoutLog,
    WorkoutRoutine,
    WorkoutRoutineCreateRequest,
    WorkoutRoutineUpdateRequest,
    WorkoutStats,
    WorkoutUpdateRequest,
)

router = APIRouter(prefix="/api/workouts", tags=["Workouts"])
routines_router = APIRouter(prefix="/api/workout-routines", tags=["Workout routines"])


def _day_or_400(value: str) -> date_cls:
    day = parse_day(value)
    if day is None:
        raise HTTPException(status_code=400, detail=f"Invalid date: {value}")
    return day


@router.get("", response_model=List[WorkoutLog], summary="List workouts, newest first")
def list_workouts(user: dict = Depends(get_current_user)):
    return workout_store.get_all(user["id"])


@router.post("", response_model=WorkoutLog, status_code=201, summary="Log a workout")
def create_workout(request: WorkoutCreateRequest, user: dict = Depends(get_current_user)):
    if request.date:
        _day_or_400(request.date)
    workout = workout_store.create(user["id"], request)
    user_stats.increment_workouts(user["id"])
    return workout


@router.get("/history", response_model=List[WorkoutLog])
def history(
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
    routine_id: Optional[str] = Query(default=None),
    user: dict = Depends(get_current_user),
):
    lo = _day_or_400(start) if start else None
    hi = _day_or_400(end) if end else None
    return workout_store.search(user["id"], start=lo, end=hi, routine_id=routine_id)


@router.get("/stats", response_model=WorkoutStats)
def stats(user: dict = Depends(get_current_user)):
    return workout_store.get_stats(user["id"])


@router.get("/progress", response_model=ExerciseProgress)
def progress(exercise_id: str = Query(..., min_length=1), user: dict = Depends(get_current_user)):
    return workout_store.get_exercise_progress(user["id"], exercise_id)


@router.get("/calendar", response_model=List[CalendarDay])
def calendar_days(
    month: int = Query(..., ge=1, le=12),
    year: int = Query(..., ge=1970, le=9999),
    user: dict = Depends(get_current_user),
):
    return workout_store.get_calendar_days(user["id"], month, year)


@router.get("/{workout_id}", response_model=WorkoutLog)
def get_workout(workout_id: str, user: dict = Depends(get_current_user)):
    workout = workout_store.get_by_id(user["id"], workout_id)
    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.patch("/{workout_id}", response_model=WorkoutLog)
def update_workout(workout_id: str, request: WorkoutUpdateRequest, user: dict = Depends(get_current_user)):
    workout = workout_store.update(user["id"], workout_id, request)
    if workout is None:
        raise HTTPException(status_code=404, detail="Workout not found")
    return workout


@router.delete("/{workout_id}")
def delete_workout(workout_id: str, user: dict = Depends(get_current_user)):
    if not workout_store.delete(user["id"], workout_id):
        raise HTTPException(status_code=404, detail="Workout not found")
    return {"ok": True}


# ---- Workout routines ----


@routines_router.get("", response_model=List[WorkoutRoutine], summary="List workout routines")
def list_routines(
    templates: Optional[bool] = Query(default=None, description="true: templates only, false: own routines only"),
    user: dict = Depends(get_current_user),
):
    if templates is None:
        return routine_store.get_all(user["id"])
    if templates:
        return routine_store.get_templates(user["id"])
    return routine_store.get_user_routines(user["id"])


@routines_router.post("", response_model=WorkoutRoutine, status_code=201, summary="Create a workout routine")
def create_routine(request: WorkoutRoutineCreateRequest, user: dict = Depends(get_current_user)):
    return routine_store.create(user["id"], request)


@routines_router.get("/{routine_id}", response_model=WorkoutRoutine)
def get_routine(routine_id: str, user: dict = Depends(get_current_user)):
    routine = routine_store.get_by_id(user["id"], routine_id)
    if routine is None:
        raise HTTPException(status_code=404, detail="Workout routine not found")
    return routine


@routines_router.patch("/{routine_id}", response_model=WorkoutRoutine)
def update_routine(routine_id: str, request: WorkoutRoutineUpdateRequest, user: dict = Depends(get_current_user)):
    try:
        routine = routine_store.update(user["id"], routine_id, request)
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    if routine is None:
        raise HTTPException(status_code=404, detail="Workout routine not found")
    return routine


@routines_router.delete("/{routine_id}")
def delete_routine(routine_id: str, user: dict = Depends(get_current_user)):
    try:
        deleted = routine_store.delete(user["id"], routine_id)
    except PermissionError as exc:
        raise HTTPException(status_code=403, detail=str(exc)) from exc
    if not deleted:
        raise HTTPException(status_code=404, detail="Workout routine not found")
    return {"ok": True}


@routines_router.post("/{routine_id}/duplicate", response_model=WorkoutRoutine, status_code=201)
def duplicate_routine(
    routine_id: str, request: Optional[DuplicateRoutineRequest] = None, user: dict = Depends(get_current_user)
):
    copy = routine_store.duplicate(user["id"], routine_id, request.name if request else None)
    if copy is None:
        raise HTTPException(status_code=404, detail="Workout routine not found")
    return copy
