# -*- coding: utf-8 -*-
"""Habits — API endpoints (habits, logs, routines, daily check-ins)."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from ..achievements.models import Achievement
from ..achievements.service import check_and_unlock
from ..auth.security import get_current_user
from ..utils import parse_day
from . import checkins as checkin_store
from . import logs as log_store
from . import routines as routine_store
from . import stats as habit_stats
from . import storage as habit_store
from .models import (
    CheckInAverages,
    CheckInRequest,
    DailyCheckIn,
    Habit,
    HabitCreateRequest,
    HabitLog,
    HabitLogRequest,
    HabitStatsResponse,
    HabitUpdateRequest,
    Routine,
    RoutineCreateRequest,
    RoutineUpdateRequest,
    RoutineWithHabits,
    TodayHabitsResponse,
)

router = APIRouter(prefix="/api/habits", tags=["Habits"])
routines_router = APIRouter(prefix="/api/routines", tags=["Routines"])
checkins_router = APIRouter(prefix="/api/checkins", tags=["Check-ins"])


class HabitLogResponse(BaseModel):
    log: HabitLog
    newly_unlocked: List[Achievement]


def _day_or_400(value: str) -> date:
    day = parse_day(value)
    if day is None:
        raise HTTPException(status_code=400, detail=f"Invalid date: {value}")
    return day


def _habit_or_404(user_id: str, habit_id: str) -> Habit:
    habit = habit_store.get_by_id(user_id, habit_id)
    if habit is None:
        raise HTTPException(status_code=404, detail="Habit not found")
    return habit


@router.get("", response_model=List[Habit], summary="List habits")
def list_habits(
    category: Optional[str] = Query(default=None),
    q: Optional[str] = Query(default=None, description="Search over name/description"),
    include_inactive: bool = Query(default=False),
    user: dict = Depends(get_current_user),
):
    user_id = user["id"]
    if q:
        return habit_store.search(user_id, q)
    if category:
        return habit_store.get_by_category(user_id, category)
    if include_inactive:
        return habit_store.get_all(user_id)
    return habit_store.get_active(user_id)


@router.post("", response_model=Habit, status_code=201, summary="Create a habit")
def create_habit(request: HabitCreateRequest, user: dict = Depends(get_current_user)):
    if request.frequency == "weekly" and not request.specific_days:
        raise HTTPException(status_code=400, detail="Weekly habits need specific_days")
    habit = habit_store.create(user["id"], request)
    check_and_unlock(user["id"], habit.id)
    return habit


@router.get("/today", response_model=TodayHabitsResponse, summary="Habits scheduled today")
def today_habits(user: dict = Depends(get_current_user)):
    user_id = user["id"]
    today = date.today()
    return TodayHabitsResponse(
        date=today.isoformat(),
        habits=habit_stats.get_today_habits(user_id, today),
        completion_rate=habit_stats.get_today_completion_rate(user_id, today),
        streak=habit_stats.get_overall_streak(user_id, today),
    )


@router.post("/log", response_model=HabitLogResponse, summary="Log a habit for a day")
def log_habit(request: HabitLogRequest, user: dict = Depends(get_current_user)):
    user_id = user["id"]
    _habit_or_404(user_id, request.habit_id)
    day = _day_or_400(request.date)
    entry = log_store.log(
        user_id,
        request.habit_id,
        day,
        completed=request.completed,
        value=request.value,
        notes=request.notes,
    )
    newly = check_and_unlock(user_id, request.habit_id) if entry.completed else []
    return HabitLogResponse(log=entry, newly_unlocked=newly)


@router.get("/logs", response_model=List[HabitLog], summary="List habit logs")
def list_logs(
    habit_id: Optional[str] = Query(default=None),
    start: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    end: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    user: dict = Depends(get_current_user),
):
    user_id = user["id"]
    if not (habit_id or start or end):
        return log_store.get_recent(user_id, 7)
    lo = _day_or_400(start) if start else date.min
    hi = _day_or_400(end) if end else date.max
    if habit_id:
        lo_s, hi_s = lo.isoformat(), hi.isoformat()
        return [l for l in log_store.get_by_habit_id(user_id, habit_id) if lo_s <= l.date <= hi_s]
    return log_store.get_by_date_range(user_id, lo, hi)


@router.delete("/logs/{log_id}", summary="Delete a habit log")
def delete_log(log_id: str, user: dict = Depends(get_current_user)):
    if not log_store.delete(user["id"], log_id):
        raise HTTPException(status_code=404, detail="Log not found")
    return {"ok": True}


@router.get("/{habit_id}", response_model=Habit, summary="Get a habit")
def get_habit(habit_id: str, user: dict = Depends(get_current_user)):
    return _habit_or_404(user["id"], habit_id)


@router.patch("/{habit_id}", response_model=Habit, summary="Update a habit")
def update_habit(habit_id: str, request: HabitUpdateRequest, user: dict = Depends(get_current_user)):
    habit = _habit_or_404(user["id"], habit_id)
    frequency = request.frequency or habit.frequency
    days = request.specific_days if "specific_days" in request.model_fields_set else habit.specific_days
    if frequency == "weekly" and not days:
        raise HTTPException(status_code=400, detail="Weekly habits need specific_days")
    updated = habit_store.update(user["id"], habit_id, request)
    if updated is None:
        raise HTTPException(status_code=404, detail="Habit not found")
    return updated


@router.delete("/{habit_id}", summary="Delete a habit")
def delete_habit(
    habit_id: str,
    hard: bool = Query(default=False, description="Remove the habit and its logs"),
    user: dict = Depends(get_current_user),
):
    user_id = user["id"]
    if hard:
        if not habit_store.hard_delete(user_id, habit_id):
            raise HTTPException(status_code=404, detail="Habit not found")
        removed = log_store.delete_by_habit_id(user_id, habit_id)
        return {"ok": True, "deleted_logs": removed}
    if not habit_store.delete(user_id, habit_id):
        raise HTTPException(status_code=404, detail="Habit not found")
    return {"ok": True}


@router.get("/{habit_id}/stats", response_model=HabitStatsResponse, summary="Habit statistics")
def habit_stats_endpoint(habit_id: str, user: dict = Depends(get_current_user)):
    user_id = user["id"]
    habit = _habit_or_404(user_id, habit_id)
    return HabitStatsResponse(habit=habit, stats=habit_stats.get_stats(user_id, habit_id))


# ---- Routines ----


def _with_habits(user_id: str, routine: Routine) -> RoutineWithHabits:
    habits = [h for h in (habit_store.get_by_id(user_id, hid) for hid in routine.habit_ids) if h is not None]
    return RoutineWithHabits(**routine.model_dump(), habits=habits)


@routines_router.get("", response_model=List[RoutineWithHabits], summary="List routines")
def list_routines(
    type: Optional[str] = Query(default=None, description="morning | evening | custom"),
    active_only: bool = Query(default=False),
    user: dict = Depends(get_current_user),
):
    user_id = user["id"]
    if type:
        items = routine_store.get_by_type(user_id, type)
    elif active_only:
        items = routine_store.get_active(user_id)
    else:
        items = routine_store.get_all(user_id)
    return [_with_habits(user_id, r) for r in items]


@routines_router.post("", response_model=Routine, status_code=201, summary="Create a routine")
def create_routine(request: RoutineCreateRequest, user: dict = Depends(get_current_user)):
    return routine_store.create(user["id"], request)


@routines_router.get("/{routine_id}", response_model=RoutineWithHabits, summary="Get a routine")
def get_routine(routine_id: str, user: dict = Depends(get_current_user)):
    routine = routine_store.get_by_id(user["id"], routine_id)
    if routine is None:
        raise HTTPException(status_code=404, detail="Routine not found")
    return _with_habits(user["id"], routine)


@routines_router.patch("/{routine_id}", response_model=Routine, summary="Update a routine")
def update_routine(routine_id: str, request: RoutineUpdateRequest, user: dict = Depends(get_current_user)):
    updated = routine_store.update(user["id"], routine_id, request)
    if updated is None:
        raise HTTPException(status_code=404, detail="Routine not found")
    return updated


@routines_router.delete("/{routine_id}", summary="Delete a routine")
def delete_routine(routine_id: str, user: dict = Depends(get_current_user)):
    if not routine_store.delete(user["id"], routine_id):
        raise HTTPException(status_code=404, detail="Routine not found")
    return {"ok": True}


@routines_router.post("/{routine_id}/habits/{habit_id}", response_model=Routine, summary="Add a habit to a routine")
def add_routine_habit(routine_id: str, habit_id: str, user: dict = Depends(get_current_user)):
    _habit_or_404(user["id"], habit_id)
    updated = routine_store.add_habit(user["id"], routine_id, habit_id)
    if updated is None:
        raise HTTPException(status_code=404, detail="Routine not found")
    return updated


@routines_router.delete(
    "/{routine_id}/habits/{habit_id}", response_model=Routine, summary="Remove a habit from a routine"
)
def remove_routine_habit(routine_id: str, habit_id: str, user: dict = Depends(get_current_user)):
    updated = routine_store.remove_habit(user["id"], routine_id, habit_id)
    if updated is None:
        raise HTTPException(status_code=404, detail="Routine not found")
    return updated


@routines_router.post("/{routine_id}/toggle", response_model=Routine, summary="Toggle a routine on/off")
def toggle_routine(routine_id: str, user: dict = Depends(get_current_user)):
    updated = routine_store.toggle_active(user["id"], routine_id)
    if updated is None:
        raise HTTPException(status_code=404, detail="Routine not found")
    return updated


# ---- Daily check-ins ----


@checkins_router.get("", response_model=List[DailyCheckIn], summary="List check-ins")
def list_checkins(
    days: Optional[int] = Query(default=None, ge=1, le=3650),
    user: dict = Depends(get_current_user),
):
    if days:
        return checkin_store.get_recent(user["id"], days)
    return checkin_store.get_all(user["id"])


@checkins_router.post("", response_model=DailyCheckIn, summary="Create or replace the check-in of a day")
def upsert_checkin(request: CheckInRequest, user: dict = Depends(get_current_user)):
    _day_or_400(request.date)
    return checkin_store.create_or_update(user["id"], request)


@checkins_router.get("/averages", response_model=CheckInAverages, summary="Averages over the last N days")
def checkin_averages(days: int = Query(default=7, ge=1, le=365), user: dict = Depends(get_current_user)):
    return checkin_store.get_averages(user["id"], days)


@checkins_router.get("/{day}", response_model=DailyCheckIn, summary="Check-in of a given day")
def get_checkin(day: str, user: dict = Depends(get_current_user)):
    item = checkin_store.get_by_date(user["id"], _day_or_400(day))
    if item is None:
        raise HTTPException(status_code=404, detail="Check-in not found")
    return item


@checkins_router.delete("/{checkin_id}", summary="Delete a check-in")
def delete_checkin(checkin_id: str, user: dict = Depends(get_current_user)):
    if not checkin_store.delete(user["id"], checkin_id):
        raise HTTPException(status_code=404, detail="Check-in not found")
    return {"ok": True}
