# -*- coding: utf-8 -*-
"""Weight — API endpoints."""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..profile import storage as profile_store
from ..utils import parse_day
from . import storage as weight_store
from .models import WeightHistoryResponse, WeightLog, WeightLogCreateRequest, WeightLogUpdateRequest

router = APIRouter(prefix="/api/weight", tags=["Weight"])


@router.post("/log", response_model=WeightLog, status_code=201, summary="Log a weight measurement")
def log_weight(request: WeightLogCreateRequest, user: dict = Depends(get_current_user)):
    if request.date and parse_day(request.date) is None:
        raise HTTPException(status_code=400, detail="Invalid date format")
    return weight_store.create(user["id"], request)


@router.get("/history", response_model=WeightHistoryResponse, summary="History with trend figures")
def history(
    days: int = Query(default=30, ge=1, le=3650),
    goal_weight: Optional[float] = Query(default=None, gt=0),
    predict_days: int = Query(default=30, ge=1, le=365),
    user: dict = Depends(get_current_user),
):
    user_id = user["id"]
    today = date.today()
    start = today - timedelta(days=days)
    if goal_weight is None:
        profile = profile_store.get(user_id)
        goal_weight = profile.goal_weight if profile is not None else None
    return WeightHistoryResponse(
        logs=weight_store.get_last_n_days(user_id, days, today=today),
        latest=weight_store.get_latest(user_id),
        average_weight=weight_store.get_average_weight(user_id, start, today),
        weight_change=weight_store.get_weight_change(user_id, start, today),
        predicted_weight=weight_store.predict_weight(user_id, predict_days, today=today),
        days_to_goal=weight_store.get_days_to_goal(user_id, goal_weight, today=today) if goal_weight else None,
    )


@router.get("", response_model=List[WeightLog], summary="List weight logs")
def list_logs(user: dict = Depends(get_current_user)):
    return sorted(weight_store.get_all(user["id"]), key=lambda e: e.date)


@router.get("/{log_id}", response_model=WeightLog)
def get_log(log_id: str, user: dict = Depends(get_current_user)):
    entry = weight_store.get_by_id(user["id"], log_id)
    if entry is None:
        raise HTTPException(status_code=404, detail="Weight log not found")
    return entry


@router.patch("/{log_id}", response_model=WeightLog)
def update_log(log_id: str, request: WeightLogUpdateRequest, user: dict = Depends(get_current_user)):
    entry = weight_store.update(user["id"], log_id, request)
    if entry is None:
        raise HTTPException(status_code=404, detail="Weight log not found")
    return entry


@router.delete("/{log_id}")
def delete_log(log_id: str, user: dict = Depends(get_current_user)):
    if not weight_store.delete(user["id"], log_id):
        raise HTTPException(status_code=404, detail="Weight log not found")
    return {"ok": True}
