# -*- coding: utf-8 -*-
"""Meals — API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..health import user_stats
from ..utils import parse_day
from . import storage as meal_store
from .models import DailyNutrition, MealLog, MealLogCreateRequest, MealLogUpdateRequest

router = APIRouter(prefix="/api/meals", tags=["Meals"])


def _day_or_400(value: str):
    day = parse_day(value)
    if day is None:
        raise HTTPException(status_code=400, detail="Invalid date format")
    return day


@router.get("", response_model=List[MealLog], summary="List meal logs")
def list_meals(
    date: Optional[str] = Query(default=None, description="YYYY-MM-DD"),
    start: Optional[str] = Query(default=None),
    end: Optional[str] = Query(default=None),
    user: dict = Depends(get_current_user),
):
    user_id = user["id"]
    if date:
        return meal_store.get_by_date(user_id, _day_or_400(date))
    if start and end:
        return meal_store.get_by_date_range(user_id, _day_or_400(start), _day_or_400(end))
    return meal_store.get_all(user_id)


@router.post("", response_model=MealLog, status_code=201, summary="Log a meal")
def create_meal(request: MealLogCreateRequest, user: dict = Depends(get_current_user)):
    _day_or_400(request.date)
    meal = meal_store.create(user["id"], request)
    user_stats.increment_meals(user["id"])
    return meal


@router.get("/recent", response_model=List[MealLog])
def recent(limit: int = Query(default=10, ge=1, le=200), user: dict = Depends(get_current_user)):
    return meal_store.get_recent(user["id"], limit=limit)


@router.get("/daily", response_model=DailyNutrition, summary="Nutrition totals for one day")
def daily(date: Optional[str] = Query(default=None), user: dict = Depends(get_current_user)):
    day = _day_or_400(date) if date else None
    return meal_store.get_daily_nutrition(user["id"], day)


@router.get("/{meal_id}", response_model=MealLog)
def get_meal(meal_id: str, user: dict = Depends(get_current_user)):
    meal = meal_store.get_by_id(user["id"], meal_id)
    if meal is None:
        raise HTTPException(status_code=404, detail="Meal log not found")
    return meal


@router.patch("/{meal_id}", response_model=MealLog)
def update_meal(meal_id: str, request: MealLogUpdateRequest, user: dict = Depends(get_current_user)):
    meal = meal_store.update(user["id"], meal_id, request)
    if meal is None:
        raise HTTPException(status_code=404, detail="Meal log not found")
    return meal


@router.delete("/{meal_id}")
def delete_meal(meal_id: str, user: dict = Depends(get_current_user)):
    if not meal_store.delete(user["id"], meal_id):
        raise HTTPException(status_code=404, detail="Meal log not found")
    return {"ok": True}
