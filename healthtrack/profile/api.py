# -*- coding: utf-8 -*-
"""Profile — API endpoints."""

from __future__ import annotations

from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..meals import storage as meal_store
from ..utils import parse_day
from . import goals
from . import storage as profile_store
from .models import NutritionGoals, NutritionProgress, ProfileCreateRequest, ProfileResponse, ProfileUpdateRequest

router = APIRouter(prefix="/api/profile", tags=["Profile"])


def _response(profile) -> ProfileResponse:
    return ProfileResponse(profile=profile, goals=goals.calculate_nutrition_goals(profile))


@router.get("", response_model=ProfileResponse, summary="Profile and computed nutrition goals")
def get_profile(user: dict = Depends(get_current_user)):
    profile = profile_store.get(user["id"])
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _response(profile)


@router.post("", response_model=ProfileResponse, status_code=201)
def create_profile(request: ProfileCreateRequest, user: dict = Depends(get_current_user)):
    return _response(profile_store.create(user["id"], request))


@router.patch("", response_model=ProfileResponse)
def update_profile(request: ProfileUpdateRequest, user: dict = Depends(get_current_user)):
    profile = profile_store.update(user["id"], request)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return _response(profile)


@router.delete("")
def delete_profile(user: dict = Depends(get_current_user)):
    if not profile_store.delete(user["id"]):
        raise HTTPException(status_code=404, detail="Profile not found")
    return {"ok": True}


@router.get("/goals", response_model=NutritionGoals)
def nutrition_goals(user: dict = Depends(get_current_user)):
    return get_profile(user).goals


@router.get("/progress", response_model=Dict[str, NutritionProgress], summary="Today's intake against goals")
def progress(date: Optional[str] = Query(default=None), user: dict = Depends(get_current_user)):
    day = None
    if date:
        day = parse_day(date)
        if day is None:
            raise HTTPException(status_code=400, detail="Invalid date format")
    target = get_profile(user).goals
    totals = meal_store.get_daily_nutrition(user["id"], day).totals
    return {
        "calories": goals.calculate_progress(totals.calories, target.daily_calories),
        "protein": goals.calculate_progress(totals.protein, target.daily_protein),
        "carbs": goals.calculate_progress(totals.carbs, target.daily_carbs),
        "fat": goals.calculate_progress(totals.fat, target.daily_fat),
    }
