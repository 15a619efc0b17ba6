# -*- coding: utf-8 -*-
"""Achievements — API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from . import catalog
from . import service
from . import storage as achievement_store
from .models import (
    Achievement,
    AchievementSummary,
    CheckAchievementsRequest,
    CheckAchievementsResponse,
)

router = APIRouter(prefix="/api/achievements", tags=["Achievements"])


@router.get("", response_model=AchievementSummary, summary="All achievements with progress")
def list_achievements(user: dict = Depends(get_current_user)):
    return service.get_summary(user["id"])


@router.get("/catalog", response_model=List[Achievement], summary="Static achievement catalog")
def list_catalog(category: Optional[str] = Query(default=None)):
    if category:
        return catalog.get_by_category(category)
    return catalog.get_all()


@router.get("/unlocked", response_model=List[Achievement], summary="Unlocked achievements")
def list_unlocked(user: dict = Depends(get_current_user)):
    return service.get_unlocked(user["id"])


@router.get("/locked", response_model=List[Achievement], summary="Achievements still locked")
def list_locked(user: dict = Depends(get_current_user)):
    return service.get_locked(user["id"])


@router.post("/check", response_model=CheckAchievementsResponse, summary="Evaluate and unlock achievements")
def check_achievements(request: CheckAchievementsRequest, user: dict = Depends(get_current_user)):
    user_id = user["id"]
    newly = service.check_and_unlock(user_id, request.habit_id)
    record = achievement_store.get(user_id)
    return CheckAchievementsResponse(newly_unlocked=newly, total_points=record.total_points, level=record.level)


@router.delete("", summary="Reset the user's achievements")
def reset_achievements(user: dict = Depends(get_current_user)):
    achievement_store.reset(user["id"])
    return {"ok": True}


@router.get("/{achievement_id}", response_model=Achievement, summary="Get one achievement")
def get_achievement(achievement_id: str):
    item = catalog.get_by_id(achievement_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Achievement not found")
    return item
