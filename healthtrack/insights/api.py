# -*- coding: utf-8 -*-
"""Insights — API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from . import auto
from . import storage as insight_store
from .models import AutoInsightsResult, Insight, InsightCreateRequest, InsightPriority, InsightType, UnreadCount

router = APIRouter(prefix="/api/insights", tags=["Insights"])


@router.get("", response_model=List[Insight], summary="List insights, newest first")
def list_insights(
    unread: bool = Query(default=False, description="Only unread, high priority first"),
    type: Optional[InsightType] = Query(default=None),
    priority: Optional[InsightPriority] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    user: dict = Depends(get_current_user),
):
    user_id = user["id"]
    insights = insight_store.get_unread(user_id) if unread else insight_store.get_all(user_id)
    if type:
        insights = [i for i in insights if i.type == type]
    if priority:
        insights = [i for i in insights if i.priority == priority]
    return insights[:limit] if limit else insights


@router.post("", response_model=Insight, status_code=201, summary="Store an insight")
def create_insight(request: InsightCreateRequest, user: dict = Depends(get_current_user)):
    return insight_store.create(user["id"], request)


@router.get("/unread-count", response_model=UnreadCount)
def unread_count(user: dict = Depends(get_current_user)):
    return UnreadCount(unread=insight_store.get_unread_count(user["id"]))


@router.post("/auto", response_model=AutoInsightsResult, summary="Run the daily insight rules")
def run_auto(force: bool = Query(default=False), user: dict = Depends(get_current_user)):
    return auto.run_auto_insights(user["id"], force=force)


@router.post("/read-all", summary="Mark every insight read")
def read_all(user: dict = Depends(get_current_user)):
    return {"updated": insight_store.mark_all_read(user["id"])}


@router.delete("/read", summary="Delete old read insights")
def delete_old_read(days: int = Query(default=30, ge=0, le=3650), user: dict = Depends(get_current_user)):
    return {"deleted": insight_store.delete_old_read(user["id"], days)}


@router.get("/{insight_id}", response_model=Insight)
def get_insight(insight_id: str, user: dict = Depends(get_current_user)):
    insight = insight_store.get_by_id(user["id"], insight_id)
    if insight is None:
        raise HTTPException(status_code=404, detail="Insight not found")
    return insight


@router.post("/{insight_id}/read", response_model=Insight)
def mark_read(insight_id: str, user: dict = Depends(get_current_user)):
    insight = insight_store.mark_read(user["id"], insight_id)
    if insight is None:
        raise HTTPException(status_code=404, detail="Insight not found")
    return insight


@router.delete("/{insight_id}")
def delete_insight(insight_id: str, user: dict = Depends(get_current_user)):
    if not insight_store.delete(user["id"], insight_id):
        raise HTTPException(status_code=404, detail="Insight not found")
    return {"ok": True}
