# -*- coding: utf-8 -*-
"""Fridge — API endpoints."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..auth.security import get_current_user
from ..utils import parse_day
from . import helpers
from . import storage as fridge_store
from .models import (
    FridgeCategory,
    FridgeItem,
    FridgeItemCreateRequest,
    FridgeItemUpdateRequest,
    FridgeItemView,
    FridgeSortBy,
    FridgeStats,
)

router = APIRouter(prefix="/api/fridge", tags=["Fridge"])


def _check_expiration(value: Optional[str]) -> None:
    if value and parse_day(value) is None:
        raise HTTPException(status_code=400, detail="Invalid expiration_date format")


@router.get("", response_model=List[FridgeItemView], summary="List fridge items")
def list_items(
    category: Optional[FridgeCategory] = Query(default=None),
    q: Optional[str] = Query(default=None, description="Search over name/category/notes"),
    sort_by: FridgeSortBy = Query(default="added_date"),
    user: dict = Depends(get_current_user),
):
    items = helpers.filter_items(fridge_store.get_all(user["id"]), category=category, search_query=q)
    return [helpers.with_status(item) for item in helpers.sort_items(items, sort_by)]


@router.post("", response_model=FridgeItem, status_code=201, summary="Add an item")
def create_item(request: FridgeItemCreateRequest, user: dict = Depends(get_current_user)):
    _check_expiration(request.expiration_date)
    return fridge_store.create(user["id"], request)


@router.get("/stats", response_model=FridgeStats)
def stats(user: dict = Depends(get_current_user)):
    return helpers.calculate_stats(fridge_store.get_all(user["id"]))


@router.get("/expiring", response_model=List[FridgeItemView])
def expiring(
    days: int = Query(default=2, ge=0, le=365),
    user: dict = Depends(get_current_user),
):
    items = helpers.sort_items(fridge_store.get_expiring(user["id"], days_threshold=days), "expiration_date")
    return [helpers.with_status(item) for item in items]


@router.get("/expired", response_model=List[FridgeItemView])
def expired(user: dict = Depends(get_current_user)):
    items = helpers.get_expired_items(fridge_store.get_all(user["id"]))
    return [helpers.with_status(item) for item in helpers.sort_items(items, "expiration_date")]


@router.delete("", summary="Empty the fridge")
def clear_items(user: dict = Depends(get_current_user)):
    fridge_store.delete_all(user["id"])
    return {"ok": True}


@router.get("/{item_id}", response_model=FridgeItemView)
def get_item(item_id: str, user: dict = Depends(get_current_user)):
    item = fridge_store.get_by_id(user["id"], item_id)
    if item is None:
        raise HTTPException(status_code=404, detail="Fridge item not found")
    return helpers.with_status(item)


@router.patch("/{item_id}", response_model=FridgeItem)
def update_item(item_id: str, request: FridgeItemUpdateRequest, user: dict = Depends(get_current_user)):
    _check_expiration(request.expiration_date)
    item = fridge_store.update(user["id"], item_id, request)
    if item is None:
        raise HTTPException(status_code=404, detail="Fridge item not found")
    return item


@router.delete("/{item_id}")
def delete_item(item_id: str, user: dict = Depends(get_current_user)):
    if not fridge_store.delete(user["id"], item_id):
        raise HTTPException(status_code=404, detail="Fridge item not found")
    return {"ok": True}
