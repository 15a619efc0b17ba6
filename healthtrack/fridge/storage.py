# -*- coding: utf-8 -*-
"""Fridge — per-user inventory storage."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from .. import blobstore
from ..utils import day_str, drop_nulls, new_id, utc_now_iso
from .helpers import get_expiration_status
from .models import FridgeItem, FridgeItemCreateRequest, FridgeItemUpdateRequest

ENTITY = "smart_fridge_items"


def _load(user_id: str) -> List[FridgeItem]:
    return blobstore.load_models(user_id, ENTITY, FridgeItem)


def _save(user_id: str, items: List[FridgeItem]) -> None:
    blobstore.save_models(user_id, ENTITY, items, FridgeItem)


def get_all(user_id: str) -> List[FridgeItem]:
    return _load(user_id)


def get_by_id(user_id: str, item_id: str) -> Optional[FridgeItem]:
    for item in _load(user_id):
        if item.id == item_id:
            return item
    return None


def create(user_id: str, req: FridgeItemCreateRequest) -> FridgeItem:
    items = _load(user_id)
    payload = req.model_dump()
    if payload.get("expiration_date"):
        payload["expiration_date"] = day_str(payload["expiration_date"])
    item = FridgeItem(id=new_id("fridge"), user_id=user_id, added_date=utc_now_iso(), **payload)
    items.append(item)
    _save(user_id, items)
    return item


def update(user_id: str, item_id: str, req: FridgeItemUpdateRequest) -> Optional[FridgeItem]:
    items = _load(user_id)
    for idx, item in enumerate(items):
        if item.id != item_id:
            continue
        patch = drop_nulls(req.model_dump(exclude_unset=True), ("name", "quantity", "unit", "category"))
        if patch.get("expiration_date"):
            patch["expiration_date"] = day_str(patch["expiration_date"])
        updated = FridgeItem.model_validate({**item.model_dump(), **patch})
        items[idx] = updated
        _save(user_id, items)
        return updated
    return None


def delete(user_id: str, item_id: str) -> bool:
    items = _load(user_id)
    kept = [i for i in items if i.id != item_id]
    if len(kept) == len(items):
        return False
    _save(user_id, kept)
    return True


def get_expiring(user_id: str, days_threshold: int = 2, today: Optional[date] = None) -> List[FridgeItem]:
    """Items expiring within ``days_threshold`` days, today included; expired items are excluded."""
    out: List[FridgeItem] = []
    for item in _load(user_id):
        status = get_expiration_status(item.expiration_date, today)
        if status.days_remaining is not None and 0 <= status.days_remaining <= days_threshold:
            out.append(item)
    return out


def delete_all(user_id: str) -> None:
    blobstore.remove_item(user_id, ENTITY)
