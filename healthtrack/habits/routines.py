# -*- coding: utf-8 -*-
"""Routines — ordered groups of habits (morning / evening / custom)."""

from __future__ import annotations

from typing import List, Optional

from .. import blobstore
from ..utils import drop_nulls, new_id, utc_now_iso
from .models import Routine, RoutineCreateRequest, RoutineUpdateRequest

ENTITY = "routines"


def _load(user_id: str) -> List[Routine]:
    return blobstore.load_models(user_id, ENTITY, Routine)


def _save(user_id: str, routines: List[Routine]) -> None:
    blobstore.save_models(user_id, ENTITY, routines, Routine)


def get_all(user_id: str) -> List[Routine]:
    return _load(user_id)


def get_active(user_id: str) -> List[Routine]:
    return [r for r in _load(user_id) if r.is_active]


def get_by_id(user_id: str, routine_id: str) -> Optional[Routine]:
    for r in _load(user_id):
        if r.id == routine_id:
            return r
    return None


def get_by_type(user_id: str, routine_type: str) -> List[Routine]:
    return [r for r in _load(user_id) if r.type == routine_type and r.is_active]


def create(user_id: str, req: RoutineCreateRequest) -> Routine:
    routines = _load(user_id)
    now = utc_now_iso()
    routine = Routine(
        id=new_id("routine"),
        user_id=user_id,
        created_date=now,
        updated_date=now,
        **req.model_dump(),
    )
    routines.append(routine)
    _save(user_id, routines)
    return routine


def _patch(user_id: str, routine_id: str, patch: dict) -> Optional[Routine]:
    routines = _load(user_id)
    for idx, r in enumerate(routines):
        if r.id != routine_id:
            continue
        data = {**r.model_dump(), **patch, "id": r.id, "user_id": r.user_id, "updated_date": utc_now_iso()}
        updated = Routine.model_validate(data)
        routines[idx] = updated
        _save(user_id, routines)
        return updated
    return None


def update(user_id: str, routine_id: str, req: RoutineUpdateRequest) -> Optional[Routine]:
    patch = drop_nulls(req.model_dump(exclude_unset=True), ("name", "habit_ids", "is_active"))
    return _patch(user_id, routine_id, patch)


def delete(user_id: str, routine_id: str) -> bool:
    routines = _load(user_id)
    kept = [r for r in routines if r.id != routine_id]
    if len(kept) == len(routines):
        return False
    _save(user_id, kept)
    return True


def add_habit(user_id: str, routine_id: str, habit_id: str) -> Optional[Routine]:
    routine = get_by_id(user_id, routine_id)
    if routine is None:
        return None
    if habit_id in routine.habit_ids:
        return routine
    return _patch(user_id, routine_id, {"habit_ids": [*routine.habit_ids, habit_id]})


def remove_habit(user_id: str, routine_id: str, habit_id: str) -> Optional[Routine]:
    routine = get_by_id(user_id, routine_id)
    if routine is None:
        return None
    return _patch(user_id, routine_id, {"habit_ids": [h for h in routine.habit_ids if h != habit_id]})


def toggle_active(user_id: str, routine_id: str) -> Optional[Routine]:
    routine = get_by_id(user_id, routine_id)
    if routine is None:
        return None
    return _patch(user_id, routine_id, {"is_active": not routine.is_active})
