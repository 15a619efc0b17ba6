# -*- coding: utf-8 -*-
"""Health — body measurements (cm) per user."""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from .. import blobstore
from ..utils import DayLike, day_str, new_id, utc_now_iso
from .models import BodyMeasurements, MeasurementsCreateRequest, MeasurementsUpdateRequest

ENTITY = "body_measurements"


def _load(user_id: str) -> List[BodyMeasurements]:
    return blobstore.load_models(user_id, ENTITY, BodyMeasurements)


def _save(user_id: str, entries: List[BodyMeasurements]) -> None:
    blobstore.save_models(user_id, ENTITY, entries, BodyMeasurements)


def create(user_id: str, req: MeasurementsCreateRequest) -> BodyMeasurements:
    entries = _load(user_id)
    data = req.model_dump(exclude={"date"})
    entry = BodyMeasurements(
        id=new_id("measurements"),
        user_id=user_id,
        date=day_str(req.date or date.today()),
        created_at=utc_now_iso(),
        **data,
    )
    entries.append(entry)
    _save(user_id, entries)
    return entry


def get_all(user_id: str) -> List[BodyMeasurements]:
    """Newest first."""
    return sorted(_load(user_id), key=lambda m: (m.date, m.created_at), reverse=True)


def get_by_id(user_id: str, entry_id: str) -> Optional[BodyMeasurements]:
    for entry in _load(user_id):
        if entry.id == entry_id:
            return entry
    return None


def get_latest(user_id: str) -> Optional[BodyMeasurements]:
    entries = get_all(user_id)
    return entries[0] if entries else None


def get_by_date_range(user_id: str, start: DayLike, end: DayLike) -> List[BodyMeasurements]:
    """Oldest first."""
    lo, hi = day_str(start), day_str(end)
    return sorted(
        (m for m in _load(user_id) if lo <= m.date <= hi),
        key=lambda m: (m.date, m.created_at),
    )


def update(user_id: str, entry_id: str, req: MeasurementsUpdateRequest) -> Optional[BodyMeasurements]:
    entries = _load(user_id)
    for idx, entry in enumerate(entries):
        if entry.id != entry_id:
            continue
        patch = req.model_dump(exclude_unset=True)
        if patch.get("date"):
            patch["date"] = day_str(patch["date"])
        else:
            patch.pop("date", None)
        updated = entry.model_copy(update=patch)
        entries[idx] = updated
        _save(user_id, entries)
        return updated
    return None


def delete(user_id: str, entry_id: str) -> bool:
    entries = _load(user_id)
    kept = [m for m in entries if m.id != entry_id]
    if len(kept) == len(entries):
        return False
    _save(user_id, kept)
    return True


def get_measurement_change(user_id: str, measurement: str, start: DayLike, end: DayLike) -> Optional[float]:
    """Last minus first value of one measurement in the range.

    None with fewer than two entries, or when either end lacks that measurement.
    """
    entries = get_by_date_range(user_id, start, end)
    if len(entries) < 2:
        return None
    first = getattr(entries[0], measurement)
    last = getattr(entries[-1], measurement)
    if first is None or last is None:
        return None
    return round(last - first, 1)
