# -*- coding: utf-8 -*-
"""Insights — per-user insight storage with read state."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import List, Optional

from .. import blobstore
from ..utils import new_id, parse_timestamp, utc_now_iso
from .models import Insight, InsightCreateRequest

ENTITY = "ai_insights"

_PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def _load(user_id: str) -> List[Insight]:
    return blobstore.load_models(user_id, ENTITY, Insight)


def _save(user_id: str, insights: List[Insight]) -> None:
    blobstore.save_models(user_id, ENTITY, insights, Insight)


def _newest_first(insights: List[Insight]) -> List[Insight]:
    return sorted(insights, key=lambda i: i.created_at, reverse=True)


def create(user_id: str, req: InsightCreateRequest) -> Insight:
    insights = _load(user_id)
    insight = Insight(id=new_id("insight"), user_id=user_id, created_at=utc_now_iso(), **req.model_dump())
    insights.append(insight)
    _save(user_id, insights)
    return insight


def get_all(user_id: str) -> List[Insight]:
    return _newest_first(_load(user_id))


def get_by_id(user_id: str, insight_id: str) -> Optional[Insight]:
    for insight in _load(user_id):
        if insight.id == insight_id:
            return insight
    return None


def get_unread(user_id: str) -> List[Insight]:
    """High priority first, newest first within a priority."""
    unread = _newest_first([i for i in _load(user_id) if not i.read])
    return sorted(unread, key=lambda i: _PRIORITY_ORDER[i.priority])


def get_recent(user_id: str, limit: int = 10) -> List[Insight]:
    return get_all(user_id)[:limit]


def get_by_type(user_id: str, insight_type: str) -> List[Insight]:
    return [i for i in get_all(user_id) if i.type == insight_type]


def get_by_priority(user_id: str, priority: str) -> List[Insight]:
    return [i for i in get_all(user_id) if i.priority == priority]


def mark_read(user_id: str, insight_id: str) -> Optional[Insight]:
    insights = _load(user_id)
    for idx, insight in enumerate(insights):
        if insight.id == insight_id:
            updated = insight.model_copy(update={"read": True})
            insights[idx] = updated
            _save(user_id, insights)
            return updated
    return None


def mark_all_read(user_id: str) -> int:
    insights = _load(user_id)
    count = sum(1 for i in insights if not i.read)
    if count:
        _save(user_id, [i.model_copy(update={"read": True}) for i in insights])
    return count


def delete(user_id: str, insight_id: str) -> bool:
    insights = _load(user_id)
    kept = [i for i in insights if i.id != insight_id]
    if len(kept) == len(insights):
        return False
    _save(user_id, kept)
    return True


def delete_old_read(user_id: str, days: int = 30, now: Optional[datetime] = None) -> int:
    """Drop read insights created more than ``days`` ago; unread ones are kept."""
    cutoff = (now or datetime.now(timezone.utc)) - timedelta(days=days)
    insights = _load(user_id)
    kept = []
    for insight in insights:
        created = parse_timestamp(insight.created_at)
        if insight.read and created is not None and created < cutoff:
            continue
        kept.append(insight)
    removed = len(insights) - len(kept)
    if removed:
        _save(user_id, kept)
    return removed


def get_unread_count(user_id: str) -> int:
    return sum(1 for i in _load(user_id) if not i.read)


def clear(user_id: str) -> None:
    blobstore.remove_item(user_id, ENTITY)
