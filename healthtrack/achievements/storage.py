# -*- coding: utf-8 -*-
"""Achievements — per-user unlock record (points, level)."""

from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import ValidationError

from .. import blobstore
from ..utils import utc_now_iso
from .models import UnlockedAchievement, UserAchievement

log = logging.getLogger(__name__)

ENTITY = "user_achievements"

# (upper bound exclusive, level) for the first four levels.
_LEVEL_THRESHOLDS = ((100, 1), (250, 2), (500, 3), (1000, 4))


def calculate_level(points: int) -> int:
    for bound, level in _LEVEL_THRESHOLDS:
        if points < bound:
            return level
    return points // 500 + 3


def next_level_threshold(level: int) -> int:
    for bound, lvl in _LEVEL_THRESHOLDS:
        if lvl == level:
            return bound
    return (level - 2) * 500


def _read(user_id: str) -> Optional[UserAchievement]:
    raw = blobstore.load_object(user_id, ENTITY)
    if raw is None:
        return None
    try:
        return UserAchievement.model_validate(raw)
    except ValidationError as exc:
        log.warning("invalid achievement record for %s: %s", user_id, exc)
        return None


def _write(user_id: str, record: UserAchievement) -> None:
    blobstore.save_object(user_id, ENTITY, record.model_dump(mode="json"))


def get(user_id: str) -> UserAchievement:
    """Return the user's record, creating an empty level-1 record on first read."""
    existing = _read(user_id)
    if existing is not None:
        return existing
    record = UserAchievement(user_id=user_id)
    _write(user_id, record)
    return record


def unlock(user_id: str, achievement_id: str, points: int, habit_id: Optional[str] = None) -> UserAchievement:
    record = get(user_id)
    if any(a.achievement_id == achievement_id for a in record.achievements):
        return record

    record.achievements.append(
        UnlockedAchievement(achievement_id=achievement_id, unlocked_date=utc_now_iso(), habit_id=habit_id)
    )
    record.total_points += points
    record.level = calculate_level(record.total_points)
    _write(user_id, record)
    return record


def has_unlocked(user_id: str, achievement_id: str) -> bool:
    return achievement_id in get_unlocked_ids(user_id)


def get_unlocked_ids(user_id: str) -> List[str]:
    return [a.achievement_id for a in get(user_id).achievements]


def get_unlocked_count(user_id: str) -> int:
    return len(get(user_id).achievements)


def get_total_points(user_id: str) -> int:
    return get(user_id).total_points


def get_level(user_id: str) -> int:
    return get(user_id).level


def get_points_for_next_level(user_id: str) -> int:
    record = get(user_id)
    return next_level_threshold(record.level) - record.total_points


def reset(user_id: str) -> None:
    blobstore.remove_item(user_id, ENTITY)
