# -*- coding: utf-8 -*-
"""Health — activity counters, the daily activity streak and stat badges."""

from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional

from pydantic import ValidationError

from .. import blobstore
from ..utils import to_day, utc_now_iso
from .models import Badge, UserStats

log = logging.getLogger(__name__)

ENTITY = "user_stats"

BADGES: List[Badge] = [
    Badge(id="first_meal", title="Premier repas", description="Logger votre premier repas", icon="🍽️", requirement=1),
    Badge(id="week_streak", title="Une semaine", description="Maintenir un streak de 7 jours", icon="🔥", requirement=7),
    Badge(id="month_streak", title="Un mois", description="Maintenir un streak de 30 jours", icon="🏆", requirement=30),
    Badge(id="50_workouts", title="Athlète", description="Compléter 50 entraînements", icon="💪", requirement=50),
    Badge(id="100_meals", title="Gourmet", description="Logger 100 repas", icon="👨‍🍳", requirement=100),
]


def _initial(user_id: str) -> UserStats:
    now = utc_now_iso()
    return UserStats(user_id=user_id, member_since=now, updated_at=now)


def get(user_id: str) -> UserStats:
    raw = blobstore.load_object(user_id, ENTITY)
    if raw is not None:
        try:
            return UserStats.model_validate(raw)
        except ValidationError as exc:
            log.warning("invalid user stats for %s: %s", user_id, exc)
    return _initial(user_id)


def _save(stats: UserStats) -> UserStats:
    stats = _check_badges(stats.model_copy(update={"updated_at": utc_now_iso()}))
    blobstore.save_object(stats.user_id, ENTITY, stats.model_dump(mode="json"))
    return stats


def _badge_values(stats: UserStats) -> Dict[str, int]:
    return {
        "first_meal": stats.total_meals_logged,
        "week_streak": stats.current_streak,
        "month_streak": stats.current_streak,
        "50_workouts": stats.total_workouts,
        "100_meals": stats.total_meals_logged,
    }


def _check_badges(stats: UserStats) -> UserStats:
    values = _badge_values(stats)
    earned = [b.id for b in BADGES if b.id not in stats.badges and values.get(b.id, 0) >= b.requirement]
    if not earned:
        return stats
    log.info("user %s earned badges %s", stats.user_id, ", ".join(earned))
    return stats.model_copy(update={"badges": stats.badges + earned})


def _with_activity(stats: UserStats, today: date) -> UserStats:
    """Same day keeps the streak, the next day extends it, a gap restarts it at 1."""
    if stats.last_activity_date is None:
        current = 1
    else:
        gap = (today - to_day(stats.last_activity_date)).days
        if gap <= 0:
            current = max(stats.current_streak, 1)
        elif gap == 1:
            current = stats.current_streak + 1
        else:
            current = 1
    return stats.model_copy(
        update={
            "current_streak": current,
            "longest_streak": max(stats.longest_streak, current),
            "last_activity_date": today.isoformat(),
        }
    )


def record_activity(user_id: str, today: Optional[date] = None) -> UserStats:
    return _save(_with_activity(get(user_id), today or date.today()))


def increment_workouts(user_id: str, today: Optional[date] = None) -> UserStats:
    stats = _with_activity(get(user_id), today or date.today())
    return _save(stats.model_copy(update={"total_workouts": stats.total_workouts + 1}))


def increment_meals(user_id: str, today: Optional[date] = None) -> UserStats:
    stats = _with_activity(get(user_id), today or date.today())
    return _save(stats.model_copy(update={"total_meals_logged": stats.total_meals_logged + 1}))


def increment_recipes(user_id: str) -> UserStats:
    stats = get(user_id)
    return _save(stats.model_copy(update={"total_recipes_generated": stats.total_recipes_generated + 1}))


def get_unlocked_badges(user_id: str) -> List[Badge]:
    earned = set(get(user_id).badges)
    return [b for b in BADGES if b.id in earned]


def get_locked_badges(user_id: str) -> List[Badge]:
    earned = set(get(user_id).badges)
    return [b for b in BADGES if b.id not in earned]


def reset(user_id: str) -> UserStats:
    blobstore.remove_item(user_id, ENTITY)
    return _save(_initial(user_id))
