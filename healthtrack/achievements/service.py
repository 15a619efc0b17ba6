# -*- coding: utf-8 -*-
"""Achievement unlock engine.

Each catalog entry names a requirement key; ``check_requirement`` evaluates
the matching predicate over the user's habits, logs and routines.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Callable, Dict, List, Optional, Tuple

from ..habits import logs as log_store
from ..habits import routines as routine_store
from ..habits import stats as habit_stats
from ..habits import storage as habit_store
from ..utils import iter_days, js_weekday, parse_timestamp, to_day
from . import catalog
from . import storage as achievement_store
from .models import Achievement, AchievementProgress, AchievementSummary

log = logging.getLogger(__name__)

WATER_KEYWORDS = ("water", "eau", "hydrat")


def _today(today: Optional[date]) -> date:
    return today or date.today()


def _check_first_habit(user_id: str) -> bool:
    return any(l.completed for l in log_store.get_all(user_id))


def _habit_ids(user_id: str, habit_id: Optional[str]) -> List[str]:
    if habit_id:
        return [habit_id]
    return [h.id for h in habit_store.get_all(user_id)]


def _check_streak(user_id: str, days: int, habit_id: Optional[str], today: Optional[date]) -> bool:
    return any(
        habit_stats.calculate_streak(user_id, hid, today=today) >= days
        for hid in _habit_ids(user_id, habit_id)
    )


def _check_routine_streak(user_id: str, routine_type: str, days: int, today: Optional[date]) -> bool:
    end = _today(today)
    for routine in routine_store.get_by_type(user_id, routine_type):
        if not routine.habit_ids:
            continue
        consecutive = 0
        for i in range(days):
            day = end - timedelta(days=i)
            if all(log_store.was_completed_on_date(user_id, hid, day) for hid in routine.habit_ids):
                consecutive += 1
            else:
                break
        if consecutive >= days:
            return True
    return False


def _check_perfect_week(user_id: str, today: Optional[date]) -> bool:
    end = _today(today)
    for day in iter_days(end - timedelta(days=6), end):
        scheduled = habit_store.get_scheduled_for_day(user_id, js_weekday(day))
        if not scheduled:
            continue
        if not all(log_store.was_completed_on_date(user_id, h.id, day) for h in scheduled):
            return False
    return True


def _is_water_habit(name: str) -> bool:
    lowered = name.lower()
    return any(k in lowered for k in WATER_KEYWORDS)


def _check_water_goal(user_id: str, days: int, today: Optional[date]) -> bool:
    end = _today(today)
    for habit in habit_store.get_all(user_id):
        if not _is_water_habit(habit.name):
            continue
        consecutive = 0
        for i in range(days):
            entry = log_store.get_by_habit_and_date(user_id, habit.id, end - timedelta(days=i))
            if entry is None or not entry.completed:
                break
            if habit.type == "number" and habit.target:
                if not entry.value or entry.value < habit.target:
                    break
            consecutive += 1
        if consecutive >= days:
            return True
    return False


def _check_all_habits_today(user_id: str, today: Optional[date]) -> bool:
    day = _today(today)
    scheduled = habit_store.get_scheduled_for_today(user_id, day)
    if not scheduled:
        return False
    return all(log_store.was_completed_on_date(user_id, h.id, day) for h in scheduled)


def _check_habits_created(user_id: str, count: int) -> bool:
    return len(habit_store.get_all(user_id)) >= count


def _completed_count(user_id: str) -> int:
    return sum(1 for l in log_store.get_all(user_id) if l.completed)


def _check_logged_hour(user_id: str, predicate: Callable[[int], bool]) -> bool:
    for entry in log_store.get_all(user_id):
        if not entry.completed:
            continue
        stamp = parse_timestamp(entry.logged_at)
        if stamp is not None and predicate(stamp.hour):
            return True
    return False


def _check_comeback(user_id: str, habit_id: Optional[str]) -> bool:
    for hid in _habit_ids(user_id, habit_id):
        days = [to_day(l.date) for l in log_store.get_by_habit_id(user_id, hid) if l.completed]
        for newer, older in zip(days, days[1:]):
            if abs((newer - older).days) >= 7:
                return True
    return False


def check_requirement(
    user_id: str, requirement: str, habit_id: Optional[str] = None, today: Optional[date] = None
) -> bool:
    checks: Dict[str, Callable[[], bool]] = {
        "first_habit": lambda: _check_first_habit(user_id),
        "7_day_streak": lambda: _check_streak(user_id, 7, habit_id, today),
        "30_day_streak": lambda: _check_streak(user_id, 30, habit_id, today),
        "100_day_streak": lambda: _check_streak(user_id, 100, habit_id, today),
        "morning_routine_7": lambda: _check_routine_streak(user_id, "morning", 7, today),
        "evening_routine_7": lambda: _check_routine_streak(user_id, "evening", 7, today),
        "perfect_week": lambda: _check_perfect_week(user_id, today),
        "water_goal_7": lambda: _check_water_goal(user_id, 7, today),
        "all_habits_today": lambda: _check_all_habits_today(user_id, today),
        "10_habits_created": lambda: _check_habits_created(user_id, 10),
        "100_completions": lambda: _completed_count(user_id) >= 100,
        "500_completions": lambda: _completed_count(user_id) >= 500,
        "early_bird": lambda: _check_logged_hour(user_id, lambda hour: hour < 6),
        "night_owl": lambda: _check_logged_hour(user_id, lambda hour: hour >= 22),
        "comeback": lambda: _check_comeback(user_id, habit_id),
    }
    check = checks.get(requirement)
    if check is None:
        return False
    return check()


def check_and_unlock(
    user_id: str, habit_id: Optional[str] = None, today: Optional[date] = None
) -> List[Achievement]:
    """Unlock every locked achievement whose requirement now holds; return the new ones."""
    unlocked_ids = set(achievement_store.get_unlocked_ids(user_id))
    newly: List[Achievement] = []
    for achievement in catalog.get_all():
        if achievement.id in unlocked_ids:
            continue
        if check_requirement(user_id, achievement.requirement, habit_id, today):
            achievement_store.unlock(user_id, achievement.id, achievement.points, habit_id)
            newly.append(achievement)
    if newly:
        log.info("user %s unlocked %s", user_id, ", ".join(a.id for a in newly))
    return newly


def _max_current_streak(user_id: str, today: Optional[date]) -> int:
    best = 0
    for habit in habit_store.get_all(user_id):
        best = max(best, habit_stats.calculate_streak(user_id, habit.id, today=today))
    return best


def calculate_progress(user_id: str, requirement: str, today: Optional[date] = None) -> Tuple[float, str]:
    if requirement == "first_habit":
        current = 1 if _check_first_habit(user_id) else 0
        target = 1
        details = f"{current}/1 habitude complétée"
    elif requirement in ("7_day_streak", "30_day_streak", "100_day_streak"):
        current = _max_current_streak(user_id, today)
        target = int(requirement.split("_", 1)[0])
        details = f"{min(current, target)}/{target} jours"
    elif requirement == "10_habits_created":
        current = len(habit_store.get_all(user_id))
        target = 10
        details = f"{min(current, target)}/{target} habitudes créées"
    elif requirement in ("100_completions", "500_completions"):
        current = _completed_count(user_id)
        target = int(requirement.split("_", 1)[0])
        details = f"{min(current, target)}/{target} complétions"
    else:
        current = 1 if check_requirement(user_id, requirement, today=today) else 0
        target = 1
        details = "À débloquer"
    return min(current / target * 100, 100.0), details


def get_all_with_progress(user_id: str, today: Optional[date] = None) -> List[AchievementProgress]:
    record = achievement_store.get(user_id)
    unlocked = {a.achievement_id: a for a in record.achievements}
    out: List[AchievementProgress] = []
    for achievement in catalog.get_all():
        progress, details = calculate_progress(user_id, achievement.requirement, today)
        hit = unlocked.get(achievement.id)
        out.append(
            AchievementProgress(
                achievement=achievement,
                unlocked=hit is not None,
                unlocked_date=hit.unlocked_date if hit else None,
                progress=progress,
                progress_details=details,
            )
        )
    return out


def get_unlocked(user_id: str) -> List[Achievement]:
    ids = set(achievement_store.get_unlocked_ids(user_id))
    return [a for a in catalog.get_all() if a.id in ids]


def get_locked(user_id: str) -> List[Achievement]:
    ids = set(achievement_store.get_unlocked_ids(user_id))
    return [a for a in catalog.get_all() if a.id not in ids]


def get_summary(user_id: str, today: Optional[date] = None) -> AchievementSummary:
    items = get_all_with_progress(user_id, today)
    record = achievement_store.get(user_id)
    return AchievementSummary(
        total_points=record.total_points,
        level=record.level,
        points_for_next_level=achievement_store.get_points_for_next_level(user_id),
        unlocked_count=len(record.achievements),
        total_count=len(items),
        achievements=items,
    )
