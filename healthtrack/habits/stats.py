# -*- coding: utf-8 -*-
"""Habit statistics: streaks, completion rates and streak history.

Streaks count consecutive calendar days with a completed log. A streak is
still alive when the newest completed day is today or yesterday.
"""

from __future__ import annotations

from datetime import date, timedelta
from typing import List, Optional, Set

from . import logs as log_store
from . import storage as habit_store
from .models import HabitStats, StreakPoint, TodayHabit
from ..utils import iter_days, js_weekday, to_day

# Upper bound on the days walked back by get_overall_streak.
OVERALL_STREAK_LOOKBACK_DAYS = 365


def _completed_days(user_id: str, habit_id: str) -> List[date]:
    """Completed log days of a habit, newest first (duplicates kept)."""
    return [to_day(l.date) for l in log_store.get_by_habit_id(user_id, habit_id) if l.completed]


def calculate_streak(user_id: str, habit_id: str, today: Optional[date] = None) -> int:
    days = _completed_days(user_id, habit_id)
    if not days:
        return 0

    today = today or date.today()
    if (today - days[0]).days > 1:
        return 0

    streak = 1
    current = days[0]
    for day in days[1:]:
        if day == current:
            continue
        if day == current - timedelta(days=1):
            streak += 1
            current = day
        else:
            break
    return streak


def calculate_longest_streak(user_id: str, habit_id: str) -> int:
    days = sorted(_completed_days(user_id, habit_id))
    if not days:
        return 0

    longest = 0
    current = 1
    previous = days[0]
    for day in days[1:]:
        if day == previous:
            continue
        if day == previous + timedelta(days=1):
            current += 1
        else:
            longest = max(longest, current)
            current = 1
        previous = day
    return max(longest, current)


def calculate_total_completions(user_id: str, habit_id: str) -> int:
    return log_store.get_completion_count(user_id, habit_id)


def calculate_completion_rate(
    user_id: str, habit_id: str, days: int = 30, today: Optional[date] = None
) -> float:
    habit = habit_store.get_by_id(user_id, habit_id)
    if habit is None:
        return 0.0

    end = today or date.today()
    window = iter_days(end - timedelta(days=days), end)
    if habit.frequency == "daily":
        scheduled = window
    elif habit.frequency == "weekly" and habit.specific_days:
        scheduled = [d for d in window if js_weekday(d) in habit.specific_days]
    else:
        scheduled = []
    if not scheduled:
        return 0.0

    completed: Set[date] = set(_completed_days(user_id, habit_id))
    done = sum(1 for d in scheduled if d in completed)
    return done / len(scheduled) * 100


def calculate_average_value(user_id: str, habit_id: str) -> Optional[float]:
    return log_store.get_average_value(user_id, habit_id)


def get_last_completed_date(user_id: str, habit_id: str) -> Optional[str]:
    days = _completed_days(user_id, habit_id)
    return days[0].isoformat() if days else None


def get_streak_history(
    user_id: str, habit_id: str, days: int = 30, today: Optional[date] = None
) -> List[StreakPoint]:
    completed = set(_completed_days(user_id, habit_id))
    if not completed:
        return []

    end = today or date.today()
    history: List[StreakPoint] = []
    streak = 0
    for day in iter_days(end - timedelta(days=days), end):
        streak = streak + 1 if day in completed else 0
        history.append(StreakPoint(date=day.isoformat(), streak=streak))
    return history


def get_stats(user_id: str, habit_id: str, today: Optional[date] = None) -> HabitStats:
    return HabitStats(
        habit_id=habit_id,
        current_streak=calculate_streak(user_id, habit_id, today=today),
        longest_streak=calculate_longest_streak(user_id, habit_id),
        total_completions=calculate_total_completions(user_id, habit_id),
        completion_rate=calculate_completion_rate(user_id, habit_id, today=today),
        average_value=calculate_average_value(user_id, habit_id),
        last_completed_date=get_last_completed_date(user_id, habit_id),
        streak_history=get_streak_history(user_id, habit_id, 30, today=today),
    )


def get_today_habits(user_id: str, today: Optional[date] = None) -> List[TodayHabit]:
    today = today or date.today()
    out: List[TodayHabit] = []
    for habit in habit_store.get_scheduled_for_today(user_id, today):
        entry = log_store.get_by_habit_and_date(user_id, habit.id, today)
        out.append(TodayHabit(habit=habit, log=entry, is_scheduled_today=True))
    return out


def get_today_completion_rate(user_id: str, today: Optional[date] = None) -> float:
    items = get_today_habits(user_id, today)
    if not items:
        return 0.0
    done = sum(1 for item in items if item.log is not None and item.log.completed)
    return done / len(items) * 100


def get_overall_streak(user_id: str, today: Optional[date] = None) -> int:
    """Consecutive days, walking back from today, on which every scheduled habit was completed.

    Days with nothing scheduled are skipped without breaking the streak.
    """
    current = today or date.today()
    habits = habit_store.get_all(user_id)
    completed = {(l.habit_id, l.date) for l in log_store.get_all(user_id) if l.completed}

    streak = 0
    for _ in range(OVERALL_STREAK_LOOKBACK_DAYS):
        weekday = js_weekday(current)
        scheduled = [h for h in habits if habit_store.is_scheduled_on(h, weekday)]
        if scheduled:
            key = current.isoformat()
            if all((h.id, key) in completed for h in scheduled):
                streak += 1
            else:
                break
        current = current - timedelta(days=1)
    return streak
