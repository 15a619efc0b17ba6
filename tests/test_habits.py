# -*- coding: utf-8 -*-

from __future__ import annotations

import tempfile
import unittest
from datetime import date, timedelta
from pathlib import Path
from unittest import mock

from pydantic import ValidationError

from healthtrack.config import settings
from healthtrack.habits import checkins, logs, routines, stats, storage
from healthtrack.habits.models import (
    CheckInRequest,
    HabitCreateRequest,
    HabitUpdateRequest,
    RoutineCreateRequest,
    RoutineUpdateRequest,
)

USER = "alice"
# A Wednesday.
TODAY = date(2024, 3, 13)


def _days_ago(n: int) -> date:
    return TODAY - timedelta(days=n)


class _TempDataRoot(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory(prefix="healthtrack-test-")
        self.addCleanup(self._tmp.cleanup)
        patcher = mock.patch.object(settings, "data_root", Path(self._tmp.name))
        patcher.start()
        self.addCleanup(patcher.stop)


class TestHabitRepository(_TempDataRoot):
    def test_create_update_and_soft_delete(self) -> None:
        habit = storage.create(USER, HabitCreateRequest(name="Drink water", type="number", target=2000, unit="ml"))
        self.assertTrue(habit.id.startswith("habit_"))
        self.assertTrue(habit.is_active)

        updated = storage.update(USER, habit.id, HabitUpdateRequest(name="Drink more water"))
        self.assertEqual(updated.name, "Drink more water")
        self.assertEqual(updated.target, 2000)

        self.assertTrue(storage.delete(USER, habit.id))
        self.assertEqual(storage.get_active(USER), [])
        self.assertEqual(len(storage.get_all(USER)), 1)
        self.assertFalse(storage.get_by_id(USER, habit.id).is_active)

    def test_missing_habit(self) -> None:
        self.assertIsNone(storage.get_by_id(USER, "nope"))
        self.assertIsNone(storage.update(USER, "nope", HabitUpdateRequest(name="x")))
        self.assertFalse(storage.hard_delete(USER, "nope"))

    def test_null_patch_keeps_required_fields(self) -> None:
        habit = storage.create(USER, HabitCreateRequest(name="Read", category="mindfulness"))
        patch = HabitUpdateRequest.model_validate(
            {"name": None, "frequency": None, "category": None, "description": "20 pages"}
        )
        updated = storage.update(USER, habit.id, patch)
        self.assertEqual(updated.name, "Read")
        self.assertEqual(updated.frequency, "daily")
        self.assertEqual(updated.category, "mindfulness")
        self.assertEqual(updated.description, "20 pages")

        routine = routines.create(USER, RoutineCreateRequest(name="Morning", habit_ids=[habit.id]))
        kept = routines.update(USER, routine.id, RoutineUpdateRequest.model_validate({"name": None, "habit_ids": None}))
        self.assertEqual(kept.name, "Morning")
        self.assertEqual(kept.habit_ids, [habit.id])

    def test_specific_days_validation(self) -> None:
        with self.assertRaises(ValidationError):
            HabitCreateRequest(name="Gym", frequency="weekly", specific_days=[7])
        req = HabitCreateRequest(name="Gym", frequency="weekly", specific_days=[5, 1, 1])
        self.assertEqual(req.specific_days, [1, 5])

    def test_scheduling(self) -> None:
        daily = storage.create(USER, HabitCreateRequest(name="Read"))
        weekly = storage.create(USER, HabitCreateRequest(name="Gym", frequency="weekly", specific_days=[1, 3]))
        # Wednesday is weekday 3 with Sunday=0.
        ids = {h.id for h in storage.get_scheduled_for_today(USER, TODAY)}
        self.assertEqual(ids, {daily.id, weekly.id})
        ids = {h.id for h in storage.get_scheduled_for_today(USER, TODAY + timedelta(days=1))}
        self.assertEqual(ids, {daily.id})

    def test_search_and_category(self) -> None:
        storage.create(USER, HabitCreateRequest(name="Morning run", category="fitness"))
        storage.create(USER, HabitCreateRequest(name="Meditate", description="10 minutes", category="mindfulness"))
        self.assertEqual([h.name for h in storage.search(USER, "MINUTES")], ["Meditate"])
        self.assertEqual([h.name for h in storage.get_by_category(USER, "fitness")], ["Morning run"])


class TestHabitLogRepository(_TempDataRoot):
    def test_log_is_upserted_per_day(self) -> None:
        first = logs.log(USER, "habit_1", TODAY, True, value=500)
        second = logs.log(USER, "habit_1", TODAY.isoformat(), True, value=1500)
        self.assertEqual(first.id, second.id)
        self.assertEqual(len(logs.get_all(USER)), 1)
        self.assertEqual(logs.get_by_habit_and_date(USER, "habit_1", TODAY).value, 1500)

    def test_queries_and_aggregates(self) -> None:
        logs.log(USER, "habit_1", _days_ago(2), True, value=1000)
        logs.log(USER, "habit_1", _days_ago(1), False)
        logs.log(USER, "habit_1", TODAY, True, value=2000)
        logs.log(USER, "habit_2", TODAY, True)

        by_habit = logs.get_by_habit_id(USER, "habit_1")
        self.assertEqual([l.date for l in by_habit], [d.isoformat() for d in (TODAY, _days_ago(1), _days_ago(2))])
        self.assertEqual(logs.get_completion_count(USER, "habit_1"), 2)
        self.assertEqual(logs.get_average_value(USER, "habit_1"), 1500)
        self.assertIsNone(logs.get_average_value(USER, "habit_2"))
        self.assertEqual(len(logs.get_by_date_range(USER, _days_ago(1), TODAY)), 3)
        self.assertTrue(logs.was_completed_on_date(USER, "habit_1", TODAY))
        self.assertFalse(logs.was_completed_on_date(USER, "habit_1", _days_ago(1)))
        self.assertEqual(logs.delete_by_habit_id(USER, "habit_1"), 3)
        self.assertEqual(len(logs.get_all(USER)), 1)


class TestHabitStats(_TempDataRoot):
    def setUp(self) -> None:
        super().setUp()
        self.habit = storage.create(USER, HabitCreateRequest(name="Read"))

    def _complete(self, *days_ago: int) -> None:
        for n in days_ago:
            logs.log(USER, self.habit.id, _days_ago(n), True)

    def test_streak_with_yesterday_grace(self) -> None:
        self._complete(1, 2, 3, 5)
        self.assertEqual(stats.calculate_streak(USER, self.habit.id, today=TODAY), 3)

    def test_streak_broken_by_gap(self) -> None:
        self._complete(2, 3)
        self.assertEqual(stats.calculate_streak(USER, self.habit.id, today=TODAY), 0)

    def test_longest_streak_and_last_completed(self) -> None:
        self._complete(0, 4, 5, 6, 7, 10)
        self.assertEqual(stats.calculate_longest_streak(USER, self.habit.id), 4)
        self.assertEqual(stats.get_last_completed_date(USER, self.habit.id), TODAY.isoformat())

    def test_completion_rate_counts_scheduled_days(self) -> None:
        self._complete(0, 1, 2)
        rate = stats.calculate_completion_rate(USER, self.habit.id, days=9, today=TODAY)
        self.assertAlmostEqual(rate, 30.0)

    def test_weekly_completion_rate(self) -> None:
        gym = storage.create(USER, HabitCreateRequest(name="Gym", frequency="weekly", specific_days=[3]))
        logs.log(USER, gym.id, TODAY, True)
        # Window TODAY-14 .. TODAY holds three Wednesdays.
        rate = stats.calculate_completion_rate(USER, gym.id, days=14, today=TODAY)
        self.assertAlmostEqual(rate, 100 / 3)

    def test_streak_history(self) -> None:
        self._complete(0, 1)
        history = stats.get_streak_history(USER, self.habit.id, days=3, today=TODAY)
        self.assertEqual([p.streak for p in history], [0, 0, 1, 2])
        self.assertEqual(history[-1].date, TODAY.isoformat())

    def test_today_habits_and_overall_streak(self) -> None:
        other = storage.create(USER, HabitCreateRequest(name="Stretch"))
        for n in (0, 1, 2):
            logs.log(USER, self.habit.id, _days_ago(n), True)
        logs.log(USER, other.id, TODAY, True)
        logs.log(USER, other.id, _days_ago(1), True)

        self.assertEqual(stats.get_today_completion_rate(USER, today=TODAY), 100.0)
        self.assertEqual(stats.get_overall_streak(USER, today=TODAY), 2)
        today = stats.get_today_habits(USER, today=TODAY)
        self.assertEqual(len(today), 2)
        self.assertTrue(all(item.log is not None for item in today))


class TestOverallStreak(_TempDataRoot):
    def test_unscheduled_days_are_skipped(self) -> None:
        gym = storage.create(USER, HabitCreateRequest(name="Gym", frequency="weekly", specific_days=[3]))
        for n in (0, 7, 14):
            logs.log(USER, gym.id, _days_ago(n), True)
        self.assertEqual(stats.get_overall_streak(USER, today=TODAY), 3)
        # Thursday: nothing scheduled, streak carries over from Wednesday.
        self.assertEqual(stats.get_overall_streak(USER, today=TODAY + timedelta(days=1)), 3)

    def test_lookback_is_bounded(self) -> None:
        habit = storage.create(USER, HabitCreateRequest(name="Read"))
        for n in range(400):
            logs.log(USER, habit.id, _days_ago(n), True)
        self.assertEqual(stats.get_overall_streak(USER, today=TODAY), stats.OVERALL_STREAK_LOOKBACK_DAYS)
        self.assertEqual(stats.OVERALL_STREAK_LOOKBACK_DAYS, 365)


class TestRoutinesAndCheckIns(_TempDataRoot):
    def test_routine_habit_membership(self) -> None:
        routine = routines.create(USER, RoutineCreateRequest(name="Morning", type="morning"))
        routines.add_habit(USER, routine.id, "habit_1")
        routines.add_habit(USER, routine.id, "habit_1")
        self.assertEqual(routines.get_by_id(USER, routine.id).habit_ids, ["habit_1"])
        routines.remove_habit(USER, routine.id, "habit_1")
        self.assertEqual(routines.get_by_id(USER, routine.id).habit_ids, [])

        toggled = routines.toggle_active(USER, routine.id)
        self.assertFalse(toggled.is_active)
        self.assertEqual(routines.get_by_type(USER, "morning"), [])
        self.assertIsNone(routines.toggle_active(USER, "nope"))

    def test_one_checkin_per_day_and_averages(self) -> None:
        base = dict(mood=4, energy=3, sleep_hours=7.5, sleep_quality=4)
        first = checkins.create_or_update(USER, CheckInRequest(date=TODAY.isoformat(), **base))
        again = checkins.create_or_update(USER, CheckInRequest(date=TODAY.isoformat(), **{**base, "mood": 2}))
        self.assertEqual(first.id, again.id)
        checkins.create_or_update(USER, CheckInRequest(date=_days_ago(1).isoformat(), **base))

        self.assertEqual(len(checkins.get_all(USER)), 2)
        self.assertEqual(checkins.get_average_mood(USER, today=TODAY), 3.0)
        averages = checkins.get_averages(USER, today=TODAY)
        self.assertEqual(averages.sleep_hours, 7.5)
        self.assertTrue(averages.checked_in_today)
        self.assertIsNone(checkins.get_average_energy(USER, today=TODAY + timedelta(days=30)))


if __name__ == "__main__":
    unittest.main()
