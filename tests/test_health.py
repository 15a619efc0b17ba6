# -*- coding: utf-8 -*-

from __future__ import annotations

import tempfile
import unittest
from datetime import date, timedelta
from pathlib import Path
from unittest import mock

from healthtrack import blobstore
from healthtrack.ai import gemini
from healthtrack.config import settings
from healthtrack.health import analytics, goals, measurements, summaries, user_stats, water
from healthtrack.health.models import (
    HealthGoalCreateRequest,
    HealthGoalUpdateRequest,
    MeasurementsCreateRequest,
    MeasurementsUpdateRequest,
    MilestoneRequest,
    WeeklySummary,
)
from healthtrack.meals import storage as meal_store
from healthtrack.meals.models import CustomFood, MealLogCreateRequest
from healthtrack.profile import storage as profile_store
from healthtrack.profile.models import ProfileCreateRequest
from healthtrack.recipes import storage as recipe_store
from healthtrack.recipes.models import RecipeCreateRequest
from healthtrack.weight import storage as weight_store
from healthtrack.weight.models import WeightLogCreateRequest
from healthtrack.workouts import storage as workout_store
from healthtrack.workouts.models import WorkoutCreateRequest

USER = "alice"
TODAY = date(2024, 3, 13)


class _TempDataRoot(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory(prefix="healthtrack-test-")
        self.addCleanup(self._tmp.cleanup)
        patcher = mock.patch.object(settings, "data_root", Path(self._tmp.name))
        patcher.start()
        self.addCleanup(patcher.stop)

    def _profile(self) -> None:
        # 2556 kcal, 192 g protein
        profile_store.create(USER, ProfileCreateRequest(weight=70, height=175, age=30, sex="male"))

    def _meal(self, day: str, calories: float, protein: float = 0, recipe_id=None) -> None:
        food = None if recipe_id else CustomFood(name="Repas", calories=calories, protein=protein)
        meal_store.create(
            USER,
            MealLogCreateRequest(date=day, meal_type="lunch", recipe_id=recipe_id, custom_food=food, servings=1),
        )

    def _workout(self, day: str, duration: int = 45, name=None) -> None:
        workout_store.create(USER, WorkoutCreateRequest(date=day, total_duration=duration, routine_name=name))


class TestMeasurements(_TempDataRoot):
    def test_history_and_change(self) -> None:
        measurements.create(USER, MeasurementsCreateRequest(date="2024-03-01", waist=90))
        measurements.create(USER, MeasurementsCreateRequest(date="2024-03-10", waist=88.5, chest=100))
        latest = measurements.create(USER, MeasurementsCreateRequest(date="2024-03-12", chest=101))

        self.assertEqual([m.date for m in measurements.get_all(USER)], ["2024-03-12", "2024-03-10", "2024-03-01"])
        self.assertEqual(measurements.get_latest(USER).id, latest.id)
        self.assertEqual(measurements.get_measurement_change(USER, "waist", "2024-03-01", "2024-03-10"), -1.5)
        self.assertEqual(measurements.get_measurement_change(USER, "chest", "2024-03-10", "2024-03-12"), 1.0)
        self.assertIsNone(measurements.get_measurement_change(USER, "waist", "2024-03-01", "2024-03-12"))
        self.assertIsNone(measurements.get_measurement_change(USER, "waist", "2024-03-01", "2024-03-05"))

    def test_update_and_delete(self) -> None:
        entry = measurements.create(USER, MeasurementsCreateRequest(date="2024-03-01", waist=90, neck=38))
        updated = measurements.update(USER, entry.id, MeasurementsUpdateRequest(waist=89))
        self.assertEqual(updated.waist, 89)
        self.assertEqual(updated.neck, 38)
        self.assertEqual(updated.date, "2024-03-01")
        self.assertTrue(measurements.delete(USER, entry.id))
        self.assertIsNone(measurements.get_latest(USER))
        self.assertFalse(measurements.delete(USER, entry.id))


class TestHealthGoals(_TempDataRoot):
    def _weight_goal(self):
        return goals.create(
            USER,
            HealthGoalCreateRequest(
                category="weight",
                title="Perdre 10 kg",
                current_value=80,
                target_value=70,
                unit="kg",
                target_date="2024-06-01",
                milestones=[
                    MilestoneRequest(title="-5 kg", target_value=75),
                    MilestoneRequest(title="-8 kg", target_value=72),
                ],
            ),
        )

    def test_decreasing_goal_progress(self) -> None:
        goal = self._weight_goal()
        self.assertEqual(goal.start_value, 80)
        self.assertEqual(goals.progress_percentage(goal), 0.0)

        goal = goals.update_progress(USER, goal.id, 76)
        self.assertEqual(goals.progress_percentage(goal), 40.0)
        self.assertEqual(goals.get_achieved_milestones(USER, goal.id), [])

        goal = goals.update_progress(USER, goal.id, 74)
        self.assertEqual([m.title for m in goals.get_achieved_milestones(USER, goal.id)], ["-5 kg"])
        self.assertEqual([m.title for m in goals.get_pending_milestones(USER, goal.id)], ["-8 kg"])
        self.assertEqual(goal.status, "active")

        goal = goals.update_progress(USER, goal.id, 69)
        self.assertEqual(goal.status, "completed")
        self.assertIsNotNone(goal.completed_at)
        self.assertTrue(all(m.achieved for m in goal.milestones))
        self.assertEqual(goals.progress_percentage(goal), 100.0)

    def test_increasing_goal_and_milestones(self) -> None:
        goal = goals.create(
            USER,
            HealthGoalCreateRequest(
                category="fitness", title="10 km", current_value=0, target_value=10, unit="km", target_date="2024-03-20"
            ),
        )
        goal = goals.add_milestone(USER, goal.id, MilestoneRequest(title="5 km", target_value=5))
        goal = goals.update_progress(USER, goal.id, 5)
        self.assertEqual(goals.progress_percentage(goal), 50.0)
        self.assertTrue(goal.milestones[0].achieved)
        # Falling back below a milestone does not undo it.
        goal = goals.update_progress(USER, goal.id, 3)
        self.assertTrue(goal.milestones[0].achieved)
        self.assertEqual(goals.days_remaining(goal, today=TODAY), 7)
        self.assertEqual(goals.days_remaining(goal, today=date(2024, 3, 23)), -3)

    def test_queries_and_status_update(self) -> None:
        goal = self._weight_goal()
        self.assertEqual([g.id for g in goals.get_active(USER)], [goal.id])
        self.assertEqual(goals.get_by_category(USER, "nutrition"), [])

        paused = goals.update(USER, goal.id, HealthGoalUpdateRequest(title=None, status="paused"))
        self.assertEqual(paused.title, "Perdre 10 kg")
        self.assertEqual(goals.get_active(USER), [])
        self.assertIsNone(paused.completed_at)

        done = goals.update(USER, goal.id, HealthGoalUpdateRequest(status="completed"))
        self.assertIsNotNone(done.completed_at)
        self.assertEqual([g.id for g in goals.get_by_status(USER, "completed")], [goal.id])

        self.assertTrue(goals.delete(USER, goal.id))
        self.assertIsNone(goals.update_progress(USER, goal.id, 70))
        self.assertEqual(goals.get_pending_milestones(USER, goal.id), [])

    def test_flat_goal_is_complete(self) -> None:
        goal = goals.create(
            USER,
            HealthGoalCreateRequest(
                category="health", title="Garder", current_value=5, target_value=5, unit="h", target_date="2024-04-01"
            ),
        )
        self.assertEqual(goals.progress_percentage(goal), 100.0)


class TestWater(_TempDataRoot):
    def test_daily_intake(self) -> None:
        self.assertEqual(water.get_amount(USER, TODAY), 0)
        water.add(USER, 500, TODAY)
        water.add(USER, 250, TODAY)
        water.add(USER, 1000, TODAY - timedelta(days=1))
        self.assertEqual(water.get_amount(USER, TODAY), 750)

        status = water.get_status(USER, TODAY)
        self.assertEqual(status.goal, 2000)
        self.assertEqual(status.percentage, 37.5)

        water.set_amount(USER, 3000, TODAY)
        self.assertEqual(water.get_status(USER, TODAY).percentage, 100.0)
        self.assertEqual(water.set_amount(USER, -5, TODAY).amount_ml, 0)
        in_march = water.get_by_date_range(USER, "2024-03-01", "2024-03-31")
        self.assertEqual([e.date for e in in_march], ["2024-03-12", "2024-03-13"])


class TestUserStats(_TempDataRoot):
    def test_streak(self) -> None:
        stats = user_stats.record_activity(USER, today=TODAY)
        self.assertEqual(stats.current_streak, 1)
        self.assertEqual(user_stats.record_activity(USER, today=TODAY).current_streak, 1)
        self.assertEqual(user_stats.record_activity(USER, today=TODAY + timedelta(days=1)).current_streak, 2)

        stats = user_stats.record_activity(USER, today=TODAY + timedelta(days=5))
        self.assertEqual(stats.current_streak, 1)
        self.assertEqual(stats.longest_streak, 2)
        self.assertEqual(stats.last_activity_date, "2024-03-18")

    def test_counters_and_badges(self) -> None:
        self.assertEqual(len(user_stats.get_locked_badges(USER)), len(user_stats.BADGES))

        stats = user_stats.increment_meals(USER, today=TODAY)
        self.assertEqual(stats.total_meals_logged, 1)
        self.assertEqual(stats.badges, ["first_meal"])

        for offset in range(1, 7):
            stats = user_stats.increment_workouts(USER, today=TODAY + timedelta(days=offset))
        self.assertEqual(stats.current_streak, 7)
        self.assertEqual(stats.total_workouts, 6)
        self.assertEqual([b.id for b in user_stats.get_unlocked_badges(USER)], ["first_meal", "week_streak"])

        stats = user_stats.increment_recipes(USER)
        self.assertEqual(stats.total_recipes_generated, 1)
        self.assertEqual(stats.last_activity_date, "2024-03-19")

        stats = user_stats.reset(USER)
        self.assertEqual(stats.badges, [])
        self.assertEqual(stats.total_meals_logged, 0)

    def test_invalid_stats_are_replaced(self) -> None:
        blobstore.save_object(USER, user_stats.ENTITY, {"current_streak": "many"})
        stats = user_stats.get(USER)
        self.assertEqual(stats.user_id, USER)
        self.assertEqual(stats.current_streak, 0)


class TestCompliance(_TempDataRoot):
    def test_scoring(self) -> None:
        self._profile()
        for calories, protein in ((800, 60), (900, 60), (800, 60)):
            self._meal("2024-03-12", calories, protein)
        self._workout("2024-03-12")
        self._meal("2024-03-13", 1000, 200)
        self._meal("2024-03-13", 100, 0)

        days = analytics.get_compliance_days(USER, "2024-03-11", "2024-03-13")
        self.assertEqual([d.overall_compliance for d in days], [0, 100, 30])
        self.assertTrue(days[1].calories_goal_met)
        self.assertTrue(days[1].protein_goal_met)
        self.assertEqual(days[1].meals_logged, 3)
        self.assertFalse(days[2].calories_goal_met)
        self.assertTrue(days[2].protein_goal_met)
        self.assertEqual(analytics.count_compliant(days), 1)

    def test_without_profile_only_activity_counts(self) -> None:
        for _ in range(3):
            self._meal("2024-03-13", 800, 60)
        self._workout("2024-03-13")
        day = analytics.get_compliance_days(USER, TODAY, TODAY)[0]
        self.assertFalse(day.calories_goal_met)
        self.assertFalse(day.protein_goal_met)
        self.assertEqual(day.overall_compliance, 30)


class TestDashboard(_TempDataRoot):
    def test_summary_with_default_goals(self) -> None:
        self._meal("2024-03-13", 500, 30)
        water.add(USER, 500, TODAY)
        self._workout("2024-03-13", duration=40)
        weight_store.create(USER, WeightLogCreateRequest(date="2024-03-06", weight=80))
        weight_store.create(USER, WeightLogCreateRequest(date="2024-03-13", weight=79))
        user_stats.record_activity(USER, today=TODAY)

        bowl = recipe_store.create(USER, RecipeCreateRequest(name="Bowl", nutrition_info={"calories": 400}))
        self._meal("2024-03-11", 0, recipe_id=bowl.id)
        self._meal("2024-03-12", 0, recipe_id=bowl.id)
        self._meal("2024-03-08", 0, recipe_id=bowl.id)

        summary = analytics.get_dashboard_summary(USER, today=TODAY)
        self.assertEqual(summary.calories.goal, 2000)
        self.assertEqual(summary.calories.remaining, 1500)
        self.assertEqual(summary.calories.percentage, 25.0)
        self.assertEqual(summary.macros["protein"].percentage, 20.0)
        self.assertEqual(summary.macros["fat"].goal, 60)
        self.assertEqual(summary.hydration.percentage, 25.0)
        self.assertEqual(summary.today_workout.name, "Workout")
        self.assertEqual(summary.today_workout.duration, 40)
        self.assertEqual(summary.current_weight, 79)
        self.assertEqual(summary.week_weight_change, -1.0)
        self.assertEqual(summary.current_streak, 1)
        self.assertEqual([(r.name, r.times_cooked) for r in summary.favorite_recipes], [("Bowl", 2)])

    def test_empty_day(self) -> None:
        summary = analytics.get_dashboard_summary(USER, today=TODAY)
        self.assertEqual(summary.calories.consumed, 0)
        self.assertIsNone(summary.today_workout)
        self.assertIsNone(summary.current_weight)
        self.assertEqual(summary.favorite_recipes, [])


class TestTrends(_TempDataRoot):
    def test_week(self) -> None:
        self._meal("2024-03-12", 1800, 100)
        self._meal("2024-03-13", 2000, 120)
        self._meal("2024-03-13", 200, 0)
        self._meal("2024-03-01", 5000, 0)
        self._workout("2024-03-08", duration=30)
        self._workout("2024-03-11", duration=40)
        self._workout("2024-03-13", duration=60)

        trends = analytics.get_trends(USER, "week", today=TODAY)
        self.assertEqual(trends.nutrition_trends.labels, ["2024-03-12", "2024-03-13"])
        self.assertEqual(trends.nutrition_trends.calories, [1800, 2200])
        self.assertEqual(trends.workout_consistency.labels, ["2024-03-04", "2024-03-11"])
        self.assertEqual(trends.workout_consistency.workouts, [1, 2])
        self.assertEqual(trends.workout_consistency.avg_duration, [30, 50])
        self.assertEqual(trends.compliance.labels, ["2024-03-07"])
        self.assertEqual(trends.compliance.compliance_rate, [0])

    def test_quarter_buckets_and_compliance_weeks(self) -> None:
        self._meal("2024-03-13", 2000, 0)
        self._meal("2024-03-12", 1000, 0)
        trends = analytics.get_trends(USER, "quarter", today=TODAY)
        # 90 days from 2023-12-15 in 3-day buckets; the last one starts on 2024-03-11.
        self.assertEqual(trends.nutrition_trends.labels, ["2024-03-11"])
        self.assertEqual(trends.nutrition_trends.calories, [1500])
        self.assertEqual(len(trends.compliance.labels), 13)
        self.assertEqual(trends.compliance.labels[-1], "2024-03-07")

    def test_weight_trend_and_correlation(self) -> None:
        for offset, (weight, calories) in enumerate(((80, 2600), (79.5, 2400), (79, 2200))):
            day = (TODAY - timedelta(days=2 - offset)).isoformat()
            weight_store.create(USER, WeightLogCreateRequest(date=day, weight=weight))
            self._meal(day, calories)

        trends = analytics.get_trends(USER, "week", today=TODAY)
        self.assertEqual(trends.weight_trends.weight, [80, 79.5, 79])
        self.assertEqual(trends.weight_trends.predicted_weight, [80, 79.5, 79])
        self.assertEqual(trends.correlations.weight_vs_calories, 1.0)

    def test_pearson(self) -> None:
        self.assertEqual(analytics.pearson_correlation([1, 2, 3], [2, 4, 6]), 1.0)
        self.assertEqual(analytics.pearson_correlation([1, 2, 3], [3, 2, 1]), -1.0)
        self.assertEqual(analytics.pearson_correlation([1, 1, 1], [3, 2, 1]), 0.0)
        self.assertEqual(analytics.pearson_correlation([], []), 0.0)


class TestWeeklySummaries(_TempDataRoot):
    def test_generate_uses_fallback_insights(self) -> None:
        self._meal("2024-03-12", 1800, 90)
        self._workout("2024-03-11")
        with mock.patch.object(gemini, "generate_json", side_effect=RuntimeError("down")):
            summary = summaries.generate(USER, TODAY)

        self.assertEqual((summary.week_start, summary.week_end), ("2024-03-11", "2024-03-17"))
        self.assertEqual(summary.avg_calories, 1800)
        self.assertEqual(summary.workouts_done, 1)
        self.assertEqual(summary.compliance_days, 0)
        self.assertIn("Essayez de logger vos repas plus régulièrement", summary.insights)
        self.assertTrue(summaries.exists_for_week(USER, "2024-03-17"))
        self.assertFalse(summaries.exists_for_week(USER, "2024-03-18"))

    def test_regenerate_replaces_the_week(self) -> None:
        parsed = {"summary": "Bonne semaine", "highlights": ["Régulier"], "suggestions": ["Dormir plus"]}
        with mock.patch.object(gemini, "generate_json", return_value=parsed):
            first = summaries.generate(USER, TODAY)
            second = summaries.generate(USER, "2024-03-15")

        self.assertEqual(first.id, second.id)
        self.assertEqual(second.insights, ["Bonne semaine", "Régulier", "Dormir plus"])
        self.assertEqual(len(summaries.get_all(USER)), 1)
        self.assertTrue(summaries.delete(USER, second.id))
        self.assertIsNone(summaries.get_latest(USER))

    def test_average_compliance_and_trend(self) -> None:
        stored = [
            WeeklySummary(
                id=f"summary_{i}",
                user_id=USER,
                week_start=start,
                week_end=end,
                avg_calories=calories,
                compliance_days=compliant,
                created_at="2024-03-17T20:00:00+00:00",
            )
            for i, (start, end, calories, compliant) in enumerate(
                (("2024-03-04", "2024-03-10", 2100.4, 7), ("2024-02-26", "2024-03-03", 1900.6, 0))
            )
        ]
        blobstore.save_models(USER, summaries.ENTITY, stored, WeeklySummary)

        self.assertEqual(summaries.get_latest(USER).id, "summary_0")
        self.assertEqual(summaries.get_average_compliance(USER), 50)
        trend = summaries.get_trend_data(USER)
        self.assertEqual(trend.labels, ["2024-02-26", "2024-03-04"])
        self.assertEqual(trend.calories, [1901, 2100])
        self.assertEqual(trend.compliance, [0, 100])
        self.assertEqual(summaries.get_average_compliance("bob"), 0)


if __name__ == "__main__":
    unittest.main()
