# -*- coding: utf-8 -*-

from __future__ import annotations

import tempfile
import unittest
from datetime import date
from pathlib import Path
from unittest import mock

from fastapi.testclient import TestClient

from healthtrack import __version__
from healthtrack.ai import gemini
from healthtrack.api import app
from healthtrack.config import settings

HEADERS = {"X-User-Id": "alice"}


class TestApi(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory(prefix="healthtrack-test-")
        self.addCleanup(self._tmp.cleanup)
        patcher = mock.patch.object(settings, "data_root", Path(self._tmp.name))
        patcher.start()
        self.addCleanup(patcher.stop)
        self.client = TestClient(app)
        self.today = date.today().isoformat()

    def test_health(self) -> None:
        resp = self.client.get("/api/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"status": "ok", "version": __version__})

    def test_invalid_user_header(self) -> None:
        resp = self.client.get("/api/habits", headers={"X-User-Id": "../etc"})
        self.assertEqual(resp.status_code, 400)

    def test_habit_flow(self) -> None:
        resp = self.client.post("/api/habits", json={"name": "Drink water"}, headers=HEADERS)
        self.assertEqual(resp.status_code, 201)
        habit = resp.json()

        resp = self.client.post(
            "/api/habits/log",
            json={"habit_id": habit["id"], "date": self.today, "completed": True},
            headers=HEADERS,
        )
        self.assertEqual(resp.status_code, 200)
        unlocked = {a["id"] for a in resp.json()["newly_unlocked"]}
        self.assertIn("first_habit", unlocked)

        today = self.client.get("/api/habits/today", headers=HEADERS).json()
        self.assertEqual(today["date"], self.today)
        self.assertEqual(today["completion_rate"], 100)
        self.assertEqual(today["streak"], 1)

        # Data is namespaced per user.
        self.assertEqual(self.client.get("/api/habits", headers={"X-User-Id": "bob"}).json(), [])

    def test_weekly_habit_needs_days(self) -> None:
        resp = self.client.post("/api/habits", json={"name": "Gym", "frequency": "weekly"}, headers=HEADERS)
        self.assertEqual(resp.status_code, 400)

    def test_habit_patch_validation(self) -> None:
        habit = self.client.post("/api/habits", json={"name": "Run"}, headers=HEADERS).json()
        url = f"/api/habits/{habit['id']}"

        resp = self.client.patch(url, json={"name": None}, headers=HEADERS)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Run")

        resp = self.client.patch(url, json={"frequency": "weekly"}, headers=HEADERS)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.get(url, headers=HEADERS).json()["frequency"], "daily")

        resp = self.client.patch(url, json={"frequency": "weekly", "specific_days": [1, 3]}, headers=HEADERS)
        self.assertEqual(resp.status_code, 200)
        resp = self.client.patch(url, json={"specific_days": None}, headers=HEADERS)
        self.assertEqual(resp.status_code, 400)

    def test_not_found(self) -> None:
        for path in ("/api/habits/nope", "/api/fridge/nope", "/api/recipes/nope", "/api/meals/nope",
                     "/api/weight/nope", "/api/workouts/nope", "/api/profile"):
            with self.subTest(path=path):
                self.assertEqual(self.client.get(path, headers=HEADERS).status_code, 404)

    def test_fridge_endpoints(self) -> None:
        resp = self.client.post(
            "/api/fridge",
            json={"name": "Milk", "quantity": 1, "unit": "L", "category": "Autre", "expiration_date": "next week"},
            headers=HEADERS,
        )
        self.assertEqual(resp.status_code, 400)

        resp = self.client.post(
            "/api/fridge",
            json={"name": "Lait", "quantity": 1, "unit": "L", "category": "Produits laitiers", "expiration_date": self.today},
            headers=HEADERS,
        )
        self.assertEqual(resp.status_code, 201)
        item_id = resp.json()["id"]

        [view] = self.client.get("/api/fridge", headers=HEADERS).json()
        self.assertEqual(view["expiration"]["days_remaining"], 0)
        self.assertTrue(view["expiration"]["is_expiring_soon"])
        self.assertEqual(len(self.client.get("/api/fridge/expiring", headers=HEADERS).json()), 1)
        self.assertEqual(self.client.get("/api/fridge/stats", headers=HEADERS).json()["total_items"], 1)

        resp = self.client.patch(f"/api/fridge/{item_id}", json={"quantity": 0.5}, headers=HEADERS)
        self.assertEqual(resp.json()["quantity"], 0.5)
        resp = self.client.patch(f"/api/fridge/{item_id}", json={"expiration_date": "next week"}, headers=HEADERS)
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.client.delete(f"/api/fridge/{item_id}", headers=HEADERS).status_code, 200)
        self.assertEqual(self.client.get("/api/fridge", headers=HEADERS).json(), [])

    def test_recipe_and_meal_flow(self) -> None:
        recipe = self.client.post(
            "/api/recipes",
            json={
                "name": "Omelette",
                "ingredients": [{"name": "oeufs", "quantity": 3, "unit": "pcs"}],
                "steps": ["Battre", "Cuire"],
                "nutrition_info": {"calories": 300, "protein": 20, "carbs": 2, "fat": 22},
                "tags": ["rapide"],
            },
            headers=HEADERS,
        ).json()
        self.assertEqual(self.client.get("/api/recipes/tags", headers=HEADERS).json(), ["rapide"])

        fav = self.client.post(f"/api/recipes/{recipe['id']}/favorite", headers=HEADERS).json()
        self.assertTrue(fav["is_favorite"])

        resp = self.client.post(
            "/api/meals",
            json={"date": self.today, "meal_type": "breakfast", "recipe_id": recipe["id"], "servings": 2},
            headers=HEADERS,
        )
        self.assertEqual(resp.status_code, 201)

        daily = self.client.get("/api/meals/daily", headers=HEADERS).json()
        self.assertEqual(daily["meal_count"], 1)
        self.assertEqual(daily["totals"]["calories"], 600)

        resp = self.client.post("/api/meals", json={"date": self.today, "meal_type": "lunch", "servings": 1}, headers=HEADERS)
        self.assertEqual(resp.status_code, 422)

    def test_profile_goals_and_progress(self) -> None:
        resp = self.client.post(
            "/api/profile",
            json={"weight": 80, "height": 180, "age": 30, "sex": "male", "goal_weight": 75},
            headers=HEADERS,
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["goals"]["bmr"], 1780)

        self.client.post(
            "/api/meals",
            json={
                "date": self.today,
                "meal_type": "lunch",
                "custom_food": {"name": "Salade", "calories": 500, "protein": 30, "carbs": 40, "fat": 20},
                "servings": 1,
            },
            headers=HEADERS,
        )
        progress = self.client.get("/api/profile/progress", headers=HEADERS).json()
        self.assertEqual(progress["calories"]["consumed"], 500)
        self.assertEqual(self.client.get("/api/profile/progress?date=bad", headers=HEADERS).status_code, 400)

    def test_weight_history_uses_profile_goal(self) -> None:
        self.client.post(
            "/api/profile",
            json={"weight": 80, "height": 200, "age": 30, "sex": "male", "goal_weight": 75},
            headers=HEADERS,
        )
        resp = self.client.post("/api/weight/log", json={"weight": 80}, headers=HEADERS)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["bmi"], 20)

        history = self.client.get("/api/weight/history", headers=HEADERS).json()
        self.assertEqual(len(history["logs"]), 1)

    def test_workout_endpoints(self) -> None:
        resp = self.client.post("/api/workouts", json={"total_duration": 45, "total_calories": 300}, headers=HEADERS)
        self.assertEqual(resp.status_code, 201)
        stats = self.client.get("/api/workouts/stats", headers=HEADERS).json()
        self.assertEqual(stats["total_workouts"], 1)
        self.assertEqual(stats["current_streak"], 1)
        self.assertEqual(self.client.get("/api/workouts/calendar?month=13&year=2024", headers=HEADERS).status_code, 422)

    def test_chat_saves_both_messages(self) -> None:
        with mock.patch.object(settings, "gemini_api_key", "test-key"), mock.patch.object(
            gemini, "generate_content", return_value="Mangez des légumes."
        ):
            resp = self.client.post("/api/ai/chat", json={"message": "Conseil ?"}, headers=HEADERS)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["reply"], "Mangez des légumes.")

        messages = self.client.get("/api/ai/chat/history", headers=HEADERS).json()["messages"]
        self.assertEqual([m["role"] for m in messages], ["user", "assistant"])

        self.assertEqual(self.client.delete("/api/ai/chat/history", headers=HEADERS).json(), {"ok": True})
        self.assertEqual(self.client.get("/api/ai/chat/history", headers=HEADERS).json()["messages"], [])

    def test_chat_without_key(self) -> None:
        with mock.patch.object(settings, "gemini_api_key", None):
            resp = self.client.post("/api/ai/chat", json={"message": "Conseil ?"}, headers=HEADERS)
        self.assertEqual(resp.status_code, 500)
        self.assertEqual(self.client.get("/api/ai/chat/history", headers=HEADERS).json()["messages"], [])

    def test_generate_recipe_requires_ingredients(self) -> None:
        resp = self.client.post("/api/recipes/generate", json={"ingredients": ["  "]}, headers=HEADERS)
        self.assertEqual(resp.status_code, 400)

    def test_generate_recipe_bad_output(self) -> None:
        with mock.patch.object(gemini, "generate_json", return_value={"name": "Vide"}):
            resp = self.client.post("/api/recipes/generate", json={"ingredients": ["tomate"]}, headers=HEADERS)
        self.assertEqual(resp.status_code, 502)

    def test_exercise_catalog(self) -> None:
        resp = self.client.get("/api/exercises", params={"category": "flexibility"}, headers=HEADERS)
        self.assertEqual({e["id"] for e in resp.json()}, {"ex_yoga", "ex_stretching"})
        self.assertEqual(self.client.get("/api/exercises/ex_plank", headers=HEADERS).json()["name"], "Planche")
        self.assertIn("Dos", self.client.get("/api/exercises/metadata", headers=HEADERS).json()["muscle_groups"])

        self.assertEqual(self.client.delete("/api/exercises/ex_plank", headers=HEADERS).status_code, 403)
        resp = self.client.patch("/api/exercises/ex_plank", json={"name": "Gainage"}, headers=HEADERS)
        self.assertEqual(resp.status_code, 403)

        resp = self.client.post(
            "/api/exercises", json={"name": "Rameur", "category": "cardio", "calories_per_minute": 8}, headers=HEADERS
        )
        self.assertEqual(resp.status_code, 201)
        custom = resp.json()
        self.assertTrue(custom["is_custom"])
        found = self.client.get("/api/exercises", params={"q": "rameur"}, headers=HEADERS).json()
        self.assertEqual([e["id"] for e in found], [custom["id"]])
        self.assertEqual(self.client.delete(f"/api/exercises/{custom['id']}", headers=HEADERS).json(), {"ok": True})
        self.assertEqual(self.client.get(f"/api/exercises/{custom['id']}", headers=HEADERS).status_code, 404)

    def test_workout_routines(self) -> None:
        body = {
            "name": "Gainage",
            "is_template": True,
            "exercises": [{"exercise_id": "ex_plank", "sets": 3, "duration": 60, "rest_between_sets": 30}],
        }
        resp = self.client.post("/api/workout-routines", json=body, headers=HEADERS)
        self.assertEqual(resp.status_code, 201)
        template = resp.json()
        self.assertEqual(template["estimated_duration"], 5)
        self.assertEqual(template["estimated_calories"], 12)

        resp = self.client.delete(f"/api/workout-routines/{template['id']}", headers=HEADERS)
        self.assertEqual(resp.status_code, 403)

        resp = self.client.post(f"/api/workout-routines/{template['id']}/duplicate", json={}, headers=HEADERS)
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["name"], "Gainage (Copie)")
        own = self.client.get("/api/workout-routines", params={"templates": "false"}, headers=HEADERS).json()
        self.assertEqual([r["id"] for r in own], [resp.json()["id"]])

    def test_health_tracking_endpoints(self) -> None:
        resp = self.client.post("/api/water", json={"amount_ml": 500}, headers=HEADERS)
        self.assertEqual(resp.json()["percentage"], 25.0)
        resp = self.client.put("/api/water", json={"amount_ml": 1000, "date": "2024-03-13"}, headers=HEADERS)
        self.assertEqual(resp.json()["current"], 1000)

        for day, waist in (("2024-03-01", 90), ("2024-03-10", 88)):
            resp = self.client.post("/api/measurements", json={"date": day, "waist": waist}, headers=HEADERS)
            self.assertEqual(resp.status_code, 201)
        resp = self.client.get(
            "/api/measurements/change",
            params={"measurement": "waist", "start": "2024-03-01", "end": "2024-03-31"},
            headers=HEADERS,
        )
        self.assertEqual(resp.json()["change"], -2.0)

        goal = {
            "category": "weight",
            "title": "Objectif",
            "current_value": 80,
            "target_value": 70,
            "unit": "kg",
            "target_date": "2099-01-01",
        }
        self.assertEqual(
            self.client.post("/api/goals", json=dict(goal, target_date="bientôt"), headers=HEADERS).status_code, 400
        )
        goal_id = self.client.post("/api/goals", json=goal, headers=HEADERS).json()["id"]
        resp = self.client.post(f"/api/goals/{goal_id}/progress", json={"current_value": 75}, headers=HEADERS)
        self.assertEqual(resp.status_code, 200)
        details = self.client.get(f"/api/goals/{goal_id}", headers=HEADERS).json()
        self.assertEqual(details["progress_percentage"], 50.0)
        self.assertGreater(details["days_remaining"], 0)
        self.assertEqual(self.client.get("/api/goals/nope", headers=HEADERS).status_code, 404)

    def test_logging_updates_user_stats(self) -> None:
        food = {"name": "Salade", "calories": 300}
        meal = {"date": self.today, "meal_type": "lunch", "custom_food": food, "servings": 1}
        self.assertEqual(self.client.post("/api/meals", json=meal, headers=HEADERS).status_code, 201)
        resp = self.client.post("/api/workouts", json={"total_duration": 30}, headers=HEADERS)
        self.assertEqual(resp.status_code, 201)

        stats = self.client.get("/api/stats", headers=HEADERS).json()
        self.assertEqual(stats["stats"]["total_meals_logged"], 1)
        self.assertEqual(stats["stats"]["total_workouts"], 1)
        self.assertEqual(stats["stats"]["current_streak"], 1)
        self.assertEqual([b["id"] for b in stats["unlocked"]], ["first_meal"])

        dashboard = self.client.get("/api/analytics/dashboard", headers=HEADERS).json()
        self.assertEqual(dashboard["calories"]["consumed"], 300)
        self.assertEqual(dashboard["current_streak"], 1)

    def test_analytics_and_reports(self) -> None:
        resp = self.client.get("/api/analytics/compliance", headers=HEADERS)
        self.assertEqual(len(resp.json()), 7)
        resp = self.client.get(
            "/api/analytics/compliance", params={"start": "2024-03-10", "end": "2024-03-01"}, headers=HEADERS
        )
        self.assertEqual(resp.status_code, 400)
        resp = self.client.get("/api/analytics/trends", params={"period": "day"}, headers=HEADERS)
        self.assertEqual(resp.status_code, 422)
        resp = self.client.get("/api/analytics/trends", params={"period": "year"}, headers=HEADERS)
        self.assertEqual(resp.status_code, 200)

        with mock.patch.object(gemini, "generate_json", side_effect=RuntimeError("down")):
            resp = self.client.post("/api/reports/weekly", params={"date": "2024-03-13"}, headers=HEADERS)
        self.assertEqual(resp.status_code, 200)
        summary = resp.json()
        self.assertEqual(summary["week_start"], "2024-03-11")
        self.assertTrue(summary["insights"])
        self.assertEqual(self.client.get("/api/reports/weekly/compliance", headers=HEADERS).json()["compliance"], 0)
        resp = self.client.delete(f"/api/reports/weekly/{summary['id']}", headers=HEADERS)
        self.assertEqual(resp.json(), {"ok": True})
        self.assertEqual(self.client.get("/api/reports/weekly", headers=HEADERS).json(), [])

    def test_insights_endpoints(self) -> None:
        for priority in ("low", "high"):
            body = {"type": "tip", "priority": priority, "title": priority, "message": "..."}
            self.assertEqual(self.client.post("/api/insights", json=body, headers=HEADERS).status_code, 201)

        unread = self.client.get("/api/insights", params={"unread": "true"}, headers=HEADERS).json()
        self.assertEqual([i["priority"] for i in unread], ["high", "low"])
        resp = self.client.post(f"/api/insights/{unread[0]['id']}/read", headers=HEADERS)
        self.assertTrue(resp.json()["read"])
        self.assertEqual(self.client.get("/api/insights/unread-count", headers=HEADERS).json(), {"unread": 1})
        self.assertEqual(self.client.post("/api/insights/read-all", headers=HEADERS).json(), {"updated": 1})
        self.assertEqual(self.client.post("/api/insights/nope/read", headers=HEADERS).status_code, 404)

        resp = self.client.post("/api/insights/auto", headers=HEADERS)
        self.assertEqual(resp.json(), {"ran": True, "created": []})


if __name__ == "__main__":
    unittest.main()
