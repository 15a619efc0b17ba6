# -*- coding: utf-8 -*-

from __future__ import annotations

import tempfile
import unittest
from datetime import date, timedelta
from pathlib import Path
from unittest import mock

from healthtrack.config import settings
from healthtrack.profile import storage as profile_store
from healthtrack.profile.models import ProfileCreateRequest
from healthtrack.weight import storage as weight_store
from healthtrack.weight.models import WeightLogCreateRequest, WeightLogUpdateRequest

USER = "alice"
TODAY = date(2024, 3, 13)
TREND = [80.0, 79.8, 79.6, 79.4, 79.2, 79.0, 78.8]


class TestWeight(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory(prefix="healthtrack-test-")
        self.addCleanup(self._tmp.cleanup)
        patcher = mock.patch.object(settings, "data_root", Path(self._tmp.name))
        patcher.start()
        self.addCleanup(patcher.stop)

    def _log(self, days_ago: int, weight: float):
        day = (TODAY - timedelta(days=days_ago)).isoformat()
        return weight_store.create(USER, WeightLogCreateRequest(date=day, weight=weight))

    def _log_trend(self) -> None:
        for i, weight in enumerate(TREND):
            self._log(len(TREND) - 1 - i, weight)

    def test_bmi_requires_profile_height(self) -> None:
        self.assertEqual(self._log(0, 70).bmi, 0)
        profile_store.create(USER, ProfileCreateRequest(weight=70, height=180, age=30, sex="female"))
        entry = self._log(0, 70)
        self.assertEqual(entry.bmi, 21.6)

        notes_only = weight_store.update(USER, entry.id, WeightLogUpdateRequest(notes="matin"))
        self.assertEqual(notes_only.bmi, 21.6)
        heavier = weight_store.update(USER, entry.id, WeightLogUpdateRequest(weight=81))
        self.assertEqual(heavier.bmi, 25.0)
        self.assertIsNone(weight_store.update(USER, "nope", WeightLogUpdateRequest(weight=81)))

    def test_latest_average_and_change(self) -> None:
        self._log(3, 80)
        self._log(1, 79)
        self._log(2, 81.5)
        self.assertEqual(weight_store.get_latest(USER).weight, 79)
        start, end = TODAY - timedelta(days=3), TODAY
        self.assertEqual(weight_store.get_average_weight(USER, start, end), 80.2)
        self.assertEqual(weight_store.get_weight_change(USER, start, end), -1.0)
        self.assertEqual(weight_store.get_weight_change(USER, TODAY, TODAY), 0)
        self.assertEqual(weight_store.get_average_weight(USER, TODAY, TODAY), 0)
        self.assertEqual([e.weight for e in weight_store.get_last_n_days(USER, 2, today=TODAY)], [81.5, 79])

    def test_prediction_needs_seven_points(self) -> None:
        for i, weight in enumerate(TREND[:6]):
            self._log(5 - i, weight)
        self.assertIsNone(weight_store.predict_weight(USER, 7, today=TODAY))
        self.assertIsNone(weight_store.get_days_to_goal(USER, 75, today=TODAY))

    def test_prediction_follows_trend(self) -> None:
        self._log_trend()
        self.assertAlmostEqual(weight_store.predict_weight(USER, 7, today=TODAY), 77.2)

    def test_days_to_goal(self) -> None:
        self._log_trend()
        self.assertEqual(weight_store.get_days_to_goal(USER, 75, today=TODAY), 23)
        self.assertEqual(weight_store.get_days_to_goal(USER, 78.8, today=TODAY), 0)
        # Losing weight never reaches a higher goal.
        self.assertIsNone(weight_store.get_days_to_goal(USER, 85, today=TODAY))


if __name__ == "__main__":
    unittest.main()
