# -*- coding: utf-8 -*-

from __future__ import annotations

import tempfile
import unittest
from datetime import date
from pathlib import Path
from unittest import mock

from healthtrack.config import settings
from healthtrack.exercises import catalog
from healthtrack.exercises import storage as exercise_store
from healthtrack.exercises.models import ExerciseCreateRequest, ExerciseFilter, ExerciseUpdateRequest
from healthtrack.workouts import routines as routine_store
from healthtrack.workouts import storage as workout_store
from healthtrack.workouts.models import (
    RoutineExercise,
    WorkoutCreateRequest,
    WorkoutExercise,
    WorkoutRoutineCreateRequest,
    WorkoutRoutineUpdateRequest,
    WorkoutSet,
)

USER = "alice"
TODAY = date(2024, 3, 13)


class _TempDataRoot(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory(prefix="healthtrack-test-")
        self.addCleanup(self._tmp.cleanup)
        patcher = mock.patch.object(settings, "data_root", Path(self._tmp.name))
        patcher.start()
        self.addCleanup(patcher.stop)


class TestExerciseCatalog(_TempDataRoot):
    def test_builtin_catalog(self) -> None:
        self.assertEqual(len(exercise_store.get_predefined()), len(catalog.PREDEFINED_EXERCISES))
        squats = exercise_store.get_by_id(USER, "ex_squats")
        self.assertEqual(squats.category, "strength")
        self.assertFalse(squats.is_custom)
        self.assertIsNone(exercise_store.get_by_id(USER, "nope"))

    def test_search_filters(self) -> None:
        cardio = exercise_store.search(USER, ExerciseFilter(category="cardio"))
        self.assertTrue(cardio)
        self.assertTrue(all(e.category == "cardio" for e in cardio))

        legs = exercise_store.search(USER, ExerciseFilter(muscle_group="jambes"))
        self.assertEqual({e.id for e in legs}, {"ex_squats", "ex_lunges"})

        barbell = exercise_store.search(USER, ExerciseFilter(equipment="BARBELL", difficulty="advanced"))
        self.assertEqual([e.id for e in barbell], ["ex_deadlift"])

        found = exercise_store.search(USER, ExerciseFilter(search_term="corde"))
        self.assertEqual([e.id for e in found], ["ex_jump_rope"])

    def test_custom_exercise_lifecycle(self) -> None:
        custom = exercise_store.create(
            USER,
            ExerciseCreateRequest(
                name="Kettlebell swing", category="strength", equipment=["kettlebell"], calories_per_minute=10
            ),
        )
        self.assertTrue(custom.is_custom)
        self.assertEqual(custom.user_id, USER)
        self.assertEqual([e.id for e in exercise_store.get_custom(USER)], [custom.id])
        self.assertEqual(exercise_store.get_custom("bob"), [])
        self.assertIn("kettlebell", exercise_store.get_all_equipment(USER))

        updated = exercise_store.update(USER, custom.id, ExerciseUpdateRequest(name=None, difficulty="advanced"))
        self.assertEqual(updated.name, "Kettlebell swing")
        self.assertEqual(updated.difficulty, "advanced")

        self.assertTrue(exercise_store.delete(USER, custom.id))
        self.assertFalse(exercise_store.delete(USER, custom.id))
        self.assertIsNone(exercise_store.update(USER, custom.id, ExerciseUpdateRequest(name="x")))

    def test_builtin_exercises_are_read_only(self) -> None:
        with self.assertRaises(PermissionError):
            exercise_store.update(USER, "ex_squats", ExerciseUpdateRequest(name="Squats sautés"))
        with self.assertRaises(PermissionError):
            exercise_store.delete(USER, "ex_squats")

    def test_metadata(self) -> None:
        self.assertIn("Jambes", exercise_store.get_all_muscle_groups(USER))
        equipment = exercise_store.get_all_equipment(USER)
        self.assertEqual(equipment, sorted(equipment))
        self.assertIn("none", equipment)


class TestWorkoutRoutines(_TempDataRoot):
    def _routine(self, **kwargs):
        exercises = [
            RoutineExercise(exercise_id="ex_squats", order=0, sets=3, reps=12, rest_between_sets=60),
            RoutineExercise(exercise_id="ex_plank", order=1, sets=2, duration=90, rest_between_sets=30),
        ]
        return routine_store.create(USER, WorkoutRoutineCreateRequest(name="Full body", exercises=exercises, **kwargs))

    def test_estimates(self) -> None:
        routine = self._routine()
        # Squats: (1 + 1) * 3 min; plank: (1.5 + 0.5) * 2 min.
        self.assertEqual(routine.estimated_duration, 10)
        # Squats: 8 * 1 * 3; plank: 4 * 1.5 * 2.
        self.assertEqual(routine.estimated_calories, 36)

        unknown = [RoutineExercise(exercise_id="nope", sets=1)]
        self.assertEqual(routine_store.estimate_duration(unknown), 2)
        self.assertEqual(routine_store.estimate_calories(USER, unknown), 0)

    def test_custom_exercise_calories(self) -> None:
        custom = exercise_store.create(
            USER, ExerciseCreateRequest(name="Rameur", category="cardio", calories_per_minute=5)
        )
        self.assertEqual(
            routine_store.estimate_calories(USER, [RoutineExercise(exercise_id=custom.id, sets=2, duration=120)]), 20
        )

    def test_update_recomputes_estimates(self) -> None:
        routine = self._routine()
        updated = routine_store.update(
            USER,
            routine.id,
            WorkoutRoutineUpdateRequest(
                exercises=[RoutineExercise(exercise_id="ex_running", sets=1, duration=600, rest_between_sets=0)]
            ),
        )
        self.assertEqual(updated.estimated_duration, 10)
        self.assertEqual(updated.estimated_calories, 110)
        self.assertEqual(updated.name, "Full body")

        renamed = routine_store.update(USER, routine.id, WorkoutRoutineUpdateRequest(name="Cardio", exercises=None))
        self.assertEqual(renamed.name, "Cardio")
        self.assertEqual(len(renamed.exercises), 1)
        self.assertEqual(renamed.estimated_calories, 110)

    def test_templates_are_read_only_but_can_be_duplicated(self) -> None:
        template = self._routine(is_template=True)
        self.assertEqual([r.id for r in routine_store.get_templates(USER)], [template.id])
        self.assertEqual(routine_store.get_user_routines(USER), [])
        with self.assertRaises(PermissionError):
            routine_store.update(USER, template.id, WorkoutRoutineUpdateRequest(name="Mine"))
        with self.assertRaises(PermissionError):
            routine_store.delete(USER, template.id)

        copy = routine_store.duplicate(USER, template.id)
        self.assertEqual(copy.name, "Full body (Copie)")
        self.assertFalse(copy.is_template)
        self.assertEqual(copy.estimated_calories, template.estimated_calories)
        named = routine_store.duplicate(USER, template.id, "Lundi")
        self.assertEqual(named.name, "Lundi")
        self.assertEqual(len(routine_store.get_user_routines(USER)), 2)

        self.assertTrue(routine_store.delete(USER, copy.id))
        self.assertIsNone(routine_store.duplicate(USER, "nope"))
        self.assertFalse(routine_store.delete(USER, "nope"))


class TestWorkoutCatalogLinks(_TempDataRoot):
    def test_stats_by_category_and_catalog_names(self) -> None:
        workout_store.create(
            USER,
            WorkoutCreateRequest(
                date=TODAY.isoformat(),
                exercises=[
                    WorkoutExercise(exercise_id="ex_squats", sets=[WorkoutSet(reps=10, weight=40, completed=True)]),
                    WorkoutExercise(exercise_id="ex_running", sets=[WorkoutSet(duration=1200, completed=True)]),
                    WorkoutExercise(exercise_id="mystery", sets=[]),
                ],
            ),
        )
        stats = workout_store.get_stats(USER, today=TODAY)
        self.assertEqual(stats.workouts_by_category, {"cardio": 1, "strength": 1, "flexibility": 0, "sport": 0})
        self.assertEqual(workout_store.get_exercise_progress(USER, "ex_squats").exercise_name, "Squats")
        self.assertEqual(workout_store.get_exercise_progress(USER, "mystery").exercise_name, "Unknown Exercise")


if __name__ == "__main__":
    unittest.main()
