# -*- coding: utf-8 -*-
"""Built-in exercises shared by every user."""

from __future__ import annotations

from typing import List, Optional

from .models import Exercise


def _e(
    key: str,
    name: str,
    description: str,
    category: str,
    difficulty: str,
    calories_per_minute: float,
    equipment: Optional[List[str]] = None,
    muscle_group: Optional[str] = None,
) -> Exercise:
    return Exercise(
        id=key,
        name=name,
        description=description,
        category=category,
        muscle_group=muscle_group,
        equipment=equipment or ["none"],
        difficulty=difficulty,
        calories_per_minute=calories_per_minute,
    )


PREDEFINED_EXERCISES: List[Exercise] = [
    _e("ex_pushups", "Pompes", "Flexion des bras au sol, corps gainé", "strength", "beginner", 7, muscle_group="Pectoraux"),
    _e("ex_squats", "Squats", "Flexion des jambes, dos droit", "strength", "beginner", 8, muscle_group="Jambes"),
    _e("ex_lunges", "Fentes", "Pas en avant puis flexion des deux genoux", "strength", "beginner", 6, muscle_group="Jambes"),
    _e("ex_plank", "Planche", "Gainage sur les avant-bras", "strength", "beginner", 4, muscle_group="Abdominaux"),
    _e(
        "ex_bench_press", "Développé couché", "Poussée d'une barre allongé sur un banc", "strength",
        "intermediate", 6, equipment=["barbell", "bench"], muscle_group="Pectoraux",
    ),
    _e(
        "ex_deadlift", "Soulevé de terre", "Relevé d'une barre depuis le sol, dos neutre", "strength",
        "advanced", 9, equipment=["barbell"], muscle_group="Dos",
    ),
    _e(
        "ex_dumbbell_curl", "Curl haltères", "Flexion des coudes avec haltères", "strength",
        "beginner", 4, equipment=["dumbbells"], muscle_group="Biceps",
    ),
    _e("ex_pullups", "Tractions", "Traction à la barre fixe", "strength", "advanced", 8, equipment=["pull-up bar"], muscle_group="Dos"),
    _e("ex_running", "Course à pied", "Course à allure modérée", "cardio", "beginner", 11),
    _e("ex_cycling", "Vélo", "Pédalage à intensité modérée", "cardio", "beginner", 9, equipment=["bike"]),
    _e("ex_jump_rope", "Corde à sauter", "Sauts continus à la corde", "cardio", "intermediate", 12, equipment=["jump rope"]),
    _e("ex_burpees", "Burpees", "Squat, planche, pompe et saut enchaînés", "cardio", "intermediate", 10),
    _e("ex_yoga", "Yoga", "Enchaînement de postures et respiration", "flexibility", "beginner", 3, equipment=["mat"]),
    _e("ex_stretching", "Étirements", "Étirements statiques de tout le corps", "flexibility", "beginner", 2.5),
    _e("ex_swimming", "Natation", "Nage libre à allure régulière", "sport", "intermediate", 10, equipment=["pool"]),
]


def get_all() -> List[Exercise]:
    return list(PREDEFINED_EXERCISES)


def get_by_id(exercise_id: str) -> Optional[Exercise]:
    for exercise in PREDEFINED_EXERCISES:
        if exercise.id == exercise_id:
            return exercise
    return None
