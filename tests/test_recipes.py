# -*- coding: utf-8 -*-

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from healthtrack.ai import gemini
from healthtrack.config import settings
from healthtrack.fridge import storage as fridge_store
from healthtrack.fridge.models import FridgeItemCreateRequest
from healthtrack.recipes import generator
from healthtrack.recipes import storage as recipe_store
from healthtrack.recipes.models import (
    RecipeCreateRequest,
    RecipeFilters,
    RecipeGenerationRequest,
    RecipeIngredient,
    RecipeSearchFilters,
    RecipeUpdateRequest,
    UserPreferences,
)

USER = "alice"

GENERATED = {
    "name": "Poulet au riz",
    "description": "Un plat simple.",
    "ingredients": [
        {"name": "poulet", "quantity": 200, "unit": "g"},
        {"name": "riz", "quantity": 150, "unit": "g", "optional": False},
    ],
    "steps": ["Cuire le riz", "Griller le poulet"],
    "prepTime": 10,
    "cookTime": "25 min",
    "servings": 2,
    "difficulty": "Easy",
    "cuisineType": "French",
    "mealType": ["lunch", "brunch"],
    "nutritionInfo": {"calories": 520, "protein": 42, "carbs": 55, "fat": 12},
    "tags": ["quick"],
    "alternatives": [{"original": "poulet", "alternatives": ["dinde"], "reason": "maigre"}],
}


class _TempDataRoot(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory(prefix="healthtrack-test-")
        self.addCleanup(self._tmp.cleanup)
        patcher = mock.patch.object(settings, "data_root", Path(self._tmp.name))
        patcher.start()
        self.addCleanup(patcher.stop)


class TestRecipeRepository(_TempDataRoot):
    def _create(self, name: str, **kwargs):
        return recipe_store.create(USER, RecipeCreateRequest(name=name, **kwargs))

    def test_create_defaults(self) -> None:
        recipe = self._create("Salade")
        self.assertEqual(recipe.nutrition_info.calories, 0)
        self.assertFalse(recipe.is_favorite)
        self.assertIsNone(recipe.generated_date)
        self.assertEqual(recipe.tags, [])

        generated = self._create("Soupe", is_generated=True)
        self.assertIsNotNone(generated.generated_date)

    def test_update_merges_nutrition(self) -> None:
        recipe = self._create("Salade", nutrition_info={"calories": 300, "protein": 10})
        updated = recipe_store.update(USER, recipe.id, RecipeUpdateRequest(nutrition_info={"fat": 5}))
        self.assertEqual(updated.nutrition_info.calories, 300)
        self.assertEqual(updated.nutrition_info.fat, 5)
        self.assertIsNotNone(updated.last_modified_date)
        self.assertIsNone(recipe_store.update(USER, "nope", RecipeUpdateRequest(name="x")))

    def test_search_filters(self) -> None:
        self._create(
            "Curry de lentilles",
            ingredients=[RecipeIngredient(name="lentilles corail")],
            cuisine_type="indian",
            difficulty="medium",
            prep_time=15,
            tags=["vegan"],
        )
        self._create("Omelette", meal_type=["breakfast"], prep_time=5, tags=["quick"])
        fav = self._create("Tarte", prep_time=45, difficulty="hard")
        recipe_store.toggle_favorite(USER, fav.id)

        def names(**kwargs):
            return sorted(r.name for r in recipe_store.search(USER, RecipeSearchFilters(**kwargs)))

        self.assertEqual(names(query="CORAIL"), ["Curry de lentilles"])
        self.assertEqual(names(query="vegan"), ["Curry de lentilles"])
        self.assertEqual(names(meal_type="breakfast"), ["Omelette"])
        self.assertEqual(names(max_prep_time=15), ["Curry de lentilles", "Omelette"])
        self.assertEqual(names(tags=["quick", "vegan"]), ["Curry de lentilles", "Omelette"])
        self.assertEqual(names(is_favorite=True), ["Tarte"])
        self.assertEqual(names(difficulty="hard"), ["Tarte"])

    def test_sort_stats_and_tags(self) -> None:
        self._create("b", prep_time=20, tags=["z", "a"])
        self._create("A", prep_time=10, is_generated=True, tags=["a"])
        recipes = recipe_store.get_all(USER)
        self.assertEqual([r.name for r in recipe_store.sort(recipes, "name", "asc")], ["A", "b"])
        self.assertEqual([r.prep_time for r in recipe_store.sort(recipes, "prep_time", "desc")], [20, 10])

        stats = recipe_store.get_stats(USER)
        self.assertEqual(stats.total_recipes, 2)
        self.assertEqual(stats.generated_count, 1)
        self.assertEqual(stats.manual_count, 1)
        self.assertEqual(stats.average_prep_time, 15)
        self.assertEqual(stats.recipes_by_difficulty, {"easy": 2})
        self.assertEqual(recipe_store.get_all_tags(USER), ["a", "z"])

        recipe_store.delete_all(USER)
        self.assertEqual(recipe_store.get_all(USER), [])


class TestRecipeGenerator(_TempDataRoot):
    def test_prompt_includes_filters_and_preferences(self) -> None:
        req = RecipeGenerationRequest(
            ingredients=["tomate"],
            zero_waste_mode=True,
            filters=RecipeFilters(prep_time=20, equipment=["four", "poêle"]),
            user_preferences=UserPreferences(allergies=["arachide"]),
        )
        prompt = generator.build_prompt(["tomate"], req)
        self.assertIn("- tomate", prompt)
        self.assertIn("ZERO WASTE MODE", prompt)
        self.assertIn("Maximum preparation time: 20 minutes", prompt)
        self.assertIn("Available equipment: four, poêle", prompt)
        self.assertIn("ALLERGIES (MUST EXCLUDE):\n- arachide", prompt)

    def test_fridge_items_join_ingredients(self) -> None:
        item = fridge_store.create(
            USER, FridgeItemCreateRequest(name="Riz", quantity=1, unit="kg", category="Céréales")
        )
        req = RecipeGenerationRequest(ingredients=["riz", " poulet "], fridge_item_ids=[item.id, "missing"])
        self.assertEqual(generator.resolve_ingredients(USER, req), ["riz", "poulet"])

    def test_generate_and_save(self) -> None:
        req = RecipeGenerationRequest(ingredients=["poulet", "riz"], save=True)
        with mock.patch.object(gemini, "generate_json", return_value=GENERATED) as fake:
            recipe, used, alternatives, tips = generator.generate_recipe(USER, req)
        fake.assert_called_once()
        self.assertEqual(used, ["poulet", "riz"])
        self.assertTrue(recipe.is_generated)
        self.assertEqual(recipe.cook_time, 25)
        self.assertEqual(recipe.difficulty, "easy")
        self.assertEqual(recipe.cuisine_type, "french")
        self.assertEqual(recipe.meal_type, ["lunch"])
        self.assertEqual(recipe.nutrition_info.protein, 42)
        self.assertEqual(alternatives[0].alternatives, ["dinde"])
        self.assertEqual(tips, [])
        self.assertIsNotNone(recipe_store.get_by_id(USER, recipe.id))

    def test_generate_without_save_does_not_persist(self) -> None:
        req = RecipeGenerationRequest(ingredients=["poulet"])
        with mock.patch.object(gemini, "generate_json", return_value=GENERATED):
            recipe, _, _, _ = generator.generate_recipe(USER, req)
        self.assertIsNone(recipe_store.get_by_id(USER, recipe.id))

    def test_invalid_output_and_empty_ingredients(self) -> None:
        with self.assertRaises(ValueError):
            generator.generate_recipe(USER, RecipeGenerationRequest(ingredients=["  "]))
        with mock.patch.object(gemini, "generate_json", return_value={"name": "x"}):
            with self.assertRaises(ValueError):
                generator.generate_recipe(USER, RecipeGenerationRequest(ingredients=["poulet"]))


if __name__ == "__main__":
    unittest.main()
