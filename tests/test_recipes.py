import json

import pytest

from mealspace.recipes import (
    Ingredient,
    Recipe,
    RecipeLoadError,
    RecipeSaveError,
    delete_recipe,
    find_recipe,
    load_recipes,
    save_recipes,
    update_recipe,
)
from tests.conftest import create_test_recipe


@pytest.fixture
def sample_recipes_data():
    return {
        "recipes": [
            {
                "id": "pasta-bolognese",
                "title": "Pasta Bolognese",
                "servings": 4,
                "prep_time": 15,
                "cook_time": 30,
                "tags": ["italian"],
                "ingredients": [
                    {"name": "ground beef", "amount": 500, "unit": "g"},
                    {"name": "onion", "amount": 1, "preparation": "diced"},
                    {"name": "salt"},
                ],
                "instructions": [{"instruction": "Brown the beef"}, "Simmer for 30 minutes"],
            },
            {
                "id": "green-salad",
                "title": "Green Salad",
                "servings": 2,
            },
        ]
    }


@pytest.fixture
def recipes_file(tmp_path, sample_recipes_data):
    path = tmp_path / "recipes.json"
    path.write_text(json.dumps(sample_recipes_data))
    return path


class TestRecipeFromDict:
    def test_full_recipe(self, sample_recipes_data):
        recipe = Recipe.from_dict(sample_recipes_data["recipes"][0])

        assert recipe.title == "Pasta Bolognese"
        assert recipe.total_time == 45
        assert recipe.ingredients[0] == Ingredient(name="ground beef", amount=500, unit="g")
        assert recipe.ingredients[1].preparation == "diced"
        assert recipe.ingredients[2].amount is None
        assert recipe.instructions == ["Brown the beef", "Simmer for 30 minutes"]

    def test_minimal_recipe_gets_defaults(self, sample_recipes_data):
        recipe = Recipe.from_dict(sample_recipes_data["recipes"][1])
        assert recipe.ingredients == []
        assert recipe.description == ""
        assert recipe.total_time == 0

    def test_missing_fields(self):
        with pytest.raises(ValueError, match="Missing required fields: title, servings"):
            Recipe.from_dict({"id": "x"})

    @pytest.mark.parametrize("servings", [0, -2, "many", 2.5, float("nan")])
    def test_invalid_servings(self, servings):
        with pytest.raises(ValueError):
            Recipe.from_dict({"id": "x", "title": "X", "servings": servings})

    def test_whole_float_servings_are_accepted(self):
        recipe = Recipe.from_dict({"id": "x", "title": "X", "servings": 6.0})
        assert recipe.servings == 6
        assert isinstance(recipe.servings, int)

    def test_fractional_servings_are_not_truncated(self):
        with pytest.raises(ValueError, match="whole number"):
            Recipe.from_dict({"id": "x", "title": "X", "servings": 2.5})

    def test_ingredient_needs_name(self):
        with pytest.raises(ValueError, match="name is required"):
            Ingredient.from_dict({"amount": 2})

    def test_ingredient_amount_must_be_numeric(self):
        with pytest.raises(ValueError, match="Invalid amount"):
            Ingredient.from_dict({"name": "flour", "amount": "lots"})

    def test_numeric_string_amount_is_accepted(self):
        assert Ingredient.from_dict({"name": "flour", "amount": "1.5"}).amount == 1.5


class TestLoadRecipes:
    def test_load(self, recipes_file):
        recipes = load_recipes(recipes_file)
        assert [r.id for r in recipes] == ["pasta-bolognese", "green-salad"]

    def test_missing_file_is_empty(self, tmp_path):
        assert load_recipes(tmp_path / "nope.json") == []

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "recipes.json"
        path.write_text("{not json")
        with pytest.raises(RecipeLoadError, match="Invalid JSON"):
            load_recipes(path)

    def test_missing_recipes_key(self, tmp_path):
        path = tmp_path / "recipes.json"
        path.write_text(json.dumps({"items": []}))
        with pytest.raises(RecipeLoadError, match="'recipes' key"):
            load_recipes(path)

    def test_invalid_recipe_entry(self, tmp_path):
        path = tmp_path / "recipes.json"
        path.write_text(json.dumps({"recipes": [{"id": "broken"}]}))
        with pytest.raises(RecipeLoadError, match="Invalid recipe"):
            load_recipes(path)


class TestSaveRecipes:
    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "data" / "recipes.json"
        recipe = create_test_recipe(
            "soup", "Soup", ingredients=[{"name": "stock", "amount": 1, "unit": "l"}]
        )

        save_recipes(path, [recipe])

        assert load_recipes(path) == [recipe]
        assert not list(path.parent.glob(".recipes_tmp_*"))

    def test_save_error(self, tmp_path, monkeypatch):
        def fail(*args, **kwargs):
            raise OSError("disk full")

        monkeypatch.setattr("mealspace.recipes.tempfile.mkstemp", fail)
        with pytest.raises(RecipeSaveError, match="disk full"):
            save_recipes(tmp_path / "recipes.json", [])


class TestFindAndUpdate:
    def test_find(self, recipes_file):
        recipes = load_recipes(recipes_file)
        assert find_recipe(recipes, "green-salad").title == "Green Salad"
        assert find_recipe(recipes, "missing") is None

    def test_update_returns_new_list(self, recipes_file):
        recipes = load_recipes(recipes_file)
        updated = create_test_recipe("green-salad", "Big Green Salad", servings=6)

        new_recipes = update_recipe(recipes, updated)

        assert new_recipes[1].title == "Big Green Salad"
        assert recipes[1].title == "Green Salad"

    def test_update_unknown_recipe(self, recipes_file):
        with pytest.raises(ValueError, match="not found"):
            update_recipe(load_recipes(recipes_file), create_test_recipe("ghost", "Ghost"))

    def test_delete(self, recipes_file):
        recipes = load_recipes(recipes_file)

        remaining = delete_recipe(recipes, "green-salad")

        assert "green-salad" not in [r.id for r in remaining]
        assert len(remaining) == len(recipes) - 1

    def test_delete_unknown_recipe(self, recipes_file):
        with pytest.raises(ValueError, match="not found"):
            delete_recipe(load_recipes(recipes_file), "ghost")
