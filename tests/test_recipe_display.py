import pytest

from mealspace.preferences import UserPreferences
from mealspace.recipe_display import (
    DisplayIngredient,
    display_ingredient,
    display_ingredients,
    format_ingredients_text,
    format_recipe_text,
    scale_factor_for,
)
from mealspace.recipes import Ingredient
from tests.conftest import create_test_recipe


@pytest.fixture
def pancakes():
    return create_test_recipe(
        recipe_id="pancakes",
        title="Pancakes",
        servings=4,
        prep_time=10,
        cook_time=15,
        description="Fluffy weekend pancakes.",
        source_url="https://example.com/pancakes",
        ingredients=[
            {"name": "flour", "amount": 2, "unit": "cups", "preparation": "sifted"},
            {"name": "milk", "amount": 300, "unit": "ml"},
            {"name": "eggs", "amount": 2},
            {"name": "salt", "amount": 0.5, "unit": "tsp"},
            {"name": "butter for the pan"},
        ],
        instructions=["Whisk everything together", "Fry in a hot pan"],
    )


class TestScaleFactor:
    def test_ratio(self):
        assert scale_factor_for(4, 6) == 1.5
        assert scale_factor_for(4, 2) == 0.5

    def test_zero_base_servings_rejected(self):
        with pytest.raises(ValueError, match="Recipe servings"):
            scale_factor_for(0, 4)

    def test_fewer_than_one_serving_rejected(self):
        with pytest.raises(ValueError, match="at least 1"):
            scale_factor_for(4, 0)

    @pytest.mark.parametrize("servings", [float("nan"), float("inf")])
    def test_non_finite_servings_rejected(self, servings):
        with pytest.raises(ValueError, match="at least 1"):
            scale_factor_for(4, servings)

    def test_non_finite_base_servings_rejected(self):
        with pytest.raises(ValueError, match="Recipe servings"):
            scale_factor_for(float("inf"), 4)


class TestDisplayIngredient:
    def test_scaled_and_converted_to_metric(self):
        """4-serving recipe, 2 cups, cooked for 6 in metric."""
        item = display_ingredient(
            Ingredient(name="flour", amount=2, unit="cups"),
            scale_factor_for(4, 6),
            UserPreferences(measurement_system="metric"),
        )

        assert item.quantity == 750
        assert item.unit == "ml"
        assert item.original_quantity == 3
        assert item.original_unit == "cups"
        assert item.text == "750 ml (3 cups) flour"

    def test_no_conversion_keeps_single_unit(self):
        item = display_ingredient(
            Ingredient(name="flour", amount=1, unit="cup"),
            1,
            UserPreferences(measurement_system="us"),
        )

        assert not item.shows_original
        assert item.text == "1 cup flour"

    def test_without_preferences_only_scales(self):
        item = display_ingredient(Ingredient(name="milk", amount=300, unit="ml"), 0.5)
        assert item.text == "150 ml milk"

    def test_fraction_preference_off_uses_decimals(self):
        item = display_ingredient(
            Ingredient(name="sugar", amount=1, unit="cup"),
            1.5,
            UserPreferences(measurement_system="us", fraction_display=False),
        )
        assert item.display_quantity == "1.5"

    def test_fraction_preference_on(self):
        item = display_ingredient(
            Ingredient(name="sugar", amount=1, unit="cup"),
            1.5,
            UserPreferences(measurement_system="us", fraction_display=True),
        )
        assert item.display_quantity == "1 1/2"

    def test_missing_amount_renders_name_only(self):
        item = display_ingredient(Ingredient(name="salt to taste"), 2, UserPreferences())
        assert item.display_quantity is None
        assert item.text == "salt to taste"

    def test_preparation_is_appended(self):
        item = display_ingredient(Ingredient(name="onion", amount=1, preparation="diced"), 1, UserPreferences())
        assert item.text == "1 onion, diced"

    def test_to_dict_includes_text(self):
        data = DisplayIngredient(name="eggs", quantity=3, display_quantity="3").to_dict()
        assert data["text"] == "3 eggs"
        assert data["original_unit"] is None


class TestDisplayIngredients:
    def test_defaults_to_recipe_servings(self, pancakes):
        items = display_ingredients(pancakes)
        assert [i.text for i in items][:3] == ["2 cups flour, sifted", "300 ml milk", "2 eggs"]

    def test_us_preference_converts_millilitres(self, pancakes):
        items = display_ingredients(pancakes, 4, UserPreferences(measurement_system="us"))
        milk = items[1]
        assert milk.unit == "fl oz"
        assert milk.quantity == 10
        assert milk.text == "10 fl oz (300 ml) milk"

    def test_teaspoons_are_left_alone(self, pancakes):
        items = display_ingredients(pancakes, 8, UserPreferences(measurement_system="metric"))
        assert items[3].text == "1 tsp salt"


class TestPlainText:
    def test_ingredients_text_is_scaled_not_converted(self, pancakes):
        text = format_ingredients_text(pancakes, 6)
        assert text.splitlines() == [
            "3 cups flour, sifted",
            "450 ml milk",
            "3 eggs",
            "3/4 tsp salt",
            "butter for the pan",
        ]

    def test_recipe_text(self, pancakes):
        text = format_recipe_text(pancakes, 2)

        assert text.startswith("Pancakes\n")
        assert "Fluffy weekend pancakes." in text
        assert "Servings: 2" in text
        assert "Total Time: 25 minutes" in text
        assert "Source: https://example.com/pancakes" in text
        assert "• 1 cups flour, sifted" in text
        assert "INSTRUCTIONS:\n1. Whisk everything together\n2. Fry in a hot pan" in text

    def test_recipe_text_skips_empty_time_and_source(self):
        recipe = create_test_recipe("toast", "Toast", servings=1, prep_time=0, cook_time=0,
                                    ingredients=[{"name": "bread", "amount": 1, "unit": "slice"}])
        text = format_recipe_text(recipe)
        assert "Total Time" not in text
        assert "Source" not in text
