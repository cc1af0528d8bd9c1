"""Pytest configuration and fixtures."""

from mealspace.recipes import Ingredient, Recipe


def create_test_recipe(
    recipe_id: str,
    title: str,
    servings: int = 4,
    prep_time: int = 10,
    cook_time: int = 20,
    ingredients: list | None = None,
    instructions: list | None = None,
    description: str = "",
    source_url: str | None = None,
    tags: list | None = None,
) -> Recipe:
    """Helper to create a test Recipe; ingredients may be dicts or Ingredient objects."""
    return Recipe(
        id=recipe_id,
        title=title,
        servings=servings,
        prep_time=prep_time,
        cook_time=cook_time,
        ingredients=[
            Ingredient.from_dict(i) if isinstance(i, dict) else i
            for i in (ingredients or [])
        ],
        instructions=instructions or [],
        description=description,
        source_url=source_url,
        tags=tags or [],
    )
