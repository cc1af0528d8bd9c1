#!/usr/bin/env python3
"""Print a stored recipe scaled to a serving count and measurement system.

Usage:
    python scripts/show_recipe.py pancakes --servings 6 --system metric
    python scripts/show_recipe.py pancakes --decimals
"""

import argparse
import sys
from pathlib import Path

# Add parent directory to path so we can import mealspace modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from mealspace import config
from mealspace.logging_config import configure_logging
from mealspace.measurements import MeasurementSystem
from mealspace.preferences import UserPreferences, load_preferences
from mealspace.recipe_display import display_ingredients
from mealspace.recipes import RecipeLoadError, find_recipe, load_recipes


def main():
    parser = argparse.ArgumentParser(description="Show a recipe scaled and converted for the kitchen")
    parser.add_argument("recipe_id", help="ID of the recipe to show")
    parser.add_argument("--servings", type=float, help="Number of servings (default: the recipe's own)")
    parser.add_argument(
        "--system",
        choices=[s.value for s in MeasurementSystem],
        help="Measurement system (default: saved preference)",
    )
    parser.add_argument("--decimals", action="store_true", help="Show decimals instead of fractions")
    parser.add_argument("--recipes-file", default=config.RECIPES_FILE, help="Path to recipes.json")
    args = parser.parse_args()
    configure_logging(config.LOG_LEVEL)

    try:
        recipe = find_recipe(load_recipes(Path(args.recipes_file)), args.recipe_id)
    except RecipeLoadError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    if recipe is None:
        print(f"❌ No recipe found with ID '{args.recipe_id}'", file=sys.stderr)
        sys.exit(1)

    saved = load_preferences(config.PREFERENCES_FILE)
    preferences = UserPreferences(
        measurement_system=args.system or saved.measurement_system,
        fraction_display=saved.fraction_display and not args.decimals,
    )

    try:
        items = display_ingredients(recipe, args.servings, preferences)
    except ValueError as e:
        print(f"❌ {e}", file=sys.stderr)
        sys.exit(1)

    servings = args.servings or recipe.servings
    print("=" * 60)
    print(recipe.title)
    print(f"Servings: {servings:g} (recipe makes {recipe.servings})")
    print("=" * 60)
    for item in items:
        print(f"  • {item.text}")
    if recipe.instructions:
        print()
        for i, step in enumerate(recipe.instructions, start=1):
            print(f"  {i}. {step}")


if __name__ == "__main__":
    main()
