"""Render recipe ingredients for a chosen serving count and measurement system."""

import math
from dataclasses import dataclass
from typing import Any, Optional

from mealspace.measurements import convert_measurement, format_quantity, scale_recipe
from mealspace.preferences import UserPreferences
from mealspace.recipes import Ingredient, Recipe


@dataclass
class DisplayIngredient:
    name: str
    quantity: Optional[float] = None
    unit: Optional[str] = None
    display_quantity: Optional[str] = None
    original_quantity: Optional[float] = None
    original_unit: Optional[str] = None
    original_display_quantity: Optional[str] = None
    preparation: Optional[str] = None

    @property
    def shows_original(self) -> bool:
        return self.original_quantity is not None and self.original_unit is not None

    @property
    def text(self) -> str:
        """e.g. "750 ml (3 cups) flour, sifted"."""
        parts = []
        if self.display_quantity is not None:
            parts.append(self.display_quantity)
            if self.unit:
                parts.append(self.unit)
            if self.shows_original:
                parts.append(f"({self.original_display_quantity} {self.original_unit})")
        parts.append(self.name)
        text = " ".join(parts)
        if self.preparation:
            text += f", {self.preparation}"
        return text

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "unit": self.unit,
            "display_quantity": self.display_quantity,
            "original_quantity": self.original_quantity,
            "original_unit": self.original_unit,
            "original_display_quantity": self.original_display_quantity,
            "preparation": self.preparation,
            "text": self.text,
        }


def scale_factor_for(base_servings: float, desired_servings: float) -> float:
    """Ratio of desired to recorded servings.

    Raises:
        ValueError: If the recipe has no servings or fewer than one is requested
    """
    if not base_servings or not math.isfinite(base_servings) or base_servings <= 0:
        raise ValueError("Recipe servings must be a positive number")
    if not math.isfinite(desired_servings) or desired_servings < 1:
        raise ValueError("Servings must be a number of at least 1")
    return desired_servings / base_servings


def display_ingredient(
    ingredient: Ingredient,
    scale_factor: float,
    preferences: Optional[UserPreferences] = None,
) -> DisplayIngredient:
    """Scale, convert to the preferred system and format one ingredient."""
    if not ingredient.amount:
        return DisplayIngredient(name=ingredient.name, unit=ingredient.unit, preparation=ingredient.preparation)

    use_fractions = preferences.fraction_display if preferences is not None else True
    scaled = scale_recipe(ingredient.amount, scale_factor)
    item = DisplayIngredient(
        name=ingredient.name,
        quantity=scaled.quantity,
        unit=ingredient.unit,
        # Formatted from the unrounded amount so thirds survive scaling
        display_quantity=format_quantity(ingredient.amount * scale_factor, use_fractions),
        preparation=ingredient.preparation,
    )

    if preferences is None or not ingredient.unit:
        return item

    converted = convert_measurement(scaled.quantity, ingredient.unit, preferences.measurement_system)
    # Only switch units when the converter reports an actual change
    if converted is not None and converted.is_converted:
        item.original_quantity = converted.original_quantity
        item.original_unit = converted.original_unit
        item.original_display_quantity = item.display_quantity
        item.quantity = converted.quantity
        item.unit = converted.unit
        item.display_quantity = (
            converted.display_quantity if use_fractions
            else format_quantity(converted.quantity, use_fractions=False)
        )
    return item


def display_ingredients(
    recipe: Recipe,
    servings: Optional[float] = None,
    preferences: Optional[UserPreferences] = None,
) -> list[DisplayIngredient]:
    factor = scale_factor_for(recipe.servings, servings if servings is not None else recipe.servings)
    return [display_ingredient(ing, factor, preferences) for ing in recipe.ingredients]


def format_ingredients_text(recipe: Recipe, servings: Optional[float] = None) -> str:
    """One line per ingredient, scaled but kept in the recipe's own units."""
    return "\n".join(item.text for item in display_ingredients(recipe, servings))


def format_recipe_text(recipe: Recipe, servings: Optional[float] = None) -> str:
    """Plain-text copy of the whole recipe at the requested servings."""
    servings = servings if servings is not None else recipe.servings
    items = display_ingredients(recipe, servings)

    lines = [recipe.title, ""]
    if recipe.description:
        lines.append(recipe.description)
    lines.append(f"Servings: {format_quantity(servings, use_fractions=False)}")
    if recipe.total_time > 0:
        lines.append(f"Total Time: {recipe.total_time} minutes")
    if recipe.source_url:
        lines.append(f"Source: {recipe.source_url}")

    lines += ["", "INGREDIENTS:"]
    lines += [f"• {item.text}" for item in items]
    lines += ["", "INSTRUCTIONS:"]
    lines += [f"{i}. {step}" for i, step in enumerate(recipe.instructions, start=1)]
    return "\n".join(lines)
