"""Parse recipes pasted as plain text into structured data."""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Optional

from mealspace import config
from mealspace.recipes import Ingredient, Recipe


class RecipeParseError(Exception):
    """Raised when recipe parsing fails."""
    pass


@dataclass
class ParsedIngredient:
    name: str
    quantity: Optional[float] = None
    unit: Optional[str] = None


@dataclass
class ParsedRecipe:
    """Intermediate representation of parsed or imported recipe data."""
    title: str
    servings: int = config.DEFAULT_SERVINGS
    description: str = ""
    prep_time: int = 0
    cook_time: int = 0
    ingredients: list[ParsedIngredient] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    image: str = ""
    source_url: Optional[str] = None

    def to_recipe(self, recipe_id: str) -> Recipe:
        """Convert to a Recipe.

        Raises:
            RecipeParseError: If no ingredients were extracted
        """
        if not self.ingredients:
            raise RecipeParseError(
                "Could not extract ingredients from this recipe. "
                "Please check the format or add the recipe manually."
            )

        return Recipe(
            id=recipe_id,
            title=self.title,
            servings=_whole_servings(self.servings),
            ingredients=[
                Ingredient(name=i.name, amount=i.quantity, unit=i.unit)
                for i in self.ingredients
            ],
            instructions=list(self.instructions),
            description=self.description,
            prep_time=self.prep_time or 0,
            cook_time=self.cook_time or 0,
            source_url=self.source_url,
            image_url=self.image or None,
            tags=list(self.tags),
        )


def _whole_servings(servings: Any) -> int:
    """Stored servings are whole numbers; anything unusable becomes the default."""
    if isinstance(servings, bool) or not isinstance(servings, (int, float)) or not math.isfinite(servings):
        return config.DEFAULT_SERVINGS
    whole = int(servings + 0.5)
    return whole if whole > 0 else config.DEFAULT_SERVINGS


# Longest spellings first so "cups" wins over "c"
UNITS = [
    'tablespoons', 'tablespoon', 'teaspoons', 'teaspoon',
    'kilograms', 'kilogram', 'milliliters', 'milliliter',
    'gallons', 'gallon', 'ounces', 'ounce', 'pounds', 'pound',
    'quarts', 'quart', 'liters', 'liter', 'grams', 'gram',
    'pints', 'pint', 'pieces', 'piece', 'slices', 'slice',
    'cloves', 'clove', 'bunches', 'bunch',
    'cups', 'cup', 'tbsp', 'tbs', 'tsp', 'lbs', 'lb', 'oz',
    'kg', 'ml', 'gal', 'qt', 'pt', 'pc', 'g', 'l', 'c',
]

_UNICODE_FRACTIONS = {
    '¼': 0.25, '½': 0.5, '¾': 0.75,
    '⅓': 1 / 3, '⅔': 2 / 3,
    '⅛': 0.125, '⅜': 0.375, '⅝': 0.625, '⅞': 0.875,
}

_QUANTITY = r'(\d+\s+\d+\s*/\s*\d+|\d+\s*/\s*\d+|\d+(?:\.\d+)?[¼½¾⅓⅔⅛⅜⅝⅞]?|[¼½¾⅓⅔⅛⅜⅝⅞])'
_QUANTITY_UNIT_RE = re.compile(rf'^{_QUANTITY}\s*({"|".join(UNITS)})\.?\s+(.+)', re.IGNORECASE)
_QUANTITY_ONLY_RE = re.compile(rf'^{_QUANTITY}\s+(.+)')
# Bullets and list numbering ("1.", "2)") but not quantities
_BULLET_RE = re.compile(r'^(?:[-*•·]+\s*|\d+[.)]\s+)')
_SERVINGS_RE = re.compile(r'^(?:servings?|serves|yields?|makes)\b\D*(\d+)|^(\d+)\s+servings?$', re.IGNORECASE)

_INGREDIENT_HEADER = 'ingredient'
_INSTRUCTION_HEADERS = ('instruction', 'direction', 'method')
_MIN_INSTRUCTION_LENGTH = 6


def parse_quantity(text: str) -> Optional[float]:
    """Parse "2", "1.5", "1/2", "1 1/2", "½" or "1½"; None if unreadable."""
    text = text.strip()
    if not text:
        return None

    if text[-1] in _UNICODE_FRACTIONS:
        whole = text[:-1].strip()
        try:
            return (float(whole) if whole else 0.0) + _UNICODE_FRACTIONS[text[-1]]
        except ValueError:
            return None

    parts = text.split()
    if len(parts) > 1:
        whole = parse_quantity(parts[0])
        fraction = parse_quantity("".join(parts[1:]))
        if whole is None or fraction is None:
            return None
        return whole + fraction

    if '/' in text:
        try:
            numerator, denominator = text.split('/')
            return float(numerator) / float(denominator)
        except (ValueError, ZeroDivisionError):
            return None

    try:
        return float(text)
    except ValueError:
        return None


def parse_ingredient_line(line: str) -> ParsedIngredient:
    """Split "2 cups flour" into quantity, unit and name.

    Lines without a recognisable quantity become name-only ingredients.
    """
    clean_line = _BULLET_RE.sub('', line.strip()).strip()

    match = _QUANTITY_UNIT_RE.match(clean_line)
    if match:
        quantity_str, unit, name = match.groups()
        return ParsedIngredient(
            name=name.strip(),
            quantity=parse_quantity(re.sub(r'\s*/\s*', '/', quantity_str)),
            unit=unit.lower(),
        )

    match = _QUANTITY_ONLY_RE.match(clean_line)
    if match:
        quantity_str, name = match.groups()
        return ParsedIngredient(
            name=name.strip(),
            quantity=parse_quantity(re.sub(r'\s*/\s*', '/', quantity_str)),
        )

    return ParsedIngredient(name=clean_line)


def parse_recipe_from_text(text: str) -> ParsedRecipe:
    """Parse a recipe from pasted plain text.

    The first line is the title and the line after it the description.
    "Ingredients" and "Instructions"/"Directions"/"Method" headers switch
    sections; a line mentioning servings sets the serving count.
    """
    lines = [line.strip() for line in text.split('\n') if line.strip()]
    if not lines:
        raise RecipeParseError("Recipe text is empty")

    title = 'Untitled Recipe'
    description = ''
    servings = config.DEFAULT_SERVINGS
    ingredients: list[ParsedIngredient] = []
    instructions: list[str] = []
    found_ingredient_section = False

    section = 'title'
    for line in lines:
        lower = line.lower()

        if _INGREDIENT_HEADER in lower and len(lower) < 40:
            section = 'ingredients'
            found_ingredient_section = True
            continue
        if any(h in lower for h in _INSTRUCTION_HEADERS) and len(lower) < 40:
            section = 'instructions'
            continue
        servings_match = _SERVINGS_RE.match(line)
        if servings_match:
            count = int(servings_match.group(1) or servings_match.group(2))
            if count > 0:
                servings = count
            continue

        if section == 'title':
            title = line
            section = 'description'
        elif section == 'description':
            description = f"{description} {line}".strip()
        elif section == 'ingredients':
            ingredient = parse_ingredient_line(line)
            if ingredient.name:
                ingredients.append(ingredient)
        elif section == 'instructions':
            step = _BULLET_RE.sub('', line).strip()
            if len(step) >= _MIN_INSTRUCTION_LENGTH:
                instructions.append(step)

    # No headers at all: treat everything after the title as ingredients
    if not found_ingredient_section and not instructions:
        description = ''
        for line in lines[1:]:
            if _SERVINGS_RE.match(line):
                continue
            ingredient = parse_ingredient_line(line)
            if ingredient.name:
                ingredients.append(ingredient)

    return ParsedRecipe(
        title=title,
        servings=servings,
        description=description,
        ingredients=ingredients,
        instructions=instructions,
    )


def generate_recipe_id(title: str, existing_ids: set[str]) -> str:
    """Generate unique slugified ID from recipe title."""
    slug = re.sub(r'[^\w\s-]', '', title.lower())
    slug = re.sub(r'[-\s]+', '-', slug).strip('-') or 'recipe'

    if slug not in existing_ids:
        return slug

    counter = 2
    while f"{slug}-{counter}" in existing_ids:
        counter += 1
    return f"{slug}-{counter}"
