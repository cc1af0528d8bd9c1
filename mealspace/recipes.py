import json
import os
import tempfile
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Any, Optional


class RecipeLoadError(Exception):
    """Raised when recipes cannot be loaded from file."""
    pass


class RecipeSaveError(Exception):
    """Raised when recipes cannot be saved to file."""
    pass


@dataclass
class Ingredient:
    name: str
    amount: Optional[float] = None
    unit: Optional[str] = None
    preparation: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Ingredient":
        if not data.get("name"):
            raise ValueError("Ingredient name is required")

        amount = data.get("amount")
        if amount is not None:
            try:
                amount = float(amount)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid amount for ingredient '{data['name']}': {amount!r}")

        return cls(
            name=data["name"],
            amount=amount,
            unit=data.get("unit") or None,
            preparation=data.get("preparation") or None,
        )


@dataclass
class Recipe:
    id: str
    title: str
    servings: int
    ingredients: list[Ingredient] = field(default_factory=list)
    instructions: list[str] = field(default_factory=list)
    description: str = ""
    prep_time: int = 0
    cook_time: int = 0
    source_url: Optional[str] = None
    image_url: Optional[str] = None
    tags: list[str] = field(default_factory=list)

    @property
    def total_time(self) -> int:
        return (self.prep_time or 0) + (self.cook_time or 0)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Recipe":
        """Create Recipe from dictionary.

        Instructions may be plain strings or ``{"instruction": "..."}`` objects,
        the shape the import services return.
        """
        required = ["id", "title", "servings"]
        missing = [f for f in required if f not in data]
        if missing:
            raise ValueError(f"Missing required fields: {', '.join(missing)}")

        try:
            servings = float(data["servings"])
        except (TypeError, ValueError):
            raise ValueError(f"Invalid servings: {data['servings']!r}")
        if not servings.is_integer():
            raise ValueError(f"Servings must be a whole number: {data['servings']!r}")
        if servings <= 0:
            raise ValueError("Servings must be a positive number")

        instructions = []
        for step in data.get("instructions", []):
            if isinstance(step, dict):
                step = step.get("instruction", "")
            if step:
                instructions.append(step)

        return cls(
            id=data["id"],
            title=data["title"],
            servings=int(servings),
            ingredients=[Ingredient.from_dict(i) for i in data.get("ingredients", [])],
            instructions=instructions,
            description=data.get("description") or "",
            prep_time=int(data.get("prep_time") or 0),
            cook_time=int(data.get("cook_time") or 0),
            source_url=data.get("source_url"),
            image_url=data.get("image_url"),
            tags=data.get("tags", []),
        )

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["total_time"] = self.total_time
        return data


def load_recipes(file_path: Path | str) -> list[Recipe]:
    """Load recipes from JSON file. A missing file means no recipes yet."""
    file_path = Path(file_path)

    if not file_path.exists():
        return []

    try:
        with open(file_path) as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise RecipeLoadError(f"Invalid JSON in recipe file: {e}")

    if "recipes" not in data:
        raise RecipeLoadError("Recipe file must contain a 'recipes' key")

    try:
        return [Recipe.from_dict(r) for r in data["recipes"]]
    except ValueError as e:
        raise RecipeLoadError(f"Invalid recipe in {file_path}: {e}")


def save_recipes(file_path: Path | str, recipes: list[Recipe]) -> None:
    """Save recipes to JSON file with atomic write.

    Args:
        file_path: Path to the JSON file
        recipes: List of Recipe objects to save

    Raises:
        RecipeSaveError: If the file cannot be written
    """
    file_path = Path(file_path)
    data = {"recipes": [asdict(recipe) for recipe in recipes]}

    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        atomic_write_json(file_path, data)
    except (IOError, OSError, PermissionError) as e:
        raise RecipeSaveError(f"Failed to save recipes to {file_path}: {e}")


def atomic_write_json(file_path: Path, data: Any) -> None:
    # Same directory as the target so the rename stays on one filesystem
    temp_fd, temp_path = tempfile.mkstemp(
        dir=file_path.parent,
        prefix=f".{file_path.stem}_tmp_",
        suffix=".json"
    )

    try:
        with os.fdopen(temp_fd, 'w') as f:
            json.dump(data, f, indent=2)
        os.replace(temp_path, file_path)
    except Exception:
        try:
            os.unlink(temp_path)
        except OSError:
            pass
        raise


def find_recipe(recipes: list[Recipe], recipe_id: str) -> Optional[Recipe]:
    return next((r for r in recipes if r.id == recipe_id), None)


def update_recipe(recipes: list[Recipe], updated_recipe: Recipe) -> list[Recipe]:
    """Replace recipe in list by ID, return new list.

    Raises:
        ValueError: If recipe with given ID is not found
    """
    for i, recipe in enumerate(recipes):
        if recipe.id == updated_recipe.id:
            new_recipes = recipes.copy()
            new_recipes[i] = updated_recipe
            return new_recipes

    raise ValueError(f"Recipe with ID '{updated_recipe.id}' not found")


def delete_recipe(recipes: list[Recipe], recipe_id: str) -> list[Recipe]:
    """Return the list without the given recipe.

    Raises:
        ValueError: If recipe with given ID is not found
    """
    remaining = [r for r in recipes if r.id != recipe_id]
    if len(remaining) == len(recipes):
        raise ValueError(f"Recipe with ID '{recipe_id}' not found")
    return remaining
