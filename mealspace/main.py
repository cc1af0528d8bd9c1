import logging
import math
import os
from datetime import date
from pathlib import Path
from typing import Any, Optional

from flask import Flask, jsonify, request
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from flask_wtf.csrf import CSRFProtect, generate_csrf

from mealspace import config
from mealspace.logging_config import configure_logging
from mealspace.meal_plans import (
    MealPlan,
    MealPlanError,
    create_meal_plan,
    current_week_plan,
    detach_recipe,
    duplicate_meal_plan,
    find_meal_plan,
    load_meal_plans,
    save_meal_plans,
)
from mealspace.measurements import MeasurementSystem, convert_measurement, format_quantity, scale_recipe
from mealspace.preferences import PreferencesError, UserPreferences, load_preferences, save_preferences
from mealspace.recipe_display import display_ingredients, format_ingredients_text, format_recipe_text
from mealspace.recipe_importer import RecipeImportError, RecipeImporter
from mealspace.recipe_parser import ParsedRecipe, RecipeParseError, generate_recipe_id, parse_recipe_from_text
from mealspace.recipes import (
    Recipe,
    RecipeLoadError,
    RecipeSaveError,
    delete_recipe,
    find_recipe,
    load_recipes,
    save_recipes,
    update_recipe,
)

configure_logging(config.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["SECRET_KEY"] = config.SECRET_KEY
csrf = CSRFProtect(app)
limiter = Limiter(
    get_remote_address,
    app=app,
    default_limits=[],          # no global limit; apply per-route only
    storage_uri="memory://",
)

# ---------------------------------------------------------------------------
# Image magic-bytes validation
# ---------------------------------------------------------------------------

_IMAGE_MAGIC: list[tuple[bytes, bytes | None, int, int]] = [
    # (prefix, suffix_at_offset, suffix_offset, suffix_len)
    (b"\x89PNG\r\n\x1a\n", None, 0, 0),   # PNG
    (b"\xff\xd8\xff", None, 0, 0),          # JPEG
    (b"GIF87a", None, 0, 0),                # GIF87a
    (b"GIF89a", None, 0, 0),                # GIF89a
    (b"RIFF", b"WEBP", 8, 4),               # WebP: RIFF????WEBP
]

_IMAGE_CONTENT_TYPES = {
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "webp": "image/webp",
}


def _is_valid_image_bytes(data: bytes) -> bool:
    """Return True if *data* starts with magic bytes for a supported image format."""
    for prefix, suffix, suffix_offset, suffix_len in _IMAGE_MAGIC:
        if data[: len(prefix)] == prefix:
            if suffix is None:
                return True
            if data[suffix_offset: suffix_offset + suffix_len] == suffix:
                return True
    return False


def _error(error: str, message: str, status: int):
    return jsonify({"error": error, "message": message}), status


def _json_body() -> Optional[dict[str, Any]]:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else None


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _parse_bool(value: str) -> Optional[bool]:
    lowered = value.strip().lower()
    if lowered in ("1", "true", "yes", "on"):
        return True
    if lowered in ("0", "false", "no", "off"):
        return False
    return None


def _load_recipe(recipe_id: str) -> Optional[Recipe]:
    return find_recipe(load_recipes(Path(config.RECIPES_FILE)), recipe_id)


def _recipe_not_found(recipe_id: str):
    return _error("Recipe not found", f"No recipe found with ID '{recipe_id}'", 404)


def _requested_servings(recipe: Recipe) -> float:
    """Serving count from the query string, defaulting to the recipe's own.

    Raises:
        ValueError: If the value is not a number of at least 1
    """
    raw = request.args.get("servings")
    if raw is None or raw == "":
        return recipe.servings
    try:
        servings = float(raw)
    except ValueError:
        raise ValueError(f"Invalid servings: {raw!r}")
    if not math.isfinite(servings) or servings < 1:
        raise ValueError("Servings must be a number of at least 1")
    return servings


def _save_parsed_recipe(parsed_recipe: ParsedRecipe, source: str):
    """Assign an ID, save the recipe and return a JSON response.

    Shared by all recipe-import handlers (text, URL, image).
    Raises RecipeParseError / RecipeSaveError so callers can translate
    to the appropriate HTTP status code.
    """
    recipes_file = Path(config.RECIPES_FILE)
    existing_recipes = load_recipes(recipes_file)
    recipe_id = generate_recipe_id(parsed_recipe.title, {r.id for r in existing_recipes})
    new_recipe = parsed_recipe.to_recipe(recipe_id)
    save_recipes(recipes_file, existing_recipes + [new_recipe])

    logger.info("Recipe imported successfully",
                extra={"recipe_id": new_recipe.id, "recipe_title": new_recipe.title, "source": source})

    return jsonify({
        "success": True,
        "message": f"Recipe '{new_recipe.title}' imported successfully from {source}",
        "recipe": {
            "id": new_recipe.id,
            "title": new_recipe.title,
            "servings": new_recipe.servings,
            "ingredient_count": len(new_recipe.ingredients),
            "instruction_count": len(new_recipe.instructions),
        },
    })


@app.errorhandler(RecipeLoadError)
def handle_recipe_load_error(e):
    logger.exception("Failed to load recipes")
    return _error("Load error", str(e), 500)


@app.errorhandler(PreferencesError)
def handle_preferences_error(e):
    logger.exception("Failed to read or write preferences")
    return _error("Preferences error", str(e), 500)


@app.errorhandler(MealPlanError)
def handle_meal_plan_error(e):
    logger.exception("Failed to read or write meal plans")
    return _error("Meal plan error", str(e), 500)


@app.route("/csrf-token")
def csrf_token():
    """Token for the X-CSRFToken header on write requests."""
    return jsonify({"csrf_token": generate_csrf()})


# ---------------------------------------------------------------------------
# Recipes
# ---------------------------------------------------------------------------

@app.route("/recipes", methods=["GET"])
def recipes():
    """List all recipes."""
    logger.debug("Listing all recipes")
    all_recipes = load_recipes(Path(config.RECIPES_FILE))
    return jsonify({
        "recipes": [
            {
                "id": r.id,
                "title": r.title,
                "servings": r.servings,
                "total_time": r.total_time,
                "tags": r.tags,
                "image_url": r.image_url,
            }
            for r in all_recipes
        ]
    })


@app.route("/recipes", methods=["POST"])
def create_recipe():
    """Create a new recipe from JSON."""
    logger.info("Creating new recipe manually")
    data = _json_body()
    if data is None:
        return _error("Invalid JSON", "Request body must be a JSON object", 400)

    if not str(data.get("title", "")).strip():
        return _error("Validation error", "Missing required fields: title", 400)

    recipes_file = Path(config.RECIPES_FILE)
    existing_recipes = load_recipes(recipes_file)
    data = {**data, "id": generate_recipe_id(str(data["title"]), {r.id for r in existing_recipes})}

    try:
        new_recipe = Recipe.from_dict(data)
    except ValueError as e:
        return _error("Validation error", str(e), 400)

    try:
        save_recipes(recipes_file, existing_recipes + [new_recipe])
    except RecipeSaveError as e:
        logger.exception("Save error while creating recipe", extra={"recipe_id": new_recipe.id})
        return _error("Save error", f"Failed to save recipe: {e}", 500)

    logger.info("Recipe created", extra={"recipe_id": new_recipe.id})
    return jsonify(new_recipe.to_dict()), 201


@app.route("/recipes/<recipe_id>", methods=["GET"])
def get_recipe(recipe_id: str):
    """Fetch a single recipe as stored."""
    logger.debug("Fetching single recipe", extra={"recipe_id": recipe_id})
    recipe = _load_recipe(recipe_id)
    if recipe is None:
        return _recipe_not_found(recipe_id)
    return jsonify(recipe.to_dict())


@app.route("/recipes/<recipe_id>", methods=["PUT"])
def update_recipe_endpoint(recipe_id: str):
    """Replace an existing recipe."""
    logger.info("Updating recipe", extra={"recipe_id": recipe_id})
    data = _json_body()
    if data is None:
        return _error("Invalid JSON", "Request body must be a JSON object", 400)

    try:
        updated = Recipe.from_dict({**data, "id": recipe_id})
    except ValueError as e:
        return _error("Validation error", str(e), 400)

    recipes_file = Path(config.RECIPES_FILE)
    try:
        new_recipes = update_recipe(load_recipes(recipes_file), updated)
    except ValueError:
        return _recipe_not_found(recipe_id)

    try:
        save_recipes(recipes_file, new_recipes)
    except RecipeSaveError as e:
        logger.exception("Save error while updating recipe", extra={"recipe_id": recipe_id})
        return _error("Save error", f"Failed to save recipe: {e}", 500)

    return jsonify(updated.to_dict())


@app.route("/recipes/<recipe_id>", methods=["DELETE"])
def delete_recipe_endpoint(recipe_id: str):
    """Delete a recipe and take it out of any meal plan."""
    logger.info("Deleting recipe", extra={"recipe_id": recipe_id})
    recipes_file = Path(config.RECIPES_FILE)
    try:
        remaining = delete_recipe(load_recipes(recipes_file), recipe_id)
    except ValueError:
        return _recipe_not_found(recipe_id)

    plans = load_meal_plans(config.MEAL_PLANS_FILE)
    slots_changed = detach_recipe(plans, recipe_id)
    if slots_changed:
        save_meal_plans(config.MEAL_PLANS_FILE, plans)

    try:
        save_recipes(recipes_file, remaining)
    except RecipeSaveError as e:
        logger.exception("Save error while deleting recipe", extra={"recipe_id": recipe_id})
        return _error("Save error", f"Failed to delete recipe: {e}", 500)

    return jsonify({"success": True, "id": recipe_id, "meal_plan_slots_changed": slots_changed})


@app.route("/recipes/<recipe_id>/display", methods=["GET"])
def recipe_display(recipe_id: str):
    """Ingredients scaled to ?servings= and converted to ?system= (defaults: saved preferences)."""
    logger.debug("Rendering recipe ingredients", extra={"recipe_id": recipe_id})
    recipe = _load_recipe(recipe_id)
    if recipe is None:
        return _recipe_not_found(recipe_id)

    preferences = load_preferences(config.PREFERENCES_FILE)

    system = request.args.get("system", preferences.measurement_system)
    if system not in [s.value for s in MeasurementSystem]:
        return _error("Validation error", f"Unknown measurement system: {system!r}", 400)

    fraction_display = preferences.fraction_display
    if "fractions" in request.args:
        fraction_display = _parse_bool(request.args["fractions"])
        if fraction_display is None:
            return _error("Validation error", "fractions must be true or false", 400)

    try:
        servings = _requested_servings(recipe)
        items = display_ingredients(
            recipe,
            servings,
            UserPreferences(measurement_system=system, fraction_display=fraction_display),
        )
    except ValueError as e:
        return _error("Validation error", str(e), 400)

    return jsonify({
        "id": recipe.id,
        "title": recipe.title,
        "base_servings": recipe.servings,
        "servings": servings,
        "scale_factor": servings / recipe.servings,
        "measurement_system": system,
        "fraction_display": fraction_display,
        "ingredients": [item.to_dict() for item in items],
        "instructions": recipe.instructions,
    })


@app.route("/recipes/<recipe_id>/text", methods=["GET"])
def recipe_text(recipe_id: str):
    """Plain-text copy of the recipe (or just its ingredients with ?part=ingredients)."""
    recipe = _load_recipe(recipe_id)
    if recipe is None:
        return _recipe_not_found(recipe_id)

    try:
        servings = _requested_servings(recipe)
        if request.args.get("part") == "ingredients":
            text = format_ingredients_text(recipe, servings)
        else:
            text = format_recipe_text(recipe, servings)
    except ValueError as e:
        return _error("Validation error", str(e), 400)

    return app.response_class(text, mimetype="text/plain")


# ---------------------------------------------------------------------------
# Measurement helpers
# ---------------------------------------------------------------------------

@app.route("/api/scale", methods=["POST"])
def api_scale():
    data = _json_body()
    if data is None:
        return _error("Invalid JSON", "Request body must be a JSON object", 400)

    quantity = data.get("quantity")
    scale_factor = data.get("scale_factor")
    if not _is_number(quantity) or quantity < 0:
        return _error("Validation error", "quantity must be a non-negative number", 400)
    if not _is_number(scale_factor) or scale_factor <= 0:
        return _error("Validation error", "scale_factor must be a positive number", 400)

    return jsonify(scale_recipe(quantity, scale_factor).to_dict())


@app.route("/api/convert", methods=["POST"])
def api_convert():
    data = _json_body()
    if data is None:
        return _error("Invalid JSON", "Request body must be a JSON object", 400)

    quantity = data.get("quantity")
    unit = data.get("unit")
    system = data.get("system")
    if quantity is not None and not _is_number(quantity):
        return _error("Validation error", "quantity must be a number", 400)
    if unit is not None and not isinstance(unit, str):
        return _error("Validation error", "unit must be a string", 400)
    if system not in [s.value for s in MeasurementSystem]:
        return _error("Validation error", f"Unknown measurement system: {system!r}", 400)

    result = convert_measurement(quantity, unit, system)
    return jsonify({"result": result.to_dict() if result is not None else None})


@app.route("/api/format", methods=["POST"])
def api_format():
    data = _json_body()
    if data is None:
        return _error("Invalid JSON", "Request body must be a JSON object", 400)

    quantity = data.get("quantity")
    use_fractions = data.get("use_fractions", True)
    if not _is_number(quantity):
        return _error("Validation error", "quantity must be a number", 400)
    if not isinstance(use_fractions, bool):
        return _error("Validation error", "use_fractions must be true or false", 400)

    return jsonify({"display": format_quantity(quantity, use_fractions)})


# ---------------------------------------------------------------------------
# Preferences
# ---------------------------------------------------------------------------

@app.route("/preferences", methods=["GET"])
def get_preferences():
    return jsonify(load_preferences(config.PREFERENCES_FILE).to_dict())


@app.route("/preferences", methods=["PUT"])
def update_preferences():
    logger.info("Updating preferences")
    data = _json_body()
    if data is None:
        return _error("Invalid JSON", "Request body must be a JSON object", 400)

    current = load_preferences(config.PREFERENCES_FILE)
    try:
        preferences = UserPreferences.from_dict({**current.to_dict(), **data})
    except ValueError as e:
        return _error("Validation error", str(e), 400)

    save_preferences(config.PREFERENCES_FILE, preferences)
    return jsonify(preferences.to_dict())


# ---------------------------------------------------------------------------
# Meal plans
# ---------------------------------------------------------------------------

def _meal_plan_not_found(plan_id: str):
    return _error("Meal plan not found", f"No meal plan found with ID '{plan_id}'", 404)


def _week_of(data: dict[str, Any]) -> date:
    """Parse ``week_start_date`` (YYYY-MM-DD) from a request body.

    Raises:
        ValueError: If it is missing or not a date
    """
    value = data.get("week_start_date")
    if not isinstance(value, str):
        raise ValueError("week_start_date (YYYY-MM-DD) is required")
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise ValueError(f"Invalid week_start_date: {value!r}")


def _meal_plan_json(plan: MealPlan, recipes_by_id: dict[str, Recipe]) -> dict[str, Any]:
    data = plan.to_dict()
    for item in data["items"]:
        recipe = recipes_by_id.get(item["recipe_id"])
        item["recipe"] = (
            {"id": recipe.id, "title": recipe.title, "servings": recipe.servings}
            if recipe is not None else None
        )
    return data


def _recipes_by_id() -> dict[str, Recipe]:
    return {r.id: r for r in load_recipes(Path(config.RECIPES_FILE))}


@app.route("/meal-plans", methods=["GET"])
def meal_plans():
    """List meal plans, newest week first."""
    recipes_by_id = _recipes_by_id()
    return jsonify({
        "meal_plans": [_meal_plan_json(p, recipes_by_id) for p in load_meal_plans(config.MEAL_PLANS_FILE)]
    })


@app.route("/meal-plans", methods=["POST"])
def create_meal_plan_endpoint():
    data = _json_body()
    if data is None:
        return _error("Invalid JSON", "Request body must be a JSON object", 400)

    name = data.get("name")
    if name is not None and not isinstance(name, str):
        return _error("Validation error", "name must be a string", 400)

    try:
        week_of = _week_of(data)
    except ValueError as e:
        return _error("Validation error", str(e), 400)

    plans = load_meal_plans(config.MEAL_PLANS_FILE)
    try:
        plan = create_meal_plan(plans, week_of, name)
    except ValueError as e:
        return _error("Conflict", str(e), 409)

    save_meal_plans(config.MEAL_PLANS_FILE, plans + [plan])
    return jsonify(_meal_plan_json(plan, {})), 201


@app.route("/meal-plans/current", methods=["GET"])
def current_meal_plan():
    """The plan for this week (weeks start on Sunday)."""
    plan = current_week_plan(load_meal_plans(config.MEAL_PLANS_FILE))
    if plan is None:
        return _error("Meal plan not found", "No meal plan for the current week", 404)
    return jsonify(_meal_plan_json(plan, _recipes_by_id()))


@app.route("/meal-plans/<plan_id>", methods=["GET"])
def get_meal_plan(plan_id: str):
    plan = find_meal_plan(load_meal_plans(config.MEAL_PLANS_FILE), plan_id)
    if plan is None:
        return _meal_plan_not_found(plan_id)
    return jsonify(_meal_plan_json(plan, _recipes_by_id()))


@app.route("/meal-plans/<plan_id>", methods=["DELETE"])
def delete_meal_plan(plan_id: str):
    logger.info("Deleting meal plan", extra={"meal_plan_id": plan_id})
    plans = load_meal_plans(config.MEAL_PLANS_FILE)
    if find_meal_plan(plans, plan_id) is None:
        return _meal_plan_not_found(plan_id)

    save_meal_plans(config.MEAL_PLANS_FILE, [p for p in plans if p.id != plan_id])
    return jsonify({"success": True, "id": plan_id})


@app.route("/meal-plans/<plan_id>/duplicate", methods=["POST"])
def duplicate_meal_plan_endpoint(plan_id: str):
    """Copy a plan's meals into another week."""
    data = _json_body()
    if data is None:
        return _error("Invalid JSON", "Request body must be a JSON object", 400)

    plans = load_meal_plans(config.MEAL_PLANS_FILE)
    source = find_meal_plan(plans, plan_id)
    if source is None:
        return _meal_plan_not_found(plan_id)

    try:
        week_of = _week_of(data)
    except ValueError as e:
        return _error("Validation error", str(e), 400)

    try:
        plan = duplicate_meal_plan(plans, source, week_of)
    except ValueError as e:
        return _error("Conflict", str(e), 409)

    save_meal_plans(config.MEAL_PLANS_FILE, plans + [plan])
    logger.info("Meal plan duplicated", extra={"source_id": plan_id, "meal_plan_id": plan.id})
    return jsonify(_meal_plan_json(plan, _recipes_by_id())), 201


@app.route("/meal-plans/<plan_id>/items/<int:day_of_week>/<meal_type>", methods=["PUT"])
def set_meal_plan_item(plan_id: str, day_of_week: int, meal_type: str):
    """Fill one slot with a recipe and/or free text; an empty body clears it."""
    data = _json_body()
    if data is None:
        return _error("Invalid JSON", "Request body must be a JSON object", 400)

    plans = load_meal_plans(config.MEAL_PLANS_FILE)
    plan = find_meal_plan(plans, plan_id)
    if plan is None:
        return _meal_plan_not_found(plan_id)

    for key in ("recipe_id", "custom_text", "notes"):
        if data.get(key) is not None and not isinstance(data[key], str):
            return _error("Validation error", f"{key} must be a string", 400)

    recipe_id = data.get("recipe_id")
    if recipe_id and recipe_id not in _recipes_by_id():
        return _recipe_not_found(recipe_id)

    try:
        item = plan.set_item(day_of_week, meal_type, recipe_id, data.get("custom_text"), data.get("notes"))
    except ValueError as e:
        return _error("Validation error", str(e), 400)

    save_meal_plans(config.MEAL_PLANS_FILE, plans)
    return jsonify({"item": item.to_dict() if item is not None else None})


@app.route("/meal-plans/<plan_id>/items/<int:day_of_week>/<meal_type>", methods=["DELETE"])
def delete_meal_plan_item(plan_id: str, day_of_week: int, meal_type: str):
    plans = load_meal_plans(config.MEAL_PLANS_FILE)
    plan = find_meal_plan(plans, plan_id)
    if plan is None:
        return _meal_plan_not_found(plan_id)

    if not plan.remove_item(day_of_week, meal_type):
        return _error("Not found", f"Nothing planned for {meal_type} on day {day_of_week}", 404)

    save_meal_plans(config.MEAL_PLANS_FILE, plans)
    return jsonify({"success": True})


# ---------------------------------------------------------------------------
# Imports
# ---------------------------------------------------------------------------

@app.route("/import/text", methods=["POST"])
@limiter.limit("10 per minute")
def import_recipe_text():
    """Import a recipe from pasted plain text."""
    logger.info("Importing recipe from text")
    data = _json_body()
    if data is None or not isinstance(data.get("text"), str) or not data["text"].strip():
        return _error("Invalid request", "Recipe text is required", 400)

    text = data["text"]
    try:
        parsed_recipe = parse_recipe_from_text(text)
        return _save_parsed_recipe(parsed_recipe, "text")
    except RecipeParseError as e:
        logger.warning("Recipe parse error during text import", extra={"text_length": len(text)})
        return _error("Parse error", str(e), 400)
    except RecipeSaveError as e:
        logger.exception("Save error during text import", extra={"text_length": len(text)})
        return _error("Save error", f"Failed to save recipe: {e}", 500)


@app.route("/import/url", methods=["POST"])
@limiter.limit("10 per minute")
def import_recipe_url():
    """Import a recipe from a URL via the scrape function."""
    logger.info("Importing recipe from URL")
    data = _json_body()
    if data is None or not data.get("url"):
        return _error("Invalid request", "URL is required", 400)

    url = data["url"]
    if not isinstance(url, str) or not url.startswith(('http://', 'https://')):
        return _error("Invalid URL", "URL must start with http:// or https://", 400)

    try:
        parsed_recipe = RecipeImporter().import_from_url(url)
        return _save_parsed_recipe(parsed_recipe, url)
    except RecipeImportError as e:
        logger.exception("Import error during URL import", extra={"url": url})
        return _error("Import error", str(e), 502)
    except RecipeParseError as e:
        logger.warning("Recipe parse error during URL import", extra={"url": url})
        return _error("Parse error", str(e), 400)
    except RecipeSaveError as e:
        logger.exception("Save error during URL import", extra={"url": url})
        return _error("Save error", f"Failed to save recipe: {e}", 500)


@app.route("/import/image", methods=["POST"])
@limiter.limit("10 per minute")
def import_recipe_image():
    """Import a recipe from a photo via the OCR function."""
    logger.info("Importing recipe from image")

    file = request.files.get("image")
    if file is None or not file.filename:
        logger.warning("Image import request missing image file")
        return _error("Invalid request", "An image file is required", 400)

    file_ext = file.filename.rsplit(".", 1)[-1].lower() if "." in file.filename else ""
    if file_ext not in _IMAGE_CONTENT_TYPES:
        logger.warning("Invalid image file type", extra={"file_ext": file_ext})
        return _error("Invalid file type", f"Supported types: {', '.join(sorted(_IMAGE_CONTENT_TYPES))}", 400)

    image_data = file.read()
    if not image_data:
        return _error("Invalid request", "Uploaded image file is empty", 400)
    if len(image_data) > config.MAX_IMAGE_SIZE_BYTES:
        return _error("File too large", "Image must be 10 MB or smaller", 400)
    if not _is_valid_image_bytes(image_data):
        logger.warning("Image content does not match a supported format", extra={"upload_filename": file.filename})
        return _error("Invalid file type", "File content is not a supported image", 400)

    try:
        parsed_recipe = RecipeImporter().import_from_image(image_data, file.filename, _IMAGE_CONTENT_TYPES[file_ext])
        return _save_parsed_recipe(parsed_recipe, "image")
    except RecipeImportError as e:
        logger.exception("Import error during image import", extra={"upload_filename": file.filename})
        return _error("Import error", str(e), 502)
    except RecipeParseError as e:
        logger.warning("Recipe parse error during image import", extra={"upload_filename": file.filename})
        return _error("Parse error", str(e), 400)
    except RecipeSaveError as e:
        logger.exception("Save error during image import", extra={"upload_filename": file.filename})
        return _error("Save error", f"Failed to save recipe: {e}", 500)


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 5000))
    debug = os.environ.get("FLASK_ENV") != "production"
    app.run(host="0.0.0.0", port=port, debug=debug)
