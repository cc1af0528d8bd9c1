"""Client for the hosted recipe functions (URL scraping and image OCR).

Both functions return the same JSON recipe shape::

    {"title": ..., "servings": 4, "ingredients": [{"name", "amount", "unit"}],
     "instructions": [{"instruction": ...}], ...}
"""

import logging
from typing import Any, Optional

import requests

from mealspace import config
from mealspace.recipe_parser import ParsedIngredient, ParsedRecipe

logger = logging.getLogger(__name__)


class RecipeImportError(Exception):
    """Raised when a remote recipe import fails."""
    pass


class RecipeImporter:
    """Import recipes through the scrape-recipe and ocr-recipe functions."""

    def __init__(self, base_url: Optional[str] = None, api_key: Optional[str] = None,
                 timeout: Optional[float] = None):
        base_url = base_url or config.RECIPE_FUNCTIONS_URL
        if not base_url:
            raise RecipeImportError("RECIPE_FUNCTIONS_URL is not configured")
        self.base_url = base_url.rstrip('/')
        self.api_key = api_key if api_key is not None else config.RECIPE_FUNCTIONS_KEY
        self.timeout = timeout or config.IMPORT_TIMEOUT_SECONDS

    def _headers(self) -> dict[str, str]:
        if self.api_key:
            return {"Authorization": f"Bearer {self.api_key}"}
        return {}

    def import_from_url(self, url: str) -> ParsedRecipe:
        logger.info("Scraping recipe", extra={"url": url})
        response = self._post("scrape-recipe", json={"url": url})
        recipe = self._to_parsed_recipe(response)
        recipe.source_url = url
        return recipe

    def import_from_image(self, image_data: bytes, filename: str, content_type: str) -> ParsedRecipe:
        logger.info("Extracting recipe from image", extra={"upload_filename": filename, "size_bytes": len(image_data)})
        response = self._post("ocr-recipe", files={"image": (filename, image_data, content_type)})
        return self._to_parsed_recipe(response)

    def _post(self, function: str, **kwargs) -> dict[str, Any]:
        endpoint = f"{self.base_url}/{function}"
        try:
            response = requests.post(endpoint, headers=self._headers(), timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise RecipeImportError(f"Failed to reach recipe service: {e}")

        if not response.ok:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = body.get("error") if isinstance(body, dict) else None
            logger.warning("Recipe service returned an error",
                           extra={"function": function, "status": response.status_code})
            raise RecipeImportError(message or f"Server error: {response.status_code}")

        try:
            data = response.json()
        except ValueError:
            raise RecipeImportError("Recipe service returned invalid JSON")

        if not isinstance(data, dict):
            raise RecipeImportError("Recipe service returned an unexpected response")
        if data.get("error"):
            raise RecipeImportError(data["error"])
        return data

    def _to_parsed_recipe(self, data: dict[str, Any]) -> ParsedRecipe:
        ingredients = []
        for item in data.get("ingredients") or []:
            if not isinstance(item, dict) or not item.get("name"):
                continue
            amount = item.get("amount")
            ingredients.append(ParsedIngredient(
                name=item["name"],
                quantity=float(amount) if isinstance(amount, (int, float)) else None,
                unit=item.get("unit") or None,
            ))

        instructions = []
        for step in data.get("instructions") or []:
            text = step.get("instruction", "") if isinstance(step, dict) else str(step)
            if text.strip():
                instructions.append(text.strip())

        return ParsedRecipe(
            title=data.get("title") or "Untitled Recipe",
            servings=data.get("servings") or config.DEFAULT_SERVINGS,
            description=data.get("description") or "",
            prep_time=data.get("prepTime") or 0,
            cook_time=data.get("cookTime") or 0,
            ingredients=ingredients,
            instructions=instructions,
            tags=data.get("tags") or [],
            image=data.get("image") or "",
        )
