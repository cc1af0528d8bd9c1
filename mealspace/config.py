import os
import secrets

# Flask secret key for session signing and CSRF tokens
# Set SECRET_KEY in the environment for production; a random key is
# generated on startup as a fallback (sessions won't survive restarts).
SECRET_KEY = os.environ.get("SECRET_KEY", secrets.token_hex(32))

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

RECIPES_FILE = os.environ.get("RECIPES_FILE", "data/recipes.json")
PREFERENCES_FILE = os.environ.get("PREFERENCES_FILE", "data/preferences.json")
MEAL_PLANS_FILE = os.environ.get("MEAL_PLANS_FILE", "data/meal_plans.json")

# Hosted recipe functions (scrape-recipe, ocr-recipe).
# Both are optional: without them only plain-text import is available.
RECIPE_FUNCTIONS_URL = os.environ.get("RECIPE_FUNCTIONS_URL")
RECIPE_FUNCTIONS_KEY = os.environ.get("RECIPE_FUNCTIONS_KEY")
IMPORT_TIMEOUT_SECONDS = float(os.environ.get("IMPORT_TIMEOUT_SECONDS", "30"))

# Defaults applied when no preferences have been saved yet
DEFAULT_MEASUREMENT_SYSTEM = "metric"
DEFAULT_FRACTION_DISPLAY = True

DEFAULT_SERVINGS = 4
MAX_IMAGE_SIZE_BYTES = 10 * 1024 * 1024
