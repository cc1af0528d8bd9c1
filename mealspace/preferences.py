"""Per-user display preferences: measurement system and fraction display."""

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any

from mealspace import config
from mealspace.measurements import MeasurementSystem
from mealspace.recipes import atomic_write_json

logger = logging.getLogger(__name__)


class PreferencesError(Exception):
    """Raised when preferences cannot be read or written."""
    pass


@dataclass
class UserPreferences:
    measurement_system: str = config.DEFAULT_MEASUREMENT_SYSTEM
    fraction_display: bool = config.DEFAULT_FRACTION_DISPLAY

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "UserPreferences":
        system = data.get("measurement_system", config.DEFAULT_MEASUREMENT_SYSTEM)
        valid = [s.value for s in MeasurementSystem]
        if system not in valid:
            raise ValueError(f"measurement_system must be one of: {', '.join(valid)}")

        fraction_display = data.get("fraction_display", config.DEFAULT_FRACTION_DISPLAY)
        if not isinstance(fraction_display, bool):
            raise ValueError("fraction_display must be true or false")

        return cls(measurement_system=system, fraction_display=fraction_display)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def load_preferences(file_path: Path | str) -> UserPreferences:
    """Load saved preferences, falling back to defaults when none were saved."""
    file_path = Path(file_path)

    if not file_path.exists():
        logger.debug("No saved preferences, using defaults", extra={"path": str(file_path)})
        return UserPreferences()

    try:
        with open(file_path) as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        return UserPreferences.from_dict(data)
    except (json.JSONDecodeError, ValueError) as e:
        raise PreferencesError(f"Invalid preferences file {file_path}: {e}")


def save_preferences(file_path: Path | str, preferences: UserPreferences) -> None:
    file_path = Path(file_path)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        atomic_write_json(file_path, preferences.to_dict())
    except OSError as e:
        raise PreferencesError(f"Failed to save preferences to {file_path}: {e}")
