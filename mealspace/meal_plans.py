"""Weekly meal plans: a grid of day x meal slots holding a recipe or free text."""

import json
import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from pathlib import Path
from typing import Any, Optional

from mealspace.recipes import atomic_write_json

logger = logging.getLogger(__name__)

# day_of_week follows the calendar grid: 0 = Sunday
DAYS_OF_WEEK = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]
MEAL_TYPES = ["breakfast", "lunch", "dinner", "snack"]


class MealPlanError(Exception):
    """Raised when meal plans cannot be read or written."""
    pass


def week_start(day: date) -> date:
    """The Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


@dataclass
class MealPlanItem:
    day_of_week: int
    meal_type: str
    recipe_id: Optional[str] = None
    custom_text: Optional[str] = None
    notes: Optional[str] = None

    @property
    def has_content(self) -> bool:
        return bool(self.recipe_id) or bool(self.custom_text and self.custom_text.strip())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MealPlanItem":
        day = data.get("day_of_week")
        if isinstance(day, bool) or not isinstance(day, int) or not 0 <= day <= 6:
            raise ValueError("day_of_week must be an integer from 0 (Sunday) to 6 (Saturday)")

        meal_type = data.get("meal_type")
        if meal_type not in MEAL_TYPES:
            raise ValueError(f"meal_type must be one of: {', '.join(MEAL_TYPES)}")

        return cls(
            day_of_week=day,
            meal_type=meal_type,
            recipe_id=data.get("recipe_id") or None,
            custom_text=data.get("custom_text") or None,
            notes=data.get("notes") or None,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "day_of_week": self.day_of_week,
            "day": DAYS_OF_WEEK[self.day_of_week],
            "meal_type": self.meal_type,
            "recipe_id": self.recipe_id,
            "custom_text": self.custom_text,
            "notes": self.notes,
        }


@dataclass
class MealPlan:
    id: str
    week_start_date: date
    name: Optional[str] = None
    items: list[MealPlanItem] = field(default_factory=list)

    def find_item(self, day_of_week: int, meal_type: str) -> Optional[MealPlanItem]:
        return next(
            (i for i in self.items if i.day_of_week == day_of_week and i.meal_type == meal_type),
            None,
        )

    def set_item(
        self,
        day_of_week: int,
        meal_type: str,
        recipe_id: Optional[str] = None,
        custom_text: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> Optional[MealPlanItem]:
        """Fill a slot, replacing what was there.

        A slot with neither a recipe nor text is cleared; returns the
        item now in the slot, or None when it ended up empty.
        """
        item = MealPlanItem.from_dict({
            "day_of_week": day_of_week,
            "meal_type": meal_type,
            "recipe_id": recipe_id,
            "custom_text": custom_text,
            "notes": notes,
        })

        self.remove_item(day_of_week, meal_type)
        if not item.has_content:
            return None

        self.items.append(item)
        self.items.sort(key=lambda i: (i.day_of_week, MEAL_TYPES.index(i.meal_type)))
        return item

    def remove_item(self, day_of_week: int, meal_type: str) -> bool:
        remaining = [
            i for i in self.items
            if not (i.day_of_week == day_of_week and i.meal_type == meal_type)
        ]
        removed = len(remaining) != len(self.items)
        self.items = remaining
        return removed

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MealPlan":
        if not data.get("id") or not data.get("week_start_date"):
            raise ValueError("Meal plan requires id and week_start_date")
        return cls(
            id=data["id"],
            week_start_date=date.fromisoformat(data["week_start_date"]),
            name=data.get("name") or None,
            items=[MealPlanItem.from_dict(i) for i in data.get("items", [])],
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "week_start_date": self.week_start_date.isoformat(),
            "name": self.name,
            "items": [i.to_dict() for i in self.items],
        }


def load_meal_plans(file_path: Path | str) -> list[MealPlan]:
    """Load meal plans, newest week first. A missing file means no plans yet."""
    file_path = Path(file_path)

    if not file_path.exists():
        return []

    try:
        with open(file_path) as f:
            data = json.load(f)
        plans = [MealPlan.from_dict(p) for p in data["meal_plans"]]
    except (json.JSONDecodeError, KeyError, TypeError, ValueError) as e:
        raise MealPlanError(f"Invalid meal plan file {file_path}: {e}")

    return sorted(plans, key=lambda p: p.week_start_date, reverse=True)


def save_meal_plans(file_path: Path | str, plans: list[MealPlan]) -> None:
    file_path = Path(file_path)
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        atomic_write_json(file_path, {"meal_plans": [p.to_dict() for p in plans]})
    except OSError as e:
        raise MealPlanError(f"Failed to save meal plans to {file_path}: {e}")


def find_meal_plan(plans: list[MealPlan], plan_id: str) -> Optional[MealPlan]:
    return next((p for p in plans if p.id == plan_id), None)


def find_week(plans: list[MealPlan], day: date) -> Optional[MealPlan]:
    start = week_start(day)
    return next((p for p in plans if p.week_start_date == start), None)


def current_week_plan(plans: list[MealPlan], today: Optional[date] = None) -> Optional[MealPlan]:
    return find_week(plans, today or date.today())


def create_meal_plan(plans: list[MealPlan], week_of: date, name: Optional[str] = None) -> MealPlan:
    """Start an empty plan for the week containing ``week_of``.

    Raises:
        ValueError: If that week already has a plan
    """
    start = week_start(week_of)
    if find_week(plans, start) is not None:
        raise ValueError(f"A meal plan already exists for the week of {start.isoformat()}")

    plan = MealPlan(id=f"week-{start.isoformat()}", week_start_date=start, name=name or None)
    logger.info("Meal plan created", extra={"meal_plan_id": plan.id})
    return plan


def duplicate_meal_plan(plans: list[MealPlan], source: MealPlan, week_of: date) -> MealPlan:
    """Copy every filled slot of ``source`` into a new plan for another week."""
    target = create_meal_plan(plans, week_of)
    target.name = f"Copied from {target.week_start_date:%b} {target.week_start_date.day}, {target.week_start_date.year}"
    target.items = [
        MealPlanItem(i.day_of_week, i.meal_type, i.recipe_id, i.custom_text, i.notes)
        for i in source.items
        if i.has_content
    ]
    return target


def detach_recipe(plans: list[MealPlan], recipe_id: str) -> int:
    """Drop a deleted recipe from every plan; returns how many slots changed.

    Slots that only held the recipe are cleared; slots with their own text
    keep the text.
    """
    changed = 0
    for plan in plans:
        kept = []
        for item in plan.items:
            if item.recipe_id == recipe_id:
                changed += 1
                if not (item.custom_text and item.custom_text.strip()):
                    continue
                item.recipe_id = None
            kept.append(item)
        plan.items = kept
    return changed
