"""Cooking measurement conversion, recipe scaling and quantity formatting.

Three pure functions are composed once per ingredient when a recipe is shown:

    scaled = scale_recipe(amount, desired_servings / recipe.servings)
    converted = convert_measurement(scaled.quantity, unit, "metric")
    text = format_quantity(converted.quantity, use_fractions=True)

None of them raise for bad numbers: a failed conversion or fraction just
degrades to the plain decimal string.
"""

import logging
import math
import numbers
from dataclasses import dataclass
from enum import Enum
from fractions import Fraction
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class MeasurementSystem(str, Enum):
    METRIC = "metric"
    IMPERIAL = "imperial"
    US = "us"


@dataclass(frozen=True)
class ScaledQuantity:
    quantity: float
    display_quantity: str

    def to_dict(self) -> dict[str, Any]:
        return {"quantity": self.quantity, "displayQuantity": self.display_quantity}


@dataclass(frozen=True)
class ConversionResult:
    """Quantity in the target system.

    The ``original_*`` fields are only set when the unit actually changed, so
    callers can show "250 ml (1 cup)" when they are present and a single
    value otherwise.
    """
    quantity: float
    unit: str
    display_quantity: str
    original_quantity: Optional[float] = None
    original_unit: Optional[str] = None
    original_display_quantity: Optional[str] = None

    @property
    def is_converted(self) -> bool:
        return self.original_quantity is not None and self.original_unit is not None

    def to_dict(self) -> dict[str, Any]:
        """Wire form (camelCase); ``original*`` keys are omitted when unset."""
        data = {
            "quantity": self.quantity,
            "unit": self.unit,
            "displayQuantity": self.display_quantity,
        }
        if self.is_converted:
            data["originalQuantity"] = self.original_quantity
            data["originalUnit"] = self.original_unit
            data["originalDisplayQuantity"] = self.original_display_quantity
        return data


@dataclass(frozen=True)
class UnitFactor:
    amount: float
    unit: str


# Spelled-out and plural unit names -> canonical short form.
UNIT_SYNONYMS: dict[str, str] = {
    "teaspoon": "tsp",
    "teaspoons": "tsp",
    "tablespoon": "tbsp",
    "tablespoons": "tbsp",
    "cups": "cup",
    "ounce": "oz",
    "ounces": "oz",
    "fluid ounce": "fl-oz",
    "fluid ounces": "fl-oz",
    "fl oz": "fl-oz",
    "fl. oz": "fl-oz",
    "fl. oz.": "fl-oz",
    "pound": "lb",
    "pounds": "lb",
    "lbs": "lb",
    "gram": "g",
    "grams": "g",
    "kilogram": "kg",
    "kilograms": "kg",
    "milliliter": "ml",
    "milliliters": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "liter": "l",
    "liters": "l",
    "litre": "l",
    "litres": "l",
    "pint": "pt",
    "pints": "pt",
    "quart": "qt",
    "quarts": "qt",
    "gallon": "gal",
    "gallons": "gal",
}


def _factors(metric: UnitFactor, customary: UnitFactor) -> dict[MeasurementSystem, UnitFactor]:
    # Imperial and US share one vocabulary (cups/oz/lb).
    return {
        MeasurementSystem.METRIC: metric,
        MeasurementSystem.US: customary,
        MeasurementSystem.IMPERIAL: customary,
    }


# Canonical unit -> per-system multiplier and target label. Only the volume and
# weight units that come up in cooking; tsp/tbsp are left alone everywhere.
COOKING_CONVERSIONS: dict[str, dict[MeasurementSystem, UnitFactor]] = {
    # Volume
    "cup": _factors(UnitFactor(250, "ml"), UnitFactor(1, "cup")),
    "fl-oz": _factors(UnitFactor(30, "ml"), UnitFactor(1, "fl oz")),
    "pt": _factors(UnitFactor(500, "ml"), UnitFactor(1, "pint")),
    "qt": _factors(UnitFactor(1, "l"), UnitFactor(1, "quart")),
    "gal": _factors(UnitFactor(4, "l"), UnitFactor(1, "gallon")),
    "ml": _factors(UnitFactor(1, "ml"), UnitFactor(1 / 30, "fl oz")),
    "l": _factors(UnitFactor(1, "l"), UnitFactor(4, "cups")),
    # Weight
    "g": _factors(UnitFactor(1, "g"), UnitFactor(1 / 28, "oz")),
    "kg": _factors(UnitFactor(1, "kg"), UnitFactor(2.2, "lb")),
    "oz": _factors(UnitFactor(28, "g"), UnitFactor(1, "oz")),
    "lb": _factors(UnitFactor(450, "g"), UnitFactor(1, "lb")),
}

MAX_MIXED_DENOMINATOR = 16

# Thirds repeat forever in decimal and are lost by rounding (2.333 -> 2.3),
# so they are recognised from the unrounded value.
THIRDS_TOLERANCE = 0.005


def normalize_unit(unit: str) -> str:
    """Map a unit name to its canonical short form; unknown units are just lower-cased."""
    key = unit.strip().lower()
    return UNIT_SYNONYMS.get(key, key)


def _round_half_up(value: float, digits: int) -> float:
    factor = 10 ** digits
    return math.floor(value * factor + 0.5) / factor


def round_to_sensible_precision(value: float) -> float:
    """2 decimals below 1, 1 decimal below 10, whole numbers from 10 up."""
    if math.isnan(value) or math.isinf(value):
        return value
    if value < 1:
        return _round_half_up(value, 2)
    if value < 10:
        return _round_half_up(value, 1)
    return _round_half_up(value, 0)


def _format_decimal(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        return str(value)
    if value == int(value):
        return str(int(value))
    return repr(value)


def _one_decimal(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        return str(value)
    return _format_decimal(_round_half_up(value, 1))


def _to_fraction(quantity: float, rounded: float) -> Fraction:
    """Exact fraction of the rounded decimal, or a third when ``quantity`` is one."""
    if rounded < 10:
        thirds = round(quantity * 3)
        if thirds % 3 and abs(quantity - thirds / 3) < THIRDS_TOLERANCE:
            return Fraction(thirds, 3)
    return Fraction(repr(rounded))


def _fraction_text(fraction: Fraction) -> str:
    return f"{fraction.numerator}/{fraction.denominator}"


def format_quantity(quantity: float, use_fractions: bool = True) -> str:
    """Render a quantity the way a cook reads it: "2", "3/4", "2 1/3" or "2.7"."""
    if not isinstance(quantity, numbers.Real):
        return str(quantity)
    if quantity == 0:
        return "0"

    rounded = round_to_sensible_precision(quantity)

    if not use_fractions:
        return _format_decimal(rounded)

    try:
        fraction = _to_fraction(quantity, rounded)

        if fraction.denominator == 1:
            return str(fraction.numerator)

        if fraction < 1:
            return _fraction_text(fraction)

        if fraction.denominator <= MAX_MIXED_DENOMINATOR:
            whole = math.floor(fraction)
            remainder = fraction - whole
            if remainder.numerator == 0:
                return str(whole)
            return f"{whole} {_fraction_text(remainder)}"

        return _one_decimal(rounded)
    except (ArithmeticError, ValueError, TypeError):
        return _one_decimal(rounded)


def scale_recipe(quantity: float, scale_factor: float) -> ScaledQuantity:
    """Multiply an ingredient amount by ``scale_factor`` and round it.

    ``scale_factor`` must be positive; callers guard against that.
    """
    scaled = quantity * scale_factor
    return ScaledQuantity(quantity=round_to_sensible_precision(scaled), display_quantity=format_quantity(scaled))


def _unconverted(quantity: float, unit: str) -> ConversionResult:
    return ConversionResult(quantity=quantity, unit=unit, display_quantity=format_quantity(quantity))


def convert_measurement(
    quantity: float,
    from_unit: str,
    to_system: Union[MeasurementSystem, str],
) -> Optional[ConversionResult]:
    """Express ``quantity`` ``from_unit`` in the target measurement system.

    Returns None when there is nothing to convert (no quantity or no unit).
    Units missing from the cooking table come back unchanged.
    """
    if not quantity or not from_unit or (isinstance(quantity, float) and math.isnan(quantity)):
        return None

    try:
        system = MeasurementSystem(to_system)
        conversion = COOKING_CONVERSIONS.get(normalize_unit(from_unit))
        if conversion is None:
            return _unconverted(quantity, from_unit)

        target = conversion[system]
        raw = quantity * target.amount
        converted = round_to_sensible_precision(raw)

        # Compared against the unit as written, so "cups" -> "cup" still
        # reports the original.
        if target.unit == from_unit:
            return _unconverted(quantity, from_unit)

        return ConversionResult(
            quantity=converted,
            unit=target.unit,
            display_quantity=format_quantity(raw),
            original_quantity=quantity,
            original_unit=from_unit,
            original_display_quantity=format_quantity(quantity),
        )
    except (ArithmeticError, ValueError, TypeError, KeyError, AttributeError) as e:
        logger.warning("Conversion failed", extra={"unit": from_unit, "system": str(to_system), "error": str(e)})
        return _unconverted(quantity, from_unit)

