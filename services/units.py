"""
Unit vocabulary shared by the ingredient parser.

Recognized measurement units (plural and singular spellings), the fixed
plural -> singular lookup, and decimal values of the Unicode vulgar fraction
glyphs that show up in scraped recipes.
"""

from typing import Dict, FrozenSet, Optional

UNITS: FrozenSet[str] = frozenset({
    # Volume measurements
    "cup", "cups", "tablespoon", "tablespoons", "tbsp", "teaspoon", "teaspoons", "tsp",
    "ml", "milliliter", "milliliters", "liter", "liters", "l",
    "gallon", "gallons", "gal", "quart", "quarts", "qt", "pint", "pints", "pt",

    # Weight measurements
    "ounce", "ounces", "oz", "pound", "pounds", "lb", "lbs",
    "gram", "grams", "g", "kilogram", "kilograms", "kg",

    # Count/piece measurements
    "stick", "sticks", "clove", "cloves", "head", "heads", "bunch", "bunches",
    "slice", "slices", "piece", "pieces", "can", "cans",
    "package", "packages", "pkg", "bag", "bags",
    "pinch", "dash", "handful", "sprig", "sprigs",

    # Size words used as units ("2 large eggs")
    "large", "medium", "small",
})

SINGULAR_UNITS: Dict[str, str] = {
    "cups": "cup", "tablespoons": "tablespoon", "teaspoons": "teaspoon",
    "ounces": "ounce", "pounds": "pound", "grams": "gram",
    "kilograms": "kilogram", "milliliters": "milliliter", "liters": "liter",
    "gallons": "gallon", "quarts": "quart", "pints": "pint",
    "sticks": "stick", "cloves": "clove", "heads": "head",
    "bunches": "bunch", "slices": "slice", "pieces": "piece",
    "cans": "can", "packages": "package", "bags": "bag", "sprigs": "sprig",
    "lbs": "lb",
}

FRACTION_GLYPHS: Dict[str, float] = {
    "¼": 0.25, "½": 0.5, "¾": 0.75,
    "⅓": 0.333, "⅔": 0.667,
    "⅛": 0.125, "⅜": 0.375, "⅝": 0.625, "⅞": 0.875,
}


def is_unit(token: str) -> bool:
    return token.lower() in UNITS


def singularize_unit(unit: str) -> str:
    """Map a recognized plural spelling to its singular form; others pass through."""
    unit = unit.lower()
    return SINGULAR_UNITS.get(unit, unit)


def glyph_value(glyph: str) -> Optional[float]:
    return FRACTION_GLYPHS.get(glyph)
