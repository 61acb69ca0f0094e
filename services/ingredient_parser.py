"""
Free-text Ingredient Parser

Turns lines like "2 1/2 cups flour" or "½ tsp salt" into structured
[quantity] + [unit] + [name] ingredients. Used for scraped and hand-typed
recipes before they are fed to the grocery list generator.

Parsing never raises: anything that cannot be understood degrades to a zero
quantity, an empty unit and the remaining text as the name.
"""

import re
from typing import Iterable, List, Optional

from models.ingredient import ParsedIngredient, format_quantity
from services.units import FRACTION_GLYPHS, UNITS, glyph_value, singularize_unit

__all__ = ["IngredientParser", "parse_ingredient", "format_quantity"]

_GLYPHS = "".join(FRACTION_GLYPHS)


class IngredientParser:
    """
    Parses one ingredient line at a time.

    Supported leading quantities:
    - "1 ½ cups sugar"   -> 1.5 (whole number + fraction glyph, space optional)
    - "2 1/2 cups flour" -> 2.5 (mixed number)
    - "1/2 tsp salt"     -> 0.5 (slash fraction; zero denominator -> 0)
    - "1.5 lb beef"      -> 1.5 (integer or decimal)
    - "¾ cup milk"       -> 0.75 (bare fraction glyph)
    """

    def __init__(self):
        # Most specific alternatives first
        self.quantity_pattern = re.compile(
            rf"^(\d+\s+\d+/\d+|\d+\s*[{_GLYPHS}]|\d+/\d+|\d+\.?\d*|[{_GLYPHS}])\s*"
        )
        self.units = UNITS

    def parse(self, text: str) -> ParsedIngredient:
        """
        Parse a single ingredient line.

        Args:
            text: Ingredient line, e.g. "2 1/2 cups flour"

        Returns:
            ParsedIngredient (quantity 0 / unit "" when absent)
        """
        remaining = (text or "").strip()
        if not remaining:
            return ParsedIngredient()

        quantity = 0.0
        match = self.quantity_pattern.match(remaining)
        if match:
            quantity = self._quantity_value(match.group(1).strip())
            remaining = remaining[match.end():].strip()

        unit = ""
        words = remaining.split(None, 1)
        if words and words[0].lower() in self.units:
            unit = singularize_unit(words[0])
            remaining = words[1] if len(words) > 1 else ""

        return ParsedIngredient(quantity=quantity, unit=unit, name=remaining.strip())

    def parse_lines(self, lines: Iterable[str]) -> List[ParsedIngredient]:
        """Parse several lines, dropping the blank ones"""
        return [self.parse(line) for line in lines if line and line.strip()]

    def _quantity_value(self, token: str) -> float:
        """Decimal value of a matched quantity token, 0 when it cannot be evaluated"""
        # Glyph quantities always end with the glyph ("½", "1½", "1 ½")
        fraction = glyph_value(token[-1])
        if fraction is not None:
            whole = token[:-1].strip()
            return (self._to_float(whole) or 0.0) + fraction

        if "/" in token:
            whole = 0.0
            parts = token.split()
            if len(parts) == 2:
                whole = self._to_float(parts[0]) or 0.0
                token = parts[1]
            fraction = self._slash_fraction(token)
            if fraction is None:
                return 0.0
            return whole + fraction

        return self._to_float(token) or 0.0

    def _slash_fraction(self, token: str) -> Optional[float]:
        numerator, _, denominator = token.partition("/")
        num = self._to_float(numerator)
        den = self._to_float(denominator)
        if num is None or not den:
            return None
        return num / den

    @staticmethod
    def _to_float(value: str) -> Optional[float]:
        try:
            return float(value)
        except ValueError:
            return None


_default_parser = IngredientParser()


def parse_ingredient(text: str) -> ParsedIngredient:
    """Module-level convenience wrapper around a shared IngredientParser"""
    return _default_parser.parse(text)
