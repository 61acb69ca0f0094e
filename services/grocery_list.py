"""
Grocery List Generator

Consolidates the ingredients of several recipes into one shoppable list:
quantities are scaled by each recipe's serving multiplier, descriptive words
("fresh", "chopped", ...) are stripped from names, and near-identical names
are merged by edit-distance similarity.

The generator is stateless. Every run builds a fresh list which the caller
persists (usually replacing the previous list wholesale).
"""

import math
from typing import Dict, Iterable, List, Mapping, Optional, Sequence
from uuid import NAMESPACE_URL, uuid5

from models.grocery import GroceryItem, GroceryItemRecord, MergedGroceryItem
from models.ingredient import Recipe
from services.similarity import DEFAULT_SIMILARITY_THRESHOLD, SimilarityMatcher

DESCRIPTORS = (
    "fresh", "dried", "ground", "chopped", "minced", "diced",
    "sliced", "whole", "frozen", "canned", "organic",
)

_ITEM_NAMESPACE = uuid5(NAMESPACE_URL, "chefbook:grocery-item")


def _positive_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return number


def serving_multiplier(recipe: Recipe, servings: Mapping[str, str]) -> float:
    """target / original servings, or 1.0 unless both parse as positive numbers"""
    target = _positive_float(servings.get(recipe.id))
    original = _positive_float(recipe.servings)
    if target is None or original is None:
        return 1.0
    return target / original


def normalize_name(name: str) -> str:
    """
    Lowercase, trim and drop descriptor words.

    Every "<descriptor> " occurrence is removed, not only a leading one, so
    "sun-dried tomatoes" becomes "sun-tomatoes".
    """
    result = name.lower().strip()
    for descriptor in DESCRIPTORS:
        result = result.replace(f"{descriptor} ", "")
    return result.strip()


def units_compatible(a: str, b: str) -> bool:
    return a.lower() == b.lower() or not a or not b


class GroceryListGenerator:
    """Merges recipe ingredients into MergedGroceryItems sorted by name"""

    def __init__(self, similarity_threshold: float = DEFAULT_SIMILARITY_THRESHOLD):
        self.matcher = SimilarityMatcher(similarity_threshold)

    def generate(self, recipes: Sequence[Recipe], servings: Mapping[str, str]) -> List[MergedGroceryItem]:
        """
        Build the grocery list for a menu.

        Args:
            recipes: Recipes on the menu
            servings: Recipe id -> target serving count (string encoded)

        Returns:
            Merged items sorted ascending by name
        """
        items: List[MergedGroceryItem] = []

        for recipe in recipes:
            multiplier = serving_multiplier(recipe, servings)

            for ingredient in recipe.ingredients:
                name = normalize_name(ingredient.name)
                quantity = ingredient.quantity * multiplier

                index = self.find_similar(name, items)
                if index is None or not units_compatible(items[index].unit, ingredient.unit):
                    # Same name in another unit stays a separate line
                    items.append(self._new_item(len(items), name, quantity, ingredient.unit))
                    continue

                item = items[index]
                item.quantity += quantity
                if not item.unit and ingredient.unit:
                    item.unit = ingredient.unit

        return sorted(items, key=lambda item: item.name)

    def find_similar(self, name: str, items: Sequence[MergedGroceryItem]) -> Optional[int]:
        """Index of the first item (in list order) whose name matches, else None"""
        for index, item in enumerate(items):
            if self.matcher.matches(item.name, name):
                return index
        return None

    @staticmethod
    def _new_item(position: int, name: str, quantity: float, unit: str) -> MergedGroceryItem:
        # Deterministic ids so identical inputs give identical lists
        item_id = uuid5(_ITEM_NAMESPACE, f"{position}|{name}|{unit}")
        return MergedGroceryItem(id=item_id, name=name, quantity=quantity, unit=unit)


def to_grocery_records(items: Iterable[MergedGroceryItem]) -> List[GroceryItemRecord]:
    """Map merged items into new, unchecked and active grocery records"""
    return [
        GroceryItemRecord(name=item.name, quantity=item.quantity, unit=item.unit)
        for item in items
    ]


def fill_default_servings(recipes: Iterable[Recipe], servings: Mapping[str, str]) -> Dict[str, str]:
    """Copy of the servings map where recipes without an override keep their own count"""
    filled = dict(servings)
    for recipe in recipes:
        filled.setdefault(recipe.id, recipe.servings)
    return filled


def sort_unchecked_first(items: Iterable[GroceryItem]) -> List[GroceryItem]:
    return sorted(items, key=lambda item: item.checked)


def recipe_names_by_ingredient(recipes: Iterable[Recipe]) -> Dict[str, List[str]]:
    """Lowercased ingredient name -> titles of the recipes that use it"""
    names: Dict[str, List[str]] = {}
    for recipe in recipes:
        for ingredient in recipe.ingredients:
            names.setdefault(ingredient.name.lower(), []).append(recipe.title)
    return names


def export_unchecked(items: Iterable[GroceryItem]) -> str:
    """Plain-text shopping list of everything not yet checked off"""
    return "\n".join(item.ingredient.to_display() for item in items if not item.checked)
