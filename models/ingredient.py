from typing import List
from pydantic import BaseModel, Field


def format_quantity(quantity: float) -> str:
    """Render a quantity the way the recipe screens show it ("%g", blank for 0)"""
    if quantity == 0:
        return ""
    return "%g" % quantity


class Ingredient(BaseModel):
    """Structured ingredient: quantity, canonical unit and free-text name"""
    quantity: float = Field(0.0, ge=0, description="Amount; 0 means to taste / unspecified")
    unit: str = Field("", description="Lowercase singular unit, empty when none")
    name: str = Field("", description="Ingredient name")

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "quantity": 2.5,
                "unit": "cup",
                "name": "flour"
            }
        }
    }

    def to_display(self) -> str:
        """Human readable line, e.g. '2.5 cup flour'"""
        parts = [format_quantity(self.quantity), self.unit, self.name]
        return " ".join(part for part in parts if part)


class ParsedIngredient(Ingredient):
    """Ingredient produced from an unstructured text line"""
    pass


class Recipe(BaseModel):
    """Recipe as seen by the grocery list generator"""
    id: str = Field(..., description="Record id of the recipe")
    title: str = Field("", description="Recipe title")
    servings: str = Field("", description="Original serving count, string encoded")
    ingredients: List[Ingredient] = Field(default_factory=list, description="Ordered ingredients")

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "r1a2b3c4d5e6f7g",
                "title": "Pancakes",
                "servings": "4",
                "ingredients": [
                    {"quantity": 2, "unit": "cup", "name": "flour"},
                    {"quantity": 2, "unit": "", "name": "eggs"}
                ]
            }
        }
    }
