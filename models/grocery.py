from typing import Dict, List
from pydantic import BaseModel, Field
from .base import BaseEntity
from .ingredient import Ingredient, Recipe


class MergedGroceryItem(BaseEntity):
    """One consolidated line of the grocery list"""
    name: str = Field(..., description="Normalized ingredient name")
    quantity: float = Field(0.0, description="Summed, serving-scaled quantity")
    unit: str = Field("", description="Unit shared by every merged contribution")

    model_config = {
        "validate_assignment": True,
        "json_schema_extra": {
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440001",
                "name": "flour",
                "quantity": 3.0,
                "unit": "cup"
            }
        }
    }


class GroceryItemRecord(BaseModel):
    """Grocery item in the record-store shape"""
    name: str
    quantity: float = Field(0.0, alias="qty")
    unit: str = ""
    checked: bool = False
    active: bool = True

    model_config = {
        "populate_by_name": True,
        "json_schema_extra": {
            "example": {
                "name": "flour",
                "qty": 3.0,
                "unit": "cup",
                "checked": False,
                "active": True
            }
        }
    }


class GroceryItem(BaseModel):
    """Persisted grocery list entry with its checked state"""
    id: str
    checked: bool = False
    ingredient: Ingredient


class GroceryListRequest(BaseModel):
    """Request body for generating a grocery list"""
    recipes: List[Recipe] = Field(default_factory=list)
    servings: Dict[str, str] = Field(default_factory=dict, description="Recipe id -> target servings")
