from fastapi import APIRouter, HTTPException, status
from typing import List

from config.settings import settings
from models.grocery import GroceryItemRecord, GroceryListRequest, MergedGroceryItem
from services.grocery_list import GroceryListGenerator, fill_default_servings, to_grocery_records

router = APIRouter()

generator = GroceryListGenerator(similarity_threshold=settings.grocery_similarity_threshold)


def _generate(request: GroceryListRequest) -> List[MergedGroceryItem]:
    servings = fill_default_servings(request.recipes, request.servings)
    return generator.generate(request.recipes, servings)


@router.post("/generate", response_model=List[MergedGroceryItem])
async def generate_grocery_list(request: GroceryListRequest):
    """Consolidate the menu's recipes into a sorted grocery list"""
    try:
        return _generate(request)
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to generate grocery list: {str(e)}"
        )


@router.post("/records", response_model=List[GroceryItemRecord], response_model_by_alias=True)
async def generate_grocery_records(request: GroceryListRequest):
    """Same as /generate, shaped as new grocery item records"""
    try:
        return to_grocery_records(_generate(request))
    except Exception as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to build grocery records: {str(e)}"
        )
