from fastapi import APIRouter, HTTPException, Request, status
from typing import List

from models.ingredient import Recipe
from services.recipe_cache import RecipeCache

router = APIRouter()


def _cache(request: Request) -> RecipeCache:
    cache = getattr(request.app.state, "recipe_cache", None)
    if cache is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Recipe sync is not running"
        )
    return cache


@router.get("", response_model=List[Recipe])
async def list_recipes(request: Request):
    """Latest made recipes, kept fresh by realtime change events"""
    return _cache(request).recipes


@router.get("/{recipe_id}", response_model=Recipe)
async def get_recipe(recipe_id: str, request: Request):
    recipe = _cache(request).get(recipe_id)
    if recipe is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Recipe {recipe_id} not found"
        )
    return recipe
