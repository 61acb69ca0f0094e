from fastapi import APIRouter
from pydantic import BaseModel, Field
from typing import List

from models.ingredient import ParsedIngredient
from services.ingredient_parser import IngredientParser
from services.timer_parser import ParsedTimer, parse_direction_timers

router = APIRouter()

parser = IngredientParser()


class ParseIngredientsRequest(BaseModel):
    """Free-text ingredient lines, one ingredient per line"""
    lines: List[str] = Field(default_factory=list)


class DirectionTimersRequest(BaseModel):
    direction: str = ""


@router.post("/ingredients/parse", response_model=List[ParsedIngredient])
async def parse_ingredients(request: ParseIngredientsRequest):
    """Parse ingredient lines into quantity / unit / name; blank lines are dropped"""
    return parser.parse_lines(request.lines)


@router.post("/recipes/timers", response_model=List[ParsedTimer])
async def direction_timers(request: DirectionTimersRequest):
    """Durations mentioned in one direction step"""
    return parse_direction_timers(request.direction)
