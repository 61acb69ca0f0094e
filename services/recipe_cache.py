"""
In-memory recipe list kept fresh by realtime change events.
"""

import asyncio
from typing import List, Optional

import logfire

from models.ingredient import Recipe
from models.realtime import RealtimeEvent
from services.exceptions import RecordsRequestError
from services.realtime import RealtimeClient
from services.records_client import RECIPES_COLLECTION, RecordsClient


class RecipeCache:
    """Latest recipes from the record store; refetched on every recipes event"""

    def __init__(self, records: RecordsClient, per_page: int = 30):
        self.records = records
        self.per_page = per_page
        self.recipes: List[Recipe] = []
        self._lock = asyncio.Lock()

    async def refresh(self) -> List[Recipe]:
        """Refetch recipes; on failure the previous list is kept"""
        async with self._lock:
            try:
                self.recipes = await self.records.fetch_recipes(per_page=self.per_page)
            except RecordsRequestError as e:
                logfire.warn("recipe_cache_refresh_failed", error=str(e))
            return self.recipes

    async def attach(self, realtime: RealtimeClient) -> None:
        await realtime.subscribe(RECIPES_COLLECTION, self.on_change)

    async def detach(self, realtime: RealtimeClient) -> None:
        await realtime.unsubscribe(RECIPES_COLLECTION)

    async def on_change(self, event: RealtimeEvent) -> None:
        change = event.change
        logfire.debug("recipe_change_received", event=event.name,
                      action=change.action if change else None)
        await self.refresh()

    def get(self, recipe_id: str) -> Optional[Recipe]:
        for recipe in self.recipes:
            if recipe.id == recipe_id:
                return recipe
        return None
