"""
Entry point for the Chef Book core API

Exposes ingredient parsing, direction timers and grocery list consolidation
as a FastAPI service, and keeps a realtime-synced recipe list from the record
store for the lifetime of the app.
"""

from dotenv import load_dotenv

load_dotenv()

from contextlib import asynccontextmanager
from typing import Optional, Tuple

import httpx
import logfire
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api import grocery_list, ingredients, recipes
from config.observability import configure_logfire
from config.settings import settings
from services.realtime import RealtimeClient
from services.recipe_cache import RecipeCache
from services.records_client import RecordsClient

configure_logfire(settings)


def build_recipe_sync(http_client: Optional[httpx.AsyncClient] = None) -> Tuple[RealtimeClient, RecipeCache]:
    """Realtime client and recipe cache configured from settings"""
    realtime = RealtimeClient(
        settings.pocketbase_url,
        reconnect_delay=settings.realtime_reconnect_delay,
        http_client=http_client,
    )
    records = RecordsClient(settings.pocketbase_url, token=settings.pocketbase_token, http_client=http_client)
    return realtime, RecipeCache(records, per_page=settings.recipes_per_page)


@asynccontextmanager
async def lifespan(app: FastAPI):
    realtime, cache = build_recipe_sync()
    app.state.realtime = realtime
    app.state.recipe_cache = cache

    await cache.attach(realtime)
    await realtime.connect(settings.pocketbase_token)
    await cache.refresh()
    logfire.info("recipe_sync_started", endpoint=realtime.endpoint, recipes=len(cache.recipes))
    try:
        yield
    finally:
        await realtime.aclose()
        await cache.records.aclose()
        app.state.recipe_cache = None
        logfire.info("recipe_sync_stopped")


app = FastAPI(
    title="Chef Book Core API",
    description="Ingredient parsing and grocery list consolidation for Chef Book menus.",
    version="1.0.0",
    debug=settings.debug,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(grocery_list.router, prefix="/grocery-list", tags=["grocery-list"])
app.include_router(recipes.router, prefix="/recipes", tags=["recipes"])
app.include_router(ingredients.router, tags=["ingredients"])


@app.get("/health")
async def health():
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=settings.port,
        workers=1,
        log_level=settings.log_level
    )
