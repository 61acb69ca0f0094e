"""
Record store client for recipes.

Builds the list query the app uses for the recipe collection (paging, filter,
sort, expand) and maps the expanded records into Recipe models for the grocery
list generator. Nothing beyond those query parameters is supported.
"""

from typing import Any, Dict, List, Optional

import httpx
import logfire
from pydantic import BaseModel, Field

from models.ingredient import Ingredient, Recipe
from services.exceptions import RecordsRequestError

RECIPES_COLLECTION = "recipes"


class RecordList(BaseModel):
    """Paged list response of the record store"""
    page: int = 1
    per_page: int = Field(30, alias="perPage")
    total_items: int = Field(0, alias="totalItems")
    items: List[Dict[str, Any]] = Field(default_factory=list)

    model_config = {
        "populate_by_name": True
    }


def recipe_from_record(record: Dict[str, Any]) -> Recipe:
    """Map a recipe record with expanded `ingr_list` into a Recipe"""
    expanded = (record.get("expand") or {}).get("ingr_list") or []
    ingredients = [
        Ingredient(
            quantity=max(float(entry.get("quantity") or 0), 0.0),
            unit=entry.get("unit") or "",
            name=entry.get("ingredient") or "",
        )
        for entry in expanded
    ]
    return Recipe(
        id=record["id"],
        title=record.get("title", ""),
        servings=str(record.get("servings", "")),
        ingredients=ingredients,
    )


class RecordsClient:
    """Thin async client over the record store's collection list endpoint"""

    def __init__(self, base_url: str, token: Optional[str] = None,
                 http_client: Optional[httpx.AsyncClient] = None):
        self.base_url = base_url.rstrip("/")
        self.token = token
        self._owns_http = http_client is None
        self._http = http_client or httpx.AsyncClient(timeout=30.0)

    async def __aenter__(self) -> "RecordsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def list_records(self, collection: str, page: int = 1, per_page: int = 30,
                           filter: Optional[str] = None, sort: Optional[str] = None,
                           expand: Optional[str] = None) -> RecordList:
        """
        Fetch one page of a collection.

        Args:
            collection: Collection name, e.g. "recipes"
            page: 1-based page number
            per_page: Page size
            filter: Filter expression, e.g. "made=true"
            sort: Sort fields, "-" prefix for descending, e.g. "-created"
            expand: Relation fields to expand, e.g. "ingr_list"

        Raises:
            RecordsRequestError: On transport failures and non-2xx responses
        """
        params: Dict[str, Any] = {"page": page, "perPage": per_page}
        if filter:
            params["filter"] = filter
        if expand:
            params["expand"] = expand
        if sort:
            params["sort"] = sort

        headers = {"Authorization": f"Bearer {self.token}"} if self.token else {}
        url = f"{self.base_url}/api/collections/{collection}/records"

        try:
            response = await self._http.get(url, params=params, headers=headers)
        except httpx.HTTPError as e:
            logfire.error("records_request_failed", collection=collection, error=str(e))
            raise RecordsRequestError(collection, detail=str(e)) from e

        if response.status_code != 200:
            logfire.error("records_request_rejected", collection=collection, status_code=response.status_code)
            raise RecordsRequestError(collection, response.status_code, response.text[:200])

        return RecordList.model_validate(response.json())

    async def fetch_recipes(self, per_page: int = 30) -> List[Recipe]:
        """Recipes marked as made, newest first, with their ingredient lists"""
        result = await self.list_records(
            RECIPES_COLLECTION,
            per_page=per_page,
            filter="made=true",
            sort="-created",
            expand="ingr_list",
        )
        recipes = [recipe_from_record(record) for record in result.items]
        logfire.debug("recipes_fetched", count=len(recipes), total=result.total_items)
        return recipes
