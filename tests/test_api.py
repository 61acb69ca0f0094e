"""
Tests for the HTTP surface and direction timers
"""

import httpx
import pytest
from fastapi.testclient import TestClient

import main
from config.settings import settings
from main import app
from models.realtime import ConnectionState
from services.timer_parser import ParsedTimer, parse_direction_timers


@pytest.fixture
def client():
    return TestClient(app)


MENU = {
    "recipes": [
        {
            "id": "a",
            "title": "Bread",
            "servings": "2",
            "ingredients": [
                {"quantity": 2, "unit": "cup", "name": "Flour"},
                {"quantity": 1, "unit": "tsp", "name": "salt"},
            ],
        },
        {
            "id": "b",
            "title": "Pancakes",
            "servings": "4",
            "ingredients": [{"quantity": 1, "unit": "cup", "name": "flour"}],
        },
    ],
    "servings": {"a": "4"},
}


class TestGroceryListEndpoints:

    def test_generate(self, client):
        response = client.post("/grocery-list/generate", json=MENU)
        assert response.status_code == 200
        items = response.json()
        assert [(i["name"], i["quantity"], i["unit"]) for i in items] == [
            ("flour", 5.0, "cup"),
            ("salt", 2.0, "tsp"),
        ]
        assert all("id" in item for item in items)

    def test_records(self, client):
        response = client.post("/grocery-list/records", json=MENU)
        assert response.status_code == 200
        assert response.json()[0] == {"name": "flour", "qty": 5.0, "unit": "cup", "checked": False, "active": True}

    def test_invalid_body(self, client):
        response = client.post("/grocery-list/generate", json={"recipes": [{"title": "no id"}]})
        assert response.status_code == 422


class TestIngredientEndpoints:

    def test_parse_lines(self, client):
        response = client.post("/ingredients/parse", json={"lines": ["2 1/2 cups flour", "", "eggs"]})
        assert response.status_code == 200
        assert response.json() == [
            {"quantity": 2.5, "unit": "cup", "name": "flour"},
            {"quantity": 0.0, "unit": "", "name": "eggs"},
        ]

    def test_direction_timers(self, client):
        response = client.post("/recipes/timers", json={"direction": "Simmer 10-15 minutes, then rest 1 hour."})
        assert response.status_code == 200
        assert response.json() == [
            {"total_seconds": 900, "display_label": "15 min"},
            {"total_seconds": 3600, "display_label": "1 hr"},
        ]

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestDirectionTimers:

    def test_single_duration(self):
        assert parse_direction_timers("Bake for 25 minutes.") == [ParsedTimer(1500, "25 min")]

    def test_units_and_case(self):
        timers = parse_direction_timers("Rest 2 HOURS, sear 30 secs, boil 5 mins")
        assert [t.display_label for t in timers] == ["2 hrs", "30 sec", "5 min"]
        assert [t.total_seconds for t in timers] == [7200, 30, 300]

    def test_zero_and_missing(self):
        assert parse_direction_timers("Wait 0 minutes") == []
        assert parse_direction_timers("Serve warm") == []
        assert parse_direction_timers("") == []


RECIPE_RECORD = {
    "id": "r1",
    "title": "Pancakes",
    "servings": "4",
    "expand": {"ingr_list": [{"ingredient": "flour", "quantity": 2, "unit": "cup"}]},
}


def record_store(request: httpx.Request) -> httpx.Response:
    if request.url.path == "/api/realtime":
        if request.method == "POST":
            return httpx.Response(204)
        return httpx.Response(200, content=b'event: PB_CONNECT\ndata: {"clientId": "c1"}\n\n')
    return httpx.Response(200, json={"page": 1, "perPage": 30, "totalItems": 1, "items": [RECIPE_RECORD]})


class TestRecipeSync:

    def test_built_from_settings(self):
        http = httpx.AsyncClient(transport=httpx.MockTransport(record_store))
        realtime, cache = main.build_recipe_sync(http_client=http)

        assert realtime.endpoint == settings.pocketbase_url.rstrip("/") + "/api/realtime"
        assert realtime.reconnect_delay == settings.realtime_reconnect_delay
        assert cache.per_page == settings.recipes_per_page
        assert cache.records.token == settings.pocketbase_token

    def test_lifespan_serves_synced_recipes(self, monkeypatch):
        http = httpx.AsyncClient(transport=httpx.MockTransport(record_store))
        build = main.build_recipe_sync
        monkeypatch.setattr(main, "build_recipe_sync", lambda: build(http_client=http))

        with TestClient(app) as client:
            assert app.state.realtime.topics == ["recipes"]
            response = client.get("/recipes")
            assert response.status_code == 200
            assert [r["title"] for r in response.json()] == ["Pancakes"]
            assert client.get("/recipes/r1").json()["ingredients"][0]["name"] == "flour"
            assert client.get("/recipes/missing").status_code == 404

        assert app.state.realtime.state == ConnectionState.disconnected

    def test_recipes_unavailable_without_sync(self, client):
        assert client.get("/recipes").status_code == 503
