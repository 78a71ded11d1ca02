import json
from typing import Optional

import httpx
import pytest
from fakeredis import FakeAsyncRedis
from fastapi.testclient import TestClient

from chefai.core.ai_client import AIRequestError
from chefai.deps import get_ai_client_factory, get_recipe_api, get_store
from chefai.infra import redis_client
from chefai.infra.document_store import DocumentStore
from chefai.main import app
from chefai.schemas import Recipe
from chefai.services.profile import ProfileService
from chefai.services.recipe_api import RecipeAPI
from chefai.settings import PLACEHOLDER_API_KEY, settings


# --- Fake Gemini ---

class FakeAIClient:
    def __init__(self, api_key: str, text: Optional[str], error: Optional[Exception]):
        self.api_key = api_key
        self.text = text
        self.error = error
        self.calls = []

    async def _respond(self, prompt, **kwargs):
        self.calls.append({"prompt": prompt, **kwargs})
        if self.error is not None:
            raise self.error
        return self.text

    async def generate_text(self, prompt, system_instruction=None):
        return await self._respond(prompt, system_instruction=system_instruction)

    async def generate_json(self, prompt, response_schema, system_instruction=None):
        return await self._respond(prompt, response_schema=response_schema, system_instruction=system_instruction)


class FakeAIFactory:
    """Stands in for AIClient; records every client it builds."""

    def __init__(self):
        self.clients: list[FakeAIClient] = []
        self.text: Optional[str] = ""
        self.error: Optional[Exception] = None

    def __call__(self, api_key: str) -> FakeAIClient:
        client = FakeAIClient(api_key, self.text, self.error)
        self.clients.append(client)
        return client

    @property
    def calls(self) -> list[dict]:
        return [call for c in self.clients for call in c.calls]

    def fail(self, rate_limited: bool = False):
        self.error = AIRequestError("boom", rate_limited=rate_limited)


# --- Sample data ---

TERIYAKI = {
    "idMeal": "52772",
    "strMeal": "Teriyaki Chicken Casserole",
    "strCategory": "Chicken",
    "strArea": "Japanese",
    "strMealThumb": "https://www.themealdb.com/images/media/meals/wvpsxx1468256321.jpg",
    "strInstructions": (
        "Preheat oven to 350° F. Spray a 9x13-inch baking pan with non-stick spray.\r\n"
        "Combine soy sauce, ½ cup water, brown sugar, ginger and garlic in a small saucepan and cover. "
        "Bring to a boil over medium heat.\r\n"
        "Bake for 35 minutes.\r\n"
        "Serve with rice."
    ),
    "strIngredient1": "soy sauce",
    "strMeasure1": "3/4 cup",
    "strIngredient2": "water",
    "strMeasure2": "1/2 cup",
    "strIngredient3": "brown sugar",
    "strMeasure3": "1/4 cup",
    "strIngredient4": "",
    "strMeasure4": "",
    "strIngredient5": "chicken breasts",
    "strMeasure5": "2",
    "strIngredient6": None,
    "strMeasure6": None,
}


def make_plan_json(days=None, meals_per_day=None) -> str:
    labels = days or ["Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu"]
    meals = meals_per_day or [
        {"type": "Breakfast", "name": "Bubur Ayam", "category": "Breakfast"},
        {"type": "Lunch", "name": "Grilled Salmon", "category": "Seafood"},
        {"type": "Dinner", "name": "Vegetable Curry", "category": "Vegetarian"},
    ]
    return json.dumps({"days": [{"day": d, "meals": meals} for d in labels]})


# --- Fixtures ---

@pytest.fixture(autouse=True)
def _no_default_key(monkeypatch):
    # Keep a developer's .env key out of the tests.
    monkeypatch.setattr(settings, "gemini_api_key", PLACEHOLDER_API_KEY)


@pytest.fixture
def fake_redis():
    return FakeAsyncRedis(decode_responses=True)


@pytest.fixture(autouse=True)
def mock_redis(fake_redis):
    redis_client._redis_async = fake_redis
    yield
    redis_client._redis_async = None


@pytest.fixture
def store(fake_redis):
    return DocumentStore(fake_redis, prefix="test")


@pytest.fixture
def profile(store):
    return ProfileService(store)


@pytest.fixture
def ai():
    return FakeAIFactory()


@pytest.fixture
def recipe():
    return Recipe.model_validate(TERIYAKI)


def _mealdb_handler(request: httpx.Request) -> httpx.Response:
    path = request.url.path.rsplit("/", 1)[-1]
    if path == "lookup.php":
        found = request.url.params.get("i") == TERIYAKI["idMeal"]
        return httpx.Response(200, json={"meals": [TERIYAKI] if found else None})
    if path == "search.php":
        q = request.url.params.get("s", "").lower()
        found = q in TERIYAKI["strMeal"].lower()
        return httpx.Response(200, json={"meals": [TERIYAKI] if found else None})
    if path == "filter.php":
        if request.url.params.get("c") == "Chicken":
            summary = {k: TERIYAKI[k] for k in ("idMeal", "strMeal", "strMealThumb")}
            return httpx.Response(200, json={"meals": [summary]})
        return httpx.Response(200, json={"meals": None})
    return httpx.Response(404)


@pytest.fixture
def recipe_api():
    return RecipeAPI(base_url="https://mealdb.test/api/json/v1/1", transport=httpx.MockTransport(_mealdb_handler))


@pytest.fixture
def client(store, ai, recipe_api):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_ai_client_factory] = lambda: ai
    app.dependency_overrides[get_recipe_api] = lambda: recipe_api
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
