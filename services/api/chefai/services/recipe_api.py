"""Async client for TheMealDB recipe lookup API.

Errors never propagate: list calls fall back to ``[]`` and lookups to ``None``.
"""

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from ..schemas import Recipe
from ..settings import settings

logger = logging.getLogger("chefai.recipes")


class RecipeAPI:
    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.recipe_api_url).rstrip("/")
        self.timeout = timeout or settings.recipe_api_timeout
        self.transport = transport

    async def _get_meals(self, path: str, params: dict) -> list[dict]:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(f"{self.base_url}/{path}", params=params)
            response.raise_for_status()
            data = response.json()
        # The API answers {"meals": null} when nothing matches.
        return data.get("meals") or []

    @staticmethod
    def _parse(meals: list[dict]) -> list[Recipe]:
        recipes = []
        for meal in meals:
            try:
                recipes.append(Recipe.model_validate(meal))
            except ValidationError as e:
                logger.warning(f"Skipping malformed recipe record: {e}")
        return recipes

    async def search(self, query: str) -> list[Recipe]:
        try:
            return self._parse(await self._get_meals("search.php", {"s": query}))
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error searching recipes for {query!r}: {e}")
            return []

    async def list_all(self) -> list[Recipe]:
        return await self.search("")

    async def filter_by_category(self, category: str) -> list[Recipe]:
        try:
            return self._parse(await self._get_meals("filter.php", {"c": category}))
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching recipes by category {category!r}: {e}")
            return []

    async def get_by_id(self, id_meal: str) -> Optional[Recipe]:
        try:
            recipes = self._parse(await self._get_meals("lookup.php", {"i": id_meal}))
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching recipe {id_meal}: {e}")
            return None
        return recipes[0] if recipes else None
