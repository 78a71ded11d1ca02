"""Key -> JSON document persistence over the redis key-value store.

Every record the app keeps (API key, preferences, shopping list, meal plan,
finished-recipe log, per-recipe chat transcripts) is one JSON document under
one key. Operations never raise: failures are logged and reported through the
return value, and callers decide what to tell the user.

There are no transactions across keys, and writes to one document are plain
overwrites. Two overlapping read-modify-write cycles on the same key race and
the last writer wins. The app is single-client, so this is accepted.
"""

import json
import logging
from typing import Any, Tuple

from redis.asyncio import Redis as AsyncRedis

from ..settings import settings

logger = logging.getLogger("chefai.store")

API_KEY = "api_key"
PREFERENCES = "preferences"
SHOPPING_LIST = "shopping_list"
MEAL_PLANS = "meal_plans"
FINISHED_RECIPES = "finished_recipes"


def chat_history_key(id_meal: str) -> str:
    return f"chat_history:{id_meal}"


class DocumentStore:
    def __init__(self, redis: AsyncRedis, prefix: str | None = None):
        self.redis = redis
        self.prefix = settings.key_prefix if prefix is None else prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}" if self.prefix else key

    async def load(self, key: str, default: Any = None) -> Tuple[Any, bool]:
        """Return (value, ok). ``ok`` is False only when the read itself failed."""
        try:
            raw = await self.redis.get(self._key(key))
        except Exception as e:
            logger.error(f"Error reading {key}: {e.__class__.__name__}: {e}")
            return default, False

        if raw is None:
            return default, True
        try:
            return json.loads(raw), True
        except ValueError as e:
            logger.error(f"Stored document {key} is not valid JSON: {e}")
            return default, False

    async def get(self, key: str, default: Any = None) -> Any:
        value, _ = await self.load(key, default)
        return value

    async def set(self, key: str, value: Any) -> bool:
        try:
            await self.redis.set(self._key(key), json.dumps(value))
            return True
        except Exception as e:
            logger.error(f"Error saving {key}: {e.__class__.__name__}: {e}")
            return False

    async def remove(self, key: str) -> bool:
        try:
            await self.redis.delete(self._key(key))
            return True
        except Exception as e:
            logger.error(f"Error removing {key}: {e.__class__.__name__}: {e}")
            return False

    async def ping(self) -> bool:
        try:
            return bool(await self.redis.ping())
        except Exception as e:
            logger.error(f"Store unreachable: {e.__class__.__name__}: {e}")
            return False
