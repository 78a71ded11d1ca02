import logging
from typing import Optional

from ..infra.document_store import DocumentStore, API_KEY, PREFERENCES
from ..ai.utils import usable_api_key
from ..settings import settings

logger = logging.getLogger("chefai.profile")


class ProfileService:
    """The user's Gemini key and free-text diet/allergy profile.

    Both are independent scalar documents.
    """

    def __init__(self, store: DocumentStore, default_api_key: Optional[str] = None):
        self.store = store
        self.default_api_key = settings.gemini_api_key if default_api_key is None else default_api_key

    async def get_api_key(self) -> Optional[str]:
        key = await self.store.get(API_KEY)
        return key if isinstance(key, str) else None

    async def save_api_key(self, key: str) -> bool:
        return await self.store.set(API_KEY, key.strip())

    async def remove_api_key(self) -> bool:
        return await self.store.remove(API_KEY)

    async def get_preferences(self) -> str:
        preferences = await self.store.get(PREFERENCES)
        return preferences if isinstance(preferences, str) else ""

    async def save_preferences(self, preferences: str) -> bool:
        return await self.store.set(PREFERENCES, preferences.strip())

    async def save_settings(self, api_key: Optional[str], preferences: Optional[str]) -> bool:
        """
        Save key and preferences as two independent writes.
        If one fails the other is kept; the combined result is False.
        """
        results = []
        if api_key is not None and api_key.strip():
            results.append(await self.save_api_key(api_key))
        if preferences is not None:
            results.append(await self.save_preferences(preferences))

        ok = all(results)
        if not ok:
            logger.warning("Saving settings partially failed")
        return ok

    async def get_active_api_key(self) -> Optional[str]:
        """The user's key, else the configured default; None if neither is usable."""
        user_key = usable_api_key(await self.get_api_key())
        return user_key or usable_api_key(self.default_api_key)
