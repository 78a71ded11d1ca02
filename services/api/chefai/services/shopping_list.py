"""Shopping list manager.

The list is one document. Every mutation reads the whole list, changes it in
memory and writes the whole list back. Concurrent writers are not
coordinated: the last write wins.
"""

import logging
from typing import Iterable, NamedTuple

from pydantic import ValidationError

from ..core.ids import new_id
from ..infra.document_store import DocumentStore, SHOPPING_LIST
from ..schemas import ShoppingItem, ShoppingItemCreate

logger = logging.getLogger("chefai.shopping")


class ClearResult(NamedTuple):
    ok: bool
    cleared: int


class ShoppingListService:
    def __init__(self, store: DocumentStore):
        self.store = store

    async def _load(self) -> tuple[list[ShoppingItem], bool]:
        raw, ok = await self.store.load(SHOPPING_LIST, [])
        items = []
        for entry in raw or []:
            try:
                items.append(ShoppingItem.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping malformed shopping item: {e}")
        return items, ok

    async def get_items(self) -> list[ShoppingItem]:
        items, _ = await self._load()
        return items

    async def save(self, items: list[ShoppingItem]) -> bool:
        return await self.store.set(SHOPPING_LIST, [i.to_doc() for i in items])

    @staticmethod
    def _exists(items: list[ShoppingItem], name: str, recipe_id: str) -> bool:
        # Measure is deliberately not part of the identity.
        return any(i.name == name and i.recipe_id == recipe_id for i in items)

    async def add(self, item: ShoppingItemCreate) -> bool:
        """Append the item unless the same ingredient from the same recipe is already listed."""
        items, ok = await self._load()
        if not ok:
            return False
        if self._exists(items, item.name, item.recipe_id):
            return True

        items.append(ShoppingItem(id=new_id(), completed=False, **item.model_dump()))
        return await self.save(items)

    async def add_many(self, new_items: Iterable[ShoppingItemCreate]) -> int:
        """Add several items in one write. Returns how many were new, or -1 on failure."""
        items, ok = await self._load()
        if not ok:
            return -1

        added = 0
        for item in new_items:
            if self._exists(items, item.name, item.recipe_id):
                continue
            items.append(ShoppingItem(id=new_id(), completed=False, **item.model_dump()))
            added += 1

        if added and not await self.save(items):
            return -1
        return added

    async def toggle(self, item_id: str) -> bool:
        items, ok = await self._load()
        if not ok:
            return False
        for item in items:
            if item.id == item_id:
                item.completed = not item.completed
        return await self.save(items)

    async def remove(self, item_id: str) -> bool:
        items, ok = await self._load()
        if not ok:
            return False
        return await self.save([i for i in items if i.id != item_id])

    async def clear_completed(self) -> ClearResult:
        """Drop completed items. ``cleared == 0`` means there was nothing to clear."""
        items, ok = await self._load()
        if not ok:
            return ClearResult(False, 0)

        remaining = [i for i in items if not i.completed]
        cleared = len(items) - len(remaining)
        if cleared == 0:
            return ClearResult(True, 0)

        saved = await self.save(remaining)
        return ClearResult(saved, cleared if saved else 0)
