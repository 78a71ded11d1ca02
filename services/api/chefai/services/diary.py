"""Cooking diary and achievements.

The finished-recipe log is append-only and holds at most one entry per
``idMeal``, most recent first. Achievements are never stored: they are
recomputed from the log on every read using ``ACHIEVEMENT_RULES``.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Sequence

from pydantic import ValidationError

from ..infra.document_store import DocumentStore, FINISHED_RECIPES
from ..schemas import Achievement, FinishedRecipe, RecipeSummary

logger = logging.getLogger("chefai.diary")

Predicate = Callable[[Sequence[FinishedRecipe]], bool]


@dataclass(frozen=True)
class AchievementRule:
    id: str
    title: str
    desc: str
    icon: str
    predicate: Predicate


def total_at_least(n: int) -> Predicate:
    return lambda log: len(log) >= n


def category_at_least(category: str, n: int) -> Predicate:
    return lambda log: sum(1 for r in log if r.str_category == category) >= n


ACHIEVEMENT_RULES: tuple[AchievementRule, ...] = (
    AchievementRule("first_cook", "Junior Chef", "Selesaikan resep pertamamu.", "restaurant", total_at_least(1)),
    AchievementRule("five_cooks", "Steady Cook", "Selesaikan 5 resep.", "flame", total_at_least(5)),
    AchievementRule("seafood_master", "Seafood Master", "Masak 3 resep Seafood.", "fish", category_at_least("Seafood", 3)),
    AchievementRule("vegetarian_warrior", "Vegetarian Warrior", "Masak 3 resep Vegetarian.", "leaf", category_at_least("Vegetarian", 3)),
    AchievementRule("dessert_king", "Dessert King", "Masak 3 resep Dessert.", "ice-cream", category_at_least("Dessert", 3)),
)


def compute_achievements(
    log: Sequence[FinishedRecipe],
    rules: Sequence[AchievementRule] = ACHIEVEMENT_RULES,
) -> list[Achievement]:
    return [
        Achievement(id=r.id, title=r.title, desc=r.desc, icon=r.icon, unlocked=bool(r.predicate(log)))
        for r in rules
    ]


class DiaryService:
    def __init__(self, store: DocumentStore, rules: Sequence[AchievementRule] = ACHIEVEMENT_RULES):
        self.store = store
        self.rules = rules

    async def _load(self) -> tuple[list[FinishedRecipe], bool]:
        raw, ok = await self.store.load(FINISHED_RECIPES, [])
        log = []
        for entry in raw or []:
            try:
                log.append(FinishedRecipe.model_validate(entry))
            except ValidationError as e:
                logger.warning(f"Skipping malformed diary entry: {e}")
        return log, ok

    async def list_finished(self) -> list[FinishedRecipe]:
        log, _ = await self._load()
        return log

    async def mark_finished(self, recipe: RecipeSummary) -> tuple[bool, bool]:
        """
        Record a finished recipe. Returns (ok, created).

        A recipe already in the log is left untouched (``finishedAt`` is not
        refreshed) and reported as ``created=False``.
        """
        log, ok = await self._load()
        if not ok:
            return False, False
        if any(r.id_meal == recipe.id_meal for r in log):
            return True, False

        entry = FinishedRecipe(
            **recipe.model_dump(),
            finished_at=datetime.now(timezone.utc).isoformat(),
        )
        saved = await self.store.set(FINISHED_RECIPES, [entry.to_doc()] + [r.to_doc() for r in log])
        if saved:
            logger.info(f"Recipe {recipe.id_meal} added to diary")
        return saved, saved

    async def get_achievements(self) -> list[Achievement]:
        return compute_achievements(await self.list_finished(), self.rules)
