"""Per-screen controllers for the recipe screen and the chat modal.

Network calls are never cancelled when a screen goes away. Instead each
session carries an ``active`` flag, and a result that arrives after
``close()`` is dropped instead of being applied. ``close()`` also tears down
the single outstanding step timer.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Optional

from ..agents.chef_agent import ChefChatAssistant
from ..core.text import extract_ingredients, split_instructions
from ..parsing.timers import DEFAULT_STEP_SECONDS, suggest_step_seconds
from ..schemas import ChatMessage, Ingredient, Recipe, RecipeSummary, ShoppingItemCreate
from .diary import DiaryService
from .recipe_api import RecipeAPI
from .shopping_list import ShoppingListService

logger = logging.getLogger("chefai.cook")

TimerCallback = Callable[[int], Any]


class StepTimer:
    """At most one countdown at a time. Starting a new one cancels the previous."""

    def __init__(self):
        self._task: Optional[asyncio.Task] = None
        self.step_index: Optional[int] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, seconds: float, step_index: int, on_done: Optional[TimerCallback] = None) -> asyncio.Task:
        self.cancel()
        self.step_index = step_index
        self._task = asyncio.create_task(self._run(seconds, step_index, on_done))
        return self._task

    async def _run(self, seconds: float, step_index: int, on_done: Optional[TimerCallback]):
        await asyncio.sleep(seconds)
        if on_done is None:
            return
        try:
            result = on_done(step_index)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception(f"Timer callback for step {step_index} failed")

    def cancel(self):
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None
        self.step_index = None


class CookingSession:
    def __init__(
        self,
        id_meal: str,
        recipes: RecipeAPI,
        shopping: ShoppingListService,
        diary: DiaryService,
    ):
        self.id_meal = id_meal
        self.recipes = recipes
        self.shopping = shopping
        self.diary = diary
        self.timer = StepTimer()
        self.active = True
        self.recipe: Optional[Recipe] = None
        self.steps: list[str] = []
        self.ingredients: list[Ingredient] = []

    async def load(self) -> Optional[Recipe]:
        recipe = await self.recipes.get_by_id(self.id_meal)
        if not self.active:
            logger.debug(f"Recipe {self.id_meal} arrived after the screen closed, dropping it")
            return None
        if recipe is not None:
            self.recipe = recipe
            self.steps = split_instructions(recipe.str_instructions or "")
            self.ingredients = extract_ingredients(recipe)
        return recipe

    def step_seconds(self, step_index: int) -> int:
        """Countdown length for a step: the durations it mentions, else the default."""
        return suggest_step_seconds(self.steps[step_index]) or DEFAULT_STEP_SECONDS

    def start_step_timer(
        self,
        step_index: int,
        seconds: Optional[float] = None,
        on_done: Optional[TimerCallback] = None,
    ) -> Optional[asyncio.Task]:
        if not self.active or not 0 <= step_index < len(self.steps):
            return None
        if seconds is None:
            seconds = self.step_seconds(step_index)
        return self.timer.start(seconds, step_index, on_done)

    async def add_ingredients_to_shopping_list(self) -> int:
        """Returns the number of newly listed ingredients, or -1 on failure."""
        if self.recipe is None:
            return -1
        return await self.shopping.add_many(
            ShoppingItemCreate(
                name=ing.name,
                measure=ing.measure,
                recipe_id=self.recipe.id_meal,
                recipe_name=self.recipe.str_meal,
            )
            for ing in self.ingredients
        )

    async def mark_finished(self) -> tuple[bool, bool]:
        if self.recipe is None:
            return False, False
        return await self.diary.mark_finished(
            RecipeSummary(
                id_meal=self.recipe.id_meal,
                str_meal=self.recipe.str_meal,
                str_meal_thumb=self.recipe.str_meal_thumb or "",
                str_category=self.recipe.str_category or "",
            )
        )

    def close(self):
        self.active = False
        self.timer.cancel()


class ChatSession:
    """The visible transcript of one open chat modal."""

    def __init__(self, assistant: ChefChatAssistant, recipe: Recipe):
        self.assistant = assistant
        self.recipe = recipe
        self.messages: list[ChatMessage] = []
        self.active = True

    async def open(self) -> list[ChatMessage]:
        messages = await self.assistant.load_transcript(self.recipe)
        if self.active:
            self.messages = messages
        return self.messages

    async def send(self, question: str) -> Optional[list[ChatMessage]]:
        messages = await self.assistant.send(self.recipe, question)
        if messages is None or not self.active:
            return None
        self.messages = messages
        return self.messages

    async def reset(self) -> list[ChatMessage]:
        messages = await self.assistant.reset(self.recipe)
        if self.active:
            self.messages = messages
        return self.messages

    def close(self):
        self.active = False
