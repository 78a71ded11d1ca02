"""FastAPI dependencies for the Chef AI API.

Every service is built per request from an explicitly passed document store,
so tests can swap the store, the AI client factory or the recipe API through
``app.dependency_overrides``.
"""

from fastapi import Depends, HTTPException

from .agents.chef_agent import ChefChatAssistant
from .agents.planner_agent import MealPlanGenerator
from .core.ai_client import AIClient, AIClientFactory
from .infra.document_store import DocumentStore
from .infra.redis_client import get_redis
from .services.cooking_session import ChatSession, CookingSession
from .services.diary import DiaryService
from .services.meal_plan import MealPlanService
from .services.profile import ProfileService
from .services.recipe_api import RecipeAPI
from .services.shopping_list import ShoppingListService


async def get_store() -> DocumentStore:
    return DocumentStore(await get_redis())


def get_ai_client_factory() -> AIClientFactory:
    return AIClient


def get_recipe_api() -> RecipeAPI:
    return RecipeAPI()


def get_profile(store: DocumentStore = Depends(get_store)) -> ProfileService:
    return ProfileService(store)


def get_shopping(store: DocumentStore = Depends(get_store)) -> ShoppingListService:
    return ShoppingListService(store)


def get_diary(store: DocumentStore = Depends(get_store)) -> DiaryService:
    return DiaryService(store)


def get_meal_plans(store: DocumentStore = Depends(get_store)) -> MealPlanService:
    return MealPlanService(store)


def get_planner(
    plans: MealPlanService = Depends(get_meal_plans),
    profile: ProfileService = Depends(get_profile),
    factory: AIClientFactory = Depends(get_ai_client_factory),
) -> MealPlanGenerator:
    return MealPlanGenerator(plans, profile, factory)


def get_chef(
    store: DocumentStore = Depends(get_store),
    profile: ProfileService = Depends(get_profile),
    factory: AIClientFactory = Depends(get_ai_client_factory),
) -> ChefChatAssistant:
    return ChefChatAssistant(store, profile, factory)


async def get_cooking_session(
    id_meal: str,
    recipes: RecipeAPI = Depends(get_recipe_api),
    shopping: ShoppingListService = Depends(get_shopping),
    diary: DiaryService = Depends(get_diary),
):
    """Loaded recipe screen for ``id_meal``, closed once the request is done."""
    session = CookingSession(id_meal, recipes, shopping, diary)
    if await session.load() is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    try:
        yield session
    finally:
        session.close()


async def get_chat_session(
    id_meal: str,
    chef: ChefChatAssistant = Depends(get_chef),
    recipes: RecipeAPI = Depends(get_recipe_api),
):
    recipe = await recipes.get_by_id(id_meal)
    if recipe is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    session = ChatSession(chef, recipe)
    try:
        yield session
    finally:
        session.close()
