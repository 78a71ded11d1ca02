"""Pydantic schemas for the Chef AI core.

Stored documents keep the camelCase field names the mobile client reads
(``recipeId``, ``idMeal``, ``finishedAt`` ...), so every model serialises by alias.
"""

from typing import Optional, Literal, Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_doc(self) -> dict:
        return self.model_dump(by_alias=True)


# --- Recipes (external API records) ---

class Recipe(CamelModel):
    """A recipe record as returned by the lookup API.

    Ingredient slots (``strIngredient1`` .. ``strIngredient20`` and matching
    ``strMeasureN``) are kept as extra fields.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id_meal: str
    str_meal: str
    str_meal_thumb: Optional[str] = None
    str_instructions: Optional[str] = None
    str_category: Optional[str] = None
    str_area: Optional[str] = None


class Ingredient(BaseModel):
    name: str
    measure: str = ""


class RecipeSummary(CamelModel):
    id_meal: str
    str_meal: str
    str_meal_thumb: str = ""
    str_category: str = ""


class RecipeDetailOut(CamelModel):
    recipe: dict[str, Any]
    ingredients: list[Ingredient]
    steps: list[str]
    # Countdown length per step, same order as ``steps``
    suggested_seconds: list[int]
    theme: dict[str, Any]


# --- Shopping list ---

class ShoppingItemCreate(CamelModel):
    name: str = Field(..., min_length=1)
    measure: str = ""
    recipe_id: str
    recipe_name: str = ""


class ShoppingItem(ShoppingItemCreate):
    id: str
    completed: bool = False


class ClearCompletedOut(BaseModel):
    cleared: int
    message: str


class AddIngredientsOut(BaseModel):
    added: int
    message: str


# --- Meal plan ---

MealType = Literal["Breakfast", "Lunch", "Dinner", "Snack"]


class MealItem(CamelModel):
    id: str
    recipe_id: str = ""
    recipe_name: str
    meal_type: MealType
    date: str
    category: str = ""


MealPlan = dict[str, list[MealItem]]


class PlanGenerateRequest(BaseModel):
    preferences: Optional[str] = None


# --- Cooking diary ---

class FinishedRecipe(RecipeSummary):
    finished_at: str


class MarkFinishedOut(BaseModel):
    created: bool
    message: str


class Achievement(BaseModel):
    id: str
    title: str
    desc: str
    icon: str
    unlocked: bool


# --- Chat ---

class ChatMessage(BaseModel):
    id: str
    text: str
    sender: Literal["user", "ai"]


class ChatRequest(BaseModel):
    question: str


# --- Profile ---

class PrefsUpdate(CamelModel):
    api_key: Optional[str] = None
    preferences: Optional[str] = None


class PrefsOut(CamelModel):
    preferences: str
    has_api_key: bool
    ai_ready: bool
