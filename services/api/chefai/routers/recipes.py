from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from ..deps import get_cooking_session, get_recipe_api
from ..schemas import AddIngredientsOut, MarkFinishedOut, Recipe, RecipeDetailOut
from ..services.cooking_session import CookingSession
from ..services.recipe_api import RecipeAPI
from ..themes import CategoryTheme, get_theme_by_category
from .diary import finished_out
from .shopping import SAVE_FAILED

router = APIRouter()


@router.get("/recipes", response_model=list[Recipe])
async def list_recipes(
    q: Optional[str] = Query(None, description="Search by name"),
    category: Optional[str] = Query(None),
    recipes: RecipeAPI = Depends(get_recipe_api),
):
    if category and category != "All":
        return await recipes.filter_by_category(category)
    if q:
        return await recipes.search(q)
    return await recipes.list_all()


@router.get("/recipes/{id_meal}", response_model=RecipeDetailOut)
async def get_recipe(session: CookingSession = Depends(get_cooking_session)):
    """Recipe with its ingredient list, segmented steps, step timers and category theme."""
    recipe = session.recipe
    return RecipeDetailOut(
        recipe=recipe.model_dump(by_alias=True),
        ingredients=session.ingredients,
        steps=session.steps,
        suggested_seconds=[session.step_seconds(i) for i in range(len(session.steps))],
        theme=get_theme_by_category(recipe.str_category or "All").model_dump(),
    )


@router.post("/recipes/{id_meal}/shopping", response_model=AddIngredientsOut)
async def add_ingredients(session: CookingSession = Depends(get_cooking_session)):
    """Put every ingredient of the recipe on the shopping list."""
    added = await session.add_ingredients_to_shopping_list()
    if added < 0:
        raise HTTPException(status_code=500, detail=SAVE_FAILED)
    if added == 0:
        return AddIngredientsOut(added=0, message="Semua bahan sudah ada di daftar belanja.")
    return AddIngredientsOut(added=added, message=f"{added} bahan ditambahkan ke daftar belanja. 🛒")


@router.post("/recipes/{id_meal}/finished", response_model=MarkFinishedOut)
async def finish_recipe(session: CookingSession = Depends(get_cooking_session)):
    ok, created = await session.mark_finished()
    return finished_out(ok, created, session.recipe.str_meal)


@router.get("/themes/{category}", response_model=CategoryTheme)
def get_theme(category: str):
    return get_theme_by_category(category)
