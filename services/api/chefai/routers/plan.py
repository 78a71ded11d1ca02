import logging
from typing import Optional

from fastapi import APIRouter, Body, Depends, HTTPException

from ..agents.planner_agent import MealPlanGenerator
from ..deps import get_meal_plans, get_planner
from ..schemas import MealItem, PlanGenerateRequest
from ..services.meal_plan import MealPlanService

router = APIRouter()
logger = logging.getLogger("chefai.plan")

MISSING_KEY = "Harap masukkan Gemini API Key Anda terlebih dahulu di Pengaturan."
GENERATION_FAILED = "Chef AI gagal membuat rencana. Pastikan API Key Anda sudah benar di Pengaturan!"


@router.get("/plan", response_model=dict[str, list[MealItem]])
async def get_plan(plans: MealPlanService = Depends(get_meal_plans)):
    return await plans.get_plan()


@router.post("/plan/generate", response_model=dict[str, list[MealItem]])
async def generate_plan(
    request: Optional[PlanGenerateRequest] = Body(None),
    planner: MealPlanGenerator = Depends(get_planner),
):
    """Ask Chef AI for a new week. The stored plan is replaced, never merged."""
    if not await planner.has_credentials():
        raise HTTPException(status_code=400, detail=MISSING_KEY)

    plan = await planner.generate(request.preferences if request else None)
    if plan is None:
        raise HTTPException(status_code=502, detail=GENERATION_FAILED)
    return plan


@router.delete("/plan/{day}/{item_id}", response_model=dict[str, list[MealItem]])
async def remove_meal(day: str, item_id: str, plans: MealPlanService = Depends(get_meal_plans)):
    if not await plans.remove_item(day, item_id):
        raise HTTPException(status_code=500, detail="Gagal menyimpan rencana makan.")
    return await plans.get_plan()
