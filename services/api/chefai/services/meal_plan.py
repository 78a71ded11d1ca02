import logging

from pydantic import ValidationError

from ..infra.document_store import DocumentStore, MEAL_PLANS
from ..schemas import MealItem, MealPlan

logger = logging.getLogger("chefai.plan")


def plan_to_doc(plan: MealPlan) -> dict:
    return {day: [m.to_doc() for m in meals] for day, meals in plan.items()}


class MealPlanService:
    """Day label -> ordered meals. A day with no meals has no key at all."""

    def __init__(self, store: DocumentStore):
        self.store = store

    async def _load(self) -> tuple[MealPlan, bool]:
        raw, ok = await self.store.load(MEAL_PLANS, {})
        plan: MealPlan = {}
        for day, meals in (raw or {}).items():
            items = []
            for entry in meals or []:
                try:
                    items.append(MealItem.model_validate(entry))
                except ValidationError as e:
                    logger.warning(f"Skipping malformed meal on {day}: {e}")
            if items:
                plan[day] = items
        return plan, ok

    async def get_plan(self) -> MealPlan:
        plan, _ = await self._load()
        return plan

    async def replace_plan(self, plan: MealPlan) -> bool:
        """Overwrite the stored plan. Nothing from the previous plan survives."""
        return await self.store.set(MEAL_PLANS, plan_to_doc({d: m for d, m in plan.items() if m}))

    async def remove_item(self, day: str, item_id: str) -> bool:
        plan, ok = await self._load()
        if not ok:
            return False
        if day not in plan:
            return True

        remaining = [m for m in plan[day] if m.id != item_id]
        if remaining:
            plan[day] = remaining
        else:
            del plan[day]
        return await self.store.set(MEAL_PLANS, plan_to_doc(plan))
