import logging
from typing import Optional, Literal

from pydantic import BaseModel, ValidationError, field_validator, model_validator

from ..core.ai_client import AIClient, AIClientFactory, AIRequestError
from ..core.ids import new_id
from ..core.text import strip_markers
from ..schemas import MealItem, MealPlan
from ..services.meal_plan import MealPlanService
from ..services.profile import ProfileService
from ..themes import ALLOWED_CATEGORIES, DAY_LABELS

logger = logging.getLogger("chefai.planner")

# --- Schema sent to Gemini as the JSON-mode response shape ---

class GeneratedMeal(BaseModel):
    type: str
    name: str
    category: str


class GeneratedDay(BaseModel):
    day: str
    meals: list[GeneratedMeal]


class GeneratedPlan(BaseModel):
    days: list[GeneratedDay]


# --- Strict schema the raw response must pass before it is used ---

MEAL_TYPES = ("Breakfast", "Lunch", "Dinner")


class SuggestedMeal(BaseModel):
    type: Literal["Breakfast", "Lunch", "Dinner"]
    name: str
    category: str

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        v = strip_markers(v)
        if not v:
            raise ValueError("meal name is blank")
        return v

    @field_validator("category")
    @classmethod
    def _known_category(cls, v: str) -> str:
        if v not in ALLOWED_CATEGORIES:
            raise ValueError(f"unknown category {v!r}")
        return v


class SuggestedDay(BaseModel):
    day: str
    meals: list[SuggestedMeal]

    @field_validator("day")
    @classmethod
    def _known_day(cls, v: str) -> str:
        if v not in DAY_LABELS:
            raise ValueError(f"unknown day label {v!r}")
        return v

    @model_validator(mode="after")
    def _one_of_each_meal(self):
        types = sorted(m.type for m in self.meals)
        if types != sorted(MEAL_TYPES):
            raise ValueError(f"{self.day} needs exactly one Breakfast, Lunch and Dinner, got {types}")
        return self


class PlanSuggestion(BaseModel):
    days: list[SuggestedDay]

    @model_validator(mode="after")
    def _full_week(self):
        labels = [d.day for d in self.days]
        if len(labels) != len(set(labels)):
            raise ValueError("day label repeated")
        if set(labels) != set(DAY_LABELS):
            missing = [d for d in DAY_LABELS if d not in labels]
            raise ValueError(f"plan is missing {', '.join(missing)}")
        return self


SYSTEM_PROMPT = """Return VALID JSON only. No markdown. No extra keys.

You are "Chef AI", a nutrition-aware meal planner.
Build a weekly plan of {day_count} days with exactly three meals per day:
Breakfast, Lunch and Dinner.

Rules:
1. "day" must be one of: {days}. Use each day once, in that order.
2. "type" must be one of: Breakfast, Lunch, Dinner.
3. "name" is a short, concrete dish name.
4. "category" must be exactly one of: {categories}.
5. Respect the user's diet and allergy profile strictly. Never suggest a dish
   that conflicts with it, and pick categories that fit it.
6. Vary dishes across the week.
"""


def build_prompt(preferences: str) -> str:
    profile = preferences.strip() if preferences else ""
    return f"""
    User diet / allergy profile: {profile or "Tidak ada batasan (normal diet)"}

    Output shape:
    {{"days": [{{"day": "...", "meals": [{{"type": "...", "name": "...", "category": "..."}}]}}]}}
    """


def parse_plan(raw_text: str) -> Optional[PlanSuggestion]:
    """Validate the model's raw output. Any violation rejects the whole plan."""
    if not raw_text:
        return None
    try:
        return PlanSuggestion.model_validate_json(raw_text)
    except ValidationError as e:
        logger.error(f"Rejected generated plan: {e.error_count()} schema violation(s): {e.errors()[0]['msg']}")
        return None


def to_meal_plan(suggestion: PlanSuggestion) -> MealPlan:
    # Suggested dishes are not resolved against the recipe API, so recipeId stays empty.
    # Stored in week order, Breakfast to Dinner, whatever order the model used.
    plan: MealPlan = {}
    for day in sorted(suggestion.days, key=lambda d: DAY_LABELS.index(d.day)):
        plan[day.day] = [
            MealItem(
                id=new_id(),
                recipe_id="",
                recipe_name=m.name,
                meal_type=m.type,
                date=day.day,
                category=m.category,
            )
            for m in sorted(day.meals, key=lambda m: MEAL_TYPES.index(m.type))
        ]
    return plan


class MealPlanGenerator:
    def __init__(
        self,
        plans: MealPlanService,
        profile: ProfileService,
        client_factory: AIClientFactory = AIClient,
    ):
        self.plans = plans
        self.profile = profile
        self.client_factory = client_factory

    async def has_credentials(self) -> bool:
        return await self.profile.get_active_api_key() is not None

    async def generate(self, preferences: Optional[str] = None) -> Optional[MealPlan]:
        """
        Generate a week plan and store it in place of the current one.

        Returns None on any failure: missing key, network/quota error, or a
        response that does not pass validation. The stored plan is untouched then.
        """
        api_key = await self.profile.get_active_api_key()
        if api_key is None:
            logger.warning("No Gemini API key configured, skipping plan generation")
            return None

        if preferences is None:
            preferences = await self.profile.get_preferences()

        system_prompt = SYSTEM_PROMPT.format(
            day_count=len(DAY_LABELS),
            days=", ".join(DAY_LABELS),
            categories=", ".join(ALLOWED_CATEGORIES),
        )

        try:
            client = self.client_factory(api_key)
            raw = await client.generate_json(
                build_prompt(preferences),
                response_schema=GeneratedPlan,
                system_instruction=system_prompt,
            )
        except AIRequestError as e:
            logger.error(f"Plan generation failed (rate_limited={e.rate_limited}): {e}")
            return None
        except Exception as e:
            logger.error(f"Plan generation failed: {e.__class__.__name__}: {e}")
            return None

        suggestion = parse_plan(raw)
        if suggestion is None:
            return None

        plan = to_meal_plan(suggestion)
        if not await self.plans.replace_plan(plan):
            return None

        logger.info(f"Stored generated plan with {sum(len(m) for m in plan.values())} meals")
        return plan
