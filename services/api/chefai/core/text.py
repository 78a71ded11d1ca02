import re
from typing import Any, Mapping, Union

from pydantic import BaseModel

from ..schemas import Ingredient

MAX_INGREDIENT_SLOTS = 20

# "1.", "2)", "3 -", "Step 4:", "STEP 5 -" at the start of a line
_ORDINAL_PREFIX = re.compile(r"^(\d+[.)\-\s]*|step\s*\d+[.:\-\s]*)", re.IGNORECASE)


def strip_markers(text: str) -> str:
    """Remove markdown bold markers (``**``) from model output."""
    if not text:
        return ""
    return text.replace("**", "").strip()


def _as_mapping(recipe: Union[BaseModel, Mapping[str, Any]]) -> Mapping[str, Any]:
    if isinstance(recipe, BaseModel):
        return recipe.model_dump(by_alias=True)
    return recipe


def extract_ingredients(recipe: Union[BaseModel, Mapping[str, Any]]) -> list[Ingredient]:
    """
    Collect (name, measure) pairs from the numbered ingredient slots.
    Slots with a blank or missing ingredient name are skipped.
    """
    data = _as_mapping(recipe)
    ingredients = []
    for i in range(1, MAX_INGREDIENT_SLOTS + 1):
        name = data.get(f"strIngredient{i}")
        if not name or not str(name).strip():
            continue
        measure = data.get(f"strMeasure{i}") or ""
        ingredients.append(Ingredient(name=str(name).strip(), measure=str(measure).strip()))
    return ingredients


def split_instructions(raw_text: str) -> list[str]:
    """
    Segment a free-text instructions field into ordered steps.

    1. Split on newlines.
    2. If that yields a single line, split it on sentence boundaries.
    3. Strip leading ordinals / "step N" markers.
    4. Drop leftovers that are too short or only a number.
    """
    if not raw_text:
        return []

    steps = [s.strip() for s in re.split(r"\r?\n", raw_text) if s.strip()]

    if len(steps) == 1:
        steps = [s for s in re.split(r"\.\s+", steps[0]) if s.strip()]

    cleaned = [_ORDINAL_PREFIX.sub("", step).strip() for step in steps]
    return [s for s in cleaned if len(s) > 2 and not s.isdigit()]
