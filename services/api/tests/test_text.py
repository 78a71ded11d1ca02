import pytest

from chefai.core.text import extract_ingredients, split_instructions, strip_markers
from chefai.parsing.timers import suggest_step_seconds
from chefai.themes import ALLOWED_CATEGORIES, DEFAULT_THEME, get_theme_by_category
from tests.conftest import TERIYAKI


def test_split_on_newlines():
    steps = split_instructions(TERIYAKI["strInstructions"])
    assert len(steps) == 4
    assert steps[2] == "Bake for 35 minutes."


def test_single_line_falls_back_to_sentences():
    steps = split_instructions("Boil the pasta. Drain it well. Toss with sauce.")
    assert steps == ["Boil the pasta", "Drain it well", "Toss with sauce."]


def test_ordinal_and_step_markers_are_stripped():
    text = "1. Heat the oil\n2) Fry the onions\nSTEP 3: Add rice\nStep 4 - Serve hot"
    assert split_instructions(text) == ["Heat the oil", "Fry the onions", "Add rice", "Serve hot"]


def test_bare_numbers_and_headers_are_dropped():
    text = "STEP 1\nChop the garlic\n2\nok\nAdd the garlic to the pan"
    assert split_instructions(text) == ["Chop the garlic", "Add the garlic to the pan"]


def test_empty_instructions():
    assert split_instructions("") == []
    assert split_instructions(None) == []


def test_extract_ingredients_skips_blank_slots(recipe):
    ingredients = extract_ingredients(recipe)
    assert [(i.name, i.measure) for i in ingredients] == [
        ("soy sauce", "3/4 cup"),
        ("water", "1/2 cup"),
        ("brown sugar", "1/4 cup"),
        ("chicken breasts", "2"),
    ]


def test_extract_ingredients_reads_all_twenty_slots():
    data = {f"strIngredient{i}": f"ing {i}" for i in range(1, 22)}
    data.update({f"strMeasure{i}": " " for i in range(1, 22)})
    ingredients = extract_ingredients(data)
    assert len(ingredients) == 20
    assert ingredients[-1].name == "ing 20"
    assert ingredients[0].measure == ""


def test_strip_markers():
    assert strip_markers("**Tips:** pakai api kecil") == "Tips: pakai api kecil"
    assert strip_markers("") == ""


@pytest.mark.parametrize("text,seconds", [
    ("Bake for 35 minutes.", 35 * 60),
    ("Simmer 1 hour 30 mins until tender", 90 * 60),
    ("Rest 45 seconds", 45),
    ("Rebus selama 10 menit", 600),
    ("Serve with rice.", None),
])
def test_suggest_step_seconds(text, seconds):
    assert suggest_step_seconds(text) == seconds


def test_theme_groups():
    assert get_theme_by_category("Vegan") == get_theme_by_category("Vegetarian")
    assert get_theme_by_category("Seafood").primary == "#00BCD4"
    assert get_theme_by_category("Lamb") == get_theme_by_category("Beef")
    assert get_theme_by_category() == DEFAULT_THEME
    assert get_theme_by_category("Miscellaneous") == DEFAULT_THEME


def test_planner_taxonomy_covers_achievement_categories():
    assert {"Seafood", "Vegetarian", "Dessert"} <= set(ALLOWED_CATEGORIES)
