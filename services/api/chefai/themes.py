"""Recipe category registry.

Categories double as the theme key for the UI and as the closed taxonomy the
meal planner is allowed to suggest from.
"""

from pydantic import BaseModel


class CategoryTheme(BaseModel):
    primary: str
    secondary: str
    text: str
    gradient: list[str]


# TheMealDB categories. The planner may only tag meals with one of these.
ALLOWED_CATEGORIES: tuple[str, ...] = (
    "Beef",
    "Breakfast",
    "Chicken",
    "Dessert",
    "Goat",
    "Lamb",
    "Miscellaneous",
    "Pasta",
    "Pork",
    "Seafood",
    "Side",
    "Starter",
    "Vegan",
    "Vegetarian",
)

DAY_LABELS: tuple[str, ...] = ("Senin", "Selasa", "Rabu", "Kamis", "Jumat", "Sabtu", "Minggu")

_GREEN = CategoryTheme(primary="#4CAF50", secondary="#E8F5E9", text="#1B5E20", gradient=["#4CAF50", "#2E7D32"])
_CYAN = CategoryTheme(primary="#00BCD4", secondary="#E0F7FA", text="#006064", gradient=["#00BCD4", "#0097A7"])
_PINK = CategoryTheme(primary="#E91E63", secondary="#FCE4EC", text="#880E4F", gradient=["#E91E63", "#C2185B"])
_RED = CategoryTheme(primary="#D32F2F", secondary="#FFEBEE", text="#B71C1C", gradient=["#D32F2F", "#C62828"])
_ORANGE = CategoryTheme(primary="#FF9800", secondary="#FFF3E0", text="#E65100", gradient=["#FF9800", "#F57C00"])
_YELLOW = CategoryTheme(primary="#FBC02D", secondary="#FFFDE7", text="#F57F17", gradient=["#FBC02D", "#F9A825"])

DEFAULT_THEME = CategoryTheme(primary="#ff7a18", secondary="#fdeee3", text="#bf5c12", gradient=["#ff7a18", "#ff4d00"])

CATEGORY_THEMES: dict[str, CategoryTheme] = {
    "Vegetarian": _GREEN,
    "Vegan": _GREEN,
    "Starter": _GREEN,
    "Seafood": _CYAN,
    "Dessert": _PINK,
    "Sweet": _PINK,
    "Beef": _RED,
    "Lamb": _RED,
    "Pork": _RED,
    "Goat": _RED,
    "Chicken": _ORANGE,
    "Pasta": _YELLOW,
    "Breakfast": _YELLOW,
}


def get_theme_by_category(category: str = "All") -> CategoryTheme:
    return CATEGORY_THEMES.get(category, DEFAULT_THEME)
