"""
Question categories
Fixed category set plus the lookup table for free-text spellings editors use
"""

from enum import Enum
from typing import Optional


class Category(str, Enum):
    GENERAL_HEALTH = "general_health"
    NUTRITION = "nutrition"
    FITNESS_EXERCISE = "fitness_exercise"
    SLEEP = "sleep"
    MENTAL_HEALTH = "mental_health"
    RELATIONSHIPS = "relationships"
    PRODUCTIVITY = "productivity"
    HOME_CLEANING = "home_cleaning"
    COOKING_FOOD = "cooking_food"
    MONEY_FINANCE = "money_finance"
    ANIMALS_WILDLIFE = "animals_wildlife"
    EDUCATION_LEARNING = "education_learning"
    GEOGRAPHY = "geography"
    HISTORY = "history"
    HOBBIES_DIY = "hobbies_diy"
    OUTDOOR_NATURE = "outdoor_nature"
    SCIENCE = "science"
    MISCELLANEOUS = "miscellaneous"


CATEGORY_LABELS: dict[Category, str] = {
    Category.GENERAL_HEALTH: "Health & Wellness",
    Category.NUTRITION: "Nutrition & Diet",
    Category.FITNESS_EXERCISE: "Fitness & Exercise",
    Category.SLEEP: "Sleep",
    Category.MENTAL_HEALTH: "Mental Health & Mindset",
    Category.RELATIONSHIPS: "Relationships",
    Category.PRODUCTIVITY: "Productivity & Work",
    Category.HOME_CLEANING: "Home & Cleaning",
    Category.COOKING_FOOD: "Cooking & Food",
    Category.MONEY_FINANCE: "Money & Finance",
    Category.ANIMALS_WILDLIFE: "Animals & Wildlife",
    Category.EDUCATION_LEARNING: "Education & Learning",
    Category.GEOGRAPHY: "Geography",
    Category.HISTORY: "History",
    Category.HOBBIES_DIY: "Hobbies & DIY",
    Category.OUTDOOR_NATURE: "Outdoor & Nature",
    Category.SCIENCE: "Science",
    Category.MISCELLANEOUS: "Miscellaneous",
}

# Lower-cased free text -> category id
CATEGORY_ALIASES: dict[str, str] = {
    "productivity & work": "productivity",
    "productivity": "productivity",
    "fitness & exercise": "fitness_exercise",
    "fitness": "fitness_exercise",
    "exercise": "fitness_exercise",
    "relationships": "relationships",
    "health & wellness": "general_health",
    "general health": "general_health",
    "health": "general_health",
    "nutrition & diet": "nutrition",
    "nutrition": "nutrition",
    "diet": "nutrition",
    "sleep": "sleep",
    "home & cleaning": "home_cleaning",
    "cleaning": "home_cleaning",
    "cooking": "cooking_food",
    "cooking & food": "cooking_food",
    "food": "cooking_food",
    "money & finance": "money_finance",
    "money": "money_finance",
    "finance": "money_finance",
    "mental": "mental_health",
    "mental health & mindset": "mental_health",
    "mental health": "mental_health",
    "animals & wildlife": "animals_wildlife",
    "wildlife": "animals_wildlife",
    "education & learning": "education_learning",
    "education": "education_learning",
    "geography": "geography",
    "history": "history",
    "hobbies & diy": "hobbies_diy",
    "hobbies": "hobbies_diy",
    "miscellaneous": "miscellaneous",
    "outdoor & nature": "outdoor_nature",
    "outdoor": "outdoor_nature",
    "nature": "outdoor_nature",
    "science": "science",
    "technology": "science",
    "travel": "science",
}

_VALID_IDS = {c.value for c in Category}


def normalize_category(raw: Optional[str]) -> Optional[str]:
    """
    Map a free-text category to a category id

    Unknown spellings come back lower-cased and trimmed so the caller can
    still validate them; empty input gives None.
    """
    if not raw:
        return None
    normalized = raw.strip().lower()
    if not normalized:
        return None
    return CATEGORY_ALIASES.get(normalized, normalized)


def is_valid_category(category: Optional[str]) -> bool:
    return category in _VALID_IDS


def resolve_category(raw: Optional[str]) -> Optional[Category]:
    """Category for free text, or None when it cannot be resolved"""
    normalized = normalize_category(raw)
    if not is_valid_category(normalized):
        return None
    return Category(normalized)


def format_category_name(category: str) -> str:
    """Display name, e.g. fitness_exercise -> Fitness & Exercise"""
    if is_valid_category(category):
        return CATEGORY_LABELS[Category(category)]
    return " ".join(word.capitalize() for word in category.split("_"))
