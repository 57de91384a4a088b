"""Derived views shown on a product's detail page."""
from typing import Any, Dict, List, Optional

from models import NutritionFact, NutritionGrade

NUTRITION_GRADE_DESCRIPTIONS = {
    "a": "Very good nutritional quality",
    "b": "Good nutritional quality",
    "c": "Average nutritional quality",
    "d": "Poor nutritional quality",
    "e": "Very poor nutritional quality",
}

# (nutriments key, label, unit), in display order
NUTRITION_FACTS = [
    ("energy_100g", "Energy", "kJ"),
    ("fat_100g", "Fat", "g"),
    ("saturated-fat_100g", "Saturated fat", "g"),
    ("carbohydrates_100g", "Carbohydrates", "g"),
    ("sugars_100g", "Sugars", "g"),
    ("proteins_100g", "Proteins", "g"),
    ("salt_100g", "Salt", "g"),
    ("fiber_100g", "Fiber", "g"),
]


def nutrition_grade(grade: Optional[str]) -> Optional[NutritionGrade]:
    if not grade:
        return None
    key = grade.strip().lower()
    description = NUTRITION_GRADE_DESCRIPTIONS.get(key)
    if description is None:
        return None
    return NutritionGrade(grade=key, description=description)


def _as_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def format_nutrient(value: Optional[float], unit: str = "g") -> str:
    if value is None:
        return "N/A"
    return f"{value:.1f} {unit}"


def nutrition_facts(nutriments: Optional[Dict[str, Any]]) -> List[NutritionFact]:
    nutriments = nutriments if isinstance(nutriments, dict) else {}
    facts = []
    for key, label, unit in NUTRITION_FACTS:
        value = _as_float(nutriments.get(key))
        facts.append(NutritionFact(key=key, label=label, value=value, display=format_nutrient(value, unit)))
    return facts


def split_list(raw: Any) -> List[str]:
    """Split a comma-separated upstream field, dropping blanks."""
    if not isinstance(raw, str):
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]
