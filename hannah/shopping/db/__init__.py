"""SQLite storage for saved meal plans."""

from .meal_plans import MealPlanDB
from .schema import ensure_schema

__all__ = [
    "MealPlanDB",
    "ensure_schema",
]
