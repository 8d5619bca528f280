"""Domain models for logged food entries."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from uuid import UUID


class ServingUnit(str, Enum):
    """Units a serving can be logged in."""

    PIECE = "piece"
    CUP = "cup"
    GRAM = "gram"
    OUNCE = "ounce"
    TABLESPOON = "tablespoon"
    TEASPOON = "teaspoon"


class MealType(str, Enum):
    """Meal slot for an entry."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class NutritionData:
    """Nutrition snapshot already scaled to the logged serving."""

    calories: float
    protein: float
    carbs: float
    fat: float
    fiber: float = 0
    sugar: float = 0
    sodium: float = 0
    vitamins: dict[str, float] | None = None
    minerals: dict[str, float] | None = None


@dataclass(frozen=True)
class FoodEntry:
    """One logged consumption event."""

    id: UUID
    profile_id: UUID
    food_name: str
    serving_size: float
    serving_unit: ServingUnit
    meal_type: MealType
    nutrition: NutritionData
    entry_date: date
    created_at: datetime | None = None


def nutrition_to_payload(nutrition: NutritionData) -> dict[str, object]:
    """Serialize nutrition data, omitting empty vitamin and mineral maps."""
    payload: dict[str, object] = {
        "calories": nutrition.calories,
        "protein": nutrition.protein,
        "carbs": nutrition.carbs,
        "fat": nutrition.fat,
        "fiber": nutrition.fiber,
        "sugar": nutrition.sugar,
        "sodium": nutrition.sodium,
    }
    if nutrition.vitamins:
        payload["vitamins"] = dict(nutrition.vitamins)
    if nutrition.minerals:
        payload["minerals"] = dict(nutrition.minerals)
    return payload
