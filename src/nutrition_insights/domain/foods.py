"""Domain models for nutrition provider lookups."""

from dataclasses import dataclass

from nutrition_insights.domain.entries import NutritionData


@dataclass(frozen=True)
class FoodSummary:
    """Summary information about a food from FDC."""

    fdc_id: int
    name: str
    brand: str | None
    data_type: str | None


@dataclass(frozen=True)
class FoodNutrition:
    """Nutrition for a food as reported by the provider, per 100 g."""

    summary: FoodSummary
    nutrition: NutritionData
