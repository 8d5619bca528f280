"""Nutrient aggregation across food entries."""

import math
from collections.abc import Iterable

from nutrition_insights.domain.entries import FoodEntry
from nutrition_insights.domain.insights import NutrientTotals
from nutrition_insights.services.formatting import format_number, to_number

# Calories and sodium are whole numbers; everything else keeps two decimals.
WHOLE_NUMBER_FIELDS = frozenset({"calories", "sodium"})
TOTAL_FIELDS = ("calories", "protein", "carbs", "fat", "fiber", "sugar", "sodium")


def aggregate_nutrients(entries: Iterable[FoodEntry]) -> NutrientTotals:
    """Sum nutrition fields across entries and round each total."""
    values: dict[str, list[float]] = {name: [] for name in TOTAL_FIELDS}
    for entry in entries:
        nutrition = getattr(entry, "nutrition", None)
        for name in TOTAL_FIELDS:
            values[name].append(to_number(getattr(nutrition, name, None)))

    totals = {
        name: format_number(math.fsum(amounts), _decimals_for(name))
        for name, amounts in values.items()
    }
    return NutrientTotals(**totals)


def entry_amount(entry: FoodEntry, name: str) -> float:
    """Return a single entry's nutrient amount, treating missing values as 0."""
    return to_number(getattr(getattr(entry, "nutrition", None), name, None))


def _decimals_for(name: str) -> int:
    return 0 if name in WHOLE_NUMBER_FIELDS else 2
