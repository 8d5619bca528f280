"""Health score and status classification."""

from collections.abc import Sequence

from nutrition_insights.domain.entries import FoodEntry
from nutrition_insights.domain.insights import ConflictResult, InsightStatus, Severity
from nutrition_insights.domain.profiles import HealthProfile, has_condition
from nutrition_insights.services.aggregation import aggregate_nutrients
from nutrition_insights.services.conflicts import (
    DIABETES_KEYWORDS,
    HYPERTENSION_KEYWORDS,
)
from nutrition_insights.services.formatting import format_number

MAX_SCORE = 10.0
MIN_SCORE = 1.0

PROTEIN_VERY_LOW_G = 30
PROTEIN_LOW_G = 50
PROTEIN_HIGH_G = 150
FIBER_VERY_LOW_G = 15
FIBER_LOW_G = 25
SODIUM_VERY_HIGH_MG = 3500
SODIUM_HIGH_MG = 2300
SUGAR_VERY_HIGH_G = 100
SUGAR_HIGH_G = 50
CALORIES_LOW = 1200
CALORIES_HIGH = 3000
VARIETY_BONUS_FOODS = 5
DIABETES_SUGAR_G = 75
HYPERTENSION_SODIUM_MG = 2000

_SEVERITY_PENALTIES = {
    Severity.HIGH: 2.0,
    Severity.MEDIUM: 1.0,
    Severity.LOW: 0.5,
}


def calculate_health_score(
    profile: HealthProfile,
    entries: Sequence[FoodEntry],
    conflicts: Sequence[ConflictResult],
) -> float:
    """Return a score in [1, 10] rounded to one decimal."""
    totals = aggregate_nutrients(entries)
    score = MAX_SCORE

    for conflict in conflicts:
        score -= _SEVERITY_PENALTIES.get(conflict.severity, 0.0)

    if totals.protein < PROTEIN_VERY_LOW_G:
        score -= 1.5
    elif totals.protein < PROTEIN_LOW_G:
        score -= 0.5
    if totals.protein > PROTEIN_HIGH_G:
        score -= 0.5

    if totals.fiber < FIBER_VERY_LOW_G:
        score -= 1
    elif totals.fiber < FIBER_LOW_G:
        score -= 0.5

    if totals.sodium > SODIUM_VERY_HIGH_MG:
        score -= 2
    elif totals.sodium > SODIUM_HIGH_MG:
        score -= 1

    if totals.sugar > SUGAR_VERY_HIGH_G:
        score -= 2
    elif totals.sugar > SUGAR_HIGH_G:
        score -= 1

    if totals.calories < CALORIES_LOW:
        score -= 1.5
    if totals.calories > CALORIES_HIGH:
        score -= 1

    if count_distinct_foods(entries) >= VARIETY_BONUS_FOODS:
        score += 0.5

    if has_condition(profile, *DIABETES_KEYWORDS) and totals.sugar > DIABETES_SUGAR_G:
        score -= 1.5
    if (
        has_condition(profile, *HYPERTENSION_KEYWORDS)
        and totals.sodium > HYPERTENSION_SODIUM_MG
    ):
        score -= 1

    # Second severity pass; stored scores include it.
    high_count = sum(1 for c in conflicts if c.severity == Severity.HIGH)
    medium_count = sum(1 for c in conflicts if c.severity == Severity.MEDIUM)
    score -= high_count * 2 + medium_count * 1

    return format_number(max(MIN_SCORE, min(MAX_SCORE, score)), 1)


def determine_status(conflicts: Sequence[ConflictResult]) -> InsightStatus:
    """Map conflicts to a coarse status label."""
    if any(conflict.severity == Severity.HIGH for conflict in conflicts):
        return InsightStatus.AVOID
    if any(conflict.severity == Severity.MEDIUM for conflict in conflicts):
        return InsightStatus.CAUTION
    return InsightStatus.SAFE


def count_distinct_foods(entries: Sequence[FoodEntry]) -> int:
    """Count distinct food names, ignoring case and surrounding spaces."""
    return len({entry.food_name.strip().lower() for entry in entries})
