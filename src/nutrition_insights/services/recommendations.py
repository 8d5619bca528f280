"""Rule-based recommendations from daily totals and the health profile."""

from collections.abc import Sequence
from datetime import date

from nutrition_insights.domain.entries import FoodEntry
from nutrition_insights.domain.insights import (
    NutrientTotals,
    Recommendation,
    RecommendationType,
    Severity,
)
from nutrition_insights.domain.profiles import HealthProfile, condition_matches
from nutrition_insights.services.aggregation import aggregate_nutrients
from nutrition_insights.services.conflicts import (
    DIABETES_KEYWORDS,
    HEART_KEYWORDS,
    HYPERTENSION_KEYWORDS,
)
from nutrition_insights.services.formatting import format_display

PROTEIN_TARGET_G = 50
PROTEIN_LOW_G = 30
FIBER_TARGET_G = 25
SODIUM_LIMIT_MG = 2300
SODIUM_HIGH_MG = 3000
PORTION_CALORIES_PER_ENTRY = 600
LAST_WARM_MONTH = 6


def generate_recommendations(
    profile: HealthProfile,
    entries: Sequence[FoodEntry],
    today: date | None = None,
) -> list[Recommendation]:
    """Return recommendations for the day's entries."""
    totals = aggregate_nutrients(entries)
    recommendations = _nutrient_recommendations(totals)
    for condition in profile.medical_conditions:
        recommendations.extend(_condition_recommendations(condition))
    recommendations.append(_seasonal_recommendation(today or date.today()))

    calories_per_entry = totals.calories / max(len(entries), 1)
    if calories_per_entry > PORTION_CALORIES_PER_ENTRY:
        recommendations.append(
            Recommendation(
                type=RecommendationType.LIFESTYLE,
                title="Portion Control",
                description=(
                    "Your entries average "
                    f"{format_display(calories_per_entry, 0)} kcal each. "
                    "Smaller plates and an extra serving of vegetables help keep "
                    f"meals under {PORTION_CALORIES_PER_ENTRY} kcal."
                ),
                priority=Severity.MEDIUM,
            )
        )
    return recommendations


def _nutrient_recommendations(totals: NutrientTotals) -> list[Recommendation]:
    recommendations = []
    if totals.protein < PROTEIN_TARGET_G:
        recommendations.append(
            Recommendation(
                type=RecommendationType.DIET,
                title="Optimize Protein Intake",
                description=(
                    f"You've had {format_display(totals.protein)}g of protein today. "
                    "Add lean proteins like chicken, fish, eggs or legumes to reach "
                    f"at least {PROTEIN_TARGET_G}g."
                ),
                priority=(
                    Severity.HIGH
                    if totals.protein < PROTEIN_LOW_G
                    else Severity.MEDIUM
                ),
            )
        )
    if totals.fiber < FIBER_TARGET_G:
        recommendations.append(
            Recommendation(
                type=RecommendationType.DIET,
                title="Increase Fiber Intake",
                description=(
                    f"Fiber is at {format_display(totals.fiber)}g of the "
                    f"{FIBER_TARGET_G}g daily goal. Whole grains, beans, berries and "
                    "leafy greens are easy additions."
                ),
                priority=Severity.MEDIUM,
            )
        )
    if totals.sodium > SODIUM_LIMIT_MG:
        recommendations.append(
            Recommendation(
                type=RecommendationType.DIET,
                title="Reduce Sodium Intake",
                description=(
                    f"Sodium reached {format_display(totals.sodium, 0)}mg, above the "
                    f"{SODIUM_LIMIT_MG}mg limit. Cut back on processed foods, sauces "
                    "and salty snacks."
                ),
                priority=(
                    Severity.HIGH
                    if totals.sodium > SODIUM_HIGH_MG
                    else Severity.MEDIUM
                ),
            )
        )
    return recommendations


def _condition_recommendations(condition: str) -> list[Recommendation]:
    recommendations = []
    if condition_matches(condition, *DIABETES_KEYWORDS):
        recommendations.append(
            Recommendation(
                type=RecommendationType.DIET,
                title="Blood Sugar Management",
                description=(
                    "Pair carbohydrates with protein or fiber and favour low "
                    "glycemic foods to help stabilize blood sugar."
                ),
                priority=Severity.HIGH,
            )
        )
    if condition_matches(condition, *HYPERTENSION_KEYWORDS):
        recommendations.append(
            Recommendation(
                type=RecommendationType.DIET,
                title="Blood Pressure Control",
                description=(
                    "Follow a DASH-style pattern: plenty of fruit, vegetables and "
                    "low-fat dairy, with potassium-rich foods and little added salt."
                ),
                priority=Severity.HIGH,
            )
        )
    if condition_matches(condition, *HEART_KEYWORDS):
        recommendations.append(
            Recommendation(
                type=RecommendationType.DIET,
                title="Heart-Healthy Nutrition",
                description=(
                    "Choose oily fish, nuts, olive oil and whole grains, and limit "
                    "saturated fat from red meat and full-fat dairy."
                ),
                priority=Severity.HIGH,
            )
        )
    return recommendations


def _seasonal_recommendation(today: date) -> Recommendation:
    if today.month <= LAST_WARM_MONTH:
        description = (
            "In spring and summer, favour cooling foods such as cucumber, "
            "watermelon, mung beans and green tea to clear heat and stay hydrated."
        )
    else:
        description = (
            "In fall and winter, include warming foods such as ginger, cinnamon, "
            "root vegetables and soups to support digestion."
        )
    return Recommendation(
        type=RecommendationType.TCM,
        title="Seasonal Balance",
        description=description,
        priority=Severity.LOW,
    )
