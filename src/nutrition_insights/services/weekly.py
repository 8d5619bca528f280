"""Weekly nutrition summary over a trailing seven-day window."""

from collections.abc import Sequence
from datetime import date

from nutrition_insights.domain.entries import FoodEntry
from nutrition_insights.domain.insights import WeeklySummary
from nutrition_insights.domain.profiles import HealthProfile
from nutrition_insights.services.aggregation import aggregate_nutrients
from nutrition_insights.services.formatting import format_display, format_number
from nutrition_insights.services.scoring import count_distinct_foods

MAX_VARIETY = 10
CALORIES_LOW = 1200
CALORIES_HIGH = 2500
PROTEIN_TARGET_G = 50
FIBER_TARGET_G = 25
VARIETY_TARGET = 5

BALANCED_MESSAGE = (
    "Your weekly nutrition looks well balanced. Keep up the consistent tracking!"
)


def summarize_week(
    profile: HealthProfile,
    week_entries: Sequence[FoodEntry],
    end_date: date | None = None,
) -> WeeklySummary:
    """Summarize averages, variety and narrative for a week of entries."""
    totals = aggregate_nutrients(week_entries)
    days_tracked = len({entry.entry_date for entry in week_entries})
    divisor = max(days_tracked, 1)
    unique_foods = count_distinct_foods(week_entries)
    variety = min(MAX_VARIETY, unique_foods)

    calories = int(format_number(totals.calories / divisor, 0))
    protein = format_number(totals.protein / divisor)
    carbs = format_number(totals.carbs / divisor)
    fat = format_number(totals.fat / divisor)
    fiber = format_number(totals.fiber / divisor)

    return WeeklySummary(
        period=_period_label(end_date),
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        fiber=fiber,
        variety=variety,
        days_tracked=days_tracked,
        unique_foods=unique_foods,
        insights=_weekly_insights(calories, protein, fiber, variety),
        ai_analysis=_weekly_analysis(
            profile, calories, protein, carbs, fat, variety, days_tracked
        ),
    )


def _period_label(end_date: date | None) -> str:
    if end_date is None:
        return "Last 7 days"
    return f"Week ending {end_date.isoformat()}"


def _weekly_insights(
    calories: int, protein: float, fiber: float, variety: int
) -> list[str]:
    insights = []
    if calories < CALORIES_LOW:
        insights.append(
            f"Your average intake of {calories} kcal per day is below "
            f"{CALORIES_LOW} kcal. Add nutrient-dense snacks to meet your "
            "energy needs."
        )
    elif calories > CALORIES_HIGH:
        insights.append(
            f"Your average intake of {calories} kcal per day is above "
            f"{CALORIES_HIGH} kcal. Watch portion sizes and energy-dense extras."
        )
    if protein < PROTEIN_TARGET_G:
        insights.append(
            f"Protein averaged {format_display(protein)}g per day. Aim for at least "
            f"{PROTEIN_TARGET_G}g with lean meat, fish, dairy or legumes."
        )
    if fiber < FIBER_TARGET_G:
        insights.append(
            f"Fiber averaged {format_display(fiber)}g per day, short of the "
            f"{FIBER_TARGET_G}g goal. More vegetables and whole grains will help."
        )
    if variety < VARIETY_TARGET:
        insights.append(
            f"You ate {variety} different foods this week. Try new vegetables, "
            "grains and proteins for a wider range of nutrients."
        )
    if not insights:
        insights.append(BALANCED_MESSAGE)
    return insights


def _weekly_analysis(  # noqa: PLR0913
    profile: HealthProfile,
    calories: int,
    protein: float,
    carbs: float,
    fat: float,
    variety: int,
    days_tracked: int,
) -> str:
    if days_tracked == 0:
        return (
            "No meals were logged in the last seven days. Log your meals to get "
            "a weekly analysis."
        )

    macro_energy = protein * 4 + carbs * 4 + fat * 9
    if macro_energy > 0:
        split = (
            f"Protein supplies {format_display(protein * 4 / macro_energy * 100, 0)}%, "
            f"carbohydrates {format_display(carbs * 4 / macro_energy * 100, 0)}% "
            f"and fat {format_display(fat * 9 / macro_energy * 100, 0)}% of "
            "your macronutrient energy."
        )
    else:
        split = "No macronutrient data was recorded."

    day_word = "day" if days_tracked == 1 else "days"
    parts = [
        f"Over {days_tracked} tracked {day_word} you averaged {calories} kcal, "
        f"{format_display(protein)}g protein, {format_display(carbs)}g carbs and "
        f"{format_display(fat)}g fat per day.",
        split,
        f"Food variety scored {variety}/{MAX_VARIETY}.",
    ]
    if profile.medical_conditions:
        conditions = ", ".join(profile.medical_conditions)
        parts.append(
            f"Keep your conditions ({conditions}) in mind when planning next "
            "week's meals."
        )
    return " ".join(parts)
