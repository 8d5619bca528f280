"""Conflict detection between a health profile and food intake.

Condition and allergy labels are free text and are matched as
case-insensitive substrings, so "Type 2 Diabetes" matches ``diabetes`` and
"heartburn" also matches ``heart``.
"""

from collections.abc import Sequence

from nutrition_insights.domain.entries import FoodEntry
from nutrition_insights.domain.insights import (
    DAILY_TOTAL,
    ConflictResult,
    ConflictType,
    NutrientTotals,
    Severity,
)
from nutrition_insights.domain.profiles import HealthProfile, condition_matches
from nutrition_insights.services.aggregation import aggregate_nutrients, entry_amount
from nutrition_insights.services.formatting import format_display

DAILY_SUGAR_LIMIT_G = 50
DAILY_SUGAR_HIGH_G = 80
DAILY_SODIUM_LIMIT_MG = 2300
DAILY_SODIUM_HIGH_MG = 3000
SATURATED_FAT_LIMIT_G = 20
SATURATED_FAT_SHARE = 0.3
ENTRY_SUGAR_LIMIT_G = 20
ENTRY_SODIUM_LIMIT_MG = 500

DIABETES_KEYWORDS = ("diabetes",)
HYPERTENSION_KEYWORDS = ("hypertension",)
HEART_KEYWORDS = ("heart", "cardiac")


def detect_conflicts(
    profile: HealthProfile, entries: Sequence[FoodEntry]
) -> list[ConflictResult]:
    """Return allergy and condition conflicts for the given entries."""
    conflicts = _allergy_conflicts(profile, entries)
    totals = aggregate_nutrients(entries)
    for condition in profile.medical_conditions:
        conflicts.extend(_daily_condition_conflicts(condition, totals))
    for condition in profile.medical_conditions:
        for entry in entries:
            conflicts.extend(_entry_condition_conflicts(condition, entry))
    return conflicts


def _allergy_conflicts(
    profile: HealthProfile, entries: Sequence[FoodEntry]
) -> list[ConflictResult]:
    conflicts = []
    for entry in entries:
        food_name = entry.food_name.lower()
        for allergy in profile.allergies:
            label = allergy.strip()
            if not label or label.lower() not in food_name:
                continue
            conflicts.append(
                ConflictResult(
                    type=ConflictType.ALLERGY,
                    severity=Severity.HIGH,
                    description=(
                        f"{entry.food_name} may contain {label}, "
                        "which you're allergic to"
                    ),
                    food_item=entry.food_name,
                )
            )
    return conflicts


def _daily_condition_conflicts(
    condition: str, totals: NutrientTotals
) -> list[ConflictResult]:
    conflicts = []
    if condition_matches(condition, *DIABETES_KEYWORDS) and (
        totals.sugar > DAILY_SUGAR_LIMIT_G
    ):
        severity = (
            Severity.HIGH if totals.sugar > DAILY_SUGAR_HIGH_G else Severity.MEDIUM
        )
        conflicts.append(
            ConflictResult(
                type=ConflictType.CONDITION,
                severity=severity,
                description=(
                    f"Daily sugar intake of {format_display(totals.sugar)}g exceeds "
                    f"the {DAILY_SUGAR_LIMIT_G}g guideline for diabetes management. "
                    f"{_sugar_explanation(totals, severity)}"
                ),
                food_item=DAILY_TOTAL,
            )
        )

    if condition_matches(condition, *HYPERTENSION_KEYWORDS) and (
        totals.sodium > DAILY_SODIUM_LIMIT_MG
    ):
        severity = (
            Severity.HIGH if totals.sodium > DAILY_SODIUM_HIGH_MG else Severity.MEDIUM
        )
        conflicts.append(
            ConflictResult(
                type=ConflictType.CONDITION,
                severity=severity,
                description=(
                    f"Daily sodium intake of {format_display(totals.sodium, 0)}mg "
                    f"exceeds the {DAILY_SODIUM_LIMIT_MG}mg limit for blood pressure "
                    f"control. {_sodium_explanation(totals, severity)}"
                ),
                food_item=DAILY_TOTAL,
            )
        )

    saturated_fat = totals.fat * SATURATED_FAT_SHARE
    if condition_matches(condition, *HEART_KEYWORDS) and (
        saturated_fat > SATURATED_FAT_LIMIT_G
    ):
        conflicts.append(
            ConflictResult(
                type=ConflictType.CONDITION,
                severity=Severity.MEDIUM,
                description=(
                    f"Estimated saturated fat of {format_display(saturated_fat)}g "
                    f"(from {format_display(totals.fat)}g total fat) exceeds the "
                    f"{SATURATED_FAT_LIMIT_G}g limit recommended for heart health. "
                    "Swap fried foods and fatty meats for fish, legumes and "
                    "olive oil."
                ),
                food_item=DAILY_TOTAL,
            )
        )
    return conflicts


def _entry_condition_conflicts(
    condition: str, entry: FoodEntry
) -> list[ConflictResult]:
    conflicts = []
    if condition_matches(condition, *DIABETES_KEYWORDS) and (
        entry_amount(entry, "sugar") > ENTRY_SUGAR_LIMIT_G
    ):
        conflicts.append(
            ConflictResult(
                type=ConflictType.CONDITION,
                severity=Severity.MEDIUM,
                description=(
                    f"High sugar content in {entry.food_name} may affect "
                    "blood sugar levels"
                ),
                food_item=entry.food_name,
            )
        )
    if condition_matches(condition, *HYPERTENSION_KEYWORDS) and (
        entry_amount(entry, "sodium") > ENTRY_SODIUM_LIMIT_MG
    ):
        conflicts.append(
            ConflictResult(
                type=ConflictType.CONDITION,
                severity=Severity.MEDIUM,
                description=(
                    f"High sodium content in {entry.food_name} may affect "
                    "blood pressure"
                ),
                food_item=entry.food_name,
            )
        )
    return conflicts


def _sugar_explanation(totals: NutrientTotals, severity: Severity) -> str:
    excess = format_display(totals.sugar - DAILY_SUGAR_LIMIT_G)
    if severity == Severity.HIGH:
        return (
            f"That is {excess}g over the guideline, enough to cause sustained "
            "blood glucose spikes. Replace sweetened drinks and desserts with "
            "whole fruit, and check your glucose after meals."
        )
    return (
        f"That is {excess}g over the guideline. Pair carbohydrates with protein "
        "or fiber to slow sugar absorption."
    )


def _sodium_explanation(totals: NutrientTotals, severity: Severity) -> str:
    excess = format_display(totals.sodium - DAILY_SODIUM_LIMIT_MG, 0)
    if severity == Severity.HIGH:
        return (
            f"That is {excess}mg over the limit. Processed and restaurant foods "
            "are the usual source; cook with herbs instead of salt."
        )
    return (
        f"That is {excess}mg over the limit. Choose low-sodium versions of "
        "packaged foods where you can."
    )
