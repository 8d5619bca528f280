"""Pydantic models for API request payloads."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, Field

from nutrition_insights.domain.entries import MealType, ServingUnit
from nutrition_insights.domain.profiles import SmokingStatus


class MedicationPayload(BaseModel):
    """Medication payload."""

    name: str
    dosage: str | None = None


class HealthProfileCreate(BaseModel):
    """Payload for creating a health profile."""

    name: str = Field(min_length=1)
    height_cm: int = Field(gt=0)
    weight_kg: int = Field(gt=0)
    birth_year: int
    birth_month: int = Field(ge=1, le=12)
    medical_conditions: list[str] = Field(default_factory=list)
    allergies: list[str] = Field(default_factory=list)
    medications: list[MedicationPayload] = Field(default_factory=list)
    smoking_status: SmokingStatus = SmokingStatus.NEVER
    smoking_frequency: str | None = None


class HealthProfileUpdate(BaseModel):
    """Partial update for a health profile."""

    name: str | None = Field(default=None, min_length=1)
    height_cm: int | None = Field(default=None, gt=0)
    weight_kg: int | None = Field(default=None, gt=0)
    birth_year: int | None = None
    birth_month: int | None = Field(default=None, ge=1, le=12)
    medical_conditions: list[str] | None = None
    allergies: list[str] | None = None
    medications: list[MedicationPayload] | None = None
    smoking_status: SmokingStatus | None = None
    smoking_frequency: str | None = None


class NutritionPayload(BaseModel):
    """Nutrition snapshot scaled to the logged serving."""

    calories: float = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    fiber: float = Field(default=0, ge=0)
    sugar: float = Field(default=0, ge=0)
    sodium: float = Field(default=0, ge=0)
    vitamins: dict[str, float] | None = None
    minerals: dict[str, float] | None = None


class FoodEntryCreate(BaseModel):
    """Payload for logging a food entry."""

    profile_id: UUID
    food_name: str = Field(min_length=1)
    serving_size: float = Field(gt=0)
    serving_unit: ServingUnit
    meal_type: MealType
    nutrition: NutritionPayload
    entry_date: date
