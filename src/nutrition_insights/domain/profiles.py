"""Domain models for health profiles."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class SmokingStatus(str, Enum):
    """Smoking history recorded on a profile."""

    NEVER = "never"
    FORMER = "former"
    CURRENT = "current"


@dataclass(frozen=True)
class Medication:
    """A medication the user takes."""

    name: str
    dosage: str | None = None


@dataclass(frozen=True)
class HealthProfile:
    """Demographic and medical attributes for a user."""

    id: UUID
    name: str
    height_cm: int
    weight_kg: int
    birth_year: int
    birth_month: int
    medical_conditions: list[str] = field(default_factory=list)
    allergies: list[str] = field(default_factory=list)
    medications: list[Medication] = field(default_factory=list)
    smoking_status: SmokingStatus = SmokingStatus.NEVER
    smoking_frequency: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


def has_condition(profile: HealthProfile, *keywords: str) -> bool:
    """Return True when any condition label contains one of the keywords."""
    return any(
        condition_matches(condition, *keywords)
        for condition in profile.medical_conditions
    )


def condition_matches(condition: str, *keywords: str) -> bool:
    """Case-insensitive substring match of a free-text condition label."""
    lowered = condition.lower()
    return any(keyword in lowered for keyword in keywords)
