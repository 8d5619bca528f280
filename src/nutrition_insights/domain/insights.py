"""Domain models for computed insights."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from uuid import UUID

DAILY_TOTAL = "Daily total"


class ConflictType(str, Enum):
    """Kind of conflict between the profile and what was eaten."""

    ALLERGY = "allergy"
    CONDITION = "condition"
    MEDICATION = "medication"
    FOOD_INTERACTION = "food_interaction"


class Severity(str, Enum):
    """Severity of a conflict, also used as recommendation priority."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecommendationType(str, Enum):
    """Category of a recommendation."""

    DIET = "diet"
    TCM = "tcm"
    LIFESTYLE = "lifestyle"


class InsightStatus(str, Enum):
    """Coarse status label for a day."""

    SAFE = "safe"
    CAUTION = "caution"
    AVOID = "avoid"


@dataclass(frozen=True)
class NutrientTotals:
    """Aggregated nutrition totals."""

    calories: float = 0
    protein: float = 0
    carbs: float = 0
    fat: float = 0
    fiber: float = 0
    sugar: float = 0
    sodium: float = 0


@dataclass(frozen=True)
class ConflictResult:
    """A conflict found between the profile and food intake."""

    type: ConflictType
    severity: Severity
    description: str
    food_item: str


@dataclass(frozen=True)
class Recommendation:
    """A prioritized suggestion for the user."""

    type: RecommendationType
    title: str
    description: str
    priority: Severity


@dataclass(frozen=True)
class WeeklySummary:
    """Averages and narrative for a trailing seven-day window."""

    period: str
    calories: int
    protein: float
    carbs: float
    fat: float
    fiber: float
    variety: int
    days_tracked: int
    unique_foods: int
    insights: list[str] = field(default_factory=list)
    ai_analysis: str = ""


@dataclass(frozen=True)
class Insight:
    """Everything computed for a profile on a given day."""

    profile_id: UUID
    date: date
    conflicts: list[ConflictResult]
    recommendations: list[Recommendation]
    health_score: float
    status: InsightStatus
    weekly_summary: WeeklySummary | None = None
    daily_totals: NutrientTotals | None = None
