"""Insight generation for a profile and day."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from nutrition_insights.domain.entries import FoodEntry
from nutrition_insights.domain.insights import Insight
from nutrition_insights.domain.profiles import HealthProfile
from nutrition_insights.services.aggregation import aggregate_nutrients
from nutrition_insights.services.conflicts import detect_conflicts
from nutrition_insights.services.entries import FoodEntryService
from nutrition_insights.services.profiles import HealthProfileService
from nutrition_insights.services.recommendations import generate_recommendations
from nutrition_insights.services.scoring import calculate_health_score, determine_status
from nutrition_insights.services.weekly import summarize_week

_logger = logging.getLogger(__name__)


class InsightRepository(Protocol):
    """Persistence interface for cached insights."""

    def save_insight(self, insight: Insight) -> None:
        """Insert or replace the cached insight for its profile and day."""


def compute_insight(
    profile: HealthProfile,
    daily_entries: Sequence[FoodEntry],
    weekly_entries: Sequence[FoodEntry],
    day: date,
    today: date | None = None,
) -> Insight:
    """Compute the full insight for a day from explicit inputs."""
    conflicts = detect_conflicts(profile, daily_entries)
    recommendations = generate_recommendations(profile, daily_entries, today=today)
    health_score = calculate_health_score(profile, daily_entries, conflicts)
    status = determine_status(conflicts)
    weekly_summary = (
        summarize_week(profile, weekly_entries, end_date=day)
        if weekly_entries
        else None
    )
    return Insight(
        profile_id=profile.id,
        date=day,
        conflicts=conflicts,
        recommendations=recommendations,
        health_score=health_score,
        status=status,
        weekly_summary=weekly_summary,
        daily_totals=aggregate_nutrients(daily_entries),
    )


@dataclass
class InsightService:
    """Service that regenerates and caches insights on every request."""

    profile_service: HealthProfileService
    entry_service: FoodEntryService
    repository: InsightRepository

    def generate(
        self, profile_id: UUID, day: date, today: date | None = None
    ) -> Insight | None:
        """Recompute the insight for a day, or return None without a profile."""
        profile = self.profile_service.get_profile(profile_id)
        if profile is None:
            return None

        daily_entries = self.entry_service.list_entries(profile_id, day)
        weekly_entries = self.entry_service.list_week(profile_id, day)
        insight = compute_insight(
            profile, daily_entries, weekly_entries, day, today=today
        )
        self.repository.save_insight(insight)
        _logger.info(
            "Generated insight: profile_id=%s date=%s status=%s score=%s",
            profile_id,
            day.isoformat(),
            insight.status.value,
            insight.health_score,
        )
        return insight
