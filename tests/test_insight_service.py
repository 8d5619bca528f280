"""Tests for insight generation."""

from datetime import date, timedelta
from uuid import uuid4

from nutrition_insights.domain.insights import InsightStatus, NutrientTotals
from nutrition_insights.services.entries import FoodEntryService
from nutrition_insights.services.insights import InsightService, compute_insight
from nutrition_insights.services.profiles import HealthProfileService
from tests.conftest import make_entry, make_profile

DAY = date(2024, 3, 10)


def _service(profile_repository, entry_repository, insight_repository):
    return InsightService(
        profile_service=HealthProfileService(profile_repository),
        entry_service=FoodEntryService(entry_repository),
        repository=insight_repository,
    )


def test_compute_insight_for_empty_day() -> None:
    profile = make_profile()

    insight = compute_insight(profile, [], [], DAY, today=DAY)

    assert insight.health_score == 6.0
    assert insight.status == InsightStatus.SAFE
    assert insight.conflicts == []
    assert insight.weekly_summary is None
    assert insight.daily_totals == NutrientTotals()


def test_generate_returns_none_without_profile(
    profile_repository, entry_repository, insight_repository
) -> None:
    service = _service(profile_repository, entry_repository, insight_repository)

    assert service.generate(uuid4(), DAY) is None
    assert insight_repository.saves == 0


def test_generate_is_deterministic_and_cached(
    profile_repository, entry_repository, insight_repository
) -> None:
    profile = make_profile(allergies=["peanut"])
    profile_repository.profiles[profile.id] = profile
    entry_repository.add(
        make_entry("Peanut bar", calories=250, profile_id=profile.id, entry_date=DAY)
    )
    service = _service(profile_repository, entry_repository, insight_repository)

    first = service.generate(profile.id, DAY, today=DAY)
    second = service.generate(profile.id, DAY, today=DAY)

    assert first == second
    assert first is not None
    assert first.status == InsightStatus.AVOID
    assert insight_repository.saves == 2
    assert insight_repository.insights[(profile.id, DAY)] == second


def test_generate_recomputes_after_new_entries(
    profile_repository, entry_repository, insight_repository
) -> None:
    profile = make_profile()
    profile_repository.profiles[profile.id] = profile
    entry_repository.add(
        make_entry("Toast", calories=150, profile_id=profile.id, entry_date=DAY)
    )
    service = _service(profile_repository, entry_repository, insight_repository)

    service.generate(profile.id, DAY, today=DAY)
    entry_repository.add(
        make_entry("Eggs", calories=200, profile_id=profile.id, entry_date=DAY)
    )
    service.generate(profile.id, DAY, today=DAY)

    cached = insight_repository.insights[(profile.id, DAY)]
    assert cached.daily_totals is not None
    assert cached.daily_totals.calories == 350


def test_weekly_window_covers_seven_days(
    profile_repository, entry_repository, insight_repository
) -> None:
    profile = make_profile()
    profile_repository.profiles[profile.id] = profile
    for offset in (0, 6, 7):
        entry_repository.add(
            make_entry(
                f"Meal {offset}",
                calories=500,
                profile_id=profile.id,
                entry_date=DAY - timedelta(days=offset),
            )
        )
    service = _service(profile_repository, entry_repository, insight_repository)

    insight = service.generate(profile.id, DAY, today=DAY)

    assert insight is not None
    assert insight.weekly_summary is not None
    assert insight.weekly_summary.days_tracked == 2
    assert insight.weekly_summary.period == "Week ending 2024-03-10"
    assert insight.daily_totals is not None
    assert insight.daily_totals.calories == 500
    week_days = {DAY - timedelta(days=offset) for offset in range(7)}
    assert week_days <= set(entry_repository.queried_dates)
    assert DAY - timedelta(days=7) not in entry_repository.queried_dates


def test_entries_of_other_profiles_are_ignored(
    profile_repository, entry_repository, insight_repository
) -> None:
    profile = make_profile()
    profile_repository.profiles[profile.id] = profile
    entry_repository.add(make_entry("Cake", calories=900, entry_date=DAY))
    service = _service(profile_repository, entry_repository, insight_repository)

    insight = service.generate(profile.id, DAY, today=DAY)

    assert insight is not None
    assert insight.daily_totals == NutrientTotals()
    assert insight.weekly_summary is None
