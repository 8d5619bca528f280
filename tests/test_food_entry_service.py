"""Tests for food entry service."""

from dataclasses import replace
from datetime import UTC, date, datetime, timedelta
from uuid import uuid4

from nutrition_insights.domain.entries import MealType, ServingUnit
from nutrition_insights.services.entries import FoodEntryService
from tests.conftest import make_entry


def test_list_entries_newest_first(entry_repository) -> None:
    profile_id = uuid4()
    base = datetime(2024, 3, 10, 8, tzinfo=UTC)
    breakfast = replace(make_entry("Oats", profile_id=profile_id), created_at=base)
    dinner = replace(
        make_entry("Pasta", profile_id=profile_id),
        created_at=base + timedelta(hours=11),
    )
    yesterday = replace(
        make_entry("Soup", profile_id=profile_id, entry_date=date(2024, 3, 9)),
        created_at=base + timedelta(hours=20),
    )
    for entry in (breakfast, yesterday, dinner):
        entry_repository.add(entry)
    service = FoodEntryService(entry_repository)

    all_entries = service.list_entries(profile_id)
    today = service.list_entries(profile_id, date(2024, 3, 10))

    assert [e.food_name for e in all_entries] == ["Pasta", "Oats", "Soup"]
    assert [e.food_name for e in today] == ["Pasta", "Oats"]


def test_create_entry_from_payload(entry_repository) -> None:
    service = FoodEntryService(entry_repository)
    profile_id = uuid4()

    entry = service.create_entry(
        {
            "profile_id": profile_id,
            "food_name": "Greek yogurt",
            "serving_size": 1.5,
            "serving_unit": ServingUnit.CUP,
            "meal_type": MealType.BREAKFAST,
            "nutrition": {"calories": 220, "protein": 20, "carbs": 9, "fat": 11},
            "entry_date": date(2024, 3, 10),
        }
    )

    assert entry.profile_id == profile_id
    assert entry.nutrition.calories == 220
    assert entry.nutrition.sugar == 0
    assert service.list_entries(profile_id) == [entry]


def test_list_week_walks_each_day(entry_repository) -> None:
    profile_id = uuid4()
    end = date(2024, 3, 10)
    for offset in range(9):
        entry_repository.add(
            make_entry(
                f"Day {offset}",
                profile_id=profile_id,
                entry_date=end - timedelta(days=offset),
            )
        )
    service = FoodEntryService(entry_repository)

    week = service.list_week(profile_id, end)

    assert len(week) == 7
    assert min(entry.entry_date for entry in week) == date(2024, 3, 4)


def test_delete_entry(entry_repository) -> None:
    entry = entry_repository.add(make_entry("Chips"))
    service = FoodEntryService(entry_repository)

    assert service.delete_entry(entry.id) is True
    assert service.delete_entry(entry.id) is False
