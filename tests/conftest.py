"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

import pytest

from nutrition_insights.adapters.fdc_client import FdcClient
from nutrition_insights.adapters.supabase_food_entry_repository import parse_nutrition
from nutrition_insights.adapters.supabase_profile_repository import (
    parse_profile_row,
    profile_to_row,
)
from nutrition_insights.config import Settings
from nutrition_insights.containers import AppContainer
from nutrition_insights.domain.entries import (
    FoodEntry,
    MealType,
    NutritionData,
    ServingUnit,
)
from nutrition_insights.domain.insights import Insight
from nutrition_insights.domain.profiles import HealthProfile
from nutrition_insights.services.cache import InMemoryCache
from nutrition_insights.services.entries import FoodEntryRepository, FoodEntryService
from nutrition_insights.services.insights import InsightRepository, InsightService
from nutrition_insights.services.nutrition import NutritionService
from nutrition_insights.services.profiles import (
    HealthProfileRepository,
    HealthProfileService,
)


def make_profile(**overrides: object) -> HealthProfile:
    """Build a profile with sensible defaults."""
    values: dict[str, object] = {
        "id": uuid4(),
        "name": "Test User",
        "height_cm": 170,
        "weight_kg": 70,
        "birth_year": 1990,
        "birth_month": 5,
    }
    values.update(overrides)
    return HealthProfile(**values)


def make_entry(  # noqa: PLR0913
    food_name: str = "Apple",
    *,
    calories: float = 0,
    protein: float = 0,
    carbs: float = 0,
    fat: float = 0,
    fiber: float = 0,
    sugar: float = 0,
    sodium: float = 0,
    entry_date: date = date(2024, 3, 10),
    profile_id: UUID | None = None,
    meal_type: MealType = MealType.LUNCH,
) -> FoodEntry:
    """Build a food entry with the given nutrition."""
    return FoodEntry(
        id=uuid4(),
        profile_id=profile_id or uuid4(),
        food_name=food_name,
        serving_size=1,
        serving_unit=ServingUnit.PIECE,
        meal_type=meal_type,
        nutrition=NutritionData(
            calories=calories,
            protein=protein,
            carbs=carbs,
            fat=fat,
            fiber=fiber,
            sugar=sugar,
            sodium=sodium,
        ),
        entry_date=entry_date,
        created_at=datetime.now(tz=UTC),
    )


@dataclass
class InMemoryHealthProfileRepository(HealthProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[UUID, HealthProfile] = field(default_factory=dict)

    def get_profile(self, profile_id: UUID) -> HealthProfile | None:
        return self.profiles.get(profile_id)

    def create_profile(self, payload: dict[str, object]) -> HealthProfile:
        row = profile_to_row(payload)
        row["id"] = str(uuid4())
        profile = parse_profile_row(row)
        self.profiles[profile.id] = profile
        return profile

    def update_profile(
        self, profile_id: UUID, payload: dict[str, object]
    ) -> HealthProfile | None:
        current = self.profiles.get(profile_id)
        if current is None:
            return None
        row = profile_to_row(payload)
        merged = parse_profile_row(
            {**profile_to_row(_profile_payload(current)), **row, "id": str(profile_id)}
        )
        self.profiles[profile_id] = merged
        return merged


def _profile_payload(profile: HealthProfile) -> dict[str, object]:
    return {
        "name": profile.name,
        "height_cm": profile.height_cm,
        "weight_kg": profile.weight_kg,
        "birth_year": profile.birth_year,
        "birth_month": profile.birth_month,
        "medical_conditions": list(profile.medical_conditions),
        "allergies": list(profile.allergies),
        "medications": list(profile.medications),
        "smoking_status": profile.smoking_status,
        "smoking_frequency": profile.smoking_frequency,
    }


@dataclass
class InMemoryFoodEntryRepository(FoodEntryRepository):
    """In-memory food entry repository for tests."""

    entries: dict[UUID, FoodEntry] = field(default_factory=dict)
    queried_dates: list[date | None] = field(default_factory=list)

    def add(self, entry: FoodEntry) -> FoodEntry:
        self.entries[entry.id] = entry
        return entry

    def list_entries(
        self, profile_id: UUID, entry_date: date | None
    ) -> list[FoodEntry]:
        self.queried_dates.append(entry_date)
        return [
            entry
            for entry in self.entries.values()
            if entry.profile_id == profile_id
            and (entry_date is None or entry.entry_date == entry_date)
        ]

    def create_entry(self, payload: dict[str, object]) -> FoodEntry:
        entry = FoodEntry(
            id=uuid4(),
            profile_id=UUID(str(payload["profile_id"])),
            food_name=str(payload["food_name"]),
            serving_size=float(payload.get("serving_size", 1)),
            serving_unit=ServingUnit(payload.get("serving_unit", "piece")),
            meal_type=MealType(payload.get("meal_type", "snack")),
            nutrition=parse_nutrition(payload.get("nutrition")),
            entry_date=payload["entry_date"],
            created_at=datetime.now(tz=UTC),
        )
        return self.add(entry)

    def delete_entry(self, entry_id: UUID) -> bool:
        return self.entries.pop(entry_id, None) is not None


@dataclass
class InMemoryInsightRepository(InsightRepository):
    """In-memory insight cache for tests."""

    insights: dict[tuple[UUID, date], Insight] = field(default_factory=dict)
    saves: int = 0

    def save_insight(self, insight: Insight) -> None:
        self.saves += 1
        self.insights[(insight.profile_id, insight.date)] = replace(insight)


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with in-memory responses."""

    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "fdcId": 171688,
                    "description": "Apples, raw, with skin",
                    "brandOwner": None,
                    "dataType": "SR Legacy",
                }
            ]
        }
    )
    food_payload: dict[str, object] = field(
        default_factory=lambda: {
            "fdcId": 171688,
            "description": "Apples, raw, with skin",
            "dataType": "SR Legacy",
            "foodNutrients": [
                {"nutrient": {"name": "Energy", "unitName": "kcal"}, "amount": 52},
                {"nutrient": {"name": "Energy", "unitName": "kJ"}, "amount": 218},
                {"nutrient": {"name": "Protein", "unitName": "g"}, "amount": 0.26},
                {
                    "nutrient": {
                        "name": "Carbohydrate, by difference",
                        "unitName": "g",
                    },
                    "amount": 13.81,
                },
                {
                    "nutrient": {"name": "Total lipid (fat)", "unitName": "g"},
                    "amount": 0.17,
                },
                {
                    "nutrient": {"name": "Fiber, total dietary", "unitName": "g"},
                    "amount": 2.4,
                },
                {
                    "nutrient": {
                        "name": "Sugars, total including NLEA",
                        "unitName": "g",
                    },
                    "amount": 10.39,
                },
                {"nutrient": {"name": "Sodium, Na", "unitName": "mg"}, "amount": 1},
                {
                    "nutrient": {
                        "name": "Vitamin C, total ascorbic acid",
                        "unitName": "mg",
                    },
                    "amount": 4.6,
                },
                {"nutrient": {"name": "Potassium, K", "unitName": "mg"}, "amount": 107},
            ],
        }
    )
    fail: bool = False

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        if self.fail:
            raise RuntimeError("FDC unavailable")
        return self.search_payload

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        if self.fail:
            raise RuntimeError("FDC unavailable")
        return self.food_payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service.key",
        fdc_api_key="fdc-key",
    )


@pytest.fixture
def profile_repository() -> InMemoryHealthProfileRepository:
    return InMemoryHealthProfileRepository()


@pytest.fixture
def entry_repository() -> InMemoryFoodEntryRepository:
    return InMemoryFoodEntryRepository()


@pytest.fixture
def insight_repository() -> InMemoryInsightRepository:
    return InMemoryInsightRepository()


@pytest.fixture
def fdc_client() -> FakeFdcClient:
    return FakeFdcClient()


@pytest.fixture
def container(
    settings: Settings,
    profile_repository: InMemoryHealthProfileRepository,
    entry_repository: InMemoryFoodEntryRepository,
    insight_repository: InMemoryInsightRepository,
    fdc_client: FakeFdcClient,
) -> AppContainer:
    profile_service = HealthProfileService(profile_repository)
    entry_service = FoodEntryService(entry_repository)
    insight_service = InsightService(
        profile_service=profile_service,
        entry_service=entry_service,
        repository=insight_repository,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(),
        retry_attempts=0,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        profile_service=profile_service,
        entry_service=entry_service,
        insight_service=insight_service,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
