"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from nutrition_insights.adapters.fdc_client import HttpxFdcClient
from nutrition_insights.adapters.supabase_food_entry_repository import (
    SupabaseFoodEntryRepository,
)
from nutrition_insights.adapters.supabase_insight_repository import (
    SupabaseInsightRepository,
)
from nutrition_insights.adapters.supabase_profile_repository import (
    SupabaseHealthProfileRepository,
)
from nutrition_insights.config import Settings
from nutrition_insights.services.cache import InMemoryCache
from nutrition_insights.services.entries import FoodEntryService
from nutrition_insights.services.insights import InsightService
from nutrition_insights.services.nutrition import NutritionService
from nutrition_insights.services.profiles import HealthProfileService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    profile_service: HealthProfileService
    entry_service: FoodEntryService
    insight_service: InsightService
    nutrition_service: NutritionService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    profile_service = HealthProfileService(
        SupabaseHealthProfileRepository(supabase_client)
    )
    entry_service = FoodEntryService(SupabaseFoodEntryRepository(supabase_client))
    insight_service = InsightService(
        profile_service=profile_service,
        entry_service=entry_service,
        repository=SupabaseInsightRepository(supabase_client),
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
        timeout=resolved_settings.fdc_timeout_seconds,
    )
    nutrition_service = NutritionService(
        fdc_client=fdc_client,
        cache=InMemoryCache(max_entries=resolved_settings.nutrition_cache_size),
        debug=resolved_settings.debug,
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        profile_service=profile_service,
        entry_service=entry_service,
        insight_service=insight_service,
        nutrition_service=nutrition_service,
        close_resources=close_resources,
    )
