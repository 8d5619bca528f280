"""Supabase repository for cached insights."""

from dataclasses import asdict, dataclass
from datetime import date
from enum import Enum
from uuid import UUID

from supabase import Client

from nutrition_insights.domain.insights import Insight
from nutrition_insights.services.insights import InsightRepository


@dataclass
class SupabaseInsightRepository(InsightRepository):
    """Supabase implementation for insight caching."""

    client: Client

    def save_insight(self, insight: Insight) -> None:
        """Upsert the insight row for its profile and day."""
        self.client.table("insights").upsert(
            insight_to_row(insight), on_conflict="profile_id,date"
        ).execute()


def insight_to_row(insight: Insight) -> dict[str, object]:
    """Convert an insight to JSON-compatible column values."""
    return _jsonable(asdict(insight))


def _jsonable(value: object) -> object:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, dict):
        return {key: _jsonable(item) for key, item in value.items()}
    if isinstance(value, list):
        return [_jsonable(item) for item in value]
    return value
