"""Food entry business logic."""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Protocol
from uuid import UUID

from nutrition_insights.domain.entries import FoodEntry

WEEK_DAYS = 7


class FoodEntryRepository(Protocol):
    """Persistence interface for food entries."""

    def list_entries(
        self, profile_id: UUID, entry_date: date | None
    ) -> list[FoodEntry]:
        """Return entries for a profile, optionally filtered to one day."""

    def create_entry(self, payload: dict[str, object]) -> FoodEntry:
        """Create and return an entry."""

    def delete_entry(self, entry_id: UUID) -> bool:
        """Delete an entry, returning False when it did not exist."""


@dataclass
class FoodEntryService:
    """Application service for logged food entries."""

    repository: FoodEntryRepository

    def list_entries(
        self, profile_id: UUID, entry_date: date | None = None
    ) -> list[FoodEntry]:
        """Return entries, newest first."""
        entries = self.repository.list_entries(profile_id, entry_date)
        return sorted(entries, key=_created_key, reverse=True)

    def list_week(self, profile_id: UUID, end_date: date) -> list[FoodEntry]:
        """Return entries for the seven days ending on ``end_date``."""
        entries: list[FoodEntry] = []
        for offset in range(WEEK_DAYS):
            day = end_date - timedelta(days=offset)
            entries.extend(self.repository.list_entries(profile_id, day))
        return entries

    def create_entry(self, payload: dict[str, object]) -> FoodEntry:
        """Persist a new entry."""
        return self.repository.create_entry(payload)

    def delete_entry(self, entry_id: UUID) -> bool:
        """Delete an entry by id."""
        return self.repository.delete_entry(entry_id)


def _created_key(entry: FoodEntry) -> tuple[date, str]:
    created = entry.created_at.isoformat() if entry.created_at else ""
    return entry.entry_date, created
