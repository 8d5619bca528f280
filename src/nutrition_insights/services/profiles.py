"""Health profile business logic."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from nutrition_insights.domain.profiles import HealthProfile


class HealthProfileRepository(Protocol):
    """Persistence interface for health profiles."""

    def get_profile(self, profile_id: UUID) -> HealthProfile | None:
        """Return a profile by id, if present."""

    def create_profile(self, payload: dict[str, object]) -> HealthProfile:
        """Create and return a profile."""

    def update_profile(
        self, profile_id: UUID, payload: dict[str, object]
    ) -> HealthProfile | None:
        """Apply a partial update and return the profile, if present."""


_LIST_FIELDS = ("medical_conditions", "allergies", "medications")


@dataclass
class HealthProfileService:
    """Application service for health profile lifecycle actions."""

    repository: HealthProfileRepository

    def get_profile(self, profile_id: UUID) -> HealthProfile | None:
        """Return a profile by id."""
        return self.repository.get_profile(profile_id)

    def create_profile(self, payload: dict[str, object]) -> HealthProfile:
        """Create a profile, defaulting list fields to empty lists."""
        normalized = dict(payload)
        for name in _LIST_FIELDS:
            if normalized.get(name) is None:
                normalized[name] = []
        return self.repository.create_profile(normalized)

    def update_profile(
        self, profile_id: UUID, payload: dict[str, object]
    ) -> HealthProfile | None:
        """Apply only the fields present in the payload."""
        current = self.repository.get_profile(profile_id)
        if current is None or not payload:
            return current
        return self.repository.update_profile(profile_id, payload)
