"""Supabase-backed health profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from nutrition_insights.domain.profiles import HealthProfile, Medication, SmokingStatus
from nutrition_insights.services.profiles import HealthProfileRepository

_COLUMNS = (
    "id, name, height_cm, weight_kg, birth_year, birth_month, medical_conditions, "
    "allergies, medications, smoking_status, smoking_frequency, created_at, updated_at"
)


@dataclass
class SupabaseHealthProfileRepository(HealthProfileRepository):
    """Supabase implementation for health profile persistence."""

    client: Client

    def get_profile(self, profile_id: UUID) -> HealthProfile | None:
        """Return a profile by id, if present."""
        response = (
            self.client.table("health_profiles")
            .select(_COLUMNS)
            .eq("id", str(profile_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return parse_profile_row(response.data[0])
        return None

    def create_profile(self, payload: dict[str, object]) -> HealthProfile:
        """Insert a profile row and return it."""
        response = (
            self.client.table("health_profiles")
            .insert(profile_to_row(payload))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create health profile in Supabase")
        return parse_profile_row(response.data[0])

    def update_profile(
        self, profile_id: UUID, payload: dict[str, object]
    ) -> HealthProfile | None:
        """Update the provided columns and return the profile."""
        row = profile_to_row(payload)
        row["updated_at"] = datetime.now(tz=UTC).isoformat()
        response = (
            self.client.table("health_profiles")
            .update(row)
            .eq("id", str(profile_id))
            .execute()
        )
        if not response.data:
            return None
        return parse_profile_row(response.data[0])


def profile_to_row(payload: dict[str, object]) -> dict[str, object]:
    """Convert a profile payload to column values."""
    row = dict(payload)
    if "medications" in row:
        row["medications"] = [
            _medication_to_row(item) for item in row.get("medications") or []
        ]
    status = row.get("smoking_status")
    if isinstance(status, SmokingStatus):
        row["smoking_status"] = status.value
    return row


def parse_profile_row(row: dict[str, object]) -> HealthProfile:
    """Build a profile from a database row."""
    return HealthProfile(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        height_cm=int(row.get("height_cm") or 0),
        weight_kg=int(row.get("weight_kg") or 0),
        birth_year=int(row.get("birth_year") or 0),
        birth_month=int(row.get("birth_month") or 0),
        medical_conditions=[str(item) for item in row.get("medical_conditions") or []],
        allergies=[str(item) for item in row.get("allergies") or []],
        medications=[
            _parse_medication(item) for item in row.get("medications") or []
        ],
        smoking_status=SmokingStatus(row.get("smoking_status") or "never"),
        smoking_frequency=row.get("smoking_frequency"),
        created_at=_parse_timestamp(row.get("created_at")),
        updated_at=_parse_timestamp(row.get("updated_at")),
    )


def _medication_to_row(item: object) -> dict[str, object]:
    if isinstance(item, Medication):
        return {"name": item.name, "dosage": item.dosage}
    if isinstance(item, dict):
        return {"name": item.get("name", ""), "dosage": item.get("dosage")}
    return {"name": str(item), "dosage": None}


def _parse_medication(item: object) -> Medication:
    if isinstance(item, dict):
        return Medication(name=str(item.get("name", "")), dosage=item.get("dosage"))
    return Medication(name=str(item))


def _parse_timestamp(raw: object) -> datetime | None:
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None
