"""Supabase repository for food entries."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from nutrition_insights.domain.entries import (
    FoodEntry,
    MealType,
    NutritionData,
    ServingUnit,
    nutrition_to_payload,
)
from nutrition_insights.services.entries import FoodEntryRepository
from nutrition_insights.services.formatting import to_number

_COLUMNS = (
    "id, profile_id, food_name, serving_size, serving_unit, meal_type, "
    "nutrition_data, entry_date, created_at"
)


@dataclass
class SupabaseFoodEntryRepository(FoodEntryRepository):
    """Supabase implementation for food entry persistence."""

    client: Client

    def list_entries(
        self, profile_id: UUID, entry_date: date | None
    ) -> list[FoodEntry]:
        """Return entries for a profile, optionally for one day."""
        query = (
            self.client.table("food_entries")
            .select(_COLUMNS)
            .eq("profile_id", str(profile_id))
        )
        if entry_date is not None:
            query = query.eq("entry_date", entry_date.isoformat())
        response = query.order("created_at", desc=True).execute()
        return [parse_entry_row(row) for row in response.data or []]

    def create_entry(self, payload: dict[str, object]) -> FoodEntry:
        """Insert an entry row and return it."""
        response = (
            self.client.table("food_entries").insert(entry_to_row(payload)).execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food entry in Supabase")
        return parse_entry_row(response.data[0])

    def delete_entry(self, entry_id: UUID) -> bool:
        """Delete an entry row."""
        response = (
            self.client.table("food_entries")
            .delete()
            .eq("id", str(entry_id))
            .execute()
        )
        return bool(response.data)


def entry_to_row(payload: dict[str, object]) -> dict[str, object]:
    """Convert an entry payload to column values."""
    row = {
        "profile_id": str(payload["profile_id"]),
        "food_name": payload["food_name"],
        "serving_size": payload.get("serving_size", 1),
        "serving_unit": _enum_value(payload.get("serving_unit", "piece")),
        "meal_type": _enum_value(payload.get("meal_type", "snack")),
        "nutrition_data": nutrition_to_payload(
            parse_nutrition(payload.get("nutrition"))
        ),
    }
    entry_date = payload.get("entry_date")
    row["entry_date"] = (
        entry_date.isoformat() if isinstance(entry_date, date) else str(entry_date)
    )
    return row


def parse_entry_row(row: dict[str, object]) -> FoodEntry:
    """Build an entry from a database row."""
    created_raw = row.get("created_at")
    entry_date_raw = row.get("entry_date")
    return FoodEntry(
        id=UUID(str(row["id"])),
        profile_id=UUID(str(row["profile_id"])),
        food_name=str(row.get("food_name") or ""),
        serving_size=to_number(row.get("serving_size")),
        serving_unit=ServingUnit(row.get("serving_unit") or "piece"),
        meal_type=MealType(row.get("meal_type") or "snack"),
        nutrition=parse_nutrition(row.get("nutrition_data")),
        entry_date=(
            entry_date_raw
            if isinstance(entry_date_raw, date)
            else date.fromisoformat(str(entry_date_raw))
        ),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )


def parse_nutrition(raw: object) -> NutritionData:
    """Build nutrition data from a JSON object, defaulting missing numbers to 0."""
    if isinstance(raw, NutritionData):
        return raw
    data = raw if isinstance(raw, dict) else {}
    return NutritionData(
        calories=to_number(data.get("calories")),
        protein=to_number(data.get("protein")),
        carbs=to_number(data.get("carbs")),
        fat=to_number(data.get("fat")),
        fiber=to_number(data.get("fiber")),
        sugar=to_number(data.get("sugar")),
        sodium=to_number(data.get("sodium")),
        vitamins=_parse_amounts(data.get("vitamins")),
        minerals=_parse_amounts(data.get("minerals")),
    )


def _parse_amounts(raw: object) -> dict[str, float] | None:
    if not isinstance(raw, dict) or not raw:
        return None
    return {str(name): to_number(amount) for name, amount in raw.items()}


def _enum_value(value: object) -> object:
    return getattr(value, "value", value)
