"""Supabase repository for the food journal."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from honest_meals.domain.journal import FoodJournalEntry, MealType
from honest_meals.services.journal import FoodJournalRepository

_COLUMNS = (
    "id, user_id, date, meal_type, food_name, calories, protein, carbs, fat, "
    "serving_size, notes"
)
_COLUMN_NAMES = {"protein_g": "protein", "carbs_g": "carbs", "fat_g": "fat"}


@dataclass
class SupabaseFoodJournalRepository(FoodJournalRepository):
    """Supabase implementation over the ``food_journal`` table."""

    client: Client

    def create_entry(
        self, user_id: UUID, day: date, payload: dict[str, object]
    ) -> FoodJournalEntry:
        """Insert a journal entry."""
        row = {"user_id": str(user_id), "date": day.isoformat(), **_to_columns(payload)}
        response = self.client.table("food_journal").insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create journal entry in Supabase")
        return _parse_row(response.data[0])

    def get_entry(self, entry_id: UUID) -> FoodJournalEntry | None:
        """Return an entry by id."""
        response = (
            self.client.table("food_journal")
            .select(_COLUMNS)
            .eq("id", str(entry_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def update_entry(
        self, entry_id: UUID, payload: dict[str, object]
    ) -> FoodJournalEntry:
        """Update an entry and return the stored row."""
        response = (
            self.client.table("food_journal")
            .update(_to_columns(payload))
            .eq("id", str(entry_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update journal entry in Supabase")
        return _parse_row(response.data[0])

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""
        self.client.table("food_journal").delete().eq("id", str(entry_id)).execute()

    def list_entries(self, user_id: UUID, day: date) -> list[FoodJournalEntry]:
        """Return a day's entries in creation order."""
        response = (
            self.client.table("food_journal")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .order("created_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _to_columns(payload: dict[str, object]) -> dict[str, object]:
    row: dict[str, object] = {}
    for key, value in payload.items():
        column = _COLUMN_NAMES.get(key, key)
        row[column] = str(value) if isinstance(value, MealType) else value
    return row


def _parse_row(row: dict[str, object]) -> FoodJournalEntry:
    try:
        meal_type = MealType(row.get("meal_type"))
    except ValueError:
        meal_type = MealType.SNACK
    return FoodJournalEntry(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["date"])),
        meal_type=meal_type,
        food_name=str(row.get("food_name") or ""),
        calories=float(row.get("calories") or 0.0),
        protein_g=float(row.get("protein") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
        fat_g=float(row.get("fat") or 0.0),
        serving_size=row.get("serving_size"),
        notes=row.get("notes"),
    )
