"""Food journal service."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from honest_meals.domain.journal import DailyNutrition, FoodJournalEntry, MealType

_EDITABLE_FIELDS = {
    "meal_type",
    "food_name",
    "calories",
    "protein_g",
    "carbs_g",
    "fat_g",
    "serving_size",
    "notes",
}


class FoodJournalRepository(Protocol):
    """Persistence interface for journal entries."""

    def create_entry(
        self, user_id: UUID, day: date, payload: dict[str, object]
    ) -> FoodJournalEntry:
        """Create an entry and return it."""

    def get_entry(self, entry_id: UUID) -> FoodJournalEntry | None:
        """Return an entry by id."""

    def update_entry(
        self, entry_id: UUID, payload: dict[str, object]
    ) -> FoodJournalEntry:
        """Update an entry and return it."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""

    def list_entries(self, user_id: UUID, day: date) -> list[FoodJournalEntry]:
        """Return a user's entries for one day in creation order."""


@dataclass
class FoodJournalService:
    """Record what a user ate and total it per day."""

    repository: FoodJournalRepository

    def add_entry(
        self, user_id: UUID, day: date, payload: dict[str, object]
    ) -> FoodJournalEntry:
        """Validate and store a new entry."""
        cleaned = _clean_payload(payload)
        _validate(cleaned.get("food_name"), cleaned.get("calories"))
        cleaned.setdefault("meal_type", MealType.BREAKFAST)
        return self.repository.create_entry(user_id, day, cleaned)

    def update_entry(
        self, entry_id: UUID, payload: dict[str, object]
    ) -> FoodJournalEntry | None:
        """Apply a partial update; returns None when the entry is gone."""
        current = self.repository.get_entry(entry_id)
        if current is None:
            return None
        cleaned = _clean_payload(payload)
        _validate(
            cleaned.get("food_name", current.food_name),
            cleaned.get("calories", current.calories),
        )
        if not cleaned:
            return current
        return self.repository.update_entry(entry_id, cleaned)

    def delete_entry(self, entry_id: UUID) -> bool:
        """Delete an entry; returns False when it did not exist."""
        if self.repository.get_entry(entry_id) is None:
            return False
        self.repository.delete_entry(entry_id)
        return True

    def list_day(self, user_id: UUID, day: date) -> list[FoodJournalEntry]:
        return self.repository.list_entries(user_id, day)

    def group_by_meal_type(
        self, entries: list[FoodJournalEntry]
    ) -> dict[MealType, list[FoodJournalEntry]]:
        """Bucket entries by meal slot, every slot present."""
        grouped: dict[MealType, list[FoodJournalEntry]] = {
            meal_type: [] for meal_type in MealType
        }
        for entry in entries:
            grouped[entry.meal_type].append(entry)
        return grouped

    def daily_totals(self, user_id: UUID, day: date) -> DailyNutrition:
        """Sum a day's entries."""
        return summarize_day(day, self.repository.list_entries(user_id, day))


def summarize_day(day: date, entries: list[FoodJournalEntry]) -> DailyNutrition:
    return DailyNutrition(
        day=day,
        calories=sum(entry.calories for entry in entries),
        protein_g=sum(entry.protein_g for entry in entries),
        carbs_g=sum(entry.carbs_g for entry in entries),
        fat_g=sum(entry.fat_g for entry in entries),
    )


def _clean_payload(payload: dict[str, object]) -> dict[str, object]:
    cleaned = {key: value for key, value in payload.items() if key in _EDITABLE_FIELDS}
    if "meal_type" in cleaned:
        cleaned["meal_type"] = MealType(cleaned["meal_type"])
    if isinstance(cleaned.get("food_name"), str):
        cleaned["food_name"] = cleaned["food_name"].strip()
    return cleaned


def _validate(food_name: object, calories: object) -> None:
    if not food_name:
        raise ValueError("Food name is required")
    if not isinstance(calories, int | float) or calories <= 0:
        raise ValueError("Calories must be greater than zero")
