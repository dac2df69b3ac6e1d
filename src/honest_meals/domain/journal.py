"""Domain models for the food journal and water tracking."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum
from uuid import UUID


class MealType(StrEnum):
    """Slot of the day a journal entry belongs to."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class FoodJournalEntry:
    """A single food eaten by a user on a day."""

    id: UUID
    user_id: UUID
    day: date
    meal_type: MealType
    food_name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    serving_size: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class DailyNutrition:
    """Summed journal intake for one day."""

    day: date
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class WaterIntakeRecord:
    """Water drunk on a day against a goal, in millilitres."""

    user_id: UUID
    day: date
    amount_ml: int
    goal_ml: int
    id: UUID | None = None
