"""Domain models for the meal catalog."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class MealCategory(StrEnum):
    """Browsing filters applied to a ranked meal list."""

    ALL = "all"
    HIGH_PROTEIN = "high_protein"
    LOW_CALORIE = "low_calorie"
    HIGH_CALORIE = "high_calorie"
    VEGETARIAN = "vegetarian"
    NON_VEGETARIAN = "non_vegetarian"


@dataclass(frozen=True)
class MealRecord:
    """A meal offered in the catalog.

    ``is_vegetarian`` is None for meals whose dietary type was never set;
    those match neither dietary filter.
    """

    id: str
    name: str
    price: float
    calories: int
    protein_g: float
    carbs_g: float
    fat_g: float
    is_vegetarian: bool | None
    is_available: bool = True
    description: str | None = None
    category_id: str | None = None
    image_url: str | None = None


@dataclass(frozen=True)
class FavoriteRecord:
    """A meal a user marked as favorite."""

    user_id: UUID
    meal_id: str
    created_at: datetime | None = None


@dataclass(frozen=True)
class MealOrderHistory:
    """How often a customer received a meal and when they last ordered it."""

    delivered_count: int = 0
    last_ordered_at: datetime | None = None


@dataclass(frozen=True)
class FavoriteMeal:
    """A favorite joined with its catalog entry and the user's order history."""

    meal: MealRecord
    favorited_at: datetime | None
    history: MealOrderHistory
