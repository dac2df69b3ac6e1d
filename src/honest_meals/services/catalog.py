"""Meal catalog service."""

import logging
from dataclasses import dataclass
from typing import Protocol

from honest_meals.domain.meals import MealRecord

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for catalog meals."""

    def list_available(self) -> list[MealRecord]:
        """Return available meals ordered by name."""

    def get_meal(self, meal_id: str) -> MealRecord | None:
        """Return a meal by id, if present."""

    def create_meal(self, payload: dict[str, object]) -> MealRecord:
        """Create a meal and return it."""

    def set_availability(self, meal_id: str, is_available: bool) -> None:
        """Show or hide a meal in the catalog."""


@dataclass
class MealCatalogService:
    """Read and manage the meal catalog."""

    repository: MealRepository

    def list_available(self) -> list[MealRecord]:
        """Return meals currently on the menu."""
        return self.repository.list_available()

    def get_meal(self, meal_id: str) -> MealRecord | None:
        """Return a meal by id."""
        return self.repository.get_meal(meal_id)

    def create_meal(self, payload: dict[str, object]) -> MealRecord:
        """Add a meal after checking the required fields."""
        name = str(payload.get("name") or "").strip()
        if not name:
            raise ValueError("Meal name is required")
        price = payload.get("price")
        if not isinstance(price, int | float) or price < 0:
            raise ValueError("Meal price must be a non-negative number")
        meal = self.repository.create_meal({**payload, "name": name})
        _logger.info("Created meal %s (%s)", meal.id, meal.name)
        return meal

    def set_availability(self, meal_id: str, is_available: bool) -> None:
        """Toggle whether a meal is offered."""
        self.repository.set_availability(meal_id, is_available)
