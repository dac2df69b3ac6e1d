"""Favorite meals per user."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from honest_meals.domain.meals import FavoriteMeal, FavoriteRecord, MealOrderHistory
from honest_meals.services.catalog import MealCatalogService

_logger = logging.getLogger(__name__)


class FavoritesRepository(Protocol):
    """Persistence interface for favorites."""

    def list_favorites(self, user_id: UUID) -> list[FavoriteRecord]:
        """Return a user's favorites, newest first."""

    def add_favorites(
        self, user_id: UUID, meal_ids: Sequence[str], created_at: datetime
    ) -> None:
        """Insert favorites for the given meals."""

    def remove_favorite(self, user_id: UUID, meal_id: str) -> None:
        """Delete one favorite."""

    def meal_order_history(self, user_id: UUID, meal_id: str) -> MealOrderHistory:
        """Summarize the user's orders containing a meal."""


@dataclass
class FavoritesService:
    """Mark meals as favorites and list them with order history."""

    repository: FavoritesRepository
    catalog: MealCatalogService

    def list_meal_ids(self, user_id: UUID) -> list[str]:
        return [record.meal_id for record in self.repository.list_favorites(user_id)]

    def is_favorite(self, user_id: UUID, meal_id: str) -> bool:
        return meal_id in self.list_meal_ids(user_id)

    def add(self, user_id: UUID, meal_id: str) -> bool:
        """Favorite a catalog meal; returns False when it already was one."""
        if self.catalog.get_meal(meal_id) is None:
            raise ValueError(f"Unknown meal {meal_id}")
        if self.is_favorite(user_id, meal_id):
            return False
        self.repository.add_favorites(user_id, [meal_id], datetime.now(tz=UTC))
        return True

    def remove(self, user_id: UUID, meal_id: str) -> bool:
        """Unfavorite a meal; returns False when it was not a favorite."""
        if not self.is_favorite(user_id, meal_id):
            return False
        self.repository.remove_favorite(user_id, meal_id)
        return True

    def sync(self, user_id: UUID, meal_ids: Iterable[str]) -> list[str]:
        """Store favorites picked before sign-in; returns the ids added.

        Ids already stored and ids missing from the catalog are skipped.
        """
        existing = set(self.list_meal_ids(user_id))
        to_add: list[str] = []
        for meal_id in meal_ids:
            if meal_id in existing or meal_id in to_add:
                continue
            if self.catalog.get_meal(meal_id) is None:
                _logger.warning("Skipping unknown favorite meal %s", meal_id)
                continue
            to_add.append(meal_id)
        if to_add:
            self.repository.add_favorites(user_id, to_add, datetime.now(tz=UTC))
        return to_add

    def list_favorites(self, user_id: UUID) -> list[FavoriteMeal]:
        """Return favorites that are still in the catalog, newest first."""
        favorites = []
        for record in self.repository.list_favorites(user_id):
            meal = self.catalog.get_meal(record.meal_id)
            if meal is None:
                continue
            favorites.append(
                FavoriteMeal(
                    meal=meal,
                    favorited_at=record.created_at,
                    history=self.repository.meal_order_history(user_id, meal.id),
                )
            )
        return favorites
