"""Supabase repository for favorite meals."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from honest_meals.domain.meals import FavoriteRecord, MealOrderHistory
from honest_meals.domain.orders import OrderStatus
from honest_meals.services.favorites import FavoritesRepository


@dataclass
class SupabaseFavoritesRepository(FavoritesRepository):
    """Supabase implementation over ``favorites``, reading ``order_items`` for history."""

    client: Client

    def list_favorites(self, user_id: UUID) -> list[FavoriteRecord]:
        """Return favorites newest first."""
        response = (
            self.client.table("favorites")
            .select("user_id, meal_id, created_at")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [
            FavoriteRecord(
                user_id=UUID(str(row["user_id"])),
                meal_id=str(row["meal_id"]),
                created_at=_parse_datetime(row.get("created_at")),
            )
            for row in response.data or []
        ]

    def add_favorites(
        self, user_id: UUID, meal_ids: Sequence[str], created_at: datetime
    ) -> None:
        """Insert one row per meal."""
        if not meal_ids:
            return
        self.client.table("favorites").insert(
            [
                {
                    "user_id": str(user_id),
                    "meal_id": meal_id,
                    "created_at": created_at.isoformat(),
                }
                for meal_id in meal_ids
            ]
        ).execute()

    def remove_favorite(self, user_id: UUID, meal_id: str) -> None:
        """Delete a favorite row."""
        self.client.table("favorites").delete().eq("user_id", str(user_id)).eq(
            "meal_id", meal_id
        ).execute()

    def meal_order_history(self, user_id: UUID, meal_id: str) -> MealOrderHistory:
        """Count delivered orders of a meal and find the latest order of it."""
        response = (
            self.client.table("order_items")
            .select("id, orders!inner(created_at, status, customer_id)")
            .eq("meal_id", meal_id)
            .eq("orders.customer_id", str(user_id))
            .execute()
        )
        delivered = 0
        last_ordered_at: datetime | None = None
        for row in response.data or []:
            order = row.get("orders")
            # Embedded relations come back as an object or a one-item list.
            if isinstance(order, list):
                order = order[0] if order else None
            if not isinstance(order, dict):
                continue
            if order.get("status") == OrderStatus.DELIVERED:
                delivered += 1
            created_at = _parse_datetime(order.get("created_at"))
            if created_at and (last_ordered_at is None or created_at > last_ordered_at):
                last_ordered_at = created_at
        return MealOrderHistory(delivered_count=delivered, last_ordered_at=last_ordered_at)


def _parse_datetime(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
