"""Supabase repository for the meal catalog."""

from dataclasses import dataclass

from supabase import Client

from honest_meals.domain.meals import MealRecord
from honest_meals.services.catalog import MealRepository

_COLUMNS = (
    "id, name, description, price, calories, protein, carbs, fat, "
    "food_type, is_available, category_id, image_url"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation over the ``meals`` table."""

    client: Client

    def list_available(self) -> list[MealRecord]:
        """Return available meals ordered by name."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("is_available", True)
            .order("name")
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_meal(self, meal_id: str) -> MealRecord | None:
        """Return a meal by id."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("id", meal_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_meal(self, payload: dict[str, object]) -> MealRecord:
        """Insert a meal row."""
        row = {
            "name": payload["name"],
            "description": payload.get("description"),
            "price": payload["price"],
            "calories": payload.get("calories", 0),
            "protein": payload.get("protein_g", 0),
            "carbs": payload.get("carbs_g", 0),
            "fat": payload.get("fat_g", 0),
            "food_type": payload.get("is_vegetarian"),
            "is_available": payload.get("is_available", True),
            "category_id": payload.get("category_id"),
            "image_url": payload.get("image_url"),
        }
        response = self.client.table("meals").insert(row).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal in Supabase")
        return _parse_row(response.data[0])

    def set_availability(self, meal_id: str, is_available: bool) -> None:
        """Update the availability flag."""
        self.client.table("meals").update({"is_available": is_available}).eq(
            "id", meal_id
        ).execute()


def _parse_row(row: dict[str, object]) -> MealRecord:
    food_type = row.get("food_type")
    return MealRecord(
        id=str(row["id"]),
        name=str(row.get("name") or ""),
        price=float(row.get("price") or 0.0),
        calories=int(row.get("calories") or 0),
        protein_g=float(row.get("protein") or 0.0),
        carbs_g=float(row.get("carbs") or 0.0),
        fat_g=float(row.get("fat") or 0.0),
        is_vegetarian=food_type if isinstance(food_type, bool) else None,
        is_available=bool(row.get("is_available", True)),
        description=row.get("description"),
        category_id=row.get("category_id"),
        image_url=row.get("image_url"),
    )
