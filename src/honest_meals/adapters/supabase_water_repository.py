"""Supabase repository for water intake."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from honest_meals.domain.journal import WaterIntakeRecord
from honest_meals.services.water import WaterIntakeRepository


@dataclass
class SupabaseWaterIntakeRepository(WaterIntakeRepository):
    """Supabase implementation over the ``water_intake`` table."""

    client: Client

    def get_day(self, user_id: UUID, day: date) -> WaterIntakeRecord | None:
        """Return the row for a user and day."""
        response = (
            self.client.table("water_intake")
            .select("id, user_id, date, amount, goal")
            .eq("user_id", str(user_id))
            .eq("date", day.isoformat())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def upsert_day(self, record: WaterIntakeRecord) -> WaterIntakeRecord:
        """Update the existing row or insert a new one."""
        values = {"amount": record.amount_ml, "goal": record.goal_ml}
        table = self.client.table("water_intake")
        if record.id is not None:
            response = table.update(values).eq("id", str(record.id)).execute()
        else:
            response = table.insert(
                {
                    "user_id": str(record.user_id),
                    "date": record.day.isoformat(),
                    **values,
                }
            ).execute()
        if not response.data:
            raise RuntimeError("Failed to save water intake in Supabase")
        return _parse_row(response.data[0])

    def list_recent(self, user_id: UUID, limit: int) -> list[WaterIntakeRecord]:
        """Return rows newest day first."""
        response = (
            self.client.table("water_intake")
            .select("id, user_id, date, amount, goal")
            .eq("user_id", str(user_id))
            .order("date", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> WaterIntakeRecord:
    return WaterIntakeRecord(
        id=UUID(str(row["id"])) if row.get("id") else None,
        user_id=UUID(str(row["user_id"])),
        day=date.fromisoformat(str(row["date"])),
        amount_ml=int(row.get("amount") or 0),
        goal_ml=int(row.get("goal") or 0),
    )
