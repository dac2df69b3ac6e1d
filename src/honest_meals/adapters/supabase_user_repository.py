"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from honest_meals.domain.users import Role, UserRecord
from honest_meals.services.users import UserRepository

_COLUMNS = "id, email, full_name, role, phone_number, address"


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation over the ``profiles`` table."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a profile by id."""
        response = (
            self.client.table("profiles")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_users(self) -> list[UserRecord]:
        """Return all profiles ordered by name."""
        response = (
            self.client.table("profiles").select(_COLUMNS).order("full_name").execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def set_role(self, user_id: UUID, role: Role) -> None:
        """Update a profile's role."""
        self.client.table("profiles").update(
            {"role": str(role), "updated_at": datetime.now(tz=UTC).isoformat()}
        ).eq("id", str(user_id)).execute()

    def upsert_contact(
        self, user_id: UUID, full_name: str, phone_number: str, address: str
    ) -> None:
        """Store checkout contact details on the profile."""
        self.client.table("profiles").upsert(
            {
                "id": str(user_id),
                "full_name": full_name,
                "phone_number": phone_number,
                "address": address,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()


def _parse_row(row: dict[str, object]) -> UserRecord:
    return UserRecord(
        id=UUID(str(row["id"])),
        email=row.get("email"),
        full_name=row.get("full_name"),
        role=Role.parse(row.get("role")),
        phone_number=row.get("phone_number"),
        address=row.get("address"),
    )
