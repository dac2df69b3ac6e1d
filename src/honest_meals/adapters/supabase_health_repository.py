"""Supabase repository for health metrics history."""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import TypeVar
from uuid import UUID

from supabase import Client

from honest_meals.domain.health import (
    ActivityLevel,
    BiometricInput,
    FoodPreference,
    Gender,
    Goal,
    HealthProfile,
    MetricsSnapshot,
)
from honest_meals.services.health import HealthMetricsRepository

_COLUMNS = (
    "id, user_id, gender, age, weight, height, activity_level, goal, "
    "food_preference, bmr, tdee, target_calories, created_at"
)

_E = TypeVar("_E", bound=StrEnum)


@dataclass
class SupabaseHealthRepository(HealthMetricsRepository):
    """Supabase implementation over the ``health_metrics`` table."""

    client: Client

    def insert_profile(  # noqa: PLR0913
        self,
        user_id: UUID,
        biometrics: BiometricInput,
        food_preference: FoodPreference | None,
        snapshot: MetricsSnapshot,
        created_at: datetime,
    ) -> HealthProfile:
        """Append a metrics row."""
        response = (
            self.client.table("health_metrics")
            .insert(
                {
                    "user_id": str(user_id),
                    "gender": str(biometrics.gender),
                    "age": biometrics.age,
                    "weight": biometrics.weight_kg,
                    "height": biometrics.height_cm,
                    "activity_level": str(biometrics.activity_level),
                    "goal": str(biometrics.goal),
                    "food_preference": str(food_preference)
                    if food_preference
                    else None,
                    "bmr": snapshot.bmr,
                    "tdee": snapshot.tdee,
                    "target_calories": snapshot.target_calories,
                    "created_at": created_at.isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save health metrics in Supabase")
        return _parse_row(response.data[0])

    def get_latest(self, user_id: UUID) -> HealthProfile | None:
        """Return the newest metrics row."""
        rows = self.list_recent(user_id, limit=1)
        return rows[0] if rows else None

    def list_recent(self, user_id: UUID, limit: int) -> list[HealthProfile]:
        """Return metrics rows, newest first."""
        response = (
            self.client.table("health_metrics")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_choice(enum_cls: type[_E], value: object, default: _E) -> _E | str:
    """Parse a stored choice; only a missing value takes the default.

    Unknown values are kept as raw strings so the calculator applies its own
    fallbacks to them.
    """
    if value is None or value == "":
        return default
    try:
        return enum_cls(value)
    except ValueError:
        return str(value)


def _parse_preference(value: object) -> FoodPreference | None:
    try:
        return FoodPreference(value) if value else None
    except ValueError:
        return None


def _parse_row(row: dict[str, object]) -> HealthProfile:
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else datetime.now(tz=UTC)
    )
    return HealthProfile(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        biometrics=BiometricInput(
            gender=_parse_choice(Gender, row.get("gender"), Gender.MALE),
            age=int(row.get("age") or 30),
            weight_kg=float(row.get("weight") or 70),
            height_cm=float(row.get("height") or 170),
            activity_level=_parse_choice(
                ActivityLevel, row.get("activity_level"), ActivityLevel.MODERATE
            ),
            goal=_parse_choice(Goal, row.get("goal"), Goal.MAINTAIN),
        ),
        food_preference=_parse_preference(row.get("food_preference")),
        bmr=int(row.get("bmr") or 0),
        tdee=int(row.get("tdee") or 0),
        target_calories=int(row.get("target_calories") or 0),
        created_at=created_at,
    )
