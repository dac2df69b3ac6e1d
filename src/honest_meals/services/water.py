"""Daily water intake tracking."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from honest_meals.domain.journal import WaterIntakeRecord
from honest_meals.services.health import HealthService

DEFAULT_GOAL_ML = 2000
ML_PER_KG = 30


class WaterIntakeRepository(Protocol):
    """Persistence interface for water intake."""

    def get_day(self, user_id: UUID, day: date) -> WaterIntakeRecord | None:
        """Return the record for a day, if one was saved."""

    def upsert_day(self, record: WaterIntakeRecord) -> WaterIntakeRecord:
        """Insert or replace the record for the record's day."""

    def list_recent(self, user_id: UUID, limit: int) -> list[WaterIntakeRecord]:
        """Return records, newest day first."""


def recommended_goal_ml(weight_kg: float | None) -> int:
    """30 ml per kg of body weight, or 2 L when weight is unknown."""
    if not weight_kg or weight_kg <= 0:
        return DEFAULT_GOAL_ML
    return int(weight_kg * ML_PER_KG + 0.5)


def progress_percent(record: WaterIntakeRecord) -> float:
    """Share of the goal reached, capped at 100."""
    if record.goal_ml <= 0:
        return 100.0
    return min(record.amount_ml / record.goal_ml * 100, 100.0)


@dataclass
class WaterIntakeService:
    """Track water against a weight-based daily goal."""

    repository: WaterIntakeRepository
    health: HealthService

    def recommended_goal(self, user_id: UUID) -> int:
        profile = self.health.get_latest_profile(user_id)
        return recommended_goal_ml(profile.biometrics.weight_kg if profile else None)

    def get_day(self, user_id: UUID, day: date) -> WaterIntakeRecord:
        """Return the saved day or an empty one with the recommended goal."""
        record = self.repository.get_day(user_id, day)
        if record is not None:
            return record
        return WaterIntakeRecord(
            user_id=user_id,
            day=day,
            amount_ml=0,
            goal_ml=self.recommended_goal(user_id),
        )

    def add(self, user_id: UUID, day: date, amount_ml: int) -> WaterIntakeRecord:
        """Add (or with a negative amount remove) water; never below zero."""
        current = self.get_day(user_id, day)
        return self.repository.upsert_day(
            WaterIntakeRecord(
                id=current.id,
                user_id=user_id,
                day=day,
                amount_ml=max(current.amount_ml + amount_ml, 0),
                goal_ml=current.goal_ml,
            )
        )

    def set_goal(self, user_id: UUID, day: date, goal_ml: int) -> WaterIntakeRecord:
        """Override the goal for a day."""
        if goal_ml <= 0:
            raise ValueError("Water goal must be positive")
        current = self.get_day(user_id, day)
        return self.repository.upsert_day(
            WaterIntakeRecord(
                id=current.id,
                user_id=user_id,
                day=day,
                amount_ml=current.amount_ml,
                goal_ml=goal_ml,
            )
        )

    def get_history(self, user_id: UUID, limit: int = 7) -> list[WaterIntakeRecord]:
        return self.repository.list_recent(user_id, limit)
