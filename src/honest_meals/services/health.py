"""Health profile service backed by an append-only metrics history."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from honest_meals.domain.health import (
    BiometricInput,
    FoodPreference,
    HealthProfile,
    MetricsSnapshot,
    WeightRecord,
)
from honest_meals.services.metrics import (
    calculate_snapshot,
    classify_bmi,
    compute_bmi,
)


class HealthMetricsRepository(Protocol):
    """Persistence interface for health metrics history."""

    def insert_profile(  # noqa: PLR0913
        self,
        user_id: UUID,
        biometrics: BiometricInput,
        food_preference: FoodPreference | None,
        snapshot: MetricsSnapshot,
        created_at: datetime,
    ) -> HealthProfile:
        """Append a metrics row and return it."""

    def get_latest(self, user_id: UUID) -> HealthProfile | None:
        """Return the most recent metrics row for a user."""

    def list_recent(self, user_id: UUID, limit: int) -> list[HealthProfile]:
        """Return metrics rows, newest first."""


@dataclass
class HealthService:
    """Application service for health calculations and their history."""

    repository: HealthMetricsRepository

    def calculate(self, biometrics: BiometricInput) -> MetricsSnapshot:
        """Compute metrics without saving them."""
        return calculate_snapshot(biometrics)

    def save_profile(
        self,
        user_id: UUID,
        biometrics: BiometricInput,
        food_preference: FoodPreference | None = None,
    ) -> HealthProfile:
        """Compute metrics and append them to the user's history."""
        snapshot = calculate_snapshot(biometrics)
        return self.repository.insert_profile(
            user_id=user_id,
            biometrics=biometrics,
            food_preference=food_preference,
            snapshot=snapshot,
            created_at=datetime.now(tz=UTC),
        )

    def get_latest_profile(self, user_id: UUID) -> HealthProfile | None:
        """Return the user's latest saved profile, if any."""
        return self.repository.get_latest(user_id)

    def get_history(self, user_id: UUID, limit: int = 10) -> list[HealthProfile]:
        """Return saved profiles, newest first."""
        return self.repository.list_recent(user_id, limit)

    def get_weight_history(self, user_id: UUID, limit: int = 10) -> list[WeightRecord]:
        """Return weight and BMI for each saved profile, newest first."""
        records = []
        for profile in self.repository.list_recent(user_id, limit):
            bmi = compute_bmi(profile.biometrics.weight_kg, profile.biometrics.height_cm)
            records.append(
                WeightRecord(
                    weight_kg=profile.biometrics.weight_kg,
                    height_cm=profile.biometrics.height_cm,
                    bmi=bmi,
                    bmi_category=classify_bmi(bmi),
                    recorded_at=profile.created_at,
                )
            )
        return records
