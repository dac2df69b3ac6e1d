"""Domain models for health metrics."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Gender(StrEnum):
    """Biological sex used by the BMR equation."""

    MALE = "male"
    FEMALE = "female"


class ActivityLevel(StrEnum):
    """Self-reported activity level."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class Goal(StrEnum):
    """Body weight goal."""

    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class BmiCategory(StrEnum):
    """WHO BMI bucket."""

    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"


class FoodPreference(StrEnum):
    """Dietary preference shared by users and meals."""

    VEGETARIAN = "vegetarian"
    NON_VEGETARIAN = "non_vegetarian"


@dataclass(frozen=True)
class BiometricInput:
    """Biometric form data.

    Advisory ranges: age 15-100, weight 30-300 kg, height 100-250 cm.
    Nothing here enforces them.
    """

    gender: Gender | str
    age: int
    weight_kg: float
    height_cm: float
    activity_level: ActivityLevel | str
    goal: Goal | str


@dataclass(frozen=True)
class MacroTargets:
    """Daily macronutrient targets in grams."""

    protein_g: int
    carbs_g: int
    fat_g: int

    @property
    def is_feasible(self) -> bool:
        """Return False when protein and fat alone exceed the calorie target."""
        return self.carbs_g >= 0


@dataclass(frozen=True)
class MetricsSnapshot:
    """Computed energy and body metrics for one set of biometrics."""

    bmr: int
    tdee: int
    target_calories: int
    macros: MacroTargets
    bmi: float
    bmi_category: BmiCategory


@dataclass(frozen=True)
class HealthProfile:
    """A saved row of health metrics history."""

    id: UUID
    user_id: UUID
    biometrics: BiometricInput
    food_preference: FoodPreference | None
    bmr: int
    tdee: int
    target_calories: int
    created_at: datetime

    @property
    def goal(self) -> Goal | str:
        return self.biometrics.goal


@dataclass(frozen=True)
class WeightRecord:
    """Weight and BMI at a point in time."""

    weight_kg: float
    height_cm: float
    bmi: float
    bmi_category: BmiCategory
    recorded_at: datetime
