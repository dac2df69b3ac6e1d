"""Models for external food database lookups."""

from dataclasses import dataclass


@dataclass(frozen=True)
class MacroProfile:
    """Energy and macronutrients for a reference amount of food."""

    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float


@dataclass(frozen=True)
class FoodSummary:
    """A search hit from FoodData Central."""

    fdc_id: int
    description: str
    brand: str | None
    data_type: str | None


@dataclass(frozen=True)
class FoodDetails:
    """A food with macros, ready to prefill a journal entry."""

    summary: FoodSummary
    macros: MacroProfile
    serving_size: str | None
