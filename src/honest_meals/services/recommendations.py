"""Meal ranking against a user's health goal."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from honest_meals.domain.health import FoodPreference, Goal, HealthProfile
from honest_meals.domain.meals import MealCategory, MealRecord
from honest_meals.services.catalog import MealCatalogService
from honest_meals.services.health import HealthService

RECOMMENDATION_LIMIT = 10

# Share of a meal's calories that should come from protein to count as balanced.
MAINTAIN_PROTEIN_RATIO = 0.15

HIGH_PROTEIN_MIN_G = 20
LOW_CALORIE_BELOW = 500
HIGH_CALORIE_ABOVE = 700


class RankingProfile(Protocol):
    """The parts of a health profile that drive ranking."""

    @property
    def goal(self) -> Goal | str: ...

    @property
    def food_preference(self) -> FoodPreference | str | None: ...


def _protein_density(meal: MealRecord) -> float:
    """Protein grams per kcal; meals without calories score 0."""
    if meal.calories <= 0:
        return 0.0
    return meal.protein_g / meal.calories


def _matches_preference(
    meal: MealRecord, preference: FoodPreference | str | None
) -> bool:
    if preference == FoodPreference.VEGETARIAN:
        return meal.is_vegetarian is True
    if preference == FoodPreference.NON_VEGETARIAN:
        return meal.is_vegetarian is False
    return True


def rank_meals(
    meals: Sequence[MealRecord],
    profile: RankingProfile | None,
    limit: int | None = RECOMMENDATION_LIMIT,
) -> list[MealRecord]:
    """Filter meals by dietary preference and order them for the profile's goal.

    Without a profile the catalog is returned as-is, untruncated. Sorting is
    stable, so meals with equal scores keep their catalog order. Pass
    ``limit=None`` for the full ranked list.
    """
    if profile is None:
        return list(meals)

    candidates = [
        meal for meal in meals if _matches_preference(meal, profile.food_preference)
    ]
    if profile.goal == Goal.LOSE:
        ranked = sorted(candidates, key=_protein_density, reverse=True)
    elif profile.goal == Goal.GAIN:
        ranked = sorted(
            candidates,
            key=lambda meal: (meal.protein_g, meal.calories),
            reverse=True,
        )
    else:
        ranked = sorted(
            candidates,
            key=lambda meal: abs(MAINTAIN_PROTEIN_RATIO - _protein_density(meal)),
        )
    if limit is None:
        return ranked
    return ranked[:limit]


def filter_by_category(
    meals: Sequence[MealRecord], category: MealCategory | str
) -> list[MealRecord]:
    """Apply a browsing filter, keeping the incoming order."""
    if category == MealCategory.HIGH_PROTEIN:
        return [meal for meal in meals if meal.protein_g >= HIGH_PROTEIN_MIN_G]
    if category == MealCategory.LOW_CALORIE:
        return [meal for meal in meals if meal.calories < LOW_CALORIE_BELOW]
    if category == MealCategory.HIGH_CALORIE:
        return [meal for meal in meals if meal.calories > HIGH_CALORIE_ABOVE]
    if category == MealCategory.VEGETARIAN:
        return [meal for meal in meals if meal.is_vegetarian is True]
    if category == MealCategory.NON_VEGETARIAN:
        return [meal for meal in meals if meal.is_vegetarian is False]
    return list(meals)


@dataclass(frozen=True)
class Recommendation:
    """Meals picked for a user and the profile they were picked for."""

    profile: HealthProfile | None
    meals: list[MealRecord]

    @property
    def is_personalized(self) -> bool:
        return self.profile is not None


@dataclass
class RecommendationService:
    """Combine the catalog and the latest health profile into recommendations."""

    catalog: MealCatalogService
    health: HealthService
    limit: int = RECOMMENDATION_LIMIT

    def recommend(
        self, user_id: UUID, category: MealCategory | str = MealCategory.ALL
    ) -> Recommendation:
        """Return the top recommended meals.

        A category other than ``all`` browses the whole ranked list instead of
        the top entries.
        """
        limit = self.limit if category == MealCategory.ALL else None
        return self._build(user_id, category, limit)

    def browse(
        self, user_id: UUID, category: MealCategory | str = MealCategory.ALL
    ) -> Recommendation:
        """Return the full ranked catalog, optionally narrowed by category."""
        return self._build(user_id, category, None)

    def _build(
        self, user_id: UUID, category: MealCategory | str, limit: int | None
    ) -> Recommendation:
        profile = self.health.get_latest_profile(user_id)
        meals = self.catalog.list_available()
        ranked = rank_meals(meals, profile, limit=limit)
        return Recommendation(
            profile=profile, meals=filter_by_category(ranked, category)
        )
