"""Food lookups against USDA FoodData Central."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from honest_meals.adapters.fdc_client import FdcClient
from honest_meals.domain.nutrition import FoodDetails, FoodSummary, MacroProfile
from honest_meals.services.cache import Cache

_ENERGY_KCAL = 1008
_PROTEIN = 1003
_FAT = 1004
_CARBS = 1005

_logger = logging.getLogger(__name__)


@dataclass
class NutritionService:
    """Cached food search used to prefill journal entries."""

    fdc_client: FdcClient
    cache: Cache
    search_ttl_seconds: int = 3600
    food_ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3

    async def search(self, query: str, limit: int = 5) -> list[FoodSummary]:
        """Search foods by name."""
        query = query.strip()
        if not query:
            return []
        cache_key = f"fdc:search:{query.lower()}:{limit}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, list):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.search_foods(query, page_size=limit),
            action="search",
        )
        foods = [_parse_summary(food) for food in payload.get("foods", [])][:limit]
        self.cache.set(cache_key, foods, ttl_seconds=self.search_ttl_seconds)
        return foods

    async def get_food(self, fdc_id: int) -> FoodDetails:
        """Return a food with calories and macros per 100 g."""
        cache_key = f"fdc:food:{fdc_id}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, FoodDetails):
            return cached

        payload = await self._call_with_retry(
            lambda: self.fdc_client.get_food(fdc_id),
            action=f"get_food:{fdc_id}",
        )
        details = FoodDetails(
            summary=_parse_summary(payload),
            macros=_extract_macros(payload.get("foodNutrients", [])),
            serving_size=_serving_label(payload),
        )
        self.cache.set(cache_key, details, ttl_seconds=self.food_ttl_seconds)
        return details

    async def _call_with_retry(
        self, func: Callable[[], Awaitable[dict[str, object]]], *, action: str
    ) -> dict[str, object]:
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "FDC %s failed (attempt %s/%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds)


def _parse_summary(food: dict[str, object]) -> FoodSummary:
    return FoodSummary(
        fdc_id=int(food["fdcId"]),
        description=str(food.get("description") or ""),
        brand=food.get("brandName") or food.get("brandOwner"),
        data_type=food.get("dataType"),
    )


def _serving_label(payload: dict[str, object]) -> str | None:
    size = payload.get("servingSize")
    if size is None:
        return None
    unit = payload.get("servingSizeUnit") or "g"
    return f"{size:g} {unit}" if isinstance(size, int | float) else f"{size} {unit}"


def _extract_macros(food_nutrients: list[dict[str, object]]) -> MacroProfile:
    """Pick energy and macros out of FDC nutrient rows."""
    values = {_ENERGY_KCAL: 0.0, _PROTEIN: 0.0, _FAT: 0.0, _CARBS: 0.0}
    for nutrient in food_nutrients:
        info = nutrient.get("nutrient") or {}
        nutrient_id = info.get("id") or nutrient.get("nutrientId")
        amount = nutrient.get("amount", nutrient.get("value"))
        if nutrient_id in values and amount is not None:
            values[nutrient_id] = float(amount)
    return MacroProfile(
        calories=values[_ENERGY_KCAL],
        protein_g=values[_PROTEIN],
        carbs_g=values[_CARBS],
        fat_g=values[_FAT],
    )
