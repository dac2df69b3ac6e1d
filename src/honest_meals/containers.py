"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from honest_meals.adapters.fdc_client import HttpxFdcClient
from honest_meals.adapters.supabase_favorites_repository import (
    SupabaseFavoritesRepository,
)
from honest_meals.adapters.supabase_health_repository import SupabaseHealthRepository
from honest_meals.adapters.supabase_journal_repository import (
    SupabaseFoodJournalRepository,
)
from honest_meals.adapters.supabase_meal_repository import SupabaseMealRepository
from honest_meals.adapters.supabase_order_repository import SupabaseOrderRepository
from honest_meals.adapters.supabase_user_repository import SupabaseUserRepository
from honest_meals.adapters.supabase_water_repository import (
    SupabaseWaterIntakeRepository,
)
from honest_meals.config import Settings
from honest_meals.services.cache import InMemoryCache
from honest_meals.services.catalog import MealCatalogService
from honest_meals.services.favorites import FavoritesService
from honest_meals.services.health import HealthService
from honest_meals.services.journal import FoodJournalService
from honest_meals.services.nutrition import NutritionService
from honest_meals.services.orders import OrderService
from honest_meals.services.recommendations import RecommendationService
from honest_meals.services.users import UserService
from honest_meals.services.water import WaterIntakeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    health_service: HealthService
    catalog_service: MealCatalogService
    recommendation_service: RecommendationService
    favorites_service: FavoritesService
    journal_service: FoodJournalService
    water_service: WaterIntakeService
    nutrition_service: NutritionService
    order_service: OrderService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    user_service = UserService(user_repository)
    health_service = HealthService(SupabaseHealthRepository(supabase_client))
    catalog_service = MealCatalogService(SupabaseMealRepository(supabase_client))
    recommendation_service = RecommendationService(
        catalog=catalog_service,
        health=health_service,
        limit=resolved_settings.recommendation_limit,
    )
    favorites_service = FavoritesService(
        SupabaseFavoritesRepository(supabase_client), catalog_service
    )
    fdc_client = HttpxFdcClient.create(
        api_key=resolved_settings.fdc_api_key,
        base_url=resolved_settings.fdc_base_url,
    )
    nutrition_service = NutritionService(fdc_client=fdc_client, cache=InMemoryCache())
    journal_service = FoodJournalService(SupabaseFoodJournalRepository(supabase_client))
    water_service = WaterIntakeService(
        repository=SupabaseWaterIntakeRepository(supabase_client),
        health=health_service,
    )
    order_service = OrderService(
        repository=SupabaseOrderRepository(supabase_client),
        user_repository=user_repository,
        whatsapp_number=resolved_settings.whatsapp_number,
        delivery_fee=resolved_settings.delivery_fee,
    )

    async def close_resources() -> None:
        await fdc_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        health_service=health_service,
        catalog_service=catalog_service,
        recommendation_service=recommendation_service,
        favorites_service=favorites_service,
        journal_service=journal_service,
        water_service=water_service,
        nutrition_service=nutrition_service,
        order_service=order_service,
        close_resources=close_resources,
    )
