"""Shared test fixtures."""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from uuid import UUID, uuid4

import pytest

from honest_meals.adapters.fdc_client import FdcClient
from honest_meals.config import Settings
from honest_meals.containers import AppContainer
from honest_meals.domain.health import (
    BiometricInput,
    FoodPreference,
    HealthProfile,
    MetricsSnapshot,
)
from honest_meals.domain.journal import FoodJournalEntry, MealType, WaterIntakeRecord
from honest_meals.domain.meals import FavoriteRecord, MealOrderHistory, MealRecord
from honest_meals.domain.orders import (
    CartItem,
    CustomerDetails,
    OrderRecord,
    OrderStatus,
)
from honest_meals.domain.users import Role, UserRecord
from honest_meals.services.cache import InMemoryCache
from honest_meals.services.catalog import MealCatalogService, MealRepository
from honest_meals.services.favorites import FavoritesRepository, FavoritesService
from honest_meals.services.health import HealthMetricsRepository, HealthService
from honest_meals.services.journal import FoodJournalRepository, FoodJournalService
from honest_meals.services.nutrition import NutritionService
from honest_meals.services.orders import OrderRepository, OrderService
from honest_meals.services.recommendations import RecommendationService
from honest_meals.services.users import UserRepository, UserService
from honest_meals.services.water import WaterIntakeRepository, WaterIntakeService


def make_meal(  # noqa: PLR0913
    name: str,
    calories: int,
    protein_g: float,
    is_vegetarian: bool | None = False,
    price: float = 250.0,
    meal_id: str | None = None,
) -> MealRecord:
    return MealRecord(
        id=meal_id or name.lower().replace(" ", "-"),
        name=name,
        price=price,
        calories=calories,
        protein_g=protein_g,
        carbs_g=40.0,
        fat_g=15.0,
        is_vegetarian=is_vegetarian,
    )


@dataclass
class InMemoryHealthRepository(HealthMetricsRepository):
    """In-memory health metrics history for tests."""

    rows: list[HealthProfile] = field(default_factory=list)

    def insert_profile(  # noqa: PLR0913
        self,
        user_id: UUID,
        biometrics: BiometricInput,
        food_preference: FoodPreference | None,
        snapshot: MetricsSnapshot,
        created_at: datetime,
    ) -> HealthProfile:
        profile = HealthProfile(
            id=uuid4(),
            user_id=user_id,
            biometrics=biometrics,
            food_preference=food_preference,
            bmr=snapshot.bmr,
            tdee=snapshot.tdee,
            target_calories=snapshot.target_calories,
            created_at=created_at,
        )
        self.rows.append(profile)
        return profile

    def get_latest(self, user_id: UUID) -> HealthProfile | None:
        rows = self.list_recent(user_id, limit=1)
        return rows[0] if rows else None

    def list_recent(self, user_id: UUID, limit: int) -> list[HealthProfile]:
        rows = [row for row in self.rows if row.user_id == user_id]
        return list(reversed(rows))[:limit]


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal catalog for tests."""

    meals: list[MealRecord] = field(default_factory=list)

    def list_available(self) -> list[MealRecord]:
        return sorted(
            (meal for meal in self.meals if meal.is_available),
            key=lambda meal: meal.name,
        )

    def get_meal(self, meal_id: str) -> MealRecord | None:
        for meal in self.meals:
            if meal.id == meal_id:
                return meal
        return None

    def create_meal(self, payload: dict[str, object]) -> MealRecord:
        meal = MealRecord(
            id=str(uuid4()),
            name=str(payload["name"]),
            price=float(payload["price"]),
            calories=int(payload.get("calories", 0)),
            protein_g=float(payload.get("protein_g", 0)),
            carbs_g=float(payload.get("carbs_g", 0)),
            fat_g=float(payload.get("fat_g", 0)),
            is_vegetarian=payload.get("is_vegetarian"),
            is_available=bool(payload.get("is_available", True)),
        )
        self.meals.append(meal)
        return meal

    def set_availability(self, meal_id: str, is_available: bool) -> None:
        self.meals = [
            replace(meal, is_available=is_available)
            if meal.id == meal_id
            else meal
            for meal in self.meals
        ]


@dataclass
class InMemoryFavoritesRepository(FavoritesRepository):
    """In-memory favorites for tests."""

    records: list[FavoriteRecord] = field(default_factory=list)
    history: dict[str, MealOrderHistory] = field(default_factory=dict)

    def list_favorites(self, user_id: UUID) -> list[FavoriteRecord]:
        return [record for record in reversed(self.records) if record.user_id == user_id]

    def add_favorites(
        self, user_id: UUID, meal_ids: Sequence[str], created_at: datetime
    ) -> None:
        self.records.extend(
            FavoriteRecord(user_id=user_id, meal_id=meal_id, created_at=created_at)
            for meal_id in meal_ids
        )

    def remove_favorite(self, user_id: UUID, meal_id: str) -> None:
        self.records = [
            record
            for record in self.records
            if not (record.user_id == user_id and record.meal_id == meal_id)
        ]

    def meal_order_history(self, user_id: UUID, meal_id: str) -> MealOrderHistory:
        return self.history.get(meal_id, MealOrderHistory())


@dataclass
class InMemoryFoodJournalRepository(FoodJournalRepository):
    """In-memory food journal for tests."""

    entries: dict[UUID, FoodJournalEntry] = field(default_factory=dict)

    def create_entry(
        self, user_id: UUID, day: date, payload: dict[str, object]
    ) -> FoodJournalEntry:
        entry = FoodJournalEntry(
            id=uuid4(),
            user_id=user_id,
            day=day,
            meal_type=MealType(payload.get("meal_type", MealType.BREAKFAST)),
            food_name=str(payload["food_name"]),
            calories=float(payload["calories"]),
            protein_g=float(payload.get("protein_g", 0)),
            carbs_g=float(payload.get("carbs_g", 0)),
            fat_g=float(payload.get("fat_g", 0)),
            serving_size=payload.get("serving_size"),
            notes=payload.get("notes"),
        )
        self.entries[entry.id] = entry
        return entry

    def get_entry(self, entry_id: UUID) -> FoodJournalEntry | None:
        return self.entries.get(entry_id)

    def update_entry(
        self, entry_id: UUID, payload: dict[str, object]
    ) -> FoodJournalEntry:
        current = self.entries[entry_id]
        updated = replace(current, **payload)
        self.entries[entry_id] = updated
        return updated

    def delete_entry(self, entry_id: UUID) -> None:
        self.entries.pop(entry_id, None)

    def list_entries(self, user_id: UUID, day: date) -> list[FoodJournalEntry]:
        return [
            entry
            for entry in self.entries.values()
            if entry.user_id == user_id and entry.day == day
        ]


@dataclass
class InMemoryWaterIntakeRepository(WaterIntakeRepository):
    """In-memory water intake for tests."""

    records: dict[tuple[UUID, date], WaterIntakeRecord] = field(default_factory=dict)

    def get_day(self, user_id: UUID, day: date) -> WaterIntakeRecord | None:
        return self.records.get((user_id, day))

    def upsert_day(self, record: WaterIntakeRecord) -> WaterIntakeRecord:
        stored = WaterIntakeRecord(
            id=record.id or uuid4(),
            user_id=record.user_id,
            day=record.day,
            amount_ml=record.amount_ml,
            goal_ml=record.goal_ml,
        )
        self.records[(record.user_id, record.day)] = stored
        return stored

    def list_recent(self, user_id: UUID, limit: int) -> list[WaterIntakeRecord]:
        rows = [row for row in self.records.values() if row.user_id == user_id]
        return sorted(rows, key=lambda row: row.day, reverse=True)[:limit]


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user profiles for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)
    contacts: dict[UUID, tuple[str, str, str]] = field(default_factory=dict)

    def add(self, role: Role = Role.STANDARD_USER, **kwargs) -> UserRecord:  # type: ignore[no-untyped-def]
        user = UserRecord(
            id=kwargs.get("id", uuid4()),
            email=kwargs.get("email", "user@example.com"),
            full_name=kwargs.get("full_name", "Test User"),
            role=role,
        )
        self.users[user.id] = user
        return user

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def list_users(self) -> list[UserRecord]:
        return list(self.users.values())

    def set_role(self, user_id: UUID, role: Role) -> None:
        user = self.users[user_id]
        self.users[user_id] = replace(user, role=role)

    def upsert_contact(
        self, user_id: UUID, full_name: str, phone_number: str, address: str
    ) -> None:
        self.contacts[user_id] = (full_name, phone_number, address)


@dataclass
class InMemoryOrderRepository(OrderRepository):
    """In-memory orders for tests."""

    orders: dict[UUID, OrderRecord] = field(default_factory=dict)
    items: dict[UUID, list[CartItem]] = field(default_factory=dict)
    guests: dict[UUID, CustomerDetails] = field(default_factory=dict)
    item_batches: list[int] = field(default_factory=list)
    fail_items_after_batches: int | None = None
    fail_order_delete: bool = False

    def create_guest_customer(self, customer: CustomerDetails) -> UUID:
        guest_id = uuid4()
        self.guests[guest_id] = customer
        return guest_id

    def delete_guest_customer(self, guest_id: UUID) -> None:
        self.guests.pop(guest_id, None)

    def create_order(  # noqa: PLR0913
        self,
        customer_id: UUID,
        total_amount: float,
        delivery_address: str,
        notes: str | None,
        payment_method: str,
    ) -> OrderRecord:
        order = OrderRecord(
            id=uuid4(),
            customer_id=customer_id,
            total_amount=total_amount,
            status=OrderStatus.PENDING,
            delivery_address=delivery_address,
            payment_method=payment_method,
            payment_status="pending",
            notes=notes,
            created_at=None,
        )
        self.orders[order.id] = order
        return order

    def create_order_items(self, order_id: UUID, items: Sequence[CartItem]) -> None:
        if (
            self.fail_items_after_batches is not None
            and len(self.item_batches) >= self.fail_items_after_batches
        ):
            raise RuntimeError("insert failed")
        self.item_batches.append(len(items))
        self.items.setdefault(order_id, []).extend(items)

    def delete_order(self, order_id: UUID) -> None:
        if self.fail_order_delete:
            raise RuntimeError("delete failed")
        self.orders.pop(order_id, None)

    def get_order(self, order_id: UUID) -> OrderRecord | None:
        return self.orders.get(order_id)

    def list_orders(self, status: OrderStatus | None, limit: int) -> list[OrderRecord]:
        orders = [
            order
            for order in self.orders.values()
            if status is None or order.status == status
        ]
        return orders[:limit]

    def update_status(self, order_id: UUID, status: OrderStatus) -> None:
        order = self.orders[order_id]
        self.orders[order_id] = replace(order, status=status)


@dataclass
class FakeFdcClient(FdcClient):
    """Fake FDC client with in-memory responses."""

    search_calls: int = 0
    food_calls: int = 0
    search_payload: dict[str, object] = field(
        default_factory=lambda: {
            "foods": [
                {
                    "fdcId": 171477,
                    "description": "Chicken, broilers or fryers, breast, meat only, cooked",
                    "dataType": "SR Legacy",
                },
                {
                    "fdcId": 2345,
                    "description": "Greek Yogurt",
                    "brandOwner": "Epigamia",
                    "dataType": "Branded",
                },
            ]
        }
    )
    food_payload: dict[str, object] = field(
        default_factory=lambda: {
            "fdcId": 171477,
            "description": "Chicken, broilers or fryers, breast, meat only, cooked",
            "dataType": "SR Legacy",
            "servingSize": 100,
            "servingSizeUnit": "g",
            "foodNutrients": [
                {"nutrient": {"id": 1008}, "amount": 165},
                {"nutrient": {"id": 1003}, "amount": 31},
                {"nutrient": {"id": 1004}, "amount": 3.6},
                {"nutrientId": 1005, "amount": 0},
            ],
        }
    )

    async def search_foods(self, query: str, page_size: int = 10) -> dict[str, object]:
        self.search_calls += 1
        return self.search_payload

    async def get_food(self, fdc_id: int) -> dict[str, object]:
        self.food_calls += 1
        return self.food_payload


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9."
            "eyJyb2xlIjoic2VydmljZV9yb2xlIn0."
            "c2lnbmF0dXJl"
        ),
        admin_token="admin-token",
        fdc_api_key="fdc-key",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def container(
    settings: Settings, user_repository: InMemoryUserRepository
) -> AppContainer:
    user_service = UserService(user_repository)
    health_service = HealthService(InMemoryHealthRepository())
    catalog_service = MealCatalogService(InMemoryMealRepository())
    recommendation_service = RecommendationService(
        catalog=catalog_service,
        health=health_service,
        limit=settings.recommendation_limit,
    )
    favorites_service = FavoritesService(InMemoryFavoritesRepository(), catalog_service)
    nutrition_service = NutritionService(fdc_client=FakeFdcClient(), cache=InMemoryCache())
    journal_service = FoodJournalService(InMemoryFoodJournalRepository())
    water_service = WaterIntakeService(
        repository=InMemoryWaterIntakeRepository(), health=health_service
    )
    order_service = OrderService(
        repository=InMemoryOrderRepository(),
        user_repository=user_repository,
        whatsapp_number=settings.whatsapp_number,
        delivery_fee=settings.delivery_fee,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
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
