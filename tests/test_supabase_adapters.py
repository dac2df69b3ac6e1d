"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from uuid import UUID, uuid4

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
from honest_meals.domain.health import (
    ActivityLevel,
    BiometricInput,
    FoodPreference,
    Gender,
    Goal,
)
from honest_meals.domain.journal import MealType, WaterIntakeRecord
from honest_meals.domain.orders import CartItem, CustomerDetails, OrderStatus
from honest_meals.domain.users import Role
from honest_meals.services.metrics import calculate_snapshot


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    actions: list[str] = field(default_factory=list)
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_order: tuple[str, bool] | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def _start(self, action: str) -> "FakeTable":
        self._action = action
        self.actions.append(action)
        self.last_filters = []
        return self

    def select(self, *_args) -> "FakeTable":
        return self._start("select")

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_payload = payload
        return self._start("insert")

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_payload = payload
        return self._start("update")

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_payload = payload
        return self._start("upsert")

    def delete(self) -> "FakeTable":
        return self._start("delete")

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, column: str, desc: bool = False) -> "FakeTable":
        self.last_order = (column, desc)
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_health_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("health_metrics")
    user_id = uuid4()
    biometrics = BiometricInput(
        gender=Gender.MALE,
        age=30,
        weight_kg=70,
        height_cm=170,
        activity_level=ActivityLevel.MODERATE,
        goal=Goal.LOSE,
    )
    row = {
        "id": str(uuid4()),
        "user_id": str(user_id),
        "gender": "male",
        "age": 30,
        "weight": 70,
        "height": 170,
        "activity_level": "moderate",
        "goal": "lose",
        "food_preference": "vegetarian",
        "bmr": 1618,
        "tdee": 2508,
        "target_calories": 2008,
        "created_at": "2026-01-05T08:30:00+00:00",
    }
    table.queue("insert", [row])
    table.queue("select", [{**row, "goal": None, "food_preference": None}])

    repository = SupabaseHealthRepository(client)
    created = repository.insert_profile(
        user_id,
        biometrics,
        FoodPreference.VEGETARIAN,
        calculate_snapshot(biometrics),
        datetime(2026, 1, 5, 8, 30, tzinfo=UTC),
    )
    latest = repository.get_latest(user_id)

    assert table.last_order == ("created_at", True)
    assert created.biometrics == biometrics
    assert created.food_preference is FoodPreference.VEGETARIAN
    assert created.target_calories == 2008
    assert latest is not None
    assert latest.goal is Goal.MAINTAIN
    assert latest.food_preference is None


def _health_row(**overrides: object) -> dict[str, object]:
    return {
        "id": str(uuid4()),
        "user_id": str(uuid4()),
        "gender": "male",
        "age": 30,
        "weight": 70,
        "height": 170,
        "activity_level": "moderate",
        "goal": "lose",
        **overrides,
    }


def test_supabase_health_repository_keeps_unknown_choices() -> None:
    client = FakeSupabaseClient()
    client.table("health_metrics").queue(
        "select",
        [_health_row(activity_level="extra_active", goal="recomp", gender="other")],
    )

    profile = SupabaseHealthRepository(client).get_latest(uuid4())

    assert profile is not None
    assert profile.biometrics.activity_level == "extra_active"
    assert profile.goal == "recomp"
    snapshot = calculate_snapshot(profile.biometrics)
    assert snapshot.bmr == 1452
    assert snapshot.tdee == 1742
    assert snapshot.target_calories == 1742


def test_supabase_health_repository_defaults_missing_choices() -> None:
    client = FakeSupabaseClient()
    client.table("health_metrics").queue(
        "select", [_health_row(activity_level="", gender=None)]
    )

    profile = SupabaseHealthRepository(client).get_latest(uuid4())

    assert profile is not None
    assert profile.biometrics.activity_level is ActivityLevel.MODERATE
    assert profile.biometrics.gender is Gender.MALE
    assert calculate_snapshot(profile.biometrics).tdee == 2508


def test_supabase_meal_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("meals")
    table.queue(
        "select",
        [
            {
                "id": 3,
                "name": "Paneer Bowl",
                "price": "249",
                "calories": 520,
                "protein": 28,
                "carbs": 45,
                "fat": 18,
                "food_type": True,
            },
            {"id": 4, "name": "Mystery Curry", "price": 199, "food_type": "veg"},
        ],
    )
    table.queue("insert", [{"id": 5, "name": "Egg Wrap", "price": 180}])

    repository = SupabaseMealRepository(client)
    meals = repository.list_available()

    assert table.last_filters == [("is_available", True)]
    assert table.last_order == ("name", False)
    assert meals[0].id == "3"
    assert meals[0].price == 249.0
    assert meals[0].is_vegetarian is True
    assert meals[1].is_vegetarian is None

    created = repository.create_meal({"name": "Egg Wrap", "price": 180, "protein_g": 24})
    assert created.name == "Egg Wrap"
    assert table.last_payload["protein"] == 24  # type: ignore[index]

    repository.set_availability("5", False)
    assert table.last_payload == {"is_available": False}
    assert table.last_filters == [("id", "5")]


def test_supabase_journal_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_journal")
    entry_id = uuid4()
    user_id = uuid4()
    row = {
        "id": str(entry_id),
        "user_id": str(user_id),
        "date": "2026-03-14",
        "meal_type": "lunch",
        "food_name": "Dal",
        "calories": 180,
        "protein": 9,
        "carbs": 25,
        "fat": 4,
    }
    table.queue("insert", [row])
    table.queue("select", [row])

    repository = SupabaseFoodJournalRepository(client)
    created = repository.create_entry(
        user_id,
        date(2026, 3, 14),
        {"meal_type": MealType.LUNCH, "food_name": "Dal", "calories": 180, "protein_g": 9},
    )
    entries = repository.list_entries(user_id, date(2026, 3, 14))
    repository.delete_entry(entry_id)

    assert table.actions == ["insert", "select", "delete"]
    assert table.last_filters == [("id", str(entry_id))]
    assert created.meal_type is MealType.LUNCH
    assert created.protein_g == 9
    assert entries[0].day == date(2026, 3, 14)


def test_supabase_water_repository_inserts_then_updates() -> None:
    client = FakeSupabaseClient()
    table = client.table("water_intake")
    record_id = uuid4()
    user_id = uuid4()
    row = {
        "id": str(record_id),
        "user_id": str(user_id),
        "date": "2026-05-02",
        "amount": 250,
        "goal": 2000,
    }
    table.queue("insert", [row])
    table.queue("update", [{**row, "amount": 500}])

    repository = SupabaseWaterIntakeRepository(client)
    created = repository.upsert_day(
        WaterIntakeRecord(user_id=user_id, day=date(2026, 5, 2), amount_ml=250, goal_ml=2000)
    )
    updated = repository.upsert_day(
        WaterIntakeRecord(
            id=created.id,
            user_id=user_id,
            day=created.day,
            amount_ml=500,
            goal_ml=2000,
        )
    )

    assert table.actions == ["insert", "update"]
    assert created.id == record_id
    assert updated.amount_ml == 500
    assert table.last_payload == {"amount": 500, "goal": 2000}


def test_supabase_order_repository() -> None:
    client = FakeSupabaseClient()
    guests = client.table("guest_customers")
    orders = client.table("orders")
    items = client.table("order_items")
    guest_id = str(uuid4())
    order_id = str(uuid4())
    guests.queue("insert", [{"id": guest_id}])
    orders.queue(
        "insert",
        [
            {
                "id": order_id,
                "customer_id": guest_id,
                "total_amount": 289,
                "status": "pending",
                "delivery_address": "Pune",
                "payment_method": "cash_on_delivery",
            }
        ],
    )
    orders.queue(
        "select",
        [
            {
                "id": order_id,
                "customer_id": guest_id,
                "total_amount": 289,
                "status": "on_hold",
                "created_at": "2026-02-01T12:00:00+00:00",
            }
        ],
    )

    repository = SupabaseOrderRepository(client)
    customer_id = repository.create_guest_customer(
        CustomerDetails(name="Ravi", phone="98", address="Pune")
    )
    order = repository.create_order(
        customer_id, 289.0, "Pune", None, "cash_on_delivery"
    )
    repository.create_order_items(
        order.id, [CartItem(meal_id="7", name="Bowl", unit_price=249.0, quantity=1)]
    )
    listed = repository.list_orders(OrderStatus.PENDING, limit=5)
    repository.update_status(order.id, OrderStatus.APPROVED)

    assert customer_id == UUID(guest_id)
    assert order.status is OrderStatus.PENDING
    assert items.last_payload[0]["total_price"] == 249.0  # type: ignore[index]
    assert listed[0].status is OrderStatus.PENDING
    assert listed[0].created_at is not None
    assert orders.last_payload["status"] == "approved"  # type: ignore[index]

    repository.delete_guest_customer(customer_id)

    assert guests.actions[-1] == "delete"
    assert guests.last_filters == [("id", guest_id)]


def test_supabase_user_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("profiles")
    user_id = uuid4()
    table.queue(
        "select",
        [{"id": str(user_id), "email": "a@example.com", "role": "gym_influencer"}],
    )
    table.queue("select", [{"id": str(uuid4()), "role": None}])

    repository = SupabaseUserRepository(client)
    user = repository.get_user(user_id)
    users = repository.list_users()
    repository.upsert_contact(user_id, "Asha", "98", "Pune")

    assert user is not None
    assert user.role is Role.GYM_INFLUENCER
    assert users[0].role is Role.GUEST
    assert table.actions[-1] == "upsert"
    assert table.last_payload["id"] == str(user_id)  # type: ignore[index]


def test_supabase_favorites_repository() -> None:
    client = FakeSupabaseClient()
    favorites = client.table("favorites")
    user_id = uuid4()
    favorites.queue(
        "select",
        [
            {
                "user_id": str(user_id),
                "meal_id": "12",
                "created_at": "2026-04-01T08:00:00+00:00",
            }
        ],
    )
    repository = SupabaseFavoritesRepository(client)

    records = repository.list_favorites(user_id)
    repository.add_favorites(user_id, [], datetime(2026, 4, 2, tzinfo=UTC))
    repository.add_favorites(user_id, ["12", "15"], datetime(2026, 4, 2, tzinfo=UTC))
    inserted = favorites.last_payload
    repository.remove_favorite(user_id, "12")

    assert records[0].meal_id == "12"
    assert records[0].created_at == datetime(2026, 4, 1, 8, tzinfo=UTC)
    assert favorites.last_order == ("created_at", True)
    assert favorites.actions == ["select", "insert", "delete"]
    assert inserted == [
        {"user_id": str(user_id), "meal_id": "12", "created_at": "2026-04-02T00:00:00+00:00"},
        {"user_id": str(user_id), "meal_id": "15", "created_at": "2026-04-02T00:00:00+00:00"},
    ]
    assert favorites.last_filters == [("user_id", str(user_id)), ("meal_id", "12")]


def test_supabase_favorites_order_history() -> None:
    client = FakeSupabaseClient()
    items = client.table("order_items")
    user_id = uuid4()
    items.queue(
        "select",
        [
            {
                "id": "a",
                "orders": {
                    "created_at": "2026-03-01T10:00:00+00:00",
                    "status": "delivered",
                    "customer_id": str(user_id),
                },
            },
            {
                "id": "b",
                "orders": [
                    {
                        "created_at": "2026-03-09T10:00:00+00:00",
                        "status": "pending",
                        "customer_id": str(user_id),
                    }
                ],
            },
            {
                "id": "c",
                "orders": [
                    {
                        "created_at": "2026-03-05T10:00:00+00:00",
                        "status": "delivered",
                        "customer_id": str(user_id),
                    }
                ],
            },
            {"id": "d", "orders": []},
        ],
    )

    history = SupabaseFavoritesRepository(client).meal_order_history(user_id, "12")

    assert history.delivered_count == 2
    assert history.last_ordered_at == datetime(2026, 3, 9, 10, tzinfo=UTC)
    assert items.last_filters == [("meal_id", "12"), ("orders.customer_id", str(user_id))]
