"""Pydantic request and response models for the HTTP API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

from honest_meals.domain.health import (
    ActivityLevel,
    BiometricInput,
    BmiCategory,
    FoodPreference,
    Gender,
    Goal,
    HealthProfile,
    MetricsSnapshot,
)
from honest_meals.domain.journal import FoodJournalEntry, MealType, WaterIntakeRecord
from honest_meals.domain.meals import FavoriteMeal, MealRecord
from honest_meals.domain.orders import OrderRecord, OrderStatus
from honest_meals.domain.users import Role, UserRecord


class BiometricsRequest(BaseModel):
    """Calculator form; ranges mirror the form limits."""

    gender: Gender = Gender.MALE
    age: int = Field(default=30, ge=15, le=100)
    weight: float = Field(default=70, ge=30, le=300)
    height: float = Field(default=170, ge=100, le=250)
    activity_level: ActivityLevel = ActivityLevel.MODERATE
    goal: Goal = Goal.MAINTAIN

    def to_domain(self) -> BiometricInput:
        return BiometricInput(
            gender=self.gender,
            age=self.age,
            weight_kg=self.weight,
            height_cm=self.height,
            activity_level=self.activity_level,
            goal=self.goal,
        )


class HealthProfileRequest(BiometricsRequest):
    food_preference: FoodPreference | None = None


class BmiRequest(BaseModel):
    weight: float = Field(ge=30, le=300)
    height: float = Field(ge=100, le=250)


class BmiResponse(BaseModel):
    bmi: float
    category: BmiCategory


class MacrosResponse(BaseModel):
    protein: int
    carbs: int
    fat: int
    feasible: bool


class MetricsResponse(BaseModel):
    bmr: int
    tdee: int
    target_calories: int
    macros: MacrosResponse
    bmi: float
    bmi_category: BmiCategory

    @classmethod
    def from_snapshot(cls, snapshot: MetricsSnapshot) -> "MetricsResponse":
        return cls(
            bmr=snapshot.bmr,
            tdee=snapshot.tdee,
            target_calories=snapshot.target_calories,
            macros=MacrosResponse(
                protein=snapshot.macros.protein_g,
                carbs=snapshot.macros.carbs_g,
                fat=snapshot.macros.fat_g,
                feasible=snapshot.macros.is_feasible,
            ),
            bmi=snapshot.bmi,
            bmi_category=snapshot.bmi_category,
        )


class HealthProfileResponse(BaseModel):
    id: UUID
    user_id: UUID
    gender: str
    age: int
    weight: float
    height: float
    activity_level: str
    goal: str
    food_preference: FoodPreference | None
    bmr: int
    tdee: int
    target_calories: int
    created_at: datetime

    @classmethod
    def from_domain(cls, profile: HealthProfile) -> "HealthProfileResponse":
        biometrics = profile.biometrics
        return cls(
            id=profile.id,
            user_id=profile.user_id,
            gender=str(biometrics.gender),
            age=biometrics.age,
            weight=biometrics.weight_kg,
            height=biometrics.height_cm,
            activity_level=str(biometrics.activity_level),
            goal=str(biometrics.goal),
            food_preference=profile.food_preference,
            bmr=profile.bmr,
            tdee=profile.tdee,
            target_calories=profile.target_calories,
            created_at=profile.created_at,
        )


class MealResponse(BaseModel):
    id: str
    name: str
    description: str | None
    price: float
    calories: int
    protein: float
    carbs: float
    fat: float
    is_vegetarian: bool | None
    image_url: str | None

    @classmethod
    def from_domain(cls, meal: MealRecord) -> "MealResponse":
        return cls(
            id=meal.id,
            name=meal.name,
            description=meal.description,
            price=meal.price,
            calories=meal.calories,
            protein=meal.protein_g,
            carbs=meal.carbs_g,
            fat=meal.fat_g,
            is_vegetarian=meal.is_vegetarian,
            image_url=meal.image_url,
        )


class FavoriteResponse(BaseModel):
    meal: MealResponse
    favorited_at: datetime | None
    delivered_count: int
    last_ordered_at: datetime | None

    @classmethod
    def from_domain(cls, favorite: FavoriteMeal) -> "FavoriteResponse":
        return cls(
            meal=MealResponse.from_domain(favorite.meal),
            favorited_at=favorite.favorited_at,
            delivered_count=favorite.history.delivered_count,
            last_ordered_at=favorite.history.last_ordered_at,
        )


class FavoritesSync(BaseModel):
    meal_ids: list[str]


class RecommendationResponse(BaseModel):
    personalized: bool
    goal: str | None
    target_calories: int | None
    meals: list[MealResponse]


class JournalEntryRequest(BaseModel):
    meal_type: MealType = MealType.BREAKFAST
    food_name: str
    calories: float
    protein_g: float = 0
    carbs_g: float = 0
    fat_g: float = 0
    serving_size: str | None = None
    notes: str | None = None


class JournalEntryUpdate(BaseModel):
    meal_type: MealType | None = None
    food_name: str | None = None
    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    serving_size: str | None = None
    notes: str | None = None


class JournalEntryResponse(BaseModel):
    id: UUID
    day: date
    meal_type: MealType
    food_name: str
    calories: float
    protein_g: float
    carbs_g: float
    fat_g: float
    serving_size: str | None
    notes: str | None

    @classmethod
    def from_domain(cls, entry: FoodJournalEntry) -> "JournalEntryResponse":
        return cls(
            id=entry.id,
            day=entry.day,
            meal_type=entry.meal_type,
            food_name=entry.food_name,
            calories=entry.calories,
            protein_g=entry.protein_g,
            carbs_g=entry.carbs_g,
            fat_g=entry.fat_g,
            serving_size=entry.serving_size,
            notes=entry.notes,
        )


class WaterRequest(BaseModel):
    day: date | None = None
    amount_ml: int = 0
    goal_ml: int | None = Field(default=None, gt=0)


class WaterResponse(BaseModel):
    day: date
    amount_ml: int
    goal_ml: int
    progress_percent: float

    @classmethod
    def from_domain(cls, record: WaterIntakeRecord, percent: float) -> "WaterResponse":
        return cls(
            day=record.day,
            amount_ml=record.amount_ml,
            goal_ml=record.goal_ml,
            progress_percent=round(percent, 1),
        )


class CartItemRequest(BaseModel):
    meal_id: str
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(default=1, gt=0)


class OrderRequest(BaseModel):
    user_id: UUID | None = None
    customer_name: str
    customer_phone: str
    customer_address: str
    customer_note: str | None = None
    payment_method: str = "cash_on_delivery"
    cart: list[CartItemRequest]


class OrderResponse(BaseModel):
    id: UUID
    customer_id: UUID
    status: OrderStatus
    total_amount: float
    payment_method: str
    payment_status: str
    created_at: datetime | None

    @classmethod
    def from_domain(cls, order: OrderRecord) -> "OrderResponse":
        return cls(
            id=order.id,
            customer_id=order.customer_id,
            status=order.status,
            total_amount=order.total_amount,
            payment_method=order.payment_method,
            payment_status=order.payment_status,
            created_at=order.created_at,
        )


class OrderConfirmationResponse(BaseModel):
    order: OrderResponse
    subtotal: float
    delivery_fee: float
    whatsapp_url: str


class OrderStatusUpdate(BaseModel):
    status: OrderStatus


class UserResponse(BaseModel):
    id: UUID
    email: str | None
    full_name: str | None
    role: Role

    @classmethod
    def from_domain(cls, user: UserRecord) -> "UserResponse":
        return cls(id=user.id, email=user.email, full_name=user.full_name, role=user.role)


class RoleUpdate(BaseModel):
    role: Role


class PlanChange(BaseModel):
    plan: Role


class MealCreateRequest(BaseModel):
    name: str
    description: str | None = None
    price: float = Field(ge=0)
    calories: int = Field(default=0, ge=0)
    protein_g: float = Field(default=0, ge=0)
    carbs_g: float = Field(default=0, ge=0)
    fat_g: float = Field(default=0, ge=0)
    is_vegetarian: bool | None = None
    is_available: bool = True
    category_id: str | None = None
    image_url: str | None = None


class AvailabilityUpdate(BaseModel):
    is_available: bool
