"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, date, datetime
from uuid import UUID

import httpx
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.responses import JSONResponse

from honest_meals.api.admin import router as admin_router
from honest_meals.api.schemas import (
    BiometricsRequest,
    BmiRequest,
    BmiResponse,
    FavoriteResponse,
    FavoritesSync,
    HealthProfileRequest,
    HealthProfileResponse,
    JournalEntryRequest,
    JournalEntryResponse,
    JournalEntryUpdate,
    MealResponse,
    MetricsResponse,
    OrderConfirmationResponse,
    OrderRequest,
    OrderResponse,
    PlanChange,
    RecommendationResponse,
    UserResponse,
    WaterRequest,
    WaterResponse,
)
from honest_meals.app_logging import configure_logging
from honest_meals.containers import AppContainer
from honest_meals.domain.health import HealthProfile
from honest_meals.domain.meals import MealCategory
from honest_meals.domain.orders import CartItem, CustomerDetails
from honest_meals.services.journal import summarize_day
from honest_meals.services.metrics import classify_bmi, compute_bmi
from honest_meals.services.orders import OrderError
from honest_meals.services.users import RoleError
from honest_meals.services.water import progress_percent


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(title="Honest Meals", lifespan=lifespan)
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.exception_handler(OrderError)
    async def order_error_handler(request: Request, exc: OrderError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": f"{exc}. Please try again."},
        )

    @app.exception_handler(RoleError)
    async def role_error_handler(request: Request, exc: RoleError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_403_FORBIDDEN, content={"detail": str(exc)}
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/metrics/calculate")
    async def calculate_metrics(body: BiometricsRequest) -> MetricsResponse:
        """Compute BMR, TDEE, calorie target, macros and BMI without saving."""
        snapshot = container.health_service.calculate(body.to_domain())
        return MetricsResponse.from_snapshot(snapshot)

    @app.post("/metrics/bmi")
    async def calculate_bmi(body: BmiRequest) -> BmiResponse:
        """Compute BMI and its category."""
        bmi = compute_bmi(body.weight, body.height)
        return BmiResponse(bmi=bmi, category=classify_bmi(bmi))

    @app.post("/users/{user_id}/health-profile", status_code=status.HTTP_201_CREATED)
    async def save_health_profile(
        user_id: UUID, body: HealthProfileRequest
    ) -> dict[str, object]:
        """Save a new health profile entry for the user."""
        profile = container.health_service.save_profile(
            user_id, body.to_domain(), body.food_preference
        )
        logger.info("Saved health profile %s for user %s", profile.id, user_id)
        return _profile_payload(container, profile)

    @app.get("/users/{user_id}/health-profile")
    async def get_health_profile(user_id: UUID) -> dict[str, object]:
        """Return the latest health profile with its computed metrics."""
        profile = container.health_service.get_latest_profile(user_id)
        if profile is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _profile_payload(container, profile)

    @app.get("/users/{user_id}/health-profile/history")
    async def health_history(user_id: UUID, limit: int = 10) -> dict[str, object]:
        """Return saved health profiles, newest first."""
        history = container.health_service.get_history(user_id, limit)
        return {"history": [HealthProfileResponse.from_domain(p) for p in history]}

    @app.get("/users/{user_id}/weight-history")
    async def weight_history(user_id: UUID, limit: int = 10) -> dict[str, object]:
        """Return weight and BMI per saved profile."""
        records = container.health_service.get_weight_history(user_id, limit)
        return {
            "history": [
                {
                    "weight": record.weight_kg,
                    "height": record.height_cm,
                    "bmi": record.bmi,
                    "category": record.bmi_category,
                    "recorded_at": record.recorded_at.isoformat(),
                }
                for record in records
            ]
        }

    @app.get("/meals")
    async def list_meals() -> dict[str, object]:
        """Return the meals currently on the menu."""
        meals = container.catalog_service.list_available()
        return {"meals": [MealResponse.from_domain(meal) for meal in meals]}

    @app.get("/users/{user_id}/recommendations")
    async def recommendations(
        user_id: UUID, category: MealCategory = MealCategory.ALL, full: bool = False
    ) -> RecommendationResponse:
        """Return meals ranked for the user's goal and dietary preference."""
        service = container.recommendation_service
        result = (
            service.browse(user_id, category)
            if full
            else service.recommend(user_id, category)
        )
        profile = result.profile
        return RecommendationResponse(
            personalized=result.is_personalized,
            goal=str(profile.goal) if profile else None,
            target_calories=profile.target_calories if profile else None,
            meals=[MealResponse.from_domain(meal) for meal in result.meals],
        )

    @app.get("/users/{user_id}/favorites")
    async def list_favorites(user_id: UUID) -> dict[str, object]:
        """Return favorite meals with the user's order history for each."""
        favorites = container.favorites_service.list_favorites(user_id)
        return {"favorites": [FavoriteResponse.from_domain(f) for f in favorites]}

    @app.put("/users/{user_id}/favorites/{meal_id}")
    async def add_favorite(user_id: UUID, meal_id: str) -> dict[str, object]:
        """Mark a meal as favorite."""
        added = container.favorites_service.add(user_id, meal_id)
        return {"meal_id": meal_id, "favorite": True, "added": added}

    @app.delete(
        "/users/{user_id}/favorites/{meal_id}",
        status_code=status.HTTP_204_NO_CONTENT,
    )
    async def remove_favorite(user_id: UUID, meal_id: str) -> None:
        """Unmark a favorite meal."""
        if not container.favorites_service.remove(user_id, meal_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    @app.post("/users/{user_id}/favorites/sync")
    async def sync_favorites(user_id: UUID, body: FavoritesSync) -> dict[str, object]:
        """Store favorites picked before signing in."""
        added = container.favorites_service.sync(user_id, body.meal_ids)
        return {
            "added": added,
            "favorites": container.favorites_service.list_meal_ids(user_id),
        }

    @app.put("/users/{user_id}/plan")
    async def change_plan(user_id: UUID, body: PlanChange) -> UserResponse:
        """Switch the user's subscription plan."""
        user = container.user_service.change_plan(user_id, body.plan)
        if user is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return UserResponse.from_domain(user)

    @app.get("/users/{user_id}/journal")
    async def journal_day(user_id: UUID, day: date | None = None) -> dict[str, object]:
        """Return a day's journal grouped by meal type with totals."""
        resolved_day = day or _today()
        entries = container.journal_service.list_day(user_id, resolved_day)
        grouped = container.journal_service.group_by_meal_type(entries)
        totals = summarize_day(resolved_day, entries)
        return {
            "day": resolved_day.isoformat(),
            "meals": {
                str(meal_type): [JournalEntryResponse.from_domain(e) for e in items]
                for meal_type, items in grouped.items()
            },
            "totals": {
                "calories": totals.calories,
                "protein_g": totals.protein_g,
                "carbs_g": totals.carbs_g,
                "fat_g": totals.fat_g,
            },
        }

    @app.post("/users/{user_id}/journal", status_code=status.HTTP_201_CREATED)
    async def add_journal_entry(
        user_id: UUID, body: JournalEntryRequest, day: date | None = None
    ) -> JournalEntryResponse:
        """Add a food to the user's journal."""
        entry = container.journal_service.add_entry(
            user_id, day or _today(), body.model_dump()
        )
        return JournalEntryResponse.from_domain(entry)

    @app.patch("/journal/{entry_id}")
    async def update_journal_entry(
        entry_id: UUID, body: JournalEntryUpdate
    ) -> JournalEntryResponse:
        """Edit a journal entry."""
        entry = container.journal_service.update_entry(
            entry_id, body.model_dump(exclude_unset=True)
        )
        if entry is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return JournalEntryResponse.from_domain(entry)

    @app.delete("/journal/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
    async def delete_journal_entry(entry_id: UUID) -> None:
        """Remove a journal entry."""
        if not container.journal_service.delete_entry(entry_id):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

    @app.get("/foods/search")
    async def search_foods(q: str, limit: int = 5) -> dict[str, object]:
        """Search the food database to prefill a journal entry."""
        try:
            foods = await container.nutrition_service.search(q, limit)
        except httpx.HTTPError as exc:
            logger.warning("Food search failed for %r: %s", q, exc)
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        return {
            "foods": [
                {
                    "fdc_id": food.fdc_id,
                    "description": food.description,
                    "brand": food.brand,
                    "data_type": food.data_type,
                }
                for food in foods
            ]
        }

    @app.get("/foods/{fdc_id}")
    async def get_food(fdc_id: int) -> dict[str, object]:
        """Return calories and macros for a food."""
        try:
            details = await container.nutrition_service.get_food(fdc_id)
        except httpx.HTTPError as exc:
            logger.warning("Food lookup failed for %s: %s", fdc_id, exc)
            raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY) from exc
        return {
            "fdc_id": details.summary.fdc_id,
            "description": details.summary.description,
            "serving_size": details.serving_size,
            "calories": details.macros.calories,
            "protein_g": details.macros.protein_g,
            "carbs_g": details.macros.carbs_g,
            "fat_g": details.macros.fat_g,
        }

    @app.get("/users/{user_id}/water")
    async def water_day(user_id: UUID, day: date | None = None) -> WaterResponse:
        """Return water intake for a day."""
        record = container.water_service.get_day(user_id, day or _today())
        return WaterResponse.from_domain(record, progress_percent(record))

    @app.post("/users/{user_id}/water")
    async def log_water(user_id: UUID, body: WaterRequest) -> WaterResponse:
        """Add or remove water, optionally changing the day's goal."""
        resolved_day = body.day or _today()
        service = container.water_service
        if body.goal_ml is not None:
            service.set_goal(user_id, resolved_day, body.goal_ml)
        record = service.add(user_id, resolved_day, body.amount_ml)
        return WaterResponse.from_domain(record, progress_percent(record))

    @app.get("/users/{user_id}/water/history")
    async def water_history(user_id: UUID, limit: int = 7) -> dict[str, object]:
        """Return recent days of water intake."""
        records = container.water_service.get_history(user_id, limit)
        return {
            "history": [
                WaterResponse.from_domain(record, progress_percent(record))
                for record in records
            ]
        }

    @app.post("/orders", status_code=status.HTTP_201_CREATED)
    async def place_order(body: OrderRequest) -> OrderConfirmationResponse:
        """Create an order and return the WhatsApp link announcing it."""
        confirmation = container.order_service.place_order(
            customer=CustomerDetails(
                name=body.customer_name,
                phone=body.customer_phone,
                address=body.customer_address,
                note=body.customer_note,
            ),
            cart=[
                CartItem(
                    meal_id=item.meal_id,
                    name=item.name,
                    unit_price=item.price,
                    quantity=item.quantity,
                )
                for item in body.cart
            ],
            user_id=body.user_id,
            payment_method=body.payment_method,
        )
        return OrderConfirmationResponse(
            order=OrderResponse.from_domain(confirmation.order),
            subtotal=confirmation.subtotal,
            delivery_fee=confirmation.delivery_fee,
            whatsapp_url=confirmation.whatsapp_url,
        )

    @app.get("/orders/{order_id}")
    async def get_order(order_id: UUID) -> OrderResponse:
        """Return an order."""
        order = container.order_service.get_order(order_id)
        if order is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return OrderResponse.from_domain(order)

    return app


def _today() -> date:
    return datetime.now(tz=UTC).date()


def _profile_payload(container: AppContainer, profile: HealthProfile) -> dict[str, object]:
    snapshot = container.health_service.calculate(profile.biometrics)
    return {
        "profile": HealthProfileResponse.from_domain(profile),
        "metrics": MetricsResponse.from_snapshot(snapshot),
    }
