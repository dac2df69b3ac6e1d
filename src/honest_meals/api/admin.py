"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from honest_meals.api.schemas import (
    AvailabilityUpdate,
    MealCreateRequest,
    MealResponse,
    OrderResponse,
    OrderStatusUpdate,
    RoleUpdate,
    UserResponse,
)
from honest_meals.domain.orders import OrderStatus  # noqa: TC001

if TYPE_CHECKING:
    from honest_meals.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/users", dependencies=[Depends(require_admin)])
async def list_users(request: Request, search: str | None = None) -> dict[str, object]:
    """Return users, optionally filtered by name or email."""
    container: AppContainer = request.app.state.container
    users = container.user_service.list_users(search)
    return {"users": [UserResponse.from_domain(user) for user in users]}


@router.put("/users/{user_id}/role", dependencies=[Depends(require_admin)])
async def set_user_role(
    user_id: UUID, body: RoleUpdate, request: Request
) -> UserResponse:
    """Change a user's role."""
    container: AppContainer = request.app.state.container
    if container.user_service.get_user(user_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    container.user_service.set_role(user_id, body.role)
    user = container.user_service.get_user(user_id)
    return UserResponse.from_domain(user)


@router.get("/orders", dependencies=[Depends(require_admin)])
async def list_orders(
    request: Request,
    status_filter: OrderStatus | None = Query(default=None, alias="status"),
    limit: int = 50,
) -> dict[str, object]:
    """Return recent orders, optionally for one status."""
    container: AppContainer = request.app.state.container
    orders = container.order_service.list_orders(status_filter, limit)
    return {"orders": [OrderResponse.from_domain(order) for order in orders]}


@router.put("/orders/{order_id}/status", dependencies=[Depends(require_admin)])
async def update_order_status(
    order_id: UUID, body: OrderStatusUpdate, request: Request
) -> OrderResponse:
    """Move an order to a new status."""
    container: AppContainer = request.app.state.container
    order = container.order_service.update_status(order_id, body.status)
    if order is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return OrderResponse.from_domain(order)


@router.post(
    "/meals",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
async def create_meal(body: MealCreateRequest, request: Request) -> MealResponse:
    """Add a meal to the catalog."""
    container: AppContainer = request.app.state.container
    try:
        meal = container.catalog_service.create_meal(body.model_dump())
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
        ) from exc
    return MealResponse.from_domain(meal)


@router.put("/meals/{meal_id}/availability", dependencies=[Depends(require_admin)])
async def set_meal_availability(
    meal_id: str, body: AvailabilityUpdate, request: Request
) -> dict[str, object]:
    """Show or hide a meal."""
    container: AppContainer = request.app.state.container
    if container.catalog_service.get_meal(meal_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    container.catalog_service.set_availability(meal_id, body.is_available)
    return {"id": meal_id, "is_available": body.is_available}
