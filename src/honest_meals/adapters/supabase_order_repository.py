"""Supabase repository for orders."""

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from honest_meals.domain.orders import (
    CartItem,
    CustomerDetails,
    OrderRecord,
    OrderStatus,
)
from honest_meals.services.orders import OrderRepository

_COLUMNS = (
    "id, customer_id, total_amount, status, delivery_address, notes, "
    "payment_method, payment_status, created_at"
)


@dataclass
class SupabaseOrderRepository(OrderRepository):
    """Supabase implementation over ``orders``, ``order_items`` and ``guest_customers``."""

    client: Client

    def create_guest_customer(self, customer: CustomerDetails) -> UUID:
        """Insert a guest customer row."""
        response = (
            self.client.table("guest_customers")
            .insert(
                {
                    "full_name": customer.name,
                    "phone_number": customer.phone,
                    "address": customer.address,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create guest customer in Supabase")
        return UUID(str(response.data[0]["id"]))

    def delete_guest_customer(self, guest_id: UUID) -> None:
        """Delete a guest customer row."""
        self.client.table("guest_customers").delete().eq("id", str(guest_id)).execute()

    def create_order(  # noqa: PLR0913
        self,
        customer_id: UUID,
        total_amount: float,
        delivery_address: str,
        notes: str | None,
        payment_method: str,
    ) -> OrderRecord:
        """Insert a pending order."""
        response = (
            self.client.table("orders")
            .insert(
                {
                    "customer_id": str(customer_id),
                    "total_amount": total_amount,
                    "status": str(OrderStatus.PENDING),
                    "delivery_address": delivery_address,
                    "notes": notes,
                    "payment_method": payment_method,
                    "payment_status": "pending",
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create order in Supabase")
        return _parse_row(response.data[0])

    def create_order_items(self, order_id: UUID, items: Sequence[CartItem]) -> None:
        """Insert a batch of order items."""
        self.client.table("order_items").insert(
            [
                {
                    "order_id": str(order_id),
                    "meal_id": item.meal_id,
                    "quantity": item.quantity,
                    "unit_price": item.unit_price,
                    "total_price": item.total_price,
                }
                for item in items
            ]
        ).execute()

    def delete_order(self, order_id: UUID) -> None:
        """Delete an order."""
        self.client.table("orders").delete().eq("id", str(order_id)).execute()

    def get_order(self, order_id: UUID) -> OrderRecord | None:
        """Return an order by id."""
        response = (
            self.client.table("orders")
            .select(_COLUMNS)
            .eq("id", str(order_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_orders(self, status: OrderStatus | None, limit: int) -> list[OrderRecord]:
        """Return orders newest first."""
        query = self.client.table("orders").select(_COLUMNS)
        if status is not None:
            query = query.eq("status", str(status))
        response = query.order("created_at", desc=True).limit(limit).execute()
        return [_parse_row(row) for row in response.data or []]

    def update_status(self, order_id: UUID, status: OrderStatus) -> None:
        """Change the status and bump ``updated_at``."""
        self.client.table("orders").update(
            {
                "status": str(status),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("id", str(order_id)).execute()


def _parse_row(row: dict[str, object]) -> OrderRecord:
    created_raw = row.get("created_at")
    try:
        status = OrderStatus(row.get("status"))
    except ValueError:
        status = OrderStatus.PENDING
    return OrderRecord(
        id=UUID(str(row["id"])),
        customer_id=UUID(str(row["customer_id"])),
        total_amount=float(row.get("total_amount") or 0.0),
        status=status,
        delivery_address=str(row.get("delivery_address") or ""),
        payment_method=str(row.get("payment_method") or ""),
        payment_status=str(row.get("payment_status") or "pending"),
        notes=row.get("notes"),
        created_at=datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None,
    )
