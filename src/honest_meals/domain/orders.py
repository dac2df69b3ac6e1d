"""Domain models for orders."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class OrderStatus(StrEnum):
    """Linear lifecycle of an order."""

    PENDING = "pending"
    APPROVED = "approved"
    PREPARING = "preparing"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class CartItem:
    """A meal in the cart with its quantity."""

    meal_id: str
    name: str
    unit_price: float
    quantity: int

    @property
    def total_price(self) -> float:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class CustomerDetails:
    """Contact and delivery details entered at checkout."""

    name: str
    phone: str
    address: str
    note: str | None = None


@dataclass(frozen=True)
class OrderRecord:
    """An order row."""

    id: UUID
    customer_id: UUID
    total_amount: float
    status: OrderStatus
    delivery_address: str
    payment_method: str
    payment_status: str
    notes: str | None
    created_at: datetime | None


@dataclass(frozen=True)
class OrderConfirmation:
    """A placed order and the WhatsApp link that announces it."""

    order: OrderRecord
    subtotal: float
    delivery_fee: float
    whatsapp_url: str
