"""Checkout: order records plus a WhatsApp announcement link."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from urllib.parse import quote
from uuid import UUID

from honest_meals.domain.orders import (
    CartItem,
    CustomerDetails,
    OrderConfirmation,
    OrderRecord,
    OrderStatus,
)
from honest_meals.services.users import UserRepository

ORDER_ITEM_BATCH_SIZE = 10

_logger = logging.getLogger(__name__)


class OrderError(RuntimeError):
    """Raised when an order could not be written completely."""


class OrderRepository(Protocol):
    """Persistence interface for orders."""

    def create_guest_customer(self, customer: CustomerDetails) -> UUID:
        """Create a guest customer row and return its id."""

    def delete_guest_customer(self, guest_id: UUID) -> None:
        """Delete a guest customer row."""

    def create_order(  # noqa: PLR0913
        self,
        customer_id: UUID,
        total_amount: float,
        delivery_address: str,
        notes: str | None,
        payment_method: str,
    ) -> OrderRecord:
        """Create a pending order and return it."""

    def create_order_items(self, order_id: UUID, items: Sequence[CartItem]) -> None:
        """Insert one batch of order items."""

    def delete_order(self, order_id: UUID) -> None:
        """Delete an order row."""

    def get_order(self, order_id: UUID) -> OrderRecord | None:
        """Return an order by id."""

    def list_orders(self, status: OrderStatus | None, limit: int) -> list[OrderRecord]:
        """Return orders newest first."""

    def update_status(self, order_id: UUID, status: OrderStatus) -> None:
        """Change an order's status."""


@dataclass
class OrderService:
    """Place orders and manage their status."""

    repository: OrderRepository
    user_repository: UserRepository
    whatsapp_number: str
    delivery_fee: float = 40.0
    brand_name: str = "Honest Meals"
    currency_symbol: str = "₹"

    def place_order(
        self,
        customer: CustomerDetails,
        cart: Sequence[CartItem],
        user_id: UUID | None = None,
        payment_method: str = "cash_on_delivery",
    ) -> OrderConfirmation:
        """Persist an order with its items and build the WhatsApp link.

        Items are written in batches. If any batch fails, the order row and a
        guest customer row created for it are removed again and ``OrderError``
        is raised.
        """
        _validate_checkout(customer, cart)
        guest_id: UUID | None = None
        if user_id is not None:
            self.user_repository.upsert_contact(
                user_id, customer.name, customer.phone, customer.address
            )
            customer_id = user_id
        else:
            guest_id = self.repository.create_guest_customer(customer)
            customer_id = guest_id

        subtotal = sum(item.total_price for item in cart)
        order = self.repository.create_order(
            customer_id=customer_id,
            total_amount=subtotal + self.delivery_fee,
            delivery_address=customer.address,
            notes=customer.note or None,
            payment_method=payment_method,
        )
        try:
            for start in range(0, len(cart), ORDER_ITEM_BATCH_SIZE):
                self.repository.create_order_items(
                    order.id, cart[start : start + ORDER_ITEM_BATCH_SIZE]
                )
        except Exception as exc:
            _logger.exception("Failed to store items for order %s", order.id)
            self._roll_back(order.id, guest_id)
            raise OrderError("Failed to create order items") from exc

        _logger.info("Placed order %s for customer %s", order.id, customer_id)
        return OrderConfirmation(
            order=order,
            subtotal=subtotal,
            delivery_fee=self.delivery_fee,
            whatsapp_url=self.build_whatsapp_link(customer, cart),
        )

    def _roll_back(self, order_id: UUID, guest_id: UUID | None) -> None:
        """Remove the rows written for a failed order, logging any failure."""
        try:
            self.repository.delete_order(order_id)
        except Exception:
            _logger.exception("Failed to delete order %s during rollback", order_id)
        if guest_id is None:
            return
        try:
            self.repository.delete_guest_customer(guest_id)
        except Exception:
            _logger.exception(
                "Failed to delete guest customer %s during rollback", guest_id
            )

    def build_whatsapp_link(
        self, customer: CustomerDetails, cart: Sequence[CartItem]
    ) -> str:
        """Return a wa.me link prefilled with the order summary."""
        subtotal = sum(item.total_price for item in cart)
        money = self.currency_symbol
        lines = [
            f"*New Order from {self.brand_name}*",
            "",
            f"*Name:* {customer.name}",
            f"*Phone:* {customer.phone}",
            f"*Address:* {customer.address}",
            "",
            "*Order Details:*",
        ]
        lines.extend(
            f"{index}. {item.name} x {item.quantity} - {money}{item.total_price:.2f}"
            for index, item in enumerate(cart, start=1)
        )
        lines.extend(
            [
                "",
                f"*Subtotal:* {money}{subtotal:.2f}",
                f"*Delivery Fee:* {money}{self.delivery_fee:.2f}",
                f"*Total:* {money}{subtotal + self.delivery_fee:.2f}",
            ]
        )
        if customer.note:
            lines.extend(["", f"*Note:* {customer.note}"])
        message = "\n".join(lines) + "\n"
        return f"https://wa.me/{self.whatsapp_number}?text={quote(message, safe='')}"

    def get_order(self, order_id: UUID) -> OrderRecord | None:
        return self.repository.get_order(order_id)

    def list_orders(
        self, status: OrderStatus | None = None, limit: int = 50
    ) -> list[OrderRecord]:
        return self.repository.list_orders(status, limit)

    def update_status(self, order_id: UUID, status: OrderStatus) -> OrderRecord | None:
        """Move an order to a new status; returns None for unknown orders."""
        if self.repository.get_order(order_id) is None:
            return None
        self.repository.update_status(order_id, status)
        _logger.info("Order %s moved to %s", order_id, status)
        return self.repository.get_order(order_id)


def _validate_checkout(customer: CustomerDetails, cart: Sequence[CartItem]) -> None:
    if not cart:
        raise ValueError("Cart is empty")
    if not (customer.name.strip() and customer.phone.strip() and customer.address.strip()):
        raise ValueError("Name, phone and address are required")
    for item in cart:
        if item.quantity <= 0:
            raise ValueError(f"Invalid quantity for {item.name}")
