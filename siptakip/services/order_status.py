"""Order status transition helpers."""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from siptakip.models.order import Order


class OrderStatus(str, Enum):
    IN_KITCHEN = "Mutfakta"
    READY = "Hazır"
    DELIVERED = "Teslim Edildi"
    COURIER_DELIVERED = "Kuryeye Teslim Edildi"
    PAID = "Ödendi"
    CANCELLED = "İptal"


class OrderSource(str, Enum):
    RESTAURANT = "restaurant"
    YEMEKSEPETI = "yemeksepeti"
    TRENDYOL = "trendyol"
    GETIR = "getir"


# Statuses that count as revenue and stamp paid_at.
PAID_STATUSES: frozenset[OrderStatus] = frozenset({OrderStatus.PAID, OrderStatus.COURIER_DELIVERED})
TERMINAL_STATUSES: frozenset[OrderStatus] = frozenset({OrderStatus.PAID, OrderStatus.CANCELLED})

ALLOWED_TRANSITIONS: dict[OrderStatus, set[OrderStatus]] = {
    OrderStatus.IN_KITCHEN: {OrderStatus.READY, OrderStatus.CANCELLED},
    OrderStatus.READY: {OrderStatus.DELIVERED, OrderStatus.COURIER_DELIVERED, OrderStatus.CANCELLED},
    OrderStatus.DELIVERED: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.COURIER_DELIVERED: {OrderStatus.PAID, OrderStatus.CANCELLED},
    OrderStatus.PAID: set(),
    OrderStatus.CANCELLED: set(),
}

# Targets each staff role may set; admins act as cashier and may set any.
ROLE_TARGETS: dict[str, set[OrderStatus]] = {
    "kitchen": {OrderStatus.READY, OrderStatus.CANCELLED},
    "waiter": {OrderStatus.DELIVERED, OrderStatus.COURIER_DELIVERED},
    "admin": set(OrderStatus),
    "super_admin": set(OrderStatus),
}


class InvalidStatusTransitionError(Exception):
    """Raised when an order cannot move to the requested status."""


def can_transition(current: OrderStatus | str, new: OrderStatus | str) -> bool:
    """Return whether order can move from current to new status."""
    return OrderStatus(new) in ALLOWED_TRANSITIONS.get(OrderStatus(current), set())


def role_can_set(role: str, new: OrderStatus | str) -> bool:
    return OrderStatus(new) in ROLE_TARGETS.get(role, set())


def set_status(order: Order, new_status: OrderStatus, now: datetime) -> bool:
    """Move order to new_status; return False when it already had it."""
    current = OrderStatus(order.status)
    if current == new_status:
        return False
    if not can_transition(current, new_status):
        raise InvalidStatusTransitionError(f"Cannot change status from {current.value} to {new_status.value}")

    order.status = new_status.value
    if new_status in PAID_STATUSES and order.paid_at is None:
        order.paid_at = now
    return True
