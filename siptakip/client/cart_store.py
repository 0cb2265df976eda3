"""Customer cart persisted on the device."""

from __future__ import annotations

import logging
from decimal import Decimal

from pydantic import ValidationError

from siptakip.client.models import CartLine
from siptakip.client.storage import CART_KEY, LocalStorage

logger = logging.getLogger(__name__)


class CartStore:
    def __init__(self, storage: LocalStorage) -> None:
        self.storage = storage
        try:
            self.lines: list[CartLine] = [CartLine.model_validate(raw) for raw in storage.get(CART_KEY, [])]
        except (ValidationError, TypeError) as exc:
            logger.warning("[CLIENT] Discarding unreadable cart: %s", exc)
            self.lines = []

    def _save(self) -> None:
        self.storage.set(CART_KEY, [line.model_dump(mode="json") for line in self.lines])

    def _find(self, product_id: str) -> CartLine | None:
        return next((line for line in self.lines if line.product_id == product_id), None)

    def add(self, product: dict, quantity: int = 1) -> None:
        line = self._find(product["id"])
        if line is not None:
            line.quantity += quantity
        else:
            self.lines.append(
                CartLine(
                    product_id=product["id"],
                    name=product["name"],
                    price=product["price"],
                    quantity=quantity,
                    image_url=product.get("image_url"),
                )
            )
        self._save()

    def remove(self, product_id: str) -> None:
        self.lines = [line for line in self.lines if line.product_id != product_id]
        self._save()

    def update_quantity(self, product_id: str, quantity: int) -> None:
        """Set a line's quantity; zero or less removes it."""
        if quantity <= 0:
            self.remove(product_id)
            return
        line = self._find(product_id)
        if line is not None:
            line.quantity = quantity
            self._save()

    def clear(self) -> None:
        self.lines = []
        self.storage.remove(CART_KEY)

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    @property
    def subtotal(self) -> Decimal:
        return sum((line.line_total for line in self.lines), Decimal("0.00"))

    @property
    def total(self) -> Decimal:
        return self.subtotal
