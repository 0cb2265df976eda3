"""Restaurant menu for the customer screen and the admin menu tab."""

from __future__ import annotations

import logging
from collections import defaultdict
from decimal import Decimal
from typing import Any

from siptakip.client.gateway import ApiGateway, ServiceUnavailableError
from siptakip.client.models import CartLine
from siptakip.db.seed import DEMO_MENU, DEMO_RESTAURANT_ID
from siptakip.services.menu_service import parent_category_name

logger = logging.getLogger(__name__)


def demo_menu() -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
    """Categories and products shown when the API cannot be reached."""
    categories: list[dict[str, Any]] = []
    products: list[dict[str, Any]] = []
    for category_id, name, icon, sort_order, items in DEMO_MENU:
        categories.append(
            {
                "id": category_id,
                "restaurant_id": DEMO_RESTAURANT_ID,
                "name": name,
                "icon": icon,
                "sort_order": sort_order,
                "image_url": None,
                "parent_name": parent_category_name(name),
            }
        )
        for product_id, product_name, description, price in items:
            products.append(
                {
                    "id": product_id,
                    "restaurant_id": DEMO_RESTAURANT_ID,
                    "category_id": category_id,
                    "name": product_name,
                    "description": description,
                    "price": price,
                    "is_available": True,
                    "image_url": None,
                }
            )
    return categories, products


class MenuStore:
    def __init__(self, gateway: ApiGateway, restaurant_id: str | None = None) -> None:
        self.gateway = gateway
        self.restaurant_id = restaurant_id
        self.restaurant: dict[str, Any] | None = None
        self.categories: list[dict[str, Any]] = []
        self.products: list[dict[str, Any]] = []
        self.using_demo = False

    def load(self, include_unavailable: bool = False) -> None:
        """Fetch restaurant, categories and products; fall back to the demo menu offline.

        ``include_unavailable`` lists switched-off products too (admin token required).
        """
        params = {"restaurant_id": self.restaurant_id} if self.restaurant_id else None
        products_path = "/menu/products/all" if include_unavailable else "/menu/products"
        try:
            restaurants = self.gateway.get("/menu/restaurants")
            self.categories = self.gateway.get("/menu/categories", params=params)
            self.products = self.gateway.get(products_path, params=params)
        except ServiceUnavailableError:
            logger.warning("[CLIENT] Menu unavailable, showing demo menu")
            self.categories, self.products = demo_menu()
            self.restaurant = None
            self.using_demo = True
            return

        self.restaurant = next((item for item in restaurants if item["id"] == self.restaurant_id), None)
        self.using_demo = False

    @property
    def restaurant_name(self) -> str:
        return self.restaurant["name"] if self.restaurant else "SipTakip"

    def get_item_by_id(self, product_id: str) -> dict[str, Any] | None:
        return next((product for product in self.products if product["id"] == product_id), None)

    def items_by_category(self, category_id: str) -> list[dict[str, Any]]:
        return [product for product in self.products if product["category_id"] == category_id]

    def grouped_categories(self) -> dict[str, list[dict[str, Any]]]:
        """Categories keyed by display group; ungrouped categories stand alone."""
        groups: dict[str, list[dict[str, Any]]] = defaultdict(list)
        for category in sorted(self.categories, key=lambda item: item["sort_order"]):
            groups[category.get("parent_name") or category["name"]].append(category)
        return dict(groups)

    def cart_lines(self, quantities: dict[str, int]) -> list[CartLine]:
        """Build order lines from product quantities, skipping zero and unknown ids."""
        lines: list[CartLine] = []
        for product_id, quantity in quantities.items():
            product = self.get_item_by_id(product_id)
            if product is None or quantity <= 0:
                continue
            lines.append(
                CartLine(
                    product_id=product_id,
                    name=product["name"],
                    price=product["price"],
                    quantity=quantity,
                    image_url=product.get("image_url"),
                )
            )
        return lines

    # admin menu management; each write reloads the full list

    def create_category(self, name: str, icon: str | None = None, sort_order: int = 0) -> dict[str, Any]:
        created = self.gateway.post("/menu/categories", {"name": name, "icon": icon, "sortOrder": sort_order})
        self.load(include_unavailable=True)
        return created

    def delete_category(self, category_id: str) -> None:
        self.gateway.delete(f"/menu/categories/{category_id}")
        self.load(include_unavailable=True)

    def create_product(
        self,
        name: str,
        price: Decimal,
        category_id: str,
        description: str | None = None,
    ) -> dict[str, Any]:
        created = self.gateway.post(
            "/menu/products",
            {"name": name, "price": str(price), "categoryId": category_id, "description": description},
        )
        self.load(include_unavailable=True)
        return created

    def update_product(self, product_id: str, **changes: Any) -> dict[str, Any]:
        updated = self.gateway.patch(f"/menu/products/{product_id}", changes)
        self.load(include_unavailable=True)
        return updated

    def set_product_available(self, product_id: str, is_available: bool) -> dict[str, Any]:
        return self.update_product(product_id, isAvailable=is_available)

    def delete_product(self, product_id: str) -> None:
        self.gateway.delete(f"/menu/products/{product_id}")
        self.load(include_unavailable=True)
