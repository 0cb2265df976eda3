"""Application models package."""

from siptakip.models.integration import PlatformIntegration
from siptakip.models.menu import Category, Product
from siptakip.models.order import Order, OrderItem
from siptakip.models.restaurant import Restaurant
from siptakip.models.table import DiningTable, Waiter
from siptakip.models.user import User

__all__ = [
    "Restaurant", "User", "Category", "Product", "DiningTable", "Waiter", "Order", "OrderItem",
    "PlatformIntegration",
]
