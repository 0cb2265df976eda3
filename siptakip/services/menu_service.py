"""Menu catalogue helpers shared by the API and the seed."""

from __future__ import annotations

import base64
import binascii
import logging
import re
import time
from datetime import datetime, timezone
from pathlib import Path
from uuid import uuid4

from sqlalchemy.orm import Session, selectinload

from siptakip.models.menu import Category, Product
from siptakip.models.restaurant import Restaurant

logger = logging.getLogger(__name__)

# Sub-categories shown under a parent heading on the customer menu.
CATEGORY_PARENTS: dict[str, str] = {
    "Sıcak Kahveler": "Kahveler",
    "Soğuk Kahveler": "Kahveler",
}

IMAGE_EXTENSIONS: dict[str, str] = {"image/png": ".png", "image/jpeg": ".jpg", "image/webp": ".webp"}
MAX_IMAGE_BYTES: int = 2 * 1024 * 1024
_DATA_URI = re.compile(r"^data:(?P<mime>[\w/+.-]+);base64,(?P<data>.+)$", re.DOTALL)


class CategoryNotFoundError(Exception):
    """Raised when a product names a category outside its restaurant."""


class InvalidImageError(Exception):
    """Raised for uploads that are not a supported base64 image."""


def parent_category_name(name: str) -> str | None:
    return CATEGORY_PARENTS.get(name)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{int(time.time() * 1000)}-{uuid4().hex[:4]}"


def list_restaurants(db: Session) -> list[Restaurant]:
    return db.query(Restaurant).filter(Restaurant.is_active.is_(True)).order_by(Restaurant.name.asc()).all()


def list_categories(db: Session, restaurant_id: str) -> list[Category]:
    return (
        db.query(Category)
        .filter(Category.restaurant_id == restaurant_id)
        .order_by(Category.sort_order.asc(), Category.name.asc())
        .all()
    )


def create_category(db: Session, restaurant_id: str, values: dict) -> Category:
    category = Category(
        id=_new_id("cat"),
        restaurant_id=restaurant_id,
        name=values["name"],
        icon=values.get("icon") or "🍽️",
        sort_order=values.get("sort_order") or 0,
        image_url=values.get("image_url"),
    )
    db.add(category)
    db.commit()
    db.refresh(category)
    return category


def update_category(db: Session, category: Category, changes: dict) -> Category:
    for field, value in changes.items():
        setattr(category, field, value)
    db.commit()
    db.refresh(category)
    return category


def delete_category(db: Session, category: Category) -> None:
    """Delete a category together with its products."""
    db.delete(category)
    db.commit()


def list_products(db: Session, restaurant_id: str, available_only: bool = True) -> list[Product]:
    query = (
        db.query(Product)
        .options(selectinload(Product.category))
        .filter(Product.restaurant_id == restaurant_id)
    )
    if available_only:
        query = query.filter(Product.is_available.is_(True))
    return query.order_by(Product.name.asc()).all()


def _category_in_restaurant(db: Session, category_id: str, restaurant_id: str) -> Category:
    category = db.get(Category, category_id)
    if category is None or category.restaurant_id != restaurant_id:
        raise CategoryNotFoundError("Kategori bulunamadı")
    return category


def create_product(db: Session, restaurant_id: str, values: dict) -> Product:
    _category_in_restaurant(db, values["category_id"], restaurant_id)
    product = Product(
        id=_new_id("prod"),
        restaurant_id=restaurant_id,
        category_id=values["category_id"],
        name=values["name"],
        description=values.get("description"),
        price=values["price"],
        is_available=values.get("is_available", True),
        image_url=values.get("image_url"),
    )
    db.add(product)
    db.commit()
    db.refresh(product)
    return product


def update_product(db: Session, product: Product, changes: dict) -> Product:
    if "category_id" in changes:
        _category_in_restaurant(db, changes["category_id"], product.restaurant_id)
    for field, value in changes.items():
        setattr(product, field, value)
    product.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(product)
    return product


def delete_product(db: Session, product: Product) -> None:
    db.delete(product)
    db.commit()


def update_branding(db: Session, restaurant: Restaurant, changes: dict) -> Restaurant:
    for field, value in changes.items():
        setattr(restaurant, field, value)
    restaurant.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def save_image(uploads_dir: Path, restaurant_id: str, data_uri: str) -> str:
    """Store a base64 data URI and return its public ``/uploads`` path."""
    match = _DATA_URI.match(data_uri.strip())
    if match is None or match.group("mime") not in IMAGE_EXTENSIONS:
        raise InvalidImageError("Invalid image type. Allowed: png, jpeg, webp")
    try:
        contents = base64.b64decode(match.group("data"), validate=True)
    except binascii.Error as exc:
        raise InvalidImageError("Image is not valid base64") from exc
    if len(contents) > MAX_IMAGE_BYTES:
        raise InvalidImageError(f"Image too large. Max size: {MAX_IMAGE_BYTES // (1024 * 1024)}MB")

    target_dir = uploads_dir / restaurant_id
    target_dir.mkdir(parents=True, exist_ok=True)
    filename = f"{uuid4().hex}{IMAGE_EXTENSIONS[match.group('mime')]}"
    (target_dir / filename).write_bytes(contents)
    logger.info("[MENU] stored image %s/%s (%d bytes)", restaurant_id, filename, len(contents))
    return f"/uploads/{restaurant_id}/{filename}"
