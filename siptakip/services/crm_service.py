"""Platform operator tooling: tenants and their staff accounts."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from decimal import Decimal
from uuid import uuid4

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from siptakip.models.restaurant import Restaurant
from siptakip.models.user import STAFF_USER_ROLES, User
from siptakip.schemas.crm import CrmStats
from siptakip.services import user_service

logger = logging.getLogger(__name__)


class DuplicateSlugError(Exception):
    """Raised when a restaurant slug is already taken."""


class DuplicateUsernameError(Exception):
    """Raised when a staff username is already taken."""


def crm_stats(db: Session) -> CrmStats:
    restaurants = db.query(Restaurant).all()
    counts = {status: 0 for status in ("lead", "trial", "active", "expired")}
    revenue = Decimal("0.00")
    for restaurant in restaurants:
        counts[restaurant.contract_status] = counts.get(restaurant.contract_status, 0) + 1
        if restaurant.contract_status in {"active", "trial"}:
            revenue += restaurant.monthly_fee or Decimal("0.00")
    return CrmStats(
        total=len(restaurants),
        active=counts["active"],
        trial=counts["trial"],
        leads=counts["lead"],
        expired=counts["expired"],
        monthly_revenue=revenue,
    )


def list_restaurants(db: Session, status: str | None = None) -> list[Restaurant]:
    query = db.query(Restaurant)
    if status:
        query = query.filter(Restaurant.contract_status == status)
    return query.order_by(Restaurant.created_at.desc()).all()


def create_restaurant(db: Session, values: dict) -> Restaurant:
    if db.query(Restaurant.id).filter(Restaurant.slug == values["slug"]).first() is not None:
        raise DuplicateSlugError("Bu slug zaten kullanılıyor")
    restaurant = Restaurant(
        id=f"rest-{int(time.time() * 1000):x}-{uuid4().hex[:4]}",
        is_active=True,
        updated_at=datetime.now(timezone.utc),
        **values,
    )
    db.add(restaurant)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateSlugError("Bu slug zaten kullanılıyor") from exc
    db.refresh(restaurant)
    logger.info("[CRM] restaurant %s created (%s)", restaurant.slug, restaurant.contract_status)
    return restaurant


def update_restaurant(db: Session, restaurant: Restaurant, changes: dict) -> Restaurant:
    for field, value in changes.items():
        setattr(restaurant, field, value)
    restaurant.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(restaurant)
    return restaurant


def list_staff_users(db: Session, restaurant_id: str | None = None) -> list[User]:
    query = db.query(User).filter(User.role.in_(STAFF_USER_ROLES))
    if restaurant_id:
        query = query.filter(User.restaurant_id == restaurant_id)
    return query.order_by(User.created_at.desc()).all()


def create_staff_user(db: Session, values: dict) -> User:
    try:
        return user_service.create_user(db, **values)
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateUsernameError("Bu kullanıcı adı zaten kullanılıyor") from exc


def update_staff_user(db: Session, user: User, changes: dict) -> User:
    try:
        return user_service.update_user(db, user, changes)
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateUsernameError("Bu kullanıcı adı zaten kullanılıyor") from exc


def delete_staff_user(db: Session, user: User) -> None:
    db.delete(user)
    db.commit()
