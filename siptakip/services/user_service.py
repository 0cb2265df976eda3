"""User service operations."""

from __future__ import annotations

import time
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from siptakip.core.security import get_password_hash
from siptakip.models.restaurant import Restaurant
from siptakip.models.user import User


def new_user_id() -> str:
    return f"usr-{int(time.time() * 1000):x}-{uuid4().hex[:4]}"


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.scalar(select(User).where(User.email == email).limit(1))


def get_user_by_username(db: Session, username: str) -> User | None:
    return db.scalar(select(User).where(User.username == username).limit(1))


def get_user_by_id(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def get_restaurant_by_slug(db: Session, slug: str) -> Restaurant | None:
    return db.scalar(select(Restaurant).where(Restaurant.slug == slug).limit(1))


def find_login_user(
    db: Session,
    *,
    email: str | None,
    username: str | None,
    restaurant_slug: str | None = None,
    restaurant_id: str | None = None,
) -> User | None:
    """Look up a login candidate, optionally narrowed to one restaurant."""
    query = select(User).options(selectinload(User.restaurant))
    if email:
        query = query.where(User.email == email)
    else:
        query = query.where(User.username == username)
    if restaurant_id:
        query = query.where(User.restaurant_id == restaurant_id)
    if restaurant_slug:
        query = query.join(Restaurant, User.restaurant_id == Restaurant.id).where(Restaurant.slug == restaurant_slug)
    return db.scalar(query.limit(1))


def create_user(
    db: Session,
    *,
    password: str,
    role: str,
    restaurant_id: str | None,
    email: str | None = None,
    username: str | None = None,
    full_name: str | None = None,
    user_id: str | None = None,
) -> User:
    user = User(
        id=user_id or new_user_id(),
        restaurant_id=restaurant_id,
        email=email,
        username=username,
        password_hash=get_password_hash(password),
        role=role,
        full_name=full_name,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def update_user(db: Session, user: User, changes: dict) -> User:
    password = changes.pop("password", None)
    if password:
        user.password_hash = get_password_hash(password)
    for field, value in changes.items():
        setattr(user, field, value)
    user.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user
