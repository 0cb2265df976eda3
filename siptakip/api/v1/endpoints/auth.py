"""Authentication endpoints (API JWT)."""

import logging
from datetime import timedelta

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from siptakip.core.config import settings
from siptakip.core.security import Identity, authenticate, create_identity_token, verify_password
from siptakip.db.session import get_db
from siptakip.models.user import User
from siptakip.schemas.auth import (
    AuthUser,
    CustomerLoginRequest,
    CustomerLoginResponse,
    LoginRequest,
    LoginResponse,
    RestaurantSummary,
)
from siptakip.services.user_service import find_login_user, get_restaurant_by_slug

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    user: User | None = find_login_user(
        db,
        email=payload.email,
        username=payload.username,
        restaurant_slug=payload.restaurant_slug,
        restaurant_id=payload.restaurant_id,
    )
    if user is None or not verify_password(payload.password, user.password_hash):
        logger.info("[AUTH] failed login for %s", payload.email or payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Account is disabled")

    token = create_identity_token(
        Identity(user_id=user.id, restaurant_id=user.restaurant_id, role=user.role)
    )
    logger.info("[AUTH] login user_id=%s role=%s", user.id, user.role)
    return LoginResponse(token=token, user=AuthUser.model_validate(user))


@router.post("/customer-login", response_model=CustomerLoginResponse)
def customer_login(payload: CustomerLoginRequest, db: Session = Depends(get_db)) -> CustomerLoginResponse:
    """QR-menu entry point: a table-bound token issued without a password."""
    restaurant = get_restaurant_by_slug(db, payload.restaurant_slug)
    if restaurant is None or not restaurant.is_active:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Restaurant not found")

    token = create_identity_token(
        Identity(
            user_id="customer",
            restaurant_id=restaurant.id,
            role="customer",
            table_number=payload.table_number,
        ),
        expires_delta=timedelta(hours=settings.customer_token_hours),
    )
    return CustomerLoginResponse(
        token=token,
        restaurant=RestaurantSummary.model_validate(restaurant),
        table_number=payload.table_number,
    )


@router.get("/me", response_model=Identity)
def me(identity: Identity = Depends(authenticate)) -> Identity:
    return identity
