"""Security utilities for password hashing and JWT-based auth."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from siptakip.core.config import settings

pwd_context: CryptContext = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")
bearer_scheme: HTTPBearer = HTTPBearer(auto_error=False)

STAFF_ROLES: frozenset[str] = frozenset({"admin", "waiter", "kitchen", "super_admin"})
ALL_ROLES: frozenset[str] = STAFF_ROLES | {"customer"}


class Identity(BaseModel):
    """Decoded claims of a bearer token."""

    user_id: str
    restaurant_id: str | None = None
    role: str
    table_number: int | None = None


def get_password_hash(password: str) -> str:
    """Hash a plaintext password."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict[str, Any], expires_delta: timedelta | None = None) -> str:
    """Create a signed JWT access token from payload data."""
    to_encode: dict[str, Any] = data.copy()
    expire: datetime = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.jwt_expire_minutes)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def create_identity_token(identity: Identity, expires_delta: timedelta | None = None) -> str:
    """Issue a token carrying user id, tenant id and role."""
    claims: dict[str, Any] = {
        "sub": identity.user_id,
        "restaurant_id": identity.restaurant_id,
        "role": identity.role,
    }
    if identity.table_number is not None:
        claims["table_number"] = identity.table_number
    return create_access_token(claims, expires_delta=expires_delta)


def verify_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token payload."""
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        ) from exc

    return payload


def _identity_from_payload(payload: dict[str, Any]) -> Identity:
    user_id = payload.get("sub")
    role = payload.get("role")
    if not user_id or role not in ALL_ROLES:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token",
        )
    return Identity(
        user_id=str(user_id),
        restaurant_id=payload.get("restaurant_id"),
        role=role,
        table_number=payload.get("table_number"),
    )


def optional_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> Identity | None:
    """Return the caller identity when a bearer token is present."""
    if credentials is None:
        return None
    return _identity_from_payload(verify_token(credentials.credentials))


def authenticate(identity: Identity | None = Depends(optional_identity)) -> Identity:
    """Require a valid bearer token."""
    if identity is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    return identity


def authorize(*roles: str) -> Callable[..., Identity]:
    """Build a dependency that admits only the given roles."""
    allowed: frozenset[str] = frozenset(roles)

    def dependency(identity: Identity | None = Depends(optional_identity)) -> Identity:
        if identity is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication required",
            )
        if identity.role not in allowed:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return identity

    return dependency
