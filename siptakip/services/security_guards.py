"""Tenant scoping guards shared by the resource routers."""

from __future__ import annotations

from fastapi import HTTPException

from siptakip.core.security import Identity


def resolve_restaurant_id(identity: Identity, requested: str | None = None) -> str:
    """Return the restaurant the caller acts on.

    Platform operators may name any restaurant; everyone else is pinned to the
    restaurant in their token.
    """
    if identity.role == "super_admin":
        restaurant_id = requested or identity.restaurant_id
    else:
        restaurant_id = identity.restaurant_id
    if not restaurant_id:
        raise HTTPException(status_code=400, detail="restaurant_id is required")
    return restaurant_id


def scoped_restaurant_id(identity: Identity, requested: str | None = None) -> str | None:
    """Like resolve_restaurant_id, but platform operators may see all tenants."""
    if identity.role == "super_admin":
        return requested or identity.restaurant_id
    return resolve_restaurant_id(identity)


def ensure_same_tenant(identity: Identity, restaurant_id: str | None, detail: str) -> None:
    """Answer 404 for resources of another tenant to avoid leaking ids."""
    if identity.role == "super_admin":
        return
    if restaurant_id is None or restaurant_id != identity.restaurant_id:
        raise HTTPException(status_code=404, detail=detail)
