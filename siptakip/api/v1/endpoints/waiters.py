"""Waiter roster endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from siptakip.core.security import Identity, authorize
from siptakip.db.session import get_db
from siptakip.models.table import Waiter
from siptakip.schemas.table import WaiterCreate, WaiterResponse, WaiterUpdate
from siptakip.services import table_service
from siptakip.services.security_guards import ensure_same_tenant, resolve_restaurant_id, scoped_restaurant_id

router: APIRouter = APIRouter()


def _load_waiter(db: Session, identity: Identity, waiter_id: str) -> Waiter:
    waiter = db.get(Waiter, waiter_id)
    if waiter is None:
        raise HTTPException(status_code=404, detail="Waiter not found")
    ensure_same_tenant(identity, waiter.restaurant_id, "Waiter not found")
    return waiter


@router.get("", response_model=list[WaiterResponse])
def list_waiters(
    restaurant_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize("admin", "waiter", "kitchen", "super_admin")),
) -> list[Waiter]:
    return table_service.list_waiters(db, scoped_restaurant_id(identity, restaurant_id))


@router.post("", response_model=WaiterResponse, status_code=status.HTTP_201_CREATED)
def create_waiter(
    payload: WaiterCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize("admin", "super_admin")),
) -> Waiter:
    restaurant_id = resolve_restaurant_id(identity, payload.restaurant_id)
    return table_service.create_waiter(db, restaurant_id, payload.full_name, payload.phone)


@router.patch("/{waiter_id}", response_model=WaiterResponse)
def update_waiter(
    waiter_id: str,
    payload: WaiterUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize("admin", "super_admin")),
) -> Waiter:
    waiter = _load_waiter(db, identity, waiter_id)
    return table_service.update_waiter(db, waiter, payload.changes(nullable={"phone"}))


@router.delete("/{waiter_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_waiter(
    waiter_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize("admin", "super_admin")),
) -> Response:
    waiter = _load_waiter(db, identity, waiter_id)
    db.delete(waiter)
    db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
