"""Table endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from siptakip.core.security import Identity, authorize
from siptakip.db.session import get_db
from siptakip.models.table import DiningTable
from siptakip.schemas.table import TableCreate, TableResponse, TableUpdate
from siptakip.services import table_service
from siptakip.services.security_guards import ensure_same_tenant, resolve_restaurant_id, scoped_restaurant_id

router: APIRouter = APIRouter()

STAFF = ("admin", "waiter", "kitchen", "super_admin")


def _load_table(db: Session, identity: Identity, table_id: str) -> DiningTable:
    table = db.get(DiningTable, table_id)
    if table is None:
        raise HTTPException(status_code=404, detail="Table not found")
    ensure_same_tenant(identity, table.restaurant_id, "Table not found")
    return table


@router.get("", response_model=list[TableResponse])
def list_tables(
    restaurant_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*STAFF)),
) -> list[DiningTable]:
    return table_service.list_tables(db, scoped_restaurant_id(identity, restaurant_id))


@router.post("", response_model=TableResponse, status_code=status.HTTP_201_CREATED)
def create_table(
    payload: TableCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize("admin", "super_admin")),
) -> DiningTable:
    restaurant_id = resolve_restaurant_id(identity, payload.restaurant_id)
    try:
        return table_service.create_table(db, restaurant_id, payload.table_number)
    except table_service.DuplicateTableError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.patch("/{table_id}", response_model=TableResponse)
def update_table(
    table_id: str,
    payload: TableUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize("admin", "super_admin")),
) -> DiningTable:
    table = _load_table(db, identity, table_id)
    table.is_active = payload.is_active
    db.commit()
    db.refresh(table)
    return table


@router.delete("/{table_id}")
def delete_table(
    table_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize("admin", "super_admin")),
) -> dict[str, bool]:
    table = _load_table(db, identity, table_id)
    try:
        table_service.delete_table(db, table)
    except table_service.TableHasActiveOrdersError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return {"success": True}
