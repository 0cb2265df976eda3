"""Platform CRM endpoints (super admin only)."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from siptakip.core.security import authorize
from siptakip.db.session import get_db
from siptakip.models.restaurant import Restaurant
from siptakip.models.user import STAFF_USER_ROLES, User
from siptakip.schemas.crm import (
    ContractStatus,
    CrmRestaurantResponse,
    CrmStats,
    RestaurantCreate,
    RestaurantUpdate,
    StaffUserCreate,
    StaffUserResponse,
    StaffUserUpdate,
)
from siptakip.services import crm_service

router: APIRouter = APIRouter(dependencies=[Depends(authorize("super_admin"))])


def _load_restaurant(db: Session, restaurant_id: str) -> Restaurant:
    restaurant = db.get(Restaurant, restaurant_id)
    if restaurant is None:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    return restaurant


def _load_staff_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if user is None or user.role not in STAFF_USER_ROLES:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/stats", response_model=CrmStats)
def get_stats(db: Session = Depends(get_db)) -> CrmStats:
    return crm_service.crm_stats(db)


@router.get("/restaurants", response_model=list[CrmRestaurantResponse])
def list_restaurants(
    contract_status: ContractStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
) -> list[Restaurant]:
    return crm_service.list_restaurants(db, contract_status)


@router.post("/restaurants", response_model=CrmRestaurantResponse, status_code=status.HTTP_201_CREATED)
def create_restaurant(payload: RestaurantCreate, db: Session = Depends(get_db)) -> Restaurant:
    try:
        return crm_service.create_restaurant(db, payload.model_dump())
    except crm_service.DuplicateSlugError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.put("/restaurants/{restaurant_id}", response_model=CrmRestaurantResponse)
def update_restaurant(
    restaurant_id: str,
    payload: RestaurantUpdate,
    db: Session = Depends(get_db),
) -> Restaurant:
    restaurant = _load_restaurant(db, restaurant_id)
    changes = payload.changes(
        nullable={"phone", "address", "contract_start_date", "contact_person", "contact_phone", "contact_email", "notes"}
    )
    return crm_service.update_restaurant(db, restaurant, changes)


@router.get("/staff-users", response_model=list[StaffUserResponse])
def list_staff_users(
    restaurant_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
) -> list[User]:
    return crm_service.list_staff_users(db, restaurant_id)


@router.post("/staff-users", response_model=StaffUserResponse, status_code=status.HTTP_201_CREATED)
def create_staff_user(payload: StaffUserCreate, db: Session = Depends(get_db)) -> User:
    _load_restaurant(db, payload.restaurant_id)
    try:
        return crm_service.create_staff_user(db, payload.model_dump())
    except crm_service.DuplicateUsernameError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.put("/staff-users/{user_id}", response_model=StaffUserResponse)
def update_staff_user(
    user_id: str,
    payload: StaffUserUpdate,
    db: Session = Depends(get_db),
) -> User:
    user = _load_staff_user(db, user_id)
    try:
        return crm_service.update_staff_user(db, user, payload.changes(nullable={"full_name"}))
    except crm_service.DuplicateUsernameError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.delete("/staff-users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_staff_user(user_id: str, db: Session = Depends(get_db)) -> Response:
    crm_service.delete_staff_user(db, _load_staff_user(db, user_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
