"""Delivery platform integration endpoints."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from siptakip.core.security import Identity, authorize
from siptakip.db.session import get_db
from siptakip.models.integration import PlatformIntegration
from siptakip.schemas.integration import (
    IntegrationCreate,
    IntegrationResponse,
    IntegrationTestResult,
    IntegrationUpdate,
)
from siptakip.services import integration_service
from siptakip.services.security_guards import ensure_same_tenant, resolve_restaurant_id, scoped_restaurant_id

router: APIRouter = APIRouter()

ADMINS = ("admin", "super_admin")


def _load_integration(db: Session, identity: Identity, integration_id: str) -> PlatformIntegration:
    integration = db.get(PlatformIntegration, integration_id)
    if integration is None:
        raise HTTPException(status_code=404, detail="Integration not found")
    ensure_same_tenant(identity, integration.restaurant_id, "Integration not found")
    return integration


@router.get("", response_model=list[IntegrationResponse])
def list_integrations(
    restaurant_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*ADMINS)),
) -> list[PlatformIntegration]:
    return integration_service.list_integrations(db, scoped_restaurant_id(identity, restaurant_id))


@router.post("", response_model=IntegrationResponse, status_code=status.HTTP_201_CREATED)
def create_integration(
    payload: IntegrationCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*ADMINS)),
) -> PlatformIntegration:
    restaurant_id = resolve_restaurant_id(identity, payload.restaurant_id)
    try:
        return integration_service.create_integration(
            db, restaurant_id, payload.model_dump(exclude={"restaurant_id"})
        )
    except integration_service.DuplicateIntegrationError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc


@router.patch("/{integration_id}", response_model=IntegrationResponse)
def update_integration(
    integration_id: str,
    payload: IntegrationUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*ADMINS)),
) -> PlatformIntegration:
    integration = _load_integration(db, identity, integration_id)
    changes = payload.changes(nullable={"seller_id", "store_name", "store_link", "api_key", "api_secret", "token"})
    return integration_service.update_integration(db, integration, changes)


@router.delete("/{integration_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_integration(
    integration_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*ADMINS)),
) -> Response:
    integration_service.delete_integration(db, _load_integration(db, identity, integration_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{integration_id}/test", response_model=IntegrationTestResult)
def test_integration(
    integration_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*ADMINS)),
) -> IntegrationTestResult:
    return integration_service.check_credentials(_load_integration(db, identity, integration_id))
