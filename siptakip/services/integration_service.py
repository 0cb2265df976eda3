"""Marketplace integration records (credentials only, no remote calls)."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from siptakip.models.integration import PlatformIntegration
from siptakip.schemas.integration import IntegrationTestResult

logger = logging.getLogger(__name__)


class DuplicateIntegrationError(Exception):
    """Raised when the restaurant already has an integration for the platform."""


def list_integrations(db: Session, restaurant_id: str | None) -> list[PlatformIntegration]:
    query = db.query(PlatformIntegration)
    if restaurant_id is not None:
        query = query.filter(PlatformIntegration.restaurant_id == restaurant_id)
    return query.order_by(PlatformIntegration.platform.asc()).all()


def create_integration(db: Session, restaurant_id: str, values: dict) -> PlatformIntegration:
    integration = PlatformIntegration(
        id=str(uuid4()),
        restaurant_id=restaurant_id,
        is_active=True,
        updated_at=datetime.now(timezone.utc),
        **{field: value or None for field, value in values.items()},
    )
    db.add(integration)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise DuplicateIntegrationError("Bu platform için zaten bir entegrasyon var") from exc
    db.refresh(integration)
    logger.info("[INTEGRATIONS] %s added for %s", integration.platform, restaurant_id)
    return integration


def update_integration(db: Session, integration: PlatformIntegration, changes: dict) -> PlatformIntegration:
    for field, value in changes.items():
        setattr(integration, field, value)
    integration.updated_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(integration)
    return integration


def delete_integration(db: Session, integration: PlatformIntegration) -> None:
    db.delete(integration)
    db.commit()


def check_credentials(integration: PlatformIntegration) -> IntegrationTestResult:
    """Report whether enough credentials are stored to talk to the platform."""
    if not (integration.api_key or integration.token or integration.seller_id):
        return IntegrationTestResult(
            success=False,
            message="API bilgileri eksik. Lütfen en az Satıcı ID, API Key veya Token giriniz.",
            platform=integration.platform,
        )
    return IntegrationTestResult(
        success=True,
        message=f"{integration.platform} bağlantısı başarılı! (Bilgiler kaydedildi)",
        platform=integration.platform,
    )
