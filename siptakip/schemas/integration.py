"""Delivery platform integration schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

from siptakip.schemas.common import RequestModel

Platform = Literal["trendyol_go", "getir", "migros", "yemeksepeti"]


class IntegrationCreate(RequestModel):
    platform: Platform
    restaurant_id: str | None = None
    seller_id: str | None = None
    store_name: str | None = None
    store_link: str | None = None
    api_key: str | None = None
    api_secret: str | None = None
    token: str | None = None


class IntegrationUpdate(RequestModel):
    seller_id: str | None = None
    store_name: str | None = None
    store_link: str | None = None
    api_key: str | None = None
    api_secret: str | None = None
    token: str | None = None
    is_active: bool | None = None


class IntegrationResponse(BaseModel):
    id: str
    restaurant_id: str
    platform: str
    seller_id: str | None
    store_name: str | None
    store_link: str | None
    api_key: str | None
    api_secret: str | None
    token: str | None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class IntegrationTestResult(BaseModel):
    success: bool
    message: str
    platform: str
