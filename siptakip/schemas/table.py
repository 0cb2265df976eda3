"""Table and waiter schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from siptakip.schemas.common import RequestModel


class TableCreate(RequestModel):
    table_number: int = Field(ge=1)
    restaurant_id: str | None = None


class TableUpdate(RequestModel):
    is_active: bool


class TableResponse(BaseModel):
    id: str
    restaurant_id: str
    table_number: int
    is_active: bool

    model_config = ConfigDict(from_attributes=True)


class WaiterCreate(RequestModel):
    full_name: str = Field(min_length=2, max_length=255)
    phone: str | None = None
    restaurant_id: str | None = None


class WaiterUpdate(RequestModel):
    full_name: str | None = Field(default=None, min_length=2, max_length=255)
    phone: str | None = None
    is_active: bool | None = None

    @field_validator("phone")
    @classmethod
    def _blank_phone(cls, value: str | None) -> str | None:
        return value or None


class WaiterResponse(BaseModel):
    id: str
    restaurant_id: str
    full_name: str
    phone: str | None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
