"""Platform CRM schemas."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from siptakip.schemas.common import RequestModel

ContractStatus = Literal["lead", "trial", "active", "expired"]
StaffRole = Literal["admin", "waiter", "kitchen"]
SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class CrmStats(BaseModel):
    total: int
    active: int
    trial: int
    leads: int
    expired: int
    monthly_revenue: Decimal


class RestaurantCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    slug: str = Field(min_length=1, max_length=128, pattern=SLUG_PATTERN)
    phone: str | None = None
    address: str | None = None
    contact_person: str | None = None
    contact_phone: str | None = None
    contact_email: str | None = None
    contract_months: int = Field(default=0, ge=0)
    contract_start_date: date | None = None
    contract_status: ContractStatus = "lead"
    monthly_fee: Decimal = Field(default=Decimal("0"), ge=0)
    subscription_plan: str = "free"
    notes: str | None = None


class RestaurantUpdate(RequestModel):
    """Whitelisted CRM fields; the slug is immutable."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    phone: str | None = None
    address: str | None = None
    is_active: bool | None = None
    subscription_plan: str | None = None
    contract_months: int | None = Field(default=None, ge=0)
    contract_start_date: date | None = None
    contract_status: ContractStatus | None = None
    contact_person: str | None = None
    contact_phone: str | None = None
    contact_email: str | None = None
    notes: str | None = None
    monthly_fee: Decimal | None = Field(default=None, ge=0)


class CrmRestaurantResponse(BaseModel):
    id: str
    name: str
    slug: str
    phone: str | None
    address: str | None
    is_active: bool
    subscription_plan: str
    logo_url: str | None
    contract_status: str
    contract_months: int
    contract_start_date: date | None
    monthly_fee: Decimal
    contact_person: str | None
    contact_phone: str | None
    contact_email: str | None
    notes: str | None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class StaffUserCreate(RequestModel):
    restaurant_id: str
    username: str = Field(min_length=3, max_length=128)
    password: str = Field(min_length=4)
    role: StaffRole
    full_name: str | None = Field(
        default=None, validation_alias=AliasChoices("full_name", "fullName", "display_name", "displayName")
    )
    email: str | None = None


class StaffUserUpdate(RequestModel):
    username: str | None = Field(default=None, min_length=3, max_length=128)
    password: str | None = Field(default=None, min_length=4)
    role: StaffRole | None = None
    full_name: str | None = Field(
        default=None, validation_alias=AliasChoices("full_name", "fullName", "display_name", "displayName")
    )
    is_active: bool | None = None


class StaffUserResponse(BaseModel):
    id: str
    restaurant_id: str | None
    username: str | None
    email: str | None
    role: str
    full_name: str | None
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
