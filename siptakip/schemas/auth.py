"""Authentication schemas."""

from pydantic import BaseModel, ConfigDict, Field, model_validator

from siptakip.schemas.common import RequestModel


class LoginRequest(RequestModel):
    """Staff login by e-mail or username."""

    email: str | None = None
    username: str | None = None
    password: str = Field(min_length=1)
    restaurant_slug: str | None = None
    restaurant_id: str | None = None

    @model_validator(mode="after")
    def _require_login_name(self) -> "LoginRequest":
        if not self.email and not self.username:
            raise ValueError("email or username is required")
        return self


class CustomerLoginRequest(RequestModel):
    restaurant_slug: str = Field(min_length=1)
    table_number: int = Field(ge=1)


class RestaurantSummary(BaseModel):
    id: str
    name: str
    slug: str
    logo_url: str | None = None

    model_config = ConfigDict(from_attributes=True)


class AuthUser(BaseModel):
    id: str
    email: str | None
    username: str | None
    full_name: str | None
    role: str
    restaurant: RestaurantSummary | None = None

    model_config = ConfigDict(from_attributes=True)


class LoginResponse(BaseModel):
    token: str
    user: AuthUser


class CustomerLoginResponse(BaseModel):
    token: str
    restaurant: RestaurantSummary
    table_number: int
