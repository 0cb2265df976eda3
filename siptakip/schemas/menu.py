"""Menu schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, computed_field

from siptakip.schemas.common import RequestModel
from siptakip.services.menu_service import parent_category_name


class RestaurantPublic(BaseModel):
    id: str
    name: str
    slug: str
    is_active: bool
    subscription_plan: str
    logo_url: str | None

    model_config = ConfigDict(from_attributes=True)


class RestaurantBrandingUpdate(RequestModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    logo_url: str | None = None


class CategoryCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    icon: str | None = None
    sort_order: int = 0
    image_url: str | None = None
    restaurant_id: str | None = None


class CategoryUpdate(RequestModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    icon: str | None = None
    sort_order: int | None = None
    image_url: str | None = None


class CategoryResponse(BaseModel):
    id: str
    restaurant_id: str
    name: str
    icon: str
    sort_order: int
    image_url: str | None

    model_config = ConfigDict(from_attributes=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def parent_name(self) -> str | None:
        return parent_category_name(self.name)


class ProductCreate(RequestModel):
    name: str = Field(min_length=1, max_length=255)
    price: Decimal = Field(ge=0)
    category_id: str
    description: str | None = None
    is_available: bool = True
    image_url: str | None = None
    restaurant_id: str | None = None


class ProductUpdate(RequestModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    price: Decimal | None = Field(default=None, ge=0)
    category_id: str | None = None
    description: str | None = None
    is_available: bool | None = None
    image_url: str | None = None


class ProductResponse(BaseModel):
    id: str
    restaurant_id: str
    category_id: str
    name: str
    description: str | None
    price: Decimal
    is_available: bool
    image_url: str | None
    category: CategoryResponse | None = None

    model_config = ConfigDict(from_attributes=True)


class ImageUpload(RequestModel):
    """Base64 data URI of a png, jpeg or webp image."""

    image: str = Field(min_length=1)
    file_name: str | None = None


class ImageUploadResponse(BaseModel):
    url: str
