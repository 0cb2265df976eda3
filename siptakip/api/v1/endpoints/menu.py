"""Menu endpoints: restaurants, categories, products and images."""

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from siptakip.core.config import settings
from siptakip.core.security import Identity, authorize, optional_identity
from siptakip.db.session import get_db
from siptakip.models.menu import Category, Product
from siptakip.models.restaurant import Restaurant
from siptakip.schemas.menu import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    ImageUpload,
    ImageUploadResponse,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
    RestaurantBrandingUpdate,
    RestaurantPublic,
)
from siptakip.services import menu_service
from siptakip.services.security_guards import ensure_same_tenant, resolve_restaurant_id

router: APIRouter = APIRouter()

MENU_ADMINS = ("admin", "super_admin")


def _public_restaurant_id(restaurant_id: str | None, identity: Identity | None) -> str:
    if restaurant_id:
        return restaurant_id
    if identity is not None and identity.restaurant_id:
        return identity.restaurant_id
    raise HTTPException(status_code=400, detail="restaurant_id is required")


def _load_category(db: Session, identity: Identity, category_id: str) -> Category:
    category = db.get(Category, category_id)
    if category is None:
        raise HTTPException(status_code=404, detail="Category not found")
    ensure_same_tenant(identity, category.restaurant_id, "Category not found")
    return category


def _load_product(db: Session, identity: Identity, product_id: str) -> Product:
    product = db.get(Product, product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    ensure_same_tenant(identity, product.restaurant_id, "Product not found")
    return product


@router.get("/restaurants", response_model=list[RestaurantPublic])
def list_restaurants(db: Session = Depends(get_db)) -> list[Restaurant]:
    return menu_service.list_restaurants(db)


@router.patch("/restaurants/{restaurant_id}", response_model=RestaurantPublic)
def update_restaurant_branding(
    restaurant_id: str,
    payload: RestaurantBrandingUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*MENU_ADMINS)),
) -> Restaurant:
    """Tenant admins may rename their restaurant and change its logo."""
    restaurant = db.get(Restaurant, restaurant_id)
    if restaurant is None:
        raise HTTPException(status_code=404, detail="Restaurant not found")
    ensure_same_tenant(identity, restaurant.id, "Restaurant not found")
    return menu_service.update_branding(db, restaurant, payload.changes(nullable={"logo_url"}))


@router.get("/categories", response_model=list[CategoryResponse])
def list_categories(
    restaurant_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
    identity: Identity | None = Depends(optional_identity),
) -> list[Category]:
    return menu_service.list_categories(db, _public_restaurant_id(restaurant_id, identity))


@router.post("/categories", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*MENU_ADMINS)),
) -> Category:
    restaurant_id = resolve_restaurant_id(identity, payload.restaurant_id)
    return menu_service.create_category(db, restaurant_id, payload.model_dump(exclude={"restaurant_id"}))


@router.patch("/categories/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: str,
    payload: CategoryUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*MENU_ADMINS)),
) -> Category:
    category = _load_category(db, identity, category_id)
    return menu_service.update_category(db, category, payload.changes(nullable={"image_url"}))


@router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*MENU_ADMINS)),
) -> Response:
    menu_service.delete_category(db, _load_category(db, identity, category_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/products", response_model=list[ProductResponse])
def list_products(
    restaurant_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
    identity: Identity | None = Depends(optional_identity),
) -> list[Product]:
    """Available products for the customer menu."""
    return menu_service.list_products(db, _public_restaurant_id(restaurant_id, identity))


@router.get("/products/all", response_model=list[ProductResponse])
def list_all_products(
    restaurant_id: str | None = Query(default=None),
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*MENU_ADMINS)),
) -> list[Product]:
    return menu_service.list_products(db, resolve_restaurant_id(identity, restaurant_id), available_only=False)


@router.post("/products", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    payload: ProductCreate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*MENU_ADMINS)),
) -> Product:
    restaurant_id = resolve_restaurant_id(identity, payload.restaurant_id)
    try:
        return menu_service.create_product(db, restaurant_id, payload.model_dump(exclude={"restaurant_id"}))
    except menu_service.CategoryNotFoundError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.patch("/products/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*MENU_ADMINS)),
) -> Product:
    product = _load_product(db, identity, product_id)
    changes = payload.changes(nullable={"description", "image_url"})
    try:
        return menu_service.update_product(db, product, changes)
    except menu_service.CategoryNotFoundError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc


@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: str,
    db: Session = Depends(get_db),
    identity: Identity = Depends(authorize(*MENU_ADMINS)),
) -> Response:
    menu_service.delete_product(db, _load_product(db, identity, product_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/upload-image", response_model=ImageUploadResponse, status_code=status.HTTP_201_CREATED)
def upload_image(
    payload: ImageUpload,
    restaurant_id: str | None = Query(default=None),
    identity: Identity = Depends(authorize(*MENU_ADMINS)),
) -> ImageUploadResponse:
    target = resolve_restaurant_id(identity, restaurant_id)
    try:
        url = menu_service.save_image(settings.uploads_dir, target, payload.image)
    except menu_service.InvalidImageError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    return ImageUploadResponse(url=url)
