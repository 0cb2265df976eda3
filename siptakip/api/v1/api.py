"""API v1 router composition."""

from fastapi import APIRouter

from siptakip.api.v1.endpoints import auth, crm, email, integrations, menu, orders, tables, waiters

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(menu.router, prefix="/menu", tags=["menu"])
api_router.include_router(tables.router, prefix="/tables", tags=["tables"])
api_router.include_router(waiters.router, prefix="/waiters", tags=["waiters"])
api_router.include_router(integrations.router, prefix="/integrations", tags=["integrations"])
api_router.include_router(crm.router, prefix="/crm", tags=["crm"])
api_router.include_router(email.router, prefix="/email", tags=["email"])
