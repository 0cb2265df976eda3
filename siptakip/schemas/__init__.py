"""Schema exports."""

from siptakip.schemas.auth import CustomerLoginRequest, CustomerLoginResponse, LoginRequest, LoginResponse
from siptakip.schemas.order import OrderCreate, OrderItemPayload, OrderResponse, OrderStatusUpdate, ReportResponse
from siptakip.schemas.table import TableCreate, TableResponse, WaiterCreate, WaiterResponse

__all__ = [
    "CustomerLoginRequest",
    "CustomerLoginResponse",
    "LoginRequest",
    "LoginResponse",
    "OrderCreate",
    "OrderItemPayload",
    "OrderResponse",
    "OrderStatusUpdate",
    "ReportResponse",
    "TableCreate",
    "TableResponse",
    "WaiterCreate",
    "WaiterResponse",
]
