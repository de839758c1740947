"""Pydantic request/response schemas."""

from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UserCredentials,
    UserOut,
)
from app.schemas.health import HealthResponse
from app.schemas.orders import (
    OrderCreatedResponse,
    OrderHistoryItem,
    OrderHistoryResponse,
    OrderItemIn,
)
from app.schemas.pagination import PaginationDetails
from app.schemas.products import CatalogResponse, ProductIn, ProductOut

__all__ = [
    "CatalogResponse",
    "CurrentUser",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "OrderCreatedResponse",
    "OrderHistoryItem",
    "OrderHistoryResponse",
    "OrderItemIn",
    "PaginationDetails",
    "ProductIn",
    "ProductOut",
    "SignupRequest",
    "UserCredentials",
    "UserOut",
]
