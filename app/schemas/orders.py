"""Schemas for order submission and history."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.pagination import PaginationDetails
from app.schemas.products import ProductOut

MAX_ITEMS_PER_ORDER = 100


class OrderItemIn(BaseModel):
    """One line of an order submission."""

    product_id: str = Field(..., min_length=1, max_length=36)
    quantity: int = Field(..., ge=1, le=10_000)


class OrderCreatedResponse(BaseModel):
    message: str
    count: int


class OrderHistoryItem(BaseModel):
    """A previously ordered product and its quantity."""

    model_config = ConfigDict(from_attributes=True)

    product: ProductOut
    quantity: int
    created_at: datetime


class OrderHistoryResponse(BaseModel):
    """Response for GET /orders/history."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    previous_orders: list[OrderHistoryItem]
    pagination_details: PaginationDetails
