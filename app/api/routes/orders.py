"""Order endpoints. Every route requires a session."""

import logging
from typing import Annotated

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.routes.users import get_current_user
from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import InputValidationError
from app.core.timeout import with_timeout
from app.schemas.auth import CurrentUser
from app.schemas.orders import (
    MAX_ITEMS_PER_ORDER,
    OrderCreatedResponse,
    OrderHistoryResponse,
    OrderItemIn,
)
from app.services import orders as orders_service
from app.services.pagination import MAX_PAGE_INDEX, build_page, page_window

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=OrderCreatedResponse)
async def create_orders(
    items: Annotated[list[OrderItemIn], Body()],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> OrderCreatedResponse:
    """Place an order: a list of {product_id, quantity} for the signed-in user."""
    if not items:
        raise InputValidationError("Order must contain at least one item")
    if len(items) > MAX_ITEMS_PER_ORDER:
        raise InputValidationError(f"At most {MAX_ITEMS_PER_ORDER} items per order")

    missing = await with_timeout(
        orders_service.find_missing_products(db, [item.product_id for item in items])
    )
    if missing:
        raise InputValidationError(f"Unknown product: {sorted(missing)[0]}")

    count = await with_timeout(orders_service.create_orders(db, current_user.id, items))
    logger.info("Order placed", extra={"user_id": current_user.id, "item_count": count})
    return OrderCreatedResponse(message="Order placed", count=count)


@router.get("/history", response_model=OrderHistoryResponse)
async def order_history(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
    skip: Annotated[int, Query(ge=0, le=MAX_PAGE_INDEX, description="Zero-based page index")] = 0,
) -> OrderHistoryResponse:
    """The signed-in user's orders, newest first, PAGE_SIZE per page."""
    page_size = get_settings().PAGE_SIZE
    offset, limit = page_window(skip, page_size)
    rows = await with_timeout(
        orders_service.list_orders(db, current_user.id, offset=offset, limit=limit)
    )
    previous_orders, details = build_page(rows, skip, page_size)
    return OrderHistoryResponse(previous_orders=previous_orders, pagination_details=details)
