"""Order persistence: bulk submission and per-user history."""

import logging
from collections.abc import Sequence
from datetime import UTC, datetime

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.errors import ConflictError
from app.models import OrderItem, Product
from app.schemas.orders import OrderHistoryItem, OrderItemIn

logger = logging.getLogger(__name__)


async def find_missing_products(db: AsyncSession, product_ids: Sequence[str]) -> set[str]:
    """Return the ids among product_ids that are not in the catalog."""
    wanted = set(product_ids)
    result = await db.execute(select(Product.id).where(Product.id.in_(list(wanted))))
    return wanted - set(result.scalars().all())


async def create_orders(
    db: AsyncSession,
    user_id: str,
    items: Sequence[OrderItemIn],
) -> int:
    """
    Insert all items for user_id in one statement, stamped with one created_at.

    Raises ConflictError on a constraint violation (e.g. a product repeated
    within the submission). Returns the number of rows inserted.
    """
    created_at = datetime.now(UTC)
    rows = [
        {**item.model_dump(), "user_id": user_id, "created_at": created_at}
        for item in items
    ]
    try:
        await db.execute(insert(OrderItem), rows)
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.info("Order rejected by constraint", extra={"user_id": user_id})
        raise ConflictError("Order already exists", cause=e) from e
    return len(rows)


async def list_orders(
    db: AsyncSession,
    user_id: str,
    *,
    offset: int,
    limit: int,
) -> list[OrderHistoryItem]:
    """Orders of user_id only, newest first, with their products loaded."""
    stmt = (
        select(OrderItem)
        .where(OrderItem.user_id == user_id)
        .options(selectinload(OrderItem.product))
        .order_by(OrderItem.created_at.desc(), OrderItem.id)
        .offset(offset)
        .limit(limit)
    )
    result = await db.execute(stmt)
    return [OrderHistoryItem.model_validate(o) for o in result.scalars().all()]
