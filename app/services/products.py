"""Catalog queries and seeding."""

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models import Product
from app.schemas.products import ProductIn, ProductOut


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def list_products(
    db: AsyncSession,
    *,
    offset: int,
    limit: int,
    name: str | None = None,
) -> list[ProductOut]:
    """
    Products ordered by price (highest first), optionally filtered to names
    starting with name, case-insensitively.
    """
    stmt = select(Product)
    if name:
        stmt = stmt.where(Product.name.ilike(f"{_escape_like(name)}%", escape="\\"))
    stmt = stmt.order_by(Product.price.desc(), Product.id).offset(offset).limit(limit)
    result = await db.execute(stmt)
    return [ProductOut.model_validate(p) for p in result.scalars().all()]


async def get_product(db: AsyncSession, product_id: str) -> ProductOut | None:
    product = await db.get(Product, product_id)
    return ProductOut.model_validate(product) if product is not None else None


async def add_products(db: AsyncSession, products: Iterable[ProductIn]) -> list[ProductOut]:
    """Insert catalog entries in one transaction."""
    rows = [Product(**p.model_dump()) for p in products]
    db.add_all(rows)
    await db.commit()
    return [ProductOut.model_validate(r) for r in rows]
