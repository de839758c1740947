"""Catalog endpoints: paginated listing with name search, and single product lookup."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import get_settings
from app.core.database import get_db
from app.core.timeout import with_timeout
from app.schemas.products import CatalogResponse, ProductOut
from app.services import products as products_service
from app.services.pagination import MAX_PAGE_INDEX, build_page, page_window

router = APIRouter()


@router.get("", response_model=CatalogResponse)
async def list_products(
    db: Annotated[AsyncSession, Depends(get_db)],
    skip: Annotated[int, Query(ge=0, le=MAX_PAGE_INDEX, description="Zero-based page index")] = 0,
    name: Annotated[str | None, Query(max_length=255, description="Name prefix")] = None,
) -> CatalogResponse:
    """Products by descending price, PAGE_SIZE per page."""
    page_size = get_settings().PAGE_SIZE
    offset, limit = page_window(skip, page_size)
    rows = await with_timeout(
        products_service.list_products(db, offset=offset, limit=limit, name=name or None)
    )
    catalog, details = build_page(rows, skip, page_size)
    return CatalogResponse(catalog=catalog, pagination_details=details)


@router.get("/{product_id}", response_model=ProductOut | None)
async def get_product(
    product_id: str,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> ProductOut | None:
    """Return the product, or null when no product has this id."""
    return await with_timeout(products_service.get_product(db, product_id))
