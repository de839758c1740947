"""Schemas for catalog endpoints."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.schemas.pagination import PaginationDetails


class ProductIn(BaseModel):
    """Product as accepted by the seeding script."""

    name: str = Field(..., min_length=1, max_length=255)
    price: float = Field(..., ge=0)
    image: str = Field(default="", max_length=2048)
    description: str = ""


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    price: float
    image: str
    description: str


class CatalogResponse(BaseModel):
    """Response for GET /products."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    catalog: list[ProductOut]
    pagination_details: PaginationDetails
