"""ORM model for catalog products."""

import uuid

from sqlalchemy import Column, Numeric, String, Text

from app.models.base import Base


class Product(Base):
    """Catalog entry. Read-only for the HTTP API; written by the seeding script."""

    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(255), nullable=False, index=True)
    price = Column(Numeric(10, 2, asdecimal=False), nullable=False, index=True)
    image = Column(String(2048), nullable=False, default="")
    description = Column(Text, nullable=False, default="")
