"""ORM model for ordered items."""

import uuid

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import relationship

from app.models.base import Base


class OrderItem(Base):
    """
    One product line of a submitted order. Immutable once created.

    Every item of one submission shares created_at, so the same product twice
    in one submission violates uq_orders_user_product_created.
    """

    __tablename__ = "orders"
    __table_args__ = (
        UniqueConstraint(
            "user_id", "product_id", "created_at", name="uq_orders_user_product_created"
        ),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)
    quantity = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)

    product = relationship("Product", lazy="raise")
