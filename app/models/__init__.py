"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.order import OrderItem
from app.models.product import Product
from app.models.user import User

__all__ = ["Base", "OrderItem", "Product", "User"]
