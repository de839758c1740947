"""ORM model for customer accounts."""

import uuid

from sqlalchemy import Column, String

from app.models.base import Base


class User(Base):
    """
    Customer account for cookie-based session authentication.

    password_hash: hex scrypt key followed by the hex salt (see app.core.security).
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), nullable=False, unique=True, index=True)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    password_hash = Column(String(255), nullable=False)
