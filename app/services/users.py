"""User persistence: create accounts and look them up for login and sessions."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ConflictError
from app.models import User
from app.schemas.auth import UserCredentials, UserOut

logger = logging.getLogger(__name__)


async def create_user(
    db: AsyncSession,
    *,
    email: str,
    first_name: str,
    last_name: str,
    password_hash: str,
) -> UserOut:
    """Insert a user. Raises ConflictError if the email is already registered."""
    user = User(
        email=email,
        first_name=first_name,
        last_name=last_name,
        password_hash=password_hash,
    )
    db.add(user)
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        logger.info("Signup rejected: email already registered")
        raise ConflictError("Email already exists", cause=e) from e
    return UserOut.model_validate(user)


async def get_credentials_by_email(db: AsyncSession, email: str) -> UserCredentials | None:
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    return UserCredentials.model_validate(user) if user is not None else None


async def get_user(db: AsyncSession, user_id: str) -> UserOut | None:
    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    return UserOut.model_validate(user) if user is not None else None
