"""Signup, login, logout and the session dependency (get_current_user)."""

import logging
from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, Request, Response
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from app.core.config import get_settings
from app.core.database import get_db
from app.core.errors import InvalidCredentialsError, NotAuthenticatedError
from app.core.rate_limit import limit_auth_attempts
from app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from app.core.timeout import with_timeout
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    UserOut,
)
from app.services import users as users_service

logger = logging.getLogger(__name__)

router = APIRouter()


def set_session_cookie(response: Response, user: UserOut) -> None:
    """Issue a session token for user and store it in the HTTP-only cookie."""
    settings = get_settings()
    token = create_access_token(user.model_dump())
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )


def clear_session_cookie(response: Response) -> None:
    settings = get_settings()
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        httponly=True,
        secure=settings.COOKIE_SECURE,
        samesite=settings.COOKIE_SAMESITE,
    )


def get_current_user(request: Request) -> CurrentUser:
    """Dependency: require a valid session cookie and return the identity it carries."""
    token = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
    if not token:
        raise NotAuthenticatedError()
    try:
        payload = decode_access_token(token)
    except jwt.PyJWTError as e:
        raise NotAuthenticatedError("Invalid or expired token", cause=e) from e
    try:
        return CurrentUser.model_validate(payload)
    except ValidationError as e:
        raise NotAuthenticatedError("Invalid token payload", cause=e) from e


@router.post("/signup", response_model=UserOut, dependencies=[Depends(limit_auth_attempts)])
async def signup(
    body: SignupRequest,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserOut:
    """Create an account and start a session for it."""
    password_hash = await run_in_threadpool(hash_password, body.password)
    user = await with_timeout(
        users_service.create_user(
            db,
            email=body.email,
            first_name=body.first_name,
            last_name=body.last_name,
            password_hash=password_hash,
        )
    )
    set_session_cookie(response, user)
    logger.info("User signed up", extra={"user_id": user.id})
    return user


@router.post("/login", response_model=UserOut, dependencies=[Depends(limit_auth_attempts)])
async def login(
    body: LoginRequest,
    response: Response,
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserOut:
    """
    Authenticate with email and password; the session token is returned in
    an HTTP-only cookie, never in the body.
    """
    credentials = await with_timeout(users_service.get_credentials_by_email(db, body.email))
    if credentials is None:
        logger.info("Login failed: unknown email")
        raise InvalidCredentialsError()
    if not await run_in_threadpool(verify_password, body.password, credentials.password_hash):
        logger.info("Login failed: wrong password", extra={"user_id": credentials.id})
        raise InvalidCredentialsError()

    user = credentials.public()
    set_session_cookie(response, user)
    logger.info("User logged in", extra={"user_id": user.id})
    return user


@router.post("/logout", response_model=MessageResponse)
def logout(response: Response) -> MessageResponse:
    clear_session_cookie(response)
    return MessageResponse(message="Logged out")


@router.get("/me", response_model=UserOut)
async def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[AsyncSession, Depends(get_db)],
) -> UserOut:
    """Return the signed-in user as currently stored."""
    user = await with_timeout(users_service.get_user(db, current_user.id))
    if user is None:
        # Account removed after the token was issued.
        raise NotAuthenticatedError("User not found")
    return user
