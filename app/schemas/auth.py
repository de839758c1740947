"""Request/response schemas for user and session endpoints."""

from typing import Annotated

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field

from app.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN


def _normalize_email(v: object) -> object:
    return v.strip().lower() if isinstance(v, str) else v


NormalizedEmail = Annotated[EmailStr, BeforeValidator(_normalize_email)]


class SignupRequest(BaseModel):
    """Details for creating an account."""

    model_config = ConfigDict(populate_by_name=True)

    email: NormalizedEmail = Field(..., description="Email address (unique)")
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=255)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=255)
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, max_length=PASSWORD_MAX_LEN)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: NormalizedEmail
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN)


class UserOut(BaseModel):
    """User as returned to clients and embedded in the session token (no password)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    first_name: str
    last_name: str


class UserCredentials(UserOut):
    """User row including the stored hash; used only to verify a login."""

    password_hash: str

    def public(self) -> UserOut:
        return UserOut(
            id=self.id,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
        )


class CurrentUser(UserOut):
    """Authenticated identity read from the session token, passed to handlers."""


class MessageResponse(BaseModel):
    message: str
