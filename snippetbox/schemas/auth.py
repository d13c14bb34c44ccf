"""Pydantic schemas for account and token endpoints."""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}$"
PASSWORD_SPECIAL_CHARACTERS = '!@#$%^&*(),.?":{}|<>'


def check_password_strength(password: str) -> str:
    """Require 8-20 characters with upper, lower, digit and special characters."""
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters long")
    if len(password) > 20:
        raise ValueError("Password must be at most 20 characters long")

    missing = []
    if not any(c.isupper() for c in password):
        missing.append("uppercase letter")
    if not any(c.islower() for c in password):
        missing.append("lowercase letter")
    if not any(c.isdigit() for c in password):
        missing.append("number")
    if not any(c in PASSWORD_SPECIAL_CHARACTERS for c in password):
        missing.append("special character")
    if missing:
        raise ValueError(f"Password must contain at least one {', '.join(missing)}")
    return password


class RegisterRequest(BaseModel):
    """Request to create an account."""

    username: str = Field(..., min_length=3, max_length=30)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(..., description="8-20 chars; upper, lower, digit and special")

    @field_validator("password")
    @classmethod
    def password_strength(cls, value: str) -> str:
        return check_password_strength(value)


class LoginRequest(BaseModel):
    """Request for login."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class CredentialsRequest(LoginRequest):
    """Email and password confirming an account operation."""


class ChangePasswordRequest(BaseModel):
    """Request for password change."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    new_password: str

    @field_validator("new_password")
    @classmethod
    def new_password_strength(cls, value: str) -> str:
        return check_password_strength(value)


class TokenResponse(BaseModel):
    """Response with an identity token."""

    token: str
    token_type: str = "bearer"
    expires_in: int = Field(description="Token lifetime in seconds")
    user_id: UUID


class DeletedUserResponse(BaseModel):
    """Response after an account is deleted."""

    user_id: UUID


class MessageResponse(BaseModel):
    """Generic message response."""

    message: str
