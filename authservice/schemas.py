"""Request and response bodies for the HTTP API."""
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .models import User
from .validation import PASSWORD_REQUIREMENTS, is_strong_password, is_valid_email


def _check_email(value: str) -> str:
    cleaned = value.strip()
    if not is_valid_email(cleaned):
        raise ValueError("Please enter a valid email address.")
    return cleaned


def _check_strong_password(value: str) -> str:
    if not is_strong_password(value):
        raise ValueError(PASSWORD_REQUIREMENTS)
    return value


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class UserResponse(_CamelModel):
    id: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    created_at: datetime = Field(..., alias="createdAt")

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
            created_at=user.created_at,
        )

    def to_user(self) -> User:
        return User(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            email=self.email,
            created_at=self.created_at,
        )


class RegisterRequest(_CamelModel):
    first_name: str = Field(..., alias="firstName", min_length=1, max_length=100)
    last_name: str = Field(..., alias="lastName", min_length=1, max_length=100)
    email: str = Field(..., max_length=320)
    password: str

    @field_validator("first_name", "last_name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Please fill in all fields.")
        return stripped

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("password")
    @classmethod
    def _validate_password(cls, value: str) -> str:
        return _check_strong_password(value)


class LoginRequest(_CamelModel):
    email: str = Field(..., max_length=320)
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return _check_email(value)


class PasswordResetRequest(_CamelModel):
    email: str = Field(..., max_length=320)
    new_password: str = Field(..., alias="newPassword")

    @field_validator("email")
    @classmethod
    def _validate_email(cls, value: str) -> str:
        return _check_email(value)

    @field_validator("new_password")
    @classmethod
    def _validate_password(cls, value: str) -> str:
        return _check_strong_password(value)


class StatusResponse(BaseModel):
    status: str = "ok"


class SessionResponse(BaseModel):
    authenticated: bool
    user: Optional[UserResponse] = None


__all__ = [
    "LoginRequest",
    "PasswordResetRequest",
    "RegisterRequest",
    "SessionResponse",
    "StatusResponse",
    "UserResponse",
]
