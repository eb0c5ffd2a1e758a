"""Pydantic models for API request/response."""

import re
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

from domain.model.user import User

PASSWORD_MIN_LENGTH = 8


class CreateUserDto(BaseModel):
    """Request model for user creation. Unknown fields are ignored."""
    email: EmailStr
    password: str

    @field_validator('password')
    @classmethod
    def check_password_policy(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
        if not re.search(r'[A-Z]', value):
            raise ValueError("Password must contain at least one uppercase letter")
        if not re.search(r'[a-z]', value):
            raise ValueError("Password must contain at least one lowercase letter")
        if not re.search(r'[0-9]', value):
            raise ValueError("Password must contain at least one number")
        return value


class FindUserDto(BaseModel):
    """Response model for a user. Never carries the password."""
    id: UUID = Field(..., description="Public user identifier")
    email: str
    created_at: datetime
    sessions: list[dict] = Field(default_factory=list)
    roles: list[str] = Field(default_factory=list)


def project_user(user: User) -> FindUserDto:
    """Convert domain User to API FindUserDto (external_id becomes id)."""
    return FindUserDto(
        id=user.external_id,
        email=user.email,
        created_at=user.created_at,
        sessions=list(user.sessions),
        roles=sorted(user.roles),
    )
