"""Pydantic schemas for authentication endpoints."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.models.user import Role


class UserRegister(BaseModel):
    """Request model for user registration."""

    username: str = Field(..., min_length=3, max_length=100, description="Unique username")
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    role: Role = Field(default=Role.USER, description="USER (default) or ADMIN")
    customer_id: UUID | None = Field(
        None, description="Customer whose data this user may read"
    )


class LoginRequest(BaseModel):
    """Request model for user login."""

    username: str = Field(..., description="Username")
    password: str = Field(..., description="User password")


class TokenPair(BaseModel):
    """Response model for authentication tokens."""

    access_token: str = Field(..., description="JWT access token")
    refresh_token: str = Field(..., description="JWT refresh token")
    token_type: str = Field(default="bearer", description="Token type")


class RefreshRequest(BaseModel):
    """Request model for token refresh."""

    refresh_token: str = Field(..., description="JWT refresh token")


class UserResponse(BaseModel):
    """Response model for user data (without sensitive fields)."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    role: Role
    customer_id: UUID | None
    is_active: bool
    created_at: datetime


class CurrentUser(BaseModel):
    """Response model for current authenticated user."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    role: Role
    customer_id: UUID | None
    is_active: bool
