"""
Pydantic schemas for users, authentication and applications.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import List, Optional


class UserRegisterRequest(BaseModel):
    """Self-service registration. New accounts are never admins."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., min_length=1, max_length=30, alias="firstName")
    last_name: str = Field(..., min_length=1, max_length=30, alias="lastName")
    email: EmailStr


class UserCreateRequest(UserRegisterRequest):
    """Admin-only creation; may create other admins."""
    is_admin: bool = Field(False, alias="isAdmin")


class UserUpdateRequest(BaseModel):
    """Partial update of a user's profile or password."""
    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    first_name: Optional[str] = Field(None, min_length=1, max_length=30, alias="firstName")
    last_name: Optional[str] = Field(None, min_length=1, max_length=30, alias="lastName")
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    email: Optional[EmailStr] = None

    @field_validator("first_name", "last_name", "password", "email")
    @classmethod
    def reject_null(cls, v):
        """Omit a field to leave it unchanged; null is not a value for any of them"""
        if v is None:
            raise ValueError("cannot be null")
        return v


class TokenRequest(BaseModel):
    """Request schema for username/password login."""
    username: str
    password: str


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(BaseModel):
    """User profile response (no password)."""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    email: str
    is_admin: bool = Field(..., alias="isAdmin")


class UserDetailResponse(UserResponse):
    """Profile plus the ids of the jobs the user applied to."""
    applications: List[int] = []


class UserCreateResponse(BaseModel):
    user: UserResponse
    token: str


class ApplicationResponse(BaseModel):
    applied: int
