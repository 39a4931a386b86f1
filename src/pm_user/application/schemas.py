"""Pydantic request/response schemas for pm_user."""

from pydantic import BaseModel, EmailStr, Field


class CreateUserRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=150)
    username: str = Field(..., min_length=3, max_length=150, pattern=r"^[a-zA-Z0-9_.]+$")
    email: EmailStr


class UserResponse(BaseModel):
    user_id: int
    name: str
    username: str
    email: str
    created_at: str
    default_account_id: int | None = None
