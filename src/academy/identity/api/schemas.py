"""Pydantic request/response schemas for the Users API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class RegisterUserRequest(BaseModel):
    name: str = Field(..., max_length=50)
    email: str = Field(..., max_length=255)
    role: str | None = None


class UserIdResponse(BaseModel):
    user_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class UserResponse(BaseModel):
    user_id: str
    name: str
    email: str
    role: str
    purchases_count: int
    reviews_count: int
    created_at: datetime | None = None


class UserListResponse(BaseModel):
    users: list[UserResponse]
