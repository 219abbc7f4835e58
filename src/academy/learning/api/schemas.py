"""Pydantic request/response schemas for the Enrollments API."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class EnrollRequest(BaseModel):
    user_id: str
    payment_status: str | None = None
    price_paid: float | None = None
    payment_method: str | None = None
    transaction_id: str | None = None
    discount_code: str | None = None
    notes: str | None = None


class AdminEnrollRequest(EnrollRequest):
    course_id: str
    certificate_url: str | None = None


class LessonProgressRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"user_id": "user-001", "lesson_id": "lesson-3", "watched_duration": 312.5, "completed": True}]
        }
    }

    user_id: str
    lesson_id: str | None = None
    watched_duration: float | None = None
    completed: bool | None = None


class EnrollmentChanges(BaseModel):
    progress: float | None = None
    status: str | None = None
    last_accessed: datetime | None = None
    completion_date: datetime | None = None
    certificate_url: str | None = None
    lessons_progress: dict[str, Any] | list[Any] | None = None
    notes: str | None = None


class UpdateEnrollmentRequest(EnrollmentChanges):
    user_id: str


class AdminUpdateEnrollmentRequest(EnrollmentChanges):
    payment_status: str | None = None
    price_paid: float | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class EnrollmentIdResponse(BaseModel):
    enrollment_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class LessonProgressEntry(BaseModel):
    watched_duration: float = 0.0
    completed: bool = False


class EnrollmentResponse(BaseModel):
    enrollment_id: str
    user_id: str
    course_id: str
    enrolled_at: datetime | None = None
    payment_status: str
    payment_method: str | None = None
    transaction_id: str | None = None
    price_paid: float
    discount_code: str | None = None
    progress: float
    status: str
    last_accessed: datetime | None = None
    completion_date: datetime | None = None
    certificate_url: str | None = None
    lessons_progress: dict[str, LessonProgressEntry] = Field(default_factory=dict)
    notes: str | None = None


class EnrollmentListResponse(BaseModel):
    enrollments: list[EnrollmentResponse]
