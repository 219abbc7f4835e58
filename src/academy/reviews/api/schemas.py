"""Pydantic request/response schemas for the Reviews API.

Request schemas only fix the shape of the payload. Value rules (rating range,
the closed set of reviewable kinds, non-blank comments) are enforced by the
domain commands so they surface as 400 responses.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


# ---------------------------------------------------------------------------
# Request Schemas
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "user_id": "user-001",
                    "reviewable_id": "course-001",
                    "reviewable_kind": "Course",
                    "rating": 5,
                    "comment": "Clear explanations and good exercises.",
                }
            ]
        }
    }

    user_id: str
    reviewable_id: str
    reviewable_kind: str  # "Product" or "Course"
    rating: int
    comment: str


class EditReviewRequest(BaseModel):
    user_id: str
    rating: int | None = None
    comment: str | None = None


# ---------------------------------------------------------------------------
# Response Schemas
# ---------------------------------------------------------------------------
class ReviewIdResponse(BaseModel):
    review_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ReviewResponse(BaseModel):
    review_id: str
    user_id: str
    name: str | None = None
    reviewable_id: str
    reviewable_kind: str
    rating: int
    comment: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ReviewListResponse(BaseModel):
    reviews: list[ReviewResponse]
