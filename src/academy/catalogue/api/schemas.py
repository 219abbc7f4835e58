"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Organic Chemistry Revision Notes",
                    "subject_name": "Organic Chemistry",
                    "subject_code": "CHEM-201",
                    "product_type": "notes",
                    "description": "Condensed notes covering reaction mechanisms.",
                    "price": 19.0,
                    "sale_enabled": True,
                    "sale_price": 12.5,
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    subject_name: str = Field(..., max_length=255)
    subject_code: str = Field(..., max_length=50)
    product_type: str
    description: str
    price: float
    sale_enabled: bool = False
    sale_price: float | None = None
    image_url: str | None = None
    pdf_link: str | None = None


class UpdateProductRequest(BaseModel):
    name: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float | None = None
    sale_enabled: bool | None = None
    sale_price: float | None = None
    image_url: str | None = None
    pdf_link: str | None = None


# --- Course Request Schemas ---


class CreateCourseRequest(BaseModel):
    title: str = Field(..., max_length=255)
    description: str
    instructor: str = Field(..., max_length=255)
    price: float
    sale_enabled: bool = False
    sale_price: float | None = None
    image_url: str | None = None
    difficulty_level: str | None = None
    language: str | None = None
    category: str | None = None
    is_featured: bool = False


class UpdateCourseRequest(BaseModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    instructor: str | None = Field(None, max_length=255)
    price: float | None = None
    sale_enabled: bool | None = None
    sale_price: float | None = None
    image_url: str | None = None
    difficulty_level: str | None = None
    language: str | None = None
    category: str | None = None
    is_featured: bool | None = None


class AddLessonRequest(BaseModel):
    title: str = Field(..., max_length=255)
    video_url: str | None = None
    duration_seconds: int | None = None


# --- Response Schemas ---


class ProductIdResponse(BaseModel):
    product_id: str


class CourseIdResponse(BaseModel):
    course_id: str


class LessonIdResponse(BaseModel):
    lesson_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


class ProductResponse(BaseModel):
    product_id: str
    name: str
    subject_name: str
    subject_code: str
    product_type: str
    description: str
    price: float
    sale_enabled: bool
    sale_price: float | None = None
    effective_price: float
    image_url: str | None = None
    pdf_link: str | None = None
    average_rating: float
    review_count: int
    created_at: datetime | None = None


class ProductListResponse(BaseModel):
    products: list[ProductResponse]


class LessonResponse(BaseModel):
    lesson_id: str
    title: str
    video_url: str | None = None
    duration_seconds: int
    position: int


class CourseResponse(BaseModel):
    course_id: str
    title: str
    description: str
    instructor: str
    price: float
    sale_enabled: bool
    sale_price: float | None = None
    effective_price: float
    image_url: str | None = None
    difficulty_level: str
    language: str | None = None
    category: str | None = None
    is_featured: bool
    lessons: list[LessonResponse]
    average_rating: float
    review_count: int
    created_at: datetime | None = None


class CourseListResponse(BaseModel):
    courses: list[CourseResponse]
