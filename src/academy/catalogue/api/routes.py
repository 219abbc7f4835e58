"""FastAPI endpoints for products and courses."""

from fastapi import APIRouter
from protean.utils.globals import current_domain

from academy.catalogue.api.schemas import (
    AddLessonRequest,
    CourseIdResponse,
    CourseListResponse,
    CourseResponse,
    CreateCourseRequest,
    CreateProductRequest,
    LessonIdResponse,
    LessonResponse,
    ProductIdResponse,
    ProductListResponse,
    ProductResponse,
    StatusResponse,
    UpdateCourseRequest,
    UpdateProductRequest,
)
from academy.catalogue.course.course import Course
from academy.catalogue.course.lessons import AddLesson, RemoveLesson
from academy.catalogue.course.management import CreateCourse, DeleteCourse, UpdateCourseDetails
from academy.catalogue.product.management import CreateProduct, DeleteProduct, UpdateProductDetails
from academy.catalogue.product.product import Product
from academy.shared.query import fetch_all

product_router = APIRouter(prefix="/products", tags=["products"])
course_router = APIRouter(prefix="/courses", tags=["courses"])


def _product_response(product) -> ProductResponse:
    return ProductResponse(
        product_id=str(product.id),
        name=product.name,
        subject_name=product.subject_name,
        subject_code=product.subject_code,
        product_type=product.product_type,
        description=product.description,
        price=product.price,
        sale_enabled=bool(product.sale_enabled),
        sale_price=product.sale_price,
        effective_price=product.effective_price,
        image_url=product.image_url,
        pdf_link=product.pdf_link,
        average_rating=product.average_rating,
        review_count=product.review_count,
        created_at=product.created_at,
    )


def _course_response(course) -> CourseResponse:
    return CourseResponse(
        course_id=str(course.id),
        title=course.title,
        description=course.description,
        instructor=course.instructor,
        price=course.price,
        sale_enabled=bool(course.sale_enabled),
        sale_price=course.sale_price,
        effective_price=course.effective_price,
        image_url=course.image_url,
        difficulty_level=course.difficulty_level,
        language=course.language,
        category=course.category,
        is_featured=bool(course.is_featured),
        lessons=[
            LessonResponse(
                lesson_id=str(lesson.id),
                title=lesson.title,
                video_url=lesson.video_url,
                duration_seconds=lesson.duration_seconds or 0,
                position=lesson.position or 0,
            )
            for lesson in sorted(course.lessons, key=lambda lesson: lesson.position or 0)
        ],
        average_rating=course.average_rating,
        review_count=course.review_count,
        created_at=course.created_at,
    )


# --- Product endpoints ---


@product_router.post("", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        subject_name=body.subject_name,
        subject_code=body.subject_code,
        product_type=body.product_type,
        description=body.description,
        price=body.price,
        sale_enabled=body.sale_enabled,
        sale_price=body.sale_price,
        image_url=body.image_url,
        pdf_link=body.pdf_link,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@product_router.get("", response_model=ProductListResponse)
async def list_products() -> ProductListResponse:
    return ProductListResponse(products=[_product_response(p) for p in fetch_all(Product)])


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    return _product_response(current_domain.repository_for(Product).get(product_id))


@product_router.put("/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    command = UpdateProductDetails(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        sale_enabled=body.sale_enabled,
        sale_price=body.sale_price,
        image_url=body.image_url,
        pdf_link=body.pdf_link,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@product_router.delete("/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    """Delete a product together with its reviews."""
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# --- Course endpoints ---


@course_router.post("", status_code=201, response_model=CourseIdResponse)
async def create_course(body: CreateCourseRequest) -> CourseIdResponse:
    command = CreateCourse(
        title=body.title,
        description=body.description,
        instructor=body.instructor,
        price=body.price,
        sale_enabled=body.sale_enabled,
        sale_price=body.sale_price,
        image_url=body.image_url,
        difficulty_level=body.difficulty_level,
        language=body.language,
        category=body.category,
        is_featured=body.is_featured,
    )
    result = current_domain.process(command, asynchronous=False)
    return CourseIdResponse(course_id=result)


@course_router.get("", response_model=CourseListResponse)
async def list_courses() -> CourseListResponse:
    return CourseListResponse(courses=[_course_response(c) for c in fetch_all(Course)])


@course_router.get("/{course_id}", response_model=CourseResponse)
async def get_course(course_id: str) -> CourseResponse:
    return _course_response(current_domain.repository_for(Course).get(course_id))


@course_router.put("/{course_id}", response_model=StatusResponse)
async def update_course(course_id: str, body: UpdateCourseRequest) -> StatusResponse:
    command = UpdateCourseDetails(
        course_id=course_id,
        title=body.title,
        description=body.description,
        instructor=body.instructor,
        price=body.price,
        sale_enabled=body.sale_enabled,
        sale_price=body.sale_price,
        image_url=body.image_url,
        difficulty_level=body.difficulty_level,
        language=body.language,
        category=body.category,
        is_featured=body.is_featured,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@course_router.delete("/{course_id}", response_model=StatusResponse)
async def delete_course(course_id: str) -> StatusResponse:
    """Delete a course together with its reviews and enrollments."""
    current_domain.process(DeleteCourse(course_id=course_id), asynchronous=False)
    return StatusResponse()


@course_router.post("/{course_id}/lessons", status_code=201, response_model=LessonIdResponse)
async def add_lesson(course_id: str, body: AddLessonRequest) -> LessonIdResponse:
    command = AddLesson(
        course_id=course_id,
        title=body.title,
        video_url=body.video_url,
        duration_seconds=body.duration_seconds,
    )
    result = current_domain.process(command, asynchronous=False)
    return LessonIdResponse(lesson_id=result)


@course_router.delete("/{course_id}/lessons/{lesson_id}", response_model=StatusResponse)
async def remove_lesson(course_id: str, lesson_id: str) -> StatusResponse:
    current_domain.process(RemoveLesson(course_id=course_id, lesson_id=lesson_id), asynchronous=False)
    return StatusResponse()
