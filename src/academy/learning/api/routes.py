"""FastAPI routes for enrollments and lesson progress.

Admin routes are registered before the ``/{course_id}`` routes so that the
literal ``admin`` segment is never taken for a course id.
"""

import json

from fastapi import APIRouter
from protean.utils.globals import current_domain

from academy.learning.api.schemas import (
    AdminEnrollRequest,
    AdminUpdateEnrollmentRequest,
    EnrollmentIdResponse,
    EnrollmentListResponse,
    EnrollmentResponse,
    EnrollRequest,
    LessonProgressRequest,
    StatusResponse,
    UpdateEnrollmentRequest,
)
from academy.learning.enrollment.enrolling import DeleteEnrollment, Enroll, Unenroll
from academy.learning.enrollment.listing import all_enrollments, enrollment_for, enrollments_for_user
from academy.learning.enrollment.progress import RecordLessonProgress
from academy.learning.enrollment.updating import AdminUpdateEnrollment, UpdateEnrollment

enrollment_router = APIRouter(prefix="/enrollments", tags=["enrollments"])


def _enrollment_response(enrollment) -> EnrollmentResponse:
    return EnrollmentResponse(
        enrollment_id=str(enrollment.id),
        user_id=str(enrollment.user_id),
        course_id=str(enrollment.course_id),
        enrolled_at=enrollment.enrolled_at,
        payment_status=enrollment.payment_status,
        payment_method=enrollment.payment_method,
        transaction_id=enrollment.transaction_id,
        price_paid=enrollment.price_paid,
        discount_code=enrollment.discount_code,
        progress=enrollment.progress,
        status=enrollment.status,
        last_accessed=enrollment.last_accessed,
        completion_date=enrollment.completion_date,
        certificate_url=enrollment.certificate_url,
        lessons_progress=enrollment.lessons_progress or {},
        notes=enrollment.notes,
    )


def _list_response(enrollments) -> EnrollmentListResponse:
    return EnrollmentListResponse(enrollments=[_enrollment_response(e) for e in enrollments])


def _ledger_json(body):
    if body.lessons_progress is None:
        return None
    return json.dumps(body.lessons_progress)


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
@enrollment_router.get("/admin", response_model=EnrollmentListResponse)
async def list_all_enrollments() -> EnrollmentListResponse:
    return _list_response(all_enrollments())


@enrollment_router.post("/admin", status_code=201, response_model=EnrollmentIdResponse)
async def admin_enroll(body: AdminEnrollRequest) -> EnrollmentIdResponse:
    """Create an enrollment with explicit payment details."""
    command = Enroll(
        user_id=body.user_id,
        course_id=body.course_id,
        payment_status=body.payment_status,
        price_paid=body.price_paid,
        payment_method=body.payment_method,
        transaction_id=body.transaction_id,
        discount_code=body.discount_code,
        certificate_url=body.certificate_url,
        notes=body.notes,
    )
    enrollment_id = current_domain.process(command, asynchronous=False)
    return EnrollmentIdResponse(enrollment_id=enrollment_id)


@enrollment_router.put("/admin/{enrollment_id}", response_model=StatusResponse)
async def admin_update_enrollment(enrollment_id: str, body: AdminUpdateEnrollmentRequest) -> StatusResponse:
    command = AdminUpdateEnrollment(
        enrollment_id=enrollment_id,
        progress=body.progress,
        status=body.status,
        last_accessed=body.last_accessed,
        completion_date=body.completion_date,
        certificate_url=body.certificate_url,
        lessons_progress=_ledger_json(body),
        notes=body.notes,
        payment_status=body.payment_status,
        price_paid=body.price_paid,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@enrollment_router.delete("/admin/{enrollment_id}", response_model=StatusResponse)
async def admin_delete_enrollment(enrollment_id: str) -> StatusResponse:
    current_domain.process(DeleteEnrollment(enrollment_id=enrollment_id), asynchronous=False)
    return StatusResponse()


# ---------------------------------------------------------------------------
# Learner
# ---------------------------------------------------------------------------
@enrollment_router.get("/users/{user_id}", response_model=EnrollmentListResponse)
async def list_user_enrollments(user_id: str) -> EnrollmentListResponse:
    """A user's enrollments, newest first."""
    return _list_response(enrollments_for_user(user_id))


@enrollment_router.get("/{course_id}", response_model=EnrollmentResponse)
async def get_enrollment(course_id: str, user_id: str) -> EnrollmentResponse:
    return _enrollment_response(enrollment_for(user_id, course_id))


@enrollment_router.post("/{course_id}", status_code=201, response_model=EnrollmentIdResponse)
async def enroll(course_id: str, body: EnrollRequest) -> EnrollmentIdResponse:
    """Enroll in a course. The price defaults to the course's current price."""
    command = Enroll(
        user_id=body.user_id,
        course_id=course_id,
        payment_status=body.payment_status,
        price_paid=body.price_paid,
        payment_method=body.payment_method,
        transaction_id=body.transaction_id,
        discount_code=body.discount_code,
        notes=body.notes,
    )
    enrollment_id = current_domain.process(command, asynchronous=False)
    return EnrollmentIdResponse(enrollment_id=enrollment_id)


@enrollment_router.delete("/{course_id}", response_model=StatusResponse)
async def unenroll(course_id: str, user_id: str) -> StatusResponse:
    current_domain.process(Unenroll(user_id=user_id, course_id=course_id), asynchronous=False)
    return StatusResponse()


@enrollment_router.patch("/{course_id}", response_model=EnrollmentResponse)
async def update_enrollment(course_id: str, body: UpdateEnrollmentRequest) -> EnrollmentResponse:
    command = UpdateEnrollment(
        user_id=body.user_id,
        course_id=course_id,
        progress=body.progress,
        status=body.status,
        last_accessed=body.last_accessed,
        completion_date=body.completion_date,
        certificate_url=body.certificate_url,
        lessons_progress=_ledger_json(body),
        notes=body.notes,
    )
    current_domain.process(command, asynchronous=False)
    return _enrollment_response(enrollment_for(body.user_id, course_id))


@enrollment_router.patch("/{course_id}/progress", response_model=EnrollmentResponse)
async def record_lesson_progress(course_id: str, body: LessonProgressRequest) -> EnrollmentResponse:
    """Record progress on one lesson and return the updated enrollment."""
    command = RecordLessonProgress(
        user_id=body.user_id,
        course_id=course_id,
        lesson_id=body.lesson_id,
        watched_duration=body.watched_duration,
        completed=body.completed,
    )
    current_domain.process(command, asynchronous=False)
    return _enrollment_response(enrollment_for(body.user_id, course_id))
