"""Enroll / Unenroll / DeleteEnrollment.

A user enrolls in a course at most once. The (user, course) pair is checked
with a repository query before the enrollment is created, and the unique
``LEARNER_COURSE_INDEX`` turns a concurrent duplicate into the same conflict.
Users enroll through ``Enroll`` with defaults; admins use the same command
with explicit payment details.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Float, Identifier, String, Text
from protean.utils.globals import current_domain

from academy.catalogue.course.course import Course
from academy.domain import academy
from academy.errors import ConflictError, unique_index_as_conflict
from academy.learning.enrollment.enrollment import LEARNER_COURSE_INDEX, Enrollment, PaymentStatus
from academy.shared.query import fetch_one

logger = structlog.get_logger(__name__)

_ALREADY_ENROLLED = {"enrollment": ["You are already enrolled in this course."]}


@academy.command(part_of="Enrollment")
class Enroll:
    user_id = Identifier(required=True)
    course_id = Identifier(required=True)
    payment_status = String(choices=PaymentStatus)
    price_paid = Float(min_value=0.0)
    payment_method = String(max_length=50)
    transaction_id = String(max_length=255)
    discount_code = String(max_length=100)
    certificate_url = String(max_length=500)
    notes = Text()


@academy.command(part_of="Enrollment")
class Unenroll:
    user_id = Identifier(required=True)
    course_id = Identifier(required=True)


@academy.command(part_of="Enrollment")
class DeleteEnrollment:
    enrollment_id = Identifier(required=True)


def find_enrollment(user_id, course_id):
    """The enrollment for (user, course); raises ObjectNotFoundError if absent."""
    enrollment = fetch_one(Enrollment, user_id=str(user_id), course_id=str(course_id))
    if enrollment is None:
        raise ObjectNotFoundError({"enrollment": ["Enrollment not found for this user/course."]})
    return enrollment


@academy.command_handler(part_of=Enrollment)
class EnrollmentCommandHandler:
    @handle(Enroll)
    def enroll(self, command):
        try:
            course = current_domain.repository_for(Course).get(command.course_id)
        except ObjectNotFoundError:
            raise ObjectNotFoundError({"course": ["Course not found."]}) from None

        if fetch_one(Enrollment, user_id=str(command.user_id), course_id=str(command.course_id)) is not None:
            raise ConflictError(_ALREADY_ENROLLED)

        price_paid = command.price_paid if command.price_paid is not None else course.effective_price
        enrollment = Enrollment.enroll(
            user_id=command.user_id,
            course_id=command.course_id,
            price_paid=price_paid,
            payment_status=command.payment_status,
            payment_method=command.payment_method,
            transaction_id=command.transaction_id,
            discount_code=command.discount_code,
            certificate_url=command.certificate_url,
            notes=command.notes,
        )
        with unique_index_as_conflict(LEARNER_COURSE_INDEX, _ALREADY_ENROLLED):
            current_domain.repository_for(Enrollment).add(enrollment)

        logger.info("User enrolled", enrollment_id=str(enrollment.id), user_id=str(command.user_id))
        return str(enrollment.id)

    @handle(Unenroll)
    def unenroll(self, command):
        enrollment = find_enrollment(command.user_id, command.course_id)
        current_domain.repository_for(Enrollment)._dao.delete(enrollment)
        logger.info("User unenrolled", enrollment_id=str(enrollment.id), user_id=str(command.user_id))

    @handle(DeleteEnrollment)
    def delete_enrollment(self, command):
        repo = current_domain.repository_for(Enrollment)
        enrollment = repo.get(command.enrollment_id)
        repo._dao.delete(enrollment)
        logger.info("Enrollment removed", enrollment_id=str(enrollment.id))
