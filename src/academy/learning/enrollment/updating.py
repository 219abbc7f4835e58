"""UpdateEnrollment (by user/course) and AdminUpdateEnrollment (by id).

Both apply only the fields that were supplied. The ledger travels as JSON
text, either a ``{lesson_id: {...}}`` mapping or a list of rows carrying
``lesson_id``.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from academy.domain import academy
from academy.learning.enrollment.enrolling import find_enrollment
from academy.learning.enrollment.enrollment import Enrollment, EnrollmentStatus, PaymentStatus
from academy.learning.enrollment.progress import course_lesson_count

logger = structlog.get_logger(__name__)

_UPDATABLE = (
    "progress",
    "status",
    "last_accessed",
    "completion_date",
    "certificate_url",
    "notes",
    "payment_status",
    "price_paid",
)


@academy.command(part_of="Enrollment")
class UpdateEnrollment:
    user_id = Identifier(required=True)
    course_id = Identifier(required=True)
    progress = Float(min_value=0.0, max_value=100.0)
    status = String(choices=EnrollmentStatus)
    last_accessed = DateTime()
    completion_date = DateTime()
    certificate_url = String(max_length=500)
    lessons_progress = Text()  # JSON
    notes = Text()
    payment_status = String(choices=PaymentStatus)
    price_paid = Float(min_value=0.0)


@academy.command(part_of="Enrollment")
class AdminUpdateEnrollment:
    enrollment_id = Identifier(required=True)
    progress = Float(min_value=0.0, max_value=100.0)
    status = String(choices=EnrollmentStatus)
    last_accessed = DateTime()
    completion_date = DateTime()
    certificate_url = String(max_length=500)
    lessons_progress = Text()  # JSON
    notes = Text()
    payment_status = String(choices=PaymentStatus)
    price_paid = Float(min_value=0.0)


def _apply(enrollment, command):
    changes = {name: getattr(command, name) for name in _UPDATABLE if getattr(command, name) is not None}

    if command.lessons_progress is not None:
        try:
            changes["lessons_progress"] = json.loads(command.lessons_progress)
        except json.JSONDecodeError:
            raise ValidationError({"lessons_progress": ["Lessons progress is not valid JSON"]}) from None
        changes["total_lessons"] = course_lesson_count(enrollment.course_id)

    enrollment.update(**changes)
    current_domain.repository_for(Enrollment).add(enrollment)
    return sorted(key for key in changes if key != "total_lessons")


@academy.command_handler(part_of=Enrollment)
class UpdateEnrollmentHandler:
    @handle(UpdateEnrollment)
    def update_enrollment(self, command):
        enrollment = find_enrollment(command.user_id, command.course_id)
        fields = _apply(enrollment, command)
        logger.info("Enrollment updated", enrollment_id=str(enrollment.id), fields=fields)
        return str(enrollment.id)

    @handle(AdminUpdateEnrollment)
    def admin_update_enrollment(self, command):
        enrollment = current_domain.repository_for(Enrollment).get(command.enrollment_id)
        fields = _apply(enrollment, command)
        logger.info("Enrollment updated by admin", enrollment_id=str(enrollment.id), fields=fields)
        return str(enrollment.id)
