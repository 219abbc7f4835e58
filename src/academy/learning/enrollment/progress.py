"""RecordLessonProgress: merge a lesson-watch event into an enrollment.

The completion percentage is re-derived from the whole ledger on every call.
The denominator is the course's current lesson count. If the course cannot
be loaded, the ledger's own size is used instead.
"""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Float, Identifier, String
from protean.utils.globals import current_domain

from academy.catalogue.course.course import Course
from academy.domain import academy
from academy.learning.enrollment.enrolling import find_enrollment
from academy.learning.enrollment.enrollment import Enrollment

logger = structlog.get_logger(__name__)


@academy.command(part_of="Enrollment")
class RecordLessonProgress:
    user_id = Identifier(required=True)
    course_id = Identifier(required=True)
    lesson_id = String(max_length=255)
    watched_duration = Float(min_value=0.0)
    completed = Boolean()


def course_lesson_count(course_id):
    """Lesson count of the course, or None when the course is unavailable."""
    try:
        course = current_domain.repository_for(Course).get(str(course_id))
    except ObjectNotFoundError:
        logger.warning("Course unavailable, falling back to ledger size", course_id=str(course_id))
        return None
    return course.lesson_count


@academy.command_handler(part_of=Enrollment)
class RecordLessonProgressHandler:
    @handle(RecordLessonProgress)
    def record_lesson_progress(self, command):
        if not command.lesson_id or not command.lesson_id.strip():
            raise ValidationError({"lesson_id": ["Lesson ID is required."]})

        enrollment = find_enrollment(command.user_id, command.course_id)
        enrollment.record_lesson_progress(
            lesson_id=command.lesson_id,
            total_lessons=course_lesson_count(command.course_id),
            watched_duration=command.watched_duration,
            completed=command.completed,
        )
        current_domain.repository_for(Enrollment).add(enrollment)

        logger.debug(
            "Lesson progress recorded",
            enrollment_id=str(enrollment.id),
            lesson_id=command.lesson_id,
            progress=enrollment.progress,
        )
        return enrollment.progress
