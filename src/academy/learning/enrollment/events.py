"""Domain events for the Enrollment aggregate."""

from protean.fields import Boolean, DateTime, Float, Identifier, String

from academy.domain import academy


@academy.event(part_of="Enrollment")
class UserEnrolled:
    """A user enrolled in a course."""

    __version__ = 1

    enrollment_id = Identifier(required=True)
    user_id = Identifier(required=True)
    course_id = Identifier(required=True)
    payment_status = String(required=True)
    price_paid = Float(required=True)
    enrolled_at = DateTime(required=True)


@academy.event(part_of="Enrollment")
class LessonProgressRecorded:
    """A lesson-watch event was merged into the enrollment's ledger."""

    __version__ = 1

    enrollment_id = Identifier(required=True)
    user_id = Identifier(required=True)
    course_id = Identifier(required=True)
    lesson_id = String(required=True)
    watched_duration = Float(required=True)
    completed = Boolean(required=True)
    progress = Float(required=True)
    recorded_at = DateTime(required=True)


@academy.event(part_of="Enrollment")
class EnrollmentCompleted:
    """Every lesson of the course has been completed."""

    __version__ = 1

    enrollment_id = Identifier(required=True)
    user_id = Identifier(required=True)
    course_id = Identifier(required=True)
    completed_at = DateTime(required=True)
