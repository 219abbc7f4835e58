"""Read-side queries over enrollments. Newest enrollments come first."""

from datetime import UTC, datetime

from academy.learning.enrollment.enrolling import find_enrollment
from academy.learning.enrollment.enrollment import Enrollment
from academy.shared.query import fetch_all

_EPOCH = datetime.min.replace(tzinfo=UTC)


def _newest_first(enrollments):
    return sorted(enrollments, key=lambda e: _aware(e.enrolled_at), reverse=True)


def _aware(value):
    if value is None:
        return _EPOCH
    return value if value.tzinfo else value.replace(tzinfo=UTC)


def enrollments_for_user(user_id):
    return _newest_first(fetch_all(Enrollment, user_id=str(user_id)))


def all_enrollments():
    return _newest_first(fetch_all(Enrollment))


def enrollment_for(user_id, course_id):
    return find_enrollment(user_id, course_id)
