"""Enrollment aggregate: a user's place in a course plus their lesson ledger.

``lessons_progress`` is the ledger, a mapping ``lesson_id -> {watched_duration,
completed}`` owned by the enrollment. ``progress`` is derived from the ledger
and the course's lesson count, and is recomputed from the whole ledger on
every change so a missed update never leaves it drifting.

State machine (4 states):
    active ⇄ paused      explicit transitions
    active | paused → completed   only when progress reaches 100
    completed → active   when progress drops below 100 again
    any → cancelled      explicit transition; progress never leaves it
"""

from datetime import UTC, datetime
from enum import Enum

from protean import Index, atomic_change
from protean.exceptions import ValidationError
from protean.fields import DateTime, Dict, Float, Identifier, String, Text

from academy.domain import academy
from academy.learning.enrollment.events import EnrollmentCompleted, LessonProgressRecorded, UserEnrolled

# Sentinel for distinguishing "not provided" from None in partial updates
_UNSET = object()

LEARNER_COURSE_INDEX = Index("user_id", "course_id", unique=True, name="uq_enrollment_user_course")


class EnrollmentStatus(Enum):
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    PAUSED = "paused"


class PaymentStatus(Enum):
    NOT_REQUIRED = "not_required"
    PAID = "paid"
    PENDING = "pending"
    REFUNDED = "refunded"


def compute_progress(lessons_progress, total_lessons=None):
    """Percentage of ``total_lessons`` marked completed in the ledger.

    Without a known lesson count the ledger's own size is the denominator.
    A zero denominator gives 0. The result is capped at 100 because a ledger
    can outlive lessons removed from the course.
    """
    if total_lessons is None:
        total_lessons = len(lessons_progress)
    if total_lessons <= 0:
        return 0.0
    completed = sum(1 for entry in lessons_progress.values() if entry.get("completed"))
    return min(100.0, completed * 100.0 / total_lessons)


def _ledger_entry(watched_duration=0.0, completed=False):
    if watched_duration is None:
        watched_duration = 0.0
    if isinstance(watched_duration, bool) or not isinstance(watched_duration, (int, float)):
        raise ValidationError({"watched_duration": ["Watched duration must be a number"]})
    if watched_duration < 0:
        raise ValidationError({"watched_duration": ["Watched duration cannot be negative"]})
    if not isinstance(completed, bool):
        raise ValidationError({"completed": ["Completed must be true or false"]})
    return {"watched_duration": float(watched_duration), "completed": completed}


def normalize_ledger(value):
    """Accept a ledger as a mapping or as a list of ``{lesson_id, ...}`` rows."""
    if value is None:
        return {}
    if isinstance(value, dict):
        rows = []
        for lesson_id, entry in value.items():
            if entry is None:
                entry = {}
            if not isinstance(entry, dict):
                raise ValidationError({"lessons_progress": [f"Progress for lesson {lesson_id} must be an object"]})
            rows.append({**entry, "lesson_id": lesson_id})
    elif isinstance(value, list):
        rows = value
    else:
        raise ValidationError({"lessons_progress": ["Lessons progress must be a mapping or a list"]})

    ledger = {}
    for row in rows:
        if not isinstance(row, dict):
            raise ValidationError({"lessons_progress": ["Every lesson progress entry must be an object"]})
        lesson_id = str(row.get("lesson_id") or "").strip()
        if not lesson_id:
            raise ValidationError({"lessons_progress": ["Every lesson progress entry needs a lesson ID"]})
        completed = row.get("completed")
        ledger[lesson_id] = _ledger_entry(row.get("watched_duration"), False if completed is None else completed)
    return ledger


@academy.aggregate(indexes=[LEARNER_COURSE_INDEX])
class Enrollment:
    user_id = Identifier(required=True)
    course_id = Identifier(required=True)
    enrolled_at = DateTime()

    # Payment
    payment_status = String(choices=PaymentStatus, default=PaymentStatus.NOT_REQUIRED.value)
    payment_method = String(max_length=50, default="")
    transaction_id = String(max_length=255, default="")
    price_paid = Float(default=0.0, min_value=0.0)
    discount_code = String(max_length=100, default="")

    # Progress
    progress = Float(default=0.0, min_value=0.0, max_value=100.0)
    status = String(choices=EnrollmentStatus, default=EnrollmentStatus.ACTIVE.value)
    last_accessed = DateTime()
    completion_date = DateTime()
    certificate_url = String(max_length=500, default="")
    lessons_progress = Dict(default=dict)
    notes = Text(default="")

    @classmethod
    def enroll(
        cls,
        user_id,
        course_id,
        price_paid=0.0,
        payment_status=None,
        payment_method=None,
        transaction_id=None,
        discount_code=None,
        certificate_url=None,
        notes=None,
    ):
        now = datetime.now(UTC)
        enrollment = cls(
            user_id=user_id,
            course_id=course_id,
            enrolled_at=now,
            payment_status=payment_status or PaymentStatus.NOT_REQUIRED.value,
            payment_method=payment_method or "",
            transaction_id=transaction_id or "",
            price_paid=price_paid or 0.0,
            discount_code=discount_code or "",
            progress=0.0,
            status=EnrollmentStatus.ACTIVE.value,
            last_accessed=now,
            certificate_url=certificate_url or "",
            lessons_progress={},
            notes=notes or "",
        )

        enrollment.raise_(
            UserEnrolled(
                enrollment_id=str(enrollment.id),
                user_id=str(user_id),
                course_id=str(course_id),
                payment_status=enrollment.payment_status,
                price_paid=enrollment.price_paid,
                enrolled_at=now,
            )
        )
        return enrollment

    # -------------------------------------------------------------------
    # Lesson ledger
    # -------------------------------------------------------------------
    def record_lesson_progress(self, lesson_id, total_lessons=None, watched_duration=_UNSET, completed=_UNSET):
        """Merge one lesson-watch event into the ledger and re-derive progress.

        An existing entry keeps any field not supplied. A new entry starts
        from ``watched_duration=0, completed=False``. ``total_lessons`` is the
        course's lesson count, or None when the course is unavailable.
        """
        lesson_id = str(lesson_id or "").strip()
        if not lesson_id:
            raise ValidationError({"lesson_id": ["Lesson ID is required."]})

        ledger = dict(self.lessons_progress or {})
        entry = dict(ledger.get(lesson_id) or _ledger_entry())
        if watched_duration is not _UNSET and watched_duration is not None:
            entry["watched_duration"] = _ledger_entry(watched_duration)["watched_duration"]
        if completed is not _UNSET and completed is not None:
            entry["completed"] = bool(completed)
        ledger[lesson_id] = entry

        now = datetime.now(UTC)
        with atomic_change(self):
            self.lessons_progress = ledger
            self.last_accessed = now
            self._apply_progress(compute_progress(ledger, total_lessons), now)

        self.raise_(
            LessonProgressRecorded(
                enrollment_id=str(self.id),
                user_id=str(self.user_id),
                course_id=str(self.course_id),
                lesson_id=lesson_id,
                watched_duration=entry["watched_duration"],
                completed=entry["completed"],
                progress=self.progress,
                recorded_at=now,
            )
        )

    # -------------------------------------------------------------------
    # Partial update (user and admin)
    # -------------------------------------------------------------------
    def update(
        self,
        progress=_UNSET,
        status=_UNSET,
        last_accessed=_UNSET,
        completion_date=_UNSET,
        certificate_url=_UNSET,
        lessons_progress=_UNSET,
        notes=_UNSET,
        payment_status=_UNSET,
        price_paid=_UNSET,
        total_lessons=None,
    ):
        """Apply only the supplied fields.

        An explicit ``progress`` is taken as given. When only a new ledger is
        supplied, progress is re-derived from it.
        """
        if status == EnrollmentStatus.COMPLETED.value:
            raise ValidationError({"status": ["An enrollment is completed by finishing its lessons"]})

        now = datetime.now(UTC)
        with atomic_change(self):
            if status is not _UNSET:
                self.status = status
            if last_accessed is not _UNSET:
                self.last_accessed = last_accessed
            if completion_date is not _UNSET:
                self.completion_date = completion_date
            if certificate_url is not _UNSET:
                self.certificate_url = certificate_url
            if notes is not _UNSET:
                self.notes = notes
            if payment_status is not _UNSET:
                self.payment_status = payment_status
            if price_paid is not _UNSET:
                self.price_paid = price_paid

            if lessons_progress is not _UNSET:
                self.lessons_progress = normalize_ledger(lessons_progress)

            if progress is not _UNSET:
                self._apply_progress(progress, now)
            elif lessons_progress is not _UNSET:
                self._apply_progress(compute_progress(self.lessons_progress, total_lessons), now)

    def _apply_progress(self, progress, now):
        self.progress = float(progress)
        current = EnrollmentStatus(self.status)

        if self.progress >= 100.0 and current in (EnrollmentStatus.ACTIVE, EnrollmentStatus.PAUSED):
            self.status = EnrollmentStatus.COMPLETED.value
            if self.completion_date is None:
                self.completion_date = now
            self.raise_(
                EnrollmentCompleted(
                    enrollment_id=str(self.id),
                    user_id=str(self.user_id),
                    course_id=str(self.course_id),
                    completed_at=self.completion_date,
                )
            )
        elif self.progress < 100.0 and current == EnrollmentStatus.COMPLETED:
            self.status = EnrollmentStatus.ACTIVE.value
            self.completion_date = None
