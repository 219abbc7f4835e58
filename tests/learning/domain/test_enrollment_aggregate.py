"""Tests for the Enrollment aggregate and its completion rule."""

from datetime import UTC, datetime

import pytest
from academy.learning.enrollment.enrollment import Enrollment, EnrollmentStatus, PaymentStatus
from academy.learning.enrollment.events import EnrollmentCompleted, LessonProgressRecorded, UserEnrolled
from protean.exceptions import ValidationError


def _enroll(**overrides):
    defaults = {"user_id": "user-1", "course_id": "course-1"}
    defaults.update(overrides)
    return Enrollment.enroll(**defaults)


class TestEnroll:
    def test_defaults(self):
        enrollment = _enroll()
        assert enrollment.status == EnrollmentStatus.ACTIVE.value
        assert enrollment.progress == 0.0
        assert enrollment.payment_status == PaymentStatus.NOT_REQUIRED.value
        assert enrollment.lessons_progress == {}
        assert enrollment.enrolled_at is not None

    def test_explicit_payment(self):
        enrollment = _enroll(payment_status="paid", price_paid=30.0, transaction_id="txn-1")
        assert enrollment.payment_status == "paid"
        assert enrollment.price_paid == 30.0
        assert enrollment.transaction_id == "txn-1"

    def test_raises_enrolled_event(self):
        event = _enroll()._events[0]
        assert isinstance(event, UserEnrolled)
        assert event.course_id == "course-1"

    def test_unknown_payment_status_rejected(self):
        with pytest.raises(ValidationError):
            _enroll(payment_status="gifted")


class TestRecordLessonProgress:
    def test_new_entry_defaults(self):
        enrollment = _enroll()
        enrollment.record_lesson_progress("L1", total_lessons=4)
        assert enrollment.lessons_progress["L1"] == {"watched_duration": 0.0, "completed": False}
        assert enrollment.progress == 0.0

    def test_merge_keeps_unsupplied_fields(self):
        enrollment = _enroll()
        enrollment.record_lesson_progress("L1", total_lessons=4, watched_duration=120.0)
        enrollment.record_lesson_progress("L1", total_lessons=4, completed=True)
        assert enrollment.lessons_progress["L1"] == {"watched_duration": 120.0, "completed": True}
        assert enrollment.progress == 25.0

    def test_progress_follows_ledger(self):
        enrollment = _enroll()
        enrollment.record_lesson_progress("L1", total_lessons=4, completed=True)
        enrollment.record_lesson_progress("L2", total_lessons=4, completed=False)
        assert enrollment.progress == 25.0

        enrollment.record_lesson_progress("L2", total_lessons=4, completed=True)
        assert enrollment.progress == 50.0

    def test_last_accessed_refreshed(self):
        enrollment = _enroll()
        before = enrollment.last_accessed
        enrollment.record_lesson_progress("L1", total_lessons=1)
        assert enrollment.last_accessed >= before

    def test_blank_lesson_id_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _enroll().record_lesson_progress("  ", total_lessons=2)
        assert "Lesson ID is required." in str(exc.value)

    def test_negative_duration_rejected(self):
        with pytest.raises(ValidationError):
            _enroll().record_lesson_progress("L1", total_lessons=2, watched_duration=-5)

    def test_event_raised(self):
        enrollment = _enroll()
        enrollment._events.clear()
        enrollment.record_lesson_progress("L1", total_lessons=2, completed=True)
        event = enrollment._events[-1]
        assert isinstance(event, LessonProgressRecorded)
        assert event.progress == 50.0


class TestCompletionRule:
    def test_finishing_all_lessons_completes(self):
        enrollment = _enroll()
        enrollment.record_lesson_progress("L1", total_lessons=2, completed=True)
        enrollment.record_lesson_progress("L2", total_lessons=2, completed=True)

        assert enrollment.progress == 100.0
        assert enrollment.status == EnrollmentStatus.COMPLETED.value
        assert enrollment.completion_date is not None
        assert any(isinstance(e, EnrollmentCompleted) for e in enrollment._events)

    def test_paused_enrollment_completes(self):
        enrollment = _enroll()
        enrollment.update(status="paused")
        enrollment.record_lesson_progress("L1", total_lessons=1, completed=True)
        assert enrollment.status == EnrollmentStatus.COMPLETED.value

    def test_dropping_below_100_reactivates(self):
        enrollment = _enroll()
        enrollment.record_lesson_progress("L1", total_lessons=1, completed=True)
        enrollment.record_lesson_progress("L1", total_lessons=1, completed=False)

        assert enrollment.status == EnrollmentStatus.ACTIVE.value
        assert enrollment.completion_date is None

    def test_cancelled_is_never_changed_by_progress(self):
        enrollment = _enroll()
        enrollment.update(status="cancelled")
        enrollment.record_lesson_progress("L1", total_lessons=1, completed=True)

        assert enrollment.progress == 100.0
        assert enrollment.status == EnrollmentStatus.CANCELLED.value


class TestUpdate:
    def test_only_supplied_fields_change(self):
        enrollment = _enroll(notes="keep me")
        enrollment.update(certificate_url="https://certs.example.com/1.pdf")
        assert enrollment.certificate_url == "https://certs.example.com/1.pdf"
        assert enrollment.notes == "keep me"

    def test_explicit_progress_wins_over_ledger(self):
        enrollment = _enroll()
        enrollment.update(progress=10.0, lessons_progress={"L1": {"completed": True}}, total_lessons=2)
        assert enrollment.progress == 10.0
        assert enrollment.lessons_progress["L1"]["completed"] is True

    def test_ledger_alone_rederives_progress(self):
        enrollment = _enroll()
        enrollment.update(lessons_progress={"L1": {"completed": True}, "L2": {}}, total_lessons=4)
        assert enrollment.progress == 25.0

    def test_explicit_progress_of_100_completes(self):
        enrollment = _enroll()
        enrollment.update(progress=100.0)
        assert enrollment.status == EnrollmentStatus.COMPLETED.value

    def test_completed_status_not_accepted(self):
        with pytest.raises(ValidationError) as exc:
            _enroll().update(status="completed")
        assert "status" in exc.value.messages

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError):
            _enroll().update(status="archived")

    def test_progress_above_100_rejected(self):
        with pytest.raises(ValidationError):
            _enroll().update(progress=120.0)

    def test_last_accessed_set_explicitly(self):
        when = datetime(2025, 1, 5, 9, 30, tzinfo=UTC)
        enrollment = _enroll()
        enrollment.update(last_accessed=when)
        assert enrollment.last_accessed == when
