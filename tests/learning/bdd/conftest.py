"""Shared BDD fixtures and step definitions for enrollments."""

import pytest
from academy.learning.enrollment.enrolling import Enroll
from academy.learning.enrollment.listing import enrollment_for
from academy.learning.enrollment.progress import RecordLessonProgress
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then


@given(parsers.cfparse("a course with {count:d} lessons"), target_fixture="course_id")
def course_with_lessons(make_course, count):
    return make_course(title="Data Structures", lessons=count)


@given("a learner enrolled in the course", target_fixture="learner_id")
def learner_enrolled(make_user, course_id):
    user_id = make_user()
    current_domain.process(Enroll(user_id=user_id, course_id=course_id), asynchronous=False)
    return user_id


@pytest.fixture()
def record(learner_id, course_id):
    def _record(lesson_id, **kwargs):
        command = RecordLessonProgress(user_id=learner_id, course_id=course_id, lesson_id=lesson_id, **kwargs)
        current_domain.process(command, asynchronous=False)

    return _record


@then(parsers.cfparse("the enrollment progress is {progress:f}"))
def enrollment_progress_is(learner_id, course_id, progress):
    assert enrollment_for(learner_id, course_id).progress == pytest.approx(progress)


@then(parsers.cfparse('the enrollment status is "{status}"'))
def enrollment_status_is(learner_id, course_id, status):
    assert enrollment_for(learner_id, course_id).status == status
