"""BDD tests for deleting a user account."""

import pytest
from academy.catalogue.course.course import Course
from academy.identity.user.removal import DeleteUser
from academy.learning.enrollment.enrolling import Enroll
from academy.learning.enrollment.listing import enrollments_for_user
from academy.reviews.review.listing import reviews_by_user
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/account_removal.feature")


@given(
    parsers.cfparse("a course reviewed by two learners with ratings {first:d} and {second:d}"),
    target_fixture="scene",
)
def course_with_two_reviews(make_user, make_course, make_review, first, second):
    course_id = make_course(lessons=2)
    learners = [make_user(), make_user()]
    make_review(learners[0], course_id, rating=first)
    make_review(learners[1], course_id, rating=second)
    return {"course_id": course_id, "learners": learners}


@given("the first learner is enrolled in the course")
def first_learner_enrolled(scene):
    current_domain.process(
        Enroll(user_id=scene["learners"][0], course_id=scene["course_id"]),
        asynchronous=False,
    )


@when("the first learner's account is deleted")
def delete_first_learner(scene):
    current_domain.process(DeleteUser(user_id=scene["learners"][0]), asynchronous=False)


@then(parsers.cfparse("the course has an average rating of {average:f} from {count:d} reviews"))
def course_rating_is(scene, average, count):
    course = current_domain.repository_for(Course).get(scene["course_id"])
    assert course.average_rating == pytest.approx(average)
    assert course.review_count == count


@then("the first learner has no reviews or enrollments left")
def nothing_left(scene):
    learner = scene["learners"][0]
    assert reviews_by_user(learner) == []
    assert enrollments_for_user(learner) == []
