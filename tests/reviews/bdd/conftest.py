"""Shared BDD fixtures and step definitions for reviews and ratings."""

import pytest
from academy.catalogue.course.course import Course
from protean.utils.globals import current_domain
from pytest_bdd import given, parsers, then


@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


@pytest.fixture()
def reviews_by_rating():
    """rating -> (review_id, author_id) for the reviews created in a scenario."""
    return {}


@given("a course open for reviews", target_fixture="course_id")
def course_open_for_reviews(make_course):
    return make_course(title="Linear Algebra", lessons=3)


@given(parsers.re(r"reviews with ratings (?P<ratings>[\d, and]+)"))
def reviews_with_ratings(ratings, course_id, make_user, make_review, reviews_by_rating):
    values = [int(v) for v in ratings.replace("and", ",").split(",") if v.strip()]
    for rating in values:
        author = make_user()
        reviews_by_rating[rating] = (make_review(author, course_id, rating=rating), author)


@then(parsers.cfparse("the course has an average rating of {average:f} from {count:d} reviews"))
def course_rating_is(course_id, average, count):
    course = current_domain.repository_for(Course).get(course_id)
    assert course.average_rating == pytest.approx(average, abs=0.01)
    assert course.review_count == count
