import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Fetch and activate the domain by pushing the associated domain_context. The activated domain can then be referred to elsewhere as `current_domain`
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from academy.domain import academy

    academy.init()
    academy.domain_context().push()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session", autouse=True)
def setup_db(request):
    from academy.domain import academy
    from academy.utils.db import drop_db, setup_db

    setup_db(academy)

    yield

    drop_db(academy)


@pytest.fixture(autouse=True)
def run_around_tests():
    """Fixture to automatically cleanup infrastructure after every test"""
    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Factories: create records through the same commands the API uses
# ---------------------------------------------------------------------------
@pytest.fixture()
def make_user():
    from academy.identity.user.registration import RegisterUser
    from protean.utils.globals import current_domain

    counter = {"n": 0}

    def _make(name=None, email=None, role="user"):
        counter["n"] += 1
        n = counter["n"]
        command = RegisterUser(
            name=name or f"Learner {n}",
            email=email or f"learner{n}@example.com",
            role=role,
        )
        return current_domain.process(command, asynchronous=False)

    return _make


@pytest.fixture()
def make_product():
    from academy.catalogue.product.management import CreateProduct
    from protean.utils.globals import current_domain

    def _make(**overrides):
        defaults = {
            "name": "Calculus Exam Pack",
            "subject_name": "Calculus",
            "subject_code": "MATH-101",
            "product_type": "exam",
            "description": "Past papers with worked solutions.",
            "price": 15.0,
        }
        defaults.update(overrides)
        return current_domain.process(CreateProduct(**defaults), asynchronous=False)

    return _make


@pytest.fixture()
def make_course():
    from academy.catalogue.course.lessons import AddLesson
    from academy.catalogue.course.management import CreateCourse
    from protean.utils.globals import current_domain

    def _make(lessons=0, **overrides):
        defaults = {
            "title": "Intro to Statistics",
            "description": "Descriptive statistics and probability.",
            "instructor": "Dr. Rao",
            "price": 49.0,
        }
        defaults.update(overrides)
        course_id = current_domain.process(CreateCourse(**defaults), asynchronous=False)
        for i in range(lessons):
            current_domain.process(
                AddLesson(course_id=course_id, title=f"Lesson {i + 1}", duration_seconds=600),
                asynchronous=False,
            )
        return course_id

    return _make


@pytest.fixture()
def make_review():
    from academy.reviews.review.submission import SubmitReview
    from protean.utils.globals import current_domain

    def _make(user_id, item_id, kind="Course", rating=5, comment="Very helpful."):
        command = SubmitReview(
            user_id=user_id,
            reviewable_id=item_id,
            reviewable_kind=kind,
            rating=rating,
            comment=comment,
        )
        return current_domain.process(command, asynchronous=False)

    return _make
