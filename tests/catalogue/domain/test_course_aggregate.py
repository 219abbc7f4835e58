"""Tests for the Course aggregate and its lessons."""

import pytest
from academy.catalogue.course.course import Course
from protean.exceptions import ValidationError


def _make_course(**overrides):
    defaults = {
        "title": "Organic Chemistry I",
        "description": "Structure and reactivity of carbon compounds.",
        "instructor": "Prof. Iyer",
        "price": 60.0,
    }
    defaults.update(overrides)
    return Course.create(**defaults)


class TestCourseCreation:
    def test_defaults(self):
        course = _make_course()
        assert course.difficulty_level == "Beginner"
        assert course.language == "English"
        assert course.lesson_count == 0
        assert course.review_count == 0

    def test_unknown_difficulty_rejected(self):
        with pytest.raises(ValidationError):
            _make_course(difficulty_level="Expert")


class TestLessons:
    def test_lessons_are_positioned_in_order(self):
        course = _make_course()
        course.add_lesson("Bonding")
        course.add_lesson("Isomers", duration_seconds=900)

        assert course.lesson_count == 2
        assert [(lesson.title, lesson.position) for lesson in course.lessons] == [("Bonding", 0), ("Isomers", 1)]

    def test_remove_lesson_renumbers(self):
        course = _make_course()
        first = course.add_lesson("Bonding")
        course.add_lesson("Isomers")
        course.add_lesson("Reactions")

        course.remove_lesson(first.id)

        assert course.lesson_count == 2
        assert sorted(lesson.position for lesson in course.lessons) == [0, 1]

    def test_remove_unknown_lesson_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_course().remove_lesson("nope")
        assert "lesson_id" in exc.value.messages


class TestCoursePricing:
    def test_effective_price_uses_sale(self):
        course = _make_course(sale_enabled=True, sale_price=30.0)
        assert course.effective_price == 30.0

    def test_update_details(self):
        course = _make_course()
        course.update_details(title="Organic Chemistry I (2025)", is_featured=True)
        assert course.title == "Organic Chemistry I (2025)"
        assert course.is_featured is True
