"""Course aggregate with its ordered Lesson entities.

A course is reviewable (``average_rating``/``review_count`` are written only by
the rating aggregator) and is the unit users enroll in. Its lesson count is
the denominator of every enrollment's completion percentage.
"""

from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, Float, HasMany, Integer, String, Text

from academy.domain import academy

_UNSET = object()


class DifficultyLevel(Enum):
    BEGINNER = "Beginner"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"


@academy.entity(part_of="Course")
class Lesson:
    title = String(required=True, max_length=255)
    video_url = String(max_length=500)
    duration_seconds = Integer(default=0, min_value=0)
    position = Integer(default=0, min_value=0)


@academy.aggregate
class Course:
    title = String(required=True, max_length=255)
    description = Text(required=True)
    instructor = String(required=True, max_length=255)
    price = Float(required=True, min_value=0.0)
    sale_enabled = Boolean(default=False)
    sale_price = Float(min_value=0.0)
    image_url = String(max_length=500)
    difficulty_level = String(choices=DifficultyLevel, default=DifficultyLevel.BEGINNER.value)
    language = String(max_length=50, default="English")
    category = String(max_length=100, default="")
    is_featured = Boolean(default=False)
    lessons = HasMany(Lesson)

    # Derived from reviews
    average_rating = Float(default=0.0, min_value=0.0, max_value=5.0)
    review_count = Integer(default=0, min_value=0)

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def sale_price_required_when_sale_enabled(self):
        if self.sale_enabled and self.sale_price is None:
            raise ValidationError({"sale_price": ["A sale price is required when the sale is enabled"]})

    @classmethod
    def create(
        cls,
        title,
        description,
        instructor,
        price,
        sale_enabled=False,
        sale_price=None,
        image_url=None,
        difficulty_level=None,
        language=None,
        category=None,
        is_featured=False,
    ):
        now = datetime.now(UTC)
        return cls(
            title=title,
            description=description,
            instructor=instructor,
            price=price,
            sale_enabled=sale_enabled,
            sale_price=sale_price,
            image_url=image_url,
            difficulty_level=difficulty_level or DifficultyLevel.BEGINNER.value,
            language=language or "English",
            category=category or "",
            is_featured=is_featured,
            average_rating=0.0,
            review_count=0,
            created_at=now,
            updated_at=now,
        )

    @property
    def effective_price(self):
        if self.sale_enabled and self.sale_price is not None:
            return self.sale_price
        return self.price

    @property
    def lesson_count(self):
        return len(self.lessons)

    def update_details(
        self,
        title=_UNSET,
        description=_UNSET,
        instructor=_UNSET,
        price=_UNSET,
        sale_enabled=_UNSET,
        sale_price=_UNSET,
        image_url=_UNSET,
        difficulty_level=_UNSET,
        language=_UNSET,
        category=_UNSET,
        is_featured=_UNSET,
    ):
        changes = {
            "title": title,
            "description": description,
            "instructor": instructor,
            "price": price,
            "sale_enabled": sale_enabled,
            "sale_price": sale_price,
            "image_url": image_url,
            "difficulty_level": difficulty_level,
            "language": language,
            "category": category,
            "is_featured": is_featured,
        }
        with atomic_change(self):
            for field_name, value in changes.items():
                if value is not _UNSET:
                    setattr(self, field_name, value)
            self.updated_at = datetime.now(UTC)

    def add_lesson(self, title, video_url=None, duration_seconds=0):
        lesson = Lesson(
            title=title,
            video_url=video_url,
            duration_seconds=duration_seconds or 0,
            position=len(self.lessons),
        )
        self.add_lessons(lesson)
        self.updated_at = datetime.now(UTC)
        return lesson

    def remove_lesson(self, lesson_id):
        lesson = next((lesson for lesson in self.lessons if str(lesson.id) == str(lesson_id)), None)
        if lesson is None:
            raise ValidationError({"lesson_id": ["Lesson not found in course"]})

        self.remove_lessons(lesson)
        for position, remaining in enumerate(sorted(self.lessons, key=lambda lesson: lesson.position)):
            remaining.position = position
        self.updated_at = datetime.now(UTC)

    def record_rating(self, average_rating, review_count):
        self.average_rating = average_rating
        self.review_count = review_count
