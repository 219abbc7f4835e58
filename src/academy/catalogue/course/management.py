"""Course management: commands and handlers."""

import structlog
from protean import handle
from protean.fields import Boolean, Float, Identifier, String, Text
from protean.utils.globals import current_domain

from academy.cascade import cascade_item_deletion
from academy.catalogue.course.course import Course, DifficultyLevel
from academy.domain import academy
from academy.shared.reviewable import ReviewableKind, ReviewableRef

logger = structlog.get_logger(__name__)

_DETAIL_FIELDS = (
    "title",
    "description",
    "instructor",
    "price",
    "sale_enabled",
    "sale_price",
    "image_url",
    "difficulty_level",
    "language",
    "category",
    "is_featured",
)


@academy.command(part_of="Course")
class CreateCourse:
    title: String(required=True, max_length=255)
    description: Text(required=True)
    instructor: String(required=True, max_length=255)
    price: Float(required=True, min_value=0.0)
    sale_enabled: Boolean(default=False)
    sale_price: Float(min_value=0.0)
    image_url: String(max_length=500)
    difficulty_level: String(choices=DifficultyLevel)
    language: String(max_length=50)
    category: String(max_length=100)
    is_featured: Boolean(default=False)


@academy.command(part_of="Course")
class UpdateCourseDetails:
    course_id: Identifier(required=True)
    title: String(max_length=255)
    description: Text()
    instructor: String(max_length=255)
    price: Float(min_value=0.0)
    sale_enabled: Boolean()
    sale_price: Float(min_value=0.0)
    image_url: String(max_length=500)
    difficulty_level: String(choices=DifficultyLevel)
    language: String(max_length=50)
    category: String(max_length=100)
    is_featured: Boolean()


@academy.command(part_of="Course")
class DeleteCourse:
    course_id: Identifier(required=True)


@academy.command_handler(part_of=Course)
class ManageCourseHandler:
    @handle(CreateCourse)
    def create_course(self, command):
        course = Course.create(
            title=command.title,
            description=command.description,
            instructor=command.instructor,
            price=command.price,
            sale_enabled=bool(command.sale_enabled),
            sale_price=command.sale_price,
            image_url=command.image_url,
            difficulty_level=command.difficulty_level,
            language=command.language,
            category=command.category,
            is_featured=bool(command.is_featured),
        )
        current_domain.repository_for(Course).add(course)
        return str(course.id)

    @handle(UpdateCourseDetails)
    def update_course_details(self, command):
        repo = current_domain.repository_for(Course)
        course = repo.get(command.course_id)

        changes = {name: getattr(command, name) for name in _DETAIL_FIELDS if getattr(command, name) is not None}
        course.update_details(**changes)
        repo.add(course)
        return str(course.id)

    @handle(DeleteCourse)
    def delete_course(self, command):
        repo = current_domain.repository_for(Course)
        course = repo.get(command.course_id)

        cascade_item_deletion(ReviewableRef(ReviewableKind.COURSE, str(course.id)))
        repo._dao.delete(course)
        logger.info("Course deleted", course_id=str(course.id))
