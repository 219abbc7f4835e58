"""AddLesson / RemoveLesson.

Changing the lesson list changes the denominator of every enrollment's
progress. Stored progress is not rewritten here; it is re-derived the next
time an enrollment's ledger changes.
"""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from academy.catalogue.course.course import Course
from academy.domain import academy


@academy.command(part_of="Course")
class AddLesson:
    course_id: Identifier(required=True)
    title: String(required=True, max_length=255)
    video_url: String(max_length=500)
    duration_seconds: Integer(min_value=0)


@academy.command(part_of="Course")
class RemoveLesson:
    course_id: Identifier(required=True)
    lesson_id: Identifier(required=True)


@academy.command_handler(part_of=Course)
class LessonHandler:
    @handle(AddLesson)
    def add_lesson(self, command):
        repo = current_domain.repository_for(Course)
        course = repo.get(command.course_id)
        lesson = course.add_lesson(
            title=command.title,
            video_url=command.video_url,
            duration_seconds=command.duration_seconds,
        )
        repo.add(course)
        return str(lesson.id)

    @handle(RemoveLesson)
    def remove_lesson(self, command):
        repo = current_domain.repository_for(Course)
        course = repo.get(command.course_id)
        course.remove_lesson(command.lesson_id)
        repo.add(course)
