import asyncio
from typing import Dict, List, Optional, Tuple

from course_admin.forms.base_form import EntityForm, RecordT, SchemaT, SubmitCallback
from course_admin.schemas.course_schemas import Course
from course_admin.schemas.response_schemas import OperationResult
from course_admin.schemas.student_schemas import Student
from course_admin.utils.logging import get_logger
from course_admin.utils.notifications import Notification, Notifier

logger = get_logger()


async def load_students_and_courses(
    api,
) -> OperationResult[Tuple[List[Student], List[Course]]]:
    """
    Fetch both option lists concurrently.

    All or nothing: if either call fails the join fails with that call's error.
    """
    students_result, courses_result = await asyncio.gather(
        api.list_students(), api.list_courses()
    )
    for result in (students_result, courses_result):
        if not result.success:
            return OperationResult.fail(result.error)
    return OperationResult.ok((students_result.data, courses_result.data))


def student_option_label(student: Student) -> str:
    return f"{student.name} ({student.display_number})"


def course_option_label(course: Course) -> str:
    return f"{course.code} - {course.title}"


class StudentCourseSelectForm(EntityForm[RecordT, SchemaT]):
    """Form whose student and course select boxes are filled from the backend."""

    def __init__(
        self,
        api,
        on_submit: SubmitCallback,
        notifier: Optional[Notifier] = None,
        record: Optional[RecordT] = None,
    ):
        self.api = api
        self.students: List[Student] = []
        self.courses: List[Course] = []
        super().__init__(on_submit, notifier, record)

    @property
    def student_options(self) -> List[Tuple[str, str]]:
        return [(str(s.id), student_option_label(s)) for s in self.students]

    @property
    def course_options(self) -> List[Tuple[str, str]]:
        return [(str(c.id), course_option_label(c)) for c in self.courses]

    async def load_reference_data(self, session: int) -> None:
        self.is_loading_data = True
        try:
            result = await load_students_and_courses(self.api)
        finally:
            if self.is_current(session):
                self.is_loading_data = False

        if not self.is_current(session):
            logger.debug(f"Dropping option lists for a closed {self.entity_label} form")
            return

        if not result.success:
            self.load_error = result.error
            self.notifier.notify(
                Notification.error("Failed to load students and courses data")
            )
            return

        self.students, self.courses = result.data
        self.on_reference_data_loaded()

    def on_reference_data_loaded(self) -> None:
        return None

    def extra_validation(self, data) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}
        if not any(s.id == data.student_id for s in self.students):
            errors["studentId"] = ["Please select a student"]
        if not any(c.id == data.course_id for c in self.courses):
            errors["courseId"] = ["Please select a course"]
        return errors
