from typing import Any, Dict, List, Tuple

from course_admin.forms.reference_data import StudentCourseSelectForm
from course_admin.schemas.form_schemas import ResultFormSchema
from course_admin.schemas.result_schemas import Grade, Result, ResultRequest
from course_admin.utils.errors import DataConsistencyError
from course_admin.utils.notifications import Notification


def grade_options() -> List[Tuple[str, str]]:
    """(grade, tone) pairs in display order."""
    return [(grade.value, grade.tone) for grade in Grade]


class ResultForm(StudentCourseSelectForm[Result, ResultFormSchema]):
    """
    Records or edits a result.

    A result is read with the student number and course code but written with
    numeric ids, so editing has to find the matching student and course in the
    freshly loaded lists. A code with no match is reported as a
    DataConsistencyError and blocks submission; the form never falls back to an
    empty selection.
    """

    entity_label = "Result"
    schema = ResultFormSchema
    created_verb = "recorded"
    create_verb = "record"

    @property
    def title(self) -> str:
        return "Edit Result" if self.is_edit else "Record Result"

    def default_values(self) -> Dict[str, Any]:
        return {
            "studentId": "",
            "courseId": "",
            "grade": self.record.grade.value if self.record else "",
        }

    def on_reference_data_loaded(self) -> None:
        if not self.is_edit:
            return

        problems = []
        student = next(
            (s for s in self.students if s.student_number == self.record.student_number),
            None,
        )
        if student is None:
            message = f"Cannot resolve student {self.record.student_number}"
            problems.append(message)
            self.field_errors["studentId"] = [message]
        else:
            self.values["studentId"] = str(student.id)

        course = next(
            (c for c in self.courses if c.code == self.record.course_code), None
        )
        if course is None:
            message = f"Cannot resolve course {self.record.course_code}"
            problems.append(message)
            self.field_errors["courseId"] = [message]
        else:
            self.values["courseId"] = str(course.id)

        if problems:
            self.load_error = DataConsistencyError("; ".join(problems))
            self.notifier.notify(Notification.error(self.load_error.message))

    def to_request(self, data: ResultFormSchema) -> ResultRequest:
        return ResultRequest(
            student_id=data.student_id, course_id=data.course_id, grade=data.grade
        )
