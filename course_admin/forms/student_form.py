from typing import Any, Dict

from course_admin.config.settings import settings
from course_admin.forms.base_form import EntityForm, changed_fields
from course_admin.schemas.form_schemas import StudentFormSchema
from course_admin.schemas.student_schemas import (
    Student,
    StudentCreateRequest,
    StudentUpdateRequest,
)
from course_admin.utils.string_utils import generate_student_number


class StudentForm(EntityForm[Student, StudentFormSchema]):
    entity_label = "Student"
    schema = StudentFormSchema

    @property
    def title(self) -> str:
        return "Edit Student" if self.is_edit else "Add New Student"

    def default_values(self) -> Dict[str, Any]:
        return {
            "name": self.record.name if self.record else "",
            "email": self.record.email if self.record else "",
        }

    def to_request(self, data: StudentFormSchema):
        if not self.is_edit:
            return StudentCreateRequest(
                student_number=generate_student_number(),
                name=data.name,
                email=data.email,
                role=settings.DEFAULT_STUDENT_ROLE,
            )

        updates = changed_fields(self.record, data, ["name", "email"]) or {
            "name": data.name,
            "email": data.email,
        }
        if not self.record.student_number:
            updates["student_number"] = generate_student_number()
        return StudentUpdateRequest(**updates)
