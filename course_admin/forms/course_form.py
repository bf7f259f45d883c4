from typing import Any, Dict

from course_admin.forms.base_form import EntityForm, changed_fields
from course_admin.schemas.course_schemas import (
    Course,
    CourseCreateRequest,
    CourseUpdateRequest,
)
from course_admin.schemas.form_schemas import CourseFormSchema

DEFAULT_CREDITS = 3
COURSE_FIELDS = ["title", "code", "credits", "instructor"]


class CourseForm(EntityForm[Course, CourseFormSchema]):
    entity_label = "Course"
    schema = CourseFormSchema

    def default_values(self) -> Dict[str, Any]:
        if self.record is None:
            return {"title": "", "code": "", "credits": DEFAULT_CREDITS, "instructor": ""}
        return {
            "title": self.record.title,
            "code": self.record.code,
            "credits": self.record.credits,
            "instructor": self.record.instructor,
        }

    def to_request(self, data: CourseFormSchema):
        if not self.is_edit:
            return CourseCreateRequest(**data.model_dump(include=set(COURSE_FIELDS)))
        # Partial update; an unchanged form re-sends everything
        updates = changed_fields(self.record, data, COURSE_FIELDS) or data.model_dump(
            include=set(COURSE_FIELDS)
        )
        return CourseUpdateRequest(**updates)
