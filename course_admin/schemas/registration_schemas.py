from datetime import date
from typing import Literal, Optional
from pydantic import Field

from .camel_base_model import CamelCaseBaseModel as BaseModel, CamelCaseRequestModel
from .course_schemas import Course
from .student_schemas import Student
from course_admin.utils.datetime_utils import parse_iso_date


class Registration(BaseModel):
    """Registration with the student and course embedded."""

    kind: Literal["registration"] = Field(default="registration", exclude=True)
    id: int = Field(..., description="Registration ID")
    student: Student = Field(..., description="Registered student")
    course: Course = Field(..., description="Course registered for")
    registration_date: str = Field(..., description="ISO registration date")

    @property
    def registered_on(self) -> Optional[date]:
        return parse_iso_date(self.registration_date)


class RegistrationRequest(CamelCaseRequestModel):
    """Write shape: foreign keys instead of embedded records."""

    student_id: int = Field(..., gt=0)
    course_id: int = Field(..., gt=0)
    registration_date: str = Field(..., min_length=10)
