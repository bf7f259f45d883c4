from typing import Annotated, Union
from pydantic import Field

from .course_schemas import Course
from .registration_schemas import Registration
from .result_schemas import Result
from .student_schemas import Student

Entity = Annotated[
    Union[Student, Course, Registration, Result], Field(discriminator="kind")
]

ENTITY_LABELS = {
    "student": "Student",
    "course": "Course",
    "registration": "Registration",
    "result": "Result",
}
