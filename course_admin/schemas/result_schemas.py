from enum import Enum
from typing import Literal
from pydantic import Field

from .camel_base_model import CamelCaseBaseModel as BaseModel, CamelCaseRequestModel


class Grade(str, Enum):
    A_PLUS = "A+"
    A = "A"
    A_MINUS = "A-"
    B_PLUS = "B+"
    B = "B"
    B_MINUS = "B-"
    C_PLUS = "C+"
    C = "C"
    C_MINUS = "C-"
    D = "D"
    F = "F"

    @property
    def tone(self) -> str:
        """Display colour family used for grade badges and select options."""
        return GRADE_TONES[self.value[0]]


GRADE_TONES = {
    "A": "green",
    "B": "blue",
    "C": "yellow",
    "D": "orange",
    "F": "red",
}


class Result(BaseModel):
    """
    Result as returned by the backend.

    The read shape is denormalized (student number, course code and name) while
    writes use foreign keys, see ResultRequest.
    """

    kind: Literal["result"] = Field(default="result", exclude=True)
    id: int = Field(..., description="Result ID")
    student_number: str = Field(..., description="Student number")
    course_code: str = Field(..., description="Course code")
    course_name: str = Field(..., description="Course title")
    grade: Grade = Field(..., description="Letter grade")


class ResultRequest(CamelCaseRequestModel):
    student_id: int = Field(..., gt=0)
    course_id: int = Field(..., gt=0)
    grade: Grade
