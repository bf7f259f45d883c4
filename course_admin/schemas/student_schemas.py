from typing import Literal, Optional
from pydantic import EmailStr, Field

from .camel_base_model import CamelCaseBaseModel as BaseModel, CamelCaseRequestModel


class Student(BaseModel):
    """Student record as returned by the backend."""

    kind: Literal["student"] = Field(default="student", exclude=True)
    id: int = Field(..., description="Student ID")
    student_number: Optional[str] = Field(default=None, description="Student number, e.g. S001")
    name: str = Field(..., description="Full name")
    email: str = Field(..., description="Email address")
    role: str = Field(default="student", description="Account role")
    password: Optional[str] = Field(default=None, exclude=True, repr=False)

    @property
    def display_number(self) -> str:
        return self.student_number or "N/A"


class StudentCreateRequest(CamelCaseRequestModel):
    student_number: str = Field(..., min_length=1)
    name: str = Field(..., min_length=2)
    email: EmailStr
    role: str = Field(..., min_length=1)


class StudentUpdateRequest(CamelCaseRequestModel):
    """Partial update; only the fields that were set are sent."""

    student_number: Optional[str] = Field(default=None, min_length=1)
    name: Optional[str] = Field(default=None, min_length=2)
    email: Optional[EmailStr] = None
