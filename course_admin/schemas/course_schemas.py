from typing import Literal, Optional
from pydantic import Field

from .camel_base_model import CamelCaseBaseModel as BaseModel, CamelCaseRequestModel

COURSE_CODE_PATTERN = r"^[A-Z]+[0-9]+$"
MIN_CREDITS = 1
MAX_CREDITS = 6


class Course(BaseModel):
    """Course record as returned by the backend."""

    kind: Literal["course"] = Field(default="course", exclude=True)
    id: int = Field(..., description="Course ID")
    title: str = Field(..., description="Course title")
    code: str = Field(..., description="Course code, e.g. CS101")
    credits: int = Field(..., description="Credit points")
    instructor: str = Field(..., description="Instructor name")


class CourseCreateRequest(CamelCaseRequestModel):
    title: str = Field(..., min_length=3)
    code: str = Field(..., min_length=3, pattern=COURSE_CODE_PATTERN)
    credits: int = Field(..., ge=MIN_CREDITS, le=MAX_CREDITS)
    instructor: str = Field(..., min_length=2)


class CourseUpdateRequest(CamelCaseRequestModel):
    """Partial update; only the fields that were set are sent."""

    title: Optional[str] = Field(default=None, min_length=3)
    code: Optional[str] = Field(default=None, min_length=3, pattern=COURSE_CODE_PATTERN)
    credits: Optional[int] = Field(default=None, ge=MIN_CREDITS, le=MAX_CREDITS)
    instructor: Optional[str] = Field(default=None, min_length=2)
