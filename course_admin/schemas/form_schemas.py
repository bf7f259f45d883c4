import re
from datetime import date, datetime
from typing import Any

from pydantic import field_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from .camel_base_model import CamelCaseBaseModel as BaseModel
from .course_schemas import COURSE_CODE_PATTERN, MAX_CREDITS, MIN_CREDITS
from .result_schemas import Grade
from course_admin.utils.datetime_utils import parse_iso_date


def _required_text(value: Any, message: str) -> str:
    text = "" if value is None else str(value).strip()
    if not text:
        raise PydanticCustomError("required", message)
    return text


def _min_length(value: str, length: int, message: str) -> str:
    if len(value) < length:
        raise PydanticCustomError("too_short", message)
    return value


def _select_id(value: Any, message: str) -> int:
    """Select boxes hand back the option value as a string."""
    if isinstance(value, int) and not isinstance(value, bool):
        selected = value
    else:
        text = "" if value is None else str(value).strip()
        if not text:
            raise PydanticCustomError("required", message)
        try:
            selected = int(text)
        except ValueError as e:
            raise PydanticCustomError("invalid_selection", message) from e
    if selected <= 0:
        raise PydanticCustomError("invalid_selection", message)
    return selected


class StudentFormSchema(BaseModel):
    name: str
    email: str

    @field_validator("name", mode="before")
    @classmethod
    def check_name(cls, value: Any) -> str:
        name = _required_text(value, "Name is required")
        return _min_length(name, 2, "Name must be at least 2 characters")

    @field_validator("email", mode="before")
    @classmethod
    def check_email(cls, value: Any) -> str:
        email = _required_text(value, "Email is required")
        # Bare addresses only, no "Name <addr>" form
        if "<" in email or ">" in email:
            raise PydanticCustomError("email", "Invalid email address")
        try:
            _, normalized = validate_email(email)
        except ValueError as e:
            raise PydanticCustomError("email", "Invalid email address") from e
        return normalized


class CourseFormSchema(BaseModel):
    title: str
    code: str
    credits: int
    instructor: str

    @field_validator("title", mode="before")
    @classmethod
    def check_title(cls, value: Any) -> str:
        title = _required_text(value, "Title must be at least 3 characters")
        return _min_length(title, 3, "Title must be at least 3 characters")

    @field_validator("code", mode="before")
    @classmethod
    def check_code(cls, value: Any) -> str:
        code = _required_text(value, "Course code must be at least 3 characters")
        _min_length(code, 3, "Course code must be at least 3 characters")
        if not re.match(COURSE_CODE_PATTERN, code):
            raise PydanticCustomError(
                "course_code",
                "Course code must be letters followed by numbers (e.g., CS101)",
            )
        return code

    @field_validator("credits", mode="before")
    @classmethod
    def check_credits(cls, value: Any) -> int:
        if isinstance(value, bool):
            raise PydanticCustomError("int_parsing", "Credits must be a whole number")
        try:
            credits = int(str(value).strip()) if not isinstance(value, int) else value
        except ValueError as e:
            raise PydanticCustomError("int_parsing", "Credits must be a whole number") from e
        if credits < MIN_CREDITS:
            raise PydanticCustomError(
                "too_small", f"Credits must be at least {MIN_CREDITS}"
            )
        if credits > MAX_CREDITS:
            raise PydanticCustomError("too_big", f"Credits cannot exceed {MAX_CREDITS}")
        return credits

    @field_validator("instructor", mode="before")
    @classmethod
    def check_instructor(cls, value: Any) -> str:
        instructor = _required_text(
            value, "Instructor name must be at least 2 characters"
        )
        return _min_length(
            instructor, 2, "Instructor name must be at least 2 characters"
        )


class RegistrationFormSchema(BaseModel):
    student_id: int
    course_id: int
    registration_date: date

    @field_validator("student_id", mode="before")
    @classmethod
    def check_student(cls, value: Any) -> int:
        return _select_id(value, "Please select a student")

    @field_validator("course_id", mode="before")
    @classmethod
    def check_course(cls, value: Any) -> int:
        return _select_id(value, "Please select a course")

    @field_validator("registration_date", mode="before")
    @classmethod
    def check_date(cls, value: Any) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        parsed = parse_iso_date(value) if isinstance(value, str) else None
        if parsed is None:
            raise PydanticCustomError("required", "Registration date is required")
        return parsed


class ResultFormSchema(BaseModel):
    student_id: int
    course_id: int
    grade: Grade

    @field_validator("student_id", mode="before")
    @classmethod
    def check_student(cls, value: Any) -> int:
        return _select_id(value, "Please select a student")

    @field_validator("course_id", mode="before")
    @classmethod
    def check_course(cls, value: Any) -> int:
        return _select_id(value, "Please select a course")

    @field_validator("grade", mode="before")
    @classmethod
    def check_grade(cls, value: Any) -> Grade:
        if isinstance(value, Grade):
            return value
        grade = _required_text(value, "Please select a grade")
        try:
            return Grade(grade)
        except ValueError as e:
            raise PydanticCustomError("grade", "Please select a valid grade") from e
