from typing import List, Literal
from pydantic import Field

from .camel_base_model import CamelCaseBaseModel as BaseModel
from .registration_schemas import Registration


class DashboardStats(BaseModel):
    """Aggregate counters shown on the dashboard."""

    total_students: int = Field(..., ge=0, description="Number of students")
    total_courses: int = Field(..., ge=0, description="Number of courses")
    total_registrations: int = Field(..., ge=0, description="Number of registrations")
    total_results: int = Field(..., ge=0, description="Number of recorded results")


class DashboardSummary(BaseModel):
    stats: DashboardStats
    recent_registrations: List[Registration] = Field(default_factory=list)
    source: Literal["endpoint", "derived"] = Field(
        ..., description="Whether counters came from an aggregate endpoint or the collections"
    )
