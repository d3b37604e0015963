from typing import Any

from app.schemas.base import CamelModel


class IssueOut(CamelModel):
    type: str
    message: str
    term: float | None = None
    term_type: str | None = None
    course: str | None = None
    details: dict[str, Any] = {}


class StatisticsOut(CamelModel):
    total_semesters: int
    regular_semesters: int
    summer_semesters: int
    total_credits: int
    required_credits: int
    elective_credits: int
    average_credits_per_semester: float
    average_credits_per_regular_semester: float
    min_regular_credits: int
    max_regular_credits: int
    credit_standard_deviation: float
    advanced_study_courses: int
    completion_time_in_years: int
    remaining_courses: int
    remaining_course_codes: list[str] = []


class ValidationOut(CamelModel):
    is_valid: bool
    errors: list[IssueOut] = []
    warnings: list[IssueOut] = []
    statistics: StatisticsOut
