from dataclasses import dataclass, field
from typing import Any


# Errors (plan invalid)
MISSING_PREREQUISITES = "MISSING_PREREQUISITES"
EXCESSIVE_CREDITS = "EXCESSIVE_CREDITS"
PREREQUISITE_CYCLE = "PREREQUISITE_CYCLE"
DUPLICATE_COURSE = "DUPLICATE_COURSE"

# Warnings
MISSING_COREQUISITES = "MISSING_COREQUISITES"
INSUFFICIENT_CREDITS = "INSUFFICIENT_CREDITS"
CREDIT_OVERLOAD = "CREDIT_OVERLOAD"
EXCESSIVE_SUMMER_CREDITS = "EXCESSIVE_SUMMER_CREDITS"
TOO_MANY_DIFFICULT_COURSES = "TOO_MANY_DIFFICULT_COURSES"
UNBALANCED_LOAD_DISTRIBUTION = "UNBALANCED_LOAD_DISTRIBUTION"
EXCESSIVE_ADVANCE_STUDY = "EXCESSIVE_ADVANCE_STUDY"
UNKNOWN_REFERENCE = "UNKNOWN_REFERENCE"
INCOMPLETE_PLAN = "INCOMPLETE_PLAN"
REDUNDANT_EQUIVALENT = "REDUNDANT_EQUIVALENT"


@dataclass(frozen=True)
class Issue:
    type: str
    message: str
    term: float | None = None
    term_type: str | None = None
    course: str | None = None
    details: dict[str, Any] = field(default_factory=dict)


@dataclass
class Statistics:
    total_semesters: int = 0
    regular_semesters: int = 0
    summer_semesters: int = 0
    total_credits: int = 0
    required_credits: int = 0
    elective_credits: int = 0
    average_credits_per_semester: float = 0.0
    average_credits_per_regular_semester: float = 0.0
    min_regular_credits: int = 0
    max_regular_credits: int = 0
    credit_standard_deviation: float = 0.0
    advanced_study_courses: int = 0
    completion_time_in_years: int = 0
    remaining_courses: int = 0
    remaining_course_codes: list[str] = field(default_factory=list)


@dataclass
class ValidationResult:
    errors: list[Issue] = field(default_factory=list)
    warnings: list[Issue] = field(default_factory=list)
    statistics: Statistics = field(default_factory=Statistics)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def issue_types(self) -> set[str]:
        return {i.type for i in self.errors} | {i.type for i in self.warnings}
