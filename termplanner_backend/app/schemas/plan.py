from typing import Literal

from pydantic import Field

from app.schemas.base import CamelModel
from app.schemas.course import CourseIn, CourseOut, ReadyCourseOut
from app.schemas.recommendation import RecommendationOut
from app.schemas.validation import StatisticsOut, ValidationOut


class PlannerOptions(CamelModel):
    strategy: Literal["balanced", "fast", "load-balanced"] = "balanced"
    # Overrides the ceiling derived from the curriculum average
    max_credits_per_semester: int | None = Field(None, ge=1, le=60)
    current_semester: int = Field(1, ge=1)
    enable_advanced_study: bool = True
    include_summer_semesters: bool = True
    allow_overload: bool = False
    fixed_first_semester: bool = False
    max_summer_credits: int | None = Field(None, ge=1, le=30)

    model_config = {"frozen": True}


class PlanGenerateRequest(CamelModel):
    curriculum: list[CourseIn]
    completed_courses: list[str] = []
    options: PlannerOptions = PlannerOptions()


class LoadOut(CamelModel):
    total_credits: int
    required_count: int
    elective_count: int
    average_difficulty: float


class TermOut(CamelModel):
    index: float
    type: str
    year: int
    credit_total: int
    is_fixed: bool = False
    load: LoadOut
    courses: list[CourseOut]


class CreditLimitsOut(CamelModel):
    max_credits: int
    min_credits: int
    hard_cap: float
    max_summer_credits: int
    max_summer_courses: int
    advance_window: int
    allow_overload: bool


class PlanGenerateResponse(CamelModel):
    status: str
    message: str
    terms: list[TermOut] = []
    limits: CreditLimitsOut
    validation: ValidationOut
    statistics: StatisticsOut
    recommendations: list[RecommendationOut] = []
    ready_courses: list[ReadyCourseOut] = []


class TermIn(CamelModel):
    index: float
    type: Literal["regular", "summer"] = "regular"
    courses: list[str]


class PlanValidateRequest(CamelModel):
    curriculum: list[CourseIn]
    completed_courses: list[str] = []
    options: PlannerOptions = PlannerOptions()
    terms: list[TermIn]
