from typing import Literal

from app.schemas.base import CamelModel
from app.schemas.course import CourseIn
from app.schemas.plan import PlannerOptions
from app.schemas.validation import StatisticsOut


class PlanCompareRequest(CamelModel):
    curriculum: list[CourseIn]
    completed_courses: list[str] = []
    options: PlannerOptions = PlannerOptions()
    # "presets" compares advance-study/summer configurations, "strategies" the rankers
    mode: Literal["presets", "strategies"] = "presets"


class PlanDiffOut(CamelModel):
    term_count_diff: int
    added_courses: list[str] = []
    removed_courses: list[str] = []
    moved_courses: list[str] = []


class StrategyComparisonOut(CamelModel):
    name: str
    options: PlannerOptions
    is_valid: bool
    statistics: StatisticsOut
    # Relative to the first comparison; None for the first one
    diff: PlanDiffOut | None = None


class PlanCompareResponse(CamelModel):
    comparisons: list[StrategyComparisonOut]
