import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from app.models.course import Course

if TYPE_CHECKING:
    from app.models.recommendation import Recommendation
    from app.models.validation import Statistics, ValidationResult
    from app.services.graph import CurriculumGraph


REGULAR = "regular"
SUMMER = "summer"


@dataclass(frozen=True)
class TermLoad:
    total_credits: int
    required_count: int
    elective_count: int
    average_difficulty: float


def calculate_load(courses: tuple[Course, ...] | list[Course]) -> TermLoad:
    if not courses:
        return TermLoad(total_credits=0, required_count=0, elective_count=0, average_difficulty=0.0)
    required = sum(1 for c in courses if c.is_required)
    return TermLoad(
        total_credits=sum(c.credits for c in courses),
        required_count=required,
        elective_count=len(courses) - required,
        average_difficulty=sum(c.difficulty for c in courses) / len(courses),
    )


@dataclass(frozen=True)
class Term:
    index: float
    type: str
    courses: tuple[Course, ...]
    is_fixed: bool = False

    @property
    def year(self) -> int:
        return math.ceil(math.floor(self.index) / 2)

    @property
    def codes(self) -> list[str]:
        return [c.code for c in self.courses]

    @property
    def credit_total(self) -> int:
        return sum(c.credits for c in self.courses)

    @property
    def load(self) -> TermLoad:
        return calculate_load(self.courses)


@dataclass
class PlanState:
    """Mutable bookkeeping owned by one orchestrator run."""

    taken: set[str] = field(default_factory=set)
    discharged_equivalents: set[str] = field(default_factory=set)

    def is_settled(self, code: str) -> bool:
        return code in self.taken or code in self.discharged_equivalents

    def admit(self, course: Course) -> None:
        self.taken.add(course.code)
        self.discharged_equivalents.update(course.equivalents)


@dataclass(frozen=True)
class CreditLimits:
    max_credits: int
    min_credits: int
    hard_cap: float
    max_summer_credits: int
    max_summer_courses: int
    advance_window: int
    allow_overload: bool


@dataclass
class ReadyCourse:
    course: Course
    is_advance_study: bool
    priority: int = 0


@dataclass
class PlanResult:
    terms: list[Term]
    validation: "ValidationResult"
    graph: "CurriculumGraph"
    limits: CreditLimits
    ready_courses: list[ReadyCourse]
    recommendations: list["Recommendation"]

    @property
    def statistics(self) -> "Statistics":
        return self.validation.statistics
