from pydantic import Field

from app.models.course import Course
from app.schemas.base import CamelModel


class CourseIn(CamelModel):
    code: str = Field(min_length=1)
    name: str = ""
    group: str = ""
    credits: int = Field(gt=0)
    is_required: bool = True
    expected_semester: int = Field(1, ge=1)
    difficulty: int = Field(1, ge=1, le=5)
    is_practical: bool = False
    prerequisites: list[str] = []
    corequisites: list[str] = []
    equivalents: list[str] = []

    def to_course(self) -> Course:
        return Course(
            code=self.code.strip(),
            name=self.name,
            group=self.group,
            credits=self.credits,
            is_required=self.is_required,
            expected_semester=self.expected_semester,
            difficulty=self.difficulty,
            is_practical=self.is_practical,
            prerequisites=tuple(self.prerequisites),
            corequisites=tuple(self.corequisites),
            equivalents=tuple(self.equivalents),
        )


class CourseOut(CamelModel):
    code: str
    name: str
    group: str
    credits: int
    is_required: bool
    expected_semester: int
    difficulty: int
    prerequisites: list[str] = []
    corequisites: list[str] = []
    equivalents: list[str] = []


class ReadyCourseOut(CamelModel):
    course: CourseOut
    is_advance_study: bool
    priority: int
