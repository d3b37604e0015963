from app.schemas.base import CamelModel
from app.schemas.course import CourseIn


class GraphRequest(CamelModel):
    curriculum: list[CourseIn]
    completed_courses: list[str] = []
    remaining_only: bool = False


class UnknownReferenceOut(CamelModel):
    course: str
    relation: str
    code: str


class GraphResponse(CamelModel):
    prerequisites_of: dict[str, list[str]]
    dependents_of: dict[str, list[str]]
    groups: dict[str, list[str]]
    cycles: list[list[str]] = []
    cyclic_courses: list[str] = []
    unknown_references: list[UnknownReferenceOut] = []
