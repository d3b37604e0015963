from app.models.course import Course
from app.models.plan import PlanState, ReadyCourse


def is_ready(
    course: Course,
    state: PlanState,
    current_term: int,
    enable_advanced_study: bool,
    window: int,
) -> bool:
    if state.is_settled(course.code):
        return False
    if any(eq in state.taken for eq in course.equivalents):
        return False
    if not all(p in state.taken for p in course.prerequisites):
        return False
    if not enable_advanced_study:
        return course.expected_semester <= current_term
    return course.expected_semester <= current_term + window


def find_ready_courses(
    courses: list[Course],
    state: PlanState,
    current_term: int,
    enable_advanced_study: bool = True,
    window: int = 4,
) -> list[ReadyCourse]:
    """Courses that may legally be taken in ``current_term``.

    Curriculum order is preserved; ordering is the ranker's job.
    """
    return [
        ReadyCourse(course=course, is_advance_study=course.expected_semester > current_term)
        for course in courses
        if is_ready(course, state, current_term, enable_advanced_study, window)
    ]
