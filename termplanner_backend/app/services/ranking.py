from app.models.course import Course
from app.models.plan import ReadyCourse
from app.services.graph import CurriculumGraph

BALANCED = "balanced"
FAST = "fast"
LOAD_BALANCED = "load-balanced"
STRATEGIES = (BALANCED, FAST, LOAD_BALANCED)

# Priority weights
NOMINAL_TERM_BONUS = 2000
REQUIRED_BONUS = 1000
DEPENDENT_WEIGHT = 100
PREREQUISITE_WEIGHT = 50
EARLY_TERM_WEIGHT = 10
LOOKAHEAD_PENALTY = 20
DIFFICULTY_WEIGHT = 10


def calculate_priority(course: Course, graph: CurriculumGraph, current_term: int) -> int:
    priority = 0
    if course.expected_semester == current_term:
        priority += NOMINAL_TERM_BONUS
    if course.is_required:
        priority += REQUIRED_BONUS
    priority += graph.dependent_count(course.code) * DEPENDENT_WEIGHT
    priority += len(course.prerequisites) * PREREQUISITE_WEIGHT
    priority += (10 - course.expected_semester) * EARLY_TERM_WEIGHT
    priority -= max(0, course.expected_semester - current_term) * LOOKAHEAD_PENALTY
    return priority


def rank_courses(
    ready: list[ReadyCourse],
    graph: CurriculumGraph,
    current_term: int,
    strategy: str = BALANCED,
) -> list[ReadyCourse]:
    """Return ``ready`` ordered for packing; ties fall back to course code."""
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy '{strategy}'. Must be one of: {list(STRATEGIES)}")

    for item in ready:
        item.priority = calculate_priority(item.course, graph, current_term)

    if strategy == FAST:
        key = lambda r: (
            r.course.expected_semester != current_term,
            -graph.dependent_count(r.course.code),
            not r.course.is_required,
            r.course.expected_semester,
            r.course.code,
        )
    elif strategy == LOAD_BALANCED:
        key = lambda r: (-(r.priority - r.course.difficulty * DIFFICULTY_WEIGHT), r.course.code)
    else:
        key = lambda r: (-r.priority, r.course.code)
    return sorted(ready, key=key)
