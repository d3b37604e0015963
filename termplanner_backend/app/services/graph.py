import logging
from collections import defaultdict
from dataclasses import dataclass, field

from app.models.course import Course

logger = logging.getLogger(__name__)

_WHITE, _GREY, _BLACK = 0, 1, 2


@dataclass
class CurriculumGraph:
    prerequisites_of: dict[str, list[str]]  # course -> prereqs
    dependents_of: dict[str, list[str]]  # prereq -> dependents
    course_by_code: dict[str, Course]
    groups: dict[str, list[str]] = field(default_factory=dict)
    unknown_references: list[tuple[str, str, str]] = field(default_factory=list)  # (course, relation, code)
    cycles: list[list[str]] = field(default_factory=list)

    def dependent_count(self, code: str) -> int:
        return len(self.dependents_of.get(code, ()))

    def course(self, code: str) -> Course | None:
        return self.course_by_code.get(code)


def build_graph(courses: list[Course]) -> CurriculumGraph:
    course_by_code: dict[str, Course] = {}
    prerequisites_of: dict[str, list[str]] = {}
    dependents_of: dict[str, list[str]] = {}
    groups: dict[str, list[str]] = defaultdict(list)

    for course in courses:
        if course.code in course_by_code:
            raise ValueError(f"Duplicate course code in curriculum: {course.code}")
        course_by_code[course.code] = course
        prerequisites_of[course.code] = list(course.prerequisites)
        dependents_of[course.code] = []
        groups[course.group].append(course.code)

    unknown: list[tuple[str, str, str]] = []
    for course in courses:
        for prereq in course.prerequisites:
            if prereq in dependents_of:
                dependents_of[prereq].append(course.code)
            else:
                unknown.append((course.code, "prerequisite", prereq))
        for relation, codes in (("corequisite", course.corequisites), ("equivalent", course.equivalents)):
            for code in codes:
                if code not in course_by_code:
                    unknown.append((course.code, relation, code))

    graph = CurriculumGraph(
        prerequisites_of=prerequisites_of,
        dependents_of=dependents_of,
        course_by_code=course_by_code,
        groups=dict(groups),
        unknown_references=unknown,
    )
    graph.cycles = find_cycles(graph)

    for course_code, relation, code in unknown:
        logger.warning("Course %s references unknown %s %s", course_code, relation, code)
    for cycle in graph.cycles:
        logger.warning("Prerequisite cycle detected: %s", " -> ".join(cycle + cycle[:1]))
    logger.debug(
        "Built curriculum graph with %d nodes and %d edges",
        len(course_by_code),
        sum(len(v) for v in dependents_of.values()),
    )
    return graph


def build_remaining_graph(courses: list[Course], completed: set[str]) -> CurriculumGraph:
    """Graph scoped to remaining work.

    Completed courses, and courses with a completed equivalent, are dropped
    from both edge maps. The course lookup still covers the full curriculum.
    """
    graph = build_graph(courses)
    for course in courses:
        if course.code in completed or any(eq in completed for eq in course.equivalents):
            graph.prerequisites_of.pop(course.code, None)
            graph.dependents_of.pop(course.code, None)
    return graph


def find_cycles(graph: CurriculumGraph) -> list[list[str]]:
    color = {code: _WHITE for code in graph.prerequisites_of}
    stack: list[str] = []
    cycles: list[list[str]] = []

    def visit(node: str) -> None:
        color[node] = _GREY
        stack.append(node)
        for prereq in graph.prerequisites_of.get(node, ()):
            state = color.get(prereq)
            if state is None:
                continue
            if state == _GREY:
                cycles.append(stack[stack.index(prereq):])
            elif state == _WHITE:
                visit(prereq)
        stack.pop()
        color[node] = _BLACK

    for code in graph.prerequisites_of:
        if color[code] == _WHITE:
            visit(code)
    return cycles


def courses_in_cycles(graph: CurriculumGraph) -> set[str]:
    return {code for cycle in graph.cycles for code in cycle}
