from dataclasses import dataclass

from app.models.course import Course
from app.models.plan import CreditLimits, PlanState, ReadyCourse
from app.services.graph import CurriculumGraph
from app.services.readiness import find_ready_courses

# Courses flagged practical are only allowed in summer at or below this size
SUMMER_PRACTICAL_MAX_CREDITS = 2


@dataclass
class PackResult:
    courses: list[Course]
    credits: int


def _blocked(course: Course, state: PlanState) -> bool:
    return state.is_settled(course.code) or any(eq in state.taken for eq in course.equivalents)


def _equivalent(a: Course, b: Course) -> bool:
    return a.code in b.equivalents or b.code in a.equivalents


def corequisite_bundle(course: Course, graph: CurriculumGraph, state: PlanState) -> list[Course]:
    """The course plus every corequisite that still has to be taken.

    Corequisites already settled directly or through an equivalent are left
    out, and so is any corequisite equivalent to a course already in the bundle.
    """
    bundle = [course]
    for code in course.corequisites:
        coreq = graph.course(code)
        if coreq is None or coreq in bundle or _blocked(coreq, state):
            continue
        if any(_equivalent(coreq, member) for member in bundle):
            continue
        bundle.append(coreq)
    return bundle


def pack_term(
    ranked: list[ReadyCourse],
    graph: CurriculumGraph,
    state: PlanState,
    hard_cap: float,
) -> PackResult:
    """Greedy single pass over ``ranked``.

    A course is admitted together with its untaken corequisites, or not at
    all. Admitted codes go straight into ``state`` so later bundles see them.
    """
    selected: list[Course] = []
    credits = 0
    for item in ranked:
        course = item.course
        if _blocked(course, state):
            continue
        bundle = corequisite_bundle(course, graph, state)
        bundle_credits = sum(c.credits for c in bundle)
        if credits + bundle_credits > hard_cap:
            continue
        for member in bundle:
            selected.append(member)
            state.admit(member)
        credits += bundle_credits
    return PackResult(courses=selected, credits=credits)


def summer_sort_key(item: ReadyCourse, graph: CurriculumGraph, current_term: int):
    course = item.course
    dependents = graph.dependent_count(course.code)
    is_advance = course.expected_semester > current_term
    return (
        not (is_advance and dependents > 0),
        -dependents,
        not is_advance,
        course.credits,
        course.is_required,
        course.difficulty,
        course.code,
    )


def pack_summer_term(
    courses: list[Course],
    graph: CurriculumGraph,
    state: PlanState,
    current_term: int,
    limits: CreditLimits,
    enable_advanced_study: bool,
    lookahead: int = 2,
) -> PackResult:
    candidates = [
        item
        for item in find_ready_courses(
            courses,
            state,
            current_term + lookahead,
            enable_advanced_study,
            limits.advance_window,
        )
        if not item.course.is_practical or item.course.credits <= SUMMER_PRACTICAL_MAX_CREDITS
    ]
    for item in candidates:
        item.is_advance_study = item.course.expected_semester > current_term
    candidates.sort(key=lambda item: summer_sort_key(item, graph, current_term))

    selected: list[Course] = []
    credits = 0
    for item in candidates:
        if len(selected) >= limits.max_summer_courses:
            break
        course = item.course
        if _blocked(course, state):
            continue
        bundle = corequisite_bundle(course, graph, state)
        bundle_credits = sum(c.credits for c in bundle)
        if credits + bundle_credits > limits.max_summer_credits:
            continue
        if len(selected) + len(bundle) > limits.max_summer_courses:
            continue
        for member in bundle:
            selected.append(member)
            state.admit(member)
        credits += bundle_credits
    return PackResult(courses=selected, credits=credits)


def pack_fixed_first_term(courses: list[Course], state: PlanState, credit_cap: int) -> PackResult:
    """Place nominal first-term courses directly, bypassing the ranker."""
    available = [
        c
        for c in courses
        if c.expected_semester == 1
        and not _blocked(c, state)
        and all(p in state.taken for p in c.prerequisites)
    ]
    available.sort(key=lambda c: (not c.is_required, -c.credits, c.code))

    selected: list[Course] = []
    credits = 0
    for course in available:
        if _blocked(course, state):
            continue
        if credits + course.credits <= credit_cap:
            selected.append(course)
            credits += course.credits
            state.admit(course)
    return PackResult(courses=selected, credits=credits)
