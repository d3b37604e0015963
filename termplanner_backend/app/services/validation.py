import logging
import math
from collections import defaultdict

from app.models.course import Course
from app.models.plan import REGULAR, SUMMER, CreditLimits, Term
from app.models.validation import (
    CREDIT_OVERLOAD,
    DUPLICATE_COURSE,
    EXCESSIVE_ADVANCE_STUDY,
    EXCESSIVE_CREDITS,
    EXCESSIVE_SUMMER_CREDITS,
    INCOMPLETE_PLAN,
    INSUFFICIENT_CREDITS,
    MISSING_COREQUISITES,
    MISSING_PREREQUISITES,
    PREREQUISITE_CYCLE,
    REDUNDANT_EQUIVALENT,
    TOO_MANY_DIFFICULT_COURSES,
    UNBALANCED_LOAD_DISTRIBUTION,
    UNKNOWN_REFERENCE,
    Issue,
    Statistics,
    ValidationResult,
)
from app.services.graph import CurriculumGraph, build_graph

logger = logging.getLogger(__name__)

DIFFICULT_THRESHOLD = 4
MAX_DIFFICULT_PER_TERM = 2
MAX_CREDIT_SPREAD = 8


def validate_plan(
    terms: list[Term],
    courses: list[Course],
    limits: CreditLimits,
    completed: list[str] | set[str] | None = None,
    graph: CurriculumGraph | None = None,
) -> ValidationResult:
    """Re-check a finished plan from scratch.

    Works on any list of terms, including ones edited outside the planner.
    The plan itself is never modified.
    """
    graph = graph or build_graph(courses)
    completed = set(completed or ())
    ordered = sorted(terms, key=lambda t: t.index)

    result = ValidationResult()
    _check_structure(graph, result)
    _check_requisites(ordered, completed, limits, equivalence_map(courses), result)
    _check_credits(ordered, limits, result)
    _check_load_balance(ordered, result)
    result.statistics = calculate_statistics(ordered, courses, completed)

    if result.statistics.remaining_courses:
        result.warnings.append(
            Issue(
                type=INCOMPLETE_PLAN,
                message=f"{result.statistics.remaining_courses} course(s) were not scheduled",
                details={"remaining": result.statistics.remaining_course_codes},
            )
        )

    logger.info(
        "Validation %s: %d error(s), %d warning(s)",
        "passed" if result.is_valid else "failed",
        len(result.errors),
        len(result.warnings),
    )
    return result


def _check_structure(graph: CurriculumGraph, result: ValidationResult) -> None:
    for course_code, relation, code in graph.unknown_references:
        result.warnings.append(
            Issue(
                type=UNKNOWN_REFERENCE,
                message=f"{course_code} lists unknown {relation} {code}",
                course=course_code,
                details={"relation": relation, "code": code},
            )
        )
    for cycle in graph.cycles:
        result.errors.append(
            Issue(
                type=PREREQUISITE_CYCLE,
                message="Prerequisite cycle: " + " -> ".join(cycle + cycle[:1]),
                details={"cycle": cycle},
            )
        )


def equivalence_map(courses: list[Course]) -> dict[str, set[str]]:
    """Equivalents of every code, declared from either side."""
    mapping: dict[str, set[str]] = defaultdict(set)
    for course in courses:
        for code in course.equivalents:
            mapping[course.code].add(code)
            mapping[code].add(course.code)
    return dict(mapping)


def _check_requisites(
    ordered: list[Term],
    completed: set[str],
    limits: CreditLimits,
    equivalents: dict[str, set[str]],
    result: ValidationResult,
) -> None:
    previous = set(completed)
    for term in ordered:
        current = set(term.codes)
        placed: set[str] = set()
        for course in term.courses:
            if course.code in previous or course.code in placed:
                result.errors.append(
                    Issue(
                        type=DUPLICATE_COURSE,
                        message=f"{course.code} is already completed or scheduled",
                        term=term.index,
                        term_type=term.type,
                        course=course.code,
                    )
                )
            else:
                covered_by = sorted(equivalents.get(course.code, set()) & (previous | placed))
                if covered_by:
                    result.warnings.append(
                        Issue(
                            type=REDUNDANT_EQUIVALENT,
                            message=f"{course.code} is already covered by {', '.join(covered_by)}",
                            term=term.index,
                            term_type=term.type,
                            course=course.code,
                            details={"equivalents": covered_by},
                        )
                    )
            placed.add(course.code)

            missing = [p for p in course.prerequisites if p not in previous]
            if missing:
                result.errors.append(
                    Issue(
                        type=MISSING_PREREQUISITES,
                        message=f"{course.code} is missing prerequisites {', '.join(missing)}",
                        term=term.index,
                        term_type=term.type,
                        course=course.code,
                        details={"missing": missing},
                    )
                )

            met = current | previous
            missing_coreqs = [
                c for c in course.corequisites if c not in met and not equivalents.get(c, set()) & met
            ]
            if missing_coreqs:
                result.warnings.append(
                    Issue(
                        type=MISSING_COREQUISITES,
                        message=f"{course.code} is missing corequisites {', '.join(missing_coreqs)}",
                        term=term.index,
                        term_type=term.type,
                        course=course.code,
                        details={"missing": missing_coreqs},
                    )
                )

            actual = math.floor(term.index)
            if course.expected_semester > actual + limits.advance_window:
                result.warnings.append(
                    Issue(
                        type=EXCESSIVE_ADVANCE_STUDY,
                        message=f"{course.code} is scheduled {course.expected_semester - actual} terms early",
                        term=term.index,
                        term_type=term.type,
                        course=course.code,
                        details={"expected_semester": course.expected_semester, "actual_semester": actual},
                    )
                )
        previous |= current


def _check_credits(ordered: list[Term], limits: CreditLimits, result: ValidationResult) -> None:
    for term in ordered:
        credits = term.credit_total
        if term.type == SUMMER:
            if credits > limits.max_summer_credits:
                result.warnings.append(
                    Issue(
                        type=EXCESSIVE_SUMMER_CREDITS,
                        message=f"Summer term {term.index} has {credits} credits (max {limits.max_summer_credits})",
                        term=term.index,
                        term_type=term.type,
                        details={"credits": credits, "maximum": limits.max_summer_credits},
                    )
                )
            continue

        if credits < limits.min_credits:
            result.warnings.append(
                Issue(
                    type=INSUFFICIENT_CREDITS,
                    message=f"Term {term.index} has {credits} credits (min {limits.min_credits})",
                    term=term.index,
                    term_type=term.type,
                    details={"credits": credits, "minimum": limits.min_credits},
                )
            )
        if credits > limits.max_credits:
            issue = Issue(
                type=CREDIT_OVERLOAD if limits.allow_overload else EXCESSIVE_CREDITS,
                message=f"Term {term.index} has {credits} credits (max {limits.max_credits})",
                term=term.index,
                term_type=term.type,
                details={"credits": credits, "maximum": limits.max_credits},
            )
            if limits.allow_overload:
                result.warnings.append(issue)
            else:
                result.errors.append(issue)


def _check_load_balance(ordered: list[Term], result: ValidationResult) -> None:
    regular = [t for t in ordered if t.type == REGULAR]
    for term in regular:
        difficult = [c.code for c in term.courses if c.difficulty >= DIFFICULT_THRESHOLD]
        if len(difficult) > MAX_DIFFICULT_PER_TERM:
            result.warnings.append(
                Issue(
                    type=TOO_MANY_DIFFICULT_COURSES,
                    message=f"Term {term.index} has {len(difficult)} difficult courses",
                    term=term.index,
                    term_type=term.type,
                    details={"difficult_courses": difficult},
                )
            )

    if len(regular) > 1:
        loads = [t.credit_total for t in regular]
        spread = max(loads) - min(loads)
        if spread > MAX_CREDIT_SPREAD:
            result.warnings.append(
                Issue(
                    type=UNBALANCED_LOAD_DISTRIBUTION,
                    message=f"Regular terms range from {min(loads)} to {max(loads)} credits",
                    details={"max_credits": max(loads), "min_credits": min(loads), "difference": spread},
                )
            )


def calculate_statistics(
    terms: list[Term],
    courses: list[Course],
    completed: set[str] | None = None,
) -> Statistics:
    completed = set(completed or ())
    stats = Statistics()
    regular_credits: list[int] = []
    scheduled: set[str] = set()

    stats.total_semesters = len(terms)
    for term in terms:
        credits = term.credit_total
        stats.total_credits += credits
        if term.type == REGULAR:
            stats.regular_semesters += 1
            regular_credits.append(credits)
        else:
            stats.summer_semesters += 1
        for course in term.courses:
            scheduled.add(course.code)
            if course.is_required:
                stats.required_credits += course.credits
            else:
                stats.elective_credits += course.credits
            if course.expected_semester > math.floor(term.index):
                stats.advanced_study_courses += 1

    if terms:
        stats.average_credits_per_semester = stats.total_credits / len(terms)
    if regular_credits:
        mean = sum(regular_credits) / len(regular_credits)
        stats.average_credits_per_regular_semester = mean
        stats.min_regular_credits = min(regular_credits)
        stats.max_regular_credits = max(regular_credits)
        if len(regular_credits) > 1:
            variance = sum((c - mean) ** 2 for c in regular_credits) / len(regular_credits)
            stats.credit_standard_deviation = math.sqrt(variance)
        last_regular = max(t.index for t in terms if t.type == REGULAR)
        stats.completion_time_in_years = math.ceil(last_regular / 2)

    done = scheduled | completed
    discharged = {eq for c in courses if c.code in done for eq in c.equivalents}
    remaining = [
        c.code
        for c in courses
        if c.code not in done
        and c.code not in discharged
        and not any(eq in done for eq in c.equivalents)
    ]
    stats.remaining_courses = len(remaining)
    stats.remaining_course_codes = remaining
    return stats
