from app.models.course import Course
from app.models.plan import REGULAR, Term
from app.models.recommendation import Recommendation
from app.services.graph import CurriculumGraph

LOAD_SPREAD_THRESHOLD = 6
BOTTLENECK_MIN_DEPENDENTS = 3


def analyze_plan(
    terms: list[Term],
    courses: list[Course],
    graph: CurriculumGraph,
    completed: list[str] | set[str] | None = None,
) -> list[Recommendation]:
    recommendations: list[Recommendation] = []

    regular = [t for t in terms if t.type == REGULAR]
    if len(regular) > 1:
        loads = [t.credit_total for t in regular]
        spread = max(loads) - min(loads)
        if spread > LOAD_SPREAD_THRESHOLD:
            recommendations.append(
                Recommendation(
                    type="LOAD_BALANCING",
                    priority="medium",
                    description=f"Credit load differs by {spread} credits between regular terms",
                    suggestion="Consider moving electives from the heaviest term to the lightest one",
                )
            )

    missed = find_missed_advance_study(terms, courses, completed)
    if missed:
        recommendations.append(
            Recommendation(
                type="ADVANCED_STUDY_OPPORTUNITY",
                priority="low",
                description=f"{len(missed)} low-risk course(s) could be taken ahead of schedule",
                suggestion="Consider advance study to shorten time to completion",
                courses=[c.code for c in missed],
            )
        )

    bottlenecks = find_bottlenecks(courses, graph)
    if bottlenecks:
        recommendations.append(
            Recommendation(
                type="PREREQUISITE_BOTTLENECK",
                priority="high",
                description=f"{len(bottlenecks)} course(s) block {BOTTLENECK_MIN_DEPENDENTS} or more other courses",
                suggestion="Schedule these courses as early as possible",
                courses=[c.code for c in bottlenecks],
            )
        )
    return recommendations


def find_missed_advance_study(
    terms: list[Term],
    courses: list[Course],
    completed: list[str] | set[str] | None = None,
) -> list[Course]:
    """Unscheduled electives with at most one prerequisite and at most 3 credits."""
    settled = {code for term in terms for code in term.codes} | set(completed or ())
    return [
        c
        for c in courses
        if c.code not in settled
        and not c.is_required
        and len(c.prerequisites) <= 1
        and c.credits <= 3
    ]


def find_bottlenecks(courses: list[Course], graph: CurriculumGraph) -> list[Course]:
    candidates = [c for c in courses if graph.dependent_count(c.code) >= BOTTLENECK_MIN_DEPENDENTS]
    return sorted(candidates, key=lambda c: (-graph.dependent_count(c.code), c.code))
