import logging
import math

from app.core.config import settings
from app.models.course import Course
from app.models.plan import REGULAR, SUMMER, CreditLimits, PlanResult, PlanState, Term
from app.schemas.plan import PlannerOptions
from app.services.graph import CurriculumGraph, build_graph
from app.services.ranking import rank_courses
from app.services.readiness import find_ready_courses
from app.services.recommendations import analyze_plan
from app.services.scheduler import pack_fixed_first_term, pack_summer_term, pack_term
from app.services.validation import validate_plan

logger = logging.getLogger(__name__)


def average_credits_per_term(courses: list[Course]) -> float:
    if not courses:
        return 0.0
    total = sum(c.credits for c in courses)
    return total / max(c.expected_semester for c in courses)


def compute_credit_limits(courses: list[Course], options: PlannerOptions) -> CreditLimits:
    avg = average_credits_per_term(courses)
    if avg:
        max_credits = math.ceil(avg * 1.5)
        min_credits = math.ceil(avg * 2 / 3)
    else:
        max_credits = settings.default_max_credits
        min_credits = settings.default_min_credits
    # Explicit per-request ceiling takes precedence over the curriculum average
    if options.max_credits_per_semester is not None:
        max_credits = options.max_credits_per_semester
    min_credits = min(min_credits, max_credits)

    hard_cap = max_credits * settings.overload_factor if options.allow_overload else max_credits
    return CreditLimits(
        max_credits=max_credits,
        min_credits=min_credits,
        hard_cap=hard_cap,
        max_summer_credits=options.max_summer_credits or settings.max_summer_credits,
        max_summer_courses=settings.max_summer_courses,
        advance_window=settings.advance_window,
        allow_overload=options.allow_overload,
    )


def seed_state(courses: list[Course], completed: list[str] | set[str]) -> PlanState:
    state = PlanState(taken=set(completed))
    by_code = {c.code: c for c in courses}
    for code in completed:
        course = by_code.get(code)
        if course is not None:
            state.discharged_equivalents.update(course.equivalents)
    return state


def all_courses_settled(courses: list[Course], state: PlanState) -> bool:
    return all(
        state.is_settled(c.code) or any(eq in state.taken for eq in c.equivalents)
        for c in courses
    )


def build_schedule(
    courses: list[Course],
    graph: CurriculumGraph,
    state: PlanState,
    options: PlannerOptions,
    limits: CreditLimits,
) -> list[Term]:
    terms: list[Term] = []
    term = options.current_semester

    if options.fixed_first_semester and term == 1:
        cap = min(limits.max_credits, settings.first_term_credit_cap)
        first = pack_fixed_first_term(courses, state, cap)
        if first.courses:
            terms.append(Term(index=1, type=REGULAR, courses=tuple(first.courses), is_fixed=True))
            logger.debug("Fixed first term with %d courses (%d credits)", len(first.courses), first.credits)
            term = 2

    while True:
        if all_courses_settled(courses, state):
            break
        if len(terms) >= settings.max_terms:
            logger.warning("Stopped after %d terms with courses still unscheduled", settings.max_terms)
            break

        ready = find_ready_courses(
            courses,
            state,
            term,
            options.enable_advanced_study,
            limits.advance_window,
        )
        if not ready:
            if options.include_summer_semesters and term % 2 == 0:
                summer = pack_summer_term(
                    courses,
                    graph,
                    state,
                    term,
                    limits,
                    options.enable_advanced_study,
                    settings.summer_lookahead,
                )
                if summer.courses:
                    terms.append(Term(index=term + 0.5, type=SUMMER, courses=tuple(summer.courses)))
                    logger.info("Inserted summer term %.1f with %d credits", term + 0.5, summer.credits)
                    term += 1
                    continue
            break

        ranked = rank_courses(ready, graph, term, options.strategy)
        packed = pack_term(ranked, graph, state, limits.hard_cap)
        if not packed.courses:
            logger.warning("No ready course fits within %s credits in term %d", limits.hard_cap, term)
            break

        terms.append(Term(index=term, type=REGULAR, courses=tuple(packed.courses)))
        logger.debug("Term %d: %s (%d credits)", term, [c.code for c in packed.courses], packed.credits)
        term += 1

    return terms


def generate_plan(
    courses: list[Course],
    completed: list[str] | None = None,
    options: PlannerOptions | None = None,
) -> PlanResult:
    """Run one independent planning pass over ``courses``.

    Nothing is cached between calls and the inputs are never modified.
    """
    options = options or PlannerOptions()
    completed = list(completed or [])

    graph = build_graph(courses)
    limits = compute_credit_limits(courses, options)
    state = seed_state(courses, completed)

    ready_now = rank_courses(
        find_ready_courses(courses, state, options.current_semester, options.enable_advanced_study, limits.advance_window),
        graph,
        options.current_semester,
        options.strategy,
    )
    terms = build_schedule(courses, graph, state, options, limits)
    validation = validate_plan(terms, courses, limits, completed, graph)
    recommendations = analyze_plan(terms, courses, graph, completed)

    logger.info(
        "Planned %d terms (%s strategy), %d courses remaining, valid=%s",
        len(terms),
        options.strategy,
        validation.statistics.remaining_courses,
        validation.is_valid,
    )
    return PlanResult(
        terms=terms,
        validation=validation,
        graph=graph,
        limits=limits,
        ready_courses=ready_now,
        recommendations=recommendations,
    )
