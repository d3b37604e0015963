from fastapi import APIRouter, HTTPException

from app.models.plan import Term
from app.schemas.course import ReadyCourseOut
from app.schemas.graph import GraphRequest, GraphResponse, UnknownReferenceOut
from app.schemas.plan import (
    CreditLimitsOut,
    PlanGenerateRequest,
    PlanGenerateResponse,
    PlanValidateRequest,
    TermOut,
)
from app.schemas.plan_compare import PlanCompareRequest, PlanCompareResponse, StrategyComparisonOut
from app.schemas.recommendation import RecommendationOut
from app.schemas.validation import StatisticsOut, ValidationOut
from app.services.compare import compare_presets, compare_strategies
from app.services.graph import build_graph, build_remaining_graph, courses_in_cycles
from app.services.planner import compute_credit_limits, generate_plan
from app.services.validation import validate_plan

router = APIRouter(prefix="/api")


@router.post("/plans/generate", response_model=PlanGenerateResponse)
def generate_plan_endpoint(payload: PlanGenerateRequest):
    try:
        courses = [c.to_course() for c in payload.curriculum]
        result = generate_plan(courses, payload.completed_courses, payload.options)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    message = "Plan generated successfully."
    if not result.validation.is_valid:
        message = f"Plan generated with {len(result.validation.errors)} error(s)."
    elif result.validation.warnings:
        message = f"Plan generated with {len(result.validation.warnings)} warning(s)."

    return PlanGenerateResponse(
        status="complete" if result.statistics.remaining_courses == 0 else "partial",
        message=message,
        terms=[TermOut.model_validate(t) for t in result.terms],
        limits=CreditLimitsOut.model_validate(result.limits),
        validation=ValidationOut.model_validate(result.validation),
        statistics=StatisticsOut.model_validate(result.statistics),
        recommendations=[RecommendationOut.model_validate(r) for r in result.recommendations],
        ready_courses=[ReadyCourseOut.model_validate(r) for r in result.ready_courses],
    )


@router.post("/plans/validate", response_model=ValidationOut)
def validate_plan_endpoint(payload: PlanValidateRequest):
    try:
        courses = [c.to_course() for c in payload.curriculum]
        by_code = {c.code: c for c in courses}
        unknown = sorted({code for t in payload.terms for code in t.courses if code not in by_code})
        if unknown:
            raise ValueError(f"Unknown course code(s) in plan: {', '.join(unknown)}")
        terms = [
            Term(index=t.index, type=t.type, courses=tuple(by_code[code] for code in t.courses))
            for t in payload.terms
        ]
        limits = compute_credit_limits(courses, payload.options)
        validation = validate_plan(terms, courses, limits, payload.completed_courses)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return ValidationOut.model_validate(validation)


@router.post("/plans/compare", response_model=PlanCompareResponse)
def compare_plans_endpoint(payload: PlanCompareRequest):
    try:
        courses = [c.to_course() for c in payload.curriculum]
        runner = compare_strategies if payload.mode == "strategies" else compare_presets
        comparisons = runner(courses, payload.completed_courses, payload.options)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return PlanCompareResponse(
        comparisons=[StrategyComparisonOut.model_validate(c) for c in comparisons]
    )


@router.post("/graph", response_model=GraphResponse)
def graph_endpoint(payload: GraphRequest):
    try:
        courses = [c.to_course() for c in payload.curriculum]
        if payload.remaining_only:
            graph = build_remaining_graph(courses, set(payload.completed_courses))
        else:
            graph = build_graph(courses)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return GraphResponse(
        prerequisites_of=graph.prerequisites_of,
        dependents_of=graph.dependents_of,
        groups=graph.groups,
        cycles=graph.cycles,
        cyclic_courses=sorted(courses_in_cycles(graph)),
        unknown_references=[
            UnknownReferenceOut(course=course, relation=relation, code=code)
            for course, relation, code in graph.unknown_references
        ],
    )
