from dataclasses import dataclass, field

from app.models.course import Course
from app.models.plan import Term
from app.models.validation import Statistics
from app.schemas.plan import PlannerOptions
from app.services.planner import generate_plan
from app.services.ranking import STRATEGIES

STRATEGY_PRESETS: dict[str, dict] = {
    "traditional": {"enable_advanced_study": False, "include_summer_semesters": False, "strategy": "balanced"},
    "advance": {"enable_advanced_study": True, "include_summer_semesters": False, "strategy": "balanced"},
    "advance-summer": {"enable_advanced_study": True, "include_summer_semesters": True, "strategy": "fast"},
}


@dataclass
class StrategyComparison:
    name: str
    options: PlannerOptions
    is_valid: bool
    statistics: Statistics
    terms: list[Term] = field(default_factory=list)
    diff: dict | None = None


def _run(name: str, courses: list[Course], completed: list[str], options: PlannerOptions) -> StrategyComparison:
    result = generate_plan(courses, completed, options)
    return StrategyComparison(
        name=name,
        options=options,
        is_valid=result.validation.is_valid,
        statistics=result.statistics,
        terms=result.terms,
    )


def _with_diffs(comparisons: list[StrategyComparison]) -> list[StrategyComparison]:
    """Diff every run against the first one."""
    if comparisons:
        baseline = comparisons[0].terms
        for comparison in comparisons[1:]:
            comparison.diff = diff_plans(baseline, comparison.terms)
    return comparisons


def compare_presets(
    courses: list[Course],
    completed: list[str] | None = None,
    base: PlannerOptions | None = None,
) -> list[StrategyComparison]:
    """Run each preset as an independent planning pass."""
    base = base or PlannerOptions()
    completed = list(completed or [])
    return _with_diffs(
        [
            _run(name, courses, completed, base.model_copy(update=overrides))
            for name, overrides in STRATEGY_PRESETS.items()
        ]
    )


def compare_strategies(
    courses: list[Course],
    completed: list[str] | None = None,
    base: PlannerOptions | None = None,
) -> list[StrategyComparison]:
    base = base or PlannerOptions()
    completed = list(completed or [])
    return _with_diffs(
        [
            _run(strategy, courses, completed, base.model_copy(update={"strategy": strategy}))
            for strategy in STRATEGIES
        ]
    )


def diff_plans(baseline: list[Term], other: list[Term]) -> dict:
    baseline_courses = {code for term in baseline for code in term.codes}
    other_courses = {code for term in other for code in term.codes}
    moved = sorted(
        code
        for code in baseline_courses & other_courses
        if _term_of(baseline, code) != _term_of(other, code)
    )
    return {
        "term_count_diff": len(other) - len(baseline),
        "added_courses": sorted(other_courses - baseline_courses),
        "removed_courses": sorted(baseline_courses - other_courses),
        "moved_courses": moved,
    }


def _term_of(terms: list[Term], code: str) -> float | None:
    for term in terms:
        if code in term.codes:
            return term.index
    return None
