"""End-to-end tests for the plan orchestrator."""

import itertools

import pytest
from pydantic import ValidationError

from app.models.plan import REGULAR, SUMMER
from app.models.validation import INCOMPLETE_PLAN, MISSING_COREQUISITES, PREREQUISITE_CYCLE
from app.schemas.plan import PlannerOptions
from app.services.planner import compute_credit_limits, generate_plan
from conftest import make_course


def term_codes(result):
    return [t.codes for t in result.terms]


def assert_plan_invariants(result, courses, completed=()):
    by_code = {c.code: c for c in courses}
    seen = set(completed)
    scheduled = []
    for term in sorted(result.terms, key=lambda t: t.index):
        for course in term.courses:
            assert all(p in seen for p in course.prerequisites), course.code
            assert all(c in seen or c in term.codes or c not in by_code for c in course.corequisites), course.code
        seen |= set(term.codes)
        scheduled.extend(term.codes)
        if term.type == REGULAR:
            assert term.credit_total <= result.limits.max_credits * 1.2

    assert len(scheduled) == len(set(scheduled))
    for code in scheduled:
        assert not set(by_code[code].equivalents) & set(scheduled), code


def test_linear_chain_takes_one_course_per_term(chain_curriculum):
    result = generate_plan(chain_curriculum, [], PlannerOptions(max_credits_per_semester=6))

    assert term_codes(result) == [["A"], ["B"], ["C"]]
    assert [t.index for t in result.terms] == [1, 2, 3]
    assert result.validation.is_valid
    assert result.statistics.remaining_courses == 0


def test_initial_ready_courses_are_reported(chain_curriculum):
    result = generate_plan(chain_curriculum)
    assert [r.course.code for r in result.ready_courses] == ["A"]
    assert result.ready_courses[0].priority > 0


@pytest.mark.parametrize(
    "strategy,advance,summer",
    list(itertools.product(["balanced", "fast", "load-balanced"], [True, False], [True, False])),
)
def test_sample_plan_invariants(sample_curriculum, strategy, advance, summer):
    options = PlannerOptions(strategy=strategy, enable_advanced_study=advance, include_summer_semesters=summer)
    result = generate_plan(sample_curriculum, [], options)

    assert_plan_invariants(result, sample_curriculum)
    assert result.validation.is_valid
    assert result.statistics.remaining_courses == 0


@pytest.mark.parametrize("strategy", ["balanced", "fast", "load-balanced"])
def test_planning_is_deterministic(sample_curriculum, strategy):
    options = PlannerOptions(strategy=strategy, max_credits_per_semester=12)
    first = generate_plan(sample_curriculum, ["MATH1"], options)
    second = generate_plan(sample_curriculum, ["MATH1"], options)

    assert term_codes(first) == term_codes(second)
    assert [t.index for t in first.terms] == [t.index for t in second.terms]


def test_equivalent_courses_are_not_both_scheduled(sample_curriculum):
    result = generate_plan(sample_curriculum)
    scheduled = {code for t in result.terms for code in t.codes}
    assert len({"ENG2", "ENG2X"} & scheduled) == 1


def test_completed_equivalent_discharges_requirement(sample_curriculum):
    result = generate_plan(sample_curriculum, ["ENG1", "ENG2X"])
    scheduled = {code for t in result.terms for code in t.codes}

    assert "ENG2" not in scheduled
    assert "ENG1" not in scheduled
    assert result.statistics.remaining_courses == 0


def test_corequisite_discharged_by_completed_equivalent_is_not_scheduled():
    courses = [
        make_course("A", equivalents=("B",)),
        make_course("B", equivalents=("A",)),
        make_course("D", corequisites=("B",)),
    ]
    result = generate_plan(courses, ["A"], PlannerOptions(max_credits_per_semester=12))

    assert term_codes(result) == [["D"]]
    assert MISSING_COREQUISITES not in result.validation.issue_types()
    assert result.validation.is_valid
    assert result.statistics.remaining_courses == 0


def test_equivalent_corequisites_are_not_both_scheduled():
    courses = [
        make_course("LEC", corequisites=("LABA", "LABB")),
        make_course("LABA", 1, equivalents=("LABB",)),
        make_course("LABB", 1, equivalents=("LABA",)),
    ]
    result = generate_plan(courses)
    scheduled = [code for t in result.terms for code in t.codes]

    assert sorted(scheduled) == ["LABA", "LEC"]
    assert result.validation.warnings == []


def test_completed_courses_satisfy_prerequisites(chain_curriculum):
    result = generate_plan(chain_curriculum, ["A"])

    assert term_codes(result) == [["B"], ["C"]]
    assert result.validation.is_valid


def test_starting_term_offsets_indices(chain_curriculum):
    result = generate_plan(chain_curriculum, [], PlannerOptions(current_semester=3))

    assert [t.index for t in result.terms] == [3, 4, 5]
    assert [t.year for t in result.terms] == [2, 2, 3]


def test_summer_term_is_inserted_when_regular_term_is_empty():
    courses = [
        make_course("A", sem=1),
        make_course("B", sem=1),
        make_course("C", sem=3, prerequisites=("A",)),
        make_course("D", sem=4),
    ]
    options = PlannerOptions(enable_advanced_study=False, max_credits_per_semester=10)
    result = generate_plan(courses, [], options)

    assert [(t.index, t.type) for t in result.terms] == [(1, REGULAR), (2.5, SUMMER)]
    assert result.terms[1].codes == ["C", "D"]
    assert result.terms[1].year == 1
    assert result.statistics.summer_semesters == 1
    assert result.statistics.completion_time_in_years == 1
    assert result.statistics.remaining_courses == 0


def test_without_summer_an_empty_term_ends_planning():
    courses = [make_course("A", sem=1), make_course("D", sem=4)]
    options = PlannerOptions(enable_advanced_study=False, include_summer_semesters=False)
    result = generate_plan(courses, [], options)

    assert term_codes(result) == [["A"]]
    assert result.statistics.remaining_course_codes == ["D"]
    assert INCOMPLETE_PLAN in result.validation.issue_types()
    assert result.validation.is_valid


def test_fixed_first_semester(sample_curriculum):
    result = generate_plan(sample_curriculum, [], PlannerOptions(fixed_first_semester=True))
    first = result.terms[0]

    assert first.is_fixed
    assert set(first.codes) == {"MATH1", "PROG1", "ENG1", "PHYS1", "PHYS1L"}
    assert result.terms[1].index == 2
    assert result.validation.is_valid


def test_cycle_is_reported_and_planning_still_returns():
    courses = [
        make_course("X", prerequisites=("Y",)),
        make_course("Y", prerequisites=("X",)),
        make_course("FREE"),
    ]
    result = generate_plan(courses)

    assert term_codes(result) == [["FREE"]]
    assert not result.validation.is_valid
    assert PREREQUISITE_CYCLE in {e.type for e in result.validation.errors}
    assert result.statistics.remaining_courses == 2


def test_safety_bound_limits_term_count():
    courses = [make_course("C00")] + [
        make_course(f"C{i:02d}", prerequisites=(f"C{i - 1:02d}",)) for i in range(1, 20)
    ]
    result = generate_plan(courses)

    assert len(result.terms) == 16
    assert result.statistics.remaining_courses == 4


def test_course_larger_than_cap_stops_planning():
    result = generate_plan([make_course("HUGE", 30)], [], PlannerOptions(max_credits_per_semester=10))

    assert result.terms == []
    assert result.statistics.remaining_courses == 1


def test_missing_corequisite_is_only_a_warning():
    courses = [make_course("D", corequisites=("E",))]
    result = generate_plan(courses)

    assert term_codes(result) == [["D"]]
    assert MISSING_COREQUISITES in {w.type for w in result.validation.warnings}
    assert result.validation.is_valid


def test_fast_and_balanced_both_cover_curriculum(sample_curriculum):
    fast = generate_plan(sample_curriculum, [], PlannerOptions(strategy="fast"))
    balanced = generate_plan(sample_curriculum, [], PlannerOptions(strategy="balanced"))

    assert fast.statistics.remaining_courses == 0
    assert balanced.statistics.remaining_courses == 0


def test_empty_curriculum():
    result = generate_plan([])

    assert result.terms == []
    assert result.validation.is_valid
    assert result.limits.max_credits == 22


class TestCreditLimits:
    def test_dynamic_limits_from_curriculum_average(self, sample_curriculum):
        limits = compute_credit_limits(sample_curriculum, PlannerOptions())

        # 57 credits over 4 nominal terms
        assert limits.max_credits == 22
        assert limits.min_credits == 10
        assert limits.hard_cap == 22

    def test_explicit_maximum_and_overload(self, sample_curriculum):
        limits = compute_credit_limits(
            sample_curriculum,
            PlannerOptions(max_credits_per_semester=8, allow_overload=True),
        )

        assert limits.max_credits == 8
        assert limits.min_credits == 8
        assert limits.hard_cap == pytest.approx(9.6)
        assert limits.allow_overload


class TestPlannerOptions:
    def test_accepts_camel_case(self):
        options = PlannerOptions.model_validate(
            {"maxCreditsPerSemester": 18, "enableAdvancedStudy": False, "strategy": "load-balanced"}
        )
        assert options.max_credits_per_semester == 18
        assert not options.enable_advanced_study
        assert options.strategy == "load-balanced"

    def test_is_immutable(self):
        options = PlannerOptions()
        with pytest.raises(ValidationError):
            options.strategy = "fast"

    def test_rejects_unknown_strategy(self):
        with pytest.raises(ValidationError):
            PlannerOptions(strategy="random")
