"""Shared fixtures for the planning engine tests."""

import pytest

from app.models.course import Course
from app.models.plan import CreditLimits


def make_course(code, credits=3, sem=1, **kwargs) -> Course:
    kwargs.setdefault("name", code)
    return Course(code=code, credits=credits, expected_semester=sem, **kwargs)


def make_limits(**overrides) -> CreditLimits:
    values = dict(
        max_credits=10,
        min_credits=4,
        hard_cap=10,
        max_summer_credits=6,
        max_summer_courses=4,
        advance_window=4,
        allow_overload=False,
    )
    values.update(overrides)
    return CreditLimits(**values)


@pytest.fixture
def chain_curriculum():
    """A -> B -> C, all nominally in the first term."""
    return [
        make_course("A"),
        make_course("B", prerequisites=("A",)),
        make_course("C", prerequisites=("B",)),
    ]


@pytest.fixture
def sample_curriculum():
    """Four-term curriculum with corequisites, equivalents and electives."""
    return [
        # Term 1
        make_course("MATH1", 4, 1, difficulty=3),
        make_course("PROG1", 4, 1, difficulty=2),
        make_course("ENG1", 3, 1),
        make_course("PHYS1", 3, 1, corequisites=("PHYS1L",)),
        make_course("PHYS1L", 1, 1, corequisites=("PHYS1",), is_practical=True),
        # Term 2
        make_course("MATH2", 4, 2, prerequisites=("MATH1",), difficulty=4),
        make_course("PROG2", 4, 2, prerequisites=("PROG1",), difficulty=3),
        make_course("DS", 3, 2, prerequisites=("PROG1",)),
        make_course("ENG2", 3, 2, prerequisites=("ENG1",), equivalents=("ENG2X",)),
        make_course("ENG2X", 3, 2, prerequisites=("ENG1",), equivalents=("ENG2",), is_required=False),
        # Term 3
        make_course("ALGO", 4, 3, prerequisites=("PROG2", "DS"), difficulty=4),
        make_course("STAT", 3, 3, prerequisites=("MATH2",)),
        make_course("DB", 3, 3, prerequisites=("PROG2",)),
        make_course("ART", 2, 3, is_required=False),
        # Term 4
        make_course("ML", 4, 4, prerequisites=("ALGO", "STAT"), difficulty=5),
        make_course("OS", 4, 4, prerequisites=("PROG2",), difficulty=4),
        make_course("CAP", 3, 4, prerequisites=("ALGO", "DB")),
        make_course("PHIL", 2, 4, is_required=False),
    ]


@pytest.fixture
def client():
    from fastapi.testclient import TestClient

    from app.main import app

    return TestClient(app)
