"""Pytest fixtures for random source tests."""
import pytest

from randsource.logic.models import FloatDraw, IntegerDraw
from randsource.logic.rng import RandomSource


SCENARIO_SEED = 0


def run_scenario(source: RandomSource) -> list[int | float]:
    """next(); next(10); next_double(); next(2, 15); next_double(); next(15)."""
    return [
        source.next(),
        source.next(10),
        source.next_double(),
        source.next(2, 15),
        source.next_double(),
        source.next(15),
    ]


@pytest.fixture
def source() -> RandomSource:
    """Fresh source with the scenario seed."""
    return RandomSource(SCENARIO_SEED)


@pytest.fixture
def scenario_source() -> RandomSource:
    """Source that has already run the six-draw scenario."""
    rs = RandomSource(SCENARIO_SEED)
    run_scenario(rs)
    return rs


@pytest.fixture
def sample_history() -> list:
    """Hand-built history covering both variants and both integer forms."""
    return [
        IntegerDraw(index=1, value=1559595546, min_value=0, max_value=0),
        IntegerDraw(index=2, value=7, min_value=0, max_value=10),
        FloatDraw(index=3, value=0.37),
        IntegerDraw(index=4, value=-3, min_value=-10, max_value=15),
    ]
