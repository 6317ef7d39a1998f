"""Pytest configuration and fixtures."""

import pytest

from fixedpoint import Fixed32, Fixed64, Fixed128, FixedPointNumber

FAMILIES = [Fixed32, Fixed64, Fixed128]


@pytest.fixture(params=FAMILIES, ids=lambda cls: cls.__name__)
def family(request: pytest.FixtureRequest) -> type[FixedPointNumber]:
    """Each shipped fixed-point family in turn."""
    return request.param


@pytest.fixture
def inner_max(family: type[FixedPointNumber]) -> int:
    """Largest raw inner value of the family."""
    return family.INNER.max_value


@pytest.fixture
def inner_min(family: type[FixedPointNumber]) -> int:
    """Smallest raw inner value of the family."""
    return family.INNER.min_value
