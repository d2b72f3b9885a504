import math

import pytest

from newton_visualizer.points import Point, make_points


@pytest.fixture
def quadratic_points():
    """Samples of x² at -2..2; higher divided differences vanish exactly."""
    return make_points([(-2, 4), (-1, 1), (0, 0), (1, 1), (2, 4)], prefix="quad")


@pytest.fixture
def collinear_points():
    return make_points([(0, 1), (1, 3), (2, 5)], prefix="line")


@pytest.fixture
def duplicate_points():
    return [Point(1.0, 1.0, "a"), Point(1.0, 2.0, "b"), Point(2.0, 3.0, "c")]


IRREGULAR_SETS = {
    "four": [(0.0, 1.0), (1.0, 3.0), (2.0, 2.0), (4.0, 5.0)],
    "five-unsorted": [(1.0, 3.0), (-1.5, 2.0), (2.5, -2.0), (0.25, 0.5), (-0.5, -1.0)],
    "sine": [(2 * math.pi * k / 6, math.sin(2 * math.pi * k / 6)) for k in range(7)],
    "two": [(-3.0, 7.0), (5.0, -1.0)],
}


@pytest.fixture(params=sorted(IRREGULAR_SETS))
def irregular_points(request):
    return make_points(IRREGULAR_SETS[request.param], prefix=request.param)
