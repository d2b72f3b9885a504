import math

import pytest

from newton_visualizer.points import make_points
from newton_visualizer.settings import DEFAULT_TOLERANCES, PlotSettings, Tolerances


def test_default_tolerances():
    assert DEFAULT_TOLERANCES.exact_fit == 1e-9
    assert DEFAULT_TOLERANCES.evaluator_agreement == 1e-6
    assert DEFAULT_TOLERANCES.term_omission == 1e-10
    assert DEFAULT_TOLERANCES.near_duplicate_x == 0.01


@pytest.mark.parametrize("value", [0.0, -1e-3, math.inf, math.nan])
def test_tolerances_must_be_positive_and_finite(value):
    with pytest.raises(ValueError, match="exact_fit"):
        Tolerances(exact_fit=value)


def test_default_plot_settings():
    s = PlotSettings()
    assert (s.x_min, s.x_max, s.y_min, s.y_max) == (-5.0, 5.0, -5.0, 5.0)
    assert s.curve_samples == 300
    assert s.domain_width == 10.0
    assert s.domain_height == 10.0


@pytest.mark.parametrize(
    "kwargs",
    [
        {"x_min": 1.0, "x_max": 1.0},
        {"y_min": 2.0, "y_max": -2.0},
        {"curve_samples": 1},
        {"coefficient_decimals": 11},
        {"node_decimals": -1},
        {"animation_speed": 0.25},
        {"animation_speed": 3.5},
        {"latex_decimals": 12},
    ],
)
def test_invalid_plot_settings(kwargs):
    with pytest.raises(ValueError):
        PlotSettings(**kwargs)


class TestFitTo:

    def test_empty_resets_to_default_square(self):
        s = PlotSettings(x_min=0.0, x_max=1.0).fit_to([])
        assert (s.x_min, s.x_max, s.y_min, s.y_max) == (-5.0, 5.0, -5.0, 5.0)

    def test_padding(self):
        points = make_points([(0, 10), (10, 20)])
        s = PlotSettings(curve_samples=50).fit_to(points)
        assert (s.x_min, s.x_max) == pytest.approx((-2.0, 12.0))
        assert (s.y_min, s.y_max) == pytest.approx((8.0, 22.0))
        assert s.curve_samples == 50

    def test_flat_axis_gets_fixed_margin(self):
        s = PlotSettings().fit_to(make_points([(3, 1)]))
        assert (s.x_min, s.x_max, s.y_min, s.y_max) == (1.0, 5.0, -1.0, 3.0)

    def test_refit_follows_point_edits(self):
        points = make_points([(0, 0), (4, 4)])
        s = PlotSettings(latex_decimals=6).fit_to(points)
        assert (s.x_min, s.x_max) == pytest.approx((-0.8, 4.8))

        grown = s.fit_to([*points, *make_points([(9, -1)], prefix="new")])
        assert grown.x_min < 0.0 < 9.0 < grown.x_max
        assert grown.y_min < -1.0
        assert grown.latex_decimals == 6

        shrunk = grown.fit_to(points[:1])
        assert (shrunk.x_min, shrunk.x_max) == (-2.0, 2.0)
