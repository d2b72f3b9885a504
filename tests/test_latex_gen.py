import pytest

from newton_visualizer.latex_gen import (
    DividedDifferenceCell,
    NewtonLaTeXGenerator,
    cell_label,
    divided_difference_notation,
    format_newton_formula,
    table_cell_metadata,
)
from newton_visualizer.points import Point, make_points


class TestFormatNewtonFormula:

    def test_empty(self):
        assert format_newton_formula([]) == "P(x) = 0"

    def test_single_point(self):
        assert format_newton_formula([Point(3.0, 5.0)]) == "P(x) = 5.0000"

    def test_quadratic(self, quadratic_points):
        assert format_newton_formula(quadratic_points) == (
            "P(x) = 4.0000 - 3.0000(x + 2.00) + 1.0000(x + 2.00)(x + 1.00)"
        )

    def test_vanishing_higher_order_terms_are_omitted(self, collinear_points):
        assert format_newton_formula(collinear_points) == "P(x) = 1.0000 + 2.0000(x - 0.00)"

    def test_near_zero_coefficient_below_epsilon(self):
        points = make_points([(0.0, 0.0), (1.0, 1e-11)])
        assert format_newton_formula(points) == "P(x) = 0.0000"
        assert format_newton_formula(points, eps=1e-12) == "P(x) = 0.0000 + 0.0000(x - 0.00)"

    def test_leading_coefficient_always_kept(self):
        points = make_points([(1.0, 0.0), (2.0, 3.0)])
        assert format_newton_formula(points) == "P(x) = 0.0000 + 3.0000(x - 1.00)"

    def test_negative_leading_coefficient_and_precision(self):
        points = make_points([(-0.5, -1.0), (1.5, 0.0)])
        assert format_newton_formula(points, decimals=2, x_decimals=1) == (
            "P(x) = -1.00 + 0.50(x + 0.5)"
        )

    def test_points_are_sorted_first(self, quadratic_points):
        shuffled = list(reversed(quadratic_points))
        assert format_newton_formula(shuffled) == format_newton_formula(quadratic_points)


class TestTableCellMetadata:

    def test_empty(self):
        assert table_cell_metadata([]) == []

    def test_shape_and_labels(self, quadratic_points):
        cells = table_cell_metadata(quadratic_points)
        assert [len(row) for row in cells] == [5, 4, 3, 2, 1]
        assert cells[0][0].label == "f[x0]"
        assert cells[1][2].label == "f[x1,...,x3]"
        assert cells[4][0].label == "f[x4]"
        for i, row in enumerate(cells):
            for j, cell in enumerate(row):
                assert (cell.row, cell.level) == (i, j)

    def test_values(self, quadratic_points):
        cells = table_cell_metadata(quadratic_points)
        assert [c.value for c in cells[0]] == pytest.approx([4, -3, 1, 0, 0])
        assert [row[0].value for row in cells] == [4, 1, 0, 1, 4]
        assert cells[2][1].value == pytest.approx(1.0)

    def test_coefficient_flag_and_tooltip(self, collinear_points):
        cells = table_cell_metadata(collinear_points)
        assert cells[0][1].is_coefficient
        assert not cells[1][0].is_coefficient
        assert cells[0][1].tooltip() == "Newton Coefficient: f[x0,...,x1] = 2.000000"
        assert cells[1][0].tooltip(decimals=2) == "f[x1] = 3.00"

    def test_cell_label(self):
        assert cell_label(2, 0) == "f[x2]"
        assert cell_label(0, 3) == "f[x0,...,x3]"

    def test_cells_are_values(self):
        assert DividedDifferenceCell(1.0, "f[x0]", 0, 0) == DividedDifferenceCell(1.0, "f[x0]", 0, 0)


def test_divided_difference_notation():
    assert divided_difference_notation(0) == ""
    assert divided_difference_notation(1) == "P(x) = f[x_0]"
    assert divided_difference_notation(3) == (
        "P(x) = f[x_0]"
        " + f[x_0, ..., x_1] \\prod_{j=0}^{0} (x - x_j)"
        " + f[x_0, ..., x_2] \\prod_{j=0}^{1} (x - x_j)"
    )


class TestNewtonLaTeXGenerator:

    def test_empty(self):
        assert NewtonLaTeXGenerator().generate([]) == "$$P(x) = 0$$"

    def test_quadratic_keeps_newton_order(self, quadratic_points):
        tex = NewtonLaTeXGenerator().generate(quadratic_points)
        assert tex.startswith("$$P(x) = 4")
        assert tex.endswith("$$")
        first = tex.index(r"\left(x + 2")
        second = tex.index(r"\left(x + 1")
        assert first < second
        assert " - 3" in tex
        # zero coefficients of degree 3 and 4 are dropped
        assert r"x - 0" not in tex
        assert r"x - 1" not in tex

    def test_negative_constant(self):
        points = make_points([(0.0, -2.0), (1.0, -2.0)])
        tex = NewtonLaTeXGenerator().generate(points)
        assert tex.startswith("$$P(x) = -2")
        assert r"\left(" not in tex

    def test_exact_mode_uses_fractions(self):
        points = make_points([(0.0, 0.0), (3.0, 1.0)])
        tex = NewtonLaTeXGenerator(approx=False).generate(points)
        assert r"\frac{1}{3}" in tex

    def test_reconfigure_changes_precision(self):
        points = make_points([(0.0, 0.0), (3.0, 1.0)])
        gen = NewtonLaTeXGenerator(approx=True, decimals=4)
        assert "0.3333" in gen.generate(points)
        gen.reconfigure(approx=True, decimals=2)
        tex = gen.generate(points)
        assert "0.33" in tex
        assert "0.333" not in tex

    def test_decimals_are_clamped(self):
        assert NewtonLaTeXGenerator(decimals=50).decimals == 10
        assert NewtonLaTeXGenerator(decimals=-3).decimals == 0
