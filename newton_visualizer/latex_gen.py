from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import sympy as sp

from newton_visualizer.interpolation import DividedDifferenceTable, build_divided_difference_table
from newton_visualizer.points import Point
from newton_visualizer.settings import DEFAULT_TOLERANCES


@dataclass(frozen=True, slots=True)
class DividedDifferenceCell:
    value: float
    label: str
    row: int
    level: int

    @property
    def is_coefficient(self) -> bool:
        return self.row == 0

    def tooltip(self, decimals: int = 6) -> str:
        prefix = "Newton Coefficient: " if self.is_coefficient else ""
        return f"{prefix}{self.label} = {self.value:.{decimals}f}"


def cell_label(row: int, level: int) -> str:
    if level == 0:
        return f"f[x{row}]"
    return f"f[x{row},...,x{row + level}]"


def _node_factor(x_val: float, decimals: int) -> str:
    if x_val >= 0:
        return f"(x - {abs(x_val):.{decimals}f})"
    return f"(x + {abs(x_val):.{decimals}f})"


def format_newton_formula(
    points: Sequence[Point],
    decimals: int = 4,
    x_decimals: int = 2,
    eps: float = DEFAULT_TOLERANCES.term_omission,
    table: Optional[DividedDifferenceTable] = None,
) -> str:
    """Render P(x) in Newton form, e.g. ``P(x) = 4.0000 - 3.0000(x + 2.00)``.

    a_0 is always shown; higher terms with |a_k| < eps are dropped.
    """
    if table is None:
        table = build_divided_difference_table(points)
    if len(table) == 0:
        return "P(x) = 0"

    coef = table.coefficients
    nodes = table.nodes
    parts = [f"{coef[0]:.{decimals}f}"]
    for k in range(1, len(coef)):
        c = float(coef[k])
        if abs(c) < eps:
            continue
        sign = "-" if c < 0 else "+"
        factors = "".join(_node_factor(float(nodes[j]), x_decimals) for j in range(k))
        parts.append(f"{sign} {abs(c):.{decimals}f}{factors}")
    return "P(x) = " + " ".join(parts)


def divided_difference_notation(n: int) -> str:
    """Symbolic Newton form over *n* nodes in divided-difference notation."""
    if n <= 0:
        return ""
    terms = ["f[x_0]"]
    for i in range(1, n):
        terms.append(f"f[x_0, ..., x_{i}] \\prod_{{j=0}}^{{{i - 1}}} (x - x_j)")
    return "P(x) = " + " + ".join(terms)


def table_cell_metadata(
    points: Sequence[Point], table: Optional[DividedDifferenceTable] = None
) -> list[list[DividedDifferenceCell]]:
    if table is None:
        table = build_divided_difference_table(points)
    n = len(table)
    return [
        [
            DividedDifferenceCell(
                value=float(table.values[i, j]),
                label=cell_label(i, j),
                row=i,
                level=j,
            )
            for j in range(n - i)
        ]
        for i in range(n)
    ]


# ===========================================================================
# LaTeX generator
# ===========================================================================

class NewtonLaTeXGenerator:
    """Converts a point set -> display-math LaTeX of its Newton polynomial.

    Terms keep Newton order (a_0, a_1(x - x_0), ...); sympy only prints the
    numbers, so nothing is expanded or reordered.

    Parameters
    ----------
    approx : bool
        When True (default) coefficients and nodes are rendered as rounded
        decimals with *decimals* digits after the point.  When False, exact
        rational fractions (denominator <= 1000) are used.
    decimals : int
        Number of digits after the decimal point in approximate mode.
    """

    def __init__(self, approx: bool = True, decimals: int = 4,
                 eps: float = DEFAULT_TOLERANCES.term_omission) -> None:
        self.approx = approx
        self.decimals = max(0, min(10, int(decimals)))
        self.eps = eps

    def reconfigure(self, approx: bool, decimals: int) -> None:
        """Update mode in place."""
        self.approx = approx
        self.decimals = max(0, min(10, int(decimals)))

    def _n(self, v: float) -> sp.Expr:
        """Convert a non-negative float to a sympy number respecting approx mode.

        Approx mode  -> sp.Float with string representation at self.decimals places.
        Exact mode   -> sp.Rational with denominator <= 1000 (exact fraction).
        Non-finite values stay floats in both modes.
        """
        if not math.isfinite(v):
            return sp.Float(v)
        if self.approx:
            return sp.Float(f"{v:.{self.decimals}f}")
        return sp.Rational(v).limit_denominator(1000)

    def _num(self, v: float) -> str:
        return sp.latex(self._n(v))

    def _factor(self, node: float) -> str:
        sign = "-" if node >= 0 else "+"
        return rf"\left(x {sign} {self._num(abs(node))}\right)"

    def terms(self, points: Sequence[Point],
              table: Optional[DividedDifferenceTable] = None) -> list[tuple[bool, str]]:
        """(negative, body) per kept term; body carries no sign."""
        if table is None:
            table = build_divided_difference_table(points)
        coef = table.coefficients
        nodes = table.nodes
        out: list[tuple[bool, str]] = []
        for k, c in enumerate(float(v) for v in coef):
            if k > 0 and abs(c) < self.eps:
                continue
            body = self._num(abs(c)) + "".join(self._factor(float(nodes[j])) for j in range(k))
            out.append((c < 0, body))
        return out

    def generate(self, points: Sequence[Point],
                 table: Optional[DividedDifferenceTable] = None) -> str:
        terms = self.terms(points, table)
        if not terms:
            return "$$P(x) = 0$$"
        negative, body = terms[0]
        tex = f"-{body}" if negative else body
        for negative, body in terms[1:]:
            tex += f" {'-' if negative else '+'} {body}"
        return f"$$P(x) = {tex}$$"
