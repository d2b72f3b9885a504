"""
Newton-form polynomial interpolation engine.

Pipeline
--------
1.  Sort nodes by x (stable for ties)
2.  Divided-difference table                 O(n²), triangular
3.  Newton coefficients                      row 0 of the table
4.  Evaluators                               Newton (nested products), Lagrange (basis sum),
                                             barycentric reference (scipy.interpolate)
5.  Curve sampling                           one table per curve, k evaluations

Every function is pure: inputs are never mutated and nothing is cached between
calls.  Duplicate x values make the recurrence divide by zero; the result is
the IEEE-754 inf/NaN unless ``strict=True`` is requested.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence, Union

import numpy as np
from numpy.typing import ArrayLike, NDArray
from scipy.interpolate import BarycentricInterpolator

from newton_visualizer.diagnostics import require_distinct_x
from newton_visualizer.points import Point, sort_points
from newton_visualizer.settings import DEFAULT_TOLERANCES, Tolerances

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Type aliases
# ---------------------------------------------------------------------------

FloatArray = NDArray[np.floating[Any]]
Evaluated = Union[float, FloatArray]


class EvaluatorKind(str, enum.Enum):
    NEWTON = "newton"
    LAGRANGE = "lagrange"
    BARYCENTRIC = "barycentric"


# ===========================================================================
# Data-classes
# ===========================================================================

@dataclass(frozen=True, slots=True, eq=False)
class DividedDifferenceTable:
    """Triangular divided-difference table over x-sorted nodes.

    ``values[i, j]`` is ``f[x_i, ..., x_{i+j}]`` for ``j < n - i``; cells below
    the anti-diagonal are unused and hold zero.  Both arrays are read-only.
    """

    nodes: FloatArray
    values: FloatArray

    def __post_init__(self) -> None:
        n = len(self.nodes)
        if self.values.shape != (n, n):
            raise ValueError(f"values must have shape ({n}, {n}), got {self.values.shape}")
        self.nodes.setflags(write=False)
        self.values.setflags(write=False)

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def coefficients(self) -> FloatArray:
        """Newton coefficients a_0..a_{n-1} (the top row)."""
        if len(self) == 0:
            return np.empty(0, dtype=np.float64)
        return self.values[0].copy()

    def entry(self, row: int, level: int) -> float:
        n = len(self)
        if not (0 <= row < n and 0 <= level < n - row):
            raise IndexError(f"no divided difference at row {row}, level {level} (n = {n})")
        return float(self.values[row, level])

    def row(self, row: int) -> FloatArray:
        n = len(self)
        if not 0 <= row < n:
            raise IndexError(f"row {row} out of range (n = {n})")
        return self.values[row, : n - row].copy()

    def to_list(self) -> list[list[float]]:
        n = len(self)
        return [self.values[i, : n - i].tolist() for i in range(n)]


@dataclass(frozen=True, slots=True, eq=False)
class CurveSample:
    x: FloatArray
    y: FloatArray

    def __len__(self) -> int:
        return len(self.x)

    def __iter__(self) -> Iterator[tuple[float, float]]:
        for xv, yv in zip(self.x, self.y):
            yield float(xv), float(yv)

    def pairs(self) -> list[tuple[float, float]]:
        return list(self)


# ===========================================================================
# Table construction
# ===========================================================================

def build_divided_difference_table(
    points: Sequence[Point], strict: bool = False
) -> DividedDifferenceTable:
    if strict:
        require_distinct_x(points)
    ordered = sort_points(points)
    n = len(ordered)
    nodes = np.array([p.x for p in ordered], dtype=np.float64)
    values = np.zeros((n, n), dtype=np.float64)
    if n == 0:
        return DividedDifferenceTable(nodes, values)

    values[:, 0] = [p.y for p in ordered]
    # Column j from column j-1, all rows at once; a zero gap gives inf/NaN.
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for j in range(1, n):
            m = n - j
            values[:m, j] = (values[1 : m + 1, j - 1] - values[:m, j - 1]) / (
                nodes[j:] - nodes[:m]
            )

    logger.debug("built %dx%d divided-difference table", n, n)
    return DividedDifferenceTable(nodes, values)


def newton_coefficients(points: Sequence[Point], strict: bool = False) -> list[float]:
    return build_divided_difference_table(points, strict=strict).coefficients.tolist()


# ===========================================================================
# Evaluators
# ===========================================================================

def _as_output(x: ArrayLike, result: FloatArray) -> Evaluated:
    """Scalar query in -> float out; array query in -> array out."""
    if np.ndim(x) == 0:
        return float(result)
    return result


def evaluate_newton(
    points: Sequence[Point],
    x: ArrayLike,
    table: Optional[DividedDifferenceTable] = None,
    strict: bool = False,
) -> Evaluated:
    """Evaluate the Newton form at *x* by nested products.

    P(x) = a_0 + a_1 (x - x_0) + a_2 (x - x_0)(x - x_1) + ...

    A prebuilt *table* is used as-is (and *points* ignored) so callers that
    evaluate many queries pay for the O(n²) construction once.
    """
    if table is None:
        table = build_divided_difference_table(points, strict=strict)
    xq = np.asarray(x, dtype=np.float64)
    n = len(table)
    if n == 0:
        return _as_output(x, np.zeros_like(xq))

    coef = table.values[0]
    nodes = table.nodes
    result = np.full_like(xq, coef[0])
    product = np.ones_like(xq)
    with np.errstate(invalid="ignore", over="ignore"):
        for i in range(1, n):
            product = product * (xq - nodes[i - 1])
            result = result + coef[i] * product
    return _as_output(x, result)


def evaluate_lagrange(points: Sequence[Point], x: ArrayLike) -> Evaluated:
    """Evaluate sum_i y_i L_i(x) with L_i(x) = prod_{j != i} (x - x_j) / (x_i - x_j)."""
    ordered = sort_points(points)
    xq = np.asarray(x, dtype=np.float64)
    result = np.zeros_like(xq)
    if not ordered:
        return _as_output(x, result)

    nodes = np.array([p.x for p in ordered], dtype=np.float64)
    ys = np.array([p.y for p in ordered], dtype=np.float64)
    n = len(nodes)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for i in range(n):
            basis = np.ones_like(xq)
            for j in range(n):
                if j != i:
                    basis = basis * (xq - nodes[j]) / (nodes[i] - nodes[j])
            result = result + ys[i] * basis
    return _as_output(x, result)


def evaluate_barycentric(points: Sequence[Point], x: ArrayLike) -> Evaluated:
    """Reference evaluation of the same interpolant via scipy's barycentric form."""
    ordered = sort_points(points)
    xq = np.asarray(x, dtype=np.float64)
    if not ordered:
        return _as_output(x, np.zeros_like(xq))
    nodes = np.array([p.x for p in ordered], dtype=np.float64)
    ys = np.array([p.y for p in ordered], dtype=np.float64)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        interp = BarycentricInterpolator(nodes, ys)
        result = np.asarray(interp(xq), dtype=np.float64)
    return _as_output(x, result)


# ===========================================================================
# Curve sampling
# ===========================================================================

def sample_curve(
    points: Sequence[Point],
    kind: Union[EvaluatorKind, str] = EvaluatorKind.NEWTON,
    x_min: float = -5.0,
    x_max: float = 5.0,
    count: int = 300,
) -> CurveSample:
    """Evaluate the interpolant at *count* evenly spaced x in [x_min, x_max].

    Both ends are included exactly.  The Newton table is built once per call,
    so the cost is O(n² + count·n).
    """
    if count < 2:
        raise ValueError(f"count must be >= 2, got {count}")
    if not (np.isfinite(x_min) and np.isfinite(x_max)):
        raise ValueError(f"sample range must be finite, got [{x_min}, {x_max}]")
    if x_min > x_max:
        raise ValueError(f"x_min ({x_min}) must be <= x_max ({x_max})")
    kind = EvaluatorKind(kind)

    if not points:
        empty = np.empty(0, dtype=np.float64)
        return CurveSample(empty, empty.copy())

    xs = np.linspace(float(x_min), float(x_max), int(count), dtype=np.float64)
    if kind is EvaluatorKind.NEWTON:
        table = build_divided_difference_table(points)
        ys = evaluate_newton(points, xs, table=table)
    elif kind is EvaluatorKind.LAGRANGE:
        ys = evaluate_lagrange(points, xs)
    else:
        ys = evaluate_barycentric(points, xs)

    logger.debug("sampled %s curve: %d nodes, %d samples", kind.value, len(points), count)
    return CurveSample(xs, np.asarray(ys, dtype=np.float64))


# ===========================================================================
# Cross-validation
# ===========================================================================

def evaluator_discrepancy(
    points: Sequence[Point],
    x_min: Optional[float] = None,
    x_max: Optional[float] = None,
    count: int = 200,
) -> float:
    """Max |Newton - Lagrange| over a sample grid (NaN if either is non-finite).

    The grid defaults to the span of the nodes.
    """
    if len(points) < 2:
        return 0.0
    xs = [p.x for p in points]
    lo = min(xs) if x_min is None else x_min
    hi = max(xs) if x_max is None else x_max
    newton = sample_curve(points, EvaluatorKind.NEWTON, lo, hi, count)
    lagrange = sample_curve(points, EvaluatorKind.LAGRANGE, lo, hi, count)
    with np.errstate(invalid="ignore"):
        diff = np.abs(newton.y - lagrange.y)
    return float(np.max(diff))


def forms_agree(
    points: Sequence[Point],
    tolerances: Tolerances = DEFAULT_TOLERANCES,
    x_min: Optional[float] = None,
    x_max: Optional[float] = None,
    count: int = 200,
) -> bool:
    return evaluator_discrepancy(points, x_min, x_max, count) <= tolerances.evaluator_agreement


def passes_through_points(
    points: Sequence[Point], tolerances: Tolerances = DEFAULT_TOLERANCES
) -> bool:
    """True when the Newton form reproduces every y_i within the exact-fit tolerance."""
    if not points:
        return True
    table = build_divided_difference_table(points)
    expected = np.array([p.y for p in sort_points(points)], dtype=np.float64)
    fitted = np.asarray(evaluate_newton(points, table.nodes, table=table), dtype=np.float64)
    with np.errstate(invalid="ignore"):
        return bool(np.all(np.abs(fitted - expected) <= tolerances.exact_fit))
