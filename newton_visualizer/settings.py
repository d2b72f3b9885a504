from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from newton_visualizer.points import Point


@dataclass(frozen=True, slots=True)
class Tolerances:
    """Floating-point thresholds shared by the evaluators, diagnostics and formatters.

    exact_fit            max |P(x_i) - y_i| accepted as passing through a node
    evaluator_agreement  max |Newton - Lagrange| accepted as the same polynomial
    term_omission        coefficients below this magnitude are dropped from formulas
    near_duplicate_x     x-gap below which two nodes are flagged ill-conditioned
    """

    exact_fit: float = 1e-9
    evaluator_agreement: float = 1e-6
    term_omission: float = 1e-10
    near_duplicate_x: float = 0.01

    def __post_init__(self) -> None:
        for name in ("exact_fit", "evaluator_agreement", "term_omission", "near_duplicate_x"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise ValueError(f"{name} must be a positive finite number, got {value}")


DEFAULT_TOLERANCES = Tolerances()


@dataclass(frozen=True, slots=True)
class PlotSettings:
    x_min: float = -5.0
    x_max: float = 5.0
    y_min: float = -5.0
    y_max: float = 5.0
    curve_samples: int = 300
    coefficient_decimals: int = 4    # digits of a_k in the plain formula
    node_decimals: int = 2           # digits of x_k inside (x - x_k)
    animation_speed: float = 1.0
    latex_approx: bool = True        # use decimal approximations in LaTeX output
    latex_decimals: int = 4
    show_lagrange: bool = False

    def __post_init__(self) -> None:
        if self.x_min >= self.x_max:
            raise ValueError(f"x_min ({self.x_min}) must be < x_max ({self.x_max})")
        if self.y_min >= self.y_max:
            raise ValueError(f"y_min ({self.y_min}) must be < y_max ({self.y_max})")
        if self.curve_samples < 2:
            raise ValueError(f"curve_samples must be >= 2, got {self.curve_samples}")
        if not (0 <= self.coefficient_decimals <= 10):
            raise ValueError(
                f"coefficient_decimals must be in [0, 10], got {self.coefficient_decimals}"
            )
        if not (0 <= self.node_decimals <= 10):
            raise ValueError(f"node_decimals must be in [0, 10], got {self.node_decimals}")
        if not (0.5 <= self.animation_speed <= 3.0):
            raise ValueError(f"animation_speed must be in [0.5, 3.0], got {self.animation_speed}")
        if not (0 <= self.latex_decimals <= 10):
            raise ValueError(f"latex_decimals must be in [0, 10], got {self.latex_decimals}")

    @property
    def domain_width(self) -> float:
        return self.x_max - self.x_min

    @property
    def domain_height(self) -> float:
        return self.y_max - self.y_min

    def fit_to(self, points: Sequence[Point], padding: float = 0.2) -> PlotSettings:
        """Return a copy whose axis ranges frame *points*.

        Each axis is widened by ``padding`` times its extent, or by 2 units when
        every point shares the same coordinate.  An empty point set falls back to
        the default [-5, 5] square.
        """
        if not points:
            return replace(self, x_min=-5.0, x_max=5.0, y_min=-5.0, y_max=5.0)
        xs = [p.x for p in points]
        ys = [p.y for p in points]
        x_span = max(xs) - min(xs)
        y_span = max(ys) - min(ys)
        x_pad = x_span * padding if x_span > 0 else 2.0
        y_pad = y_span * padding if y_span > 0 else 2.0
        return replace(
            self,
            x_min=min(xs) - x_pad,
            x_max=max(xs) + x_pad,
            y_min=min(ys) - y_pad,
            y_max=max(ys) + y_pad,
        )
