from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from newton_visualizer.points import Point, sort_points


@dataclass(frozen=True, slots=True)
class PresetFunction:
    name: str
    description: str
    func: Callable[[float], float]
    x_min: float
    x_max: float
    count: int

    def __post_init__(self) -> None:
        if self.x_min >= self.x_max:
            raise ValueError(f"x_min ({self.x_min}) must be < x_max ({self.x_max})")
        if self.count < 2:
            raise ValueError(f"count must be >= 2, got {self.count}")

    def points(self) -> list[Point]:
        slug = self.name.lower().replace(" ", "-").replace("'", "")
        xs = np.linspace(self.x_min, self.x_max, self.count)
        return [Point(float(x), float(self.func(float(x))), f"preset-{slug}-{i}")
                for i, x in enumerate(xs)]


PRESET_FUNCTIONS: tuple[PresetFunction, ...] = (
    PresetFunction("Sine Wave", "f(x) = sin(x) from 0 to 2π", math.sin, 0.0, 2 * math.pi, 7),
    PresetFunction("Cosine Wave", "f(x) = cos(x) from 0 to 2π", math.cos, 0.0, 2 * math.pi, 7),
    PresetFunction("Exponential", "f(x) = e^x from -2 to 2", math.exp, -2.0, 2.0, 6),
    PresetFunction("Natural Logarithm", "f(x) = ln(x) from 0.5 to 3", math.log, 0.5, 3.0, 6),
    PresetFunction("Quadratic", "f(x) = x² from -3 to 3", lambda x: x * x, -3.0, 3.0, 7),
    PresetFunction("Cubic", "f(x) = x³ - 3x from -2 to 2",
                   lambda x: x * x * x - 3 * x, -2.0, 2.0, 7),
    PresetFunction("Runge's Phenomenon", "f(x) = 1/(1+25x²) from -1 to 1",
                   lambda x: 1 / (1 + 25 * x * x), -1.0, 1.0, 11),
    PresetFunction("Absolute Value", "f(x) = |x| from -3 to 3", abs, -3.0, 3.0, 7),
    PresetFunction("Simple Linear", "f(x) = 2x + 1 from -2 to 2",
                   lambda x: 2 * x + 1, -2.0, 2.0, 5),
)


def get_preset(name: str) -> PresetFunction:
    for preset in PRESET_FUNCTIONS:
        if preset.name == name:
            return preset
    raise KeyError(f"unknown preset {name!r}")


def random_points(
    count: int,
    x_min: float = -5.0,
    x_max: float = 5.0,
    rng: Optional[np.random.Generator] = None,
) -> list[Point]:
    """*count* points with x uniform in [x_min, x_max), y uniform in [-5, 5), sorted by x."""
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    if x_min >= x_max:
        raise ValueError(f"x_min ({x_min}) must be < x_max ({x_max})")
    rng = rng if rng is not None else np.random.default_rng()
    xs = rng.uniform(x_min, x_max, count)
    ys = rng.uniform(-5.0, 5.0, count)
    return sort_points(Point(float(x), float(y), f"random-{i}") for i, (x, y) in enumerate(zip(xs, ys)))
