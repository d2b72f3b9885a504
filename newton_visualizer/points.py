from __future__ import annotations

import math
import uuid
from dataclasses import dataclass, field
from typing import Iterable, Sequence


def _new_id() -> str:
    return f"point-{uuid.uuid4().hex}"


@dataclass(frozen=True, slots=True)
class Point:
    x: float
    y: float
    id: str = field(default_factory=_new_id)


def make_points(pairs: Iterable[tuple[float, float]], prefix: str = "point") -> list[Point]:
    """Wrap raw (x, y) pairs as Points with sequential ids ``{prefix}-{i}``."""
    return [Point(float(x), float(y), f"{prefix}-{i}") for i, (x, y) in enumerate(pairs)]


def sort_points(points: Iterable[Point]) -> list[Point]:
    """Return a new list ordered by x; points with equal x keep their input order."""
    return sorted(points, key=lambda p: p.x)


def visible_count(n: int, progress: float) -> int:
    p = min(1.0, max(0.0, float(progress)))
    return min(n, math.ceil(n * p))


def visible_points(points: Sequence[Point], progress: float) -> list[Point]:
    """First ``ceil(n * progress)`` points in x order, *progress* clamped to [0, 1].

    Drives the progressive reveal: the caller owns the clock and simply passes
    the current fraction.
    """
    ordered = sort_points(points)
    return ordered[: visible_count(len(ordered), progress)]
