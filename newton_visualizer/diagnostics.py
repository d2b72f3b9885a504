from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from newton_visualizer.points import Point
from newton_visualizer.settings import DEFAULT_TOLERANCES, Tolerances

logger = logging.getLogger(__name__)

DUPLICATE_X_WARNING = (
    "Duplicate x-values detected! Interpolation requires unique x-coordinates."
)
NEAR_DUPLICATE_X_WARNING = (
    "Some points are very close together. This may lead to numerical instability."
)


class DegenerateInputError(ValueError):
    """Raised in strict mode when two nodes share an x value."""


@dataclass(frozen=True, slots=True)
class DiagnosticReport:
    has_duplicate_x: bool
    has_near_duplicate_x: bool

    @property
    def warnings(self) -> tuple[str, ...]:
        messages: list[str] = []
        if self.has_duplicate_x:
            messages.append(DUPLICATE_X_WARNING)
        if self.has_near_duplicate_x:
            messages.append(NEAR_DUPLICATE_X_WARNING)
        return tuple(messages)

    @property
    def ok(self) -> bool:
        return not (self.has_duplicate_x or self.has_near_duplicate_x)


def has_duplicate_x(points: Sequence[Point]) -> bool:
    seen: set[float] = set()
    for p in points:
        if p.x in seen:
            return True
        seen.add(p.x)
    return False


def are_points_too_close(
    points: Sequence[Point], threshold: float = DEFAULT_TOLERANCES.near_duplicate_x
) -> bool:
    n = len(points)
    for i in range(n):
        for j in range(i + 1, n):
            if abs(points[i].x - points[j].x) < threshold:
                return True
    return False


def diagnose(points: Sequence[Point], tolerances: Tolerances = DEFAULT_TOLERANCES) -> DiagnosticReport:
    report = DiagnosticReport(
        has_duplicate_x=has_duplicate_x(points),
        has_near_duplicate_x=are_points_too_close(points, tolerances.near_duplicate_x),
    )
    for msg in report.warnings:
        logger.debug("%s (%d points)", msg, len(points))
    return report


def require_distinct_x(points: Sequence[Point]) -> None:
    seen: dict[float, Point] = {}
    for p in points:
        other = seen.get(p.x)
        if other is not None:
            logger.warning("duplicate x = %s rejected in strict mode", p.x)
            raise DegenerateInputError(
                f"points {other.id!r} and {p.id!r} share x = {p.x}; "
                "divided differences are undefined"
            )
        seen[p.x] = p
