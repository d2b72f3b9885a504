from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any, Sequence, Union

from newton_visualizer.points import Point

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class PointImportError(ValueError):
    """Imported data is not a flat list of {x, y, id} records."""


def points_to_json(points: Sequence[Point]) -> str:
    records = [{"x": p.x, "y": p.y, "id": p.id} for p in points]
    return json.dumps(records, indent=2)


def _coordinate(record: dict[str, Any], key: str, index: int) -> float:
    if key not in record:
        raise PointImportError(f"record {index} is missing {key!r}")
    value = record[key]
    # bool is an int subclass; true/false are not coordinates
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PointImportError(f"record {index}: {key!r} must be a number, got {value!r}")
    try:
        finite = math.isfinite(value)
    except OverflowError:
        finite = False
    if not finite:
        raise PointImportError(f"record {index}: {key!r} must be finite, got {value!r}")
    return float(value)


def _record_to_point(record: Any, index: int) -> Point:
    if not isinstance(record, dict):
        raise PointImportError(f"record {index} must be an object, got {type(record).__name__}")
    x = _coordinate(record, "x", index)
    y = _coordinate(record, "y", index)
    if "id" not in record:
        return Point(x, y)
    point_id = record["id"]
    if not isinstance(point_id, str):
        raise PointImportError(f"record {index}: 'id' must be a string, got {point_id!r}")
    return Point(x, y, point_id)


def points_from_json(text: str) -> list[Point]:
    try:
        data = json.loads(text)
    # JSONDecodeError, or ValueError for integer literals past the digit limit
    except ValueError as exc:
        raise PointImportError(f"not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise PointImportError(f"expected a JSON array of points, got {type(data).__name__}")
    return [_record_to_point(record, i) for i, record in enumerate(data)]


def save_points(path: PathLike, points: Sequence[Point]) -> None:
    Path(path).write_text(points_to_json(points), encoding="utf-8")
    logger.info("exported %d points to %s", len(points), path)


def load_points(path: PathLike) -> list[Point]:
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        logger.warning("rejected import from %s: %s", path, exc)
        raise PointImportError(f"not UTF-8 text: {exc}") from exc
    try:
        points = points_from_json(text)
    except PointImportError as exc:
        logger.warning("rejected import from %s: %s", path, exc)
        raise
    logger.info("imported %d points from %s", len(points), path)
    return points
