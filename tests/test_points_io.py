import json

import pytest

from newton_visualizer.points import Point
from newton_visualizer.points_io import (
    PointImportError,
    load_points,
    points_from_json,
    points_to_json,
    save_points,
)


def test_export_format(collinear_points):
    records = json.loads(points_to_json(collinear_points))
    assert records[0] == {"x": 0.0, "y": 1.0, "id": "line-0"}
    assert len(records) == 3


def test_save_and_load(tmp_path, quadratic_points):
    path = tmp_path / "points.json"
    save_points(path, quadratic_points)
    assert load_points(path) == quadratic_points
    assert load_points(str(path)) == quadratic_points


def test_missing_id_is_generated():
    points = points_from_json('[{"x": 1, "y": 2}]')
    assert points[0].x == 1.0
    assert points[0].id.startswith("point-")


def test_integers_become_floats():
    (p,) = points_from_json('[{"x": 1, "y": -2, "id": "k"}]')
    assert p == Point(1.0, -2.0, "k")
    assert isinstance(p.y, float)


def test_empty_list():
    assert points_from_json("[]") == []


@pytest.mark.parametrize(
    "text, match",
    [
        ("{not json", "not valid JSON"),
        ('{"x": 1, "y": 2}', "JSON array"),
        ("[1, 2]", "must be an object"),
        ('[{"y": 2}]', "missing 'x'"),
        ('[{"x": 2}]', "missing 'y'"),
        ('[{"x": "1", "y": 2}]', "must be a number"),
        ('[{"x": true, "y": 2}]', "must be a number"),
        ('[{"x": 1, "y": NaN}]', "must be finite"),
        ('[{"x": Infinity, "y": 0}]', "must be finite"),
        ('[{"x": 1, "y": 2, "id": 7}]', "'id' must be a string"),
        ('[{"x": 1' + "0" * 400 + ', "y": 0}]', "must be finite"),
    ],
)
def test_rejected_input(text, match):
    with pytest.raises(PointImportError, match=match):
        points_from_json(text)


def test_load_rejects_bad_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"points": []}', encoding="utf-8")
    with pytest.raises(PointImportError):
        load_points(path)


def test_import_error_is_a_value_error():
    assert issubclass(PointImportError, ValueError)


def test_load_rejects_non_utf8_file(tmp_path):
    path = tmp_path / "latin1.json"
    path.write_bytes(b'[{"x": 1, "y": 2, "id": "caf\xe9\xff"}]')
    with pytest.raises(PointImportError, match="not UTF-8"):
        load_points(path)
