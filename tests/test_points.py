import pytest

from surveyeditor.model.points import CoordinatePoint, PointType, format_point_name, round_coordinate


def test_format_point_name():
    assert format_point_name(PointType.BENCHMARK, 1) == "BP-0001"
    assert format_point_name(PointType.CONTROL_POINT, 42) == "CP-0042"
    assert format_point_name("boundary_point", 999) == "PT-0999"


def test_round_coordinate():
    assert round_coordinate(45012.34567) == 45012.346
    assert round_coordinate(-12000) == -12000.0


def test_dict_conversion():
    p = CoordinatePoint("7", "CP-0007", 45070.1, -12000.25, 12.5, PointType.CONTROL_POINT, False)
    data = p.to_dict()
    assert data["type"] == "control_point"
    assert data["point_name"] == "CP-0007"
    assert CoordinatePoint.from_dict(data) == p


def test_from_dict_rejects_unknown_type():
    with pytest.raises(ValueError):
        CoordinatePoint.from_dict({"id": "1", "point_name": "X", "x": 0, "y": 0, "z": 0, "type": "manhole"})


def test_records_are_immutable():
    p = CoordinatePoint("1", "BP-0001", 0.0, 0.0, 0.0, PointType.BENCHMARK)
    with pytest.raises(AttributeError):
        p.x = 1.0
