"""
Survey Points
=============
Defines the record type for a single surveyed point and the closed set of
point categories used across the table, the preview and the file formats.
"""
from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import StrEnum
from typing import Any, Dict

from surveyeditor.config import COORDINATE_DECIMALS


class PointType(StrEnum):
    BENCHMARK = "benchmark"
    CONTROL_POINT = "control_point"
    BOUNDARY_POINT = "boundary_point"


POINT_TYPE_PREFIX: Dict[PointType, str] = {
    PointType.BENCHMARK: "BP",
    PointType.CONTROL_POINT: "CP",
    PointType.BOUNDARY_POINT: "PT",
}

# Centralized labels and colors for the UI
POINT_TYPE_LABELS: Dict[PointType, str] = {
    PointType.BENCHMARK: "Benchmark",
    PointType.CONTROL_POINT: "Control Point",
    PointType.BOUNDARY_POINT: "Boundary Point",
}

POINT_TYPE_COLORS: Dict[PointType, str] = {
    PointType.BENCHMARK: "#1C7ED6",
    PointType.CONTROL_POINT: "#37B24D",
    PointType.BOUNDARY_POINT: "#F76707",
}

COORDINATE_FIELDS = ("x", "y", "z")


def format_point_name(point_type: PointType, index: int) -> str:
    """Build a point code like ``CP-0042`` from the type prefix and ordinal."""
    return f"{POINT_TYPE_PREFIX[PointType(point_type)]}-{index:04d}"


def round_coordinate(value: float) -> float:
    return round(float(value), COORDINATE_DECIMALS)


@dataclass(frozen=True)
class CoordinatePoint:
    """
    One surveyed point.
    Records are immutable; an edit produces an updated copy (dataclasses.replace).
    """
    id: str
    point_name: str
    x: float
    y: float
    z: float
    type: PointType
    visible: bool = True

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["type"] = str(self.type)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> CoordinatePoint:
        try:
            point_type = PointType(data["type"])
        except ValueError:
            raise ValueError(f"Unknown point type '{data['type']}'.") from None

        return cls(
            id=str(data["id"]),
            point_name=str(data["point_name"]),
            x=round_coordinate(data["x"]),
            y=round_coordinate(data["y"]),
            z=round_coordinate(data["z"]),
            type=point_type,
            visible=bool(data.get("visible", True)),
        )
