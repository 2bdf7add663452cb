"""
Point Store
===========
The owner of the authoritative point list. Table cells only hold a working
copy of a value; committed edits come here through update_field(), which
validates them, replaces the record and notifies the views.
"""
from __future__ import annotations

import dataclasses
import logging
from typing import Any, Iterable, Optional, TYPE_CHECKING

import numpy as np
from PySide6.QtCore import QObject, Signal

from surveyeditor.config import DEFAULT_POINT_COUNT
from surveyeditor.model.generator import generate_coordinate_data
from surveyeditor.model.points import COORDINATE_FIELDS, CoordinatePoint, PointType, round_coordinate

if TYPE_CHECKING:
    import numpy.typing as npt
    from surveyeditor.model.io import SimRecord

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("point_name", "type", "x", "y", "z", "visible")


class PointStore(QObject):
    """Central point store with signals for table/preview sync."""
    points_changed = Signal(object)
    point_changed = Signal(str)
    selection_changed = Signal(object)

    def __init__(self, points: Optional[Iterable[CoordinatePoint]] = None) -> None:
        super().__init__()
        self._points: list[CoordinatePoint] = list(points or [])
        self._index: dict[str, int] = {}
        self._selected: set[str] = set()
        self._reindex()

    # ---- access ----

    @property
    def points(self) -> list[CoordinatePoint]:
        return list(self._points)

    @property
    def selected_ids(self) -> set[str]:
        return set(self._selected)

    def __len__(self) -> int:
        return len(self._points)

    def get(self, point_id: str) -> CoordinatePoint:
        if point_id not in self._index:
            raise KeyError(f"Point with id '{point_id}' not found.")
        return self._points[self._index[point_id]]

    def _reindex(self) -> None:
        self._index = {p.id: i for i, p in enumerate(self._points)}

    # ---- bulk replacement ----

    def set_points(self, points: Iterable[CoordinatePoint]) -> None:
        self._points = list(points)
        self._reindex()
        self._selected.clear()
        logger.info(f"Point store now holds {len(self._points)} points.")
        self.points_changed.emit(self.points)
        self.selection_changed.emit(self.selected_ids)

    def generate(self, count: int = DEFAULT_POINT_COUNT, rng: Optional[np.random.Generator] = None) -> None:
        self.set_points(generate_coordinate_data(count, rng=rng))

    def import_records(self, records: Iterable[SimRecord]) -> list[CoordinatePoint]:
        """
        Append SIM records as visible boundary points with fresh ids.
        Unnamed records are called SIM-001, SIM-002, ... by their position in the file.
        """
        next_id = self._next_numeric_id()
        added = []
        for offset, rec in enumerate(records):
            added.append(CoordinatePoint(
                id=str(next_id + offset),
                point_name=rec.point_name.strip() or f"SIM-{offset + 1:03d}",
                x=round_coordinate(rec.x),
                y=round_coordinate(rec.y),
                z=round_coordinate(rec.z),
                type=PointType.BOUNDARY_POINT,
                visible=True,
            ))
        if added:
            self._points.extend(added)
            self._reindex()
            logger.info(f"Imported {len(added)} points.")
            self.points_changed.emit(self.points)
        return added

    def _next_numeric_id(self) -> int:
        numeric = [int(p.id) for p in self._points if p.id.isdigit()]
        return max(numeric, default=0) + 1

    # ---- single-field edits ----

    def update_field(self, point_id: str, field: str, value: Any) -> CoordinatePoint:
        """
        Validate and apply an edit coming from a table cell.

        Raises:
            KeyError: unknown point id.
            ValueError: unknown field or a value the field cannot hold.
        """
        point = self.get(point_id)
        coerced = self._coerce(field, value)
        if getattr(point, field) == coerced:
            return point

        updated = dataclasses.replace(point, **{field: coerced})
        self._points[self._index[point_id]] = updated
        logger.debug(f"Point {point_id}: {field} = {coerced!r}")
        self.point_changed.emit(point_id)
        return updated

    @staticmethod
    def _coerce(field: str, value: Any) -> Any:
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Field '{field}' is not editable.")

        if field in COORDINATE_FIELDS:
            if isinstance(value, bool):
                raise ValueError(f"Invalid {field} coordinate: {value!r}")
            try:
                number = float(value)
            except (TypeError, ValueError):
                raise ValueError(f"Invalid {field} coordinate: {value!r}") from None
            if not np.isfinite(number):
                raise ValueError(f"Invalid {field} coordinate: {value!r}")
            return round_coordinate(number)

        if field == "point_name":
            name = str(value).strip()
            if not name:
                raise ValueError("Point name must not be empty.")
            return name

        if field == "type":
            try:
                return PointType(value)
            except ValueError:
                raise ValueError(f"Unknown point type '{value}'.") from None

        return bool(value)

    # ---- filtering ----

    def filtered(self, search: str = "", types: Optional[Iterable[PointType | str]] = None) -> list[CoordinatePoint]:
        needle = search.strip().lower()
        type_set = {PointType(t) for t in types} if types else None
        return [
            p for p in self._points
            if (not needle or needle in p.point_name.lower())
            and (type_set is None or p.type in type_set)
        ]

    # ---- selection ----

    def set_selected(self, point_id: str, selected: bool) -> None:
        self.get(point_id)
        if selected:
            self._selected.add(point_id)
        else:
            self._selected.discard(point_id)
        self.selection_changed.emit(self.selected_ids)

    def select_all(self, point_ids: Iterable[str]) -> None:
        self._selected = {pid for pid in point_ids if pid in self._index}
        self.selection_changed.emit(self.selected_ids)

    def clear_selection(self) -> None:
        self._selected.clear()
        self.selection_changed.emit(self.selected_ids)

    def delete_selected(self) -> int:
        if not self._selected:
            return 0
        before = len(self._points)
        self._points = [p for p in self._points if p.id not in self._selected]
        self._reindex()
        self._selected.clear()
        removed = before - len(self._points)
        logger.info(f"Deleted {removed} points.")
        self.points_changed.emit(self.points)
        self.selection_changed.emit(self.selected_ids)
        return removed

    # ---- preview ----

    def visible_arrays(self) -> tuple[npt.NDArray[np.float64], list[PointType]]:
        """XY of visible points as an (N, 2) array, plus their types in the same order."""
        visible = [p for p in self._points if p.visible]
        xy = np.array([[p.x, p.y] for p in visible], dtype=np.float64).reshape(-1, 2)
        return xy, [p.type for p in visible]
