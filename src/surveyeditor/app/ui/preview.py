from __future__ import annotations

import logging

import numpy as np
import pyqtgraph as pg
from PySide6.QtCore import Slot
from PySide6.QtWidgets import QWidget, QVBoxLayout

from surveyeditor.app.state import PointStore
from surveyeditor.model.points import POINT_TYPE_COLORS, POINT_TYPE_LABELS, PointType

logger = logging.getLogger(__name__)


class PointPreview(QWidget):
    """
    pyqtgraph plan view of the visible survey points:
      - one scatter series per point type (legend),
      - locked 1:1 aspect so the grid is not distorted,
      - redrawn whenever the store reports a change.
    """
    def __init__(self, store: PointStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self.plot_widget = pg.PlotWidget()
        self.plot_widget.setBackground('w')
        self.plot_widget.showGrid(x=True, y=True, alpha=0.3)
        self.plot_widget.setAspectLocked(True)
        self.plot_widget.setLabel('bottom', 'X [m]', color='black')
        self.plot_widget.setLabel('left', 'Y [m]', color='black')
        for axis in ('bottom', 'left'):
            self.plot_widget.getAxis(axis).setPen('k')
            self.plot_widget.getAxis(axis).setTextPen('k')
        self.plot_widget.addLegend(offset=(10, 10))
        layout.addWidget(self.plot_widget)

        self._series: dict[PointType, pg.ScatterPlotItem] = {}
        for point_type in PointType:
            color = POINT_TYPE_COLORS[point_type]
            item = pg.ScatterPlotItem(
                size=6, pen=None, brush=pg.mkBrush(color), name=POINT_TYPE_LABELS[point_type]
            )
            self.plot_widget.addItem(item)
            self._series[point_type] = item

        self.store.points_changed.connect(lambda *_: self.redraw())
        self.store.point_changed.connect(lambda *_: self.redraw())

        self.redraw()

    @Slot()
    def redraw(self) -> None:
        xy, types = self.store.visible_arrays()
        type_arr = np.array([str(t) for t in types], dtype=str)
        for point_type, item in self._series.items():
            pts = xy[type_arr == str(point_type)]
            item.setData(x=pts[:, 0], y=pts[:, 1])
        logger.debug(f"Preview redrawn with {len(xy)} visible points.")

    def counts(self) -> dict[PointType, int]:
        """Number of plotted points per type."""
        return {t: len(item.data) for t, item in self._series.items()}
