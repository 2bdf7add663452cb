from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QWidget, QSplitter, QVBoxLayout

from surveyeditor.app.state import PointStore
from surveyeditor.app.ui.panels.coordinate_table import CoordinateTablePanel
from surveyeditor.app.ui.preview import PointPreview


class WorkArea(QWidget):
    """The main work area with a splitter between the coordinate table and the plan preview."""
    def __init__(self, store: PointStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)

        v = QVBoxLayout(self)
        v.setContentsMargins(0, 0, 0, 0)
        split = QSplitter(Qt.Orientation.Horizontal, self)
        split.setChildrenCollapsible(False)
        v.addWidget(split, 1)

        self.table_panel = CoordinateTablePanel(store, split)
        self.preview = PointPreview(store, split)

        split.addWidget(self.table_panel)
        split.addWidget(self.preview)
        split.setStretchFactor(0, 2)
        split.setStretchFactor(1, 1)
