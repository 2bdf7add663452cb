from __future__ import annotations

from PySide6.QtWidgets import QWidget

from surveyeditor.app.state import PointStore


class BasePanel(QWidget):
    """Base class for work area panels. Holds a reference to the point store."""
    def __init__(self, store: PointStore, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.store = store
