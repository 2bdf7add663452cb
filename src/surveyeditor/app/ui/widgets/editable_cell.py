"""
Editable Cell Widget
====================
A table cell that shows its value as text and switches to an inline editor
on click. The transitions and the working value live in EditableCellState;
this widget only renders them and translates Qt events.

Usage:
    cell = EditableCell(12.3456, CellConfig(kind=CellKind.NUMERIC), on_save=store_value)
    table.setCellWidget(row, col, cell)
"""
from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QEvent, QObject, Qt, Signal, Slot
from PySide6.QtGui import QFocusEvent, QFont, QMouseEvent
from PySide6.QtWidgets import QLabel, QSizePolicy, QStackedWidget, QWidget

from surveyeditor.app.ui.widgets.cell_editors import create_editor
from surveyeditor.model.cell_state import (
    CellConfig, CellKey, CellKind, CellMode, CellValue, EditableCellState
)

logger = logging.getLogger(__name__)

_KEY_MAP = {
    Qt.Key.Key_Return: CellKey.CONFIRM,
    Qt.Key.Key_Enter: CellKey.CONFIRM,
    Qt.Key.Key_Escape: CellKey.CANCEL,
}


class ClickableLabel(QLabel):
    clicked = Signal()

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
        super().mousePressEvent(event)

    def mouseDoubleClickEvent(self, event: QMouseEvent) -> None:
        self.clicked.emit()
        super().mouseDoubleClickEvent(event)


class EditableCell(QStackedWidget):
    saved = Signal(object)

    def __init__(
        self,
        value: CellValue,
        config: Optional[CellConfig] = None,
        on_save: Optional[Callable[[CellValue], None]] = None,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.config = config or CellConfig()
        self.state = EditableCellState(value, self.config, on_save=self.saved.emit)
        if on_save is not None:
            self.saved.connect(on_save)

        self.label = ClickableLabel(self)
        self.label.setContentsMargins(8, 4, 8, 4)
        self.label.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        if self.config.kind == CellKind.NUMERIC:
            self.label.setFont(QFont("monospace"))
            self.label.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        if not self.config.read_only:
            self.label.setCursor(Qt.CursorShape.PointingHandCursor)
        self.label.clicked.connect(self.begin_edit)
        self.addWidget(self.label)

        # Created on first edit, most cells in a large table are never edited
        self.editor: QWidget | None = None

        self._refresh_label()

    # ---- public API ----

    @property
    def mode(self) -> CellMode:
        return self.state.mode

    def value(self) -> CellValue:
        return self.state.value

    def set_value(self, value: CellValue) -> None:
        """Push a new committed value from the owner."""
        self.state.sync(value)
        self._refresh_label()

    @Slot()
    def begin_edit(self) -> None:
        if not self.state.begin_edit():
            return
        editor = self._ensure_editor()
        editor.set_cell_value(self.state.buffer)
        self.setCurrentWidget(editor)
        editor.setFocus(Qt.FocusReason.MouseFocusReason)

    @Slot()
    def commit(self) -> None:
        if self.state.mode != CellMode.EDITING:
            return
        value = self.editor.cell_value()
        # an untouched editor keeps the buffer as it was
        if self.editor.is_edited() and (value is not None or self.config.kind != CellKind.CHOICE):
            self.state.set_buffer(value)
        logger.debug(f"Cell commit: {self.state.buffer!r}")
        self.state.commit()
        self._show_label()

    @Slot()
    def cancel(self) -> None:
        self.state.cancel()
        self._show_label()

    # ---- internals ----

    def _ensure_editor(self) -> QWidget:
        if self.editor is None:
            self.editor = create_editor(self.config.kind, self.config, self)
            self.editor.installEventFilter(self)
            self.addWidget(self.editor)
        return self.editor

    def _show_label(self) -> None:
        self._refresh_label()
        self.setCurrentWidget(self.label)

    def _refresh_label(self) -> None:
        text = self.state.display_text()
        if not text and self.config.placeholder:
            self.label.setText(self.config.placeholder)
            self.label.setEnabled(False)
        else:
            self.label.setText(text)
            self.label.setEnabled(True)

    def eventFilter(self, watched: QObject, event: QEvent) -> bool:
        if watched is not self.editor or self.state.mode != CellMode.EDITING:
            return super().eventFilter(watched, event)

        if event.type() == QEvent.Type.KeyPress:
            key = _KEY_MAP.get(event.key(), CellKey.OTHER)
            if key == CellKey.CONFIRM:
                self.commit()
                return True
            if key == CellKey.CANCEL:
                self.cancel()
                return True

        elif event.type() == QEvent.Type.FocusOut:
            # Focus moving into the combo box popup is not a commit
            reason = event.reason() if isinstance(event, QFocusEvent) else None
            if reason != Qt.FocusReason.PopupFocusReason:
                self.commit()

        return super().eventFilter(watched, event)
