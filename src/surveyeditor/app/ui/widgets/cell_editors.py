"""
Inline editors for the editable table cell, one per cell kind.

Editors are registered by their KIND so the cell can create the right input
widget for its configuration without knowing the concrete classes.
"""
from __future__ import annotations

from PySide6.QtWidgets import QComboBox, QDoubleSpinBox, QLineEdit, QWidget

from surveyeditor.config import EDIT_DECIMALS, EDIT_RANGE
from surveyeditor.model.cell_state import CellConfig, CellKind, CellValue

_REGISTRY: dict[str, type[QWidget]] = {}


def register_editor(cls: type[QWidget]) -> type[QWidget]:
    """Class decorator to register an editor by its KIND."""
    key = getattr(cls, "KIND", None)
    if not key:
        raise ValueError(f"{cls.__name__} must define KIND")
    _REGISTRY[str(key)] = cls
    return cls


def create_editor(kind: CellKind | str, config: CellConfig, parent: QWidget | None = None) -> QWidget:
    cls = _REGISTRY.get(str(kind))
    if not cls:
        raise KeyError(f"No editor registered for kind '{kind}'")
    return cls(config, parent)


def list_kinds() -> list[str]:
    return list(_REGISTRY.keys())


class _TracksEdits:
    """
    Mixin recording whether the value changed after set_cell_value().
    An untouched editor must not replace the working value with whatever
    its widget could represent (clamped range, 0.0 for None).
    """
    _edited = False

    def _mark_edited(self, *_) -> None:
        self._edited = True

    def is_edited(self) -> bool:
        return self._edited


@register_editor
class TextCellEditor(_TracksEdits, QLineEdit):
    KIND = CellKind.TEXT

    def __init__(self, config: CellConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setPlaceholderText(config.placeholder)
        self.setMinimumWidth(120)
        self.textChanged.connect(self._mark_edited)

    def cell_value(self) -> CellValue:
        return self.text()

    def set_cell_value(self, value: CellValue) -> None:
        self.setText("" if value is None else str(value))
        self.selectAll()
        self._edited = False


@register_editor
class NumericCellEditor(_TracksEdits, QDoubleSpinBox):
    """
    Spin box editor. Display precision is the label's business; while editing
    the value is shown with EDIT_DECIMALS so nothing is rounded away.
    """
    KIND = CellKind.NUMERIC

    def __init__(self, config: CellConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        lo = -EDIT_RANGE if config.min_value is None else config.min_value
        hi = EDIT_RANGE if config.max_value is None else config.max_value
        self.setDecimals(EDIT_DECIMALS)
        self.setRange(lo, hi)
        self.setSingleStep(0.001)
        self.setKeyboardTracking(False)
        self.setMinimumWidth(100)
        if config.placeholder:
            self.lineEdit().setPlaceholderText(config.placeholder)
        self.valueChanged.connect(self._mark_edited)
        self.lineEdit().textEdited.connect(self._mark_edited)

    def cell_value(self) -> CellValue:
        # Pick up text typed but not yet interpreted by the spin box
        self.interpretText()
        return self.value()

    def set_cell_value(self, value: CellValue) -> None:
        try:
            self.setValue(float(value))
        except (TypeError, ValueError):
            self.setValue(0.0)
        self.selectAll()
        self._edited = False


@register_editor
class ChoiceCellEditor(_TracksEdits, QComboBox):
    KIND = CellKind.CHOICE

    def __init__(self, config: CellConfig, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        for option in config.options:
            self.addItem(option.label, userData=option.value)
        if config.placeholder:
            self.setPlaceholderText(config.placeholder)
        self.setMinimumWidth(120)
        self.currentIndexChanged.connect(self._mark_edited)

    def cell_value(self) -> CellValue:
        return self.currentData()

    def set_cell_value(self, value: CellValue) -> None:
        self.setCurrentIndex(self.findData(None if value is None else str(value)))
        self._edited = False
