from __future__ import annotations

import logging
from functools import partial

from PySide6.QtCore import Qt, Signal, Slot
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QGroupBox, QLabel, QSpinBox, QPushButton,
    QLineEdit, QCheckBox, QTableWidget, QTableWidgetItem, QHeaderView,
)

from surveyeditor.app.state import PointStore
from surveyeditor.app.ui.panels.base import BasePanel
from surveyeditor.app.ui.widgets.editable_cell import EditableCell
from surveyeditor.config import DEFAULT_POINT_COUNT, DISPLAY_PRECISION, MAX_POINT_COUNT
from surveyeditor.model.cell_state import CellConfig, CellKind, ChoiceOption
from surveyeditor.model.points import CoordinatePoint, POINT_TYPE_LABELS

logger = logging.getLogger(__name__)

COL_SELECT = 0
COL_VISIBLE = 6

# (field, header, config) for the editable columns 1..5
CELL_COLUMNS: list[tuple[str, str, CellConfig]] = [
    ("point_name", "Point", CellConfig(kind=CellKind.TEXT, placeholder="Point name")),
    ("type", "Type", CellConfig(
        kind=CellKind.CHOICE,
        options=[ChoiceOption(str(t), label) for t, label in POINT_TYPE_LABELS.items()],
    )),
    ("x", "X (m)", CellConfig(kind=CellKind.NUMERIC, precision=DISPLAY_PRECISION)),
    ("y", "Y (m)", CellConfig(kind=CellKind.NUMERIC, precision=DISPLAY_PRECISION)),
    ("z", "Z (m)", CellConfig(kind=CellKind.NUMERIC, precision=DISPLAY_PRECISION)),
]

HEADERS = ["", *[header for _, header, _ in CELL_COLUMNS], "Visible"]


def cell_value(point: CoordinatePoint, field: str):
    value = getattr(point, field)
    return str(value) if field == "type" else value


class CoordinateTablePanel(BasePanel):
    """
    Table of survey points.

    Top: generation controls and filters.
    Below: one EditableCell per editable column per row. Cell commits go to the
    store, which validates them; rejected edits are reported via `edit_rejected`.
    """
    edit_rejected = Signal(str)

    def __init__(self, store: PointStore, parent: QWidget | None = None) -> None:
        super().__init__(store, parent)

        self._cells: dict[str, dict[str, EditableCell]] = {}
        self._rows: dict[str, int] = {}

        root = QVBoxLayout(self)

        # generation row
        gen_group = QGroupBox(self.tr("Sample Data"), self)
        gen = QHBoxLayout(gen_group)
        gen.addWidget(QLabel(self.tr("Points:"), gen_group))
        self.count_spin = QSpinBox(gen_group)
        self.count_spin.setRange(0, MAX_POINT_COUNT)
        self.count_spin.setValue(DEFAULT_POINT_COUNT)
        gen.addWidget(self.count_spin)
        self.btn_generate = QPushButton(self.tr("Generate"), gen_group)
        self.btn_generate.clicked.connect(self._on_generate)
        gen.addWidget(self.btn_generate)
        gen.addStretch()
        root.addWidget(gen_group, 0)

        # filter row
        filt = QHBoxLayout()
        self.search_edit = QLineEdit(self)
        self.search_edit.setPlaceholderText(self.tr("Search point name..."))
        self.search_edit.setClearButtonEnabled(True)
        self.search_edit.textChanged.connect(lambda *_: self.refresh())
        filt.addWidget(self.search_edit, 1)

        # no type checked shows every type
        self.type_checks: dict[str, QCheckBox] = {}
        for t, label in POINT_TYPE_LABELS.items():
            chk = QCheckBox(self.tr(label), self)
            chk.toggled.connect(lambda *_: self.refresh())
            filt.addWidget(chk)
            self.type_checks[str(t)] = chk
        filt.addSpacing(12)

        self.chk_all = QCheckBox(self.tr("Select all"), self)
        self.chk_all.toggled.connect(self._on_select_all)
        filt.addWidget(self.chk_all)

        self.btn_delete = QPushButton(self.tr("Delete selected"), self)
        self.btn_delete.setEnabled(False)
        self.btn_delete.clicked.connect(self._on_delete_selected)
        filt.addWidget(self.btn_delete)
        root.addLayout(filt)

        # table
        self.table = QTableWidget(0, len(HEADERS), self)
        self.table.setHorizontalHeaderLabels([self.tr(h) for h in HEADERS])
        self.table.horizontalHeader().setSectionResizeMode(QHeaderView.ResizeMode.Stretch)
        self.table.horizontalHeader().setSectionResizeMode(COL_SELECT, QHeaderView.ResizeMode.ResizeToContents)
        self.table.horizontalHeader().setSectionResizeMode(COL_VISIBLE, QHeaderView.ResizeMode.ResizeToContents)
        self.table.verticalHeader().setVisible(False)
        self.table.verticalHeader().setDefaultSectionSize(32)
        self.table.setSelectionMode(QTableWidget.SelectionMode.NoSelection)
        self.table.itemChanged.connect(self._on_item_changed)
        root.addWidget(self.table, 1)

        self.summary = QLabel(self)
        root.addWidget(self.summary)

        # wiring
        self.store.points_changed.connect(lambda *_: self.refresh())
        self.store.point_changed.connect(self._refresh_row)
        self.store.selection_changed.connect(self._on_selection_changed)

        self.refresh()

    # ---- filters ----

    def current_types(self) -> list[str] | None:
        checked = [t for t, chk in self.type_checks.items() if chk.isChecked()]
        return checked or None

    def visible_point_ids(self) -> list[str]:
        return list(self._rows.keys())

    def cell(self, point_id: str, field: str) -> EditableCell:
        return self._cells[point_id][field]

    # ---- table building ----

    @Slot()
    def refresh(self) -> None:
        """Rebuild the rows from the store using the current filters."""
        points = self.store.filtered(self.search_edit.text(), self.current_types())
        selected = self.store.selected_ids

        self.table.setUpdatesEnabled(False)
        self.table.blockSignals(True)
        try:
            self.table.clearContents()
            self.table.setRowCount(len(points))
            self._cells.clear()
            self._rows.clear()

            for row, point in enumerate(points):
                self._rows[point.id] = row
                self.table.setItem(row, COL_SELECT, self._check_item(point.id, point.id in selected))

                cells: dict[str, EditableCell] = {}
                for col, (field, _, config) in enumerate(CELL_COLUMNS, start=1):
                    cell = EditableCell(
                        cell_value(point, field), config,
                        on_save=partial(self._on_cell_saved, point.id, field),
                    )
                    self.table.setCellWidget(row, col, cell)
                    cells[field] = cell
                self._cells[point.id] = cells

                self.table.setItem(row, COL_VISIBLE, self._check_item(point.id, point.visible))
        finally:
            self.table.blockSignals(False)
            self.table.setUpdatesEnabled(True)

        self._update_summary()

    @staticmethod
    def _check_item(point_id: str, checked: bool) -> QTableWidgetItem:
        item = QTableWidgetItem()
        item.setFlags(Qt.ItemFlag.ItemIsUserCheckable | Qt.ItemFlag.ItemIsEnabled)
        item.setCheckState(Qt.CheckState.Checked if checked else Qt.CheckState.Unchecked)
        item.setData(Qt.ItemDataRole.UserRole, point_id)
        return item

    def _update_summary(self) -> None:
        self.summary.setText(
            self.tr("{shown} of {total} points, {sel} selected").format(
                shown=len(self._rows), total=len(self.store), sel=len(self.store.selected_ids)
            )
        )

    @Slot(str)
    def _refresh_row(self, point_id: str) -> None:
        if point_id not in self._rows:
            return
        point = self.store.get(point_id)
        for field, cell in self._cells[point_id].items():
            cell.set_value(cell_value(point, field))

        item = self.table.item(self._rows[point_id], COL_VISIBLE)
        self.table.blockSignals(True)
        item.setCheckState(Qt.CheckState.Checked if point.visible else Qt.CheckState.Unchecked)
        self.table.blockSignals(False)

    # ---- edits ----

    def _on_cell_saved(self, point_id: str, field: str, value) -> None:
        try:
            self.store.update_field(point_id, field, value)
        except (KeyError, ValueError) as e:
            logger.warning(f"Rejected edit of '{field}' on point {point_id}: {e}")
            # put the committed value back into the cell
            self._refresh_row(point_id)
            self.edit_rejected.emit(str(e))

    @Slot(QTableWidgetItem)
    def _on_item_changed(self, item: QTableWidgetItem) -> None:
        point_id = item.data(Qt.ItemDataRole.UserRole)
        checked = item.checkState() == Qt.CheckState.Checked
        if item.column() == COL_SELECT:
            self.store.set_selected(point_id, checked)
        elif item.column() == COL_VISIBLE:
            self.store.update_field(point_id, "visible", checked)

    # ---- actions ----

    @Slot()
    def _on_generate(self) -> None:
        self.store.generate(self.count_spin.value())

    @Slot(bool)
    def _on_select_all(self, checked: bool) -> None:
        if checked:
            self.store.select_all(self.visible_point_ids())
        else:
            self.store.clear_selection()

    @Slot()
    def _on_delete_selected(self) -> None:
        self.store.delete_selected()

    @Slot(object)
    def _on_selection_changed(self, selected: set[str]) -> None:
        self.table.blockSignals(True)
        for point_id, row in self._rows.items():
            item = self.table.item(row, COL_SELECT)
            item.setCheckState(Qt.CheckState.Checked if point_id in selected else Qt.CheckState.Unchecked)
        self.table.blockSignals(False)

        self.btn_delete.setEnabled(bool(selected))
        if not selected and self.chk_all.isChecked():
            self.chk_all.blockSignals(True)
            self.chk_all.setChecked(False)
            self.chk_all.blockSignals(False)
        self._update_summary()
