from PySide6.QtCore import Qt

from surveyeditor.app.ui.main_window import MainWindow
from surveyeditor.app.ui.panels.coordinate_table import COL_SELECT, COL_VISIBLE, CoordinateTablePanel
from surveyeditor.model.cell_state import CellMode
from surveyeditor.model.points import PointType


def test_rows_follow_store(store):
    panel = CoordinateTablePanel(store)
    assert panel.table.rowCount() == 20

    first = store.get("1")
    assert panel.cell("1", "point_name").label.text() == first.point_name
    assert panel.cell("1", "x").label.text() == f"{first.x:.3f}"
    assert panel.cell("1", "type").value() == str(first.type)


def test_cell_commit_updates_store(store):
    panel = CoordinateTablePanel(store)
    cell = panel.cell("2", "x")
    cell.begin_edit()
    cell.editor.setValue(45123.4567)
    cell.commit()

    assert store.get("2").x == 45123.457
    assert cell.mode == CellMode.VIEWING
    assert cell.label.text() == "45123.457"


def test_rejected_edit_restores_cell(store):
    panel = CoordinateTablePanel(store)
    messages = []
    panel.edit_rejected.connect(messages.append)
    original = store.get("1").point_name

    cell = panel.cell("1", "point_name")
    cell.begin_edit()
    cell.editor.setText("   ")
    cell.commit()

    assert messages
    assert store.get("1").point_name == original
    assert cell.label.text() == original


def test_type_filter_and_search(store):
    panel = CoordinateTablePanel(store)
    panel.type_checks["control_point"].setChecked(True)
    ids = panel.visible_point_ids()
    assert ids and all(store.get(i).type == PointType.CONTROL_POINT for i in ids)

    panel.type_checks["benchmark"].setChecked(True)
    assert panel.current_types() == ["benchmark", "control_point"]
    wanted = {PointType.BENCHMARK, PointType.CONTROL_POINT}
    assert panel.visible_point_ids() == [p.id for p in store.points if p.type in wanted]

    for chk in panel.type_checks.values():
        chk.setChecked(False)
    assert panel.current_types() is None
    assert panel.table.rowCount() == 20

    panel.search_edit.setText("-0007")
    assert panel.visible_point_ids() == ["7"]


def test_checkbox_columns(store):
    panel = CoordinateTablePanel(store)
    panel.table.item(0, COL_VISIBLE).setCheckState(Qt.CheckState.Unchecked)
    assert store.get("1").visible is False

    panel.table.item(1, COL_SELECT).setCheckState(Qt.CheckState.Checked)
    assert store.selected_ids == {"2"}
    assert panel.btn_delete.isEnabled()

    panel.btn_delete.click()
    assert len(store) == 19
    assert panel.table.rowCount() == 19


def test_select_all_then_delete(store):
    panel = CoordinateTablePanel(store)
    panel.search_edit.setText("-000")
    panel.chk_all.setChecked(True)
    assert store.selected_ids == {str(i) for i in range(1, 10)}

    panel.btn_delete.click()
    assert len(store) == 11
    assert not panel.chk_all.isChecked()


def test_generate_button(store):
    panel = CoordinateTablePanel(store)
    panel.count_spin.setValue(7)
    panel.btn_generate.click()
    assert len(store) == 7
    assert panel.table.rowCount() == 7


def test_main_window_wires_table_and_preview(store):
    store.update_field("1", "visible", False)
    window = MainWindow(store)
    assert len(store) == 20
    assert window.work_area.table_panel.table.rowCount() == 20
    assert sum(window.work_area.preview.counts().values()) == 19
