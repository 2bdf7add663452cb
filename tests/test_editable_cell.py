import pytest
from PySide6.QtCore import QEvent, QPointF, Qt
from PySide6.QtGui import QFocusEvent, QKeyEvent, QMouseEvent
from PySide6.QtWidgets import QApplication, QComboBox, QDoubleSpinBox, QLineEdit

from surveyeditor.app.ui.widgets.cell_editors import create_editor, list_kinds
from surveyeditor.app.ui.widgets.editable_cell import EditableCell
from surveyeditor.model.cell_state import CellConfig, CellKind, CellMode, ChoiceOption

TYPE_CONFIG = CellConfig(
    kind=CellKind.CHOICE,
    options=[ChoiceOption("benchmark", "Benchmark"), ChoiceOption("control_point", "Control Point")],
)


def press(widget, key):
    QApplication.sendEvent(widget, QKeyEvent(QEvent.Type.KeyPress, key, Qt.KeyboardModifier.NoModifier))


def focus_out(widget, reason=Qt.FocusReason.OtherFocusReason):
    QApplication.sendEvent(widget, QFocusEvent(QEvent.Type.FocusOut, reason))


def click(widget, kind=QEvent.Type.MouseButtonPress, button=Qt.MouseButton.LeftButton):
    pos = QPointF(5, 5)
    QApplication.sendEvent(widget, QMouseEvent(kind, pos, pos, button, button, Qt.KeyboardModifier.NoModifier))


@pytest.fixture
def saves():
    return []


def test_every_kind_has_an_editor(qapp):
    assert set(list_kinds()) == {"text", "numeric", "choice"}
    assert isinstance(create_editor("text", CellConfig()), QLineEdit)
    assert isinstance(create_editor("numeric", CellConfig(kind=CellKind.NUMERIC)), QDoubleSpinBox)
    assert isinstance(create_editor("choice", TYPE_CONFIG), QComboBox)
    with pytest.raises(KeyError):
        create_editor("date", CellConfig())


def test_numeric_label_uses_precision(qapp):
    cell = EditableCell(3.14159, CellConfig(kind=CellKind.NUMERIC, precision=2))
    assert cell.label.text() == "3.14"
    assert cell.currentWidget() is cell.label


def test_click_enters_edit_mode(qapp):
    cell = EditableCell("BP-0001")
    cell.show()
    click(cell.label)
    assert cell.mode == CellMode.EDITING
    assert cell.currentWidget() is cell.editor
    assert cell.editor.text() == "BP-0001"


def test_escape_cancels_without_saving(qapp, saves):
    cell = EditableCell("BP-0001", on_save=saves.append)
    cell.begin_edit()
    cell.editor.setText("changed")
    press(cell.editor, Qt.Key.Key_Escape)

    assert cell.mode == CellMode.VIEWING
    assert cell.label.text() == "BP-0001"
    assert saves == []


def test_enter_commits_once(qapp, saves):
    cell = EditableCell("BP-0001", on_save=saves.append)
    cell.begin_edit()
    cell.editor.setText("BP-0100")
    press(cell.editor, Qt.Key.Key_Return)
    # the editor losing focus right after must not save a second time
    focus_out(cell.editor)

    assert saves == ["BP-0100"]
    assert cell.mode == CellMode.VIEWING


def test_focus_out_commits(qapp, saves):
    cell = EditableCell(1.0, CellConfig(kind=CellKind.NUMERIC), on_save=saves.append)
    cell.begin_edit()
    cell.editor.setValue(2.25)
    focus_out(cell.editor)
    assert saves == [2.25]


def test_popup_focus_loss_keeps_editing(qapp, saves):
    cell = EditableCell("benchmark", TYPE_CONFIG, on_save=saves.append)
    cell.begin_edit()
    focus_out(cell.editor, Qt.FocusReason.PopupFocusReason)
    assert cell.mode == CellMode.EDITING
    assert saves == []


def test_choice_commit_saves_option_value(qapp, saves):
    cell = EditableCell("benchmark", TYPE_CONFIG, on_save=saves.append)
    cell.begin_edit()
    assert cell.editor.currentData() == "benchmark"
    cell.editor.setCurrentIndex(cell.editor.findData("control_point"))
    cell.commit()
    assert saves == ["control_point"]


def test_numeric_editor_bounds_come_from_config(qapp):
    cell = EditableCell(5.0, CellConfig(kind=CellKind.NUMERIC, min_value=0.0, max_value=10.0))
    cell.begin_edit()
    assert cell.editor.minimum() == 0.0
    assert cell.editor.maximum() == 10.0


def test_read_only_cell_ignores_clicks(qapp, saves):
    cell = EditableCell("PT-0003", CellConfig(read_only=True), on_save=saves.append)
    cell.label.clicked.emit()
    cell.commit()
    assert cell.mode == CellMode.VIEWING
    assert cell.editor is None
    assert saves == []


def test_set_value_refreshes_label(qapp):
    cell = EditableCell(1.0, CellConfig(kind=CellKind.NUMERIC))
    cell.set_value(45000.5)
    assert cell.label.text() == "45000.500"
    assert cell.value() == 45000.5


def test_placeholder_shown_for_empty_value(qapp):
    cell = EditableCell("", CellConfig(placeholder="Point name"))
    assert cell.label.text() == "Point name"
    assert not cell.label.isEnabled()


def test_double_click_enters_edit_mode(qapp):
    cell = EditableCell(12.5, CellConfig(kind=CellKind.NUMERIC))
    cell.show()
    click(cell.label, QEvent.Type.MouseButtonDblClick)
    assert cell.mode == CellMode.EDITING
    assert cell.currentWidget() is cell.editor


def test_right_click_stays_in_viewing(qapp):
    cell = EditableCell("BP-0001")
    cell.show()
    click(cell.label, button=Qt.MouseButton.RightButton)
    assert cell.mode == CellMode.VIEWING
    assert cell.editor is None


def test_untouched_numeric_edit_keeps_out_of_range_value(qapp, saves):
    cell = EditableCell(150.0, CellConfig(kind=CellKind.NUMERIC, min_value=0.0, max_value=100.0), on_save=saves.append)
    cell.begin_edit()
    # the spin box can only show 100.0
    assert cell.editor.value() == 100.0
    focus_out(cell.editor)
    assert saves == [150.0]
    assert cell.value() == 150.0


def test_untouched_numeric_edit_keeps_empty_value(qapp, saves):
    cell = EditableCell(None, CellConfig(kind=CellKind.NUMERIC), on_save=saves.append)
    cell.begin_edit()
    press(cell.editor, Qt.Key.Key_Return)
    assert saves == [None]
    assert cell.value() is None


def test_typed_numeric_value_is_saved(qapp, saves):
    cell = EditableCell(None, CellConfig(kind=CellKind.NUMERIC), on_save=saves.append)
    cell.begin_edit()
    cell.editor.lineEdit().setText("7.5")
    cell.commit()
    assert saves == [7.5]
