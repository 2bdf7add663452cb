"""
Main window: File menu actions, status bar and the table/preview work area.
"""
from __future__ import annotations

import logging
import os

from PySide6.QtCore import QSettings, Slot
from PySide6.QtGui import QAction, QKeySequence
from PySide6.QtWidgets import QMainWindow, QFileDialog, QMessageBox, QStatusBar

from surveyeditor.app.application import VISIBLE_APP_NAME
from surveyeditor.app.state import PointStore
from surveyeditor.app.ui.workarea import WorkArea
from surveyeditor.config import (
    DEFAULT_POINT_COUNT, PROJECT_FILE_FILTER, SETTINGS_LAST_DIR, SIM_FILE_FILTER
)
from surveyeditor.model.io import IOManager, read_sim, write_sim

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, store: PointStore | None = None) -> None:
        super().__init__()
        self.setWindowTitle(VISIBLE_APP_NAME)
        self.resize(1400, 900)

        # Global store
        self.store = store if store is not None else PointStore()
        self.filepath: str | None = None

        self.work_area = WorkArea(self.store, self)
        self.setCentralWidget(self.work_area)

        self.setStatusBar(QStatusBar(self))
        self.work_area.table_panel.edit_rejected.connect(self._on_edit_rejected)

        self._build_menu()

        if len(self.store) == 0:
            self.store.generate(DEFAULT_POINT_COUNT)
        self.statusBar().showMessage(self.tr("{n} points loaded").format(n=len(self.store)), 5000)

    def _build_menu(self) -> None:
        menu = self.menuBar().addMenu(self.tr("&File"))

        act_open = QAction(self.tr("&Open Project..."), self)
        act_open.setShortcut(QKeySequence.StandardKey.Open)
        act_open.triggered.connect(self.open_project)
        menu.addAction(act_open)

        act_save = QAction(self.tr("&Save Project..."), self)
        act_save.setShortcut(QKeySequence.StandardKey.Save)
        act_save.triggered.connect(self.save_project)
        menu.addAction(act_save)

        menu.addSeparator()

        act_import = QAction(self.tr("&Import SIM..."), self)
        act_import.triggered.connect(self.import_sim)
        menu.addAction(act_import)

        act_export = QAction(self.tr("&Export SIM..."), self)
        act_export.triggered.connect(self.export_sim)
        menu.addAction(act_export)

        menu.addSeparator()

        act_exit = QAction(self.tr("E&xit"), self)
        act_exit.setShortcut(QKeySequence.StandardKey.Quit)
        act_exit.triggered.connect(self.close)
        menu.addAction(act_exit)

    # ---- helpers ----

    def _last_dir(self) -> str:
        return str(QSettings().value(SETTINGS_LAST_DIR, os.path.expanduser("~")))

    def _remember_dir(self, path: str) -> None:
        QSettings().setValue(SETTINGS_LAST_DIR, os.path.dirname(os.path.abspath(path)))

    def _error(self, title: str, e: Exception) -> None:
        QMessageBox.critical(self, title, str(e))
        self.statusBar().showMessage(f"{title}: {e}", 5000)

    # ---- actions ----

    @Slot()
    def open_project(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, self.tr("Open Project"), self._last_dir(), PROJECT_FILE_FILTER)
        if not path:
            return
        self._remember_dir(path)
        try:
            points = IOManager.load_project(path)
        except (OSError, ValueError, KeyError) as e:
            self._error(self.tr("Could not open project"), e)
            return
        self.store.set_points(points)
        self.filepath = path
        self.statusBar().showMessage(self.tr("Loaded {n} points from {p}").format(n=len(points), p=path), 5000)

    @Slot()
    def save_project(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, self.tr("Save Project"), self.filepath or self._last_dir(), PROJECT_FILE_FILTER
        )
        if not path:
            return
        if not path.endswith(".h5"):
            path += ".h5"
        self._remember_dir(path)
        try:
            IOManager.save_project(self.store.points, path, project_name=os.path.splitext(os.path.basename(path))[0])
        except (OSError, ValueError) as e:
            self._error(self.tr("Could not save project"), e)
            return
        self.filepath = path
        self.statusBar().showMessage(self.tr("Project saved to {p}").format(p=path), 5000)

    @Slot()
    def import_sim(self) -> None:
        path, _ = QFileDialog.getOpenFileName(self, self.tr("Import SIM"), self._last_dir(), SIM_FILE_FILTER)
        if not path:
            return
        self._remember_dir(path)
        try:
            records = read_sim(path)
        except (OSError, UnicodeDecodeError, ValueError) as e:
            logger.error(f"SIM import failed: {e}")
            self._error(self.tr("Could not read SIM file"), e)
            return
        added = self.store.import_records(records)
        QMessageBox.information(
            self, self.tr("Import SIM"), self.tr("Imported {n} points from the SIM file.").format(n=len(added))
        )

    @Slot()
    def export_sim(self) -> None:
        path, _ = QFileDialog.getSaveFileName(self, self.tr("Export SIM"), self._last_dir(), SIM_FILE_FILTER)
        if not path:
            return
        self._remember_dir(path)
        try:
            n = write_sim(path, self.store.points)
        except OSError as e:
            logger.error(f"SIM export failed: {e}")
            self._error(self.tr("Could not write SIM file"), e)
            return
        self.statusBar().showMessage(self.tr("Exported {n} points to {p}").format(n=n, p=path), 5000)

    @Slot(str)
    def _on_edit_rejected(self, message: str) -> None:
        QMessageBox.warning(self, self.tr("Invalid value"), message)
        self.statusBar().showMessage(message, 5000)
