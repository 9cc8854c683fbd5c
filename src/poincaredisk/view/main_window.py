"""
Main Application Window
=======================
The primary GUI container that holds the Menu Bar, Toolbar, the disk canvas
and the Status Bar.

Why is this file needed?
------------------------
1. Layout: It organizes the high-level visual structure of the application.
2. Routing: It connects global actions (New, Export, mode switches) to the
   editor controller.
"""
import logging

from PySide6.QtWidgets import QMainWindow, QFileDialog, QMessageBox, QLabel, QToolBar
from PySide6.QtGui import QAction, QActionGroup

from poincaredisk import config
from poincaredisk.controller.commands import ClearGraph
from poincaredisk.controller.interaction import EditorController, Mode
from poincaredisk.view.figure import save_figure
from poincaredisk.view.widgets.disk_canvas import DiskCanvas

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, controller: EditorController) -> None:
        super().__init__()
        self.controller: EditorController = controller
        self.graph = controller.graph

        self.resize(900, 900)

        # --- CENTRAL CANVAS ---
        self.canvas = DiskCanvas(controller)
        self.setCentralWidget(self.canvas)

        # --- STATUS BAR ---
        self.mode_label = QLabel(controller.mode_text)
        self.statusBar().addPermanentWidget(self.mode_label)

        # --- ACTIONS & MENUS ---
        self._create_actions()
        self._create_menus()
        self._create_toolbar()

        # --- SIGNAL CONNECTIONS ---
        self.controller.mode_changed.connect(self.on_mode_changed)
        self.controller.changed.connect(self.update_window_title)

        self.update_window_title()
        self.canvas.setFocus()

    def _create_actions(self) -> None:
        # File Actions
        self.act_new = QAction("New", self)
        self.act_new.triggered.connect(self.on_file_new)

        self.act_export = QAction("Export Image...", self)
        self.act_export.setShortcut("Ctrl+E")
        self.act_export.triggered.connect(self.on_export_image)

        self.act_exit = QAction("Exit", self)
        self.act_exit.triggered.connect(self.close)

        # Edit Actions
        self.act_delete = QAction("Delete Selection", self)
        self.act_delete.triggered.connect(self.controller.delete_selection)

        # Mode Actions (keys s/t/a are handled by the canvas itself)
        self.mode_group = QActionGroup(self)
        self.mode_actions: dict[Mode, QAction] = {}
        for mode in Mode:
            action = QAction(str(mode), self)
            action.setCheckable(True)
            action.setChecked(mode is self.controller.mode)
            action.triggered.connect(lambda _checked=False, m=mode: self.on_mode_requested(m))
            self.mode_group.addAction(action)
            self.mode_actions[mode] = action

    def _create_menus(self) -> None:
        menu_bar = self.menuBar()

        file_menu = menu_bar.addMenu("&File")
        file_menu.addAction(self.act_new)
        file_menu.addSeparator()
        file_menu.addAction(self.act_export)
        file_menu.addSeparator()
        file_menu.addAction(self.act_exit)

        edit_menu = menu_bar.addMenu("&Edit")
        edit_menu.addAction(self.act_delete)

        mode_menu = menu_bar.addMenu("&Mode")
        for action in self.mode_actions.values():
            mode_menu.addAction(action)

    def _create_toolbar(self) -> None:
        toolbar = QToolBar("Modes", self)
        toolbar.setMovable(False)
        for action in self.mode_actions.values():
            toolbar.addAction(action)
        self.addToolBar(toolbar)

    # --- HELPER METHODS ---
    def update_window_title(self) -> None:
        """Shows point and line counts in the window title."""
        self.setWindowTitle(
            f"{config.VISIBLE_APP_NAME} - [{len(self.graph)} points, {len(self.graph.lines)} lines]"
        )

    # --- SLOTS ---
    def on_mode_requested(self, mode: Mode) -> None:
        self.controller.set_mode(mode)
        self.canvas.setFocus()

    def on_mode_changed(self, text: str) -> None:
        self.mode_label.setText(text)
        action = self.mode_actions.get(self.controller.mode)
        if action is not None and not action.isChecked():
            action.setChecked(True)

    def on_file_new(self) -> None:
        if len(self.graph):
            reply = QMessageBox.question(
                self,
                "New Graph",
                "Discard all points and lines?",
                QMessageBox.Yes | QMessageBox.Cancel
            )
            if reply != QMessageBox.Yes:
                return

        self.controller.execute(ClearGraph())
        self.controller.reset()

    def on_export_image(self) -> None:
        fname, _ = QFileDialog.getSaveFileName(
            self, "Export Image", "", "PNG Images (*.png);;SVG Images (*.svg);;PDF Files (*.pdf)"
        )
        if not fname:
            return
        if "." not in fname.rsplit("/", 1)[-1]:
            fname += ".png"

        try:
            save_figure(self.graph, fname, selection=self.controller.selection)
            self.statusBar().showMessage(f"Exported to {fname}", 5000)
        except (OSError, ValueError) as e:
            logger.exception("Image export failed")
            QMessageBox.critical(self, "Error", f"Could not export the image:\n{e}")
