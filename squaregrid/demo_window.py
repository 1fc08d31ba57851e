from __future__ import annotations
import logging
import random
from PyQt6.QtWidgets import QMainWindow, QLabel, QFileDialog, QMessageBox, QLayout
from PyQt6.QtGui import QAction, QKeySequence
from .config import DEMO_CONFIG, DemoConfig
from .export import save_bitmap
from .view import SquareGridView

logger = logging.getLogger(__name__)


class DemoWindow(QMainWindow):
    def __init__(self, config: DemoConfig = DEMO_CONFIG):
        super().__init__()
        self.setWindowTitle(config.window_title)

        self._grid = SquareGridView(config.rows, config.columns, config.cell_size,
                                    always_draw_grid=config.always_draw_grid)
        self._grid.cell_clicked.connect(self._on_cell_clicked)
        self._grid.clear_requested.connect(self._grid.clear_grid)
        self.setCentralWidget(self._grid)

        self._build_menu()
        self.statusBar().addWidget(QLabel(config.hint))
        self.layout().setSizeConstraint(QLayout.SizeConstraint.SetFixedSize)

    @property
    def grid(self) -> SquareGridView:
        return self._grid

    def _build_menu(self):
        file_menu = self.menuBar().addMenu("&File")
        self._act_save = QAction("Save bitmap...", self, shortcut=QKeySequence.StandardKey.Save)
        self._act_save.triggered.connect(self._save_bitmap)
        self._act_clear = QAction("Clear", self)
        self._act_clear.triggered.connect(self._grid.clear_grid)
        file_menu.addAction(self._act_save)
        file_menu.addAction(self._act_clear)

    def _on_cell_clicked(self, row: int, column: int):
        self._grid.set_cell_color(row, column, (random.random(), random.random(), random.random()))

    def _save_bitmap(self):
        path, _ = QFileDialog.getSaveFileName(self, "Save bitmap", "", "PNG Files (*.png)")
        if not path:
            return
        if not path.lower().endswith(".png"):
            path += ".png"
        try:
            save_bitmap(self._grid, path)
        except OSError as e:
            logger.error("Saving bitmap failed: %s", e)
            QMessageBox.warning(self, "Save failed", str(e))
            return
        self.statusBar().showMessage("Saved", 2000)
