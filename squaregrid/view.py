from __future__ import annotations
import logging
import math
from PyQt6.QtWidgets import QWidget
from PyQt6.QtCore import Qt, QRectF, pyqtSignal
from PyQt6.QtGui import QPainter, QImage, QColor, QPen, QMouseEvent
from .colors import BLACK, GRAY, Color, as_color
from .config import GRID_DEFAULTS
from .dispatcher import RenderDispatcher
from .grid import GridState

logger = logging.getLogger(__name__)

_FULL_REDRAW = "all"


def to_qcolor(color: Color) -> QColor:
    return QColor(*color.to_rgb8())


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


class SquareGridView(QWidget):
    """A grid of independently colored square cells.

    The cells are painted onto an off-screen QImage (the surface) that is
    blitted in paintEvent. All painting goes through a RenderDispatcher, so
    mutators may be called from worker threads; their draws are deferred to
    the GUI thread.
    """

    cell_clicked = pyqtSignal(int, int)   # row, column
    clear_requested = pyqtSignal()

    def __init__(self, rows: int = GRID_DEFAULTS.rows, columns: int = GRID_DEFAULTS.columns,
                 cell_size: int = GRID_DEFAULTS.cell_size,
                 default_color=None, grid_color=GRAY,
                 always_draw_grid: bool = False, automatic_redraw: bool = True,
                 parent=None):
        # validate before the widget exists
        state = GridState(rows, columns)
        super().__init__(parent)

        self._state = state
        self._state.set_default_color(as_color(default_color) or BLACK)
        self._state.set_grid_color(as_color(grid_color))
        self._state.set_always_draw_grid(always_draw_grid)
        self._cell_size = max(int(cell_size), GRID_DEFAULTS.min_cell_size)
        self._automatic_redraw = automatic_redraw

        self._dispatcher = RenderDispatcher(self)
        self._surface = self._new_surface(self.surface_width, self.surface_height)
        self.setFixedSize(self._surface.size())
        self.redraw()

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------
    @property
    def rows(self) -> int:
        return self._state.rows

    @property
    def columns(self) -> int:
        return self._state.columns

    @property
    def cell_size(self) -> int:
        return self._cell_size

    @property
    def surface_width(self) -> int:
        return self._state.columns * self._cell_size

    @property
    def surface_height(self) -> int:
        return self._state.rows * self._cell_size

    @property
    def dispatcher(self) -> RenderDispatcher:
        return self._dispatcher

    def pixel_to_column(self, x: float) -> int:
        """Column containing pixel x.

        Returns -1 for negative x and ``columns`` (one past the last column)
        for x at or beyond the right edge; treat both as "no cell".
        """
        return self._pixel_to_index(x, self.surface_width, self._state.columns)

    def pixel_to_row(self, y: float) -> int:
        """Row containing pixel y. Same sentinels as pixel_to_column."""
        return self._pixel_to_index(y, self.surface_height, self._state.rows)

    @staticmethod
    def _pixel_to_index(p: float, total: int, count: int) -> int:
        if p < 0:
            return -1
        if p >= total:
            return count
        if math.isnan(p):
            return 0
        cell = total / count
        return min(int(math.floor(p / cell)), count)

    def cell_rect(self, row: int, column: int) -> tuple[int, int, int, int]:
        """Returns (x, y, w, h) of the cell on the surface.

        Each edge is rounded on its own so rounding error never accumulates
        towards the far side of the grid.
        """
        row_height = self.surface_height / self._state.rows
        column_width = self.surface_width / self._state.columns
        y = _round_half_up(row_height * row)
        x = _round_half_up(column_width * column)
        h = max(1, _round_half_up(row_height * (row + 1)) - y)
        w = max(1, _round_half_up(column_width * (column + 1)) - x)
        return x, y, w, h

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    def get_default_color(self) -> Color:
        return self._state.default_color

    def set_default_color(self, color):
        color = as_color(color) or BLACK
        if color != self._state.default_color:
            self._state.set_default_color(color)
            self.redraw()

    def get_grid_color(self) -> Color | None:
        return self._state.grid_color

    def set_grid_color(self, color):
        color = as_color(color)
        if color is None or color != self._state.grid_color:
            self._state.set_grid_color(color)
            self.redraw()

    def get_always_draw_grid(self) -> bool:
        return self._state.always_draw_grid

    def set_always_draw_grid(self, value: bool):
        if self._state.always_draw_grid != bool(value):
            self._state.set_always_draw_grid(value)
            self.redraw()

    def get_automatic_redraw(self) -> bool:
        return self._automatic_redraw

    def set_automatic_redraw(self, value: bool):
        self._automatic_redraw = bool(value)
        if self._automatic_redraw:
            self.redraw()

    # ------------------------------------------------------------------
    # Cells
    # ------------------------------------------------------------------
    def get_cell_color(self, row: int, column: int) -> Color | None:
        return self._state.get_cell_color(row, column)

    def set_cell_color(self, row: int, column: int, color) -> bool:
        """Color one cell (None clears it). Out-of-range cells are ignored."""
        if not self._state.set_cell_color(row, column, as_color(color)):
            return False
        self._draw_cell(row, column)
        return True

    def cells(self) -> tuple[tuple[Color | None, ...], ...]:
        return self._state.cells()

    def fill(self, color=None):
        """Set every cell to ``color``; None clears the grid. One redraw."""
        color = as_color(color)
        for row in range(self._state.rows):
            for column in range(self._state.columns):
                self._state.set_cell_color(row, column, color)
        self.redraw()

    def clear_grid(self):
        self.fill(None)

    def redraw(self):
        self._dispatcher.submit(self._draw_all, key=_FULL_REDRAW, replaces_pending=True)

    # ------------------------------------------------------------------
    # Export / import
    # ------------------------------------------------------------------
    def export_grid_data(self) -> GridState:
        return self._state.copy()

    def import_grid_data(self, snapshot) -> bool:
        """Load ``snapshot`` (a GridState). Returns False and changes nothing
        for None or an empty grid."""
        if snapshot is None:
            return False
        if snapshot.rows <= 0 or snapshot.columns <= 0:
            return False

        if snapshot.rows == self._state.rows and snapshot.columns == self._state.columns:
            target = self._state
        else:
            target = GridState(snapshot.rows, snapshot.columns)
            logger.debug("Import resizes grid %dx%d -> %dx%d",
                         self._state.rows, self._state.columns, target.rows, target.columns)

        target.set_default_color(snapshot.default_color or BLACK)
        target.set_grid_color(snapshot.grid_color)
        target.set_always_draw_grid(snapshot.always_draw_grid)
        for row in range(target.rows):
            for column in range(target.columns):
                target.set_cell_color(row, column, snapshot.get_cell_color(row, column))
        self._state = target
        self.redraw()
        return True

    def snapshot(self) -> QImage:
        """Copy of the surface raster, for handing to an image encoder."""
        return self._surface.copy()

    # ------------------------------------------------------------------
    # Drawing (render thread only)
    # ------------------------------------------------------------------
    def _draw_cell(self, row: int, column: int):
        if not self._automatic_redraw:
            return
        self._dispatcher.submit(lambda: self._draw_square(row, column),
                                key=("cell", row, column))

    def _sync_surface(self):
        w, h = self.surface_width, self.surface_height
        if self._surface.width() != w or self._surface.height() != h:
            logger.debug("Resizing surface to %dx%d", w, h)
            self._surface = self._new_surface(w, h)
            self.setFixedSize(w, h)

    def _new_surface(self, w: int, h: int) -> QImage:
        surface = QImage(w, h, QImage.Format.Format_RGB32)
        surface.fill(to_qcolor(self._state.default_color))
        return surface

    def _draw_all(self):
        self._sync_surface()
        state = self._state
        logger.debug("Full redraw of %dx%d grid", state.rows, state.columns)
        painter = QPainter(self._surface)
        if not state.always_draw_grid:
            painter.fillRect(self._surface.rect(), to_qcolor(state.default_color))
        for row in range(state.rows):
            for column in range(state.columns):
                if state.always_draw_grid or state.get_cell_color(row, column) is not None:
                    self._paint_square(painter, row, column)
        painter.end()
        self.update()

    def _draw_square(self, row: int, column: int):
        # the state may have been replaced since this draw was queued
        if not self._state.in_bounds(row, column):
            return
        painter = QPainter(self._surface)
        self._paint_square(painter, row, column)
        painter.end()
        x, y, w, h = self.cell_rect(row, column)
        self.update(x, y, w, h)

    def _paint_square(self, painter: QPainter, row: int, column: int):
        state = self._state
        x, y, w, h = self.cell_rect(row, column)
        color = state.get_cell_color(row, column)
        fill = to_qcolor(color if color is not None else state.default_color)

        if state.grid_color is None or (color is None and not state.always_draw_grid):
            painter.fillRect(x, y, w, h, fill)
            return

        if w > 2 and h > 2:
            painter.fillRect(x + 1, y + 1, w - 2, h - 2, fill)
        # 1px stroke on the half-pixel boundary covers exactly the outer ring of pixels
        pen = QPen(to_qcolor(state.grid_color))
        pen.setWidth(1)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(QRectF(x + 0.5, y + 0.5, w - 1, h - 1))

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def paintEvent(self, event):
        painter = QPainter(self)
        painter.drawImage(0, 0, self._surface)
        painter.end()

    def mousePressEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.RightButton:
            self.clear_requested.emit()
            return
        if event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        row = self.pixel_to_row(pos.y())
        column = self.pixel_to_column(pos.x())
        if self._state.in_bounds(row, column):
            self.cell_clicked.emit(row, column)
