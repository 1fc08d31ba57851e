from __future__ import annotations
from .colors import BLACK, GRAY, Color


class InvalidDimensions(ValueError):
    pass


class GridState:
    """Cell colors and grid-level settings. No rendering knowledge.

    A cell holding None is drawn with the default color.
    """

    def __init__(self, rows: int, columns: int):
        if rows <= 0 or columns <= 0:
            raise InvalidDimensions(
                f"rows and columns must be positive, got {rows}x{columns}")
        self._rows = rows
        self._columns = columns
        self._cells: list[list[Color | None]] = [[None] * columns for _ in range(rows)]
        self.default_color: Color = BLACK
        self.grid_color: Color | None = GRAY
        self.always_draw_grid: bool = False

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    def in_bounds(self, row: int, column: int) -> bool:
        return 0 <= row < self._rows and 0 <= column < self._columns

    def set_cell_color(self, row: int, column: int, color: Color | None) -> bool:
        """Returns False (and changes nothing) when (row, column) is outside the grid."""
        if not self.in_bounds(row, column):
            return False
        self._cells[row][column] = color
        return True

    def get_cell_color(self, row: int, column: int) -> Color | None:
        if not self.in_bounds(row, column):
            return None
        return self._cells[row][column]

    def set_default_color(self, color: Color | None):
        # the default color is never absent; None falls back to black
        self.default_color = color if color is not None else BLACK

    def set_grid_color(self, color: Color | None):
        self.grid_color = color

    def set_always_draw_grid(self, value: bool):
        self.always_draw_grid = bool(value)

    def cells(self) -> tuple[tuple[Color | None, ...], ...]:
        # Colors are immutable, so a tuple copy is fully detached from the live rows.
        return tuple(tuple(row) for row in self._cells)

    def copy(self) -> GridState:
        other = GridState(self._rows, self._columns)
        other.default_color = self.default_color
        other.grid_color = self.grid_color
        other.always_draw_grid = self.always_draw_grid
        other._cells = [list(row) for row in self._cells]
        return other

    def __eq__(self, other):
        if not isinstance(other, GridState):
            return NotImplemented
        return (
            self._rows == other._rows
            and self._columns == other._columns
            and self.default_color == other.default_color
            and self.grid_color == other.grid_color
            and self.always_draw_grid == other.always_draw_grid
            and self._cells == other._cells
        )

    def __repr__(self):
        return f"GridState(rows={self._rows}, columns={self._columns})"
