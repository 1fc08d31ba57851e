from dataclasses import dataclass


@dataclass(frozen=True)
class GridDefaults:
    rows: int = 50
    columns: int = 50
    cell_size: int = 10
    min_cell_size: int = 5   # smaller cells leave no room for the border


@dataclass(frozen=True)
class DemoConfig:
    window_title: str = "SquareGrid Demo"
    rows: int = 15
    columns: int = 15
    cell_size: int = 20
    always_draw_grid: bool = True
    hint: str = "Left click: colour a cell   Right click: reset the grid"


GRID_DEFAULTS = GridDefaults()
DEMO_CONFIG = DemoConfig()
