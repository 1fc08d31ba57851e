from .colors import BLACK, GRAY, RED, WHITE, Color, as_color
from .grid import GridState, InvalidDimensions
from .dispatcher import RenderDispatcher
from .view import SquareGridView
from .export import qimage_to_pil, save_bitmap

__all__ = [
    "BLACK", "GRAY", "RED", "WHITE", "Color", "as_color",
    "GridState", "InvalidDimensions",
    "RenderDispatcher", "SquareGridView",
    "qimage_to_pil", "save_bitmap",
]
