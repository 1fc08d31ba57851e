from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, float(value)))


@dataclass(frozen=True)
class Color:
    """Plain RGB color, each channel in [0.0, 1.0]."""

    red: float = 0.0
    green: float = 0.0
    blue: float = 0.0

    def __post_init__(self):
        object.__setattr__(self, "red", _clamp(self.red))
        object.__setattr__(self, "green", _clamp(self.green))
        object.__setattr__(self, "blue", _clamp(self.blue))

    @classmethod
    def from_rgb(cls, red: float, green: float, blue: float) -> Color:
        """Out-of-range channels are clamped, not rejected."""
        return cls(red, green, blue)

    def to_rgb8(self) -> tuple[int, int, int]:
        return (round(self.red * 255), round(self.green * 255), round(self.blue * 255))


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
GRAY = Color(0.5, 0.5, 0.5)
RED = Color(1.0, 0.0, 0.0)


def as_color(value: Color | Sequence[float] | None) -> Color | None:
    """Coerce None, a Color or an (r, g, b) sequence into Color | None."""
    if value is None or isinstance(value, Color):
        return value
    red, green, blue = value
    return Color.from_rgb(red, green, blue)
