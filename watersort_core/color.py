from __future__ import annotations

from enum import IntEnum
from typing import Dict, Tuple

from .constants import COLOR_COUNT

RGB = Tuple[int, int, int]


class Color(IntEnum):
    """Liquid color of a single portion. Values run from 1 to COLOR_COUNT."""
    RED = 1
    GREEN = 2
    BLUE = 3
    YELLOW = 4
    CYAN = 5
    MAGENTA = 6
    SILVER = 7
    ORANGE = 8

    @property
    def rgb(self) -> RGB:
        return _RGB[self]

    @property
    def letter(self) -> str:
        """Single-letter tag used by the text renderer."""
        return _LETTERS[self]


_RGB: Dict[Color, RGB] = {
    Color.RED: (192, 0, 0),
    Color.GREEN: (0, 192, 0),
    Color.BLUE: (0, 0, 192),
    Color.YELLOW: (192, 192, 0),
    Color.CYAN: (0, 192, 192),
    Color.MAGENTA: (192, 0, 192),
    Color.SILVER: (192, 192, 192),
    Color.ORANGE: (255, 96, 0),
}

_LETTERS: Dict[Color, str] = {
    Color.RED: "R",
    Color.GREEN: "G",
    Color.BLUE: "B",
    Color.YELLOW: "Y",
    Color.CYAN: "C",
    Color.MAGENTA: "M",
    Color.SILVER: "S",
    Color.ORANGE: "O",
}

if len(Color) != COLOR_COUNT:
    raise RuntimeError(f"Color defines {len(Color)} members, expected {COLOR_COUNT}")
