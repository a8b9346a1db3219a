from __future__ import annotations

from typing import List, NamedTuple, Optional, Tuple

from .constants import MAX_PORTION, TRANSFERING_WAIT, TUBE_COUNT

SCREEN_WIDTH = 400
SCREEN_HEIGHT = 460
TUBE_PER_ROW = 5
PORTION_WIDTH = 40
PORTION_HEIGHT = 36

# Cycled by the "cleared" banner, one step every 3 frames.
BANNER_COLORS: Tuple[Tuple[int, int, int], ...] = (
    (255, 0, 0),
    (0, 255, 0),
    (0, 0, 255),
    (255, 255, 0),
    (0, 255, 255),
    (255, 0, 255),
)


class Rect(NamedTuple):
    x: int
    y: int
    width: int
    height: int

    def contains(self, px: int, py: int) -> bool:
        return self.x <= px < self.x + self.width and self.y <= py < self.y + self.height


def tube_rect(index: int) -> Rect:
    """Outline of tube `index`; tubes are laid out in rows of TUBE_PER_ROW."""
    column = index % TUBE_PER_ROW
    row = index // TUBE_PER_ROW
    width = PORTION_WIDTH + 2
    height = PORTION_HEIGHT * MAX_PORTION + 15
    return Rect(40 + 70 * column, 40 + 210 * row, width, height)


def portion_rect(index: int, level: int) -> Rect:
    """Slot `level` (0 = bottom) inside tube `index`."""
    rect = tube_rect(index)
    y = rect.y + 14 + (MAX_PORTION - level - 1) * PORTION_HEIGHT
    return Rect(rect.x + 1, y, PORTION_WIDTH, PORTION_HEIGHT)


def tube_rects() -> List[Rect]:
    return [tube_rect(i) for i in range(TUBE_COUNT)]


def hit_test(px: int, py: int) -> Optional[int]:
    """Maps a screen point to the tube under it, or None."""
    for index, rect in enumerate(tube_rects()):
        if rect.contains(px, py):
            return index
    return None


def banner_color(frame: int) -> Tuple[int, int, int]:
    return BANNER_COLORS[(frame // 3) % len(BANNER_COLORS)]


def pour_progress(wait: int) -> float:
    """Fraction of the poured run already drained from the source, from the remaining wait."""
    done = (TRANSFERING_WAIT + 1 - wait) / TRANSFERING_WAIT
    return max(0.0, min(1.0, done))
