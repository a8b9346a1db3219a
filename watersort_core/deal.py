from __future__ import annotations

import random
import time
from typing import List

from .color import Color
from .constants import COLOR_COUNT, MAX_PORTION, TUBE_COUNT
from .tube import Tube


def new_seed() -> int:
    """Seed derived from the wall clock, in whole seconds."""
    return int(time.time())


def deal_tubes(rng: random.Random) -> List[Tube]:
    """Deals a shuffled board: COLOR_COUNT full tubes followed by the empty ones."""
    # Each color appears exactly MAX_PORTION times across the board.
    portions: List[Color] = [color for color in Color for _ in range(MAX_PORTION)]
    rng.shuffle(portions)
    tubes: List[Tube] = [
        portions[i * MAX_PORTION:(i + 1) * MAX_PORTION] for i in range(COLOR_COUNT)
    ]
    for _ in range(TUBE_COUNT - COLOR_COUNT):
        tubes.append([])
    return tubes
