from __future__ import annotations

from collections import Counter
from typing import Dict, List, Sequence, Tuple

from .color import Color
from .constants import MAX_PORTION
from .tube import Tube, is_empty, is_full, is_sorted_tube, top


def transferable_from(tubes: Sequence[Tube], index: int) -> bool:
    """A tube can be a pour source only when it holds at least one portion."""
    return not is_empty(tubes[index])


def transferable_to(tubes: Sequence[Tube], source: int, index: int) -> bool:
    """Checks whether the top run of `source` may be poured into tube `index`."""
    dest = tubes[index]
    if is_empty(dest):
        return True
    return not is_full(dest) and top(dest) == top(tubes[source])


def pour(tubes: List[Tube], source: int, dest: int) -> Tuple[Color, int]:
    """
    Moves the maximal run of the source's top color onto `dest`, bounded by the
    space left in `dest`. Returns the poured color and the number of portions moved.
    The caller is expected to have checked transferable_from / transferable_to.
    """
    src_tube = tubes[source]
    dst_tube = tubes[dest]
    color = src_tube[-1]  # captured once for the whole pour
    moved = 0
    while src_tube and src_tube[-1] == color and len(dst_tube) < MAX_PORTION:
        dst_tube.append(src_tube.pop())
        moved += 1
    return color, moved


def is_clear(tubes: Sequence[Tube]) -> bool:
    """True when every tube is empty or full of a single color."""
    return all(is_sorted_tube(tube) for tube in tubes)


def color_counts(tubes: Sequence[Tube]) -> Dict[Color, int]:
    """Counts the portions of each color across the whole board."""
    counts: Counter = Counter()
    for tube in tubes:
        counts.update(tube)
    return {color: counts.get(color, 0) for color in Color}
