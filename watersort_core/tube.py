from __future__ import annotations

from typing import List, Optional, Sequence

from .color import Color
from .constants import MAX_PORTION

# Bottom portion first, most recently poured portion last.
Tube = List[Color]


def is_empty(tube: Sequence[Color]) -> bool:
    return len(tube) == 0


def is_full(tube: Sequence[Color]) -> bool:
    return len(tube) == MAX_PORTION


def top(tube: Sequence[Color]) -> Optional[Color]:
    """Returns the topmost portion, or None for an empty tube."""
    return tube[-1] if tube else None


def is_sorted_tube(tube: Sequence[Color]) -> bool:
    """A tube is sorted when it is empty, or full with a single color."""
    if is_empty(tube):
        return True
    return is_full(tube) and all(portion == tube[0] for portion in tube)


def pretty_tubes(tubes: Sequence[Sequence[Color]], selected: Optional[int] = None) -> str:
    """Generates a human-readable picture of the tubes, top slot first."""
    lines: List[str] = []
    for level in range(MAX_PORTION - 1, -1, -1):
        row: List[str] = []
        for tube in tubes:
            row.append(f"|{tube[level].letter}|" if level < len(tube) else "| |")
        lines.append(" ".join(row))
    lines.append(" ".join("+-+" for _ in tubes))
    labels: List[str] = []
    for i in range(len(tubes)):
        label = f"{i}"
        labels.append(f"[{label}]" if i == selected else f" {label} ")
    lines.append(" ".join(labels))
    return "\n".join(lines)
