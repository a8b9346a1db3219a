from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .color import Color


@dataclass(frozen=True)
class Playing:
    """The engine accepts selection commands."""


@dataclass(frozen=True)
class Transfering:
    """A pour is being animated; selection commands are ignored until wait reaches zero."""
    color: Color
    transferred_count: int
    wait: int  # remaining ticks

    def with_wait(self, wait: int) -> 'Transfering':
        return Transfering(self.color, self.transferred_count, wait)


Phase = Union[Playing, Transfering]


@dataclass(frozen=True)
class Select:
    """Player picked the tube at `index` (source first, then destination)."""
    index: int


# None is the "nothing happened this frame" command.
Command = Optional[Select]
