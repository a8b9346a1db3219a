from __future__ import annotations

import logging
import random
from typing import Callable, Iterable, List, Optional, Tuple

from .color import Color
from .constants import MAX_PORTION, SOUND_BRAVO, SOUND_POUR, TRANSFERING_WAIT, TUBE_COUNT
from .deal import deal_tubes, new_seed
from .moves import color_counts, is_clear, pour, transferable_from, transferable_to
from .state import Command, Phase, Playing, Select, Transfering
from .tube import Tube

logger = logging.getLogger(__name__)

RngFactory = Callable[[int], random.Random]


class PuzzleEngine:
    """
    Owns the board, the selected source tube, the pour animation and the win flag.

    The host calls tick() once per frame with at most one command, renders from the
    read-only accessors, then empties the sound queue with drain_sounds().
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        rng_factory: RngFactory = random.Random,
        tubes: Optional[List[Tube]] = None,
    ) -> None:
        self._rng_factory = rng_factory
        self.seed: int = 0
        self.rng: Optional[random.Random] = None
        self.frame = -1
        self.is_clear = False
        self.requested_sounds: List[str] = []
        self._tubes: List[Tube] = []
        self.from_tube: Optional[int] = None
        self.phase: Phase = Playing()
        if tubes is None:
            self.new_game(seed)
        else:
            # Prepared board: nothing is dealt, so no generator is drawn from yet.
            self.seed = int(seed or 0)
            self._reset(tubes)

    @classmethod
    def from_tubes(
        cls,
        tubes: Iterable[Iterable[int]],
        rng_factory: RngFactory = random.Random,
    ) -> 'PuzzleEngine':
        """Builds an engine on a prepared board instead of a dealt one."""
        board = [[Color(p) for p in tube] for tube in tubes]
        if len(board) != TUBE_COUNT:
            raise ValueError(f"expected {TUBE_COUNT} tubes, got {len(board)}")
        if any(len(tube) > MAX_PORTION for tube in board):
            raise ValueError(f"a tube holds more than {MAX_PORTION} portions")
        bad = {c.name: n for c, n in color_counts(board).items() if n != MAX_PORTION}
        if bad:
            raise ValueError(f"each color must appear {MAX_PORTION} times: {bad}")
        return cls(rng_factory=rng_factory, tubes=board)

    def new_game(self, seed: Optional[int] = None) -> int:
        """Deals a fresh board and resets all turn state. Returns the seed used."""
        if seed is None:
            seed = new_seed()
        self.seed = int(seed)
        self.rng = self._rng_factory(self.seed)
        logger.info("random seed = %d", self.seed)
        self._reset(deal_tubes(self.rng))
        return self.seed

    def _reset(self, tubes: List[Tube]) -> None:
        self.frame = -1
        self.is_clear = False
        self.requested_sounds = []
        self._tubes = tubes
        self.from_tube = None
        self.phase = Playing()

    # ---------- Render read contract ----------

    @property
    def tubes(self) -> Tuple[Tuple[Color, ...], ...]:
        return tuple(tuple(tube) for tube in self._tubes)

    @property
    def is_transfering(self) -> bool:
        return isinstance(self.phase, Transfering)

    @property
    def transfering_color(self) -> Optional[Color]:
        return self.phase.color if isinstance(self.phase, Transfering) else None

    @property
    def transferred_count(self) -> int:
        return self.phase.transferred_count if isinstance(self.phase, Transfering) else 0

    @property
    def transfering_wait(self) -> int:
        return self.phase.wait if isinstance(self.phase, Transfering) else 0

    def drain_sounds(self) -> List[str]:
        """Returns the queued sound requests and empties the queue."""
        sounds, self.requested_sounds = self.requested_sounds, []
        return sounds

    # ---------- Frame step ----------

    def tick(self, command: Command = None) -> None:
        """Advances exactly one frame."""
        self.frame += 1

        if isinstance(self.phase, Transfering):
            wait = self.phase.wait - 1
            if wait == 0:
                self.phase = Playing()
                self.from_tube = None
                self.check_clear()
            else:
                self.phase = self.phase.with_wait(wait)
            return

        if self.is_clear:
            return

        if command is None:
            return
        if not isinstance(command, Select):
            raise TypeError(f"unsupported command: {command!r}")

        index = command.index
        if not 0 <= index < TUBE_COUNT:
            raise IndexError(f"tube index out of range: {index}")

        if self.from_tube is None:
            if self.transferable_from(index):
                self.from_tube = index
                logger.debug("from: %d", index)
        elif self.from_tube == index:
            self.from_tube = None
        else:
            self.transfer(index)

    def transferable_from(self, index: int) -> bool:
        return transferable_from(self._tubes, index)

    def transferable_to(self, index: int) -> bool:
        if self.from_tube is None:
            return False
        return transferable_to(self._tubes, self.from_tube, index)

    def transfer(self, index: int) -> bool:
        """
        Pours from the selected source into `index` and starts the animation.
        Returns False, leaving every tube untouched, unless the engine is playing with a
        selected source and `index` is a different tube that can take the pour.
        """
        source = self.from_tube
        if not isinstance(self.phase, Playing) or self.is_clear:
            return False
        if source is None or source == index or not self.transferable_to(index):
            return False
        color, moved = pour(self._tubes, source, index)
        logger.debug("transfer %d -> %d: %d x %s", source, index, moved, color.name)
        self.requested_sounds.append(SOUND_POUR)
        self.phase = Transfering(color=color, transferred_count=moved, wait=TRANSFERING_WAIT)
        return True

    def check_clear(self) -> bool:
        """Sets the win flag (and requests the bravo sound) once every tube is sorted."""
        if is_clear(self._tubes):
            self.is_clear = True
            self.requested_sounds.append(SOUND_BRAVO)
            logger.info("board cleared at frame %d (seed=%d)", self.frame, self.seed)
        return self.is_clear
