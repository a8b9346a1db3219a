from __future__ import annotations

import argparse
from typing import Callable, List, Optional

from .constants import TUBE_COUNT
from .engine import PuzzleEngine
from .logging_setup import setup_logging
from .state import Command, Select
from .tube import pretty_tubes


def settle(engine: PuzzleEngine, command: Command) -> List[str]:
    """Ticks once with `command`, then runs out any pour animation. Returns the sounds played."""
    engine.tick(command)
    sounds = engine.drain_sounds()
    while engine.is_transfering:
        engine.tick(None)
        sounds.extend(engine.drain_sounds())
    return sounds


def play(engine: PuzzleEngine, read_line: Callable[[str], str], write: Callable[[str], None]) -> None:
    """Terminal host loop: one tube number per line, 'r' restarts, 'q' quits."""
    while True:
        write(pretty_tubes(engine.tubes, engine.from_tube))
        if engine.is_clear:
            write("Congratulations!")
        try:
            text = read_line(f"Tube (0-{TUBE_COUNT - 1}), r = restart, q = quit: ").strip().lower()
        except EOFError:
            return
        if text in ("q", "quit", "exit"):
            return
        if text in ("r", "restart"):
            seed = engine.new_game()
            write(f"New game (seed {seed})")
            continue
        if text == "":
            continue
        try:
            index = int(text)
        except ValueError:
            write("Could not parse. Try again.")
            continue
        if not 0 <= index < TUBE_COUNT:
            write(f"No tube {index}. Try again.")
            continue
        for sound in settle(engine, Select(index)):
            write(f"*{sound}*")


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description='Water sort puzzle in the terminal')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for deal (default: current time)')
    parser.add_argument('--log-level', default=None, help='Logging level (DEBUG, INFO, WARNING, ...)')
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    engine = PuzzleEngine(seed=args.seed)
    print('Select a source tube, then a destination tube.')
    print(f'Seed: {engine.seed}')
    play(engine, input, print)


if __name__ == '__main__':
    main()
