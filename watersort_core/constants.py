from __future__ import annotations

FPS = 30
TUBE_COUNT = 10
MAX_PORTION = 4
COLOR_COUNT = TUBE_COUNT - 2
# Number of ticks a pour animation lasts (0.5 s at 30 FPS).
TRANSFERING_WAIT = 15

SOUND_POUR = "pour"
SOUND_BRAVO = "bravo"
