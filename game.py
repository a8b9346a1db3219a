from __future__ import annotations

# Facade module that re-exports the water sort core.
# Hosts and tests import from here; single-responsibility modules live under watersort_core/*.

from watersort_core.constants import (  # noqa: F401
    FPS,
    TUBE_COUNT,
    MAX_PORTION,
    COLOR_COUNT,
    TRANSFERING_WAIT,
    SOUND_POUR,
    SOUND_BRAVO,
)
from watersort_core.color import Color  # noqa: F401
from watersort_core.tube import Tube, is_empty, is_full, top, is_sorted_tube, pretty_tubes  # noqa: F401
from watersort_core.state import Command, Phase, Playing, Select, Transfering  # noqa: F401
from watersort_core.deal import deal_tubes, new_seed  # noqa: F401
from watersort_core.moves import (  # noqa: F401
    transferable_from,
    transferable_to,
    pour,
    is_clear,
    color_counts,
)
from watersort_core.engine import PuzzleEngine  # noqa: F401
from watersort_core.layout import (  # noqa: F401
    SCREEN_WIDTH,
    SCREEN_HEIGHT,
    Rect,
    tube_rect,
    portion_rect,
    tube_rects,
    hit_test,
    banner_color,
    pour_progress,
)
from watersort_core.snapshot import engine_to_json  # noqa: F401


def main() -> None:
    # CLI driver delegated to watersort_core.cli
    from watersort_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
