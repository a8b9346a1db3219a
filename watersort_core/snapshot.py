from __future__ import annotations

from typing import Any, Dict

from .constants import TRANSFERING_WAIT
from .engine import PuzzleEngine
from .layout import banner_color, pour_progress


def engine_to_json(engine: PuzzleEngine) -> Dict[str, Any]:
    """Everything a renderer reads for one frame, as plain JSON types."""
    transfer = None
    if engine.is_transfering:
        color = engine.transfering_color
        transfer = {
            "color": int(color) if color is not None else None,
            "rgb": list(color.rgb) if color is not None else None,
            "count": int(engine.transferred_count),
            "wait": int(engine.transfering_wait),
            "total": TRANSFERING_WAIT,
            "progress": pour_progress(engine.transfering_wait),
        }
    return {
        "tubes": [[int(p) for p in tube] for tube in engine.tubes],
        "fromTube": engine.from_tube,
        "transfer": transfer,
        "isClear": bool(engine.is_clear),
        "bannerRgb": list(banner_color(engine.frame)) if engine.is_clear else None,
        "frame": int(engine.frame),
        "seed": int(engine.seed),
    }
