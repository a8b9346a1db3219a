from __future__ import annotations

import logging
import os
from typing import Optional, Union

_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}


def parse_level(s: Optional[str]) -> Optional[int]:
    if not s:
        return None
    return _LEVELS.get(str(s).strip().upper())


def setup_logging(level: Union[str, int, None] = None) -> None:
    """Configure python logging once.

    Priority (highest first):
    - env WATERSORT_LOG_LEVEL
    - `level` argument
    - default: INFO
    """
    root = logging.getLogger()
    if root.handlers:
        return

    resolved = logging.INFO
    if isinstance(level, int):
        resolved = level
    elif parse_level(level) is not None:
        resolved = parse_level(level)  # type: ignore[assignment]
    env_level = parse_level(os.environ.get("WATERSORT_LOG_LEVEL"))
    if env_level is not None:
        resolved = env_level

    logging.basicConfig(
        level=resolved,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%H:%M:%S",
    )
    logging.getLogger("watersort_core").debug(
        "logging initialized (level=%s)", logging.getLevelName(resolved)
    )
