from __future__ import annotations

import logging
import os
import sys
import threading
import uuid
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request, send_from_directory

# Ensure package imports work when executed directly from repo root
if __package__ in (None, ""):
    sys.path.insert(0, os.path.abspath(os.path.dirname(__file__)))

from game import (  # noqa: E402
    FPS,
    MAX_PORTION,
    SCREEN_HEIGHT,
    SCREEN_WIDTH,
    TRANSFERING_WAIT,
    TUBE_COUNT,
    PuzzleEngine,
    Select,
    engine_to_json,
    hit_test,
    portion_rect,
    tube_rects,
)
from watersort_core.logging_setup import setup_logging  # noqa: E402

logger = logging.getLogger(__name__)

MAX_GAMES = int(os.getenv("WATERSORT_MAX_GAMES", "256"))

STATIC_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), "static"))
app = Flask(__name__, static_url_path="/static", static_folder=STATIC_DIR)

# Live games by id, oldest first. The dev server is threaded, so access goes through the lock.
_GAMES: "OrderedDict[str, PuzzleEngine]" = OrderedDict()
_GAMES_LOCK = threading.Lock()


class BadRequest(ValueError):
    """Client payload could not be turned into engine input."""


def _store_game(engine: PuzzleEngine) -> str:
    game_id = uuid.uuid4().hex
    with _GAMES_LOCK:
        _GAMES[game_id] = engine
        while len(_GAMES) > MAX_GAMES:
            evicted, _ = _GAMES.popitem(last=False)
            logger.info("evicted game %s (limit %d)", evicted, MAX_GAMES)
    return game_id


def _get_game(game_id: Any) -> Optional[PuzzleEngine]:
    if not isinstance(game_id, str):
        return None
    with _GAMES_LOCK:
        engine = _GAMES.get(game_id)
        if engine is not None:
            _GAMES.move_to_end(game_id)
        return engine


def _parse_seed(raw: Any) -> Optional[int]:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise BadRequest("seed must be an integer")
    try:
        return int(raw)
    except (TypeError, ValueError):
        raise BadRequest("seed must be an integer")


def _parse_command(raw: Any) -> Optional[Select]:
    """Accepts null or {"select": index}."""
    if raw is None:
        return None
    if not isinstance(raw, dict) or "select" not in raw:
        raise BadRequest("command must be null or {\"select\": index}")
    index = raw["select"]
    if isinstance(index, bool) or not isinstance(index, int):
        raise BadRequest("select index must be an integer")
    if not 0 <= index < TUBE_COUNT:
        raise BadRequest(f"select index must be in 0..{TUBE_COUNT - 1}")
    return Select(index)


def _parse_ticks(raw: Any) -> int:
    if raw is None:
        return 1
    if isinstance(raw, bool) or not isinstance(raw, int) or not 1 <= raw <= FPS:
        raise BadRequest(f"ticks must be an integer in 1..{FPS}")
    return raw


def _run_ticks(engine: PuzzleEngine, command: Optional[Select], ticks: int) -> Tuple[List[str], Dict[str, Any]]:
    """Ticks under the store lock and snapshots the engine before releasing it."""
    # The command applies to the first tick only; the host never buffers commands.
    sounds: List[str] = []
    with _GAMES_LOCK:
        for i in range(ticks):
            engine.tick(command if i == 0 else None)
            sounds.extend(engine.drain_sounds())
        state = engine_to_json(engine)
    return sounds, state


def _unknown_game() -> Tuple[Any, int]:
    return jsonify({"ok": False, "error": "unknown gameId"}), 404


@app.errorhandler(BadRequest)
def _bad_request(e: BadRequest) -> Any:
    return jsonify({"ok": False, "error": str(e)}), 400


# ---------- Static routes ----------

@app.get("/")
def index() -> Any:
    return send_from_directory(app.static_folder, "index.html")


@app.get("/main.js")
def main_js() -> Any:
    resp = send_from_directory(app.static_folder, "main.js")
    resp.headers["Content-Type"] = "application/javascript; charset=utf-8"
    return resp


@app.get("/styles.css")
def styles_css() -> Any:
    resp = send_from_directory(app.static_folder, "styles.css")
    resp.headers["Content-Type"] = "text/css; charset=utf-8"
    return resp


# ---------- Game API (required by main.js) ----------

@app.get("/api/layout")
def api_layout() -> Any:
    return jsonify({
        "ok": True,
        "screen": {"width": SCREEN_WIDTH, "height": SCREEN_HEIGHT},
        "fps": FPS,
        "transferWait": TRANSFERING_WAIT,
        "tubes": [r._asdict() for r in tube_rects()],
        "slots": [[portion_rect(i, level)._asdict() for level in range(MAX_PORTION)] for i in range(TUBE_COUNT)],
    })


@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    seed = _parse_seed(body.get("seed"))
    engine = PuzzleEngine(seed=seed)
    state = engine_to_json(engine)  # not shared until stored
    game_id = _store_game(engine)
    logger.info("new game %s (seed=%d)", game_id, engine.seed)
    return jsonify({"ok": True, "gameId": game_id, "seed": engine.seed, "state": state})


@app.post("/api/restart")
def api_restart() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    engine = _get_game(body.get("gameId"))
    if engine is None:
        return _unknown_game()
    seed = _parse_seed(body.get("seed"))
    with _GAMES_LOCK:
        used = engine.new_game(seed)
        state = engine_to_json(engine)
    return jsonify({"ok": True, "seed": used, "state": state})


@app.post("/api/tick")
def api_tick() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    engine = _get_game(body.get("gameId"))
    if engine is None:
        return _unknown_game()
    command = _parse_command(body.get("command"))
    ticks = _parse_ticks(body.get("ticks"))
    sounds, state = _run_ticks(engine, command, ticks)
    return jsonify({"ok": True, "state": state, "sounds": sounds})


@app.post("/api/click")
def api_click() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    engine = _get_game(body.get("gameId"))
    if engine is None:
        return _unknown_game()
    try:
        x = int(body["x"])
        y = int(body["y"])
    except (KeyError, TypeError, ValueError):
        raise BadRequest("x and y are required integers")
    index = hit_test(x, y)
    command = Select(index) if index is not None else None
    sounds, state = _run_ticks(engine, command, 1)
    return jsonify({"ok": True, "tube": index, "state": state, "sounds": sounds})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    setup_logging()
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    host = os.getenv("HOST", "127.0.0.1")
    port = int(os.getenv("PORT", "5000"))
    app.run(host=host, port=port, debug=debug)
