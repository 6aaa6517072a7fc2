from __future__ import annotations

from typing import Optional

from flask import Flask, jsonify, request
import logging
import sys
from pathlib import Path

# Ensure project root is importable when running this file directly
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from chessbot import Game, AIPlayer
from chessbot.config import EngineConfig, load_config
from chessbot.skill import LEVELS, depth_for

logger = logging.getLogger(__name__)


def create_app(config: Optional[EngineConfig] = None) -> Flask:
    app = Flask(__name__)
    config = config or load_config()

    game = Game(chess960=config.chess960)
    ai = AIPlayer()

    def read_rating(data) -> int:
        return int(data.get("rating", config.default_rating))

    def ai_reply(rating: int) -> Optional[str]:
        if game.is_game_over():
            return None
        move = ai.choose_move(game.board, rating)
        if not game.apply(move):
            logger.error("Search returned illegal move %s", move.uci())
            return None
        return game.last_move_uci()

    @app.get("/api/state")
    def api_state():
        return jsonify(game.snapshot())

    @app.get("/api/levels")
    def api_levels():
        return jsonify(
            {name: {"rating": rating, "depth": depth_for(rating)} for name, rating in LEVELS.items()}
        )

    @app.post("/api/new")
    def api_new():
        data = request.get_json(silent=True) or {}
        color = (data.get("color") or "white").lower()
        chess960 = bool(data.get("chess960", config.chess960))
        try:
            rating = read_rating(data)
        except (TypeError, ValueError):
            return jsonify({"error": "Invalid rating"}), 400

        game.reset(chess960)

        ai_move_uci = None
        pre_fen: str | None = None
        # If player chose black, AI (white) makes the first move immediately
        if color == "black":
            # Capture starting position to allow frontend to animate the first AI move
            pre_fen = game.get_full_fen()
            ai_move_uci = ai_reply(rating)

        snap = game.snapshot()
        snap["ai_move"] = ai_move_uci
        if pre_fen is not None:
            snap["pre_fen"] = pre_fen
        return jsonify(snap)

    @app.post("/api/move")
    def api_move():
        payload = request.get_json(silent=True) or {}
        uci = payload.get("move")
        if not uci:
            return jsonify({"error": "Missing move"}), 400
        if not isinstance(uci, str):
            return jsonify({"error": "Move must be a UCI string"}), 400
        try:
            rating = read_rating(payload)
        except (TypeError, ValueError):
            return jsonify({"error": "Invalid rating"}), 400

        try:
            game.push_uci(uci)
        except ValueError as exc:
            return jsonify({"error": str(exc)}), 400

        ai_move_uci = ai_reply(rating)

        snap = game.snapshot()
        snap["ai_move"] = ai_move_uci
        return jsonify(snap)

    return app


app = create_app()

if __name__ == "__main__":
    cfg = load_config()
    logging.basicConfig(level=cfg.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app.run(host=cfg.host, port=cfg.port, debug=True)
