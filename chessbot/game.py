from __future__ import annotations

from typing import Dict, List, Optional

import chess

from . import rules
from .evaluator import Evaluator
from .rules import Move
from .variant import apply_back_rank, generate_back_rank


class Game:
    """Wraps python-chess Board and exposes a clean interface for the web/API.

    This class owns the single active board. The AI only ever sees snapshots
    of it; moves land here once a search has finished.
    """

    def __init__(self, chess960: bool = False) -> None:
        self.board = chess.Board()
        self.back_rank: Optional[str] = None
        self.last_move_was_capture: bool = False
        self.reset(chess960)

    def reset(self, chess960: bool = False) -> None:
        self.board = chess.Board()
        self.back_rank = None
        self.last_move_was_capture = False
        if chess960:
            self.back_rank = generate_back_rank()
            apply_back_rank(self.board, self.back_rank)

    def get_full_fen(self) -> str:
        return self.board.fen()

    def get_turn_color(self) -> str:
        return "white" if self.board.turn == chess.WHITE else "black"

    def get_legal_moves(self) -> List[str]:
        return [move.uci() for move in rules.legal_moves(self.board)]

    def is_game_over(self) -> bool:
        return self.board.is_game_over()

    def get_result(self) -> Optional[str]:
        if not self.board.is_game_over():
            return None
        # Returns result like '1-0', '0-1', or '1/2-1/2'
        return self.board.result()

    def get_winner(self) -> Optional[str]:
        if not self.board.is_checkmate():
            return None
        return "black" if self.board.turn == chess.WHITE else "white"

    def apply(self, move: Move) -> bool:
        capture = self.board.is_capture(chess.Move(move.from_square, move.to_square))
        if not rules.apply_move(self.board, move):
            return False
        self.last_move_was_capture = capture
        return True

    def push_uci(self, uci: str) -> None:
        try:
            move = self.board.parse_uci(uci)
        except ValueError:
            move = None
        if move:
            self.last_move_was_capture = self.board.is_capture(move)
            self.board.push(move)
            return

        # Auto-queen promotion if user sends e7e8 or similar without suffix
        if len(uci) == 4:
            try:
                from_sq = chess.parse_square(uci[:2])
                to_sq = chess.parse_square(uci[2:])
            except ValueError:
                raise ValueError(f"Illegal move: {uci}") from None
            promo_move = Move(from_sq, to_sq, chess.QUEEN)
            if self.apply(promo_move):
                return

        raise ValueError(f"Illegal move: {uci}")

    def last_move_uci(self) -> Optional[str]:
        if not self.board.move_stack:
            return None
        return self.board.move_stack[-1].uci()

    def snapshot(self) -> Dict[str, object]:
        in_check = self.board.is_check()
        check_square: Optional[str] = None
        if in_check:
            king_sq = self.board.king(self.board.turn)
            if king_sq is not None:
                check_square = chess.SQUARE_NAMES[king_sq]

        return {
            "fen": self.get_full_fen(),
            "turn": self.get_turn_color(),
            "legal_moves": self.get_legal_moves(),
            "game_over": self.is_game_over(),
            "result": self.get_result(),
            "winner": self.get_winner(),
            "checkmate": self.board.is_checkmate(),
            "draw": self.is_game_over() and not self.board.is_checkmate(),
            "last_move": self.last_move_uci(),
            "in_check": in_check,
            "check_square": check_square,
            "last_move_capture": self.last_move_was_capture,
            "chess960": self.board.chess960,
            "back_rank": self.back_rank,
            "evaluation": Evaluator.evaluate(self.board),
        }
