"""Thin seam over python-chess, the rules engine the search and evaluator rely on.

Everything that touches a board goes through these helpers so the rest of the
package only ever works on by-value snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import chess


@dataclass(frozen=True)
class Move:
    from_square: chess.Square
    to_square: chess.Square
    promotion: Optional[chess.PieceType] = None

    @classmethod
    def from_chess(cls, move: chess.Move) -> "Move":
        return cls(move.from_square, move.to_square, move.promotion)

    def uci(self) -> str:
        return chess.Move(self.from_square, self.to_square, self.promotion).uci()


def clone(board: chess.Board, turn: Optional[chess.Color] = None) -> chess.Board:
    """Snapshot ``board`` by value, optionally forcing the side to move."""
    snapshot = chess.Board(board.fen(), chess960=board.chess960)
    if turn is not None and turn != snapshot.turn:
        snapshot.turn = turn
        snapshot.ep_square = None
    return snapshot


def legal_moves(board: chess.Board) -> List[chess.Move]:
    # Sorted so that search ties break the same way on every run.
    return sorted(
        board.legal_moves,
        key=lambda m: (m.from_square, m.to_square, m.promotion or 0),
    )


def apply_move(board: chess.Board, move: Move) -> bool:
    """Push ``move`` onto ``board``. Returns False instead of raising on illegal input."""
    candidate = chess.Move(move.from_square, move.to_square, move.promotion)
    if candidate not in board.legal_moves and move.promotion is not None:
        # Search always attaches a queen; drop it for non-promoting moves
        candidate = chess.Move(move.from_square, move.to_square)
    if candidate not in board.legal_moves:
        return False
    board.push(candidate)
    return True


def is_terminal(board: chess.Board) -> bool:
    return board.is_game_over()


def grid(board: chess.Board) -> List[List[Optional[chess.Piece]]]:
    """8x8 view indexed ``[row][col]`` with row 0 holding rank 8."""
    return [
        [board.piece_at(chess.square(col, 7 - row)) for col in range(8)]
        for row in range(8)
    ]
