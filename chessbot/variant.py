"""Randomized back-rank arrangements for Chess960-style games."""

from __future__ import annotations

import logging
import random
from typing import List, Optional

import chess

logger = logging.getLogger(__name__)

STANDARD_BACK_RANK = "RNBQKBNR"

_PIECE_TYPES = {
    "P": chess.PAWN,
    "N": chess.KNIGHT,
    "B": chess.BISHOP,
    "R": chess.ROOK,
    "Q": chess.QUEEN,
    "K": chess.KING,
}


class BackRankError(Exception):
    pass


def generate_back_rank(rng: Optional[random.Random] = None) -> str:
    """Return an 8-letter back rank such as ``"BRKRNBQN"``.

    Falls back to the standard arrangement if no rook-king-rook triple fits.
    """
    rng = rng or random
    try:
        return _place_pieces(rng)
    except BackRankError as exc:
        logger.warning("Variant generation failed (%s); using %s", exc, STANDARD_BACK_RANK)
        return STANDARD_BACK_RANK


def _place_pieces(rng) -> str:
    slots: List[Optional[str]] = [None] * 8

    # Bishops on opposite colors
    slots[rng.randrange(4) * 2] = "B"
    slots[rng.randrange(4) * 2 + 1] = "B"

    empty = [i for i, piece in enumerate(slots) if piece is None]
    triple = next(
        (
            empty[i]
            for i in range(len(empty) - 2)
            if empty[i + 1] == empty[i] + 1 and empty[i + 2] == empty[i] + 2
        ),
        None,
    )
    if triple is None:
        raise BackRankError("no three adjacent empty files for rook-king-rook")
    slots[triple], slots[triple + 1], slots[triple + 2] = "R", "K", "R"

    empty = [i for i, piece in enumerate(slots) if piece is None]
    slots[empty.pop(rng.randrange(len(empty)))] = "Q"
    slots[empty.pop(rng.randrange(len(empty)))] = "N"
    slots[empty.pop()] = "N"

    if any(piece is None for piece in slots):
        raise BackRankError("unfilled squares")
    return "".join(slots)


def is_valid_back_rank(back_rank: str) -> bool:
    if len(back_rank) != 8 or sorted(back_rank) != sorted(STANDARD_BACK_RANK):
        return False
    bishops = [i for i, piece in enumerate(back_rank) if piece == "B"]
    rooks = [i for i, piece in enumerate(back_rank) if piece == "R"]
    king = back_rank.index("K")
    return bishops[0] % 2 != bishops[1] % 2 and rooks[0] < king < rooks[1]


def apply_back_rank(board: chess.Board, back_rank: str) -> None:
    """Set up ``board`` with ``back_rank`` mirrored for both sides, pawns in front.

    White moves first with full castling rights.
    """
    board.clear()
    for file, letter in enumerate(back_rank.upper()):
        piece_type = _PIECE_TYPES.get(letter, chess.PAWN)
        board.set_piece_at(chess.square(file, 0), chess.Piece(piece_type, chess.WHITE))
        board.set_piece_at(chess.square(file, 1), chess.Piece(chess.PAWN, chess.WHITE))
        board.set_piece_at(chess.square(file, 6), chess.Piece(chess.PAWN, chess.BLACK))
        board.set_piece_at(chess.square(file, 7), chess.Piece(piece_type, chess.BLACK))

    board.chess960 = back_rank.upper() != STANDARD_BACK_RANK
    board.turn = chess.WHITE
    board.castling_rights = board.rooks & chess.BB_BACKRANKS
