from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import chess

from . import rules

Table = Tuple[Tuple[float, ...], ...]
Grid = List[List[Optional[chess.Piece]]]


class Evaluator:
    """Static evaluation for chess positions.

    Positive scores favor White, negative scores favor Black, whoever is to
    move. Units are centipawns.
    """

    MATERIAL_VALUES: Dict[chess.PieceType, int] = {
        chess.PAWN: 100,
        chess.KNIGHT: 320,
        chess.BISHOP: 330,
        chess.ROOK: 500,
        chess.QUEEN: 900,
        chess.KING: 20000,
    }

    # Indexed [row][col] from White's side, row 0 is rank 8.
    # Black reads the mirrored row.
    PST_PAWN: Table = (
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
        (5.0, 5.0, 5.0, 5.0, 5.0, 5.0, 5.0, 5.0),
        (1.0, 1.0, 2.0, 3.0, 3.0, 2.0, 1.0, 1.0),
        (0.5, 0.5, 1.0, 2.0, 2.0, 1.0, 0.5, 0.5),
        (0.0, 0.0, 0.0, 1.5, 1.5, 0.0, 0.0, 0.0),
        (0.5, -0.5, -1.0, -1.0, -1.0, -1.0, -0.5, 0.5),
        (0.5, 1.0, 1.0, -2.0, -2.0, 1.0, 1.0, 0.5),
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
    )

    PST_KNIGHT: Table = (
        (-5.0, -4.0, -3.0, -3.0, -3.0, -3.0, -4.0, -5.0),
        (-4.0, -2.0, 0.0, 0.0, 0.0, 0.0, -2.0, -4.0),
        (-3.0, 0.0, 1.0, 1.5, 1.5, 1.0, 0.0, -3.0),
        (-3.0, 0.5, 1.5, 2.0, 2.0, 1.5, 0.5, -3.0),
        (-3.0, 0.0, 1.5, 2.0, 2.0, 1.5, 0.0, -3.0),
        (-3.0, 0.5, 1.0, 1.5, 1.5, 1.0, 0.5, -3.0),
        (-4.0, -2.0, 0.0, 0.5, 0.5, 0.0, -2.0, -4.0),
        (-5.0, -4.0, -3.0, -3.0, -3.0, -3.0, -4.0, -5.0),
    )

    PST_BISHOP: Table = (
        (-2.0, -1.0, -1.0, -1.0, -1.0, -1.0, -1.0, -2.0),
        (-1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -1.0),
        (-1.0, 0.0, 0.5, 1.0, 1.0, 0.5, 0.0, -1.0),
        (-1.0, 0.5, 0.5, 1.0, 1.0, 0.5, 0.5, -1.0),
        (-1.0, 0.0, 1.0, 1.0, 1.0, 1.0, 0.0, -1.0),
        (-1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, -1.0),
        (-1.0, 0.5, 0.0, 0.0, 0.0, 0.0, 0.5, -1.0),
        (-2.0, -1.0, -1.0, -1.0, -1.0, -1.0, -1.0, -2.0),
    )

    PST_ROOK: Table = (
        (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0),
        (0.5, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 0.5),
        (-0.5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -0.5),
        (-0.5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -0.5),
        (-0.5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -0.5),
        (-0.5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -0.5),
        (-0.5, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -0.5),
        (0.0, 0.0, 0.0, 0.5, 0.5, 0.0, 0.0, 0.0),
    )

    PST_QUEEN: Table = (
        (-2.0, -1.0, -1.0, -0.5, -0.5, -1.0, -1.0, -2.0),
        (-1.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, -1.0),
        (-1.0, 0.0, 0.5, 0.5, 0.5, 0.5, 0.0, -1.0),
        (-0.5, 0.0, 0.5, 0.5, 0.5, 0.5, 0.0, -0.5),
        (0.0, 0.0, 0.5, 0.5, 0.5, 0.5, 0.0, -0.5),
        (-1.0, 0.5, 0.5, 0.5, 0.5, 0.5, 0.0, -1.0),
        (-1.0, 0.0, 0.5, 0.0, 0.0, 0.0, 0.0, -1.0),
        (-2.0, -1.0, -1.0, -0.5, -0.5, -1.0, -1.0, -2.0),
    )

    # Negated in the endgame
    PST_KING: Table = (
        (-3.0, -4.0, -4.0, -5.0, -5.0, -4.0, -4.0, -3.0),
        (-3.0, -4.0, -4.0, -5.0, -5.0, -4.0, -4.0, -3.0),
        (-3.0, -4.0, -4.0, -5.0, -5.0, -4.0, -4.0, -3.0),
        (-3.0, -4.0, -4.0, -5.0, -5.0, -4.0, -4.0, -3.0),
        (-2.0, -3.0, -3.0, -4.0, -4.0, -3.0, -3.0, -2.0),
        (-1.0, -2.0, -2.0, -2.0, -2.0, -2.0, -2.0, -1.0),
        (2.0, 2.0, 0.0, 0.0, 0.0, 0.0, 2.0, 2.0),
        (2.0, 3.0, 1.0, 0.0, 0.0, 1.0, 3.0, 2.0),
    )

    OPENING_MOVES = 10
    EARLY_QUEEN_PENALTY = 30
    EARLY_KING_PENALTY = 100
    CENTER_PAWN_PENALTY = 20
    DEVELOPMENT_BONUS = 15
    UNDERDEVELOPMENT_PENALTY = 10
    CENTER_MINOR_BONUS = 10
    MOBILITY_WEIGHT = 0.1

    @classmethod
    def evaluate(cls, board: chess.Board) -> float:
        position = rules.grid(board)
        is_endgame = cls._is_endgame(position)
        move_count = board.fullmove_number // 2
        is_opening = move_count < cls.OPENING_MOVES

        score = 0.0
        center_pawns = {chess.WHITE: 0, chess.BLACK: 0}
        developed = {chess.WHITE: 0, chess.BLACK: 0}

        # Material + piece-square
        for row in range(8):
            for col in range(8):
                piece = position[row][col]
                if piece is None:
                    continue
                home_row = cls._home_row(piece.color)
                bonus = cls._positional_bonus(piece, row, col, is_endgame)

                if piece.piece_type == chess.PAWN and col in (3, 4):
                    center_pawns[piece.color] += 1
                if piece.piece_type in (chess.KNIGHT, chess.BISHOP) and row != home_row:
                    developed[piece.color] += 1

                if is_opening and row != home_row:
                    if piece.piece_type == chess.QUEEN:
                        bonus -= cls.EARLY_QUEEN_PENALTY
                    elif piece.piece_type == chess.KING:
                        bonus -= cls.EARLY_KING_PENALTY

                value = cls.MATERIAL_VALUES[piece.piece_type] + bonus
                score += value if piece.color == chess.WHITE else -value

        if is_opening:
            score += cls._opening_adjustments(position, center_pawns, developed, move_count)

        king_weight = 1.0 if is_opening else 0.5
        score += (
            cls._king_safety(position, chess.WHITE) - cls._king_safety(position, chess.BLACK)
        ) * king_weight

        score += cls._mobility(board) * cls.MOBILITY_WEIGHT
        return score

    @staticmethod
    def _home_row(color: chess.Color) -> int:
        return 7 if color == chess.WHITE else 0

    @staticmethod
    def _is_endgame(position: Grid) -> bool:
        majors = sum(
            1
            for rank in position
            for piece in rank
            if piece is not None and piece.piece_type in (chess.QUEEN, chess.ROOK)
        )
        return majors <= 2

    @classmethod
    def _positional_bonus(cls, piece: chess.Piece, row: int, col: int, is_endgame: bool) -> float:
        if piece.color == chess.BLACK:
            row = 7 - row
        bonus = cls._pst_for(piece.piece_type)[row][col]
        if piece.piece_type == chess.KING and is_endgame:
            return -bonus
        return bonus

    @classmethod
    def _opening_adjustments(
        cls,
        position: Grid,
        center_pawns: Dict[chess.Color, int],
        developed: Dict[chess.Color, int],
        move_count: int,
    ) -> float:
        score = 0.0

        # Too many pawns crowding the d/e files
        score -= max(0, center_pawns[chess.WHITE] - 2) * cls.CENTER_PAWN_PENALTY
        score += max(0, center_pawns[chess.BLACK] - 2) * cls.CENTER_PAWN_PENALTY

        score += developed[chess.WHITE] * cls.DEVELOPMENT_BONUS
        score -= developed[chess.BLACK] * cls.DEVELOPMENT_BONUS

        if move_count > 4:
            score -= max(0, 4 - developed[chess.WHITE]) * cls.UNDERDEVELOPMENT_PENALTY
            score += max(0, 4 - developed[chess.BLACK]) * cls.UNDERDEVELOPMENT_PENALTY

        # Minor pieces in the central 4x4 block
        for row in range(2, 6):
            for col in range(2, 6):
                piece = position[row][col]
                if piece is not None and piece.piece_type in (chess.KNIGHT, chess.BISHOP):
                    score += cls.CENTER_MINOR_BONUS if piece.color == chess.WHITE else -cls.CENTER_MINOR_BONUS
        return score

    @classmethod
    def _king_safety(cls, position: Grid, color: chess.Color) -> float:
        king_row, king_col = None, None
        for row in range(8):
            for col in range(8):
                piece = position[row][col]
                if piece is not None and piece.piece_type == chess.KING and piece.color == color:
                    king_row, king_col = row, col
                    break
            if king_row is not None:
                break
        if king_row is None:
            return 0.0

        safety = 0.0
        shield_row = king_row - 1 if color == chess.WHITE else king_row + 1
        if 0 <= shield_row < 8:
            for col in (king_col - 1, king_col + 1):
                if 0 <= col < 8:
                    piece = position[shield_row][col]
                    if piece is not None and piece.piece_type == chess.PAWN and piece.color == color:
                        safety += 3

        safety -= abs(king_col - 4) * 2
        safety -= abs(king_row - cls._home_row(color)) * 3
        return safety

    @staticmethod
    def _mobility(board: chess.Board) -> int:
        to_move = board.legal_moves.count()
        other = rules.clone(board, turn=not board.turn).legal_moves.count()
        if board.turn == chess.WHITE:
            return to_move - other
        return other - to_move

    @classmethod
    def _pst_for(cls, piece_type: chess.PieceType) -> Table:
        if piece_type == chess.PAWN:
            return cls.PST_PAWN
        if piece_type == chess.KNIGHT:
            return cls.PST_KNIGHT
        if piece_type == chess.BISHOP:
            return cls.PST_BISHOP
        if piece_type == chess.ROOK:
            return cls.PST_ROOK
        if piece_type == chess.QUEEN:
            return cls.PST_QUEEN
        return cls.PST_KING
