from __future__ import annotations

import chess
import pytest

from chessbot import Evaluator
from chessbot import rules

ITALIAN = "r1bqkbnr/pppp1ppp/2n5/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R b KQkq - 3 3"


def test_starting_position_is_balanced():
    assert Evaluator.evaluate(chess.Board()) == 0


def test_extra_queen_favors_white():
    board = chess.Board("rnb1kbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1")
    assert Evaluator.evaluate(board) > 800


def test_extra_queen_favors_black():
    board = chess.Board("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNB1KBNR w KQkq - 0 1")
    assert Evaluator.evaluate(board) < -800


def test_sign_does_not_depend_on_side_to_move():
    white_to_move = chess.Board(ITALIAN.replace(" b ", " w "))
    black_to_move = chess.Board(ITALIAN)
    assert Evaluator.evaluate(white_to_move) == Evaluator.evaluate(black_to_move)


def test_mirrored_position_negates_score():
    board = chess.Board(ITALIAN)
    assert Evaluator.evaluate(board.mirror()) == pytest.approx(-Evaluator.evaluate(board))


def test_evaluate_leaves_board_untouched():
    board = chess.Board(ITALIAN)
    before = board.fen()
    first = Evaluator.evaluate(board)
    assert board.fen() == before
    assert Evaluator.evaluate(board) == first


def test_endgame_detection():
    assert not Evaluator._is_endgame(rules.grid(chess.Board()))
    rooks_only = chess.Board("4k3/8/8/8/8/8/8/R3K2R w - - 0 1")
    assert Evaluator._is_endgame(rules.grid(rooks_only))


def test_king_table_negated_in_endgame():
    king = chess.Piece(chess.KING, chess.WHITE)
    # g1
    assert Evaluator._positional_bonus(king, 7, 6, is_endgame=False) == 3.0
    assert Evaluator._positional_bonus(king, 7, 6, is_endgame=True) == -3.0


def test_black_reads_mirrored_table():
    pawn = chess.Piece(chess.PAWN, chess.BLACK)
    # e7 for black sits where e2 sits for white
    assert Evaluator._positional_bonus(pawn, 1, 4, False) == Evaluator.PST_PAWN[6][4]


def test_king_safety_counts_shield_pawns():
    position = rules.grid(chess.Board())
    assert Evaluator._king_safety(position, chess.WHITE) == 6
    assert Evaluator._king_safety(position, chess.BLACK) == 6


def test_king_safety_penalizes_wandering_king():
    board = chess.Board("4k3/8/8/8/8/3K4/8/8 w - - 0 1")
    # d3: one file from centre, two ranks from home, no shield
    assert Evaluator._king_safety(rules.grid(board), chess.WHITE) == -2 - 6


def test_early_queen_sortie_is_penalized():
    home = chess.Board("rnbqkbnr/pppp1ppp/8/4p3/4P3/8/PPPP1PPP/RNBQKBNR w KQkq - 0 2")
    out = chess.Board("rnbqkbnr/pppp1ppp/8/4p2Q/4P3/8/PPPP1PPP/RNB1KBNR b KQkq - 1 2")
    assert Evaluator.evaluate(out) < Evaluator.evaluate(home) - 20


def test_opening_rules_switch_off_late():
    early = chess.Board("4k3/8/8/8/8/8/8/3QK3 w - - 0 1")
    late = chess.Board("4k3/8/8/8/8/8/8/3QK3 w - - 0 40")
    moved_early = chess.Board("4k3/8/8/8/8/3Q4/8/4K3 w - - 0 1")
    moved_late = chess.Board("4k3/8/8/8/8/3Q4/8/4K3 w - - 0 40")
    early_cost = Evaluator.evaluate(early) - Evaluator.evaluate(moved_early)
    late_cost = Evaluator.evaluate(late) - Evaluator.evaluate(moved_late)
    assert early_cost - late_cost == pytest.approx(Evaluator.EARLY_QUEEN_PENALTY)


def test_mobility_is_white_minus_black():
    board = chess.Board()
    assert Evaluator._mobility(board) == 0
    board.push_san("e4")
    white_moves = rules.clone(board, turn=chess.WHITE).legal_moves.count()
    assert Evaluator._mobility(board) == white_moves - 20


def opening_share(fen: str) -> float:
    """Score difference between a position early on and the same position at move 30."""
    board, late = chess.Board(fen), chess.Board(fen)
    late.fullmove_number = 30
    return Evaluator.evaluate(board) - Evaluator.evaluate(late)


def test_developed_knight_in_centre():
    # +15 development, +10 central block
    assert opening_share("4k3/8/8/8/8/5N2/8/4K3 w - - 0 1") == pytest.approx(25)
    assert opening_share("4k3/8/5n2/8/8/8/8/4K3 w - - 0 1") == pytest.approx(-25)


def test_underdevelopment_after_move_four():
    # 25, then White is 3 pieces short (-30) and Black 4 short (+40)
    assert opening_share("4k3/8/8/8/8/5N2/8/4K3 w - - 0 10") == pytest.approx(35)


def test_crowded_centre_files():
    # three white pawns on d/e files
    assert opening_share("4k3/8/8/8/3P4/3P4/4P3/4K3 w - - 0 1") == pytest.approx(-20)
    assert opening_share("4k3/4p3/3p4/3p4/3p4/8/8/4K3 w - - 0 1") == pytest.approx(40)


def test_opening_adjustments_terms():
    empty = rules.grid(chess.Board("4k3/8/8/8/8/8/8/4K3 w - - 0 1"))
    counts = lambda white, black: {chess.WHITE: white, chess.BLACK: black}
    assert Evaluator._opening_adjustments(empty, counts(3, 2), counts(0, 0), 0) == -20
    assert Evaluator._opening_adjustments(empty, counts(0, 0), counts(2, 1), 0) == 15
    assert Evaluator._opening_adjustments(empty, counts(0, 0), counts(2, 4), 5) == -30 - 20
    # no reward for being over-developed
    assert Evaluator._opening_adjustments(empty, counts(0, 0), counts(4, 4), 6) == 0
    bishop = rules.grid(chess.Board("4k3/8/8/2b5/8/8/8/4K3 w - - 0 1"))
    assert Evaluator._opening_adjustments(bishop, counts(0, 0), counts(0, 0), 0) == -10


def test_early_king_walk_penalty_and_safety_weight():
    home = "4k3/8/8/8/8/8/8/4K3 w - - 0 {}"
    stepped = "4k3/8/8/8/8/8/4K3/8 w - - 0 {}"
    assert Evaluator._king_safety(rules.grid(chess.Board(stepped.format(1))), chess.WHITE) == -3
    # move 19 is still the opening, move 20 is not
    early_cost = Evaluator.evaluate(chess.Board(home.format(19))) - Evaluator.evaluate(chess.Board(stepped.format(19)))
    late_cost = Evaluator.evaluate(chess.Board(home.format(20))) - Evaluator.evaluate(chess.Board(stepped.format(20)))
    assert early_cost - late_cost == pytest.approx(Evaluator.EARLY_KING_PENALTY + 3 * (1.0 - 0.5))


def test_king_safety_weight_without_penalty():
    # g1 is still the home rank: only the -4 file term moves with the weight
    centre = "4k3/8/8/8/8/8/8/4K3 w - - 0 {}"
    wing = "4k3/8/8/8/8/8/8/6K1 w - - 0 {}"
    early_cost = Evaluator.evaluate(chess.Board(centre.format(19))) - Evaluator.evaluate(chess.Board(wing.format(19)))
    late_cost = Evaluator.evaluate(chess.Board(centre.format(20))) - Evaluator.evaluate(chess.Board(wing.format(20)))
    assert early_cost - late_cost == pytest.approx(4 * 1.0 - 4 * 0.5)
