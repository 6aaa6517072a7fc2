from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import logging
import random
import chess

from . import rules
from .evaluator import Evaluator
from .rules import Move
from .skill import draw_noise, skill_for

logger = logging.getLogger(__name__)

INF = float("inf")
NEG_INF = float("-inf")


@dataclass
class SearchResult:
    best_move: Move
    # From the perspective of the side to move, noise included
    score: float
    nodes: int
    # The python-chess move as searched, without the queen fallback
    played: chess.Move


class AIPlayer:
    """Fixed-depth minimax with alpha-beta pruning.

    Every node works on its own cloned board, so sibling branches never share
    mutable state. Moves are tried in ``rules.legal_moves`` order and the first
    strictly better score wins.
    """

    def __init__(self, rng: Optional[random.Random] = None) -> None:
        self.rng = rng or random.Random()

    def choose_move(self, board: chess.Board, rating: int) -> Move:
        """Pick a move for the side to move at the strength given by ``rating``."""
        skill = skill_for(rating)
        noise = draw_noise(skill, self.rng)
        result = self.search(board, skill.depth, noise)
        logger.debug(
            "rating=%d depth=%d noise=%.3f nodes=%d score=%.1f move=%s",
            rating, skill.depth, noise, result.nodes, result.score, result.played.uci(),
        )
        return result.best_move

    def find_best_move(self, board: chess.Board, depth: int, noise: float = 0.0) -> Move:
        return self.search(board, depth, noise).best_move

    def search(self, board: chess.Board, depth: int, noise: float = 0.0) -> SearchResult:
        moves = rules.legal_moves(board)
        if not moves:
            raise ValueError("No legal moves to search")

        # Scores are White-positive; Black ranks candidates by the negation.
        sign = 1 if board.turn == chess.WHITE else -1
        best_score = NEG_INF
        best_move = moves[0]
        nodes = 0

        for move in moves:
            child = rules.clone(board)
            child.push(move)
            score, sub_nodes = self._alphabeta(
                child, depth - 1, NEG_INF, INF, maximizing=child.turn == chess.WHITE
            )
            nodes += sub_nodes + 1
            score = sign * score + noise
            if score > best_score:
                best_score = score
                best_move = move

        chosen = Move.from_chess(best_move)
        if chosen.promotion is None:
            chosen = Move(chosen.from_square, chosen.to_square, chess.QUEEN)
        return SearchResult(best_move=chosen, score=best_score, nodes=nodes, played=best_move)

    def minimax(
        self,
        board: chess.Board,
        depth: int,
        alpha: float = NEG_INF,
        beta: float = INF,
        maximizing: bool = True,
    ) -> float:
        return self._alphabeta(board, depth, alpha, beta, maximizing)[0]

    def _alphabeta(
        self,
        board: chess.Board,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> Tuple[float, int]:
        if depth <= 0 or rules.is_terminal(board):
            return Evaluator.evaluate(board), 1

        nodes = 0

        if maximizing:
            value = NEG_INF
            for move in rules.legal_moves(board):
                child = rules.clone(board)
                child.push(move)
                score, child_nodes = self._alphabeta(
                    child, depth - 1, alpha, beta, maximizing=False
                )
                nodes += child_nodes + 1
                value = max(value, score)
                alpha = max(alpha, value)
                if beta <= alpha:
                    break
            return value, nodes
        else:
            value = INF
            for move in rules.legal_moves(board):
                child = rules.clone(board)
                child.push(move)
                score, child_nodes = self._alphabeta(
                    child, depth - 1, alpha, beta, maximizing=True
                )
                nodes += child_nodes + 1
                value = min(value, score)
                beta = min(beta, value)
                if beta <= alpha:
                    break
            return value, nodes
