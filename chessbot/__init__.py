"""Chess opponent package: position evaluation, search, skill levels and Chess960 setup.

Modules:
- rules: snapshot/move helpers over python-chess
- evaluator: heuristic evaluation function for positions
- ai: fixed-depth minimax with alpha-beta pruning
- skill: difficulty rating to depth and noise
- variant: Chess960 back-rank generation and setup
- game: board ownership for the web/API
"""

from .game import Game
from .ai import AIPlayer
from .evaluator import Evaluator
from .rules import Move

__all__ = ["Game", "AIPlayer", "Evaluator", "Move"]
