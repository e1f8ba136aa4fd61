"""ttt_engine package.

Depth-bounded minimax for tic-tac-toe, win/draw rules, a turn controller and
a small terminal CLI.

Convenience imports are exposed for common workflows.
"""

from .board import EMPTY, PLAYER_A, PLAYER_B, WIN_COMBINATIONS, new_board
from .game import Game, self_play
from .rules import GameStatus, game_status, has_won
from .solver import score, score_moves, select_move

__all__ = [
    "EMPTY",
    "PLAYER_A",
    "PLAYER_B",
    "WIN_COMBINATIONS",
    "new_board",
    "has_won",
    "game_status",
    "GameStatus",
    "select_move",
    "score",
    "score_moves",
    "Game",
    "self_play",
]
