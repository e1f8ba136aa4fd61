"""
Win and draw detection.
Notes:
- Cells hold -1/0/+1, so a line sums to +3 or -3 only when all three cells
  carry the same mark. The sum alone is a complete win test.
"""
from enum import Enum
from typing import List, Optional, Tuple

from .board import BOARD_SIZE, EMPTY, PLAYER_A, PLAYER_B, WIN_COMBINATIONS

WIN_A = 3
WIN_B = -3


class GameStatus(str, Enum):
    ONGOING = "ongoing"
    A_WON = "x_won"
    B_WON = "o_won"
    DRAW = "draw"

    @property
    def is_over(self) -> bool:
        return self is not GameStatus.ONGOING


def has_won(board: List[int], target_sum: int) -> bool:
    for a, b, c in WIN_COMBINATIONS:
        if board[a] + board[b] + board[c] == target_sum:
            return True
    return False


def winning_line(board: List[int]) -> Optional[Tuple[int, int, int]]:
    for line in WIN_COMBINATIONS:
        a, b, c = line
        if abs(board[a] + board[b] + board[c]) == 3:
            return line
    return None


def winner(board: List[int]) -> int:
    if has_won(board, WIN_A):
        return PLAYER_A
    if has_won(board, WIN_B):
        return PLAYER_B
    return EMPTY


def win_target(mark: int) -> int:
    return WIN_A if mark == PLAYER_A else WIN_B


def is_draw(board: List[int], turn: int) -> bool:
    return turn >= BOARD_SIZE and winner(board) == EMPTY


def game_status(board: List[int], turn: int) -> GameStatus:
    w = winner(board)
    if w == PLAYER_A:
        return GameStatus.A_WON
    if w == PLAYER_B:
        return GameStatus.B_WON
    if turn >= BOARD_SIZE:
        return GameStatus.DRAW
    return GameStatus.ONGOING
