"""
Turn controller: owns the board and turn counter, alternates human and engine
moves, and reports the verdict after every move.

The engine itself keeps no state; everything it needs is passed in here.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional, Tuple

from .board import (
    BOARD_SIZE,
    PLAYER_A,
    PLAYER_B,
    apply_move,
    mark_for_turn,
    new_board,
    symbol,
)
from .config import DEFAULT_OPPONENT_DELAY, DEFAULT_OPPONENT_DEPTH
from .errors import GameOverError, IllegalMoveError
from .rules import GameStatus, has_won, win_target
from .solver import select_move

logger = logging.getLogger(__name__)


class Game:
    """A single human-vs-engine game.

    ``human_mark`` picks the human side; X always moves first, so with
    ``human_mark=PLAYER_B`` the engine opens.
    """

    def __init__(self, human_mark: int = PLAYER_A, opponent_depth: int = DEFAULT_OPPONENT_DEPTH):
        if human_mark not in (PLAYER_A, PLAYER_B):
            raise ValueError(f"human_mark must be {PLAYER_A} or {PLAYER_B}, got {human_mark!r}")
        self.human_mark = human_mark
        self.opponent_depth = opponent_depth
        self._pending: Optional[asyncio.Task] = None
        self.new_game()

    def new_game(self) -> None:
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
            logger.debug("cancelled pending opponent move")
        self._pending = None
        self.board: List[int] = new_board()
        self.turn = 0
        self.status = GameStatus.ONGOING
        self.last_move: Optional[int] = None
        self.moves: List[int] = []

    @property
    def mover(self) -> int:
        return mark_for_turn(self.turn)

    @property
    def opponent_mark(self) -> int:
        return -self.human_mark

    @property
    def is_human_turn(self) -> bool:
        return not self.status.is_over and self.mover == self.human_mark

    def play(self, cell: int) -> GameStatus:
        """Place the mover's mark on ``cell`` and return the resulting status."""
        if self.status.is_over:
            raise GameOverError(f"Game is over ({self.status.value})")
        mark = self.mover
        self.board = apply_move(self.board, cell, mark)
        self.turn += 1
        self.moves.append(cell)
        self.last_move = cell
        logger.debug("%s -> %d (turn=%d)", symbol(mark), cell, self.turn)
        if has_won(self.board, win_target(mark)):
            self.status = GameStatus.A_WON if mark == PLAYER_A else GameStatus.B_WON
        elif self.turn >= BOARD_SIZE:
            self.status = GameStatus.DRAW
        if self.status.is_over:
            logger.info("game over: %s", self.status.value)
        return self.status

    def human_move(self, cell: int) -> GameStatus:
        """Play ``cell`` for the human; rejected while the engine is to move or its reply is pending."""
        if self.status.is_over:
            raise GameOverError(f"Game is over ({self.status.value})")
        if not self.is_human_turn:
            raise IllegalMoveError("It is not the human's turn")
        if self._pending is not None and not self._pending.done():
            raise IllegalMoveError("The engine's reply is still pending")
        return self.play(cell)

    def opponent_move(self) -> int:
        if self.status.is_over:
            raise GameOverError(f"Game is over ({self.status.value})")
        if self.mover != self.opponent_mark:
            raise IllegalMoveError("It is not the engine's turn")
        cell = select_move(self.board, self.turn, self.opponent_depth)
        if cell is None:
            raise GameOverError("No empty cell left")
        self.play(cell)
        return cell

    async def _delayed_reply(self, delay: float) -> int:
        await asyncio.sleep(delay)
        return self.opponent_move()

    def schedule_opponent(self, delay: float = DEFAULT_OPPONENT_DELAY) -> asyncio.Task:
        """Play the engine's reply after ``delay`` seconds on the running loop.

        ``new_game`` cancels the task if it has not fired yet.
        """
        if self._pending is not None and not self._pending.done():
            self._pending.cancel()
        self._pending = asyncio.get_running_loop().create_task(self._delayed_reply(delay))
        return self._pending


def self_play(max_depth_a: int = 9, max_depth_b: int = 9) -> Tuple[GameStatus, List[int]]:
    """Let the engine play both sides from the empty board."""
    board = new_board()
    turn = 0
    moves: List[int] = []
    while True:
        depth = max_depth_a if turn % 2 == 0 else max_depth_b
        cell = select_move(board, turn, depth)
        if cell is None:
            return GameStatus.DRAW, moves
        mark = mark_for_turn(turn)
        board = apply_move(board, cell, mark)
        turn += 1
        moves.append(cell)
        if has_won(board, win_target(mark)):
            status = GameStatus.A_WON if mark == PLAYER_A else GameStatus.B_WON
            return status, moves
        if turn >= BOARD_SIZE:
            return GameStatus.DRAW, moves
