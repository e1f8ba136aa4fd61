"""
Depth-bounded minimax from a fixed sign convention: X maximizes, O minimizes.
Scoring:
- A finished line scores 10 - (turn - 1) for X and the negation for O, where
  ``turn`` counts marks on the board. Earlier wins have larger magnitude.
- Depth cutoff and a full board both score 0; the search does not tell a
  forced draw apart from an unexplored position.
- Max/min is chosen by turn parity, not recursion depth. Scores from calls
  started at different root turns are not comparable.
Tie-break policy:
- Among equally scored moves the lowest cell index wins.
"""
from __future__ import annotations

import logging
from concurrent.futures import ProcessPoolExecutor
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from .board import BOARD_SIZE, EMPTY, PLAYER_A, check_consistent, mark_for_turn
from .rules import WIN_A, WIN_B, has_won

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 8
WIN_SCORE = 10
# keys include max_depth and depth, so one position may appear several times
SEARCH_CACHE_SIZE = 2 ** 16


def _check_depth(max_depth: int) -> None:
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise ValueError(f"max_depth must be a positive integer, got {max_depth!r}")


def _is_better(candidate: int, best: int, mark: int) -> bool:
    return candidate > best if mark == PLAYER_A else candidate < best


@lru_cache(maxsize=SEARCH_CACHE_SIZE)
def _score_t(board_t: tuple, turn: int, max_depth: int, depth: int) -> int:
    # the mark that produced this board was placed on turn - 1
    if turn % 2 == 1:
        if has_won(board_t, WIN_A):
            return WIN_SCORE - (turn - 1)
    elif has_won(board_t, WIN_B):
        return -(WIN_SCORE - (turn - 1))
    if depth >= max_depth or turn >= BOARD_SIZE:
        return 0
    mark = mark_for_turn(turn)
    best: Optional[int] = None
    for i, v in enumerate(board_t):
        if v != EMPTY:
            continue
        child = board_t[:i] + (mark,) + board_t[i + 1:]
        s = _score_t(child, turn + 1, max_depth, depth + 1)
        if best is None or _is_better(s, best, mark):
            best = s
    return 0 if best is None else best


def score(board: Sequence[int], turn: int, max_depth: int, depth: int = 0) -> int:
    """Score the position ``board`` reached after ``turn`` moves.

    ``depth`` is the number of plies already explored below the root move.
    """
    return _score_t(tuple(board), turn, max_depth, depth)


def _score_candidate(job: Tuple[tuple, int, int]) -> int:
    child_t, turn, max_depth = job
    return _score_t(child_t, turn, max_depth, 0)


def _root_scores(board: Sequence[int], turn: int, max_depth: int, workers: int) -> Tuple[Optional[int], ...]:
    board_t = tuple(board)
    mark = mark_for_turn(turn)
    candidates: List[int] = [i for i, v in enumerate(board_t) if v == EMPTY]
    jobs = [
        (board_t[:i] + (mark,) + board_t[i + 1:], turn + 1, max_depth)
        for i in candidates
    ]
    if workers > 1 and len(jobs) > 1:
        # map() yields in submission order, so the tie-break is unaffected
        with ProcessPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(_score_candidate, jobs))
    else:
        results = [_score_candidate(job) for job in jobs]
    scores: List[Optional[int]] = [None] * BOARD_SIZE
    for i, s in zip(candidates, results):
        scores[i] = s
    return tuple(scores)


def score_moves(
    board: Sequence[int],
    turn: int,
    max_depth: int = DEFAULT_MAX_DEPTH,
    workers: int = 1,
) -> Tuple[Optional[int], ...]:
    """Root score of every cell for the side to move; ``None`` for occupied cells."""
    _check_depth(max_depth)
    if workers < 1:
        raise ValueError(f"workers must be >= 1, got {workers}")
    check_consistent(list(board), turn)
    if turn >= BOARD_SIZE:
        return tuple([None] * BOARD_SIZE)
    return _root_scores(board, turn, max_depth, workers)


def best_from_scores(scores: Sequence[Optional[int]], turn: int) -> Optional[int]:
    mark = mark_for_turn(turn)
    best_idx: Optional[int] = None
    best: Optional[int] = None
    for i, s in enumerate(scores):
        if s is None:
            continue
        if best is None or _is_better(s, best, mark):
            best = s
            best_idx = i
    return best_idx


def select_move(
    board: Sequence[int],
    turn: int,
    max_depth: int = DEFAULT_MAX_DEPTH,
    workers: int = 1,
) -> Optional[int]:
    """Best cell for the side to move, or None when the board is full.

    Raises InvalidBoardError if ``board`` does not match ``turn``.
    """
    scores = score_moves(board, turn, max_depth, workers)
    move = best_from_scores(scores, turn)
    logger.debug("turn=%d max_depth=%d scores=%s move=%s", turn, max_depth, list(scores), move)
    return move


def clear_cache() -> None:
    _score_t.cache_clear()


def cache_info() -> Tuple[int, int, Optional[int], int]:
    """(hits, misses, maxsize, currsize) of the position cache."""
    return _score_t.cache_info()
