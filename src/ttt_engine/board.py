"""
Board representation, serialization and move helpers.
Notes:
- A board is a list of 9 cells: 0=empty, +1=X (player A), -1=O (player B).
- Indices map to the 3x3 grid in row-major order. X always starts.
- The turn counter is the number of marks already placed; even turns are X's.
"""
from typing import List

from .errors import IllegalMoveError, InvalidBoardError

EMPTY = 0
PLAYER_A = 1
PLAYER_B = -1
BOARD_SIZE = 9
CELL_VALUES = (EMPTY, PLAYER_A, PLAYER_B)

WIN_COMBINATIONS = (
    (0, 1, 2), (3, 4, 5), (6, 7, 8),
    (0, 3, 6), (1, 4, 7), (2, 5, 8),
    (0, 4, 8), (2, 4, 6),
)

# Text form used on the command line: 0=empty, 1=X, 2=O.
_CHAR_TO_CELL = {
    '0': EMPTY, '.': EMPTY, '-': EMPTY,
    '1': PLAYER_A, 'x': PLAYER_A,
    '2': PLAYER_B, 'o': PLAYER_B,
}
_CELL_TO_DIGIT = {EMPTY: '0', PLAYER_A: '1', PLAYER_B: '2'}
_CELL_TO_SYMBOL = {PLAYER_A: 'X', PLAYER_B: 'O'}


def new_board() -> List[int]:
    return [EMPTY] * BOARD_SIZE


def mark_for_turn(turn: int) -> int:
    return PLAYER_A if turn % 2 == 0 else PLAYER_B


def symbol(mark: int) -> str:
    return _CELL_TO_SYMBOL[mark]


def legal_moves(board: List[int]) -> List[int]:
    return [i for i, v in enumerate(board) if v == EMPTY]


def count_marks(board: List[int]) -> int:
    return sum(1 for v in board if v != EMPTY)


def apply_move(board: List[int], idx: int, mark: int) -> List[int]:
    """Return a copy of ``board`` with ``mark`` placed at ``idx``."""
    if not 0 <= idx < BOARD_SIZE:
        raise IllegalMoveError(f"Cell index out of range: {idx}")
    if board[idx] != EMPTY:
        raise IllegalMoveError(f"Cell {idx} is already occupied")
    b = list(board)
    b[idx] = mark
    return b


def validate_board(board: List[int]) -> None:
    if len(board) != BOARD_SIZE:
        raise InvalidBoardError(f"Board must have {BOARD_SIZE} cells, got {len(board)}")
    for i, v in enumerate(board):
        if v not in CELL_VALUES:
            raise InvalidBoardError(f"Cell {i} holds {v!r}; expected one of {CELL_VALUES}")


def check_consistent(board: List[int], turn: int) -> None:
    """Fail fast when ``board`` could not have been produced in ``turn`` moves.

    X moves on even turns, so after ``turn`` moves X owns (turn + 1) // 2 cells
    and O owns turn // 2.
    """
    validate_board(board)
    if not 0 <= turn <= BOARD_SIZE:
        raise InvalidBoardError(f"Turn must be within 0..{BOARD_SIZE}, got {turn}")
    x_count = board.count(PLAYER_A)
    o_count = board.count(PLAYER_B)
    if x_count + o_count != turn:
        raise InvalidBoardError(
            f"Board has {x_count + o_count} marks but turn is {turn}"
        )
    if x_count != (turn + 1) // 2 or o_count != turn // 2:
        raise InvalidBoardError(
            f"Mark counts X={x_count} O={o_count} do not follow X-first order at turn {turn}"
        )


def serialize_board(board: List[int]) -> str:
    return ''.join(_CELL_TO_DIGIT[cell] for cell in board)


def deserialize_board(board_str: str) -> List[int]:
    raw = board_str.strip().lower()
    if len(raw) != BOARD_SIZE:
        raise InvalidBoardError("Invalid board string. Must be 9 chars of 0/1/2.")
    try:
        return [_CHAR_TO_CELL[c] for c in raw]
    except KeyError as exc:
        raise InvalidBoardError(f"Invalid board character: {exc.args[0]!r}") from None


def render_board(board: List[int]) -> str:
    """Three-line grid; empty cells show their index so a player can pick one."""
    rows = []
    for r in range(3):
        cells = []
        for c in range(3):
            i = r * 3 + c
            cells.append(_CELL_TO_SYMBOL.get(board[i], str(i)))
        rows.append(' | '.join(cells))
    return '\n---------\n'.join(rows)
