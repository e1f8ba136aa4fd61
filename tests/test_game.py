import asyncio

import pytest

from ttt_engine.board import PLAYER_A, PLAYER_B, legal_moves, new_board
from ttt_engine.errors import GameOverError, IllegalMoveError
from ttt_engine.game import Game
from ttt_engine.rules import GameStatus


def test_moves_alternate_and_turn_advances():
    g = Game()
    assert g.is_human_turn
    g.play(4)
    assert g.board[4] == PLAYER_A
    assert g.turn == 1 and g.mover == PLAYER_B
    assert not g.is_human_turn
    cell = g.opponent_move()
    assert g.board[cell] == PLAYER_B
    assert g.turn == 2
    assert g.last_move == cell
    assert g.moves == [4, cell]


def test_win_ends_game():
    g = Game()
    for cell in (0, 3, 1, 4):
        assert g.play(cell) is GameStatus.ONGOING
    assert g.play(2) is GameStatus.A_WON
    assert g.status.is_over
    assert not g.is_human_turn
    with pytest.raises(GameOverError):
        g.play(5)
    with pytest.raises(GameOverError):
        g.opponent_move()


def test_ninth_mark_without_line_is_a_draw():
    g = Game()
    for cell in (0, 1, 2, 4, 3, 5, 7, 6):
        assert g.play(cell) is GameStatus.ONGOING
    assert g.play(8) is GameStatus.DRAW
    assert g.turn == 9


def test_o_can_win():
    g = Game()
    for cell in (0, 3, 1, 4, 8):
        g.play(cell)
    assert g.play(5) is GameStatus.B_WON


def test_occupied_cell_rejected_without_side_effects():
    g = Game()
    g.play(0)
    with pytest.raises(IllegalMoveError):
        g.play(0)
    assert g.turn == 1
    assert g.moves == [0]


def test_engine_opens_when_human_plays_o():
    g = Game(human_mark=PLAYER_B, opponent_depth=9)
    assert not g.is_human_turn
    with pytest.raises(IllegalMoveError):
        Game().opponent_move()
    g.opponent_move()
    assert g.turn == 1
    assert g.is_human_turn


def test_engine_blocks_human_threat():
    g = Game(opponent_depth=3)
    for cell in (0, 4, 1):
        g.play(cell)
    assert g.opponent_move() == 2


def test_invalid_human_mark():
    with pytest.raises(ValueError):
        Game(human_mark=0)


def test_new_game_resets_state():
    g = Game()
    g.play(4)
    g.new_game()
    assert g.board == new_board()
    assert g.turn == 0
    assert g.status is GameStatus.ONGOING
    assert g.moves == [] and g.last_move is None


def test_scheduled_opponent_plays_after_delay():
    async def scenario():
        g = Game()
        g.play(4)
        cell = await g.schedule_opponent(0)
        return g, cell

    g, cell = asyncio.run(scenario())
    assert g.turn == 2
    assert g.board[cell] == PLAYER_B


def test_new_game_cancels_pending_opponent():
    async def scenario():
        g = Game()
        g.play(4)
        task = g.schedule_opponent(10)
        await asyncio.sleep(0)
        g.new_game()
        with pytest.raises(asyncio.CancelledError):
            await task
        return g

    g = asyncio.run(scenario())
    assert g.board == new_board()
    assert g.turn == 0


def test_human_move_rejected_while_reply_pending():
    async def scenario():
        g = Game()
        g.human_move(4)
        task = g.schedule_opponent(0.01)
        with pytest.raises(IllegalMoveError):
            g.human_move(0)
        cell = await task
        return g, cell

    g, cell = asyncio.run(scenario())
    assert g.board[cell] == PLAYER_B
    assert g.board.count(PLAYER_B) == 1
    assert g.turn == 2
    assert g.is_human_turn


def test_human_move_rejected_on_engine_turn():
    g = Game(human_mark=PLAYER_B)
    with pytest.raises(IllegalMoveError):
        g.human_move(0)
    assert g.turn == 0
    g.opponent_move()
    assert g.human_move(legal_moves(g.board)[0]) is GameStatus.ONGOING
    assert g.turn == 2


def test_moves_rejected_after_draw():
    g = Game(human_mark=PLAYER_B)
    for cell in (0, 1, 2, 4, 3, 5, 7, 6, 8):
        g.play(cell)
    assert g.status is GameStatus.DRAW
    with pytest.raises(GameOverError):
        g.opponent_move()
    with pytest.raises(GameOverError):
        g.human_move(0)
