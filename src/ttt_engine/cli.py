from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Callable, Optional

from .board import (
    PLAYER_A,
    PLAYER_B,
    count_marks,
    deserialize_board,
    render_board,
    serialize_board,
    symbol,
)
from .config import EngineConfig, load_config
from .errors import EngineError
from .game import Game, self_play
from .rules import GameStatus, game_status, winning_line
from .solver import best_from_scores, score_moves


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe minimax engine")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument("--info", action="store_true", help="Print environment info and exit")

    # move selection
    p_move = sub.add_parser("move", help="Pick the engine's move for a board (9 chars, 0=empty,1=X,2=O)")
    p_move.add_argument("--board", help="Board string, e.g., 110220000 (omit with --stdin)")
    p_move.add_argument(
        "--turn", type=int, default=None, help="Moves already played (default: marks on the board)"
    )
    p_move.add_argument(
        "--depth", type=int, default=None, help="Search depth in plies (default: TTT_SEARCH_DEPTH or 8)"
    )
    p_move.add_argument(
        "--workers", type=int, default=None, help="Processes used to score root moves (default: 1)"
    )
    p_move.add_argument(
        "--stdin", action="store_true", help="Read many boards from stdin and stream CSV output"
    )

    # verdict
    p_status = sub.add_parser("status", help="Report win/draw/ongoing for a board")
    p_status.add_argument("--board", required=True, help="Board string, e.g., 111220000")

    # interactive game
    p_play = sub.add_parser("play", help="Play against the engine in the terminal")
    p_play.add_argument("--human", choices=["x", "o"], default="x", help="Side you play (X moves first)")
    p_play.add_argument(
        "--depth", type=int, default=None, help="Engine search depth (default: TTT_OPPONENT_DEPTH or 3)"
    )
    p_play.add_argument(
        "--delay", type=float, default=None, help="Seconds before the engine replies (default: 0.5)"
    )

    # engine vs engine
    p_self = sub.add_parser("selfplay", help="Let the engine play both sides")
    p_self.add_argument("--depth-a", type=int, default=9, help="Search depth for X")
    p_self.add_argument("--depth-b", type=int, default=9, help="Search depth for O")

    return p


def _print_info() -> None:
    import platform
    import sys

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    cfg = load_config()
    print(
        f"search_depth={cfg.search_depth} opponent_depth={cfg.opponent_depth} "
        f"opponent_delay={cfg.opponent_delay} workers={cfg.workers}"
    )


def _turn_for(board: list, turn: Optional[int]) -> int:
    return count_marks(board) if turn is None else turn


def _format_move(move: Optional[int]) -> str:
    return "none" if move is None else str(move)


async def _opponent_reply(game: Game, delay: float) -> int:
    return await game.schedule_opponent(delay)


def play_interactive(
    game: Game,
    delay: float,
    input_fn: Callable[[str], str] = input,
    out: Callable[[str], None] = print,
) -> GameStatus:
    """Terminal loop: the human types a cell index, the engine answers."""
    while not game.status.is_over:
        if game.is_human_turn:
            out(render_board(game.board))
            try:
                raw = input_fn(f"{symbol(game.human_mark)} to move (0-8, q to quit): ").strip()
            except EOFError:
                return game.status
            if raw.lower() in ("q", "quit"):
                return game.status
            try:
                game.human_move(int(raw))
            except ValueError as exc:
                out(f"Invalid move: {exc}")
            continue
        cell = asyncio.run(_opponent_reply(game, delay))
        out(f"Engine plays {cell}")
    out(render_board(game.board))
    if game.status is GameStatus.DRAW:
        out("Draw!")
    else:
        won = PLAYER_A if game.status is GameStatus.A_WON else PLAYER_B
        out(f"Player {symbol(won)} has won!")
    return game.status


def _cmd_move(ns: argparse.Namespace, cfg: EngineConfig) -> int:
    depth = ns.depth if ns.depth is not None else cfg.search_depth
    workers = ns.workers if ns.workers is not None else cfg.workers
    if ns.stdin:
        import csv as _csv
        import sys as _sys

        w = _csv.writer(_sys.stdout)
        w.writerow(["board", "turn", "move"])
        for line in _sys.stdin:
            raw = line.strip()
            if not raw:
                continue
            try:
                b = deserialize_board(raw)
                turn = _turn_for(b, ns.turn)
                scores = score_moves(b, turn, depth, workers)
            except EngineError:
                continue
            w.writerow([serialize_board(b), turn, _format_move(best_from_scores(scores, turn))])
        return 0
    b = deserialize_board(ns.board or "")
    turn = _turn_for(b, ns.turn)
    scores = score_moves(b, turn, depth, workers)
    move = best_from_scores(scores, turn)
    logging.info("move=%s scores=%s", _format_move(move), list(scores))
    return 0


def _cmd_status(ns: argparse.Namespace) -> int:
    b = deserialize_board(ns.board)
    status = game_status(b, count_marks(b))
    line = winning_line(b)
    logging.info("status=%s line=%s", status.value, list(line) if line else None)
    return 0


def _cmd_play(ns: argparse.Namespace, cfg: EngineConfig) -> int:
    depth = ns.depth if ns.depth is not None else cfg.opponent_depth
    delay = ns.delay if ns.delay is not None else cfg.opponent_delay
    human = PLAYER_A if ns.human == "x" else PLAYER_B
    game = Game(human_mark=human, opponent_depth=depth)
    play_interactive(game, delay)
    return 0


def _cmd_selfplay(ns: argparse.Namespace) -> int:
    status, moves = self_play(ns.depth_a, ns.depth_b)
    logging.info("result=%s moves=%s", status.value, moves)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    # Early exits
    if getattr(ns, "version", False):
        try:
            from importlib.metadata import version as _ver

            print(_ver("ttt-engine"))
        except Exception:
            print("unknown")
        return 0

    try:
        if getattr(ns, "info", False):
            _print_info()
            return 0
        cfg = load_config()
        if ns.cmd == "move":
            return _cmd_move(ns, cfg)
        if ns.cmd == "status":
            return _cmd_status(ns)
        if ns.cmd == "play":
            return _cmd_play(ns, cfg)
        if ns.cmd == "selfplay":
            return _cmd_selfplay(ns)
    except (EngineError, ValueError) as exc:
        logging.error("%s", exc)
        return 2

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
