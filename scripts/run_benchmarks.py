#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
import time
from dataclasses import dataclass
from typing import List, Tuple

from ttt_engine.board import new_board
from ttt_engine.solver import clear_cache, select_move


def ci95(values: List[float]) -> Tuple[float, float]:
    if not values:
        return (float("nan"), float("nan"))
    m = stats.fmean(values)
    s = stats.pstdev(values) if len(values) > 1 else 0.0
    z = 1.96
    half = z * (s / math.sqrt(len(values)))
    return m, half


@dataclass
class Config:
    repeats: int = 10
    depths: Tuple[int, ...] = (1, 3, 5, 8, 9)
    workers: int = 1


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Time select_move from the empty board")
    ap.add_argument("--repeats", type=int, default=Config.repeats)
    ap.add_argument("--workers", type=int, default=Config.workers)
    args = ap.parse_args(argv)
    cfg = Config(repeats=args.repeats, workers=args.workers)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    for depth in cfg.depths:
        times: List[float] = []
        for _ in range(cfg.repeats):
            # cold cache each run so every timing covers the full search
            clear_cache()
            t0 = time.perf_counter()
            select_move(new_board(), 0, depth, cfg.workers)
            times.append(time.perf_counter() - t0)
        m, h = ci95(times)
        logging.info("depth=%d mean=%.4fs ± %.4fs (95%% CI, N=%d)", depth, m, h, cfg.repeats)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
