#!/usr/bin/env python3
from __future__ import annotations

import argparse
import logging
import math
import statistics as stats
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from ttt_engine.arena import run_arena
from ttt_engine.config import get_git_commit, runs_dir
from ttt_engine.game_basics import new_board
from ttt_engine.solver import SearchStats, best_move, minimax_plain
from ttt_engine.tracking import log_metrics, log_params, maybe_mlflow_run


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
    seeds: int = 5
    arena_games: int = 50
    tracking: str = "none"  # or "mlflow"
    log_dir: Path = runs_dir()


def main() -> int:
    p = argparse.ArgumentParser(description="Time the search and the arena")
    p.add_argument("--seeds", type=int, default=Config.seeds)
    p.add_argument("--arena-games", type=int, default=Config.arena_games)
    p.add_argument("--tracking", choices=["none", "mlflow"], default=Config.tracking)
    ns = p.parse_args()
    cfg = Config(seeds=ns.seeds, arena_games=ns.arena_games, tracking=ns.tracking)
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")

    with maybe_mlflow_run(cfg.tracking == "mlflow", run_name="benchmarks", log_dir=cfg.log_dir):
        log_params({"seeds": cfg.seeds, "arena_games": cfg.arena_games, "git_commit": get_git_commit()})

        pruned = SearchStats()
        best_move(new_board(), stats=pruned)
        plain = SearchStats()
        minimax_plain(new_board(), 0, True, stats=plain)
        logging.info("empty board nodes: alpha-beta=%d plain=%d", pruned.nodes, plain.nodes)

        search_times: List[float] = []
        arena_times: List[float] = []
        for s in range(cfg.seeds):
            t0 = time.perf_counter()
            best_move(new_board())
            t1 = time.perf_counter()
            search_times.append(t1 - t0)
            t2 = time.perf_counter()
            run_arena(cfg.arena_games, "adversarial", "random", seed=s)
            t3 = time.perf_counter()
            arena_times.append(t3 - t2)
        m_search, h_search = ci95(search_times)
        m_arena, h_arena = ci95(arena_times)
        metrics = {
            "alpha_beta_nodes": float(pruned.nodes),
            "plain_nodes": float(plain.nodes),
            "search_mean_s": m_search,
            "search_ci95_half_s": h_search,
            "arena_mean_s": m_arena,
            "arena_ci95_half_s": h_arena,
        }
        log_metrics(metrics)
    for k, v in metrics.items():
        print(f"{k}={v:.6f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
