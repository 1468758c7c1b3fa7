from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

from .adversary import cheat_decision
from .arena import RANDOM, run_arena
from .config import get_git_commit, load_settings
from .difficulty import DIFFICULTIES, parse_difficulty
from .errors import GameError
from .game_basics import AI, HUMAN, MARKS, O, X, evaluate, is_valid_state, parse_board, render_board
from .orchestrator import MODES, GameSession
from .rng import make_rng
from .solver import SearchStats, pick_best, score_moves
from .tactics import live_threats
from .tracking import log_metrics, log_params, maybe_mlflow_run


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    p = argparse.ArgumentParser(prog="ttt", description="Tic-tac-toe with a minimax AI that can cheat")
    sub = p.add_subparsers(dest="cmd")
    p.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")
    p.add_argument("--version", action="store_true", help="Print version and exit")
    p.add_argument(
        "--info",
        action="store_true",
        help="Print environment and dependency info and exit",
    )
    p.add_argument(
        "--seed",
        type=int,
        default=settings.seed,
        help="Seed for the AI random source (default: $TTT_SEED or unseeded)",
    )

    p_play = sub.add_parser("play", help="Play an interactive game in the terminal")
    p_play.add_argument("--mode", choices=MODES, default=settings.mode, help="pvp or ai (default: ai)")
    p_play.add_argument(
        "--difficulty",
        type=parse_difficulty,
        default=settings.difficulty,
        help=f"AI tier: {', '.join(DIFFICULTIES)} (default: medium)",
    )
    p_play.add_argument(
        "--zero-based", action="store_true", help="Enter cells as 0-8 instead of 1-9"
    )

    p_sol = sub.add_parser("solve", help="Best move and per-move minimax scores for a board")
    p_sol.add_argument("--board", required=True, help="Board string, e.g. 110020000 or XX..O....")
    p_sol.add_argument("--player", choices=["X", "O"], default="O", help="Side to move (default: O)")

    p_tac = sub.add_parser("tactics", help="List live threats for both sides")
    p_tac.add_argument("--board", required=True, help="Board string, e.g. 110020000")

    p_cheat = sub.add_parser("cheat", help="Would the adversarial AI move a just-played X?")
    p_cheat.add_argument("--board", required=True, help="Board after the X move, e.g. 100000000")
    p_cheat.add_argument("--index", type=int, required=True, help="Cell (0-8) X just played")

    p_arena = sub.add_parser("arena", help="Simulate bot-vs-AI games and report outcomes")
    p_arena.add_argument("--games", type=int, default=100, help="Number of games (default: 100)")
    p_arena.add_argument(
        "--ai", type=parse_difficulty, default=settings.difficulty, help="AI tier playing O"
    )
    p_arena.add_argument(
        "--opponent",
        choices=[RANDOM, *DIFFICULTIES],
        default=RANDOM,
        help="Bot playing X (default: random)",
    )
    p_arena.add_argument(
        "--tracking",
        choices=["none", "mlflow"],
        default="none",
        help="Experiment tracking backend",
    )
    p_arena.add_argument(
        "--log-dir",
        type=Path,
        default=settings.runs_dir,
        help="Directory for tracking logs (mlflow local backend)",
    )

    return p


def _print_info() -> None:
    import importlib.util
    import platform

    print(f"python={sys.version.split()[0]} platform={platform.platform()}")
    for pkg in ["numpy", "mlflow"]:
        spec = importlib.util.find_spec(pkg)
        if spec is None:
            print(f"{pkg}=<not installed>")
        else:
            mod = __import__(pkg)
            ver = getattr(mod, "__version__", "?")
            print(f"{pkg}={ver}")


def _read_board(raw: str, reachable: bool = False) -> Optional[List[int]]:
    try:
        b = parse_board(raw)
    except ValueError as e:
        logging.error("%s", e)
        return None
    if reachable and not is_valid_state(b):
        logging.error("Board is not a valid reachable state.")
        return None
    return b


def _cmd_solve(ns: argparse.Namespace) -> int:
    b = _read_board(ns.board)
    if b is None:
        return 2
    player = X if ns.player == "X" else O
    result = evaluate(b)
    if result.is_over:
        logging.error("Board is already finished (%s).", result.describe())
        return 2
    stats = SearchStats()
    scores = score_moves(b, player, stats)
    mv = pick_best(scores)
    logging.info(
        "player=%s best=%d scores=%s nodes=%d",
        MARKS[player],
        mv,
        {k: int(v) for k, v in scores.items()},
        stats.nodes,
    )
    return 0


def _cmd_tactics(ns: argparse.Namespace) -> int:
    b = _read_board(ns.board, reachable=True)
    if b is None:
        return 2
    for player in (X, O):
        threats = live_threats(b, player)
        logging.info(
            "%s threats=%s",
            MARKS[player],
            [cell for _, cell in threats],
        )
    return 0


def _cmd_cheat(ns: argparse.Namespace) -> int:
    b = _read_board(ns.board, reachable=True)
    if b is None:
        return 2
    if not 0 <= ns.index < 9 or b[ns.index] != HUMAN:
        logging.error("Cell %d must hold the X that was just played.", ns.index)
        return 2
    decision = cheat_decision(b, ns.index, make_rng(ns.seed))
    logging.info("triggered=%s relocate_to=%s", decision.triggered, decision.relocate_to)
    return 0


def _cmd_arena(ns: argparse.Namespace) -> int:
    if ns.games < 1:
        logging.error("--games must be >= 1")
        return 2
    with maybe_mlflow_run(ns.tracking == "mlflow", run_name="arena", log_dir=ns.log_dir):
        log_params({
            "games": ns.games,
            "ai": ns.ai,
            "opponent": ns.opponent,
            "seed": ns.seed,
            "git_commit": get_git_commit(),
        })
        res = run_arena(ns.games, ns.ai, ns.opponent, seed=ns.seed)
        log_metrics(res.metrics())
    print(
        f"ai={res.ai_difficulty} opponent={res.opponent} games={res.games} "
        f"ai_wins={res.ai_wins} opponent_wins={res.opponent_wins} draws={res.draws} "
        f"cheats={res.cheats}"
    )
    return 0


def _cell_from_input(raw: str, zero_based: bool) -> Optional[int]:
    if not raw.isdigit():
        return None
    idx = int(raw) if zero_based else int(raw) - 1
    return idx if 0 <= idx < 9 else None


def play(session: GameSession, stdin: TextIO, stdout: TextIO, zero_based: bool = False) -> int:
    """Drive a session from text commands: a cell number, ``r`` to restart, ``q`` to quit."""
    lo, hi = (0, 8) if zero_based else (1, 9)

    def show() -> None:
        print(render_board(session.board, numbered=not zero_based), file=stdout)
        print(f"Score X={session.scores[X]} O={session.scores[O]}", file=stdout)

    show()
    print(f"Turn: {MARKS[session.current_player]} (cell {lo}-{hi}, r=restart, q=quit)", file=stdout)
    for line in stdin:
        cmd = line.strip().lower()
        if not cmd:
            continue
        if cmd == "q":
            break
        if cmd == "r":
            session.restart()
            show()
            continue
        idx = _cell_from_input(cmd, zero_based)
        if idx is None:
            print(f"Enter a cell number {lo}-{hi}.", file=stdout)
            continue
        try:
            report = session.turn(idx)
        except GameError as e:
            print(f"Move rejected: {e}", file=stdout)
            continue
        if report.human.relocated:
            shown = report.human.placed if zero_based else report.human.placed + 1
            print(f"The AI moved your {MARKS[report.human.player]} to cell {shown}!", file=stdout)
        if report.ai is not None:
            shown = report.ai.placed if zero_based else report.ai.placed + 1
            print(f"{MARKS[AI]} plays {shown}", file=stdout)
        show()
        if session.is_over:
            print(f"{report.result.describe().capitalize()}! (r=restart, q=quit)", file=stdout)
        else:
            print(f"Turn: {MARKS[session.current_player]}", file=stdout)
    return 0


def main(argv: list[str] | None = None) -> int:
    try:
        parser = build_parser()
    except ValueError as e:
        logging.basicConfig(format="[%(levelname)s] %(message)s")
        logging.error("Bad configuration: %s", e)
        return 2
    ns = parser.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if getattr(ns, "verbose", False) else logging.INFO,
                        format="[%(levelname)s] %(message)s")

    if getattr(ns, "version", False):
        try:
            from importlib.metadata import PackageNotFoundError, version as _ver

            print(_ver("ttt-engine"))
        except PackageNotFoundError:
            print("unknown")
        return 0
    if getattr(ns, "info", False):
        _print_info()
        return 0

    if ns.cmd == "play":
        session = GameSession(mode=ns.mode, difficulty=ns.difficulty, rng=make_rng(ns.seed))
        return play(session, sys.stdin, sys.stdout, zero_based=ns.zero_based)
    if ns.cmd == "solve":
        return _cmd_solve(ns)
    if ns.cmd == "tactics":
        return _cmd_tactics(ns)
    if ns.cmd == "cheat":
        return _cmd_cheat(ns)
    if ns.cmd == "arena":
        return _cmd_arena(ns)

    parser.print_help()
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
