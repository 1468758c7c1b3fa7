"""Environment-first settings for the CLI and scripts.

Every default can be overridden through a ``TTT_*`` variable; anything unset
falls back to a built-in value, so the package still works when installed
and run from an arbitrary CWD.
"""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .difficulty import MEDIUM, parse_difficulty
from .orchestrator import MODES, VS_AI


def _find_git_root(start: Path) -> Path | None:
    cur = start
    for _ in range(5):
        if (cur / ".git").exists():
            return cur
        if cur.parent == cur:
            break
        cur = cur.parent
    return None


def repo_root() -> Path:
    """Best-effort repository root.

    Order: env var TTT_REPO_ROOT -> nearest parent containing .git -> CWD.
    """
    env = os.getenv("TTT_REPO_ROOT")
    if env:
        return Path(env)
    git_root = _find_git_root(Path(__file__).resolve())
    if git_root is not None:
        return git_root
    return Path.cwd()


def runs_dir() -> Path:
    p = os.getenv("TTT_RUNS_DIR")
    return Path(p) if p else repo_root() / "runs"


def default_difficulty() -> str:
    raw = os.getenv("TTT_DIFFICULTY")
    return parse_difficulty(raw) if raw else MEDIUM


def default_mode() -> str:
    raw = (os.getenv("TTT_MODE") or "").strip().lower()
    if not raw:
        return VS_AI
    if raw not in MODES:
        raise ValueError(f"TTT_MODE must be one of {', '.join(MODES)}, got {raw!r}")
    return raw


def default_seed() -> Optional[int]:
    raw = os.getenv("TTT_SEED")
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"TTT_SEED must be an integer, got {raw!r}") from e


@dataclass(frozen=True)
class Settings:
    mode: str
    difficulty: str
    seed: Optional[int]
    runs_dir: Path


def load_settings() -> Settings:
    return Settings(
        mode=default_mode(),
        difficulty=default_difficulty(),
        seed=default_seed(),
        runs_dir=runs_dir(),
    )


def get_git_commit() -> str | None:
    """Return the current git commit hash if available, else None."""
    root = repo_root()
    try:
        out = subprocess.check_output(
            ["git", "-C", str(root), "rev-parse", "HEAD"],
            stderr=subprocess.DEVNULL,
            text=True,
            timeout=2.0,
        )
        return out.strip() or None
    except (OSError, subprocess.SubprocessError):
        return None
