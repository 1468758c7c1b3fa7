from pathlib import Path

import pytest

import ttt_engine.config as C
from ttt_engine.config import load_settings, repo_root, runs_dir


@pytest.fixture
def clean_env(monkeypatch):
    for var in ("TTT_REPO_ROOT", "TTT_RUNS_DIR", "TTT_DIFFICULTY", "TTT_MODE", "TTT_SEED"):
        monkeypatch.delenv(var, raising=False)
    return monkeypatch


def test_repo_root_prefers_cwd_when_no_git_and_no_env(tmp_path: Path, clean_env):
    clean_env.chdir(tmp_path)
    clean_env.setattr(C, "_find_git_root", lambda start: None)
    assert repo_root() == tmp_path
    assert runs_dir() == tmp_path / "runs"


def test_env_overrides(tmp_path: Path, clean_env):
    clean_env.setenv("TTT_RUNS_DIR", str(tmp_path / "elsewhere"))
    clean_env.setenv("TTT_DIFFICULTY", "impossible")
    clean_env.setenv("TTT_MODE", "PVP")
    clean_env.setenv("TTT_SEED", "17")
    s = load_settings()
    assert s.runs_dir == tmp_path / "elsewhere"
    assert s.difficulty == "adversarial"
    assert s.mode == "pvp"
    assert s.seed == 17


def test_defaults(clean_env):
    s = load_settings()
    assert s.difficulty == "medium"
    assert s.mode == "ai"
    assert s.seed is None


@pytest.mark.parametrize("var,value", [("TTT_SEED", "abc"), ("TTT_MODE", "online"), ("TTT_DIFFICULTY", "nightmare")])
def test_bad_env_values(clean_env, var, value):
    clean_env.setenv(var, value)
    with pytest.raises(ValueError):
        load_settings()


def test_git_commit_is_none_outside_a_repo(tmp_path: Path, clean_env):
    clean_env.setenv("TTT_REPO_ROOT", str(tmp_path))
    assert C.get_git_commit() is None
