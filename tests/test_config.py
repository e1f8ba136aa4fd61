import pytest

from ttt_engine.config import EngineConfig, load_config
from ttt_engine.errors import ConfigError

ENV_VARS = ("TTT_SEARCH_DEPTH", "TTT_OPPONENT_DEPTH", "TTT_OPPONENT_DELAY", "TTT_WORKERS")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


def test_defaults_without_env():
    assert load_config() == EngineConfig(search_depth=8, opponent_depth=3, opponent_delay=0.5, workers=1)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("TTT_SEARCH_DEPTH", "9")
    monkeypatch.setenv("TTT_OPPONENT_DEPTH", " 2 ")
    monkeypatch.setenv("TTT_OPPONENT_DELAY", "0")
    monkeypatch.setenv("TTT_WORKERS", "4")
    cfg = load_config()
    assert cfg.search_depth == 9
    assert cfg.opponent_depth == 2
    assert cfg.opponent_delay == 0.0
    assert cfg.workers == 4


def test_blank_env_falls_back(monkeypatch):
    monkeypatch.setenv("TTT_SEARCH_DEPTH", "")
    assert load_config().search_depth == 8


@pytest.mark.parametrize(
    "var,value",
    [
        ("TTT_SEARCH_DEPTH", "deep"),
        ("TTT_SEARCH_DEPTH", "0"),
        ("TTT_OPPONENT_DEPTH", "1.5"),
        ("TTT_OPPONENT_DELAY", "-1"),
        ("TTT_WORKERS", "0"),
        ("TTT_OPPONENT_DELAY", "inf"),
        ("TTT_OPPONENT_DELAY", "nan"),
    ],
)
def test_bad_env_values(monkeypatch, var, value):
    monkeypatch.setenv(var, value)
    with pytest.raises(ConfigError, match=var):
        load_config()
