"""Engine and game settings.

Environment-first: each setting reads a ``TTT_*`` variable and falls back to a
built-in default. Command-line flags override both.
"""

from __future__ import annotations

import math
import os
from dataclasses import dataclass
from typing import Callable, TypeVar

from .errors import ConfigError
from .solver import DEFAULT_MAX_DEPTH

T = TypeVar("T", int, float)

DEFAULT_OPPONENT_DEPTH = 3
DEFAULT_OPPONENT_DELAY = 0.5


@dataclass
class EngineConfig:
    search_depth: int = DEFAULT_MAX_DEPTH
    opponent_depth: int = DEFAULT_OPPONENT_DEPTH
    opponent_delay: float = DEFAULT_OPPONENT_DELAY
    workers: int = 1


def _env(name: str, default: T, cast: Callable[[str], T], minimum: T) -> T:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = cast(raw.strip())
    except ValueError:
        raise ConfigError(f"{name}={raw!r} is not a valid {cast.__name__}") from None
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be a finite number, got {raw!r}")
    if value < minimum:
        raise ConfigError(f"{name} must be >= {minimum}, got {value}")
    return value


def load_config() -> EngineConfig:
    return EngineConfig(
        search_depth=_env("TTT_SEARCH_DEPTH", DEFAULT_MAX_DEPTH, int, 1),
        opponent_depth=_env("TTT_OPPONENT_DEPTH", DEFAULT_OPPONENT_DEPTH, int, 1),
        opponent_delay=_env("TTT_OPPONENT_DELAY", DEFAULT_OPPONENT_DELAY, float, 0.0),
        workers=_env("TTT_WORKERS", 1, int, 1),
    )
