"""Exceptions raised by the engine, the game controller and the config layer."""


class EngineError(Exception):
    pass


class InvalidBoardError(EngineError, ValueError):
    """Board is malformed, or does not match the given turn counter."""


class IllegalMoveError(EngineError, ValueError):
    """Cell is occupied or outside 0..8."""


class GameOverError(EngineError):
    """A move was requested after the game already ended."""


class ConfigError(EngineError, ValueError):
    pass
