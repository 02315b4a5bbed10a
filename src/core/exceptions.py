"""Exceptions raised across layers. All of them are recoverable: the game state is left unchanged."""


class GameError(Exception):
    """Base class for anything the game domain rejects."""


class IllegalMoveError(GameError):
    """Target cell is out of range, occupied, or blocked."""


class GameStateError(IllegalMoveError):
    """The game is not in a state that accepts this action (computer is thinking, game is over, ...)"""


class InvalidConfigurationError(GameError):
    """Board size, run length, blocked cell count or search depth make no sense."""


class InvalidRequestError(Exception):
    """Request could not be validated in the API layer."""


class RepositoryError(Exception):
    """Record could not be found / stored."""
