"""Exceptions raised by the host runtime.

Games never raise these for illegal moves: a plugin reports the problem as a
string from validate_action() and GameSession turns it into an exception.
"""

from __future__ import annotations

from yinsh_engine.engine.models import Action


class GameEngineError(Exception):
    """Base class for engine errors."""


class InvalidActionError(GameEngineError):
    """The plugin refused the action; the match state is unchanged."""

    def __init__(self, message: str, action: Action | None = None):
        self.message = message
        self.action = action
        super().__init__(message)


class GameNotActiveError(GameEngineError):
    """Action submitted to a finished match."""


class NotYourTurnError(GameEngineError):
    """Action submitted by a player the current phase is not waiting on."""


class InvalidConfigError(GameEngineError):
    """Match could not be created with the given options or players."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class UnknownGameError(GameEngineError, KeyError):
    """No plugin is registered under the requested game id."""
