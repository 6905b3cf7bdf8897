"""Single-owner Yinsh game session.

YinshGame wraps the pure rules functions with an explicitly owned current
snapshot: new game -> accepted actions -> terminal. Each instance is
independent, and snapshots it hands out are frozen.
"""

from __future__ import annotations

import logging

from yinsh_engine.games.yinsh.actions import CancelPick, Choice
from yinsh_engine.games.yinsh.lattice import Coordinate
from yinsh_engine.games.yinsh.rules import (
    legal_destinations,
    legal_origins,
    new_game,
    submit_action,
)
from yinsh_engine.games.yinsh.state import YinshState
from yinsh_engine.games.yinsh.types import Color, Rejection

logger = logging.getLogger(__name__)


class YinshGame:
    def __init__(self, state: YinshState | None = None) -> None:
        self._state = state if state is not None else new_game()

    def current_state(self) -> YinshState:
        return self._state

    def submit_action(self, action: Choice) -> YinshState | Rejection:
        """Apply action if legal. Returns the new snapshot or the rejection."""
        result = submit_action(self._state, action)
        if isinstance(result, Rejection):
            logger.info(
                f"Rejected {action.action_type} from {self._state.active_player.value}: {result}"
            )
            return result

        logger.debug(
            f"{self._state.active_player.value} {action.action_type} -> {result.turn_mode.mode}"
        )
        self._state = result
        if result.is_over:
            logger.info(
                f"Game over: {result.winner.value} wins ({result.outcome.value})"
            )
        return result

    def cancel(self) -> YinshState | Rejection:
        """Put a picked-up ring back, returning to ring selection."""
        return self.submit_action(CancelPick())

    def legal_origins(self, player: Color | None = None) -> frozenset[Coordinate]:
        if player is None:
            player = self._state.active_player
        return legal_origins(self._state, player)

    def legal_destinations(self, origin: Coordinate) -> frozenset[Coordinate]:
        return legal_destinations(self._state, origin)
