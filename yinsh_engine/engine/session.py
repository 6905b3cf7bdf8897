from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING
from uuid import uuid4

if TYPE_CHECKING:
    from yinsh_engine.engine.protocol import GamePlugin

from yinsh_engine.engine.errors import (
    GameNotActiveError,
    InvalidActionError,
    InvalidConfigError,
    NotYourTurnError,
)
from yinsh_engine.engine.game_simulator import SimulationState, apply_action_and_resolve
from yinsh_engine.engine.models import (
    Action,
    Event,
    GameConfig,
    GameId,
    GameResult,
    GameState,
    GameStatus,
    MatchId,
    Player,
    PlayerId,
    PlayerView,
)

logger = logging.getLogger(__name__)


class GameSession:
    """
    Orchestrates a single game match in-process.

    Responsibilities:
    - Validate action envelopes (game active, correct player's turn)
    - Delegate to plugin for validation and state transitions
    - Replace the state snapshot on every accepted action
    - Build per-player views
    - Manage game completion

    Sessions share nothing: each owns its own GameState, and the state is
    replaced rather than edited, so a snapshot read earlier stays valid.
    """

    def __init__(self, plugin: GamePlugin, state: GameState) -> None:
        self.match_id = state.match_id
        self.plugin = plugin
        self.state = state
        self.result: GameResult | None = None
        self.events: list[Event] = []

    @classmethod
    def create(
        cls,
        plugin: GamePlugin,
        players: list[Player],
        config: GameConfig | None = None,
        match_id: MatchId | None = None,
    ) -> GameSession:
        """Start a new match of plugin's game."""
        config = config or GameConfig()
        errors = plugin.validate_config(config.options)
        if errors:
            raise InvalidConfigError(errors)
        if not plugin.min_players <= len(players) <= plugin.max_players:
            raise InvalidConfigError([
                f"{plugin.game_id} needs {plugin.min_players}-{plugin.max_players} players, "
                f"got {len(players)}"
            ])

        game_data, phase, events = plugin.create_initial_state(players, config)
        state = GameState(
            match_id=match_id or MatchId(str(uuid4())),
            game_id=GameId(plugin.game_id),
            players=players,
            current_phase=phase,
            config=config,
            game_data=game_data,
            scores={p.player_id: 0.0 for p in players},
        )
        session = cls(plugin, state)
        session.events.extend(events)
        logger.info(f"Created {plugin.game_id} match {state.match_id}")
        return session

    # ------------------------------------------------------------------ #
    #  Action handling
    # ------------------------------------------------------------------ #

    def handle_action(self, action: Action) -> list[Event]:
        """
        Main entry point. Called when a player submits an action.

        Process:
        1. Validate envelope (game active, correct player)
        2. Plugin validates the action
        3. Plugin applies it, auto-resolve phases run
        4. Replace the state snapshot; finish the game if it ended

        Raises before step 3 leave the state untouched.
        Returns the events produced by the action.
        """
        # 1. Validate envelope
        self._validate_envelope(action)

        # 2. Plugin validates
        error = self.plugin.validate_action(
            self.state.game_data, self.state.current_phase, action
        )
        if error:
            logger.info(
                f"Match {self.match_id}: rejected {action.action_type} "
                f"from {action.player_id}: {error}"
            )
            raise InvalidActionError(error, action)

        # 3. Apply on a private copy so the current snapshot never changes
        sim = SimulationState(
            game_data=copy.deepcopy(self.state.game_data),
            phase=self.state.current_phase,
            players=self.state.players,
            scores=dict(self.state.scores),
        )
        apply_action_and_resolve(self.plugin, sim, action)

        # 4. Replace state
        self.state = self.state.model_copy(update={
            "game_data": sim.game_data,
            "current_phase": sim.phase,
            "scores": sim.scores,
            "action_number": self.state.action_number + 1,
        })
        self.events.extend(sim.events)

        if sim.game_over:
            self._finish_game(sim.game_over)

        return sim.events

    def _validate_envelope(self, action: Action) -> None:
        """Check game is active and it's the right player's turn."""
        if self.state.status != GameStatus.ACTIVE:
            raise GameNotActiveError(f"Game is {self.state.status.value}")

        expected = self.state.current_phase.acting_player()
        if expected is not None and action.player_id != expected:
            raise NotYourTurnError(f"Expected {expected}, got {action.player_id}")

    def _finish_game(self, result: GameResult) -> None:
        self.state = self.state.model_copy(update={"status": GameStatus.FINISHED})
        self.result = result
        logger.info(
            f"Match {self.match_id} finished: winners={result.winners}, "
            f"reason={result.reason}"
        )

    # ------------------------------------------------------------------ #
    #  Views
    # ------------------------------------------------------------------ #

    def get_player_view(self, player_id: PlayerId | None) -> PlayerView:
        """State as seen by one player (or a spectator, with None).

        The view holds copies: editing it never reaches the match.
        """
        view_data = self.plugin.get_player_view(
            self.state.game_data,
            self.state.current_phase,
            player_id,
            self.state.players,
        )
        valid_actions: list[dict] = []
        if self.state.status == GameStatus.ACTIVE and player_id is not None:
            valid_actions = self.plugin.get_valid_actions(
                self.state.game_data,
                self.state.current_phase,
                player_id,
            )

        return PlayerView(
            match_id=self.match_id,
            game_id=self.state.game_id,
            players=list(self.state.players),
            current_phase=self.state.current_phase,
            status=self.state.status,
            scores=dict(self.state.scores),
            game_data=copy.deepcopy(view_data),
            valid_actions=valid_actions,
            viewer_id=player_id,
            result=self.result,
        )
