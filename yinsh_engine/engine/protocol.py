"""The contract between the host runtime and a game.

A plugin is stateless: everything it needs arrives as arguments, and all game
state lives in the JSON-serialisable ``game_data`` dict the host stores for it.
Plugins must not mutate the ``game_data`` they are given; transitions return a
fresh dict inside a TransitionResult.
"""

from __future__ import annotations

from typing import ClassVar, Protocol, runtime_checkable

from yinsh_engine.engine.models import (
    Action,
    Event,
    GameConfig,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)


@runtime_checkable
class GamePlugin(Protocol):
    """Interface that every game must implement."""

    game_id: ClassVar[str]
    display_name: ClassVar[str]
    min_players: ClassVar[int]
    max_players: ClassVar[int]
    description: ClassVar[str]
    # JSON schema of GameConfig.options accepted by validate_config()
    config_schema: ClassVar[dict]

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        """Set up a match. Must be deterministic for the same inputs."""
        ...

    def validate_config(self, options: dict) -> list[str]:
        """Return one message per problem with the options (empty = OK)."""
        ...

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        """Action payloads player_id may submit now, each with an "action_type"."""
        ...

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        """Return why action is illegal, or None. Never raises on bad payloads."""
        ...

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        """Apply an action that validate_action() accepted."""
        ...

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        """What player_id may see of game_data; None is a spectator."""
        ...
