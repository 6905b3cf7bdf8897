"""Synchronous game simulator: advances game state through auto-resolve phases.

GameSession applies every accepted action through here; tests use it to
drive a plugin without a session.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from yinsh_engine.engine.models import Action, Event, GameResult, Phase, Player, PlayerId
from yinsh_engine.engine.protocol import GamePlugin

# Upper bound on chained auto-resolve phases after one player action
MAX_AUTO_RESOLVE = 50


@dataclass
class SimulationState:
    """Working copy of a match, mutated in place by the simulator."""

    game_data: dict
    phase: Phase
    players: list[Player]
    scores: dict[str, float] = field(default_factory=dict)
    game_over: GameResult | None = None
    events: list[Event] = field(default_factory=list)


def apply_action_and_resolve(
    plugin: GamePlugin,
    state: SimulationState,
    action: Action,
) -> None:
    """Apply an action, then every auto-resolve phase that follows it.

    Afterwards ``state.phase`` waits on a player, or ``state.game_over`` is
    set, or MAX_AUTO_RESOLVE synthetic steps have run. Events of all steps
    are appended to ``state.events`` in order.
    """
    _step(plugin, state, action)

    for _ in range(MAX_AUTO_RESOLVE):
        if state.game_over or not state.phase.auto_resolve:
            return
        synthetic = Action(
            action_type=state.phase.name,
            player_id=phase_player_id(state.phase, state.players),
        )
        _step(plugin, state, synthetic)


def phase_player_id(phase: Phase, players: list[Player]) -> PlayerId:
    """Who acts in phase: expected action, then metadata seat, then seat 0."""
    pid = phase.acting_player()
    if pid is not None:
        return pid
    seat = phase.metadata.get("player_index")
    if seat is not None and seat < len(players):
        return players[seat].player_id
    if players:
        return players[0].player_id
    return PlayerId("system")


def _step(plugin: GamePlugin, state: SimulationState, action: Action) -> None:
    result = plugin.apply_action(state.game_data, state.phase, action, state.players)
    state.game_data = result.game_data
    state.phase = result.next_phase
    if result.scores:
        state.scores = result.scores
    state.game_over = result.game_over
    state.events.extend(result.events)
