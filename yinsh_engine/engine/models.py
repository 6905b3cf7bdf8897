"""Host-side data model shared by the runtime and every game plugin.

Snapshots that leave the runtime (GameState, PlayerView, TransitionResult)
are frozen; a session moves forward by replacing its GameState, never by
editing it.
"""

from __future__ import annotations

from enum import Enum
from typing import NewType

from pydantic import BaseModel, ConfigDict, Field

PlayerId = NewType("PlayerId", str)
MatchId = NewType("MatchId", str)
GameId = NewType("GameId", str)


class Player(BaseModel):
    """A seat at the table. seat_index fixes turn order and colour."""

    model_config = ConfigDict(frozen=True)

    player_id: PlayerId
    display_name: str
    seat_index: int


class GameConfig(BaseModel):
    """Per-match options, checked by the plugin's validate_config()."""

    model_config = ConfigDict(frozen=True)

    options: dict = Field(default_factory=dict)


class ExpectedAction(BaseModel):
    """An action type the phase accepts, and from whom."""

    model_config = ConfigDict(frozen=True)

    player_id: PlayerId | None = None
    action_type: str


class Phase(BaseModel):
    """Where a match stands and who is expected to act.

    An auto_resolve phase needs no player input: the simulator applies a
    synthetic action named after the phase. This is part of the host
    contract for every plugin, including those (like Yinsh) whose phases
    always wait on a player.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    expected_actions: list[ExpectedAction] = Field(default_factory=list)
    auto_resolve: bool = False
    metadata: dict = Field(default_factory=dict)

    def acting_player(self) -> PlayerId | None:
        """Player named by the first expected action, if any."""
        if self.expected_actions:
            return self.expected_actions[0].player_id
        return None


class Action(BaseModel):
    """A player's submission. The payload format belongs to the plugin."""

    model_config = ConfigDict(frozen=True)

    action_type: str
    player_id: PlayerId
    payload: dict = Field(default_factory=dict)


class Event(BaseModel):
    model_config = ConfigDict(frozen=True)

    event_type: str
    player_id: PlayerId | None = None
    payload: dict = Field(default_factory=dict)


class GameStatus(str, Enum):
    ACTIVE = "active"
    FINISHED = "finished"


class GameResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    winners: list[PlayerId]
    final_scores: dict[str, float]  # PlayerId -> score
    reason: str = "normal"
    details: dict = Field(default_factory=dict)


class GameState(BaseModel):
    """Everything the runtime knows about one match at one moment."""

    model_config = ConfigDict(frozen=True)

    match_id: MatchId
    game_id: GameId
    players: list[Player]
    current_phase: Phase
    status: GameStatus = GameStatus.ACTIVE
    action_number: int = 0
    config: GameConfig = Field(default_factory=GameConfig)
    game_data: dict = Field(default_factory=dict)
    scores: dict[str, float] = Field(default_factory=dict)  # PlayerId -> score


class TransitionResult(BaseModel):
    """What a plugin returns from apply_action()."""

    model_config = ConfigDict(frozen=True)

    game_data: dict
    events: list[Event]
    next_phase: Phase
    scores: dict[str, float] = Field(default_factory=dict)
    game_over: GameResult | None = None


class PlayerView(BaseModel):
    """A GameState filtered for one viewer, plus the actions open to them."""

    model_config = ConfigDict(frozen=True)

    match_id: MatchId
    game_id: GameId
    players: list[Player]
    current_phase: Phase
    status: GameStatus
    scores: dict[str, float]
    game_data: dict
    valid_actions: list[dict] = Field(default_factory=list)
    viewer_id: PlayerId | None = None
    result: GameResult | None = None
