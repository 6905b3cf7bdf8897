"""Game state snapshots for Yinsh.

A YinshState is frozen. The rules engine answers every accepted action with
a new snapshot, so a state handed to a caller never changes underneath it. The ring
counters are read-only mappings; writing to one raises TypeError.
"""

from __future__ import annotations

from typing import Annotated, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field

from yinsh_engine.games.yinsh.board import Board
from yinsh_engine.games.yinsh.lattice import Coordinate
from yinsh_engine.games.yinsh.types import (
    RINGS_PER_PLAYER,
    RINGS_TO_WIN,
    Color,
    FrozenMapping,
    Outcome,
    frozen_mapping,
)


class AddRing(BaseModel):
    """Placement phase: the active player puts a ring on an empty point."""

    model_config = ConfigDict(frozen=True)
    mode: Literal["add_ring"] = "add_ring"


class AddMarker(BaseModel):
    """Main phase: the active player picks up one of their rings."""

    model_config = ConfigDict(frozen=True)
    mode: Literal["add_marker"] = "add_marker"


class MoveRing(BaseModel):
    """A ring has been picked up from origin and waits for a destination."""

    model_config = ConfigDict(frozen=True)
    mode: Literal["move_ring"] = "move_ring"
    origin: Coordinate


class RemoveRow(BaseModel):
    """The active player must choose which five markers to take off.

    mover is the player whose ring move formed the rows.
    """

    model_config = ConfigDict(frozen=True)
    mode: Literal["remove_row"] = "remove_row"
    mover: Color


class RemoveRing(BaseModel):
    """The active player must take one of their rings off the board."""

    model_config = ConfigDict(frozen=True)
    mode: Literal["remove_ring"] = "remove_ring"
    mover: Color


class GameOver(BaseModel):
    model_config = ConfigDict(frozen=True)
    mode: Literal["game_over"] = "game_over"


TurnMode = Annotated[
    Union[AddRing, AddMarker, MoveRing, RemoveRow, RemoveRing, GameOver],
    Field(discriminator="mode"),
]


def _zero_counts() -> Mapping[Color, int]:
    return frozen_mapping({Color.BLACK: 0, Color.WHITE: 0})


class YinshState(BaseModel):
    model_config = ConfigDict(frozen=True)

    active_player: Color = Color.BLACK
    turn_mode: TurnMode = Field(default_factory=AddRing)
    board: Board = Field(default_factory=Board)
    rings_placed: FrozenMapping[Color, int] = Field(default_factory=_zero_counts)
    rings_removed: FrozenMapping[Color, int] = Field(default_factory=_zero_counts)
    rings_per_player: int = RINGS_PER_PLAYER
    rings_to_win: int = RINGS_TO_WIN
    winner: Color | None = None
    outcome: Outcome | None = None

    @property
    def is_over(self) -> bool:
        return isinstance(self.turn_mode, GameOver)

    def score(self, color: Color) -> int:
        """Rings a player has removed by completing rows."""
        return self.rings_removed.get(color, 0)
