"""Domain models for Yinsh."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Annotated, Mapping, TypeVar

from pydantic import AfterValidator, BaseModel, ConfigDict, PlainSerializer

RINGS_PER_PLAYER = 5
RINGS_TO_WIN = 3
BLITZ_RINGS_TO_WIN = 1
MARKERS_FOR_ROW = 5

K = TypeVar("K")
V = TypeVar("V")


def frozen_mapping(value: Mapping[K, V]) -> Mapping[K, V]:
    """Read-only copy of value. Writes through it raise TypeError."""
    return MappingProxyType(dict(value))


def _plain_dict(value: Mapping[K, V]) -> dict[K, V]:
    return dict(value)


# Mapping field of a frozen model: validated into a read-only copy, dumped as a dict
FrozenMapping = Annotated[
    Mapping[K, V],
    AfterValidator(frozen_mapping),
    PlainSerializer(_plain_dict, return_type=dict),
]


class Color(str, Enum):
    BLACK = "black"
    WHITE = "white"

    @property
    def opponent(self) -> Color:
        return Color.WHITE if self is Color.BLACK else Color.BLACK


class PieceKind(str, Enum):
    RING = "ring"
    MARKER = "marker"


class Element(BaseModel):
    """A ring or marker owned by one player."""

    model_config = ConfigDict(frozen=True)

    kind: PieceKind
    color: Color


class RejectionReason(str, Enum):
    OFF_BOARD = "off_board"
    OCCUPIED = "occupied"
    NOT_ON_LINE = "not_on_line"
    BLOCKED_BY_RING = "blocked_by_ring"
    INVALID_STOP = "invalid_stop"
    WRONG_PHASE = "wrong_phase"
    NOT_OWNER = "not_owner"
    NO_QUALIFYING_RUN = "no_qualifying_run"
    GAME_OVER = "game_over"


class Rejection(BaseModel):
    """Why an action was refused. The game state is left untouched."""

    model_config = ConfigDict(frozen=True)

    reason: RejectionReason
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.reason.value}: {self.detail}"
        return self.reason.value


class Outcome(str, Enum):
    RINGS_REMOVED = "rings_removed"  # winner removed enough rings
    NO_LEGAL_MOVE = "no_legal_move"  # loser could not move any ring
