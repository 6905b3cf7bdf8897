from __future__ import annotations

import pytest

from yinsh_engine.games.yinsh.board import Board
from yinsh_engine.games.yinsh.lattice import Coordinate
from yinsh_engine.games.yinsh.state import AddMarker, YinshState
from yinsh_engine.games.yinsh.types import Color, Element, PieceKind


def _make_board(
    rings: dict[Coordinate, Color] | None = None,
    markers: dict[Coordinate, Color] | None = None,
) -> Board:
    board = Board()
    for c, color in (rings or {}).items():
        board = board.place(c, Element(kind=PieceKind.RING, color=color))
    for c, color in (markers or {}).items():
        board = board.place(c, Element(kind=PieceKind.MARKER, color=color))
    return board


def _make_state(
    rings: dict[Coordinate, Color] | None = None,
    markers: dict[Coordinate, Color] | None = None,
    active: Color = Color.BLACK,
    turn_mode=None,
    rings_removed: dict[Color, int] | None = None,
    rings_to_win: int = 3,
) -> YinshState:
    """A main-phase position with both players' rings already placed."""
    return YinshState(
        active_player=active,
        turn_mode=turn_mode if turn_mode is not None else AddMarker(),
        board=_make_board(rings, markers),
        rings_placed={Color.BLACK: 5, Color.WHITE: 5},
        rings_removed=rings_removed or {Color.BLACK: 0, Color.WHITE: 0},
        rings_to_win=rings_to_win,
    )


@pytest.fixture
def make_board():
    return _make_board


@pytest.fixture
def make_state():
    return _make_state
