"""Board state for Yinsh.

A board maps occupied points to the ring or marker on them. Boards are
never changed in place: every helper returns a new Board, and cells is a
read-only mapping.
"""

from __future__ import annotations

from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from yinsh_engine.games.yinsh.lattice import Coordinate, coord_to_key, key_to_coord
from yinsh_engine.games.yinsh.types import (
    Color,
    Element,
    FrozenMapping,
    PieceKind,
    frozen_mapping,
)


def _no_cells() -> FrozenMapping[str, Element]:
    return frozen_mapping({})


class Board(BaseModel):
    model_config = ConfigDict(frozen=True)

    # "a,b" -> element; string keys keep the board JSON-friendly
    cells: FrozenMapping[str, Element] = Field(default_factory=_no_cells)

    def occupant(self, c: Coordinate) -> Element | None:
        return self.cells.get(coord_to_key(c))

    def is_empty(self, c: Coordinate) -> bool:
        return coord_to_key(c) not in self.cells

    def elements_of(self, color: Color, kind: PieceKind) -> frozenset[Coordinate]:
        """Coordinates holding a piece of the given kind and colour."""
        return frozenset(
            key_to_coord(key)
            for key, element in self.cells.items()
            if element.color == color and element.kind == kind
        )

    def count(self, kind: PieceKind, color: Color | None = None) -> int:
        return sum(
            1
            for element in self.cells.values()
            if element.kind == kind and (color is None or element.color == color)
        )

    def place(self, c: Coordinate, element: Element) -> Board:
        """Return a board with element at c, replacing whatever was there."""
        cells = dict(self.cells)
        cells[coord_to_key(c)] = element
        return Board(cells=cells)

    def remove(self, coords: Iterable[Coordinate]) -> Board:
        cells = dict(self.cells)
        for c in coords:
            cells.pop(coord_to_key(c), None)
        return Board(cells=cells)

    def flip(self, coords: Iterable[Coordinate]) -> Board:
        """Return a board where the markers at coords change colour.

        Points without a marker are ignored.
        """
        cells = dict(self.cells)
        for c in coords:
            key = coord_to_key(c)
            element = cells.get(key)
            if element is not None and element.kind == PieceKind.MARKER:
                cells[key] = Element(kind=PieceKind.MARKER, color=element.color.opponent)
        return Board(cells=cells)


def create_empty_board() -> Board:
    return Board()


def occupant(board: Board, c: Coordinate) -> Element | None:
    """The element at c, if any."""
    return board.occupant(c)


def elements_of(
    board: Board,
    color: Color,
    kind: PieceKind = PieceKind.MARKER,
) -> frozenset[Coordinate]:
    """Coordinates of a player's markers (or rings, with kind=RING)."""
    return board.elements_of(color, kind)
