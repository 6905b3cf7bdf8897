"""Yinsh board geometry.

The playable area is a bounded patch of a triangular lattice addressed by
axial coordinates (a, b). Columns a = 1..11 each cover a contiguous range of
rows b; together they hold the 85 intersections of the board.

Lines run along three axes: constant a, constant b, and constant a - b.
"""

from __future__ import annotations

from enum import Enum

Coordinate = tuple[int, int]

# Inclusive row range of each column, a = 1..11
COLUMN_ROWS: list[tuple[int, int]] = [
    (2, 5), (1, 7), (1, 8), (1, 9), (1, 10), (2, 10),
    (2, 11), (3, 11), (4, 11), (5, 11), (7, 10),
]


class Direction(str, Enum):
    N = "N"
    NE = "NE"
    SE = "SE"
    S = "S"
    SW = "SW"
    NW = "NW"


DIRECTION_VECTORS: dict[Direction, Coordinate] = {
    Direction.N: (0, 1),
    Direction.NE: (1, 1),
    Direction.SE: (1, 0),
    Direction.S: (0, -1),
    Direction.SW: (-1, -1),
    Direction.NW: (-1, 0),
}

OPPOSITE_DIRECTION: dict[Direction, Direction] = {
    Direction.N: Direction.S,
    Direction.NE: Direction.SW,
    Direction.SE: Direction.NW,
    Direction.S: Direction.N,
    Direction.SW: Direction.NE,
    Direction.NW: Direction.SE,
}

# One direction per axis; the other three are their opposites.
AXES: tuple[Direction, ...] = (Direction.N, Direction.NE, Direction.SE)


def _build_board_points() -> frozenset[Coordinate]:
    return frozenset(
        (a, b)
        for a, (low, high) in enumerate(COLUMN_ROWS, start=1)
        for b in range(low, high + 1)
    )


BOARD_POINTS: frozenset[Coordinate] = _build_board_points()

NUM_POINTS = len(BOARD_POINTS)  # 85


def is_on_board(c: Coordinate) -> bool:
    return c in BOARD_POINTS


def all_coordinates() -> frozenset[Coordinate]:
    """Return every playable point of the board."""
    return BOARD_POINTS


def vector(direction: Direction) -> Coordinate:
    """Unit displacement for a direction."""
    return DIRECTION_VECTORS[direction]


def opposite(direction: Direction) -> Direction:
    return OPPOSITE_DIRECTION[direction]


def add(c1: Coordinate, c2: Coordinate) -> Coordinate:
    """Vector sum. No board check: callers use is_on_board()."""
    return c1[0] + c2[0], c1[1] + c2[1]


def coord_to_key(c: Coordinate) -> str:
    return f"{c[0]},{c[1]}"


def key_to_coord(key: str) -> Coordinate:
    a, b = key.split(",")
    return int(a), int(b)
