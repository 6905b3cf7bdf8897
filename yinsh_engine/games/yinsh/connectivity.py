"""Straight-line relations between board points."""

from __future__ import annotations

from typing import Iterator

from yinsh_engine.games.yinsh.lattice import (
    BOARD_POINTS,
    Coordinate,
    Direction,
    add,
    is_on_board,
    vector,
)


def connected(a: Coordinate, b: Coordinate) -> bool:
    """True if a and b lie on a common lattice line.

    A point is connected to itself.
    """
    return a[0] == b[0] or a[1] == b[1] or a[0] - a[1] == b[0] - b[1]


def reachable(c: Coordinate) -> frozenset[Coordinate]:
    """All board points on one of the three lines through c, c included."""
    return frozenset(p for p in BOARD_POINTS if connected(c, p))


def neighbors(c: Coordinate) -> frozenset[Coordinate]:
    """Board points exactly one step away from c."""
    adjacent = (add(c, vector(d)) for d in Direction)
    return frozenset(p for p in adjacent if is_on_board(p))


def line_from(c: Coordinate, direction: Direction) -> Iterator[Coordinate]:
    """Yield the board points after c in the given direction, up to the edge.

    The board is convex along every axis, so the walk stops at the first
    point that falls off it. A fresh call restarts the walk.
    """
    step = vector(direction)
    current = add(c, step)
    while is_on_board(current):
        yield current
        current = add(current, step)


def direction_between(a: Coordinate, b: Coordinate) -> Direction | None:
    """Direction leading from a towards b, or None if they share no line."""
    da = b[0] - a[0]
    db = b[1] - a[1]
    if da == 0 and db == 0:
        return None
    if da == 0:
        return Direction.N if db > 0 else Direction.S
    if db == 0:
        return Direction.SE if da > 0 else Direction.NW
    if da == db:
        return Direction.NE if da > 0 else Direction.SW
    return None


def points_between(a: Coordinate, b: Coordinate) -> list[Coordinate]:
    """Board points strictly between a and b, ordered from a.

    Returns an empty list when a and b are not on a common line.
    """
    direction = direction_between(a, b)
    if direction is None:
        return []
    between: list[Coordinate] = []
    for c in line_from(a, direction):
        if c == b:
            return between
        between.append(c)
    return []
