"""Five-in-a-row detection.

A row is a maximal run of five or more same-colour markers along one axis.
Any five consecutive markers of a row can be removed, so a run of six offers
two candidate selections and crossing rows offer one selection each.
"""

from __future__ import annotations

from yinsh_engine.games.yinsh.board import Board
from yinsh_engine.games.yinsh.connectivity import line_from
from yinsh_engine.games.yinsh.lattice import AXES, Coordinate, add, opposite, vector
from yinsh_engine.games.yinsh.types import MARKERS_FOR_ROW, Color, PieceKind

Row = tuple[Coordinate, ...]


def find_runs(board: Board, color: Color, min_length: int = MARKERS_FOR_ROW) -> list[Row]:
    """Return every maximal run of at least min_length markers of a colour.

    Each run is ordered along its axis.
    """
    markers = board.elements_of(color, PieceKind.MARKER)
    runs: list[Row] = []

    for direction in AXES:
        back = vector(opposite(direction))
        for start in sorted(markers):
            # Only start counting at the first marker of a run
            if add(start, back) in markers:
                continue
            run = [start]
            for c in line_from(start, direction):
                if c not in markers:
                    break
                run.append(c)
            if len(run) >= min_length:
                runs.append(tuple(run))

    return runs


def row_candidates(board: Board, color: Color) -> list[Row]:
    """All selections of exactly five contiguous markers a player may remove."""
    candidates: list[Row] = []
    for run in find_runs(board, color):
        for i in range(len(run) - MARKERS_FOR_ROW + 1):
            candidates.append(run[i:i + MARKERS_FOR_ROW])
    return candidates


def match_candidate(board: Board, color: Color, markers: list[Coordinate]) -> Row | None:
    """Return the candidate covering exactly the given markers, if there is one."""
    wanted = set(markers)
    if len(wanted) != MARKERS_FOR_ROW:
        return None
    for candidate in row_candidates(board, color):
        if set(candidate) == wanted:
            return candidate
    return None
