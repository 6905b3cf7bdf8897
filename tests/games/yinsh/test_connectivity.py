"""Tests for straight-line relations on the Yinsh board."""

from __future__ import annotations

from typing import Iterator

from yinsh_engine.games.yinsh.connectivity import (
    connected,
    direction_between,
    line_from,
    neighbors,
    points_between,
    reachable,
)
from yinsh_engine.games.yinsh.lattice import Direction, all_coordinates


class TestConnected:
    def test_same_column(self) -> None:
        assert connected((3, 4), (3, 8))

    def test_same_row(self) -> None:
        assert connected((3, 4), (8, 4))

    def test_same_diagonal(self) -> None:
        assert connected((2, 3), (6, 7))

    def test_off_line(self) -> None:
        assert not connected((6, 3), (7, 5))

    def test_symmetric(self) -> None:
        points = sorted(all_coordinates())
        for a in points:
            for b in points:
                assert connected(a, b) == connected(b, a)


class TestReachable:
    def test_includes_start(self) -> None:
        assert (6, 6) in reachable((6, 6))

    def test_only_board_points(self) -> None:
        assert reachable((1, 2)) <= all_coordinates()

    def test_reachability_is_symmetric(self) -> None:
        for c in all_coordinates():
            for p in reachable(c):
                assert c in reachable(p)

    def test_every_point_within_two_moves(self) -> None:
        points = all_coordinates()
        for c in points:
            two_hops = set()
            for p in reachable(c):
                two_hops |= reachable(p)
            assert two_hops == points


class TestNeighbors:
    def test_center_has_six(self) -> None:
        assert neighbors((6, 6)) == {(6, 7), (7, 7), (7, 6), (6, 5), (5, 5), (5, 6)}

    def test_corner_has_three(self) -> None:
        assert neighbors((1, 2)) == {(1, 3), (2, 3), (2, 2)}

    def test_every_point_has_neighbors(self) -> None:
        covered = set()
        for c in all_coordinates():
            covered |= neighbors(c)
        assert covered == all_coordinates()

    def test_neighbor_relation_is_symmetric(self) -> None:
        for c in all_coordinates():
            for n in neighbors(c):
                assert c in neighbors(n)

    def test_point_is_neighbor_of_its_neighbors(self) -> None:
        for c in all_coordinates():
            second = set()
            for n in neighbors(c):
                second |= neighbors(n)
            assert c in second


class TestLineFrom:
    def test_stops_at_board_edge(self) -> None:
        assert list(line_from((6, 6), Direction.N)) == [(6, 7), (6, 8), (6, 9), (6, 10)]

    def test_excludes_start(self) -> None:
        assert (6, 6) not in list(line_from((6, 6), Direction.S))

    def test_empty_at_edge(self) -> None:
        assert list(line_from((1, 2), Direction.S)) == []

    def test_is_lazy_and_restartable(self) -> None:
        line = line_from((1, 2), Direction.NE)
        assert isinstance(line, Iterator)
        assert next(line) == (2, 3)
        assert list(line_from((1, 2), Direction.NE))[0] == (2, 3)

    def test_every_point_stays_on_line(self) -> None:
        for c in all_coordinates():
            for d in Direction:
                for p in line_from(c, d):
                    assert p in all_coordinates()
                    assert connected(c, p)


class TestDirectionBetween:
    def test_each_axis(self) -> None:
        assert direction_between((6, 6), (6, 9)) == Direction.N
        assert direction_between((6, 6), (6, 2)) == Direction.S
        assert direction_between((6, 6), (8, 8)) == Direction.NE
        assert direction_between((6, 6), (4, 4)) == Direction.SW
        assert direction_between((6, 6), (9, 6)) == Direction.SE
        assert direction_between((6, 6), (2, 6)) == Direction.NW

    def test_unconnected_or_same_point(self) -> None:
        assert direction_between((6, 6), (7, 8)) is None
        assert direction_between((6, 6), (6, 6)) is None

    def test_points_between(self) -> None:
        assert points_between((6, 3), (6, 7)) == [(6, 4), (6, 5), (6, 6)]
        assert points_between((6, 3), (6, 4)) == []
        assert points_between((6, 3), (7, 5)) == []
