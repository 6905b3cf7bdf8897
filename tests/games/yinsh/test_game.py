from __future__ import annotations

import logging

from yinsh_engine.games.yinsh.actions import DropRing, PickRing, PlaceRing, TakeRing
from yinsh_engine.games.yinsh.game import YinshGame
from yinsh_engine.games.yinsh.state import AddMarker, AddRing, MoveRing
from yinsh_engine.games.yinsh.types import Color, Rejection, RejectionReason

B = Color.BLACK
W = Color.WHITE


class TestYinshGame:
    def test_starts_with_new_game(self) -> None:
        game = YinshGame()
        state = game.current_state()
        assert isinstance(state.turn_mode, AddRing)
        assert state.active_player == B

    def test_accepted_action_replaces_snapshot(self) -> None:
        game = YinshGame()
        first = game.current_state()
        result = game.submit_action(PlaceRing(at=(6, 6)))
        assert result is game.current_state()
        assert first.board.cells == {}
        assert result.active_player == W

    def test_rejected_action_keeps_snapshot(self) -> None:
        game = YinshGame()
        game.submit_action(PlaceRing(at=(6, 6)))
        before = game.current_state()
        result = game.submit_action(PlaceRing(at=(6, 6)))
        assert isinstance(result, Rejection)
        assert result.reason == RejectionReason.OCCUPIED
        assert game.current_state() is before

    def test_rejection_is_logged(self, caplog) -> None:
        game = YinshGame()
        with caplog.at_level(logging.INFO, logger="yinsh_engine.games.yinsh.game"):
            game.submit_action(PlaceRing(at=(0, 0)))
        assert "off_board" in caplog.text

    def test_games_are_independent(self) -> None:
        one = YinshGame()
        two = YinshGame()
        one.submit_action(PlaceRing(at=(6, 6)))
        assert two.current_state().board.cells == {}


class TestPickAndCancel:
    def test_cancel_restores_selection(self, make_state) -> None:
        game = YinshGame(make_state(rings={(6, 6): B, (9, 9): W}))
        before = game.current_state()
        game.submit_action(PickRing(origin=(6, 6)))
        assert isinstance(game.current_state().turn_mode, MoveRing)

        result = game.cancel()
        assert isinstance(result.turn_mode, AddMarker)
        assert result.board == before.board

    def test_cancel_without_pick_rejected(self, make_state) -> None:
        game = YinshGame(make_state(rings={(6, 6): B}))
        result = game.cancel()
        assert isinstance(result, Rejection)
        assert result.reason == RejectionReason.WRONG_PHASE

    def test_legal_moves(self, make_state) -> None:
        game = YinshGame(make_state(
            rings={(1, 2): B, (6, 6): B, (1, 3): W, (2, 3): W, (2, 2): W},
        ))
        assert game.legal_origins() == {(6, 6)}
        assert game.legal_origins(W)
        assert (6, 10) in game.legal_destinations((6, 6))
        assert game.legal_destinations((1, 2)) == frozenset()


class TestFullTurn:
    def test_row_to_win(self, make_state, caplog) -> None:
        game = YinshGame(make_state(
            rings={(7, 3): B, (3, 8): B, (9, 9): W},
            markers={(7, 4): B, (7, 5): B, (7, 6): B, (7, 7): B},
            rings_removed={B: 2, W: 0},
        ))
        game.submit_action(PickRing(origin=(7, 3)))
        game.submit_action(DropRing(dest=(8, 3)))
        with caplog.at_level(logging.INFO, logger="yinsh_engine.games.yinsh.game"):
            final = game.submit_action(TakeRing(at=(3, 8)))

        assert final.is_over
        assert final.winner == B
        assert "Game over" in caplog.text
        assert game.current_state() is final
