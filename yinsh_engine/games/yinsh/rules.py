"""Yinsh rules engine: the per-turn state machine.

Every action is checked completely against the current snapshot before a
new snapshot is built, so a refused action has no effect at all.

Turn flow:
    add_ring (x 2 * rings_per_player) -> add_marker -> move_ring
    -> [remove_row] -> remove_ring -> ... -> add_marker for the next player

Rows formed by a move are resolved for the mover first, then for the
opponent, until none are left. The next ordinary turn always belongs to the
mover's opponent.
"""

from __future__ import annotations

from yinsh_engine.games.yinsh.actions import (
    CancelPick,
    Choice,
    DropRing,
    PickRing,
    PlaceRing,
    SelectRow,
    TakeRing,
)
from yinsh_engine.games.yinsh.board import Board
from yinsh_engine.games.yinsh.connectivity import (
    connected,
    direction_between,
    line_from,
    points_between,
)
from yinsh_engine.games.yinsh.lattice import Coordinate, Direction, coord_to_key, is_on_board
from yinsh_engine.games.yinsh.rows import match_candidate, row_candidates
from yinsh_engine.games.yinsh.state import (
    AddMarker,
    AddRing,
    GameOver,
    MoveRing,
    RemoveRing,
    RemoveRow,
    YinshState,
)
from yinsh_engine.games.yinsh.types import (
    RINGS_PER_PLAYER,
    RINGS_TO_WIN,
    Color,
    Element,
    Outcome,
    PieceKind,
    Rejection,
    RejectionReason,
    frozen_mapping,
)

# Which turn mode accepts which choice
EXPECTED_MODE: dict[type, type] = {
    PlaceRing: AddRing,
    PickRing: AddMarker,
    DropRing: MoveRing,
    CancelPick: MoveRing,
    SelectRow: RemoveRow,
    TakeRing: RemoveRing,
}


def new_game(
    rings_per_player: int = RINGS_PER_PLAYER,
    rings_to_win: int = RINGS_TO_WIN,
    first_player: Color = Color.BLACK,
) -> YinshState:
    """Empty board, nothing placed, black to place the first ring."""
    return YinshState(
        active_player=first_player,
        turn_mode=AddRing(),
        rings_per_player=rings_per_player,
        rings_to_win=rings_to_win,
    )


# ── Queries ──


def legal_destinations(state: YinshState, origin: Coordinate) -> frozenset[Coordinate]:
    """Points the ring at origin may move to. Empty if origin holds no ring."""
    board = state.board
    element = board.occupant(origin)
    if element is None or element.kind != PieceKind.RING:
        return frozenset()

    destinations: set[Coordinate] = set()
    for direction in Direction:
        jumped = False
        for c in line_from(origin, direction):
            found = board.occupant(c)
            if found is None:
                destinations.add(c)
                if jumped:
                    break
            elif found.kind == PieceKind.RING:
                break
            else:
                jumped = True
    return frozenset(destinations)


def legal_origins(state: YinshState, player: Color) -> frozenset[Coordinate]:
    """Rings of player that have at least one legal destination."""
    return frozenset(
        c
        for c in state.board.elements_of(player, PieceKind.RING)
        if legal_destinations(state, c)
    )


def check_move(board: Board, origin: Coordinate, dest: Coordinate) -> Rejection | None:
    """Check a ring move from origin to dest without applying it."""
    if not is_on_board(dest):
        return Rejection(reason=RejectionReason.OFF_BOARD, detail=coord_to_key(dest))
    if dest == origin:
        return Rejection(
            reason=RejectionReason.OCCUPIED,
            detail=f"ring is already at {coord_to_key(dest)}",
        )
    direction = direction_between(origin, dest)
    if direction is None or not connected(origin, dest):
        return Rejection(
            reason=RejectionReason.NOT_ON_LINE,
            detail=f"{coord_to_key(origin)} -> {coord_to_key(dest)}",
        )

    jumped = False
    for c in line_from(origin, direction):
        found = board.occupant(c)
        if c == dest:
            if found is None:
                return None
            if found.kind == PieceKind.RING:
                return Rejection(
                    reason=RejectionReason.OCCUPIED,
                    detail=f"ring at {coord_to_key(dest)}",
                )
            return Rejection(
                reason=RejectionReason.INVALID_STOP,
                detail=f"cannot stop on the marker at {coord_to_key(dest)}",
            )
        if found is None:
            if jumped:
                return Rejection(
                    reason=RejectionReason.INVALID_STOP,
                    detail=f"must stop at {coord_to_key(c)}, the first empty point after the markers",
                )
        elif found.kind == PieceKind.RING:
            return Rejection(
                reason=RejectionReason.BLOCKED_BY_RING,
                detail=f"ring at {coord_to_key(c)}",
            )
        else:
            jumped = True

    # dest is on board and on the line, so the walk always reaches it
    return Rejection(reason=RejectionReason.NOT_ON_LINE, detail=coord_to_key(dest))


def check_action(state: YinshState, action: Choice) -> Rejection | None:
    """Return why action is illegal in state, or None if it may be applied."""
    if state.is_over:
        return Rejection(reason=RejectionReason.GAME_OVER)

    expected = EXPECTED_MODE[type(action)]
    if not isinstance(state.turn_mode, expected):
        return Rejection(
            reason=RejectionReason.WRONG_PHASE,
            detail=f"{action.action_type} not allowed during {state.turn_mode.mode}",
        )

    if isinstance(action, PlaceRing):
        return _check_place_ring(state, action)
    if isinstance(action, PickRing):
        return _check_pick_ring(state, action)
    if isinstance(action, DropRing):
        return check_move(state.board, state.turn_mode.origin, action.dest)
    if isinstance(action, SelectRow):
        return _check_select_row(state, action)
    if isinstance(action, TakeRing):
        return _check_own_ring(state, action.at)
    return None


# ── Transitions ──


def apply_action(state: YinshState, action: Choice) -> YinshState:
    """Apply an action that check_action() has accepted."""
    if isinstance(action, PlaceRing):
        return _apply_place_ring(state, action)
    if isinstance(action, PickRing):
        return state.model_copy(update={"turn_mode": MoveRing(origin=action.origin)})
    if isinstance(action, CancelPick):
        return state.model_copy(update={"turn_mode": AddMarker()})
    if isinstance(action, DropRing):
        return _apply_drop_ring(state, action)
    if isinstance(action, SelectRow):
        board = state.board.remove(action.markers)
        return state.model_copy(update={
            "board": board,
            "turn_mode": RemoveRing(mover=state.turn_mode.mover),
        })
    if isinstance(action, TakeRing):
        return _apply_take_ring(state, action)
    raise ValueError(f"Unknown action: {action!r}")


def submit_action(state: YinshState, action: Choice) -> YinshState | Rejection:
    """Check and apply an action in one step.

    Returns the new snapshot, or the Rejection when the action is illegal.
    """
    rejection = check_action(state, action)
    if rejection is not None:
        return rejection
    return apply_action(state, action)


# ── Private helpers ──


def _check_place_ring(state: YinshState, action: PlaceRing) -> Rejection | None:
    if not is_on_board(action.at):
        return Rejection(reason=RejectionReason.OFF_BOARD, detail=coord_to_key(action.at))
    if not state.board.is_empty(action.at):
        return Rejection(reason=RejectionReason.OCCUPIED, detail=coord_to_key(action.at))
    return None


def _check_own_ring(state: YinshState, c: Coordinate) -> Rejection | None:
    if not is_on_board(c):
        return Rejection(reason=RejectionReason.OFF_BOARD, detail=coord_to_key(c))
    element = state.board.occupant(c)
    if element is None or element.kind != PieceKind.RING or element.color != state.active_player:
        return Rejection(
            reason=RejectionReason.NOT_OWNER,
            detail=f"no {state.active_player.value} ring at {coord_to_key(c)}",
        )
    return None


def _check_pick_ring(state: YinshState, action: PickRing) -> Rejection | None:
    rejection = _check_own_ring(state, action.origin)
    if rejection is not None:
        return rejection
    if not legal_destinations(state, action.origin):
        return Rejection(
            reason=RejectionReason.BLOCKED_BY_RING,
            detail=f"ring at {coord_to_key(action.origin)} cannot move",
        )
    return None


def _check_select_row(state: YinshState, action: SelectRow) -> Rejection | None:
    for c in action.markers:
        if not is_on_board(c):
            return Rejection(reason=RejectionReason.OFF_BOARD, detail=coord_to_key(c))
    if match_candidate(state.board, state.active_player, list(action.markers)) is None:
        return Rejection(
            reason=RejectionReason.NO_QUALIFYING_RUN,
            detail="markers are not five in a row of your colour",
        )
    return None


def _apply_place_ring(state: YinshState, action: PlaceRing) -> YinshState:
    player = state.active_player
    board = state.board.place(action.at, Element(kind=PieceKind.RING, color=player))
    placed = dict(state.rings_placed)
    placed[player] = placed.get(player, 0) + 1

    placed_state = state.model_copy(update={
        "board": board,
        "rings_placed": frozen_mapping(placed),
    })
    if all(placed.get(color, 0) >= state.rings_per_player for color in Color):
        return _start_turn(placed_state, player.opponent)
    return placed_state.model_copy(update={
        "active_player": player.opponent,
        "turn_mode": AddRing(),
    })


def _apply_drop_ring(state: YinshState, action: DropRing) -> YinshState:
    player = state.active_player
    origin = state.turn_mode.origin

    board = state.board.flip(points_between(origin, action.dest))
    board = board.place(origin, Element(kind=PieceKind.MARKER, color=player))
    board = board.place(action.dest, Element(kind=PieceKind.RING, color=player))

    return _resolve_rows(state.model_copy(update={"board": board}), mover=player)


def _apply_take_ring(state: YinshState, action: TakeRing) -> YinshState:
    player = state.active_player
    board = state.board.remove([action.at])
    removed = dict(state.rings_removed)
    removed[player] = removed.get(player, 0) + 1

    taken = state.model_copy(update={
        "board": board,
        "rings_removed": frozen_mapping(removed),
    })
    if removed[player] >= state.rings_to_win:
        return taken.model_copy(update={
            "turn_mode": GameOver(),
            "winner": player,
            "outcome": Outcome.RINGS_REMOVED,
        })
    return _resolve_rows(taken, mover=state.turn_mode.mover)


def _resolve_rows(state: YinshState, mover: Color) -> YinshState:
    """Hand control to whoever has a row to remove, else end the turn."""
    for color in (mover, mover.opponent):
        candidates = row_candidates(state.board, color)
        if not candidates:
            continue
        if len(candidates) == 1:
            # Only one way to take five markers: no choice to make
            return state.model_copy(update={
                "board": state.board.remove(candidates[0]),
                "active_player": color,
                "turn_mode": RemoveRing(mover=mover),
            })
        return state.model_copy(update={
            "active_player": color,
            "turn_mode": RemoveRow(mover=mover),
        })
    return _start_turn(state, mover.opponent)


def _start_turn(state: YinshState, player: Color) -> YinshState:
    """Begin an ordinary turn; a player without any legal move loses."""
    turn = state.model_copy(update={"active_player": player, "turn_mode": AddMarker()})
    if not legal_origins(turn, player):
        return turn.model_copy(update={
            "turn_mode": GameOver(),
            "winner": player.opponent,
            "outcome": Outcome.NO_LEGAL_MOVE,
        })
    return turn
