"""YinshPlugin implements the GamePlugin protocol for Yinsh.

game_data holds the serialised YinshState under "state" and the seat
assignment under "colors" (colour -> player id). Coordinates travel as
"a,b" strings in payloads.
"""

from __future__ import annotations

from typing import ClassVar

from yinsh_engine.config import settings
from yinsh_engine.engine.models import (
    Action,
    Event,
    ExpectedAction,
    GameConfig,
    GameResult,
    Phase,
    Player,
    PlayerId,
    TransitionResult,
)
from yinsh_engine.games.yinsh import rules
from yinsh_engine.games.yinsh.actions import DropRing, parse_choice
from yinsh_engine.games.yinsh.connectivity import points_between
from yinsh_engine.games.yinsh.lattice import all_coordinates, coord_to_key
from yinsh_engine.games.yinsh.rows import row_candidates
from yinsh_engine.games.yinsh.state import (
    AddMarker,
    AddRing,
    MoveRing,
    RemoveRing,
    RemoveRow,
    YinshState,
)
from yinsh_engine.games.yinsh.types import BLITZ_RINGS_TO_WIN, Color, PieceKind

VARIANTS = ("standard", "blitz")

MODE_ACTIONS: dict[str, list[str]] = {
    "add_ring": ["place_ring"],
    "add_marker": ["pick_ring"],
    "move_ring": ["drop_ring", "cancel_pick"],
    "remove_row": ["select_row"],
    "remove_ring": ["take_ring"],
    "game_over": [],
}

EVENT_TYPES: dict[str, str] = {
    "place_ring": "ring_placed",
    "pick_ring": "ring_picked",
    "drop_ring": "ring_moved",
    "cancel_pick": "pick_cancelled",
    "select_row": "row_selected",
    "take_ring": "ring_removed",
}


class YinshPlugin:
    """Yinsh: rings, markers and five in a row on a hexagonal board."""

    game_id: ClassVar[str] = "yinsh"
    display_name: ClassVar[str] = "YINSH"
    min_players: ClassVar[int] = 2
    max_players: ClassVar[int] = 2
    description: ClassVar[str] = (
        "Move rings to flip markers and line up five of your colour. "
        "The first player to remove three rings wins."
    )
    config_schema: ClassVar[dict] = {
        "type": "object",
        "properties": {
            "variant": {"type": "string", "enum": list(VARIANTS)},
            "rings_to_win": {"type": "integer", "minimum": 1},
        },
    }

    # ── Lifecycle ──

    def create_initial_state(
        self,
        players: list[Player],
        config: GameConfig,
    ) -> tuple[dict, Phase, list[Event]]:
        seated = sorted(players, key=lambda p: p.seat_index)
        colors = {
            Color.BLACK.value: seated[0].player_id,
            Color.WHITE.value: seated[1].player_id,
        }
        state = rules.new_game(
            rings_per_player=settings.rings_per_player,
            rings_to_win=_rings_to_win(config.options),
        )
        game_data = {"state": state.model_dump(mode="json"), "colors": colors}

        events = [
            Event(event_type="game_started", payload={
                "players": [p.player_id for p in seated],
                "colors": colors,
                "rings_to_win": state.rings_to_win,
            }),
        ]
        return game_data, make_phase(state, colors), events

    def validate_config(self, options: dict) -> list[str]:
        errors: list[str] = []
        for key in options:
            if key not in self.config_schema["properties"]:
                errors.append(f"Unknown option: {key}")

        variant = options.get("variant", "standard")
        if variant not in VARIANTS:
            errors.append(f"Unknown variant: {variant}")

        if "rings_to_win" in options:
            value = options["rings_to_win"]
            if (
                not isinstance(value, int)
                or isinstance(value, bool)
                or not 1 <= value <= settings.rings_per_player
            ):
                errors.append(
                    f"rings_to_win must be an integer between 1 and {settings.rings_per_player}"
                )
        return errors

    # ── Core game loop ──

    def get_valid_actions(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId,
    ) -> list[dict]:
        state = _load_state(game_data)
        if state.is_over or game_data["colors"].get(state.active_player.value) != player_id:
            return []

        board = state.board
        mode = state.turn_mode
        if isinstance(mode, AddRing):
            return [
                {"action_type": "place_ring", "at": coord_to_key(c)}
                for c in sorted(all_coordinates())
                if board.is_empty(c)
            ]
        if isinstance(mode, AddMarker):
            return [
                {"action_type": "pick_ring", "origin": coord_to_key(c)}
                for c in sorted(rules.legal_origins(state, state.active_player))
            ]
        if isinstance(mode, MoveRing):
            actions = [
                {"action_type": "drop_ring", "dest": coord_to_key(c)}
                for c in sorted(rules.legal_destinations(state, mode.origin))
            ]
            actions.append({"action_type": "cancel_pick"})
            return actions
        if isinstance(mode, RemoveRow):
            return [
                {"action_type": "select_row", "markers": [coord_to_key(c) for c in row]}
                for row in row_candidates(board, state.active_player)
            ]
        if isinstance(mode, RemoveRing):
            return [
                {"action_type": "take_ring", "at": coord_to_key(c)}
                for c in sorted(board.elements_of(state.active_player, PieceKind.RING))
            ]
        return []

    def validate_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
    ) -> str | None:
        state = _load_state(game_data)
        color = _color_of(game_data, action.player_id)
        if color is None:
            return f"Unknown player: {action.player_id}"
        if color != state.active_player and not state.is_over:
            return f"It is {state.active_player.value}'s turn"

        try:
            choice = parse_choice(action.action_type, action.payload)
        except ValueError as e:
            return f"Invalid {action.action_type} payload: {e}"

        rejection = rules.check_action(state, choice)
        if rejection is not None:
            return str(rejection)
        return None

    def apply_action(
        self,
        game_data: dict,
        phase: Phase,
        action: Action,
        players: list[Player],
    ) -> TransitionResult:
        """Apply an action that validate_action() accepted."""
        colors = game_data["colors"]
        state = _load_state(game_data)
        choice = parse_choice(action.action_type, action.payload)
        new_state = rules.apply_action(state, choice)

        payload = dict(action.payload)
        if isinstance(choice, DropRing):
            origin = state.turn_mode.origin
            payload["origin"] = coord_to_key(origin)
            payload["flipped"] = [
                coord_to_key(c)
                for c in points_between(origin, choice.dest)
                if state.board.occupant(c) is not None
            ]
        events = [
            Event(
                event_type=EVENT_TYPES[action.action_type],
                player_id=action.player_id,
                payload=payload,
            ),
        ]

        removed = _removed_markers(state, new_state, choice)
        if removed:
            events.append(Event(
                event_type="row_removed",
                player_id=colors[new_state.active_player.value],
                payload={"markers": removed},
            ))

        new_data = {"state": new_state.model_dump(mode="json"), "colors": colors}
        scores = {
            colors[color.value]: float(new_state.score(color))
            for color in Color
        }

        game_over = None
        if new_state.is_over:
            winner_pid = colors[new_state.winner.value]
            events.append(Event(
                event_type="game_ended",
                payload={
                    "winner": winner_pid,
                    "reason": new_state.outcome.value,
                    "final_scores": scores,
                },
            ))
            game_over = GameResult(
                winners=[winner_pid],
                final_scores=scores,
                reason=new_state.outcome.value,
                details={"rings_removed": {
                    color.value: new_state.score(color) for color in Color
                }},
            )

        return TransitionResult(
            game_data=new_data,
            events=events,
            next_phase=make_phase(new_state, colors),
            scores=scores,
            game_over=game_over,
        )

    # ── View filtering ──

    def get_player_view(
        self,
        game_data: dict,
        phase: Phase,
        player_id: PlayerId | None,
        players: list[Player],
    ) -> dict:
        # No hidden info, return everything
        return {
            "state": game_data["state"],
            "colors": game_data["colors"],
        }


def _load_state(game_data: dict) -> YinshState:
    return YinshState.model_validate(game_data["state"])


def _color_of(game_data: dict, player_id: str) -> Color | None:
    for color, pid in game_data["colors"].items():
        if pid == player_id:
            return Color(color)
    return None


def _rings_to_win(options: dict) -> int:
    if "rings_to_win" in options:
        return options["rings_to_win"]
    if options.get("variant") == "blitz":
        return BLITZ_RINGS_TO_WIN
    return settings.rings_to_win


def _removed_markers(old: YinshState, new: YinshState, choice: object) -> list[str]:
    """Keys of markers that a transition took off the board."""
    before = {
        key for key, element in old.board.cells.items()
        if element.kind == PieceKind.MARKER
    }
    if isinstance(choice, DropRing):
        before.add(coord_to_key(old.turn_mode.origin))
    after = {
        key for key, element in new.board.cells.items()
        if element.kind == PieceKind.MARKER
    }
    return sorted(before - after)


def make_phase(state: YinshState, colors: dict[str, str]) -> Phase:
    mode = state.turn_mode.mode
    if state.is_over:
        return Phase(name=mode, metadata={"winner": state.winner.value})

    player_id = PlayerId(colors[state.active_player.value])
    metadata: dict = {"color": state.active_player.value}
    if isinstance(state.turn_mode, MoveRing):
        metadata["origin"] = coord_to_key(state.turn_mode.origin)
    return Phase(
        name=mode,
        expected_actions=[
            ExpectedAction(player_id=player_id, action_type=action_type)
            for action_type in MODE_ACTIONS[mode]
        ],
        metadata=metadata,
    )
