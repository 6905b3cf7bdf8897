"""Player choices accepted by the Yinsh rules engine."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from yinsh_engine.games.yinsh.lattice import Coordinate, key_to_coord


class PlaceRing(BaseModel):
    model_config = ConfigDict(frozen=True)
    action_type: Literal["place_ring"] = "place_ring"
    at: Coordinate


class PickRing(BaseModel):
    model_config = ConfigDict(frozen=True)
    action_type: Literal["pick_ring"] = "pick_ring"
    origin: Coordinate


class DropRing(BaseModel):
    model_config = ConfigDict(frozen=True)
    action_type: Literal["drop_ring"] = "drop_ring"
    dest: Coordinate


class CancelPick(BaseModel):
    """Put a picked-up ring back where it was."""

    model_config = ConfigDict(frozen=True)
    action_type: Literal["cancel_pick"] = "cancel_pick"


class SelectRow(BaseModel):
    model_config = ConfigDict(frozen=True)
    action_type: Literal["select_row"] = "select_row"
    markers: tuple[Coordinate, ...]


class TakeRing(BaseModel):
    model_config = ConfigDict(frozen=True)
    action_type: Literal["take_ring"] = "take_ring"
    at: Coordinate


Choice = Annotated[
    Union[PlaceRing, PickRing, DropRing, CancelPick, SelectRow, TakeRing],
    Field(discriminator="action_type"),
]

_choice_adapter: TypeAdapter = TypeAdapter(Choice)


def parse_choice(action_type: str, payload: dict) -> Choice:
    """Build a choice from a host action payload.

    Coordinates arrive as "a,b" keys. Raises ValueError on malformed input.
    """
    data: dict = {"action_type": action_type}
    for field_name in ("at", "origin", "dest"):
        if field_name in payload:
            data[field_name] = _coord(payload[field_name])
    if "markers" in payload:
        if not isinstance(payload["markers"], (list, tuple)):
            raise ValueError("markers must be a list of coordinates")
        data["markers"] = tuple(_coord(m) for m in payload["markers"])
    return _choice_adapter.validate_python(data)


def _coord(value: object) -> Coordinate:
    if isinstance(value, str):
        return key_to_coord(value)
    try:
        a, b = value
    except (TypeError, ValueError):
        raise ValueError(f"Invalid coordinate: {value!r}") from None
    # bool is an int subclass
    if not all(isinstance(n, int) and not isinstance(n, bool) for n in (a, b)):
        raise ValueError(f"Invalid coordinate: {value!r}")
    return a, b
