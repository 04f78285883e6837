"""JSON load/save of rooms.

The document mirrors the dataclasses in ``core.model`` with snake_case keys.
Entity variants are tagged with ``kind`` (``wall-opening`` or ``fixture``);
unknown tags and malformed rooms are rejected with ``InvalidRoom``.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from typing_extensions import NotRequired, TypedDict

from ..core.model import (
    DOOR_LEAF_SIDES,
    DOOR_STYLES,
    DOOR_SWING_DIRECTIONS,
    FIXTURE_TYPES,
    OPENING_TYPES,
    WINDOW_STYLES,
    Entity,
    Fixture,
    HatchAssignment,
    HatchPair,
    Point,
    Room,
    WallAttachment,
    WallConfig,
    WallOpening,
)
from ..core.validators import InvalidRoom, validate_all


class PointDict(TypedDict):
    x: float
    y: float


class AttachDict(TypedDict):
    wall_seg_index: int
    t: float
    offset_from_wall_mm: NotRequired[float]


class HatchDict(TypedDict):
    pattern_id: str
    color: str
    bg_color: str
    spacing_mm: float
    line_width_mm: float
    angle_deg: float
    opacity: NotRequired[float]
    tile_length_mm: NotRequired[float]
    tile_width_mm: NotRequired[float]
    pair: NotRequired[Dict[str, Any]]


class RoomDict(TypedDict):
    id: str
    inner_loop: List[PointDict]
    wall_thickness: float
    wall_height: float
    dim_text: NotRequired[Dict[str, str]]
    entities: NotRequired[Dict[str, Dict[str, Any]]]
    hatches: NotRequired[Dict[str, HatchDict]]
    wall_config: NotRequired[Dict[str, Any]]


_OPENING_STYLE_FIELDS = {
    "window_style": WINDOW_STYLES,
    "door_style": DOOR_STYLES,
    "door_leaf_side": DOOR_LEAF_SIDES,
    "door_swing_direction": DOOR_SWING_DIRECTIONS,
}


def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in d.items() if v is not None}


def _require(data: Dict[str, Any], key: str, where: str) -> Any:
    if key not in data:
        raise InvalidRoom(f"{where}: missing '{key}'")
    return data[key]


def _attach_from_dict(data: Dict[str, Any], where: str) -> WallAttachment:
    return WallAttachment(
        wall_seg_index=int(_require(data, "wall_seg_index", where)),
        t=float(_require(data, "t", where)),
        offset_from_wall_mm=data.get("offset_from_wall_mm"),
    )


def _attach_to_dict(attach: WallAttachment) -> AttachDict:
    return _drop_none(
        {
            "wall_seg_index": attach.wall_seg_index,
            "t": attach.t,
            "offset_from_wall_mm": attach.offset_from_wall_mm,
        }
    )


def hatch_from_dict(data: Dict[str, Any]) -> HatchAssignment:
    """Build a hatch assignment from its document form.

    Raises:
        InvalidRoom: If a required field is missing.
    """
    where = "hatch"
    pair = data.get("pair")
    return HatchAssignment(
        pattern_id=str(_require(data, "pattern_id", where)),
        color=str(_require(data, "color", where)),
        bg_color=str(_require(data, "bg_color", where)),
        spacing_mm=float(_require(data, "spacing_mm", where)),
        line_width_mm=float(_require(data, "line_width_mm", where)),
        angle_deg=float(_require(data, "angle_deg", where)),
        opacity=float(data.get("opacity", 1.0)),
        tile_length_mm=data.get("tile_length_mm"),
        tile_width_mm=data.get("tile_width_mm"),
        pair=HatchPair(enabled=bool(pair.get("enabled", False)), gap_mm=float(pair.get("gap_mm", 0))) if pair else None,
    )


def hatch_to_dict(h: HatchAssignment) -> HatchDict:
    return _drop_none(
        {
            "pattern_id": h.pattern_id,
            "color": h.color,
            "bg_color": h.bg_color,
            "spacing_mm": h.spacing_mm,
            "line_width_mm": h.line_width_mm,
            "angle_deg": h.angle_deg,
            "opacity": h.opacity,
            "tile_length_mm": h.tile_length_mm,
            "tile_width_mm": h.tile_width_mm,
            "pair": {"enabled": h.pair.enabled, "gap_mm": h.pair.gap_mm} if h.pair else None,
        }
    )


def entity_from_dict(entity_id: str, data: Dict[str, Any]) -> Entity:
    """Build a tagged entity.

    Raises:
        InvalidRoom: On an unknown ``kind``, opening type, style tag or
            fixture type.
    """
    where = f"entity '{entity_id}'"
    kind = data.get("kind")

    if kind == "wall-opening":
        opening_type = _require(data, "opening_type", where)
        if opening_type not in OPENING_TYPES:
            raise InvalidRoom(f"{where}: unknown opening type '{opening_type}'")
        styles = {}
        for key, allowed in _OPENING_STYLE_FIELDS.items():
            value = data.get(key)
            if value is not None and value not in allowed:
                raise InvalidRoom(f"{where}: unknown {key} '{value}'")
            styles[key] = value
        return WallOpening(
            id=entity_id,
            attach=_attach_from_dict(_require(data, "attach", where), where),
            opening_type=opening_type,
            width_mm=float(_require(data, "width_mm", where)),
            height_mm=float(_require(data, "height_mm", where)),
            sill_height_mm=data.get("sill_height_mm"),
            **styles,
        )

    if kind == "fixture":
        fixture_type = _require(data, "fixture_type", where)
        if fixture_type not in FIXTURE_TYPES:
            raise InvalidRoom(f"{where}: unknown fixture type '{fixture_type}'")
        return Fixture(
            id=entity_id,
            attach=_attach_from_dict(_require(data, "attach", where), where),
            fixture_type=fixture_type,
            width_mm=float(_require(data, "width_mm", where)),
            depth_mm=float(_require(data, "depth_mm", where)),
            rotation_deg=data.get("rotation_deg"),
        )

    raise InvalidRoom(f"{where}: unknown entity kind '{kind}'")


def entity_to_dict(entity: Entity) -> Dict[str, Any]:
    if isinstance(entity, WallOpening):
        return _drop_none(
            {
                "kind": entity.kind,
                "attach": _attach_to_dict(entity.attach),
                "opening_type": entity.opening_type,
                "width_mm": entity.width_mm,
                "height_mm": entity.height_mm,
                "sill_height_mm": entity.sill_height_mm,
                "window_style": entity.window_style,
                "door_style": entity.door_style,
                "door_leaf_side": entity.door_leaf_side,
                "door_swing_direction": entity.door_swing_direction,
            }
        )
    if isinstance(entity, Fixture):
        return _drop_none(
            {
                "kind": entity.kind,
                "attach": _attach_to_dict(entity.attach),
                "fixture_type": entity.fixture_type,
                "width_mm": entity.width_mm,
                "depth_mm": entity.depth_mm,
                "rotation_deg": entity.rotation_deg,
            }
        )
    raise TypeError(f"Unknown entity type: {type(entity).__name__}")


def _wall_config_from_dict(data: Optional[Dict[str, Any]]) -> Optional[WallConfig]:
    if not data:
        return None
    hatch = data.get("wall_hatch")
    return WallConfig(
        stroke_width_mm=data.get("stroke_width_mm"),
        wall_hatch=hatch_from_dict(hatch) if hatch else None,
    )


def room_from_dict(data: Dict[str, Any]) -> Room:
    """Build and validate a Room from its document form.

    Args:
        data: Parsed JSON document.

    Returns:
        The room.

    Raises:
        InvalidRoom: If the document is malformed or the room violates a
            structural invariant.
    """
    where = "room"
    try:
        loop = tuple(Point(float(p["x"]), float(p["y"])) for p in _require(data, "inner_loop", where))
        dim_text = {int(k): str(v) for k, v in data.get("dim_text", {}).items()}
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidRoom(f"{where}: malformed inner loop or dimension text ({e})") from e

    room = Room(
        id=str(_require(data, "id", where)),
        inner_loop=loop,
        wall_thickness=float(_require(data, "wall_thickness", where)),
        wall_height=float(_require(data, "wall_height", where)),
        dim_text=dim_text,
        entities={k: entity_from_dict(k, v) for k, v in data.get("entities", {}).items()},
        hatches={k: hatch_from_dict(v) for k, v in data.get("hatches", {}).items()},
        wall_config=_wall_config_from_dict(data.get("wall_config")),
    )
    validate_all(room)
    return room


def room_to_dict(room: Room) -> RoomDict:
    data: Dict[str, Any] = {
        "id": room.id,
        "inner_loop": [{"x": p.x, "y": p.y} for p in room.inner_loop],
        "wall_thickness": room.wall_thickness,
        "wall_height": room.wall_height,
        "dim_text": {str(k): v for k, v in sorted(room.dim_text.items())},
        "entities": {k: entity_to_dict(e) for k, e in room.entities.items()},
        "hatches": {k: hatch_to_dict(h) for k, h in room.hatches.items()},
    }
    if room.wall_config is not None:
        data["wall_config"] = _drop_none(
            {
                "stroke_width_mm": room.wall_config.stroke_width_mm,
                "wall_hatch": hatch_to_dict(room.wall_config.wall_hatch) if room.wall_config.wall_hatch else None,
            }
        )
    return data


def load_room(path: str) -> Room:
    """Load a room from a JSON file.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        InvalidRoom: If the document does not describe a valid room.
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    return room_from_dict(data)


def save_room(room: Room, path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(room_to_dict(room), f, indent=2)
