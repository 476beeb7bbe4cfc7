"""Room model: wall lengths in feet and the pixel rectangle derived from them.

A room is always an axis-aligned rectangle. Opposite walls share one length,
so editing any wall also updates the wall across from it, and the pixel size
is recomputed from the edited pair.
"""

from __future__ import annotations

import logging
import math
import re
import uuid
from dataclasses import dataclass, field
from enum import Enum

from config import (
    DEFAULT_WALL_SIDE_FT,
    DEFAULT_WALL_TOP_FT,
    PX_PER_FT,
    ROOM_BASE_OFFSET_PX,
    ROOM_CASCADE_STEP_PX,
)
from tools.units import feet_to_px

log = logging.getLogger(__name__)


class Side(str, Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


OPPOSITE_SIDE: dict[Side, Side] = {
    Side.TOP: Side.BOTTOM,
    Side.BOTTOM: Side.TOP,
    Side.LEFT: Side.RIGHT,
    Side.RIGHT: Side.LEFT,
}

# Leading decimal number, e.g. "15", "-2", ".5", "12.5 ft", "1e2"
_LEADING_NUMBER = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


@dataclass
class Walls:
    """Wall lengths in feet."""
    top: float = DEFAULT_WALL_TOP_FT
    right: float = DEFAULT_WALL_SIDE_FT
    bottom: float = DEFAULT_WALL_TOP_FT
    left: float = DEFAULT_WALL_SIDE_FT

    def get(self, side: Side | str) -> float:
        return getattr(self, to_side(side).value)


@dataclass
class Room:
    """One rectangular room on the canvas (position and size in pixels)."""
    name: str
    x: float
    y: float
    walls: Walls = field(default_factory=Walls)
    w: float = 0.0
    h: float = 0.0
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def recompute_size(self, scale: float = PX_PER_FT) -> None:
        """Derive the pixel size from the top and left walls."""
        self.w = feet_to_px(self.walls.top, scale)
        self.h = feet_to_px(self.walls.left, scale)

    @property
    def right_edge(self) -> float:
        return self.x + self.w

    @property
    def bottom_edge(self) -> float:
        return self.y + self.h


def to_side(side: Side | str) -> Side:
    """Coerce a side name to :class:`Side`; unknown names raise ValueError."""
    if isinstance(side, Side):
        return side
    try:
        return Side(str(side).lower())
    except ValueError:
        raise ValueError(f"Unknown wall side: {side!r}") from None


def opposite(side: Side | str) -> Side:
    return OPPOSITE_SIDE[to_side(side)]


def parse_length(raw) -> float | None:
    """Parse a wall length from user input.

    Numbers are taken as-is. Text is stripped and its leading number used, so
    ``"15 ft"`` reads as 15. Returns None for anything that is not a finite
    positive length.
    """
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        value = float(raw)
    else:
        match = _LEADING_NUMBER.match(str(raw).strip())
        if not match:
            return None
        value = float(match.group(0))
    if not math.isfinite(value) or value <= 0:
        return None
    return value


def create_room(
    sequence_index: int,
    counter_value: int,
    scale: float = PX_PER_FT,
) -> Room:
    """Build a room with default walls, staggered by its insertion index."""
    offset = ROOM_BASE_OFFSET_PX + sequence_index * ROOM_CASCADE_STEP_PX
    room = Room(name=f"Room {counter_value}", x=offset, y=offset)
    room.recompute_size(scale)
    return room


def set_wall_length(
    room: Room,
    side: Side | str,
    new_length,
    scale: float = PX_PER_FT,
) -> bool:
    """Set one wall and its opposite to *new_length* feet.

    *new_length* may be a number or raw prompt text. Invalid input leaves the
    room untouched and returns False.
    """
    side = to_side(side)
    value = parse_length(new_length)
    if value is None:
        log.debug("Rejected %s wall length %r for %s", side.value, new_length, room.name)
        return False

    setattr(room.walls, side.value, value)
    setattr(room.walls, opposite(side).value, value)
    if side in (Side.TOP, Side.BOTTOM):
        room.w = feet_to_px(value, scale)
    else:
        room.h = feet_to_px(value, scale)
    return True
