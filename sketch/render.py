"""Scene rendering.

Redraws everything from the editor state on every pass. The drawing target is
any object with ``clear``, ``stroke_rect`` and ``draw_text``; the Tk canvas
adapter lives in ``gui.app`` and :class:`RecordingSurface` keeps primitives in
memory for headless runs and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from sketch.model import Room, Side
from sketch.state import EditorState
from tools.units import format_feet


class DrawingSurface(Protocol):
    def clear(self, width: float, height: float) -> None: ...

    def stroke_rect(self, x: float, y: float, w: float, h: float,
                    color: str, line_width: float) -> None: ...

    def draw_text(self, x: float, y: float, text: str,
                  color: str, font: str) -> None: ...


@dataclass(frozen=True)
class RenderStyle:
    line_width: float = 4
    selected_color: str = "#1976D2"
    outline_color: str = "#444"
    name_font: str = "14px Arial"
    name_color: str = "#000"
    label_font: str = "12px Arial"
    label_color: str = "#333"


DEFAULT_STYLE = RenderStyle()


@dataclass(frozen=True)
class RoomListEntry:
    """One row of the room list view."""
    room_id: str
    name: str
    selected: bool


def wall_label_positions(room: Room) -> dict[Side, tuple[float, float]]:
    """Text anchor for each wall label, pushed just outside its wall."""
    cx = room.x + room.w / 2
    cy = room.y + room.h / 2
    return {
        Side.TOP: (cx - 18, room.y - 4),
        Side.RIGHT: (room.right_edge + 6, cy),
        Side.BOTTOM: (cx - 18, room.bottom_edge + 14),
        Side.LEFT: (room.x - 40, cy),
    }


def render_scene(
    surface: DrawingSurface,
    state: EditorState,
    width: float,
    height: float,
    style: RenderStyle = DEFAULT_STYLE,
) -> None:
    surface.clear(width, height)

    for room in state.rooms:
        is_selected = room.id == state.selected_id

        surface.stroke_rect(
            room.x, room.y, room.w, room.h,
            style.selected_color if is_selected else style.outline_color,
            style.line_width,
        )
        surface.draw_text(room.x + 8, room.y - 10, room.name,
                          style.name_color, style.name_font)

        for side, (lx, ly) in wall_label_positions(room).items():
            surface.draw_text(lx, ly, format_feet(room.walls.get(side)),
                              style.label_color, style.label_font)


def room_list_entries(state: EditorState) -> list[RoomListEntry]:
    return [
        RoomListEntry(room.id, room.name, room.id == state.selected_id)
        for room in state.rooms
    ]


class RecordingSurface:
    """In-memory drawing surface that keeps the primitives of the last frame."""

    def __init__(self):
        self.size: tuple[float, float] = (0, 0)
        self.ops: list[tuple] = []
        self.frames = 0

    def clear(self, width, height):
        self.size = (width, height)
        self.ops = []
        self.frames += 1

    def stroke_rect(self, x, y, w, h, color, line_width):
        self.ops.append(("rect", x, y, w, h, color, line_width))

    def draw_text(self, x, y, text, color, font):
        self.ops.append(("text", x, y, text, color, font))

    def texts(self) -> list[str]:
        return [op[3] for op in self.ops if op[0] == "text"]

    def rects(self) -> list[tuple]:
        return [op for op in self.ops if op[0] == "rect"]
