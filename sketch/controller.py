"""Interaction controller: turns pointer gestures into edits of the editor state.

Gestures are plain enum values, independent of any GUI toolkit, dispatched
through a table of handlers. Each handler that changes the model finishes with
one full render pass before the next gesture is accepted.

Wall lengths are requested through an injected ``prompt(side, current)``
callable returning the raw answer, or None when cancelled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from config import EDGE_TOLERANCE_PX
from sketch.hit_test import edge_at
from sketch.model import Room, Side, set_wall_length
from sketch.render import (
    DEFAULT_STYLE,
    DrawingSurface,
    RenderStyle,
    RoomListEntry,
    render_scene,
    room_list_entries,
)
from sketch.state import EditorState

log = logging.getLogger(__name__)

PromptFn = Callable[[Side, float], Optional[str]]
ListViewFn = Callable[[list[RoomListEntry]], None]


class Gesture(str, Enum):
    POINTER_DOWN = "pointer_down"
    POINTER_MOVE = "pointer_move"
    POINTER_UP = "pointer_up"
    POINTER_LEAVE = "pointer_leave"
    DOUBLE_ACTIVATE = "double_activate"
    LIST_ACTIVATE = "list_activate"


class ControllerMode(str, Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    EDITING_WALL = "editing_wall"


@dataclass
class DragState:
    room_id: str
    offset_x: float
    offset_y: float


class InteractionController:
    """Single owner of the editor state; the only code that mutates it."""

    def __init__(
        self,
        surface: DrawingSurface,
        prompt: PromptFn,
        list_view: Optional[ListViewFn] = None,
        state: Optional[EditorState] = None,
        width: float = 0,
        height: float = 0,
        tolerance: float = EDGE_TOLERANCE_PX,
        style: RenderStyle = DEFAULT_STYLE,
    ):
        self.surface = surface
        self.prompt = prompt
        self.list_view = list_view
        self.state = state if state is not None else EditorState()
        self.width = width
        self.height = height
        self.tolerance = tolerance
        self.style = style

        self.mode = ControllerMode.IDLE
        self.drag: Optional[DragState] = None

        self._handlers: dict[Gesture, Callable[..., bool]] = {
            Gesture.POINTER_DOWN: self._on_pointer_down,
            Gesture.POINTER_MOVE: self._on_pointer_move,
            Gesture.POINTER_UP: self._on_pointer_release,
            Gesture.POINTER_LEAVE: self._on_pointer_release,
            Gesture.DOUBLE_ACTIVATE: self._on_double_activate,
            Gesture.LIST_ACTIVATE: self._on_list_activate,
        }

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def handle(self, gesture: Gesture | str, x: float | None = None,
               y: float | None = None, room_id: str | None = None) -> bool:
        """Apply one gesture. Returns True if the model changed."""
        try:
            gesture = Gesture(gesture)
        except ValueError:
            raise ValueError(f"Unknown gesture: {gesture!r}") from None

        if self.mode is ControllerMode.EDITING_WALL:
            log.debug("Ignoring %s while a wall edit is open", gesture.value)
            return False

        handler = self._handlers[gesture]
        if gesture is Gesture.LIST_ACTIVATE:
            changed = handler(room_id)
        elif gesture in (Gesture.POINTER_UP, Gesture.POINTER_LEAVE):
            changed = handler()
        else:
            if x is None or y is None:
                raise ValueError(f"{gesture.value} needs a point")
            changed = handler(x, y)

        if changed:
            self.render()
        return changed

    def render(self):
        render_scene(self.surface, self.state, self.width, self.height, self.style)
        if self.list_view is not None:
            self.list_view(room_list_entries(self.state))

    # ------------------------------------------------------------------
    # Gesture handlers
    # ------------------------------------------------------------------

    def _on_pointer_down(self, x: float, y: float) -> bool:
        room = self.state.find_at_point(x, y)
        if room is None:
            return False
        self.state.select(room.id)
        self.drag = DragState(room.id, x - room.x, y - room.y)
        self.mode = ControllerMode.DRAGGING
        return True

    def _on_pointer_move(self, x: float, y: float) -> bool:
        if self.mode is not ControllerMode.DRAGGING or self.drag is None:
            return False
        room = self.state.find_by_id(self.drag.room_id)
        if room is None:
            self._end_drag()
            return False
        room.x = x - self.drag.offset_x
        room.y = y - self.drag.offset_y
        return True

    def _on_pointer_release(self) -> bool:
        if self.mode is ControllerMode.DRAGGING:
            room = self.state.find_by_id(self.drag.room_id) if self.drag else None
            if room is not None:
                log.debug("Dropped %s at (%g, %g)", room.name, room.x, room.y)
        self._end_drag()
        return False

    def _on_double_activate(self, x: float, y: float) -> bool:
        room = self.state.find_at_point(x, y)
        if room is None:
            return False
        side = edge_at(room, x, y, self.tolerance)
        if side is None:
            return False
        return self._edit_wall(room, side)

    def _on_list_activate(self, room_id: str | None) -> bool:
        if room_id is None:
            return False
        return self.state.select(room_id)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _end_drag(self):
        self.drag = None
        self.mode = ControllerMode.IDLE

    def _edit_wall(self, room: Room, side: Side) -> bool:
        current = room.walls.get(side)
        self._end_drag()
        self.mode = ControllerMode.EDITING_WALL
        try:
            answer = self.prompt(side, current)
        finally:
            self.mode = ControllerMode.IDLE
        if answer is None:
            log.debug("Wall edit cancelled for %s %s", room.name, side.value)
            return False
        if self.state.find_by_id(room.id) is None:
            log.debug("Wall edit dropped: %s no longer exists", room.name)
            return False
        if not set_wall_length(room, side, answer, self.state.scale):
            return False
        log.info("%s %s wall set to %g ft", room.name, side.value, room.walls.get(side))
        return True

    # ------------------------------------------------------------------
    # Convenience entry points
    # ------------------------------------------------------------------

    def pointer_down(self, x: float, y: float) -> bool:
        return self.handle(Gesture.POINTER_DOWN, x, y)

    def pointer_move(self, x: float, y: float) -> bool:
        return self.handle(Gesture.POINTER_MOVE, x, y)

    def pointer_up(self) -> bool:
        return self.handle(Gesture.POINTER_UP)

    def pointer_leave(self) -> bool:
        return self.handle(Gesture.POINTER_LEAVE)

    def double_activate(self, x: float, y: float) -> bool:
        return self.handle(Gesture.DOUBLE_ACTIVATE, x, y)

    def activate_list_item(self, room_id: str) -> bool:
        return self.handle(Gesture.LIST_ACTIVATE, room_id=room_id)

    def add_room(self) -> Optional[Room]:
        if self.mode is ControllerMode.EDITING_WALL:
            log.debug("Ignoring add room while a wall edit is open")
            return None
        room = self.state.add_room()
        self.render()
        return room

    def undo_last(self) -> Optional[str]:
        if self.mode is ControllerMode.EDITING_WALL:
            log.debug("Ignoring undo while a wall edit is open")
            return self.state.selected_id
        if not len(self.state):
            return None
        if self.drag is not None and self.drag.room_id == self.state.rooms[-1].id:
            self._end_drag()
        selected = self.state.undo_last()
        self.render()
        return selected

    def resize(self, width: float, height: float):
        """Container size changed; redraw at the new size."""
        self.width = width
        self.height = height
        self.render()
