"""Scripted editor sessions for headless runs.

A script is a ``;``-separated list of commands. Every command goes through the
same gestures the GUI produces, so a script exercises hit testing, dragging and
wall edits exactly as a mouse would:

    add                 add a room
    undo                remove the most recently added room
    select N            activate room N in the list (1-based)
    move N X Y          drag room N so its top-left corner lands on (X, Y)
    wall N SIDE VALUE   double-click SIDE of room N and answer VALUE
    list                print every room
"""

from __future__ import annotations

import logging
from typing import Optional

from sketch.controller import InteractionController
from sketch.hit_test import edge_at
from sketch.model import Room, Side, to_side
from sketch.render import RecordingSurface
from sketch.state import EditorState
from tools.units import format_feet

log = logging.getLogger(__name__)

# Fractions along a wall (or across a room) tried when looking for a grab point.
_PROBES = (0.5, 0.25, 0.75, 0.1, 0.9)


class ScriptError(ValueError):
    """A script command could not be carried out."""


def describe_room(room: Room, selected: bool) -> str:
    w = room.walls
    mark = "*" if selected else " "
    return (
        f"{mark} {room.name}  at ({room.x:g}, {room.y:g})  "
        f"top {format_feet(w.top)} / right {format_feet(w.right)} / "
        f"bottom {format_feet(w.bottom)} / left {format_feet(w.left)}  "
        f"[{room.w:g} x {room.h:g} px]"
    )


class ScriptRunner:
    def __init__(self, scale: Optional[float] = None, width: float = 0, height: float = 0):
        state = EditorState(scale) if scale is not None else EditorState()
        self._answer: Optional[str] = None
        self.surface = RecordingSurface()
        self.controller = InteractionController(
            surface=self.surface,
            prompt=lambda side, current: self._answer,
            state=state,
            width=width,
            height=height,
        )
        self._commands = {
            "add": self._add,
            "undo": self._undo,
            "select": self._select,
            "move": self._move,
            "wall": self._wall,
            "list": self._list,
        }

    @property
    def state(self) -> EditorState:
        return self.controller.state

    def run(self, script: str) -> list[str]:
        out: list[str] = []
        for raw in script.split(";"):
            command = raw.strip()
            if not command:
                continue
            name, *args = command.split()
            handler = self._commands.get(name.lower())
            if handler is None:
                out.append(f"Skipped unknown command: {command}")
                continue
            try:
                out.extend(handler(*args))
            except (TypeError, ValueError) as e:
                log.debug("Command %r failed", command, exc_info=True)
                out.append(f"Skipped '{command}': {e}")
        selected = self.state.selected_room
        out.append(
            f"{len(self.state)} room(s), selected: {selected.name if selected else 'none'}"
        )
        return out

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def _add(self) -> list[str]:
        room = self.controller.add_room()
        return [f"Added {room.name}"]

    def _undo(self) -> list[str]:
        if not len(self.state):
            return ["Nothing to undo"]
        removed = self.state.rooms[-1].name
        self.controller.undo_last()
        return [f"Removed {removed}"]

    def _select(self, index: str) -> list[str]:
        room = self._room(index)
        self.controller.activate_list_item(room.id)
        return [f"Selected {room.name}"]

    def _move(self, index: str, x: str, y: str) -> list[str]:
        room = self._room(index)
        tx, ty = float(x), float(y)
        gx, gy = self._grab_point(room)
        dx, dy = gx - room.x, gy - room.y
        self.controller.pointer_down(gx, gy)
        self.controller.pointer_move(tx + dx, ty + dy)
        self.controller.pointer_up()
        return [f"Moved {room.name} to ({room.x:g}, {room.y:g})"]

    def _wall(self, index: str, side: str, value: str) -> list[str]:
        room = self._room(index)
        side = to_side(side)
        px, py = self._edge_point(room, side)
        self._answer = value
        try:
            changed = self.controller.double_activate(px, py)
        finally:
            self._answer = None
        if not changed:
            return [f"Ignored {side.value} wall of {room.name}: invalid length {value!r}"]
        return [f"{room.name} {side.value} wall = {format_feet(room.walls.get(side))}"]

    def _list(self) -> list[str]:
        if not len(self.state):
            return ["(no rooms)"]
        return [describe_room(r, r.id == self.state.selected_id) for r in self.state]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _room(self, index: str) -> Room:
        i = int(index)
        if not 1 <= i <= len(self.state):
            raise ScriptError(f"no room {i}")
        return self.state.rooms[i - 1]

    def _grab_point(self, room: Room) -> tuple[float, float]:
        """A point where a click lands on *room* rather than an earlier room."""
        candidates = [(room.x + fx * room.w, room.y + fy * room.h)
                      for fx in _PROBES for fy in _PROBES]
        candidates.append((room.right_edge, room.bottom_edge))
        for px, py in candidates:
            if self.state.find_at_point(px, py) is room:
                return px, py
        raise ScriptError(f"{room.name} is covered by an earlier room")

    def _edge_point(self, room: Room, side: Side) -> tuple[float, float]:
        """A point just inside *side* that hit-tests to that wall of *room*."""
        for t in _PROBES + (1.0,):
            if side is Side.TOP:
                point = (room.x + t * room.w, room.y + 1)
            elif side is Side.BOTTOM:
                point = (room.x + t * room.w, room.bottom_edge - 1)
            elif side is Side.LEFT:
                point = (room.x + 1, room.y + t * room.h)
            else:
                point = (room.right_edge - 1, room.y + t * room.h)
            if (self.state.find_at_point(*point) is room
                    and edge_at(room, *point, self.controller.tolerance) is side):
                return point
        raise ScriptError(f"{side.value} wall of {room.name} is covered by an earlier room")


def run_script(script: str, scale: Optional[float] = None,
               width: float = 0, height: float = 0) -> list[str]:
    """Run *script* on a fresh editor and return the output lines."""
    return ScriptRunner(scale, width, height).run(script)
