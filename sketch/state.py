"""Editor state: the ordered room list and the current selection."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from config import PX_PER_FT
from sketch.hit_test import contains_point
from sketch.model import Room, create_room

log = logging.getLogger(__name__)


class EditorState:
    """Owns every room. Selection is held by id, never by reference.

    Rooms are append-only; the list order is both draw order and undo order.
    """

    def __init__(self, scale: float = PX_PER_FT):
        self.scale = scale
        self.rooms: list[Room] = []
        self.selected_id: Optional[str] = None
        self._counter = 1
        # Selection in effect before each room was added, parallel to rooms
        self._prior_selection: list[Optional[str]] = []

    def __len__(self) -> int:
        return len(self.rooms)

    def __iter__(self) -> Iterator[Room]:
        return iter(self.rooms)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def selected_room(self) -> Optional[Room]:
        if self.selected_id is None:
            return None
        return self.find_by_id(self.selected_id)

    def find_by_id(self, room_id: str) -> Optional[Room]:
        for room in self.rooms:
            if room.id == room_id:
                return room
        return None

    def find_at_point(self, x: float, y: float) -> Optional[Room]:
        """First room in insertion order containing (x, y)."""
        for room in self.rooms:
            if contains_point(room, x, y):
                return room
        return None

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_room(self) -> Room:
        room = create_room(len(self.rooms), self._counter, self.scale)
        self._counter += 1
        self._prior_selection.append(self.selected_id)
        self.rooms.append(room)
        self.selected_id = room.id
        log.info("Added %s at (%g, %g)", room.name, room.x, room.y)
        return room

    def undo_last(self) -> Optional[str]:
        """Remove the most recently added room and return the new selection.

        If the removed room was selected, the selection goes back to what it
        was before that room was added, or to the new last room.
        """
        if not self.rooms:
            log.debug("Undo ignored: no rooms")
            return None
        removed = self.rooms.pop()
        prior = self._prior_selection.pop()
        if self.selected_id == removed.id:
            if prior is not None and self.find_by_id(prior) is not None:
                self.selected_id = prior
            else:
                self.selected_id = self.rooms[-1].id if self.rooms else None
        log.info("Removed %s", removed.name)
        return self.selected_id

    def select(self, room_id: str) -> bool:
        """Select an existing room. Unknown ids are ignored."""
        if self.find_by_id(room_id) is None:
            log.debug("Select ignored: unknown room id %s", room_id)
            return False
        self.selected_id = room_id
        return True
