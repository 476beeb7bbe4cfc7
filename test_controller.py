"""Tests for gesture handling: selection, dragging and wall edits."""
import pytest

from sketch.controller import ControllerMode, Gesture, InteractionController
from sketch.model import Side
from sketch.render import RecordingSurface


class ScriptedPrompt:
    """Answers wall-length prompts from a fixed reply and records each call."""

    def __init__(self, reply=None):
        self.reply = reply
        self.calls = []

    def __call__(self, side, current):
        self.calls.append((side, current))
        return self.reply


def _controller(reply=None, rooms=1):
    surface = RecordingSurface()
    prompt = ScriptedPrompt(reply)
    entries = []
    ctl = InteractionController(surface, prompt, list_view=entries.append, width=800, height=600)
    for _ in range(rooms):
        ctl.add_room()
    return ctl, surface, prompt, entries


def test_pointer_down_on_room_selects_and_starts_drag():
    ctl, surface, _, _ = _controller(rooms=2)
    first = ctl.state.rooms[0]
    frames = surface.frames
    assert ctl.pointer_down(130, 130)
    assert ctl.state.selected_id == first.id
    assert ctl.mode is ControllerMode.DRAGGING
    assert (ctl.drag.offset_x, ctl.drag.offset_y) == (10, 10)
    assert surface.frames == frames + 1


def test_pointer_down_on_empty_canvas_is_noop():
    ctl, surface, _, _ = _controller()
    selected = ctl.state.selected_id
    frames = surface.frames
    assert ctl.pointer_down(10, 10) is False
    assert ctl.mode is ControllerMode.IDLE
    assert ctl.state.selected_id == selected
    assert surface.frames == frames


def test_drag_moves_room_by_grab_offset():
    ctl, surface, _, _ = _controller()
    room = ctl.state.rooms[0]
    ctl.pointer_down(200, 200)          # grab offset (80, 80)
    frames = surface.frames
    assert ctl.pointer_move(300, 250)
    assert (room.x, room.y) == (220, 170)
    assert ctl.pointer_move(310, 260)
    assert (room.x, room.y) == (230, 180)
    assert surface.frames == frames + 2, "Expected one render per move"
    ctl.pointer_up()
    assert ctl.mode is ControllerMode.IDLE
    assert ctl.pointer_move(500, 500) is False
    assert (room.x, room.y) == (230, 180)


def test_pointer_leave_ends_drag():
    ctl, _, _, _ = _controller()
    ctl.pointer_down(200, 200)
    ctl.pointer_leave()
    assert ctl.mode is ControllerMode.IDLE
    assert ctl.drag is None


def test_move_without_drag_is_ignored():
    ctl, _, _, _ = _controller()
    room = ctl.state.rooms[0]
    assert ctl.pointer_move(10, 10) is False
    assert (room.x, room.y) == (120, 120)


def test_double_click_right_wall_edits_pair():
    ctl, surface, prompt, _ = _controller(reply="15")
    room = ctl.state.rooms[0]
    frames = surface.frames
    assert ctl.double_activate(419, 245)
    assert prompt.calls == [(Side.RIGHT, 10)]
    assert room.walls.left == room.walls.right == 15
    assert room.h == 375
    assert room.walls.top == room.walls.bottom == 12
    assert surface.frames == frames + 1
    assert "15 ft" in surface.texts()


@pytest.mark.parametrize("reply", [None, "", "abc", "0", "-4"])
def test_cancelled_or_invalid_edit_changes_nothing(reply):
    ctl, surface, prompt, _ = _controller(reply=reply)
    room = ctl.state.rooms[0]
    frames = surface.frames
    assert ctl.double_activate(270, 121) is False
    assert prompt.calls == [(Side.TOP, 12)]
    assert (room.walls.top, room.walls.bottom, room.w) == (12, 12, 300)
    assert surface.frames == frames
    assert ctl.mode is ControllerMode.IDLE


def test_double_click_away_from_walls_does_not_prompt():
    ctl, _, prompt, _ = _controller(reply="20")
    assert ctl.double_activate(270, 245) is False
    assert ctl.double_activate(5, 5) is False
    assert prompt.calls == []


def test_gestures_ignored_while_editing_wall():
    seen = {}

    def prompt(side, current):
        seen["mode"] = ctl.mode
        seen["down"] = ctl.pointer_down(270, 245)
        return "20"

    ctl = InteractionController(RecordingSurface(), prompt)
    ctl.add_room()
    assert ctl.double_activate(270, 121)
    assert seen == {"mode": ControllerMode.EDITING_WALL, "down": False}
    assert ctl.mode is ControllerMode.IDLE
    assert ctl.state.rooms[0].walls.top == 20


def test_add_and_undo_ignored_while_editing_wall():
    seen = {}

    def prompt(side, current):
        seen["undo"] = ctl.undo_last()
        seen["add"] = ctl.add_room()
        seen["rooms"] = len(ctl.state)
        return "20"

    ctl = InteractionController(RecordingSurface(), prompt)
    room = ctl.add_room()
    assert ctl.double_activate(270, 121)
    assert seen == {"undo": room.id, "add": None, "rooms": 1}
    assert ctl.state.rooms == [room]
    assert room.walls.top == room.walls.bottom == 20


def test_wall_edit_dropped_if_room_removed_during_prompt():
    """A room that disappears while the prompt is open is not edited."""
    surface = RecordingSurface()

    def prompt(side, current):
        ctl.state.undo_last()
        return "20"

    ctl = InteractionController(surface, prompt)
    room = ctl.add_room()
    frames = surface.frames
    assert ctl.double_activate(270, 121) is False
    assert len(ctl.state) == 0
    assert room.walls.top == 12
    assert surface.frames == frames


def test_prompt_failure_returns_to_idle():
    def prompt(side, current):
        raise RuntimeError("dialog closed")

    ctl = InteractionController(RecordingSurface(), prompt)
    ctl.add_room()
    with pytest.raises(RuntimeError):
        ctl.double_activate(270, 121)
    assert ctl.mode is ControllerMode.IDLE


def test_double_click_during_drag_ends_drag():
    ctl, _, _, _ = _controller(reply="8")
    ctl.pointer_down(270, 121)
    assert ctl.double_activate(270, 121)
    assert ctl.mode is ControllerMode.IDLE
    assert ctl.drag is None


def test_list_activation_selects_and_updates_list():
    ctl, surface, _, entries = _controller(rooms=2)
    first = ctl.state.rooms[0]
    assert ctl.activate_list_item(first.id)
    assert ctl.state.selected_id == first.id
    assert [(e.name, e.selected) for e in entries[-1]] == [("Room 1", True), ("Room 2", False)]
    assert surface.rects()[0][5] == "#1976D2"


def test_list_activation_with_unknown_id_is_noop():
    ctl, surface, _, _ = _controller()
    frames = surface.frames
    assert ctl.activate_list_item("missing") is False
    assert surface.frames == frames


def test_add_and_undo_render():
    ctl, surface, _, entries = _controller(rooms=0)
    ctl.add_room()
    ctl.add_room()
    assert len(entries[-1]) == 2
    assert ctl.undo_last() == ctl.state.rooms[0].id
    assert len(entries[-1]) == 1
    assert len(surface.rects()) == 1


def test_undo_while_dragging_removed_room():
    ctl, _, _, _ = _controller(rooms=2)
    ctl.pointer_down(440, 390)           # only inside Room 2
    assert ctl.state.selected_room.name == "Room 2"
    ctl.undo_last()
    assert ctl.drag is None
    assert ctl.pointer_move(0, 0) is False


def test_undo_on_empty_does_not_render():
    ctl, surface, _, _ = _controller(rooms=0)
    frames = surface.frames
    assert ctl.undo_last() is None
    assert surface.frames == frames


def test_resize_rerenders_at_new_size():
    ctl, surface, _, _ = _controller()
    ctl.resize(1024, 700)
    assert surface.size == (1024, 700)
    assert (ctl.width, ctl.height) == (1024, 700)


def test_handle_by_name_and_unknown_gesture():
    ctl, _, _, _ = _controller()
    assert ctl.handle("pointer_down", 200, 200)
    assert ctl.mode is ControllerMode.DRAGGING
    assert ctl.handle(Gesture.POINTER_UP) is False
    with pytest.raises(ValueError):
        ctl.handle("wiggle", 1, 1)
    with pytest.raises(ValueError):
        ctl.handle(Gesture.POINTER_DOWN)
