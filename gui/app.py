"""Tkinter GUI for the RoomSketch floor-plan editor."""

import logging
import tkinter as tk
from tkinter import simpledialog, ttk

from config import CHROME_HEIGHT_PX, SIDEBAR_WIDTH_PX, WINDOW_GEOMETRY
from sketch.controller import InteractionController
from sketch.model import Side
from sketch.render import RoomListEntry
from sketch.state import EditorState
from tools.units import format_feet, format_length

log = logging.getLogger(__name__)

SELECTED_ROW_BG = "#e0f0ff"


def tk_font(spec: str) -> tuple:
    """Convert a CSS-like ``"14px Arial"`` to a Tk font tuple (negative = pixels)."""
    size, _, family = spec.partition(" ")
    return (family or "Arial", -int(float(size.removesuffix("px"))))


class TkCanvasSurface:
    """Drawing surface backed by a ``tk.Canvas``."""

    def __init__(self, canvas: tk.Canvas):
        self.canvas = canvas

    def clear(self, width, height):
        self.canvas.delete("all")

    def stroke_rect(self, x, y, w, h, color, line_width):
        self.canvas.create_rectangle(x, y, x + w, y + h, outline=color, width=line_width)

    def draw_text(self, x, y, text, color, font):
        # Canvas text is anchored at its baseline-left corner.
        self.canvas.create_text(x, y, text=text, fill=color, font=tk_font(font), anchor="sw")


class RoomSketchGUI:
    """Main application window."""

    def __init__(self, root: tk.Tk, state: EditorState | None = None):
        self.root = root
        self.root.title("RoomSketch - Floor Plan Sketch")
        self.root.geometry(WINDOW_GEOMETRY)
        self.root.minsize(700, 500)

        self._list_ids: list[str] = []
        self._build_ui()

        self.controller = InteractionController(
            surface=TkCanvasSurface(self.canvas),
            prompt=self._ask_wall_length,
            list_view=self._update_room_list,
            state=state,
            width=int(self.canvas["width"]),
            height=int(self.canvas["height"]),
        )
        self._wire_events()
        self.controller.render()
        log.info("RoomSketch loaded")

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------

    def _build_ui(self):
        # Sidebar: buttons + room list
        side = ttk.Frame(self.root, padding=5, width=SIDEBAR_WIDTH_PX)
        side.pack(side=tk.LEFT, fill=tk.Y)
        side.pack_propagate(False)

        btn_frame = ttk.Frame(side)
        btn_frame.pack(fill=tk.X)

        self.add_btn = ttk.Button(btn_frame, text="Add Room", command=self._on_add_room, width=12)
        self.add_btn.pack(side=tk.LEFT, padx=5)

        self.undo_btn = ttk.Button(btn_frame, text="Undo", command=self._on_undo, width=12)
        self.undo_btn.pack(side=tk.LEFT, padx=5)

        list_frame = ttk.LabelFrame(side, text="Rooms", padding=5)
        list_frame.pack(fill=tk.BOTH, expand=True, pady=5)

        self.room_list = tk.Listbox(
            list_frame, activestyle="none", exportselection=False, font=("Arial", 11)
        )
        self.room_list.pack(fill=tk.BOTH, expand=True)

        # Drawing area
        main = ttk.Frame(self.root)
        main.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        width, height = (int(v) for v in WINDOW_GEOMETRY.split("x"))
        self.canvas = tk.Canvas(
            main,
            width=width - SIDEBAR_WIDTH_PX,
            height=height - CHROME_HEIGHT_PX,
            bg="#ffffff",
            highlightthickness=1,
            highlightbackground="#999999",
        )
        self.canvas.pack(fill=tk.BOTH, expand=True)

        self.status_var = tk.StringVar(value="Ready")
        ttk.Label(main, textvariable=self.status_var, anchor="w").pack(fill=tk.X)

    def _wire_events(self):
        c = self.canvas
        c.bind("<Configure>", self._on_configure)
        c.bind("<ButtonPress-1>", lambda e: self.controller.pointer_down(e.x, e.y))
        c.bind("<B1-Motion>", lambda e: self.controller.pointer_move(e.x, e.y))
        c.bind("<ButtonRelease-1>", lambda e: self.controller.pointer_up())
        c.bind("<Leave>", lambda e: self.controller.pointer_leave())
        c.bind("<Double-Button-1>", lambda e: self.controller.double_activate(e.x, e.y))

        self.room_list.bind("<<ListboxSelect>>", self._on_list_select)
        self.root.bind("<Control-z>", lambda e: self._on_undo())
        self.root.bind("<Control-n>", lambda e: self._on_add_room())

    # ------------------------------------------------------------------
    # Collaborators for the controller
    # ------------------------------------------------------------------

    def _ask_wall_length(self, side: Side, current: float) -> str | None:
        return simpledialog.askstring(
            "Edit wall",
            f"Enter {side.value} wall length (ft):",
            initialvalue=format_length(current),
            parent=self.root,
        )

    def _update_room_list(self, entries: list[RoomListEntry]):
        self.room_list.delete(0, tk.END)
        self._list_ids = [e.room_id for e in entries]
        for i, entry in enumerate(entries):
            self.room_list.insert(tk.END, entry.name)
            if entry.selected:
                self.room_list.itemconfigure(i, background=SELECTED_ROW_BG)
                self.room_list.selection_set(i)
        self._update_status()

    def _update_status(self):
        room = self.controller.state.selected_room
        if room is None:
            self.status_var.set("No room selected - click Add Room to start")
            return
        walls = room.walls
        self.status_var.set(
            f"{room.name}: {format_feet(walls.top)} x {format_feet(walls.left)} "
            "(double-click a wall to edit)"
        )

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_configure(self, event):
        self.controller.resize(event.width, event.height)

    def _on_list_select(self, event=None):
        picked = self.room_list.curselection()
        if not picked:
            return
        self.controller.activate_list_item(self._list_ids[picked[0]])

    def _on_add_room(self):
        self.controller.add_room()

    def _on_undo(self):
        self.controller.undo_last()
