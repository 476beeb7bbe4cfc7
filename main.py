"""RoomSketch - floor-plan sketch editor

Launch the GUI or run a scripted session from the command line.

Usage:
    python main.py                                   # Launch GUI
    python main.py --headless "add; add; wall 1 right 15; undo; list"
"""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

# Load overrides from .env before config is imported
load_dotenv(os.path.join(os.path.dirname(os.path.abspath(__file__)), ".env"))

log = logging.getLogger("roomsketch")

HEADLESS_WIDTH = 880
HEADLESS_HEIGHT = 680


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="RoomSketch - floor-plan sketch editor"
    )
    parser.add_argument(
        "--headless",
        type=str,
        default=None,
        help='Run a ";"-separated command script without the GUI '
             "(add, undo, select N, move N X Y, wall N SIDE VALUE, list).",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Pixels per foot (overrides ROOMSKETCH_PX_PER_FT).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.scale is not None and args.scale <= 0:
        parser.error("--scale must be positive")

    if args.headless is not None:
        from sketch.script import run_script

        for line in run_script(args.headless, scale=args.scale,
                               width=HEADLESS_WIDTH, height=HEADLESS_HEIGHT):
            print(line)
        return 0
    return _run_gui(args.scale)


def _run_gui(scale: float | None) -> int:
    import tkinter as tk

    from gui.app import RoomSketchGUI
    from sketch.state import EditorState

    try:
        root = tk.Tk()
    except tk.TclError as e:
        log.error("Could not open the editor window: %s", e)
        return 1
    state = EditorState(scale) if scale is not None else None
    RoomSketchGUI(root, state=state)
    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
