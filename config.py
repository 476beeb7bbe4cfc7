"""Configuration defaults for RoomSketch."""

import logging
import os

log = logging.getLogger(__name__)


def _env_float(name: str, default: float) -> float:
    raw = os.environ.get(name, "")
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        log.warning("Ignoring %s=%r: not a number, using %s", name, raw, default)
        return default
    if value <= 0:
        log.warning("Ignoring %s=%r: must be positive, using %s", name, raw, default)
        return default
    return value


# Scale (pixels per foot of wall)
PX_PER_FT = _env_float("ROOMSKETCH_PX_PER_FT", 25)

# Hit testing
EDGE_TOLERANCE_PX = _env_float("ROOMSKETCH_EDGE_TOLERANCE", 10)

# New room defaults (feet unless noted)
DEFAULT_WALL_TOP_FT = 12     # top / bottom
DEFAULT_WALL_SIDE_FT = 10    # left / right
ROOM_BASE_OFFSET_PX = 120
ROOM_CASCADE_STEP_PX = 30

# Window layout
WINDOW_GEOMETRY = "1200x800"
SIDEBAR_WIDTH_PX = 320
CHROME_HEIGHT_PX = 120
