"""Unit conversion utilities.

The canvas works in pixels. The user works in feet. Every room dimension is
stored in feet and converted with a single fixed scale factor.
"""

from config import PX_PER_FT


def feet_to_px(feet: float, scale: float = PX_PER_FT) -> float:
    return feet * scale


def px_to_feet(px: float, scale: float = PX_PER_FT) -> float:
    return px / scale


def format_length(feet: float) -> str:
    """Shortest text that reads back as the same length, e.g. ``12`` or ``12.5``."""
    if float(feet).is_integer():
        return str(int(feet))
    return repr(float(feet))


def format_feet(feet: float) -> str:
    """Label text for a wall length, e.g. ``12 ft`` or ``12.5 ft``."""
    return f"{format_length(feet)} ft"
