"""Low-level G-code line formatting helpers."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from ..core.units import Units
from .commands import (
    AbsoluteMode,
    Command,
    Comment,
    Move,
    Pause,
    ProgramEnd,
    SpindleOff,
    SpindleOn,
    UnitsMode,
)

COORD_DECIMALS = 4
DIMENSION_DECIMALS = 2


def fmt(value: float, decimals: int = COORD_DECIMALS) -> str:
    """Format a number for G-code, rounding half up and stripping zeros.

    ``fmt(2.0) == "2"``, ``fmt(1.25) == "1.25"``, ``fmt(8.125, 2) == "8.13"``.
    Formatting an already formatted value returns the same string.
    """
    # str() gives the shortest repr, so 8.125 rounds as written, not as
    # its binary approximation.
    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP)
    text = f"{rounded:f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return "0" if text == "-0" else text


def fmt_dimension(value: float, units: Units = Units.INCH) -> str:
    """Dimension for display, e.g. ``10"`` or ``12.5mm``."""
    return f"{fmt(value, DIMENSION_DECIMALS)}{units.mark}"


def count_label(count: int, noun: str) -> str:
    """``1 pass``, ``2 passes``, ``6 lines``."""
    if count == 1:
        return f"{count} {noun}"
    suffix = "es" if noun.endswith("s") else "s"
    return f"{count} {noun}{suffix}"


def _words(
    x: Optional[float] = None,
    y: Optional[float] = None,
    z: Optional[float] = None,
    f: Optional[float] = None,
) -> list[str]:
    parts = []
    if x is not None:
        parts.append(f"X{fmt(x)}")
    if y is not None:
        parts.append(f"Y{fmt(y)}")
    if z is not None:
        parts.append(f"Z{fmt(z)}")
    if f is not None:
        parts.append(f"F{fmt(f)}")
    return parts


def rapid(
    x: Optional[float] = None,
    y: Optional[float] = None,
    z: Optional[float] = None,
) -> str:
    """G0 rapid traverse."""
    return " ".join(["G0", *_words(x, y, z)])


def linear(
    x: Optional[float] = None,
    y: Optional[float] = None,
    z: Optional[float] = None,
    f: Optional[float] = None,
) -> str:
    """G1 linear interpolation."""
    return " ".join(["G1", *_words(x, y, z, f)])


def comment(text: str) -> str:
    """Wrap *text* in a parenthetical comment."""
    # Nested parens end the comment early on most controllers
    cleaned = text.replace("(", "").replace(")", "")
    return f"({cleaned})"


def _with_note(line: str, note: str) -> str:
    return f"{line} {comment(note)}" if note else line


def render_command(command: Command) -> str:
    """Render one command as one line of G-code."""
    if isinstance(command, Move):
        if command.is_rapid:
            line = rapid(command.x, command.y, command.z)
        else:
            line = linear(command.x, command.y, command.z, command.feed)
        return _with_note(line, command.note)
    if isinstance(command, Comment):
        return comment(command.text)
    if isinstance(command, AbsoluteMode):
        return _with_note("G90", "Absolute positioning")
    if isinstance(command, UnitsMode):
        label = "Inches" if command.units is Units.INCH else "Millimeters"
        return _with_note(command.units.gcode_modal, label)
    if isinstance(command, SpindleOn):
        return _with_note(f"M3 S{fmt(command.rpm)}", "Spindle on")
    if isinstance(command, SpindleOff):
        return _with_note("M5", "Spindle off")
    if isinstance(command, Pause):
        return _with_note("M0", "Pause - press resume to continue or stop to end")
    if isinstance(command, ProgramEnd):
        return _with_note("M30", "Program end")
    raise TypeError(f"Unsupported command: {type(command).__name__}")


def render(commands) -> list[str]:
    """Render a command sequence to G-code lines."""
    return [render_command(c) for c in commands]
