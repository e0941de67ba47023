"""Motion command vocabulary between a toolpath and G-code text.

Every command is an immutable, slotted dataclass.  The serializer builds a
tuple of these; ``gcode_writer.render_command`` turns each one into a single
line of G-code.  Tests can therefore check the structure of a program
(one plunge per pass, no retracts while cutting) without parsing text.
"""

from __future__ import annotations

from abc import ABC
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.units import Units


class MoveType(Enum):
    """Type of CNC motion."""
    POSITION = "position"    # G0 -- travel above or beside the stock
    RETRACT = "retract"      # G0 -- pull out of material to retract height
    PLUNGE = "plunge"        # G1 at plunge feed -- straight down into material
    STEPOVER = "stepover"    # G1 at cutting feed -- to the next raster line
    CUT = "cut"              # G1 at cutting feed -- along a raster line

    @property
    def is_rapid(self) -> bool:
        return self in (MoveType.POSITION, MoveType.RETRACT)


@dataclass(frozen=True, slots=True)
class Command(ABC):
    """Base class for all program commands."""

    pass


@dataclass(frozen=True, slots=True)
class Comment(Command):
    text: str


@dataclass(frozen=True, slots=True)
class AbsoluteMode(Command):
    """G90 absolute positioning."""

    pass


@dataclass(frozen=True, slots=True)
class UnitsMode(Command):
    """G20 / G21 linear units."""

    units: Units


@dataclass(frozen=True, slots=True)
class SpindleOn(Command):
    """M3 clockwise at ``rpm``."""

    rpm: float


@dataclass(frozen=True, slots=True)
class SpindleOff(Command):
    pass


@dataclass(frozen=True, slots=True)
class ProgramEnd(Command):
    pass


@dataclass(frozen=True, slots=True)
class Pause(Command):
    """M0 program stop; the operator resumes or aborts."""

    pass


@dataclass(frozen=True, slots=True)
class Move(Command):
    """A single rapid (G0) or feed (G1) move.

    Axes left as None are not emitted.  ``feed`` is ignored for rapids.
    ``note`` is rendered as a trailing comment.
    """

    move_type: MoveType
    x: Optional[float] = None
    y: Optional[float] = None
    z: Optional[float] = None
    feed: Optional[float] = None
    note: str = ""

    def __post_init__(self) -> None:
        if self.x is None and self.y is None and self.z is None:
            raise ValueError("Move needs at least one axis")
        if not self.move_type.is_rapid and self.feed is None:
            raise ValueError(f"{self.move_type.value} move requires a feed rate")

    @property
    def is_rapid(self) -> bool:
        return self.move_type.is_rapid
