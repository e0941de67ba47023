"""Surfacing toolpath -> motion commands -> G-code.

Program layout::

    (header comments)
    G90 / G20|G21 / M3 S<rpm> / G0 Z<retract> / G0 X Y (first line start)
    per pass:
        (Pass n at Z=...)
        G0 <fixed>, G0 <start>, G1 Z<depth> F<plunge>, G1 <end> F<feed>
        G1 <fixed> F<feed>, G1 <end> F<feed>        for every later line
        G0 Z<retract>                               except after the last pass
        M0                                          if the pass pauses
    G0 Z<retract> / M5 / M30

The cutter plunges exactly once per pass and stays at depth until the pass
is done.  Stepovers between lines are feed moves, never rapids: material
outside the nominal stock would be hit at rapid speed otherwise.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path

from ..core.params import SurfacingParams
from ..core.toolpath.base import PassKind, Toolpath, ZPass
from .commands import (
    AbsoluteMode,
    Command,
    Comment,
    Move,
    MoveType,
    Pause,
    ProgramEnd,
    SpindleOff,
    SpindleOn,
    UnitsMode,
)
from .gcode_writer import count_label, fmt, fmt_dimension, render

logger = logging.getLogger(__name__)


class PassState(Enum):
    AWAITING_PLUNGE = "awaiting_plunge"
    CUTTING = "cutting"


def _axis_move(
    move_type: MoveType,
    axis: str,
    value: float,
    feed: float | None = None,
    note: str = "",
) -> Move:
    return Move(move_type, feed=feed, note=note, **{axis: value})


def _header(toolpath: Toolpath) -> list[Command]:
    p = toolpath.params
    units = p.units
    return [
        Comment("Surfacing operation"),
        Comment(
            f"Stock: {fmt_dimension(p.stock_width, units)} x "
            f"{fmt_dimension(p.stock_height, units)}"
        ),
        Comment(f"Fudge: {fmt_dimension(p.fudge_factor, units)} per side"),
        Comment(f"Bit: {fmt_dimension(p.bit_diameter, units)} fly cutter"),
        Comment(f"Stepover: {fmt(p.stepover_percent)}%"),
        Comment(
            f"Raster: {p.raster_direction.value.upper()} axis, "
            f"{count_label(toolpath.line_count, 'line')} x "
            f"{count_label(len(toolpath.passes), 'pass')}"
        ),
    ]


def _preamble(toolpath: Toolpath) -> list[Command]:
    p = toolpath.params
    cmds: list[Command] = [
        AbsoluteMode(),
        UnitsMode(p.units),
        SpindleOn(p.spindle_rpm),
        Move(MoveType.RETRACT, z=p.retract_height, note="Retract to safe Z"),
    ]
    first = toolpath.first_line
    if first is not None:
        x, y = first.start_point
        cmds.append(Move(MoveType.POSITION, x=x, y=y, note="Move to start"))
    return cmds


def _pass_label(index: int, zpass: ZPass) -> Comment:
    label = f"Pass {index} at Z={fmt(zpass.z)}"
    if zpass.kind is PassKind.SKIM:
        label += " - skim"
    return Comment(label)


def serialize_pass(zpass: ZPass, params: SurfacingParams) -> list[Command]:
    """Snaking emission of one depth pass.

    Exactly one plunge, on the first line; every later line is a feed-rate
    stepover followed by a cut.  No retract is emitted here.
    """
    cmds: list[Command] = []
    state = PassState.AWAITING_PLUNGE

    for line in zpass.lines:
        travel, step = line.travel_axis, line.step_axis
        if state is PassState.AWAITING_PLUNGE:
            cmds.append(_axis_move(MoveType.POSITION, step, line.fixed))
            cmds.append(_axis_move(MoveType.POSITION, travel, line.start))
            cmds.append(Move(MoveType.PLUNGE, z=zpass.z,
                             feed=params.plunge_rate, note="Plunge"))
            state = PassState.CUTTING
        else:
            cmds.append(_axis_move(MoveType.STEPOVER, step, line.fixed,
                                   feed=params.feed_rate, note="Stepover"))
        cmds.append(_axis_move(MoveType.CUT, travel, line.end,
                               feed=params.feed_rate, note="Cut"))
    return cmds


def _postamble(params: SurfacingParams) -> list[Command]:
    return [
        Move(MoveType.RETRACT, z=params.retract_height, note="Final retract"),
        SpindleOff(),
        ProgramEnd(),
    ]


def serialize(toolpath: Toolpath) -> tuple[Command, ...]:
    """Build the full, ordered command sequence for *toolpath*."""
    params = toolpath.params
    cmds: list[Command] = _header(toolpath) + _preamble(toolpath)

    last = len(toolpath.passes) - 1
    for i, zpass in enumerate(toolpath.passes):
        cmds.append(_pass_label(i + 1, zpass))
        cmds.extend(serialize_pass(zpass, params))
        if i < last:
            cmds.append(Move(MoveType.RETRACT, z=params.retract_height,
                             note="Retract"))
        if zpass.pause_after:
            cmds.append(Pause())

    cmds.extend(_postamble(params))
    logger.debug("Serialized %d passes into %d commands",
                 len(toolpath.passes), len(cmds))
    return tuple(cmds)


def get_lines(toolpath: Toolpath) -> list[str]:
    """G-code for *toolpath* as a list of lines."""
    return render(serialize(toolpath))


def generate_gcode(toolpath: Toolpath) -> str:
    """G-code for *toolpath* as a single newline-terminated string."""
    return "\n".join(get_lines(toolpath)) + "\n"


def write_gcode(toolpath: Toolpath, path: Path) -> Path:
    """Write the G-code for *toolpath* to *path*."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(generate_gcode(toolpath), encoding="utf-8")
    logger.info("Wrote %s", path)
    return path


def default_filename(params: SurfacingParams) -> str:
    """Download-style file name, e.g. ``rastermaster-10x5.gcode``."""
    return (
        f"rastermaster-{fmt(params.stock_width)}x{fmt(params.stock_height)}"
        ".gcode"
    )
