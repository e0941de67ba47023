"""Raster coverage bounds and snaking line generation.

Overhang rules
--------------
The two axes are treated differently:

* Raster (travel) axis: full ``bit_radius`` overhang past both fudged stock
  edges.  The cutter is completely clear of the stock whenever it reverses,
  so it never changes direction while partially engaged.
* Stepping axis: ``bit_radius - stepover``.  The first and last lines sit
  so that exactly one stepover of material is taken from each edge.  This
  goes negative (lines start inside the stock) once the stepover exceeds
  the bit radius.

Example, X raster with a 1.25" bit at 50%: X spans [-0.625, W + 0.625],
Y spans [0, H] (before fudge).
"""

from __future__ import annotations

from ..params import RasterDirection, SurfacingParams
from ..stock import Bounds
from .base import LineDirection, RasterLine, XRasterLine, YRasterLine
from .schedule import line_positions


def _rasters_along_x(direction: RasterDirection) -> bool:
    """True for an X raster, False for Y; anything else is rejected."""
    if direction is RasterDirection.X:
        return True
    if direction is RasterDirection.Y:
        return False
    raise ValueError(f"Unknown raster direction: {direction!r}")


def coverage_bounds(params: SurfacingParams) -> Bounds:
    """Rectangle the cutter centre must visit to surface the fudged stock."""
    fudged = params.stock.fudged_bounds
    travel_overhang = params.bit_radius
    step_overhang = params.bit_radius - params.stepover

    if _rasters_along_x(params.raster_direction):
        bounds = fudged.expanded(travel_overhang, step_overhang)
    else:
        bounds = fudged.expanded(step_overhang, travel_overhang)
    return _collapse_stepping(bounds, params.raster_direction)


def _collapse_stepping(bounds: Bounds, direction: RasterDirection) -> Bounds:
    """Pin crossed stepping bounds to their midpoint.

    A strongly negative step overhang on narrow stock can put the minimum
    past the maximum; one centred line then covers everything.
    """
    along_x = _rasters_along_x(direction)
    if along_x and bounds.y_min > bounds.y_max:
        mid = (bounds.y_min + bounds.y_max) / 2
        return Bounds(bounds.x_min, bounds.x_max, mid, mid)
    if not along_x and bounds.x_min > bounds.x_max:
        mid = (bounds.x_min + bounds.x_max) / 2
        return Bounds(mid, mid, bounds.y_min, bounds.y_max)
    return bounds


def stepping_range(bounds: Bounds, direction: RasterDirection) -> tuple[float, float]:
    if _rasters_along_x(direction):
        return bounds.y_min, bounds.y_max
    return bounds.x_min, bounds.x_max


def travel_range(bounds: Bounds, direction: RasterDirection) -> tuple[float, float]:
    if _rasters_along_x(direction):
        return bounds.x_min, bounds.x_max
    return bounds.y_min, bounds.y_max


def raster_lines(
    bounds: Bounds,
    direction: RasterDirection,
    stepover: float,
) -> tuple[RasterLine, ...]:
    """Generate the snaking raster lines covering *bounds*.

    Line *i* sits at ``step_min + i * stepover`` on the stepping axis, with
    the last line clamped to ``step_max``.  Even lines cut toward the
    positive end of the travel axis, odd lines back toward the negative end.
    """
    along_x = _rasters_along_x(direction)
    lo, hi = stepping_range(bounds, direction)
    t_min, t_max = travel_range(bounds, direction)

    lines: list[RasterLine] = []
    for i, pos in enumerate(line_positions(lo, hi, stepover)):
        line_dir = LineDirection.for_index(i)
        if line_dir is LineDirection.POSITIVE:
            start, end = t_min, t_max
        else:
            start, end = t_max, t_min

        if along_x:
            lines.append(XRasterLine(y=pos, x_start=start, x_end=end,
                                     direction=line_dir))
        else:
            lines.append(YRasterLine(x=pos, y_start=start, y_end=end,
                                     direction=line_dir))
    return tuple(lines)
