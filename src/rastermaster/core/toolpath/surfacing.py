"""Surfacing (flycut) toolpath calculation.

Algorithm
---------
1. Grow the stock by the fudge margin and apply the per-axis overhang to get
   the travel bounds (see ``raster.coverage_bounds``).
2. Lay raster lines across the stepping axis, one stepover apart, the last
   one clamped to the far bound.  Lines alternate direction (snaking).
3. Build the pass schedule: an optional Z=0 skim pass, then depth passes
   down to exactly ``-total_depth``.  Every pass reuses the same lines.
4. Flag the passes that are followed by an operator pause.
"""

from __future__ import annotations

import logging
import math

from ..params import SurfacingParams
from .base import PassKind, Toolpath, ZPass
from .raster import coverage_bounds, raster_lines
from .schedule import depth_levels, pause_flags

logger = logging.getLogger(__name__)


def calculate_toolpath(params: SurfacingParams) -> Toolpath:
    """Compute the surfacing toolpath for *params*.

    *params* should already have passed ``validate_params``; only the
    checks that keep the calculation from degenerating are repeated here.

    Raises
    ------
    ValueError:
        If the stock is not positive, the stepover is not positive, or the
        depth per pass is not positive while there is depth to remove.
    """
    if not (params.stock_width > 0 and params.stock_height > 0):
        raise ValueError("Stock dimensions must be positive")
    stepover = params.stepover
    if not (stepover > 0 and math.isfinite(stepover)):
        raise ValueError(f"Stepover must be positive, got {stepover!r}")

    bounds = coverage_bounds(params)
    lines = raster_lines(bounds, params.raster_direction, stepover)

    levels: list[tuple[float, PassKind]] = []
    if params.skim_pass:
        levels.append((0.0, PassKind.SKIM))
    for depth in depth_levels(params.total_depth, params.depth_per_pass):
        levels.append((-depth, PassKind.DEPTH))

    pauses = pause_flags(len(levels), params.pause_interval)
    passes = tuple(
        ZPass(z=z, kind=kind, lines=lines, pause_after=pause)
        for (z, kind), pause in zip(levels, pauses)
    )

    stock = params.stock
    toolpath = Toolpath(
        passes=passes,
        bounds=bounds,
        stock_bounds=stock.bounds,
        fudged_stock_bounds=stock.fudged_bounds,
        params=params,
    )
    logger.debug(
        "Surfacing toolpath: %d passes x %d lines, X[%.4f, %.4f] Y[%.4f, %.4f]",
        len(passes), len(lines),
        bounds.x_min, bounds.x_max, bounds.y_min, bounds.y_max,
    )
    return toolpath
