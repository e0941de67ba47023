"""Shapely views of a toolpath for preview renderers.

Renderers draw the stock outline, the fudge margin and the first pass with
direction arrows; these helpers hand them ready-made geometry so they never
have to branch on the raster direction.
"""

from __future__ import annotations

from typing import Optional

from shapely.geometry import LineString, MultiLineString, Point, Polygon, box

from ..stock import Bounds
from .base import Toolpath, ZPass


def bounds_polygon(bounds: Bounds) -> Polygon:
    return box(*bounds.bounds_2d)


def stock_polygon(toolpath: Toolpath) -> Polygon:
    """The stock footprint as entered."""
    return bounds_polygon(toolpath.stock_bounds)


def fudged_stock_polygon(toolpath: Toolpath) -> Polygon:
    return bounds_polygon(toolpath.fudged_stock_bounds)


def travel_polygon(toolpath: Toolpath) -> Polygon:
    """Area swept by the cutter centre, overhang included."""
    return bounds_polygon(toolpath.bounds)


def pass_lines(zpass: ZPass) -> MultiLineString:
    """Raster lines of *zpass* in cutting order, each start -> end."""
    return MultiLineString(
        [LineString([line.start_point, line.end_point]) for line in zpass.lines]
    )


def start_point(toolpath: Toolpath) -> Optional[Point]:
    """Where the cutter first plunges, or None for an empty job."""
    line = toolpath.first_line
    if line is None:
        return None
    return Point(line.start_point)
