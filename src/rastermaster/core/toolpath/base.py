"""Core toolpath data structures.

A raster line is one of two variants, chosen by the raster direction:
``XRasterLine`` cuts along X at a fixed Y, ``YRasterLine`` cuts along Y at a
fixed X.  Both expose the same ``fixed`` / ``start`` / ``end`` view so
callers that do not care about the axis can treat them alike.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from ..params import SurfacingParams
from ..stock import Bounds


class LineDirection(Enum):
    """Which end of the travel range a raster line enters from."""
    POSITIVE = "positive"    # min -> max
    NEGATIVE = "negative"    # max -> min

    @classmethod
    def for_index(cls, index: int) -> LineDirection:
        """Snaking order: even lines run positive, odd lines negative."""
        return cls.POSITIVE if index % 2 == 0 else cls.NEGATIVE


@dataclass(frozen=True, slots=True)
class XRasterLine:
    """A stroke along X at constant Y."""
    y: float
    x_start: float
    x_end: float
    direction: LineDirection

    travel_axis = "x"
    step_axis = "y"

    @property
    def fixed(self) -> float:
        return self.y

    @property
    def start(self) -> float:
        return self.x_start

    @property
    def end(self) -> float:
        return self.x_end

    @property
    def start_point(self) -> tuple[float, float]:
        return (self.x_start, self.y)

    @property
    def end_point(self) -> tuple[float, float]:
        return (self.x_end, self.y)


@dataclass(frozen=True, slots=True)
class YRasterLine:
    """A stroke along Y at constant X."""
    x: float
    y_start: float
    y_end: float
    direction: LineDirection

    travel_axis = "y"
    step_axis = "x"

    @property
    def fixed(self) -> float:
        return self.x

    @property
    def start(self) -> float:
        return self.y_start

    @property
    def end(self) -> float:
        return self.y_end

    @property
    def start_point(self) -> tuple[float, float]:
        return (self.x, self.y_start)

    @property
    def end_point(self) -> tuple[float, float]:
        return (self.x, self.y_end)


RasterLine = Union[XRasterLine, YRasterLine]


class PassKind(Enum):
    SKIM = "skim"      # Z=0 cleanup pass
    DEPTH = "depth"


@dataclass(frozen=True)
class ZPass:
    """One depth level: the full set of raster lines cut at ``z``."""
    z: float
    kind: PassKind
    lines: tuple[RasterLine, ...]
    pause_after: bool = False

    @property
    def first_line(self) -> Optional[RasterLine]:
        return self.lines[0] if self.lines else None

    @property
    def is_empty(self) -> bool:
        return len(self.lines) == 0


@dataclass(frozen=True)
class Toolpath:
    """The computed surfacing job.

    ``bounds`` is the rectangle the cutter centre travels over,
    ``stock_bounds`` the stock as entered and ``fudged_stock_bounds`` the
    stock grown by the fudge margin.
    """
    passes: tuple[ZPass, ...]
    bounds: Bounds
    stock_bounds: Bounds
    fudged_stock_bounds: Bounds
    params: SurfacingParams

    @property
    def is_empty(self) -> bool:
        return all(p.is_empty for p in self.passes)

    @property
    def line_count(self) -> int:
        """Raster lines per pass (every pass shares the same geometry)."""
        return len(self.passes[0].lines) if self.passes else 0

    @property
    def first_line(self) -> Optional[RasterLine]:
        return self.passes[0].first_line if self.passes else None

    @property
    def stepover(self) -> float:
        return self.params.stepover
