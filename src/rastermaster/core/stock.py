"""Stock (workpiece blank) definition and axis-aligned bounds."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned rectangle in the job's native units."""

    x_min: float
    x_max: float
    y_min: float
    y_max: float

    @property
    def width(self) -> float:
        return self.x_max - self.x_min

    @property
    def height(self) -> float:
        return self.y_max - self.y_min

    @property
    def bounds_2d(self) -> tuple[float, float, float, float]:
        """(xmin, ymin, xmax, ymax), the order Shapely uses."""
        return (self.x_min, self.y_min, self.x_max, self.y_max)

    def expanded(self, dx: float, dy: float | None = None) -> "Bounds":
        """Grow by *dx* on the left/right and *dy* on the bottom/top.

        Negative values shrink the rectangle.
        """
        if dy is None:
            dy = dx
        return Bounds(
            x_min=self.x_min - dx,
            x_max=self.x_max + dx,
            y_min=self.y_min - dy,
            y_max=self.y_max + dy,
        )

    def contains(self, other: "Bounds", tol: float = 1e-9) -> bool:
        return (
            other.x_min >= self.x_min - tol
            and other.x_max <= self.x_max + tol
            and other.y_min >= self.y_min - tol
            and other.y_max <= self.y_max + tol
        )


@dataclass(frozen=True)
class Stock:
    """Rectangular stock definition.

    The lower-left corner of the stock sits at the WCS origin and Z=0 is the
    top face, so surfacing passes go to negative Z.

    Parameters
    ----------
    width, height:
        X and Y size of the stock.
    fudge:
        Margin added on every side to absorb placement error, in the same
        length units as the stock.
    """

    width: float
    height: float
    fudge: float = 0.0

    @property
    def bounds(self) -> Bounds:
        """The stock footprint as measured, without the fudge margin."""
        return Bounds(0.0, self.width, 0.0, self.height)

    @property
    def fudged_bounds(self) -> Bounds:
        return self.bounds.expanded(self.fudge)
