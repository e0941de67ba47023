"""Surfacing job parameters.

A SurfacingParams value fully describes one flycutting job: stock size,
cutter, raster strategy, depth schedule and feeds/speeds.  Everything except
the stock dimensions has a default.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Mapping

from .stock import Stock
from .units import Units


class ParameterError(ValueError):
    """Raised when job parameters are missing or out of range."""

    def __init__(self, messages: list[str]):
        self.messages = list(messages)
        super().__init__("; ".join(self.messages))


class RasterDirection(Enum):
    """Axis the cutting strokes travel along.  The other axis is stepped."""

    X = "x"
    Y = "y"

    @property
    def step_axis(self) -> str:
        return "y" if self is RasterDirection.X else "x"


REQUIRED_FIELDS = ("stock_width", "stock_height")

# Lengths and feeds; their inch defaults are converted by for_units
SCALED_FIELDS = (
    "fudge_factor",
    "bit_diameter",
    "total_depth",
    "depth_per_pass",
    "feed_rate",
    "plunge_rate",
    "retract_height",
)


def _coerce_enum(enum_cls: type[Enum], value: Any, name: str) -> Enum:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ParameterError([f"{name}: {exc}"]) from exc


@dataclass(frozen=True)
class SurfacingParams:
    """Parameters for a single surfacing operation.

    Default lengths and feeds are inch values.  Use ``for_units`` to get
    defaults scaled for millimetres.
    """

    # Stock (required)
    stock_width: float
    stock_height: float
    fudge_factor: float = 0.25     # margin per side, length units

    # Tool
    bit_diameter: float = 1.25
    stepover_percent: float = 50.0

    # Raster strategy
    raster_direction: RasterDirection = RasterDirection.X
    skim_pass: bool = False
    total_depth: float = 0.01
    depth_per_pass: float = 0.01
    pause_interval: int = 0        # 0 disables pauses

    # Feeds & speeds
    feed_rate: float = 125.0
    plunge_rate: float = 12.0
    spindle_rpm: float = 18000
    retract_height: float = 0.125

    units: Units = Units.INCH

    def __post_init__(self) -> None:
        # Accept plain "x" / "mm" values as well as the enums
        object.__setattr__(
            self, "raster_direction",
            _coerce_enum(RasterDirection, self.raster_direction, "raster_direction"),
        )
        object.__setattr__(
            self, "units", _coerce_enum(Units, self.units, "units"),
        )

    @classmethod
    def for_units(cls, units: Units | str, **values: Any) -> SurfacingParams:
        """Build parameters with length and feed defaults in *units*.

        Values passed explicitly are taken as already being in *units*.
        """
        units = _coerce_enum(Units, units, "units")
        defaults = {f.name: f.default for f in fields(cls)}
        for name in SCALED_FIELDS:
            if name not in values:
                values[name] = round(units.from_mm(Units.INCH.to_mm(defaults[name])), 6)
        return cls(units=units, **values)

    @property
    def stepover(self) -> float:
        """Absolute stepover distance between adjacent raster lines."""
        return self.bit_diameter * (self.stepover_percent / 100.0)

    @property
    def bit_radius(self) -> float:
        return self.bit_diameter / 2.0

    @property
    def stock(self) -> Stock:
        return Stock(self.stock_width, self.stock_height, self.fudge_factor)

    def with_num_passes(self, num_passes: int) -> SurfacingParams:
        """Return a copy whose total depth is *num_passes* full passes."""
        return replace(self, total_depth=num_passes * self.depth_per_pass)

    def to_dict(self) -> dict:
        d = {f.name: getattr(self, f.name) for f in fields(self)}
        d["raster_direction"] = self.raster_direction.value
        d["units"] = self.units.value
        return d

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> SurfacingParams:
        """Build parameters from a flat mapping.

        Unknown keys are ignored and absent optional fields take their
        defaults, scaled to the mapping's ``units``.  Missing stock
        dimensions or unknown enum values raise ParameterError.
        """
        missing = [name for name in REQUIRED_FIELDS if d.get(name) is None]
        if missing:
            raise ParameterError(
                [f"{name} is required" for name in missing]
            )

        known = {f.name for f in fields(cls)}
        data = {k: v for k, v in d.items() if k in known and v is not None}
        units = data.pop("units", Units.INCH)
        return cls.for_units(units, **data)
