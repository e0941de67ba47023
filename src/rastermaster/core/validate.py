"""Parameter validation and sanity checks.

Checks a SurfacingParams value before it is handed to the toolpath
calculator.  The calculator itself does not re-validate, so callers are
expected to run these checks (or ``ensure_valid``) first.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

from .params import ParameterError, SurfacingParams
from .units import Units

MAX_FUDGE = 10.0  # inches
MIN_RECOMMENDED_STEPOVER = 10.0

_POSITIVE_FIELDS = (
    ("stock_width", "Stock width"),
    ("stock_height", "Stock height"),
    ("bit_diameter", "Bit diameter"),
    ("depth_per_pass", "Depth per pass"),
    ("feed_rate", "Feed rate"),
    ("plunge_rate", "Plunge rate"),
    ("spindle_rpm", "Spindle speed"),
    ("retract_height", "Retract height"),
)


@dataclass
class ValidationIssue:
    """A single problem found in the job parameters."""

    severity: str  # "error" or "warning"
    message: str
    field: Optional[str] = None


@dataclass
class ValidationResult:
    """Result of validating a set of parameters."""

    issues: list[ValidationIssue] = field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(i.severity == "error" for i in self.issues)

    @property
    def has_warnings(self) -> bool:
        return any(i.severity == "warning" for i in self.issues)

    @property
    def is_ok(self) -> bool:
        return len(self.issues) == 0

    @property
    def errors(self) -> list[str]:
        return [i.message for i in self.issues if i.severity == "error"]

    @property
    def warnings(self) -> list[str]:
        return [i.message for i in self.issues if i.severity == "warning"]

    def error(self, message: str, field_name: Optional[str] = None) -> None:
        self.issues.append(ValidationIssue("error", message, field_name))

    def warn(self, message: str, field_name: Optional[str] = None) -> None:
        self.issues.append(ValidationIssue("warning", message, field_name))


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_params(params: SurfacingParams) -> ValidationResult:
    """Check *params* for values the calculator cannot use.

    Checks performed:
    - Stock, tool, depth-per-pass and machine settings are finite and > 0
    - Fudge factor within [0, MAX_FUDGE], converted to the job units
    - Stepover percent within (0, 100]
    - Total depth >= 0, pause interval a non-negative integer
    - Warnings for a job that cuts nothing, a low stepover and a bit wider
      than the stepped side of the stock
    """
    result = ValidationResult()

    for name, label in _POSITIVE_FIELDS:
        value = getattr(params, name)
        if not _is_number(value) or not math.isfinite(value):
            result.error(f"{label} must be a number", name)
        elif value <= 0:
            result.error(f"{label} must be greater than 0", name)

    fudge = params.fudge_factor
    max_fudge = params.units.from_mm(Units.INCH.to_mm(MAX_FUDGE))
    if not _is_number(fudge) or not math.isfinite(fudge):
        result.error("Fudge factor must be a number", "fudge_factor")
    elif fudge < 0 or fudge > max_fudge:
        result.error(
            f"Fudge factor {fudge:g} outside [0, {max_fudge:g}]",
            "fudge_factor",
        )

    pct = params.stepover_percent
    if not _is_number(pct) or not math.isfinite(pct):
        result.error("Stepover must be a number", "stepover_percent")
    elif pct <= 0 or pct > 100:
        result.error(f"Stepover {pct:g}% outside (0, 100]", "stepover_percent")
    elif pct <= MIN_RECOMMENDED_STEPOVER:
        result.warn(
            f"Stepover {pct:g}% is below the recommended "
            f"{MIN_RECOMMENDED_STEPOVER:g}%; the job will take many lines",
            "stepover_percent",
        )

    depth = params.total_depth
    if not _is_number(depth) or not math.isfinite(depth):
        result.error("Total depth must be a number", "total_depth")
    elif depth < 0:
        result.error("Total depth cannot be negative", "total_depth")
    elif depth == 0 and not params.skim_pass:
        result.warn(
            "No skim pass and zero total depth: no passes will be cut",
            "total_depth",
        )

    interval = params.pause_interval
    if not isinstance(interval, int) or isinstance(interval, bool):
        result.error("Pause interval must be a whole number", "pause_interval")
    elif interval < 0:
        result.error("Pause interval cannot be negative", "pause_interval")

    if not result.has_errors:
        step_size = (
            params.stock_height if params.raster_direction.step_axis == "y"
            else params.stock_width
        )
        overhang = params.bit_radius - params.stepover
        if step_size + 2 * (params.fudge_factor + overhang) < 0:
            result.warn(
                f"Bit diameter {params.bit_diameter:g} is wider than the "
                "stepped side of the stock; a single line will be cut",
                "bit_diameter",
            )

    return result


def ensure_valid(params: SurfacingParams) -> ValidationResult:
    """Validate *params* and raise ParameterError if there are errors.

    Returns the result so callers can report warnings.
    """
    result = validate_params(params)
    if result.has_errors:
        raise ParameterError(result.errors)
    return result
