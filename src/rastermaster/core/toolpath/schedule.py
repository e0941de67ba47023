"""Pass scheduling helpers shared by the calculator and its callers."""

from __future__ import annotations

import math

import numpy as np

# Slack applied before ceil() so spans/depths that are exact multiples of
# the step do not gain a spurious extra step from float rounding.
EPSILON = 1e-9


def step_count(span: float, step: float) -> int:
    """Number of whole *step* increments needed to cover *span*.

    ``ceil(span / step)`` with a small tolerance at the boundary.
    """
    if step <= 0 or not math.isfinite(step):
        raise ValueError("step must be positive")
    if span <= 0:
        return 0
    return max(0, math.ceil(span / step - EPSILON))


def line_positions(lo: float, hi: float, step: float) -> list[float]:
    """Positions from *lo* to *hi* spaced by *step*.

    The first position is exactly *lo* and the last exactly *hi*; the final
    gap is shorter than *step* when the step does not divide the span.
    """
    n = step_count(hi - lo, step)
    positions = lo + np.arange(n, dtype=float) * step
    return [float(p) for p in positions] + [float(hi)]


def depth_levels(total_depth: float, depth_per_pass: float) -> list[float]:
    """Cut depths (positive, increasing) for removing *total_depth*.

    The final level is placed exactly at *total_depth* (floor pass).

    Parameters
    ----------
    total_depth:
        Material to remove; 0 yields no levels.
    depth_per_pass:
        Positive axial depth-of-cut per pass.

    Returns
    -------
    List of depths, most shallow first.
    """
    if total_depth <= 0:
        return []
    if depth_per_pass <= 0:
        raise ValueError("depth_per_pass must be positive")

    n = step_count(total_depth, depth_per_pass)
    depths = np.minimum(np.arange(1, n + 1, dtype=float) * depth_per_pass,
                        total_depth)
    levels = [round(float(d), 10) for d in depths]
    levels[-1] = float(total_depth)
    return levels


def pause_flags(pass_count: int, interval: int) -> list[bool]:
    """Whether to pause after each pass.

    Pass *k* (1-based) pauses when *interval* > 0, k is a multiple of the
    interval and k is not the final pass.
    """
    if interval <= 0:
        return [False] * pass_count
    return [
        k % interval == 0 and k < pass_count
        for k in range(1, pass_count + 1)
    ]
