"""Tests for the shared pass-scheduling helpers."""

import math

import pytest

from rastermaster.core.toolpath.schedule import (
    depth_levels,
    line_positions,
    pause_flags,
    step_count,
)


# ---------------------------------------------------------------------------
# step_count / line_positions
# ---------------------------------------------------------------------------


class TestLinePositions:
    def test_even_division(self):
        assert line_positions(0.0, 2.0, 0.5) == pytest.approx(
            [0.0, 0.5, 1.0, 1.5, 2.0]
        )

    def test_uneven_division_clamps_last(self):
        positions = line_positions(0.0, 4.2, 0.5)
        assert len(positions) == 10
        assert positions[-2] == pytest.approx(4.0)
        assert positions[-1] == 4.2

    def test_endpoints_exact(self):
        positions = line_positions(-0.3125, 4.3125, 0.3125)
        assert positions[0] == -0.3125
        assert positions[-1] == 4.3125

    def test_zero_span_gives_single_line(self):
        assert line_positions(1.0, 1.0, 0.5) == [1.0]

    def test_no_drift_over_many_steps(self):
        # 0.1 accumulated 1000 times drifts; multiplication must not
        positions = line_positions(0.0, 100.0, 0.1)
        assert len(positions) == 1001
        assert positions[-1] == 100.0
        gaps = [b - a for a, b in zip(positions, positions[1:])]
        assert max(gaps) <= 0.1 + 1e-9

    def test_nonpositive_step_rejected(self):
        with pytest.raises(ValueError):
            step_count(1.0, 0.0)
        with pytest.raises(ValueError):
            line_positions(0.0, 1.0, -0.5)

    @pytest.mark.parametrize("span,step", [
        (5.0, 0.5), (4.2, 0.5), (2.5, 0.3125), (7.3, 0.9), (10.0, 0.25),
    ])
    def test_count_formula(self, span, step):
        positions = line_positions(0.0, span, step)
        ratio = span / step
        if abs(ratio - round(ratio)) < 1e-9:
            assert len(positions) == round(ratio) + 1
        else:
            assert len(positions) == math.floor(ratio) + 2


# ---------------------------------------------------------------------------
# depth_levels
# ---------------------------------------------------------------------------


class TestDepthLevels:
    def test_basic_levels(self):
        assert depth_levels(0.02, 0.01) == [0.01, 0.02]

    def test_last_level_clamped(self):
        levels = depth_levels(0.025, 0.01)
        assert levels == pytest.approx([0.01, 0.02, 0.025])
        assert levels[-1] == 0.025

    def test_zero_depth_has_no_levels(self):
        assert depth_levels(0.0, 0.01) == []

    @pytest.mark.parametrize("total,per_pass,expected", [
        (0.03, 0.01, 3),
        (0.3, 0.1, 3),
        (0.7, 0.1, 7),
        (0.06, 0.01, 6),
        (1.0, 0.25, 4),
        (0.025, 0.01, 3),
        (0.005, 0.01, 1),
    ])
    def test_exact_multiples_do_not_add_a_pass(self, total, per_pass, expected):
        levels = depth_levels(total, per_pass)
        assert len(levels) == expected
        assert levels[-1] == total

    def test_levels_increase(self):
        levels = depth_levels(0.5, 0.07)
        assert all(b > a for a, b in zip(levels, levels[1:]))

    def test_bad_step_rejected(self):
        with pytest.raises(ValueError):
            depth_levels(0.1, 0.0)


# ---------------------------------------------------------------------------
# pause_flags
# ---------------------------------------------------------------------------


class TestPauseFlags:
    def test_every_second_pass(self):
        assert pause_flags(6, 2) == [False, True, False, True, False, False]

    def test_disabled(self):
        assert pause_flags(3, 0) == [False, False, False]

    def test_never_after_last(self):
        assert pause_flags(2, 1) == [True, False]
        assert pause_flags(1, 1) == [False]

    @pytest.mark.parametrize("count", range(0, 8))
    @pytest.mark.parametrize("interval", range(0, 5))
    def test_rule(self, count, interval):
        flags = pause_flags(count, interval)
        assert len(flags) == count
        for k, flag in enumerate(flags, start=1):
            expected = interval > 0 and k % interval == 0 and k < count
            assert flag == expected
