"""Tests for job parameter validation."""

from dataclasses import replace

import pytest

from rastermaster.core.params import ParameterError, RasterDirection, SurfacingParams
from rastermaster.core.units import Units
from rastermaster.core.validate import ensure_valid, validate_params


@pytest.fixture
def params() -> SurfacingParams:
    return SurfacingParams(stock_width=10.0, stock_height=5.0)


def _fields(result, severity):
    return {i.field for i in result.issues if i.severity == severity}


class TestValidation:
    def test_defaults_pass(self, params):
        result = validate_params(params)
        assert result.is_ok
        assert not result.has_errors
        assert not result.has_warnings

    @pytest.mark.parametrize("name", [
        "stock_width", "stock_height", "bit_diameter", "depth_per_pass",
        "feed_rate", "plunge_rate", "spindle_rpm", "retract_height",
    ])
    @pytest.mark.parametrize("value", [0, -1.0])
    def test_nonpositive_rejected(self, params, name, value):
        result = validate_params(replace(params, **{name: value}))
        assert result.has_errors
        assert name in _fields(result, "error")

    def test_non_numeric_rejected(self, params):
        result = validate_params(replace(params, feed_rate="fast"))
        assert "feed_rate" in _fields(result, "error")

    def test_nan_rejected(self, params):
        result = validate_params(replace(params, bit_diameter=float("nan")))
        assert "bit_diameter" in _fields(result, "error")

    @pytest.mark.parametrize("pct", [0, -5, 100.5, 150])
    def test_stepover_out_of_range(self, params, pct):
        result = validate_params(replace(params, stepover_percent=pct))
        assert "stepover_percent" in _fields(result, "error")

    def test_full_stepover_allowed(self, params):
        assert not validate_params(replace(params, stepover_percent=100)).has_errors

    @pytest.mark.parametrize("fudge", [-0.1, 10.5])
    def test_fudge_out_of_range(self, params, fudge):
        result = validate_params(replace(params, fudge_factor=fudge))
        assert "fudge_factor" in _fields(result, "error")

    def test_fudge_limit_follows_units(self, params):
        metric = replace(params, units=Units.MM, fudge_factor=20)
        assert "fudge_factor" not in _fields(validate_params(metric), "error")
        too_big = replace(metric, fudge_factor=300)
        assert "fudge_factor" in _fields(validate_params(too_big), "error")

    def test_zero_fudge_allowed(self, params):
        assert validate_params(replace(params, fudge_factor=0)).is_ok

    def test_negative_total_depth(self, params):
        result = validate_params(replace(params, total_depth=-0.01))
        assert "total_depth" in _fields(result, "error")

    @pytest.mark.parametrize("interval", [-1, 1.5, True])
    def test_bad_pause_interval(self, params, interval):
        result = validate_params(replace(params, pause_interval=interval))
        assert "pause_interval" in _fields(result, "error")

    def test_errors_collected_together(self, params):
        result = validate_params(
            replace(params, stock_width=0, feed_rate=-1, stepover_percent=0)
        )
        assert len(result.errors) == 3


class TestWarnings:
    def test_low_stepover(self, params):
        result = validate_params(replace(params, stepover_percent=10))
        assert not result.has_errors
        assert "stepover_percent" in _fields(result, "warning")

    def test_nothing_to_cut(self, params):
        result = validate_params(replace(params, total_depth=0))
        assert not result.has_errors
        assert "total_depth" in _fields(result, "warning")

    def test_skim_only_is_fine(self, params):
        result = validate_params(replace(params, total_depth=0, skim_pass=True))
        assert result.is_ok

    def test_bit_wider_than_stepped_side(self, params):
        narrow = replace(params, stock_height=0.5, fudge_factor=0,
                         bit_diameter=2.0, stepover_percent=100)
        result = validate_params(narrow)
        assert not result.has_errors
        assert "bit_diameter" in _fields(result, "warning")

    def test_stepped_side_follows_direction(self, params):
        # narrow in Y but stepping along X
        narrow = replace(params, stock_height=0.5, fudge_factor=0,
                         bit_diameter=2.0, stepover_percent=100,
                         raster_direction=RasterDirection.Y)
        assert "bit_diameter" not in _fields(validate_params(narrow), "warning")


class TestEnsureValid:
    def test_raises_with_all_messages(self, params):
        with pytest.raises(ParameterError) as exc_info:
            ensure_valid(replace(params, stock_width=0, bit_diameter=0))
        assert len(exc_info.value.messages) == 2

    def test_returns_warnings(self, params):
        result = ensure_valid(replace(params, stepover_percent=5))
        assert result.warnings
