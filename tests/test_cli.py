"""Tests for the command-line entry point."""

import pytest

from rastermaster.__main__ import main
from rastermaster.config.settings import ToolSettings
from rastermaster.core.params import SurfacingParams


class TestOutput:
    def test_writes_file(self, tmp_path, capsys):
        out = tmp_path / "job.gcode"
        assert main(["10", "5", "-o", str(out)]) == 0
        text = out.read_text()
        assert text.startswith("(Surfacing operation)")
        assert text.endswith("M30 (Program end)\n")
        assert f"Wrote {out}" in capsys.readouterr().out

    def test_default_filename(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert main(["10", "5"]) == 0
        assert (tmp_path / "rastermaster-10x5.gcode").exists()

    def test_stdout_carries_only_gcode(self, capsys):
        assert main(["2", "2", "--bit-diameter", "1", "--stdout"]) == 0
        captured = capsys.readouterr()
        assert captured.out.startswith("(Surfacing operation)")
        assert "Toolpath:" not in captured.out
        assert "Toolpath: 1 pass x 6 lines, stepover 0.5 in" in captured.err

    def test_mm_units(self, capsys):
        assert main(["100", "50", "--units", "mm", "--bit-diameter", "30",
                     "--retract", "3", "--stdout"]) == 0
        assert "G21" in capsys.readouterr().out

    def test_mm_defaults_are_scaled(self, capsys):
        assert main(["100", "50", "--units", "mm", "--stdout"]) == 0
        captured = capsys.readouterr()
        lines = captured.out.splitlines()
        assert "G21 (Millimeters)" in lines
        assert "G0 Z3.175 (Retract to safe Z)" in lines
        assert "(Bit: 31.75mm fly cutter)" in lines
        assert "(Pass 1 at Z=-0.254)" in lines
        assert "F3175" in captured.out
        assert "stepover 15.875 mm" in captured.err

    def test_mm_explicit_retract_kept(self, capsys):
        assert main(["100", "50", "--units", "mm", "--retract", "5",
                     "--stdout"]) == 0
        assert "G0 Z5 (Retract to safe Z)" in capsys.readouterr().out


class TestOptions:
    def test_passes(self, capsys):
        assert main(["4", "2", "--passes", "3", "--skim", "--stdout"]) == 0
        out = capsys.readouterr().out
        assert "(Pass 1 at Z=0 - skim)" in out
        assert "(Pass 4 at Z=-0.03)" in out
        assert "(Pass 5" not in out

    def test_depth_and_passes_exclusive(self):
        with pytest.raises(SystemExit):
            main(["4", "2", "--passes", "3", "--depth", "0.02"])

    def test_pause_every(self, capsys):
        assert main(["4", "2", "--passes", "4", "--pause-every", "2",
                     "--stdout"]) == 0
        out = capsys.readouterr().out
        assert out.count("M0 (Pause") == 1

    def test_y_direction(self, capsys):
        assert main(["4", "2", "--direction", "y", "--stdout"]) == 0
        assert "(Raster: Y axis" in capsys.readouterr().out


class TestErrors:
    def test_invalid_stepover(self, tmp_path, capsys):
        out = tmp_path / "job.gcode"
        assert main(["10", "5", "--stepover", "150", "-o", str(out)]) == 1
        err = capsys.readouterr().err
        assert "INVALID PARAMETERS:" in err
        assert "ERROR: Stepover" in err
        assert not out.exists()

    def test_warning_reported(self, capsys):
        assert main(["10", "5", "--stepover", "8", "--stdout"]) == 0
        assert "Warning: Stepover" in capsys.readouterr().err

    def test_bad_tool_url(self, capsys):
        assert main(["10", "5", "--tool-url", "#bit=abc", "--stdout"]) == 1
        assert "Invalid URL format" in capsys.readouterr().err

    def test_missing_tool_file(self, tmp_path, capsys):
        missing = tmp_path / "missing.json"
        assert main(["10", "5", "--tool-settings", str(missing)]) == 1
        assert "not found" in capsys.readouterr().err


class TestToolSettings:
    def test_save_then_load(self, tmp_path, capsys):
        saved = tmp_path / "tool.json"
        assert main(["10", "5", "--bit-diameter", "2", "--feed", "90",
                     "--save-tool-settings", str(saved), "--stdout"]) == 0
        tool = ToolSettings.load(saved)
        assert tool.bit_diameter == 2
        assert tool.feed_rate == 90
        capsys.readouterr()

        assert main(["10", "5", "--tool-settings", str(saved), "--stdout"]) == 0
        out = capsys.readouterr().out
        assert '(Bit: 2" fly cutter)' in out
        assert "F90" in out

    def test_explicit_option_beats_loaded_settings(self, tmp_path, capsys):
        saved = ToolSettings.from_params(
            SurfacingParams(10, 5, bit_diameter=2)
        ).save(tmp_path / "tool.json")
        assert main(["10", "5", "--tool-settings", str(saved),
                     "--bit-diameter", "1.5", "--stdout"]) == 0
        assert '(Bit: 1.5" fly cutter)' in capsys.readouterr().out

    def test_print_and_use_tool_url(self, capsys):
        assert main(["10", "5", "--rpm", "12000", "--print-tool-url",
                     "--stdout"]) == 0
        err = capsys.readouterr().err
        url = next(l for l in err.splitlines() if l.startswith("#tool="))

        assert main(["10", "5", "--tool-url", url, "--stdout"]) == 0
        assert "M3 S12000" in capsys.readouterr().out
