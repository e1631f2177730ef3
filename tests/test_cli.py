from __future__ import annotations

import json
import struct

import pytest
from typer.testing import CliRunner

from trackriser.cli import app

runner = CliRunner()


@pytest.fixture
def coarse_config(isolated_config):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text(json.dumps({"facets": 16}))
    return isolated_config


def _triangle_count(path) -> int:
    return struct.unpack("<I", path.read_bytes()[80:84])[0]


def test_info_reports_profile(coarse_config):
    result = runner.invoke(app, ["info", "--left", "female", "--right", "male", "--length", "25", "--height", "127"])
    assert result.exit_code == 0, result.output
    assert "scale_y" in result.output
    assert "9.5000" in result.output
    assert "wooden" in result.output


def test_info_flags_clamped_profile(coarse_config):
    result = runner.invoke(app, ["info", "--length", "10", "--custom-size"])
    assert result.exit_code == 0, result.output
    assert "0.7500" in result.output


def test_export_writes_binary_stl(tmp_path, coarse_config):
    output = tmp_path / "riser.stl"
    result = runner.invoke(app, ["export", "--length", "54", "--height", "31.75", "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert output.exists()
    assert _triangle_count(output) > 0
    assert "Export complete" in result.output


def test_export_does_not_clobber(tmp_path, coarse_config):
    output = tmp_path / "riser.stl"
    output.write_bytes(b"keep")
    result = runner.invoke(app, ["export", "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert output.read_bytes() == b"keep"
    assert (tmp_path / "riser (1).stl").exists()


def test_export_ascii_with_supports(tmp_path, coarse_config):
    output = tmp_path / "riser.stl"
    result = runner.invoke(app, ["export", "--supports", "--ascii", "-o", str(output)])
    assert result.exit_code == 0, result.output
    assert output.read_text().startswith("solid trackriser")


def test_export_scales_to_configured_units(tmp_path, coarse_config):
    coarse_config.write_text(json.dumps({"facets": 16, "units": "in"}))
    output = tmp_path / "riser.stl"
    result = runner.invoke(app, ["export", "--height", "63.5", "-o", str(output)])
    assert result.exit_code == 0, result.output
    data = output.read_bytes()
    count = _triangle_count(output)
    z_values = [
        struct.unpack_from("<3f", data, 84 + 50 * i + 12 + 12 * k)[2] for i in range(count) for k in range(3)
    ]
    assert max(z_values) == pytest.approx((63.5 + 12.0) / 25.4, rel=1e-5)


@pytest.mark.parametrize(
    "args",
    [
        ["export", "--length", "41"],
        ["export", "--height", "tall"],
        ["info", "--left", "sideways"],
    ],
)
def test_bad_arguments_fail(tmp_path, coarse_config, args):
    output = tmp_path / "riser.stl"
    result = runner.invoke(app, [*args, "-o", str(output)] if args[0] == "export" else args)
    assert result.exit_code != 0
    assert not output.exists()


def test_unknown_standard_in_config_fails(coarse_config):
    coarse_config.write_text(json.dumps({"standard": "narrow gauge"}))
    result = runner.invoke(app, ["info"])
    assert result.exit_code != 0
