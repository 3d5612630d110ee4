from pathlib import Path

import pytest

from cart_simulator.cli import Args
from tests.conftest import MANY_CARTS
from tests.test_utils import track_text


@pytest.fixture
def track_file(tmp_path) -> Path:
    path = tmp_path / "track.txt"
    path.write_text(track_text(MANY_CARTS))
    return path


def test_cli_reports_last_cart(track_file, capsys):
    assert Args(track=track_file)() == 0

    out = capsys.readouterr().out
    assert "COMPLETED after 3 ticks" in out
    assert "First crash: 2,0" in out
    assert "Cart left: 6,4 heading UP" in out


def test_cli_first_crash_mode(track_file, capsys):
    assert Args(track=track_file, mode="first_crash")() == 0

    out = capsys.readouterr().out
    assert "COMPLETED after 1 ticks" in out
    assert "First crash: 2,0" in out


def test_cli_config_file(track_file, tmp_path, capsys):
    config = tmp_path / "sim.toml"
    config.write_text('stop_mode = "first_crash"\n')

    assert Args(track=track_file, config=config)() == 0
    assert "Stop mode: first_crash" in capsys.readouterr().out


def test_cli_show_prints_snapshots(track_file, capsys):
    assert Args(track=track_file, show=True)() == 0

    out = capsys.readouterr().out
    assert "Crash at tick 1:" in out
    assert "Final state at tick 3:" in out


def test_cli_missing_track(tmp_path, capsys):
    assert Args(track=tmp_path / "nope.txt")() == 1
    assert "Track file not found" in capsys.readouterr().err


def test_cli_missing_config(track_file, tmp_path, capsys):
    assert Args(track=track_file, config=tmp_path / "nope.toml")() == 1
    assert "Config file not found" in capsys.readouterr().err


def test_cli_bad_track(tmp_path, capsys):
    path = tmp_path / "track.txt"
    path.write_text("-#-\n")

    assert Args(track=path)() == 1
    assert "Invalid track character" in capsys.readouterr().err


def test_cli_strict_rejects_ragged_track(tmp_path, capsys):
    path = tmp_path / "track.txt"
    path.write_text("/->-<-\\\n|\n")

    assert Args(track=path, strict=True)() == 1
    assert "Row 1" in capsys.readouterr().err


def test_cli_derailment(tmp_path, capsys):
    path = tmp_path / "track.txt"
    path.write_text("/>- \n\\-<-\n")

    assert Args(track=path)() == 2
    assert "derailed" in capsys.readouterr().err


def test_cli_aborted_run(tmp_path, capsys):
    path = tmp_path / "track.txt"
    path.write_text("/>\\ /<\\\n\\-/ \\-/\n")

    assert Args(track=path, max_ticks=10)() == 1
    assert "ABORTED after 10 ticks" in capsys.readouterr().out


def test_cli_zero_max_ticks_is_honoured(track_file, capsys):
    assert Args(track=track_file, max_ticks=0)() == 1
    assert "ABORTED after 0 ticks" in capsys.readouterr().out


def test_cli_mode_flag_overrides_config(track_file, tmp_path, capsys):
    config = tmp_path / "sim.toml"
    config.write_text('stop_mode = "first_crash"\n')

    assert Args(track=track_file, config=config, mode="last_cart")() == 0
    assert "Stop mode: last_cart" in capsys.readouterr().out
