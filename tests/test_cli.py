# tests/test_cli.py
"""Command-line front end tests.

Each test writes a configuration file into a temporary directory, runs one
command through `sheetsync.cli.run` and checks the exit status, the output and
the bytes written back.
"""

import pytest

from sheetsync import cli
from sheetsync.cli import run


@pytest.fixture
def sheet_file(tmp_path, sample_source):
    path = tmp_path / "sheet.conf"
    path.write_text(sample_source, encoding="utf-8")
    return path


def test_show_lists_subjects(sheet_file, capsys) -> None:
    assert run(["sheetsync", str(sheet_file), "show"], {}) == 0
    out = capsys.readouterr().out.splitlines()
    assert 'sheet a [line 1]' in out
    assert "input 0: x.png [line 3] type=grid" in out
    assert "  sprite 1: two [line 6]" in out
    assert "input 1: y.png [line 7] type=sprite" in out
    assert "  sprite 0: sprite [line 8]" in out


def test_set_property_keeps_crlf(tmp_path, capsys) -> None:
    path = tmp_path / "crlf.conf"
    path.write_bytes(b'input "a.png"\r\n  sprite\r\n')

    assert run(["sheetsync", str(path), "set-property", "0", "padding", "2"], {}) == 0
    assert path.read_bytes() == b'input "a.png"\r\n  padding 2\r\n  sprite\r\n'
    assert f"Updated '{path}'." in capsys.readouterr().out


def test_set_type_and_sprite_id(sheet_file) -> None:
    assert run(["sheetsync", str(sheet_file), "set-type", "2", "grid"], {}) == 0
    assert run(["sheetsync", str(sheet_file), "set-sprite-id", "0", "1", "walk cycle"], {}) == 0
    lines = sheet_file.read_text(encoding="utf-8").split("\n")
    assert lines[5] == '    sprite "walk cycle"'
    assert lines[-1] == "    grid 16 16"


def test_grid_size_from_config(sheet_file) -> None:
    config = {"input_types": {"default_grid_size": ["8", "8"]}}
    assert run(["sheetsync", str(sheet_file), "set-type", "1", "grid-cells"], config) == 0
    assert "    grid-cells 8 8" in sheet_file.read_text(encoding="utf-8").split("\n")


def test_remove_input(sheet_file) -> None:
    assert run(["sheetsync", str(sheet_file), "remove-input", "1"], {}) == 0
    assert "y.png" not in sheet_file.read_text(encoding="utf-8")


def test_unchanged_file_is_not_written(sheet_file, capsys) -> None:
    before = sheet_file.stat().st_mtime_ns
    assert run(["sheetsync", str(sheet_file), "remove-property", "2", "grid"], {}) == 0
    assert "Updated" not in capsys.readouterr().out
    assert sheet_file.stat().st_mtime_ns == before


@pytest.mark.parametrize(
    "args",
    [
        [],
        ["frobnicate"],
        ["set-property", "0"],
        ["set-property", "7", "padding", "1"],
        ["set-sprite-id", "1", "5", "x"],
        ["clear-input", "first"],
    ],
)
def test_usage_errors_exit_with_2(sheet_file, sample_source, args) -> None:
    assert run(["sheetsync", str(sheet_file)] + args, {}) == 2
    assert sheet_file.read_text(encoding="utf-8") == sample_source


def test_missing_file_exits_with_1(tmp_path, capsys) -> None:
    assert run(["sheetsync", str(tmp_path / "missing.conf"), "show"], {}) == 1
    assert "could not read" in capsys.readouterr().err


def test_set_type_rejects_unknown_type(sheet_file, sample_source, capsys) -> None:
    assert run(["sheetsync", str(sheet_file), "set-type", "0", "foo"], {}) == 2
    assert "unknown input type 'foo'" in capsys.readouterr().err
    assert sheet_file.read_text(encoding="utf-8") == sample_source


def test_main_loads_config_and_runs(sheet_file, tmp_path, monkeypatch) -> None:
    """The installed entry point sets up config and logging, then runs the command."""
    calls = []
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setattr(cli, "load_config", lambda: {"input_types": {"default_grid_size": ["4", "4"]}})
    monkeypatch.setattr(cli, "setup_logging", lambda config: calls.append(config))

    assert cli.main([str(sheet_file), "set-type", "2", "grid"]) == 0
    assert calls == [{"input_types": {"default_grid_size": ["4", "4"]}}]
    assert sheet_file.read_text(encoding="utf-8").split("\n")[-1] == "    grid 4 4"
