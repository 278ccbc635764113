# tests/test_utils.py
"""Unit tests for utility functions in the `sheetsync.utils` module.

Project: sheetsync
Covers configuration loading and merging as well as reading and writing
configuration documents with their encoding and line separators intact.
"""

from pathlib import Path

import pytest

from sheetsync.utils import utils


@pytest.fixture
def user_home(tmp_path, monkeypatch) -> Path:
    """Point the home directory at a temporary folder without a config template."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(utils, "get_project_root", lambda: tmp_path / "no-project")
    return home


def test_deep_merge() -> None:
    """Verify that `deep_merge` correctly merges nested dictionaries.

    This test ensures:
    - Existing values are preserved if not overridden.
    - Nested dictionaries are merged recursively.
    - Conflicting keys are overridden by values from the second dictionary.
    """
    base = {"a": 1, "b": {"x": 10, "y": 20}}
    override = {"b": {"y": 99, "z": 100}, "c": 3}
    result = utils.deep_merge(base, override)
    expected = {"a": 1, "b": {"x": 10, "y": 99, "z": 100}, "c": 3}
    assert result == expected
    assert base == {"a": 1, "b": {"x": 10, "y": 20}}


def test_load_config_defaults_and_env_template(user_home: Path) -> None:
    """Without a user config the embedded defaults are returned and `.env` is created."""
    config = utils.load_config()
    assert config == utils.DEFAULT_CONFIG
    env_file = user_home / ".config" / "sheetsync" / ".env"
    assert env_file.read_text(encoding="utf-8") == utils.ENV_TEMPLATE


def test_load_config_merges_user_config(user_home: Path) -> None:
    config_path = utils.get_user_config_path()
    config_path.parent.mkdir(parents=True)
    config_path.write_text('[document]\ndefault_indent = "\\t"\n', encoding="utf-8")

    config = utils.load_config()
    assert config["document"]["default_indent"] == "\t"
    assert config["document"]["debounce_interval"] == 0.45
    assert config["input_types"]["default_grid_size"] == ["16", "16"]


def test_load_config_invalid_toml_falls_back(user_home: Path) -> None:
    config_path = utils.get_user_config_path()
    config_path.parent.mkdir(parents=True)
    config_path.write_text("[document\nbroken = ", encoding="utf-8")

    assert utils.load_config() == utils.DEFAULT_CONFIG


def test_ensure_user_config_copies_template(tmp_path, monkeypatch) -> None:
    home = tmp_path / "home"
    project = tmp_path / "project"
    project.mkdir()
    (project / "config.toml").write_text("[document]\n", encoding="utf-8")
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setattr(utils, "get_project_root", lambda: project)

    utils.ensure_user_config_exists()
    assert (home / ".config" / "sheetsync" / "config.toml").read_text(encoding="utf-8") == "[document]\n"


def test_read_and_write_keep_crlf(tmp_path) -> None:
    path = tmp_path / "sheet.conf"
    path.write_bytes(b'input "a.png"\r\n  grid 16 16\r\n')

    text, encoding = utils.read_text_file(str(path))
    assert text == 'input "a.png"\r\n  grid 16 16\r\n'
    assert encoding == "utf-8"
    assert utils.read_config_source(str(path)) == 'input "a.png"\n  grid 16 16\n'

    utils.write_text_file(str(path), text.replace("16 16", "32 32"), encoding)
    assert path.read_bytes() == b'input "a.png"\r\n  grid 32 32\r\n'


def test_read_utf8_text(tmp_path) -> None:
    path = tmp_path / "sheet.conf"
    content = 'input "héros.png"\n  sprite "épée"\n' * 20
    path.write_bytes(content.encode("utf-8"))
    text, encoding = utils.read_text_file(str(path))
    assert text == content
    assert encoding.lower().replace("_", "-") == "utf-8"


def test_read_empty_file(tmp_path) -> None:
    path = tmp_path / "empty.conf"
    path.write_bytes(b"")
    assert utils.read_text_file(str(path)) == ("", "utf-8")


def test_read_missing_file_raises(tmp_path) -> None:
    with pytest.raises(OSError):
        utils.read_text_file(str(tmp_path / "missing.conf"))
